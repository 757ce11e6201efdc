"""
Block Registry

Creates building blocks by kind and keeps track of every block it created.
Block names must be unique within a project: config documents and
find_by_name() address blocks by name, so two blocks sharing a name would
silently receive each other's configuration.
"""

from typing import Any, Callable, Dict, List, Optional
import logging

from .node import Node, node_kind

logger = logging.getLogger(__name__)


class NodeRegistry:
    """
    Registry of block kinds and of the blocks created from them.

    Kinds default to the factory's own kind (its `kind` attribute or class
    name), the same name config documents use.

    Example usage:
        registry = NodeRegistry()
        registry.register(Binary)

        server = registry.create("Binary", meta, "server")
        registry.get("server")        # server
        registry.created("Binary")    # [server]
    """

    def __init__(self):
        self._factories: Dict[str, Callable[..., Node]] = {}
        self._nodes: Dict[str, Node] = {}

    def register(self, factory: Callable[..., Node], kind: Optional[str] = None) -> str:
        """
        Register a block factory.

        Args:
            factory: Block class or callable returning a block
            kind: Kind name (the factory's kind if omitted)

        Returns:
            The kind the factory was registered under
        """
        kind = kind or node_kind(factory)

        if kind in self._factories:
            logger.warning(f"Overwriting existing registration for kind: {kind}")

        self._factories[kind] = factory
        logger.debug(f"Registered block kind: {kind}")

        return kind

    def create(self, kind: str, *args: Any, **kwargs: Any) -> Node:
        """
        Create a block of the given kind.

        Args:
            kind: Registered kind name
            args, kwargs: Passed through to the factory

        Returns:
            New block

        Raises:
            ValueError: If kind is not registered, or a block with the same
                name was already created
        """
        factory = self._factories.get(kind)
        if factory is None:
            available = ", ".join(self._factories) or "none"
            raise ValueError(f"Unknown block kind: {kind}. Available kinds: {available}")

        node = factory(*args, **kwargs)

        existing = self._nodes.get(node.name)
        if existing is not None:
            raise ValueError(
                f"Duplicate block name '{node.name}': {kind} clashes with "
                f"the {node_kind(existing)} created earlier"
            )

        self._nodes[node.name] = node
        logger.debug(f"Created {kind} block '{node.name}'")

        return node

    def get(self, name: str) -> Optional[Node]:
        """Block created under this name, if any."""
        return self._nodes.get(name)

    def created(self, kind: Optional[str] = None) -> List[Node]:
        """Blocks created so far, in creation order, optionally of one kind."""
        return [node for node in self._nodes.values() if kind is None or node_kind(node) == kind]

    def list_kinds(self) -> List[str]:
        return list(self._factories)

    def is_registered(self, kind: str) -> bool:
        return kind in self._factories
