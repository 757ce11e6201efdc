"""
DAG Node Model

Defines the core data structures and protocols for build graph nodes.
Each node is a named building block with ordered inputs (dependencies)
and parents (dependents). Nodes carry no I/O; outputs learn what a node
contributes only through the capability contracts it implements.
"""

from typing import Any, Callable, List, Optional, Protocol
import logging

logger = logging.getLogger(__name__)


class Node(Protocol):
    """
    Protocol for build graph nodes.

    Every building block conforms to this protocol, usually by subclassing
    BaseNode. Identity is object identity: two distinct nodes with the same
    name are different nodes as far as the graph is concerned.

    Example implementation:
        class Toolchain(BaseNode):
            def __init__(self):
                super().__init__("toolchain")

            def compile_dockerfile(self, output):
                output.stage("toolchain").from_("golang:1.22")
    """
    name: str

    def inputs(self) -> List["Node"]:
        """Nodes this node depends on, in declaration order."""
        ...

    def parents(self) -> List["Node"]:
        """Nodes that declared this node as an input, in declaration order."""
        ...

    def input_names(self) -> List[str]:
        """Names of the direct inputs, in declaration order."""
        ...

    def add_input(self, *nodes: "Node") -> None:
        """Append dependencies, deduplicated by reference."""
        ...


def _append_unique(items: List[Any], item: Any) -> bool:
    """Append item unless the very same object is already present."""
    for existing in items:
        if existing is item:
            return False

    items.append(item)
    return True


class BaseNode:
    """
    Core implementation of the Node protocol.

    BaseNode is designed to be subclassed by building blocks. It keeps
    input and parent edges as ordered lists deduplicated by reference,
    so adding the same input twice is a no-op and the first insertion
    order is preserved.

    Example usage:
        toolchain = BaseNode("toolchain")
        build = BaseNode("build")
        build.add_input(toolchain)

        build.inputs()       # [toolchain]
        toolchain.parents()  # [build]
    """

    def __init__(self, name: str):
        """
        Initialize node with its name.

        Args:
            name: Node identity used for lookup and tie-breaking

        Raises:
            ValueError: If name is empty
        """
        if not name:
            raise ValueError("Node name must be non-empty")

        self.name = name
        self._inputs: List[Node] = []
        self._parents: List[Node] = []

    def inputs(self) -> List[Node]:
        return list(self._inputs)

    def parents(self) -> List[Node]:
        return list(self._parents)

    def input_names(self) -> List[str]:
        return [node.name for node in self._inputs]

    def add_input(self, *nodes: Node) -> None:
        """
        Add dependencies to this node.

        Each node is appended to inputs unless already present, and this
        node is back-registered in the input's parents the same way.

        Args:
            nodes: Nodes this node depends on
        """
        for node in nodes:
            if _append_unique(self._inputs, node):
                logger.debug(f"Node '{self.name}' now depends on '{node.name}'")

            if isinstance(node, BaseNode):
                _append_unique(node._parents, self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class BaseGraph:
    """
    Ordered collection of target nodes.

    The graph does not have to be connected; its targets are the roots
    whose transitive inputs get visited by a walk.
    """

    def __init__(self):
        self._targets: List[Node] = []

    def targets(self) -> List[Node]:
        return list(self._targets)

    def add_target(self, *nodes: Node) -> None:
        """Append targets, deduplicated by reference."""
        for node in nodes:
            _append_unique(self._targets, node)


def node_kind(node: Any) -> str:
    """
    Kind name of a block or block class.

    The kind is the `kind` attribute when set, the class name otherwise.
    It is what config documents and the registry refer to blocks by.
    """
    cls = node if isinstance(node, type) else type(node)
    return getattr(node, "kind", None) or cls.__name__


NodeCondition = Callable[[Node], bool]


def implements(capability: type) -> NodeCondition:
    """
    Build a condition checking whether a node satisfies a capability.

    Args:
        capability: runtime_checkable Protocol describing the capability

    Returns:
        Condition returning True for nodes implementing the capability
    """
    def condition(node: Node) -> bool:
        return isinstance(node, capability)

    return condition


def negate(condition: NodeCondition) -> NodeCondition:
    """Invert a condition."""
    def inverted(node: Node) -> bool:
        return not condition(node)

    return inverted


def all_of(*conditions: NodeCondition) -> NodeCondition:
    """Combine conditions, matching nodes that satisfy every one of them."""
    def combined(node: Node) -> bool:
        return all(condition(node) for condition in conditions)

    return combined


def gather_matching_inputs(node: Node, condition: NodeCondition) -> List[Node]:
    """
    Collect direct inputs of a node matching the condition.

    Args:
        node: Node whose inputs are scanned
        condition: Predicate over nodes

    Returns:
        Matching inputs, in declaration order
    """
    return [input_node for input_node in node.inputs() if condition(input_node)]


def gather_matching_input_names(node: Node, condition: NodeCondition) -> List[str]:
    """Names of the direct inputs matching the condition."""
    return [input_node.name for input_node in gather_matching_inputs(node, condition)]


def gather_matching_inputs_transitive(node: Node, condition: NodeCondition) -> List[Node]:
    """
    Collect all transitive inputs of a node matching the condition.

    Recursion continues through every input regardless of whether it
    matches, so a matching node behind a non-matching one is still found.
    Each node is reported once, in dependency-first walk order.

    Args:
        node: Node whose inputs are scanned
        condition: Predicate over nodes

    Returns:
        Matching transitive inputs
    """
    from .walker import walk_node

    result: List[Node] = []

    def collect(candidate: Node) -> None:
        if condition(candidate):
            result.append(candidate)

    walk_node(node, collect)

    return result


class _Found(Exception):
    def __init__(self, node: Node):
        super().__init__(node.name)
        self.node = node


def find_by_name(name: str, *roots: Node) -> Optional[Node]:
    """
    Find a node by name among the roots and their transitive inputs.

    Nodes are examined in walk order (dependencies before dependents,
    roots in the given order) and the walk stops at the first match, so
    nothing past it is visited. Duplicate names are a configuration error
    the caller must avoid.

    Args:
        name: Node name to look for
        roots: Nodes to start the search from

    Returns:
        Matching node, or None if no reachable node has that name
    """
    from .walker import walk_roots

    def check(node: Node) -> None:
        if node.name == name:
            raise _Found(node)

    try:
        walk_roots(list(roots), check)
    except _Found as found:
        return found.node

    return None
