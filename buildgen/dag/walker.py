"""
Graph Walker

Deduplicated, depth-bounded post-order traversal of the build graph.
Dependencies are always visited before their dependents, and every node
is visited at most once per walk.
"""

from typing import Callable, Dict, Iterator, List, Optional, Protocol
import logging

from .node import Node

logger = logging.getLogger(__name__)

WalkFunc = Callable[[Node], None]


class Graph(Protocol):
    """Anything exposing an ordered list of target nodes."""

    def targets(self) -> List[Node]:
        ...


class GraphCycleError(ValueError):
    """Raised when a walk re-enters a node on its own dependency path."""

    def __init__(self, path: List[Node]):
        self.path = path
        super().__init__(
            "Cycle detected in build graph: "
            + " -> ".join(node.name for node in path)
        )


class VisitedSet:
    """
    Per-walk record of processed nodes, keyed by node identity.

    A fresh instance should be used for every walk. Keys are object ids;
    the nodes themselves are kept so ids cannot be reused while the set
    is alive. Each node also remembers the remaining depth it was
    descended with (negative means unbounded), so a node first reached at
    the edge of a depth bound can be descended again from a shallower
    position.
    """

    def __init__(self):
        self._nodes: Dict[int, Node] = {}
        self._depths: Dict[int, int] = {}

    def add(self, node: Node, depth: int = -1) -> None:
        self._nodes[id(node)] = node
        self._depths[id(node)] = depth

    def depth_of(self, node: Node) -> Optional[int]:
        """Remaining depth the node was descended with, None if unvisited."""
        return self._depths.get(id(node))

    def covers(self, node: Node, depth: int) -> bool:
        """Whether the node was already descended at least as deep as depth allows."""
        seen = self.depth_of(node)
        if seen is None:
            return False
        return seen < 0 or (depth >= 0 and seen >= depth)

    def __contains__(self, node: Node) -> bool:
        return id(node) in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes.values())


def walk(
    graph: Graph,
    visit_fn: WalkFunc,
    visited: Optional[VisitedSet] = None,
    max_depth: int = -1,
) -> None:
    """
    Walk the graph calling visit_fn for every reachable node just once.

    Args:
        graph: Graph whose targets start the walk
        visit_fn: Callback invoked after all of a node's inputs were visited
        visited: Visited set for this walk (a fresh one if omitted)
        max_depth: Levels to descend; 0 does nothing, negative is unbounded,
                   1 visits the targets only

    Raises:
        GraphCycleError: If a node depends on itself transitively
        Exception: Anything raised by visit_fn, unchanged
    """
    walk_roots(graph.targets(), visit_fn, visited, max_depth)


def walk_node(
    node: Node,
    visit_fn: WalkFunc,
    visited: Optional[VisitedSet] = None,
    max_depth: int = -1,
) -> None:
    """
    Walk starting from a node's inputs (the node itself is not visited).

    Args:
        node: Node whose inputs start the walk
        visit_fn: Callback invoked after all of a node's inputs were visited
        visited: Visited set for this walk (a fresh one if omitted)
        max_depth: Levels to descend, see walk()
    """
    walk_roots(node.inputs(), visit_fn, visited, max_depth)


def walk_roots(
    roots: List[Node],
    visit_fn: WalkFunc,
    visited: Optional[VisitedSet] = None,
    max_depth: int = -1,
) -> None:
    """Walk starting from an explicit list of roots, see walk()."""
    if visited is None:
        visited = VisitedSet()

    _walk(roots, visit_fn, visited, max_depth, [])


def _walk(
    targets: List[Node],
    visit_fn: WalkFunc,
    visited: VisitedSet,
    depth: int,
    ancestry: List[Node],
) -> None:
    if depth == 0:
        return

    for target in targets:
        if visited.covers(target, depth):
            continue

        if any(ancestor is target for ancestor in ancestry):
            start = next(i for i, ancestor in enumerate(ancestry) if ancestor is target)
            raise GraphCycleError(ancestry[start:] + [target])

        first_visit = target not in visited

        ancestry.append(target)
        try:
            _walk(target.inputs(), visit_fn, visited, depth - 1, ancestry)
        finally:
            ancestry.pop()

        if first_visit:
            logger.debug(f"Visiting node '{target.name}'")
            visit_fn(target)
        else:
            logger.debug(f"Descended again into node '{target.name}' with depth {depth}")

        visited.add(target, depth)
