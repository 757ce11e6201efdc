"""
Stable Topological Sort

Order-preserving variant of Kahn's algorithm. Items only need to expose a
pairwise before() relation; among items with no constraint between them
the original input order wins, which keeps generated output byte-stable.
Cycles are reported as data instead of being raised.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Generic, List, Protocol, Sequence, TypeVar
import logging

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="Orderable")


class Orderable(Protocol):
    """Item taking part in a stable sort."""

    def before(self, other) -> bool:
        """Return True if this item must come before other."""
        ...


class CycleError(ValueError):
    """Raised by callers that cannot render a cyclic set of items."""

    def __init__(self, items: Sequence, describe: Callable[[object], str] = repr):
        self.items = list(items)
        super().__init__(
            "Ordering cycle between: " + ", ".join(describe(item) for item in self.items)
        )


@dataclass
class SortResult(Generic[T]):
    """
    Outcome of a stable sort.

    Exactly one of order/cycle is non-empty for a non-empty input:
    order holds the full linearization, cycle the items that could not
    be ordered.
    """
    order: List[T] = field(default_factory=list)
    cycle: List[T] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.cycle

    def raise_for_cycle(self, describe: Callable[[object], str] = repr) -> List[T]:
        """
        Return the order, or raise CycleError naming the cyclic items.

        Args:
            describe: Formats an item for the error message

        Raises:
            CycleError: If the sort found a cycle
        """
        if self.cycle:
            raise CycleError(self.cycle, describe)
        return self.order


def stable_sort(items: Sequence[T]) -> SortResult[T]:
    """
    Sort items by Kahn's algorithm with a deterministic tie-break.

    Algorithm:
    1. Test every unordered pair (i, j) with i.before(j) and j.before(i);
       a mutual pair is a 2-cycle and is reported immediately
    2. Items with no predecessors are roots, queued in input order
    3. Pop roots FIFO, releasing successors in input order; successors
       whose last predecessor was released join the queue
    4. Anything left over once the queue drains forms a cycle

    Args:
        items: Items exposing before(other)

    Returns:
        SortResult with the order, or with the cycle and an empty order
    """
    count = len(items)
    successors: Dict[int, List[int]] = {i: [] for i in range(count)}
    in_degree = [0] * count

    for i in range(count):
        for j in range(i + 1, count):
            ij = items[i].before(items[j])
            ji = items[j].before(items[i])

            if ij and ji:
                logger.debug(f"Direct cycle between items {i} and {j}")
                return SortResult(cycle=[items[i], items[j]])

            if ij:
                successors[i].append(j)
                in_degree[j] += 1
            elif ji:
                successors[j].append(i)
                in_degree[i] += 1

    queue = [i for i in range(count) if in_degree[i] == 0]
    order: List[T] = []

    while queue:
        current = queue.pop(0)
        order.append(items[current])

        for successor in sorted(successors[current]):
            in_degree[successor] -= 1
            if in_degree[successor] == 0:
                queue.append(successor)

    if len(order) != count:
        cycle = [items[i] for i in range(count) if in_degree[i] > 0]
        logger.debug(f"Stable sort left {len(cycle)} items in a cycle")
        return SortResult(cycle=cycle)

    return SortResult(order=order)
