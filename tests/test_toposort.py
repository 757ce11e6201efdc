import pytest

from buildgen.toposort import CycleError, stable_sort


class Item:
    def __init__(self, name, before=()):
        self.name = name
        self.precedes = set(before)

    def before(self, other):
        return other.name in self.precedes

    def __repr__(self):
        return self.name


class Numbered:
    EDGES = {
        (5, 11), (7, 11), (7, 8), (3, 8), (3, 10),
        (11, 2), (11, 10), (11, 9), (8, 9),
    }

    def __init__(self, value):
        self.value = value

    def before(self, other):
        return (self.value, other.value) in self.EDGES


def test_no_constraints_keeps_input_order():
    items = [Item("a"), Item("b"), Item("c")]

    result = stable_sort(items)

    assert result.ok
    assert result.order == items


def test_single_constraint():
    a, b, c = Item("a"), Item("b"), Item("c", before={"a"})

    result = stable_sort([a, b, c])

    assert result.order == [b, c, a]
    assert result.order.index(c) < result.order.index(a)


def test_direct_cycle_reported():
    a = Item("a", before={"b"})
    b = Item("b", before={"a"})

    result = stable_sort([a, b])

    assert not result.ok
    assert result.order == []
    assert set(map(id, result.cycle)) == {id(a), id(b)}


def test_longer_cycle_reported_without_partial_order():
    a = Item("a", before={"b"})
    b = Item("b", before={"c"})
    c = Item("c", before={"a"})
    free = Item("free")

    result = stable_sort([free, a, b, c])

    assert result.order == []
    assert result.cycle == [a, b, c]


def test_raise_for_cycle():
    a = Item("a", before={"b"})
    b = Item("b", before={"a"})

    with pytest.raises(CycleError, match="a, b") as excinfo:
        stable_sort([a, b]).raise_for_cycle(lambda item: item.name)

    assert excinfo.value.items == [a, b]


def test_kahn_reference_order():
    values = [10, 2, 5, 3, 11, 8, 9, 7]

    result = stable_sort([Numbered(v) for v in values])

    assert [n.value for n in result.order] == [5, 3, 7, 11, 8, 10, 2, 9]


def test_result_independent_of_repeated_runs():
    values = [10, 2, 5, 3, 11, 8, 9, 7]

    orders = {
        tuple(n.value for n in stable_sort([Numbered(v) for v in values]).order)
        for _ in range(20)
    }

    assert len(orders) == 1


def test_empty_input():
    result = stable_sort([])

    assert result.ok
    assert result.order == []
