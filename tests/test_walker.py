import pytest

from buildgen.dag import BaseGraph, BaseNode, GraphCycleError, VisitedSet, walk, walk_node


def _diamond():
    a, b, c, d = (BaseNode(name) for name in "abcd")
    a.add_input(b, c)
    b.add_input(d)
    c.add_input(d)
    graph = BaseGraph()
    graph.add_target(a)
    return graph, (a, b, c, d)


def _names(nodes):
    return [node.name for node in nodes]


class TestWalkOrder:
    def test_post_order_declaration_order(self):
        graph, _ = _diamond()
        seen = []

        walk(graph, seen.append)

        assert _names(seen) == ["d", "b", "c", "a"]

    def test_dependencies_visited_before_dependents(self):
        graph, _ = _diamond()
        seen = []

        walk(graph, seen.append)

        for position, node in enumerate(seen):
            for dep in node.inputs():
                assert dep in seen[:position]

    def test_diamond_visits_shared_node_once(self):
        graph, (_, _, _, d) = _diamond()
        seen = []

        walk(graph, seen.append)

        assert sum(1 for node in seen if node is d) == 1

    def test_shared_toolchain(self):
        toolchain = BaseNode("toolchain")
        lint = BaseNode("lint")
        build = BaseNode("build")
        lint.add_input(toolchain)
        build.add_input(toolchain)
        graph = BaseGraph()
        graph.add_target(lint, build)
        seen = []

        walk(graph, seen.append)

        assert _names(seen) == ["toolchain", "lint", "build"]

    def test_walk_node_starts_from_inputs(self):
        _, (a, _, _, _) = _diamond()
        seen = []

        walk_node(a, seen.append)

        assert _names(seen) == ["d", "b", "c"]


class TestWalkDepth:
    def test_zero_depth_does_nothing(self):
        graph, _ = _diamond()
        seen = []

        walk(graph, seen.append, max_depth=0)

        assert seen == []

    def test_depth_one_visits_targets_only(self):
        graph, _ = _diamond()
        seen = []

        walk(graph, seen.append, max_depth=1)

        assert _names(seen) == ["a"]

    def test_depth_two(self):
        graph, _ = _diamond()
        seen = []

        walk(graph, seen.append, max_depth=2)

        assert _names(seen) == ["b", "c", "a"]

    def test_walk_node_depth_one_is_direct_neighborhood(self):
        _, (a, _, _, _) = _diamond()
        seen = []

        walk_node(a, seen.append, max_depth=1)

        assert _names(seen) == ["b", "c"]


class TestWalkState:
    def test_visited_set_is_shared_when_passed(self):
        graph, _ = _diamond()
        visited = VisitedSet()
        first, second = [], []

        walk(graph, first.append, visited)
        walk(graph, second.append, visited)

        assert len(first) == 4
        assert second == []
        assert len(visited) == 4

    def test_fresh_walks_do_not_share_state(self):
        graph, _ = _diamond()
        first, second = [], []

        walk(graph, first.append)
        walk(graph, second.append)

        assert _names(first) == _names(second)

    def test_visited_set_is_keyed_by_identity(self):
        visited = VisitedSet()
        visited.add(BaseNode("same"))

        assert BaseNode("same") not in visited

    def test_callback_failure_aborts_walk(self):
        graph, _ = _diamond()
        seen = []

        def visit(node):
            if node.name == "b":
                raise RuntimeError("boom")
            seen.append(node)

        with pytest.raises(RuntimeError, match="boom"):
            walk(graph, visit)

        assert _names(seen) == ["d"]

    def test_cycle_fails_fast(self):
        a = BaseNode("a")
        b = BaseNode("b")
        a.add_input(b)
        b.add_input(a)
        graph = BaseGraph()
        graph.add_target(a)

        with pytest.raises(GraphCycleError, match="a -> b -> a"):
            walk(graph, lambda node: None)


class TestWalkDepthRevisit:
    def test_node_first_reached_at_depth_edge_is_descended_again(self):
        a, n, m = BaseNode("a"), BaseNode("n"), BaseNode("m")
        a.add_input(n)
        n.add_input(m)
        graph = BaseGraph()
        graph.add_target(a, n)
        seen = []

        walk(graph, seen.append, max_depth=2)

        assert _names(seen) == ["n", "a", "m"]

    def test_revisited_node_fires_once(self):
        a, n, m = BaseNode("a"), BaseNode("n"), BaseNode("m")
        a.add_input(n)
        n.add_input(m)
        graph = BaseGraph()
        graph.add_target(a, n)
        seen = []

        walk(graph, seen.append, max_depth=2)

        assert sum(1 for node in seen if node is n) == 1

    def test_visited_set_remembers_depth(self):
        a, n, m = BaseNode("a"), BaseNode("n"), BaseNode("m")
        a.add_input(n)
        n.add_input(m)
        graph = BaseGraph()
        graph.add_target(a)
        visited = VisitedSet()

        walk(graph, lambda node: None, visited, max_depth=2)

        assert visited.depth_of(a) == 2
        assert visited.depth_of(n) == 1
        assert visited.depth_of(m) is None
        assert visited.covers(n, 1)
        assert not visited.covers(n, 2)
