"""Tests for IndexGraph construction, mutation and consumption."""

import pytest

from toposcc import GraphConsumedError, IndexGraph, IndexGraphBuilder, Vertex


def _snapshot(graph: IndexGraph) -> list[tuple[int, int, list[int], list[int]]]:
    return [(v.in_degree, v.out_degree, list(v.in_edges), list(v.out_edges)) for v in graph]


class TestIndexGraphConstruction:
    """Tests for the IndexGraph constructors."""

    def test_with_vertices(self) -> None:
        graph = IndexGraph.with_vertices(3)
        assert len(graph) == 3
        assert graph.edge_count == 0
        assert all(vertex == Vertex() for vertex in graph)

    def test_empty_graph(self) -> None:
        graph = IndexGraph(0)
        assert len(graph) == 0
        assert list(graph.edges()) == []

    def test_negative_vertex_count(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            IndexGraph(-1)

    def test_from_adjacency(self) -> None:
        graph = IndexGraph.from_adjacency([[1, 2], [2], []])
        assert len(graph) == 3
        assert list(graph.edges()) == [(0, 1), (0, 2), (1, 2)]
        assert graph[2].in_edges == [0, 1]
        assert graph[2].in_degree == 2
        assert graph[0].out_degree == 2

    def test_from_items_calls_back_in_order(self) -> None:
        seen: list[tuple[int, str]] = []

        def callback(builder: IndexGraphBuilder, item: str) -> None:
            seen.append((builder.index, item))

        graph = IndexGraph.from_items(["a", "b", "c"], callback)
        assert len(graph) == 3
        assert seen == [(0, "a"), (1, "b"), (2, "c")]

    def test_from_items_in_and_out_edges(self) -> None:
        # Each item names the indices it depends on
        depends_on = [[], [0], [0, 1]]

        def callback(builder: IndexGraphBuilder, deps: list[int]) -> None:
            for dep in deps:
                builder.add_in_edge(dep)

        graph = IndexGraph.from_items(depends_on, callback)
        assert sorted(graph.edges()) == [(0, 1), (0, 2), (1, 2)]
        assert graph[2].in_edges == [0, 1]


class TestAddEdge:
    """Tests for edge insertion."""

    def test_updates_both_endpoints(self) -> None:
        graph = IndexGraph(2)
        graph.add_edge(0, 1)
        assert graph[0].out_edges == [1]
        assert graph[0].out_degree == 1
        assert graph[1].in_edges == [0]
        assert graph[1].in_degree == 1

    def test_duplicate_edges_are_kept(self) -> None:
        graph = IndexGraph(2)
        graph.add_edge(0, 1)
        graph.add_edge(0, 1)
        assert graph[0].out_edges == [1, 1]
        assert graph[1].in_degree == 2
        assert graph.edge_count == 2

    def test_self_loop(self) -> None:
        graph = IndexGraph(1)
        graph.add_edge(0, 0)
        assert graph[0].in_edges == [0]
        assert graph[0].out_edges == [0]

    def test_degrees_match_edge_lists(self) -> None:
        graph = IndexGraph.from_adjacency([[1, 2, 3], [3], [3, 3], [0]])
        for vertex in graph:
            assert vertex.in_degree == len(vertex.in_edges)
            assert vertex.out_degree == len(vertex.out_edges)

    @pytest.mark.parametrize(("source", "target"), [(0, 2), (2, 0), (-1, 0), (0, -1)])
    def test_out_of_range_index(self, source: int, target: int) -> None:
        graph = IndexGraph(2)
        with pytest.raises(IndexError, match="out of range"):
            graph.add_edge(source, target)
        # Nothing was half-inserted
        assert graph.edge_count == 0

    def test_getitem_out_of_range(self) -> None:
        graph = IndexGraph(1)
        with pytest.raises(IndexError):
            graph[1]


class TestTranspose:
    """Tests for in-place edge reversal."""

    def test_reverses_edges(self) -> None:
        graph = IndexGraph.from_adjacency([[1], [2], []])
        graph.transpose()
        assert sorted(graph.edges()) == [(1, 0), (2, 1)]
        assert graph[0].in_degree == 1
        assert graph[0].out_degree == 0

    def test_twice_is_identity(self) -> None:
        graph = IndexGraph.from_adjacency([[3], [3, 4], [4, 7], [5, 6, 7], [6], [], [], [0, 0]])
        before = _snapshot(graph)
        graph.transpose()
        assert _snapshot(graph) != before
        graph.transpose()
        assert _snapshot(graph) == before

    def test_swaps_lists_without_copying(self) -> None:
        graph = IndexGraph.from_adjacency([[1], []])
        out_edges = graph[0].out_edges
        graph.transpose()
        assert graph[0].in_edges is out_edges


class TestConsumption:
    """Tests that a sorted graph cannot be reused."""

    def test_graph_is_consumed_by_sort(self) -> None:
        graph = IndexGraph.from_adjacency([[1], []])
        assert not graph.consumed
        graph.toposort_or_scc()
        assert graph.consumed

    @pytest.mark.parametrize(
        "use",
        [
            lambda g: g.add_edge(0, 1),
            lambda g: g.transpose(),
            lambda g: g.toposort_or_scc(),
            len,
            list,
        ],
    )
    def test_use_after_sort_raises(self, use) -> None:  # noqa: ANN001
        graph = IndexGraph.from_adjacency([[1], []])
        graph.toposort_or_scc()
        with pytest.raises(GraphConsumedError, match="consumed"):
            use(graph)

    def test_repr(self) -> None:
        graph = IndexGraph.from_adjacency([[1], []])
        assert repr(graph) == "IndexGraph(vertices=2, edges=1)"
        graph.toposort_or_scc()
        assert repr(graph) == "IndexGraph(<consumed>)"
