"""Tests for KeyedGraph and its key/index conversion."""

from dataclasses import dataclass

import pytest

from toposcc import Cycles, GraphConsumedError, KeyCodec, KeyedGraph, KeyedGraphBuilder, Sorted


@dataclass(frozen=True)
class Handle:
    """An arena-style identifier: arena id plus position."""

    arena: int
    index: int


HANDLE_CODEC: KeyCodec[Handle] = KeyCodec(
    to_index=lambda handle: handle.index,
    from_index=lambda arena, index: Handle(arena, index),  # type: ignore[arg-type]
    tag_of=lambda handle: handle.arena,
)


def _add_successors(builder: KeyedGraphBuilder[Handle], successors: list[Handle]) -> None:
    for successor in successors:
        builder.add_out_edge(successor)


class TestFromMapping:
    """Tests for building keyed graphs from successor mappings."""

    def test_sorted(self) -> None:
        graph = KeyedGraph.from_mapping({"lib": ["app", "tests"], "app": ["tests"]})
        assert graph.toposort_or_scc() == Sorted(["lib", "app", "tests"])

    def test_target_only_keys_become_vertices(self) -> None:
        graph = KeyedGraph.from_mapping({"a": ["b", "c"]})
        assert len(graph) == 3
        assert graph.toposort_or_scc() == Sorted(["a", "b", "c"])

    def test_cycles_report_keys(self) -> None:
        graph = KeyedGraph.from_mapping({"a": ["b"], "b": ["a"], "c": []})
        assert graph.toposort_or_scc() == Cycles([["b", "a"]])

    def test_self_dependency(self) -> None:
        graph = KeyedGraph.from_mapping({"a": ["a"], "b": []})
        assert graph.toposort_or_scc() == Cycles([["a"]])

    def test_integer_keys(self) -> None:
        graph = KeyedGraph.from_mapping({10: [20], 20: [30]})
        assert graph.toposort_or_scc() == Sorted([10, 20, 30])

    def test_add_edge_by_key(self) -> None:
        graph = KeyedGraph.from_mapping({"a": [], "b": []})
        graph.add_edge("b", "a")
        assert graph.toposort_or_scc() == Sorted(["b", "a"])

    def test_unknown_key(self) -> None:
        graph = KeyedGraph.from_mapping({"a": []})
        with pytest.raises(KeyError):
            graph.add_edge("a", "missing")

    def test_transpose(self) -> None:
        graph = KeyedGraph.from_mapping({"a": ["b"], "b": ["c"]})
        graph.transpose()
        assert graph.toposort_or_scc() == Sorted(["c", "b", "a"])

    def test_consumed(self) -> None:
        graph = KeyedGraph.from_mapping({"a": ["b"]})
        graph.toposort_or_scc()
        with pytest.raises(GraphConsumedError):
            graph.toposort_or_scc()


class TestFromItems:
    """Tests for building keyed graphs with a custom codec."""

    def test_tag_round_trips(self) -> None:
        a, b, c = Handle(7, 0), Handle(7, 1), Handle(7, 2)
        items = [(a, [c]), (b, [a]), (c, [])]

        graph = KeyedGraph.from_items(items, _add_successors, HANDLE_CODEC)

        assert graph.tag == 7
        assert graph.toposort_or_scc() == Sorted([b, a, c])

    def test_in_edges(self) -> None:
        a, b = Handle(1, 0), Handle(1, 1)

        def depends_on(builder: KeyedGraphBuilder[Handle], deps: list[Handle]) -> None:
            for dep in deps:
                builder.add_in_edge(dep)

        graph = KeyedGraph.from_items([(a, [b]), (b, [])], depends_on, HANDLE_CODEC)
        assert graph.toposort_or_scc() == Sorted([b, a])

    def test_cycle_reports_handles(self) -> None:
        a, b = Handle(3, 0), Handle(3, 1)
        graph = KeyedGraph.from_items([(a, [b]), (b, [a])], _add_successors, HANDLE_CODEC)
        assert graph.toposort_or_scc() == Cycles([[b, a]])

    def test_without_tag(self) -> None:
        keys = ["x", "y"]
        codec: KeyCodec[str] = KeyCodec(to_index=keys.index, from_index=lambda _tag, index: keys[index])

        def add(builder: KeyedGraphBuilder[str], successors: list[str]) -> None:
            for successor in successors:
                builder.add_out_edge(successor)

        graph = KeyedGraph.from_items([("x", []), ("y", ["x"])], add, codec)
        assert graph.tag is None
        assert graph.toposort_or_scc() == Sorted(["y", "x"])
