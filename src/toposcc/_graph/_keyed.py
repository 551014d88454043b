"""Adapter sorting graphs whose vertices are caller-defined keys."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ._index_graph import IndexGraph

if TYPE_CHECKING:
    from collections.abc import Callable, Hashable, Iterable, Mapping, Sequence

    from ._result import SortResult


@dataclass(frozen=True, slots=True)
class KeyCodec[K]:
    """Conversion between caller keys and dense vertex indices.

    Attributes:
        to_index: Returns the dense index of a key.
        from_index: Rebuilds a key from a tag and a dense index. The tag is
            whatever `tag_of` extracted from the keys while building, e.g. an
            arena or generation id; it is None when `tag_of` is not given.
        tag_of: Extracts the tag carried by a key.

    """

    to_index: Callable[[K], int]
    from_index: Callable[[object, int], K]
    tag_of: Callable[[K], object] | None = None


@dataclass(slots=True)
class KeyedGraphBuilder[K]:
    """Edge builder bound to one keyed vertex."""

    graph: IndexGraph
    codec: KeyCodec[K]
    index: int

    def add_out_edge(self, key: K) -> None:
        """Add an edge from the bound vertex to `key`."""
        self.graph.add_edge(self.index, self.codec.to_index(key))

    def add_in_edge(self, key: K) -> None:
        """Add an edge from `key` to the bound vertex."""
        self.graph.add_edge(self.codec.to_index(key), self.index)


class KeyedGraph[K]:
    """An `IndexGraph` whose results are reported as caller keys.

    The wrapped graph only ever sees dense indices; keys are translated on
    the way in through ``codec.to_index`` and on the way out through
    ``codec.from_index``.
    """

    __slots__ = ("codec", "graph", "tag")

    def __init__(self, graph: IndexGraph, codec: KeyCodec[K], tag: object = None) -> None:
        self.graph = graph
        self.codec = codec
        self.tag = tag

    @classmethod
    def from_items[V](
        cls,
        items: Sequence[tuple[K, V]],
        callback: Callable[[KeyedGraphBuilder[K], V], None],
        codec: KeyCodec[K],
    ) -> KeyedGraph[K]:
        """Build a graph with one vertex per ``(key, value)`` item.

        Item ``i`` becomes vertex ``i``, so ``codec.to_index`` must map each
        item's key to its position. The callback is called once per item, in
        order, with a builder bound to that item.

        Args:
            items: ``(key, value)`` pairs in index order.
            callback: Called as ``callback(builder, value)``.
            codec: Key/index conversion.

        Returns:
            The constructed keyed graph.

        """
        keyed = cls(IndexGraph(len(items)), codec)
        for index, (key, value) in enumerate(items):
            if codec.tag_of is not None:
                keyed.tag = codec.tag_of(key)
            callback(KeyedGraphBuilder(keyed.graph, codec, index), value)
        return keyed

    @classmethod
    def from_mapping[H: Hashable](cls, successors: Mapping[H, Iterable[H]]) -> KeyedGraph[H]:
        """Build a graph from a mapping of keys to the keys that follow them.

        An entry ``a: [b, c]`` adds the edges ``a -> b`` and ``a -> c``. Keys
        that appear only as successors become vertices too, after the mapping's
        own keys, in the order they are first seen.

        Example:
            >>> graph = KeyedGraph.from_mapping({"a": ["b"], "b": ["c"]})
            >>> graph.toposort_or_scc()
            Sorted(order=['a', 'b', 'c'])

        """
        keys: list[H] = list(successors)
        index_of: dict[H, int] = {key: index for index, key in enumerate(keys)}
        for targets in successors.values():
            for target in targets:
                if target not in index_of:
                    index_of[target] = len(keys)
                    keys.append(target)

        codec: KeyCodec[H] = KeyCodec(
            to_index=index_of.__getitem__,
            from_index=lambda _tag, index: keys[index],
        )

        def add_successors(builder: KeyedGraphBuilder[H], key: H) -> None:
            for target in successors.get(key, ()):
                builder.add_out_edge(target)

        return cls.from_items([(key, key) for key in keys], add_successors, codec)

    def add_edge(self, source: K, target: K) -> None:
        """Add a directed edge ``source -> target`` between keyed vertices."""
        self.graph.add_edge(self.codec.to_index(source), self.codec.to_index(target))

    def transpose(self) -> None:
        """Reverse the direction of every edge in place."""
        self.graph.transpose()

    def toposort_or_scc(self) -> SortResult[K]:
        """Sort the graph or find its cycles, reporting keys.

        Consumes the wrapped graph.
        """
        tag = self.tag
        from_index = self.codec.from_index
        return self.graph.toposort_or_scc().map_vertices(lambda index: from_index(tag, index))

    def __len__(self) -> int:
        """Return the number of vertices."""
        return len(self.graph)
