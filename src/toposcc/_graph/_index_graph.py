"""Adjacency-list graph over dense vertex indices."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ._algorithms import toposort_or_scc

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator, Sequence

    from ._result import SortResult


class GraphConsumedError(RuntimeError):
    """Raised when a graph is used after it was consumed by a sort."""


@dataclass(slots=True)
class Vertex:
    """A single vertex: its degree counters and ordered edge lists.

    Duplicate edges are stored as-is; nothing is deduplicated.
    """

    in_degree: int = 0
    out_degree: int = 0
    in_edges: list[int] = field(default_factory=list)
    out_edges: list[int] = field(default_factory=list)


@dataclass(slots=True)
class IndexGraphBuilder:
    """Edge builder bound to one vertex of a graph under construction."""

    graph: IndexGraph
    index: int

    def add_out_edge(self, index: int) -> None:
        """Add an edge from the bound vertex to `index`.

        Duplicate edges are not detected.
        """
        self.graph.add_edge(self.index, index)

    def add_in_edge(self, index: int) -> None:
        """Add an edge from `index` to the bound vertex.

        Duplicate edges are not detected.
        """
        self.graph.add_edge(index, self.index)


class IndexGraph:
    """A directed graph stored as in/out adjacency lists per vertex.

    Vertices are identified by their position in ``0..len(graph)``; the
    vertex count is fixed at construction and edges are added one by one.

    A graph is consumed by `toposort_or_scc`, which repurposes its degree
    counters as scratch state. Any use of the graph afterwards raises
    `GraphConsumedError`.

    Example:
        >>> graph = IndexGraph.from_adjacency([[1], [2], []])
        >>> graph.toposort_or_scc()
        Sorted(order=[0, 1, 2])

    """

    __slots__ = ("_vertices",)

    def __init__(self, vertex_count: int = 0) -> None:
        if vertex_count < 0:
            msg = f"Vertex count must be non-negative, got {vertex_count}"
            raise ValueError(msg)
        self._vertices: list[Vertex] | None = [Vertex() for _ in range(vertex_count)]

    @classmethod
    def with_vertices(cls, vertex_count: int) -> IndexGraph:
        """Create a graph with `vertex_count` vertices and no edges."""
        return cls(vertex_count)

    @classmethod
    def from_adjacency(cls, adjacency: Sequence[Iterable[int]]) -> IndexGraph:
        """Build a graph from a list of out-neighbor lists.

        Args:
            adjacency: ``adjacency[u]`` lists the targets of edges leaving ``u``.
                Edges are inserted in list order.

        Returns:
            A new graph with ``len(adjacency)`` vertices.

        """
        return cls.from_items(adjacency, _add_out_edges)

    @classmethod
    def from_items[T](
        cls,
        items: Sequence[T],
        callback: Callable[[IndexGraphBuilder, T], None],
    ) -> IndexGraph:
        """Build a graph with one vertex per item.

        The callback is called once for every item, in order, with a builder
        bound to that item's index so that edges can be added.

        Args:
            items: The items; item ``i`` becomes vertex ``i``.
            callback: Called as ``callback(builder, item)``.

        Returns:
            The constructed graph.

        """
        graph = cls(len(items))
        for index, item in enumerate(items):
            callback(IndexGraphBuilder(graph, index), item)
        return graph

    @property
    def vertices(self) -> list[Vertex]:
        """The vertex list. Raises `GraphConsumedError` after a sort."""
        if self._vertices is None:
            msg = "Graph was consumed by toposort_or_scc and cannot be reused"
            raise GraphConsumedError(msg)
        return self._vertices

    @property
    def consumed(self) -> bool:
        """Whether the graph has been consumed by a sort."""
        return self._vertices is None

    @property
    def edge_count(self) -> int:
        """Total number of stored edges, duplicates included."""
        return sum(len(vertex.out_edges) for vertex in self.vertices)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.vertices):
            msg = f"Vertex index {index} out of range for graph with {len(self.vertices)} vertices"
            raise IndexError(msg)

    def add_edge(self, source: int, target: int) -> None:
        """Add a directed edge ``source -> target``.

        Duplicate edges are not detected.

        Raises:
            IndexError: If either index is not a vertex of this graph.

        """
        self._check_index(source)
        self._check_index(target)
        vertices = self.vertices
        vertices[source].out_degree += 1
        vertices[target].in_degree += 1
        vertices[source].out_edges.append(target)
        vertices[target].in_edges.append(source)

    def transpose(self) -> None:
        """Reverse the direction of every edge in place."""
        for vertex in self.vertices:
            vertex.in_degree, vertex.out_degree = vertex.out_degree, vertex.in_degree
            vertex.in_edges, vertex.out_edges = vertex.out_edges, vertex.in_edges

    def edges(self) -> Iterator[tuple[int, int]]:
        """Iterate over ``(source, target)`` pairs in insertion order per source."""
        for source, vertex in enumerate(self.vertices):
            for target in vertex.out_edges:
                yield source, target

    def toposort_or_scc(self) -> SortResult[int]:
        """Sort this graph topologically or find its cycles.

        Consumes the graph; see `toposort_or_scc`.
        """
        return toposort_or_scc(self)

    def _take_vertices(self) -> list[Vertex]:
        """Hand the vertex list over to the caller and mark the graph consumed."""
        vertices = self.vertices
        self._vertices = None
        return vertices

    def __len__(self) -> int:
        """Return the number of vertices."""
        return len(self.vertices)

    def __getitem__(self, index: int) -> Vertex:
        """Return the vertex at `index`."""
        self._check_index(index)
        return self.vertices[index]

    def __iter__(self) -> Iterator[Vertex]:
        """Iterate over the vertices in index order."""
        return iter(self.vertices)

    def __repr__(self) -> str:
        if self._vertices is None:
            return f"{type(self).__name__}(<consumed>)"
        return f"{type(self).__name__}(vertices={len(self._vertices)}, edges={self.edge_count})"


def _add_out_edges(builder: IndexGraphBuilder, targets: Iterable[int]) -> None:
    for target in targets:
        builder.add_out_edge(target)
