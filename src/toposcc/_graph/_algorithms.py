"""Topological sort with strongly connected component fallback.

Kahn's algorithm produces the order; when it cannot place every vertex the
graph has a cycle, and Kosaraju's algorithm reports the cyclic components
using the same traversal state.
"""

from __future__ import annotations

import logging
from collections import deque
from enum import IntEnum
from typing import TYPE_CHECKING

from ._result import Cycles, Sorted

if TYPE_CHECKING:
    from ._index_graph import IndexGraph, Vertex
    from ._result import SortResult

logger = logging.getLogger(__name__)


class VisitState(IntEnum):
    """Per-vertex traversal state of the SCC search."""

    UNVISITED = 0
    DISCOVERED = 1
    FINALIZED = 2


def toposort_or_scc(graph: IndexGraph) -> SortResult[int]:
    """Sort a graph topologically, or find its cycles if it has any.

    The graph is consumed: its in-degree counters are used up by the sort
    and any later use of it raises `GraphConsumedError`.

    Runs in O(V + E) time with O(V) extra space.

    Args:
        graph: The graph to sort.

    Returns:
        ``Sorted(order)`` if the graph is acyclic, where every edge (u, v)
        has u before v. Otherwise ``Cycles(components)`` holding the strongly
        connected components that contain a cycle; vertices not on any cycle
        are left out.

    Example:
        >>> toposort_or_scc(IndexGraph.from_adjacency([[1], [0], []]))
        Cycles(components=[[1, 0]])

    """
    vertices = graph._take_vertices()  # noqa: SLF001
    state = [VisitState.UNVISITED] * len(vertices)

    order = _kahn(vertices)
    if len(order) == len(vertices):
        logger.debug("Sorted %d vertices", len(order))
        return Sorted(order)

    logger.debug("Placed %d of %d vertices, searching for cycles", len(order), len(vertices))

    finish_order = _finish_order(vertices, state)
    components = _collect_components(vertices, state, finish_order)

    logger.debug("Found %d cyclic component(s)", len(components))
    return Cycles(components)


def _kahn(vertices: list[Vertex]) -> list[int]:
    # Vertices with in-degree 0 are ready; in-degree counters are consumed
    queue = deque(idx for idx, vertex in enumerate(vertices) if vertex.in_degree == 0)
    order: list[int] = []

    while queue:
        idx = queue.popleft()
        order.append(idx)
        for next_idx in vertices[idx].out_edges:
            successor = vertices[next_idx]
            successor.in_degree -= 1
            if successor.in_degree == 0:
                queue.append(next_idx)

    return order


def _finish_order(vertices: list[Vertex], state: list[VisitState]) -> list[int]:
    """Return vertices in DFS post-order along out-edges.

    The search starts at vertex 0 and restarts at each vertex still unvisited,
    in index order. Uses an explicit stack of (vertex, next edge) pairs.
    """
    finished: list[int] = []

    for root in range(len(vertices)):
        if state[root] != VisitState.UNVISITED:
            continue

        state[root] = VisitState.DISCOVERED
        stack = [(root, 0)]

        while stack:
            idx, edge_idx = stack.pop()
            out_edges = vertices[idx].out_edges
            if edge_idx < len(out_edges):
                stack.append((idx, edge_idx + 1))
                next_idx = out_edges[edge_idx]
                if state[next_idx] == VisitState.UNVISITED:
                    state[next_idx] = VisitState.DISCOVERED
                    stack.append((next_idx, 0))
            else:
                finished.append(idx)

    return finished


def _collect_components(
    vertices: list[Vertex],
    state: list[VisitState],
    finish_order: list[int],
) -> list[list[int]]:
    """Group vertices by reverse DFS along in-edges, latest finisher first.

    The root is not claimed before its search, so it only joins its own
    component if some cycle leads back to it. A root that was not reached
    again is a trivial component and is finalized without being reported.
    """
    components: list[list[int]] = []

    for root in reversed(finish_order):
        if state[root] == VisitState.FINALIZED:
            continue

        component: list[int] = []
        stack = [(root, 0)]

        while stack:
            idx, edge_idx = stack.pop()
            in_edges = vertices[idx].in_edges
            if edge_idx < len(in_edges):
                stack.append((idx, edge_idx + 1))
                next_idx = in_edges[edge_idx]
                if state[next_idx] == VisitState.DISCOVERED:
                    state[next_idx] = VisitState.FINALIZED
                    stack.append((next_idx, 0))
                    component.append(next_idx)

        if state[root] == VisitState.FINALIZED:
            components.append(component)
        else:
            state[root] = VisitState.FINALIZED

    return components
