"""Graph module providing index-based graphs and their sort.

This module contains:
- IndexGraph: An adjacency-list graph over dense vertex indices
- toposort_or_scc: Topological sort falling back to strongly connected components
- KeyedGraph: An adapter reporting results as caller-defined keys
"""

from ._algorithms import VisitState, toposort_or_scc
from ._index_graph import GraphConsumedError, IndexGraph, IndexGraphBuilder, Vertex
from ._keyed import KeyCodec, KeyedGraph, KeyedGraphBuilder
from ._result import CycleError, Cycles, Sorted, SortResult

__all__ = [
    "CycleError",
    "Cycles",
    "GraphConsumedError",
    "IndexGraph",
    "IndexGraphBuilder",
    "KeyCodec",
    "KeyedGraph",
    "KeyedGraphBuilder",
    "SortResult",
    "Sorted",
    "Vertex",
    "VisitState",
    "toposort_or_scc",
]
