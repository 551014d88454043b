"""Topological sorting with strongly connected component diagnostics."""

__all__ = [
    "CycleError",
    "Cycles",
    "GraphConsumedError",
    "GraphDocument",
    "IndexGraph",
    "IndexGraphBuilder",
    "KeyCodec",
    "KeyedGraph",
    "KeyedGraphBuilder",
    "SortResult",
    "Sorted",
    "Vertex",
    "VisitState",
    "export_result_to_toml",
    "load_graph_document",
    "result_to_dict",
    "toposort_or_scc",
]

from ._graph import (
    CycleError,
    Cycles,
    GraphConsumedError,
    IndexGraph,
    IndexGraphBuilder,
    KeyCodec,
    KeyedGraph,
    KeyedGraphBuilder,
    Sorted,
    SortResult,
    Vertex,
    VisitState,
    toposort_or_scc,
)
from ._io import GraphDocument, export_result_to_toml, load_graph_document, result_to_dict
