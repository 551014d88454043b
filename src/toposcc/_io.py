import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Self

import tomli_w
from pydantic import BaseModel, ConfigDict, NonNegativeInt, model_validator

from ._graph import IndexGraph, KeyedGraph, Sorted, SortResult

logger = logging.getLogger(__name__)


class GraphDocument(BaseModel):
    """A graph as stored in a TOML or JSON file.

    Exactly one of the two forms must be given:

    - ``adjacency``: index form, ``adjacency[u]`` lists the targets of the
      edges leaving vertex ``u``.
    - ``edges``: keyed form, a table mapping each name to the names that
      must come after it.

    Example:
        # index form
        adjacency = [[3], [3, 4], [4, 7], [5, 6, 7], [6], [], [], []]

        # keyed form
        [edges]
        app = ["tests"]
        lib = ["app", "tests"]

    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    adjacency: list[list[NonNegativeInt]] | None = None
    edges: dict[str, list[str]] | None = None

    @model_validator(mode="after")
    def _check_single_form(self) -> Self:
        """Require exactly one form and in-range targets in index form."""
        if (self.adjacency is None) == (self.edges is None):
            msg = "Graph document must define exactly one of 'adjacency' or 'edges'"
            raise ValueError(msg)
        if self.adjacency is not None:
            vertex_count = len(self.adjacency)
            for source, targets in enumerate(self.adjacency):
                for target in targets:
                    if target >= vertex_count:
                        msg = f"Edge {source} -> {target} points outside the graph ({vertex_count} vertices)"
                        raise ValueError(msg)
        return self

    @property
    def is_keyed(self) -> bool:
        """Whether the document uses named vertices."""
        return self.edges is not None

    def build(self) -> IndexGraph | KeyedGraph[str]:
        """Build a fresh graph from the document."""
        if self.edges is not None:
            return KeyedGraph.from_mapping(self.edges)
        assert self.adjacency is not None  # noqa: S101
        return IndexGraph.from_adjacency(self.adjacency)


def load_graph_document(input_path: Path | str) -> GraphDocument:
    """Load a graph document from a ``.toml`` or ``.json`` file.

    Args:
        input_path: Path to the document.

    Returns:
        The validated document.

    Raises:
        ValueError: If the file suffix is not supported.
        pydantic.ValidationError: If the contents are not a valid graph document.

    """
    input_path = Path(input_path)
    suffix = input_path.suffix.lower()

    if suffix == ".toml":
        with input_path.open("rb") as f:
            contents: Any = tomllib.load(f)
    elif suffix == ".json":
        with input_path.open("rb") as f:
            contents = json.load(f)
    else:
        msg = f"Unsupported graph document format '{input_path.suffix}', expected .toml or .json"
        raise ValueError(msg)

    document = GraphDocument.model_validate(contents)
    logger.debug(f"Loaded graph document from {input_path}")
    return document


def result_to_dict(result: SortResult[Any]) -> dict[str, Any]:
    """Convert a sort result into a TOML/JSON friendly dictionary."""
    if isinstance(result, Sorted):
        return {"status": "sorted", "order": list(result.order)}
    return {"status": "cyclic", "components": [list(component) for component in result.components]}


def export_result_to_toml(result: SortResult[Any], output_path: Path | str) -> None:
    """Write a sort result to a TOML file.

    Args:
        result: The result of `toposort_or_scc`.
        output_path: Path to the output TOML file.

    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("wb") as f:
        tomli_w.dump(result_to_dict(result), f)

    logger.debug(f"Exported result to {output_path}")
