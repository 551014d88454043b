"""Result types for the combined topological sort / SCC search."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable


class CycleError(ValueError):
    """Raised by `Cycles.unwrap` when a graph has no topological order."""

    def __init__(self, components: list[list[Any]]) -> None:
        self.components = components
        msg = f"Cycle detected in graph: {len(components)} strongly connected component(s)"
        super().__init__(msg)


@dataclass(frozen=True, slots=True)
class Sorted[T]:
    """Outcome for an acyclic graph.

    Attributes:
        order: Every vertex exactly once; each edge points forward.

    """

    order: list[T]

    @property
    def is_acyclic(self) -> bool:
        """Always True for a sorted result."""
        return True

    def unwrap(self) -> list[T]:
        """Return the topological order."""
        return self.order

    def map_vertices[U](self, fn: Callable[[T], U]) -> Sorted[U]:
        """Return the same result with every vertex passed through `fn`."""
        return Sorted([fn(vertex) for vertex in self.order])


@dataclass(frozen=True, slots=True)
class Cycles[T]:
    """Outcome for a graph with at least one cycle.

    Only vertices lying on a cycle appear, each in exactly one component.
    The order of components, and of vertices inside a component, follows
    the traversal and is stable for a fixed edge insertion order.

    Attributes:
        components: The non-trivial strongly connected components.

    """

    components: list[list[T]]

    @property
    def is_acyclic(self) -> bool:
        """Always False for a cyclic result."""
        return False

    def unwrap(self) -> list[T]:
        """Raise `CycleError` carrying the components."""
        raise CycleError(self.components)

    def map_vertices[U](self, fn: Callable[[T], U]) -> Cycles[U]:
        """Return the same result with every vertex passed through `fn`."""
        return Cycles([[fn(vertex) for vertex in component] for component in self.components])


type SortResult[T] = Sorted[T] | Cycles[T]
