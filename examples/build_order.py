"""Build Order Example for toposcc.

This example orders the build steps of a small multi-package repository:
- KeyedGraph.from_mapping for name-keyed dependency data
- Branching on Sorted / Cycles to report circular dependencies
- A custom KeyCodec for arena-style handles

Run it with:
    python examples/build_order.py
"""

from dataclasses import dataclass

import toposcc as ts

# -----------------------------------------------------------------------------
# Name-keyed dependencies
# -----------------------------------------------------------------------------

# Each package lists the packages that must be built after it
BUILD_AFTER = {
    "core": ["storage", "net"],
    "storage": ["api"],
    "net": ["api", "cli"],
    "api": ["cli"],
    "cli": [],
}


def report(result: ts.SortResult[str]) -> None:
    match result:
        case ts.Sorted(order):
            print("build order:", " -> ".join(order))
        case ts.Cycles(components):
            for component in components:
                print("circular dependency between:", ", ".join(component))


report(ts.KeyedGraph.from_mapping(BUILD_AFTER).toposort_or_scc())

# Introduce a cycle: cli is now needed to build core
report(ts.KeyedGraph.from_mapping({**BUILD_AFTER, "cli": ["core"]}).toposort_or_scc())


# -----------------------------------------------------------------------------
# Arena-style handles
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class Handle:
    """Identifier of a node stored in an arena: arena id plus slot."""

    arena: int
    slot: int


codec: ts.KeyCodec[Handle] = ts.KeyCodec(
    to_index=lambda handle: handle.slot,
    from_index=lambda arena, slot: Handle(arena, slot),  # type: ignore[arg-type]
    tag_of=lambda handle: handle.arena,
)

# Arena 1 holds three nodes; each lists the handles it must precede
nodes = [
    (Handle(1, 0), [Handle(1, 2)]),
    (Handle(1, 1), [Handle(1, 0)]),
    (Handle(1, 2), []),
]


def add_successors(builder: ts.KeyedGraphBuilder[Handle], successors: list[Handle]) -> None:
    for successor in successors:
        builder.add_out_edge(successor)


graph = ts.KeyedGraph.from_items(nodes, add_successors, codec)
print(graph.toposort_or_scc().unwrap())
