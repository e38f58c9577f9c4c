"""
algraph.graph
=============

Algebraic directed graphs.

Public API:

- AdjacencyMap           : immutable graph, vertex -> set of successors.
- empty, vertex          : primitive graphs.
- overlay, connect       : the two composition operators (also `+` and `*`).
- from_adjacency_sets    : build from (vertex, successors) pairs.
- edge, vertices, edges,
  overlays, connects     : derived builders.
- consistent             : check the closure invariant.
- is_subgraph_of, induce,
  gmap                   : queries and vertex relabeling.
- compare                : size-lexicographic three-way comparison.
- NonEmptyAdjacencyMap   : graph with at least one vertex (see `nonempty`).
- IndexedGraph           : dense-index traversal view of an AdjacencyMap.
- scc                    : condensation by strongly connected components.
- strongly_connected_components
                         : component vertex sets, in topological order.

`repr()` of a graph is its canonical form, a Python expression over these
builders.
"""

from __future__ import annotations

from .core import (
    AdjacencyMap,
    InvariantViolation,
    compare,
    connect,
    connects,
    consistent,
    edge,
    edges,
    empty,
    from_adjacency_sets,
    gmap,
    induce,
    is_subgraph_of,
    overlay,
    overlays,
    referred_to_vertex_set,
    vertex,
    vertices,
)
from .nonempty import EmptyGraphError, NonEmptyAdjacencyMap, to_non_empty
from .indexed import IndexedGraph
from .algorithm import scc, strongly_connected_components

__all__ = [
    "AdjacencyMap",
    "InvariantViolation",
    "EmptyGraphError",
    "NonEmptyAdjacencyMap",
    "IndexedGraph",
    "empty",
    "vertex",
    "overlay",
    "connect",
    "from_adjacency_sets",
    "edge",
    "vertices",
    "edges",
    "overlays",
    "connects",
    "consistent",
    "referred_to_vertex_set",
    "is_subgraph_of",
    "induce",
    "gmap",
    "compare",
    "to_non_empty",
    "scc",
    "strongly_connected_components",
]
