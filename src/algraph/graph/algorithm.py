"""Strongly connected components and condensation."""

from __future__ import annotations

from logging import getLogger
from typing import Dict, FrozenSet, Hashable, List, Sequence, TypeVar

from . import core
from .core import AdjacencyMap
from .indexed import IndexedGraph
from .nonempty import NonEmptyAdjacencyMap

logger = getLogger(__name__)

V = TypeVar("V", bound=Hashable)


def _finish_order(indexed: IndexedGraph) -> List[int]:
    """Vertex indices in the order their depth-first search completes."""
    indptr = indexed.indptr.tolist()
    indices = indexed.indices.tolist()
    n = indexed.num_vertices

    visited = [False] * n
    order: List[int] = []
    for root in range(n):
        if visited[root]:
            continue
        visited[root] = True
        # (vertex, position of the next successor to look at)
        stack = [(root, indptr[root])]
        while stack:
            v, pos = stack[-1]
            end = indptr[v + 1]
            while pos < end and visited[indices[pos]]:
                pos += 1
            if pos < end:
                w = indices[pos]
                stack[-1] = (v, pos + 1)
                visited[w] = True
                stack.append((w, indptr[w]))
            else:
                stack.pop()
                order.append(v)
    return order


def _assign(indexed: IndexedGraph, order: Sequence[int]) -> List[List[int]]:
    """Collect components by searching the transposed graph in reverse finish order."""
    t_indptr = indexed.t_indptr.tolist()
    t_indices = indexed.t_indices.tolist()

    claimed = [False] * indexed.num_vertices
    components: List[List[int]] = []
    for root in reversed(order):
        if claimed[root]:
            continue
        claimed[root] = True
        members = [root]
        stack = [root]
        while stack:
            v = stack.pop()
            for pos in range(t_indptr[v], t_indptr[v + 1]):
                w = t_indices[pos]
                if not claimed[w]:
                    claimed[w] = True
                    members.append(w)
                    stack.append(w)
        components.append(members)
    return components


def strongly_connected_components(graph: AdjacencyMap[V]) -> List[FrozenSet[V]]:
    """
    Vertex sets of the strongly connected components of `graph` (Kosaraju).

    Components are listed in the order they are discovered, which is a
    topological order of the condensation: a component comes before every
    component reachable from it.
    """
    if graph.is_empty():
        return []
    indexed = IndexedGraph.from_adjacency_map(graph)
    order = _finish_order(indexed)
    return [
        frozenset(indexed.vertex(i) for i in members)
        for members in _assign(indexed, order)
    ]


def scc(graph: AdjacencyMap[V]) -> AdjacencyMap[NonEmptyAdjacencyMap[V]]:
    """
    Condense `graph` by its strongly connected components.

    Every vertex is replaced by the subgraph induced by its component and the
    result is rebuilt with `gmap`, so the vertices of a component collapse
    into one. Edges inside a component become a self-loop on that vertex,
    edges between components are kept:

        scc(edges([(1, 2), (2, 3), (3, 1)]))
            == edge(v, v)  where v = NonEmptyAdjacencyMap(edges([(1, 2), (2, 3), (3, 1)]))

        scc(edge(1, 2))
            == edge(NonEmptyAdjacencyMap(vertex(1)), NonEmptyAdjacencyMap(vertex(2)))
    """
    components = strongly_connected_components(graph)

    adjacency = graph.adjacency
    membership: Dict[V, NonEmptyAdjacencyMap[V]] = {}
    for members in components:
        induced = NonEmptyAdjacencyMap(
            core.from_adjacency_sets(
                (v, adjacency[v] & members) for v in members
            )
        )
        for v in members:
            membership[v] = induced

    result = core.gmap(membership.__getitem__, graph)
    logger.debug(
        "Condensed %d vertices and %d edges into %d components",
        graph.vertex_count(),
        graph.edge_count(),
        len(components),
    )
    return result
