"""
Size-lexicographic ordering and canonical textual rendering.

Both operate on the raw adjacency mapping (vertex -> frozenset of successors)
so that the core and the non-empty graph types share a single definition.

Ordering key, compared left to right:

  1. number of vertices
  2. vertices as an ascending sequence
  3. number of edges
  4. the full mapping as an ascending sequence of (vertex, ascending successors)

This order refines the subgraph relation and satisfies

    empty <= x,   x <= overlay(x, y),   overlay(x, y) <= connect(x, y).

The rendering is a Python expression over the graph builders, e.g.

    empty()
    vertex(1)
    vertices([1, 2])
    edge(1, 2)
    edges([(1, 2), (1, 3), (2, 3)])
    overlay(vertex(3), edge(1, 2))
"""

from __future__ import annotations

from typing import AbstractSet, Any, Hashable, List, Mapping, Tuple

Adjacency = Mapping[Hashable, AbstractSet[Hashable]]
OrderingKey = Tuple[int, Tuple[Any, ...], int, Tuple[Tuple[Any, Tuple[Any, ...]], ...]]


def ordering_key(adjacency: Adjacency) -> OrderingKey:
    """Return the size-lexicographic sort key of an adjacency mapping."""
    keys = tuple(sorted(adjacency))
    structure = tuple((v, tuple(sorted(adjacency[v]))) for v in keys)
    edge_count = sum(len(successors) for _, successors in structure)
    return (len(keys), keys, edge_count, structure)


def edge_list(adjacency: Adjacency) -> List[Tuple[Any, Any]]:
    """All edges, sorted by (source, target)."""
    return [(x, y) for x in sorted(adjacency) for y in sorted(adjacency[x])]


def referred_to_vertices(adjacency: Adjacency) -> set:
    """Vertices that are the source or target of at least one edge."""
    used: set = set()
    for x, successors in adjacency.items():
        if successors:
            used.add(x)
            used.update(successors)
    return used


def render(
    adjacency: Adjacency,
    *,
    empty_literal: str = "empty()",
    vertices_name: str = "vertices",
    edges_name: str = "edges",
) -> str:
    """
    Render an adjacency mapping in canonical form.

    The most specific case wins: empty graph, single vertex, vertex list,
    single edge, edge list, or an overlay of the isolated vertices with the
    edges when both are present. The result depends only on the mapping.
    """
    vs = sorted(adjacency)
    if not vs:
        return empty_literal

    es = edge_list(adjacency)
    if not es:
        return _show_vertices(vs, vertices_name)

    used = referred_to_vertices(adjacency)
    if len(used) == len(vs):
        return _show_edges(es, edges_name)

    isolated = [v for v in vs if v not in used]
    return (
        f"overlay({_show_vertices(isolated, vertices_name)}, "
        f"{_show_edges(es, edges_name)})"
    )


def _show_vertices(vs: List[Any], name: str) -> str:
    if len(vs) == 1:
        return f"vertex({vs[0]!r})"
    return f"{name}({vs!r})"


def _show_edges(es: List[Tuple[Any, Any]], name: str) -> str:
    if len(es) == 1:
        x, y = es[0]
        return f"edge({x!r}, {y!r})"
    return f"{name}({es!r})"
