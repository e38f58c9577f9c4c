from __future__ import annotations

import graphblas as gb
import numpy as np
import pytest

from algraph.graph.core import edge, edges, overlay, vertex, vertices
from algraph.graph.indexed import IndexedGraph


def test_index_is_a_bijection() -> None:
    g = overlay(edges([("b", "a"), ("a", "c")]), vertex("d"))
    indexed = IndexedGraph.from_adjacency_map(g)

    assert indexed.num_vertices == 4
    assert sorted(indexed.vertex(i) for i in range(4)) == ["a", "b", "c", "d"]
    for v in g.vertex_list():
        assert indexed.vertex(indexed.index_of(v)) == v


def test_successors_and_predecessors_match_graph() -> None:
    g = edges([(1, 2), (1, 3), (2, 3), (3, 1), (4, 4)])
    indexed = IndexedGraph.from_adjacency_map(g)

    for v in g.vertex_list():
        i = indexed.index_of(v)
        succ = {indexed.vertex(j) for j in indexed.successors(i)}
        pred = {indexed.vertex(j) for j in indexed.predecessors(i)}
        assert succ == set(g.post_set(v))
        assert pred == {u for u, w in g.edge_list() if w == v}


def test_matrix_mirrors_edges() -> None:
    g = edges([(1, 2), (2, 3)])
    indexed = IndexedGraph.from_adjacency_map(g)
    mat = indexed.matrix

    assert mat.dtype == gb.dtypes.BOOL
    assert mat.nrows == mat.ncols == 3
    assert indexed.num_edges == mat.nvals == 2
    assert mat[indexed.index_of(1), indexed.index_of(2)].new().value
    assert mat[indexed.index_of(2), indexed.index_of(1)].new().value is None


def test_csr_arrays_are_sorted_and_sized() -> None:
    g = edges([(3, 1), (1, 3), (1, 2)])
    indexed = IndexedGraph.from_adjacency_map(g)

    assert indexed.indptr.dtype == np.int64
    assert len(indexed.indptr) == indexed.num_vertices + 1
    assert indexed.indptr[-1] == len(indexed.indices) == 3
    assert list(indexed.successors(indexed.index_of(1))) == sorted(
        [indexed.index_of(2), indexed.index_of(3)]
    )


def test_graph_without_edges() -> None:
    indexed = IndexedGraph.from_adjacency_map(vertices([1, 2, 3]))
    assert indexed.num_edges == 0
    assert all(len(indexed.successors(i)) == 0 for i in range(3))
    assert all(len(indexed.predecessors(i)) == 0 for i in range(3))


def test_matrix_shape_must_match_vertices() -> None:
    mat = gb.Matrix(gb.dtypes.BOOL, nrows=2, ncols=2)
    with pytest.raises(ValueError):
        IndexedGraph([1, 2, 3], mat)


def test_vertices_must_be_distinct() -> None:
    mat = gb.Matrix(gb.dtypes.BOOL, nrows=2, ncols=2)
    with pytest.raises(ValueError):
        IndexedGraph([1, 1], mat)


def test_repr() -> None:
    indexed = IndexedGraph.from_adjacency_map(edge(1, 2))
    assert repr(indexed) == "IndexedGraph(num_vertices=2, num_edges=1)"
