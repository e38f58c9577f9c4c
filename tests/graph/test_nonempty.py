from __future__ import annotations

import pytest

from algraph.graph import core, nonempty
from algraph.graph.nonempty import (
    EmptyGraphError,
    NonEmptyAdjacencyMap,
    connect,
    connects1,
    consistent,
    edge,
    edges1,
    overlay,
    overlays1,
    to_non_empty,
    vertex,
    vertices1,
)

BUILDERS = {
    "vertex": vertex,
    "vertices1": vertices1,
    "edge": edge,
    "edges1": edges1,
    "overlay": overlay,
}


def test_builders_wrap_core_results() -> None:
    assert vertex(1).graph == core.vertex(1)
    assert overlay(vertex(1), vertex(2)).graph == core.vertices([1, 2])
    assert connect(vertex(1), vertex(2)).graph == core.edge(1, 2)
    assert edge(1, 2) == connect(vertex(1), vertex(2))


def test_operators() -> None:
    one, two, three = vertex(1), vertex(2), vertex(3)
    assert one + two == overlay(one, two)
    assert one * two * three == edges1([(1, 2), (1, 3), (2, 3)])


def test_laws_hold_without_empty() -> None:
    x, y, z = vertex(1), edge(2, 3), vertices1([3, 4])
    assert overlay(x, x) == x
    assert overlay(x, y) == overlay(y, x)
    assert connect(x, connect(y, z)) == connect(connect(x, y), z)
    assert connect(x, overlay(y, z)) == overlay(connect(x, y), connect(x, z))


@pytest.mark.parametrize(
    "graph, expected",
    [
        (vertex(1), "vertex(1)"),
        (overlay(vertex(1), vertex(2)), "vertices1([1, 2])"),
        (connect(vertex(1), vertex(2)), "edge(1, 2)"),
        (connects1([vertex(1), vertex(2), vertex(3)]), "edges1([(1, 2), (1, 3), (2, 3)])"),
        (overlay(edge(1, 2), vertex(3)), "overlay(vertex(3), edge(1, 2))"),
        (overlay(edge(1, 2), vertices1([3, 4])), "overlay(vertices1([3, 4]), edge(1, 2))"),
    ],
)
def test_render(graph, expected) -> None:
    assert repr(graph) == expected
    assert eval(repr(graph), dict(BUILDERS)) == graph


def test_render_of_empty_state_fails_fast() -> None:
    broken = NonEmptyAdjacencyMap(core.empty())
    with pytest.raises(EmptyGraphError):
        repr(broken)


def test_consistent_requires_a_vertex() -> None:
    assert consistent(vertex(1))
    assert consistent(edges1([(1, 2), (2, 3)]))
    assert not consistent(NonEmptyAdjacencyMap(core.empty()))
    assert not consistent(NonEmptyAdjacencyMap(core.AdjacencyMap({1: {2}})))


def test_sequence_builders_reject_empty_input() -> None:
    for builder in (vertices1, edges1, overlays1, connects1):
        with pytest.raises(EmptyGraphError):
            builder([])


def test_overlays1() -> None:
    assert overlays1([vertex(1), edge(2, 3)]) == overlay(vertex(1), edge(2, 3))


def test_to_non_empty() -> None:
    assert to_non_empty(core.empty()) is None
    wrapped = to_non_empty(core.edge(1, 2))
    assert wrapped is not None
    assert wrapped == edge(1, 2)


def test_order_and_hash_delegate_to_core() -> None:
    assert vertex(1) < vertex(2)
    assert vertex(3) < edge(1, 2)
    assert edge(1, 2) <= edge(1, 2)
    assert edge(1, 3) > edge(1, 2)
    assert hash(edge(1, 2)) == hash(core.edge(1, 2))
    assert sorted([edge(1, 2), vertex(2), vertex(1)]) == [vertex(1), vertex(2), edge(1, 2)]


def test_not_equal_to_core_graph() -> None:
    assert vertex(1) != core.vertex(1)


def test_inspection_delegates() -> None:
    g = overlay(edge(1, 2), vertex(3))
    assert g.vertex_count() == 3
    assert g.edge_count() == 1
    assert g.vertex_list() == [1, 2, 3]
    assert g.edge_list() == [(1, 2)]
    assert g.vertex_set() == frozenset({1, 2, 3})
    assert g.edge_set() == frozenset({(1, 2)})
    assert g.has_vertex(3)
    assert g.has_edge(1, 2)
    assert not g.has_edge(2, 1)


def test_module_has_no_empty_builder() -> None:
    assert not hasattr(nonempty, "empty")
