"""
Non-empty graphs.

A NonEmptyAdjacencyMap wraps a core AdjacencyMap that has at least one
vertex. There is no `empty()` here: `vertex` always yields a vertex, and
`overlay`/`connect` of non-empty operands are non-empty, so the core builders
are reused as they are.

Rendering follows the core canonical form with `vertices1`/`edges1` in place
of `vertices`/`edges`:

    vertex(1)
    vertices1([1, 2])
    edge(1, 2)
    edges1([(1, 2), (1, 3), (2, 3)])
    overlay(vertex(3), edge(1, 2))
"""

from __future__ import annotations

from logging import getLogger
from typing import FrozenSet, Generic, Hashable, Iterable, List, Optional, Tuple, TypeVar

from . import canonical
from . import core
from .core import AdjacencyMap, InvariantViolation

logger = getLogger(__name__)

V = TypeVar("V", bound=Hashable)


class EmptyGraphError(InvariantViolation):
    """A non-empty graph was found (or would be built) without vertices."""


class NonEmptyAdjacencyMap(Generic[V]):
    """
    Graph with at least one vertex.

    The constructor wraps `graph` without checking it; use the builders in
    this module or `to_non_empty` to obtain values, and `consistent` to
    validate one. Equality, hashing and the size-lexicographic order are
    those of the wrapped graph.
    """

    __slots__ = ("_graph",)

    def __init__(self, graph: AdjacencyMap[V]) -> None:
        self._graph = graph

    @property
    def graph(self) -> AdjacencyMap[V]:
        """The wrapped core graph."""
        return self._graph

    def vertex_count(self) -> int:
        return self._graph.vertex_count()

    def edge_count(self) -> int:
        return self._graph.edge_count()

    def vertex_list(self) -> List[V]:
        return self._graph.vertex_list()

    def edge_list(self) -> List[Tuple[V, V]]:
        return self._graph.edge_list()

    def vertex_set(self) -> FrozenSet[V]:
        return self._graph.vertex_set()

    def edge_set(self) -> FrozenSet[Tuple[V, V]]:
        return self._graph.edge_set()

    def has_vertex(self, v: V) -> bool:
        return self._graph.has_vertex(v)

    def has_edge(self, x: V, y: V) -> bool:
        return self._graph.has_edge(x, y)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NonEmptyAdjacencyMap):
            return NotImplemented
        return self._graph == other._graph

    def __hash__(self) -> int:
        return hash(self._graph)

    def __lt__(self, other: NonEmptyAdjacencyMap[V]) -> bool:
        if not isinstance(other, NonEmptyAdjacencyMap):
            return NotImplemented
        return self._graph < other._graph

    def __le__(self, other: NonEmptyAdjacencyMap[V]) -> bool:
        if not isinstance(other, NonEmptyAdjacencyMap):
            return NotImplemented
        return self._graph <= other._graph

    def __gt__(self, other: NonEmptyAdjacencyMap[V]) -> bool:
        if not isinstance(other, NonEmptyAdjacencyMap):
            return NotImplemented
        return self._graph > other._graph

    def __ge__(self, other: NonEmptyAdjacencyMap[V]) -> bool:
        if not isinstance(other, NonEmptyAdjacencyMap):
            return NotImplemented
        return self._graph >= other._graph

    def __add__(self, other: NonEmptyAdjacencyMap[V]) -> NonEmptyAdjacencyMap[V]:
        if not isinstance(other, NonEmptyAdjacencyMap):
            return NotImplemented
        return overlay(self, other)

    def __mul__(self, other: NonEmptyAdjacencyMap[V]) -> NonEmptyAdjacencyMap[V]:
        if not isinstance(other, NonEmptyAdjacencyMap):
            return NotImplemented
        return connect(self, other)

    def __repr__(self) -> str:
        adjacency = self._graph.adjacency
        if not adjacency:
            msg = "NonEmptyAdjacencyMap cannot be rendered: graph is empty"
            logger.error(msg)
            raise EmptyGraphError(msg)
        return canonical.render(adjacency, vertices_name="vertices1", edges_name="edges1")


# ---------------------------------------------------------------------- #
# Builders
# ---------------------------------------------------------------------- #
def vertex(v: V) -> NonEmptyAdjacencyMap[V]:
    return NonEmptyAdjacencyMap(core.vertex(v))


def overlay(x: NonEmptyAdjacencyMap[V], y: NonEmptyAdjacencyMap[V]) -> NonEmptyAdjacencyMap[V]:
    return NonEmptyAdjacencyMap(core.overlay(x.graph, y.graph))


def connect(x: NonEmptyAdjacencyMap[V], y: NonEmptyAdjacencyMap[V]) -> NonEmptyAdjacencyMap[V]:
    return NonEmptyAdjacencyMap(core.connect(x.graph, y.graph))


def edge(x: V, y: V) -> NonEmptyAdjacencyMap[V]:
    return NonEmptyAdjacencyMap(core.edge(x, y))


def vertices1(vs: Iterable[V]) -> NonEmptyAdjacencyMap[V]:
    """Isolated vertices; `vs` must not be empty."""
    return _require(core.vertices(vs), "vertices1")


def edges1(es: Iterable[Tuple[V, V]]) -> NonEmptyAdjacencyMap[V]:
    """Graph of the given edges; `es` must not be empty."""
    return _require(core.edges(es), "edges1")


def overlays1(gs: Iterable[NonEmptyAdjacencyMap[V]]) -> NonEmptyAdjacencyMap[V]:
    return _require(core.overlays(g.graph for g in gs), "overlays1")


def connects1(gs: Iterable[NonEmptyAdjacencyMap[V]]) -> NonEmptyAdjacencyMap[V]:
    return _require(core.connects(g.graph for g in gs), "connects1")


def to_non_empty(g: AdjacencyMap[V]) -> Optional[NonEmptyAdjacencyMap[V]]:
    """Wrap `g`, or return None if it has no vertices."""
    if g.is_empty():
        return None
    return NonEmptyAdjacencyMap(g)


def consistent(x: NonEmptyAdjacencyMap[V]) -> bool:
    """Closure invariant of the wrapped graph, plus at least one vertex."""
    return core.consistent(x.graph) and not x.graph.is_empty()


def _require(g: AdjacencyMap[V], builder: str) -> NonEmptyAdjacencyMap[V]:
    if g.is_empty():
        msg = f"{builder}() needs at least one element"
        logger.error(msg)
        raise EmptyGraphError(msg)
    return NonEmptyAdjacencyMap(g)
