from __future__ import annotations

from logging import getLogger
from types import MappingProxyType
from typing import (
    AbstractSet,
    Callable,
    Dict,
    FrozenSet,
    Generic,
    Hashable,
    Iterable,
    List,
    Mapping,
    Optional,
    Tuple,
    TypeVar,
)

from ..config import get_settings
from . import canonical

logger = getLogger(__name__)

V = TypeVar("V", bound=Hashable)
W = TypeVar("W", bound=Hashable)

_EMPTY: FrozenSet = frozenset()


class InvariantViolation(RuntimeError):
    """A graph value broke the closure (or non-emptiness) invariant."""


class AdjacencyMap(Generic[V]):
    """
    Immutable directed graph stored as a map from each vertex to the set of
    its direct successors.

    Values are normally produced by the builders in this module (`empty`,
    `vertex`, `overlay`, `connect`, `from_adjacency_sets`, ...). All of them
    fold into this single canonical shape, so two algebraically equal
    expressions yield equal (and equally hashed) graphs:

        overlay(x, y) == overlay(y, x)
        connect(x, connect(y, z)) == connect(connect(x, y), z)
        connect(x, overlay(y, z)) == overlay(connect(x, y), connect(x, z))

    The constructor stores `adjacency` as given and does not close it: every
    successor is expected to be a key as well (see `consistent`). Vertices
    must be hashable and totally ordered by `<`.

    `x + y` and `x * y` are shorthand for `overlay(x, y)` and `connect(x, y)`.
    Comparison operators implement the size-lexicographic order from
    `algraph.graph.canonical`; `repr` gives the canonical form.
    """

    __slots__ = ("_adjacency", "_hash", "_key")

    # ------------------------------------------------------------------ #
    # Construction
    # ------------------------------------------------------------------ #
    def __init__(self, adjacency: Optional[Mapping[V, Iterable[V]]] = None) -> None:
        self._adjacency: Dict[V, FrozenSet[V]] = {
            v: frozenset(successors) for v, successors in (adjacency or {}).items()
        }
        self._hash: Optional[int] = None
        self._key: Optional[canonical.OrderingKey] = None

    @classmethod
    def _from_sets(cls, adjacency: Dict[V, FrozenSet[V]]) -> AdjacencyMap[V]:
        # Trusted path: `adjacency` already maps to frozensets and is not shared.
        graph = cls.__new__(cls)
        graph._adjacency = adjacency
        graph._hash = None
        graph._key = None
        return _checked(graph)

    # ------------------------------------------------------------------ #
    # Structural accessors
    # ------------------------------------------------------------------ #
    @property
    def adjacency(self) -> Mapping[V, FrozenSet[V]]:
        """Read-only view of the vertex -> successors mapping."""
        return MappingProxyType(self._adjacency)

    def is_empty(self) -> bool:
        return not self._adjacency

    def has_vertex(self, v: V) -> bool:
        return v in self._adjacency

    def has_edge(self, x: V, y: V) -> bool:
        return y in self._adjacency.get(x, _EMPTY)

    def vertex_count(self) -> int:
        return len(self._adjacency)

    def edge_count(self) -> int:
        return sum(len(successors) for successors in self._adjacency.values())

    def vertex_list(self) -> List[V]:
        """Vertices in ascending order."""
        return sorted(self._adjacency)

    def edge_list(self) -> List[Tuple[V, V]]:
        """Edges in ascending (source, target) order."""
        return canonical.edge_list(self._adjacency)

    def vertex_set(self) -> FrozenSet[V]:
        return frozenset(self._adjacency)

    def edge_set(self) -> FrozenSet[Tuple[V, V]]:
        return frozenset(
            (x, y) for x, successors in self._adjacency.items() for y in successors
        )

    def adjacency_list(self) -> List[Tuple[V, List[V]]]:
        """Sorted (vertex, sorted successors) pairs."""
        return [(v, sorted(self._adjacency[v])) for v in sorted(self._adjacency)]

    def post_set(self, v: V) -> FrozenSet[V]:
        """Direct successors of `v`; empty if `v` is not in the graph."""
        return self._adjacency.get(v, _EMPTY)

    # ------------------------------------------------------------------ #
    # Value semantics
    # ------------------------------------------------------------------ #
    def ordering_key(self) -> canonical.OrderingKey:
        if self._key is None:
            self._key = canonical.ordering_key(self._adjacency)
        return self._key

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AdjacencyMap):
            return NotImplemented
        return self._adjacency == other._adjacency

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(frozenset(self._adjacency.items()))
        return self._hash

    def __lt__(self, other: AdjacencyMap[V]) -> bool:
        if not isinstance(other, AdjacencyMap):
            return NotImplemented
        return self.ordering_key() < other.ordering_key()

    def __le__(self, other: AdjacencyMap[V]) -> bool:
        if not isinstance(other, AdjacencyMap):
            return NotImplemented
        return self.ordering_key() <= other.ordering_key()

    def __gt__(self, other: AdjacencyMap[V]) -> bool:
        if not isinstance(other, AdjacencyMap):
            return NotImplemented
        return self.ordering_key() > other.ordering_key()

    def __ge__(self, other: AdjacencyMap[V]) -> bool:
        if not isinstance(other, AdjacencyMap):
            return NotImplemented
        return self.ordering_key() >= other.ordering_key()

    def __add__(self, other: AdjacencyMap[V]) -> AdjacencyMap[V]:
        if not isinstance(other, AdjacencyMap):
            return NotImplemented
        return overlay(self, other)

    def __mul__(self, other: AdjacencyMap[V]) -> AdjacencyMap[V]:
        if not isinstance(other, AdjacencyMap):
            return NotImplemented
        return connect(self, other)

    def __len__(self) -> int:
        return len(self._adjacency)

    def __iter__(self):
        return iter(sorted(self._adjacency))

    def __contains__(self, v: object) -> bool:
        return v in self._adjacency

    # ------------------------------------------------------------------ #
    # Introspection
    # ------------------------------------------------------------------ #
    def __repr__(self) -> str:
        return canonical.render(self._adjacency)


# ---------------------------------------------------------------------- #
# Invariant
# ---------------------------------------------------------------------- #
def referred_to_vertex_set(g: AdjacencyMap[V]) -> FrozenSet[V]:
    """Vertices occurring as the source or target of some edge."""
    return frozenset(canonical.referred_to_vertices(g._adjacency))


def consistent(g: AdjacencyMap[V]) -> bool:
    """
    Check the closure invariant: every successor is also a key.

    All builders preserve it by construction; this is meant for tests and
    for the optional validation hook (`ALGRAPH_VALIDATION__CHECK_INVARIANTS`).
    """
    adjacency = g._adjacency
    return all(w in adjacency for successors in adjacency.values() for w in successors)


def _checked(g: AdjacencyMap[V]) -> AdjacencyMap[V]:
    if get_settings().validation.check_invariants and not consistent(g):
        msg = f"Inconsistent adjacency map produced by a builder: {g!r}"
        logger.error(msg)
        raise InvariantViolation(msg)
    return g


# ---------------------------------------------------------------------- #
# Primitive builders
# ---------------------------------------------------------------------- #
def empty() -> AdjacencyMap:
    """The graph with no vertices."""
    return AdjacencyMap._from_sets({})


def vertex(v: V) -> AdjacencyMap[V]:
    """The graph with the single vertex `v` and no edges."""
    return AdjacencyMap._from_sets({v: _EMPTY})


def overlay(x: AdjacencyMap[V], y: AdjacencyMap[V]) -> AdjacencyMap[V]:
    """
    Union of vertices and edges.

    Commutative, associative and idempotent with `empty()` as identity.
    Successor sets present in only one operand are shared, not copied.
    """
    if len(x._adjacency) < len(y._adjacency):
        x, y = y, x
    merged = dict(x._adjacency)
    for v, successors in y._adjacency.items():
        current = merged.get(v)
        if current is None:
            merged[v] = successors
        elif not successors <= current:
            merged[v] = current | successors
    return AdjacencyMap._from_sets(merged)


def connect(x: AdjacencyMap[V], y: AdjacencyMap[V]) -> AdjacencyMap[V]:
    """
    Overlay `x` and `y` and add an edge from every vertex of `x` to every
    vertex of `y`.

    Not commutative. Associative with `empty()` as identity, distributes over
    `overlay` and satisfies `x * y * z == x * y + x * z + y * z`. A vertex
    shared by both operands gets a self-loop.
    """
    if not x._adjacency:
        return y
    if not y._adjacency:
        return x
    targets = frozenset(y._adjacency)
    merged = dict(y._adjacency)
    for v, successors in x._adjacency.items():
        current = merged.get(v, _EMPTY)
        merged[v] = current | successors | targets
    return AdjacencyMap._from_sets(merged)


def from_adjacency_sets(pairs: Iterable[Tuple[V, Iterable[V]]]) -> AdjacencyMap[V]:
    """
    Build a graph from (vertex, successors) pairs.

    Every vertex mentioned anywhere becomes a vertex of the result and the
    successors of repeated vertices are unioned:

        from_adjacency_sets([(1, {2}), (2, set())]) == edge(1, 2)
        from_adjacency_sets([(1, {2})]) == edge(1, 2)
    """
    collected: Dict[V, set] = {}
    for v, successors in pairs:
        collected.setdefault(v, set()).update(successors)

    referred: set = set()
    for successors in collected.values():
        referred.update(successors)
    for v in referred:
        collected.setdefault(v, set())

    return AdjacencyMap._from_sets(
        {v: frozenset(successors) if successors else _EMPTY for v, successors in collected.items()}
    )


# ---------------------------------------------------------------------- #
# Derived builders
# ---------------------------------------------------------------------- #
def edge(x: V, y: V) -> AdjacencyMap[V]:
    """The graph with the single edge x -> y."""
    return connect(vertex(x), vertex(y))


def vertices(vs: Iterable[V]) -> AdjacencyMap[V]:
    """Isolated vertices."""
    return AdjacencyMap._from_sets({v: _EMPTY for v in vs})


def edges(es: Iterable[Tuple[V, V]]) -> AdjacencyMap[V]:
    """The graph containing exactly the given edges and their endpoints."""
    return from_adjacency_sets((x, (y,)) for x, y in es)


def overlays(gs: Iterable[AdjacencyMap[V]]) -> AdjacencyMap[V]:
    result: AdjacencyMap[V] = empty()
    for g in gs:
        result = overlay(result, g)
    return result


def connects(gs: Iterable[AdjacencyMap[V]]) -> AdjacencyMap[V]:
    result: AdjacencyMap[V] = empty()
    for g in gs:
        result = connect(result, g)
    return result


# ---------------------------------------------------------------------- #
# Queries and transformations
# ---------------------------------------------------------------------- #
def compare(x: AdjacencyMap[V], y: AdjacencyMap[V]) -> int:
    """Size-lexicographic three-way comparison: -1, 0 or 1."""
    kx, ky = x.ordering_key(), y.ordering_key()
    if kx < ky:
        return -1
    if kx > ky:
        return 1
    return 0


def is_subgraph_of(x: AdjacencyMap[V], y: AdjacencyMap[V]) -> bool:
    """True if every vertex and every edge of `x` occurs in `y`."""
    for v, successors in x._adjacency.items():
        other: Optional[AbstractSet[V]] = y._adjacency.get(v)
        if other is None or not successors <= other:
            return False
    return True


def induce(predicate: Callable[[V], bool], g: AdjacencyMap[V]) -> AdjacencyMap[V]:
    """Subgraph on the vertices satisfying `predicate`, keeping inner edges only."""
    kept = {v for v in g._adjacency if predicate(v)}
    return AdjacencyMap._from_sets(
        {v: g._adjacency[v] & kept for v in kept}
    )


def gmap(f: Callable[[V], W], g: AdjacencyMap[V]) -> AdjacencyMap[W]:
    """
    Relabel every vertex through `f`.

    The result is folded by `from_adjacency_sets`, so vertices with equal
    images collapse into one and their edges merge; an edge between two
    vertices with the same image becomes a self-loop.
    """
    image: Dict[V, W] = {v: f(v) for v in g._adjacency}
    return from_adjacency_sets(
        (image[v], [image[w] for w in successors])
        for v, successors in g._adjacency.items()
    )
