from __future__ import annotations

from logging import getLogger
from typing import Dict, Generic, Hashable, List, Sequence, TypeVar

import numpy as np
import graphblas as gb
from graphblas import Matrix

from .core import AdjacencyMap

logger = getLogger(__name__)

V = TypeVar("V", bound=Hashable)


class IndexedGraph(Generic[V]):
    """
    Read-only dense-index view of an AdjacencyMap for traversal.

    Structure:
      - Vertices are 0..num_vertices-1, assigned in ascending vertex order.
      - matrix: Matrix[BOOL] of shape (num_vertices, num_vertices)
            rows = sources, cols = targets, True = edge
      - Forward and transposed CSR arrays (indptr/indices, int64) derived
        from the matrix, so successors/predecessors of an index are a slice.
    """

    __slots__ = (
        "_vertices",
        "_index",
        "_matrix",
        "indptr",
        "indices",
        "t_indptr",
        "t_indices",
    )

    # ------------------------------------------------------------------ #
    # Construction
    # ------------------------------------------------------------------ #
    def __init__(
        self,
        vertices: Sequence[V],
        matrix: Matrix,
    ) -> None:
        num_vertices = len(vertices)
        if matrix.nrows != num_vertices or matrix.ncols != num_vertices:
            raise ValueError(
                f"Matrix shape ({matrix.nrows}, {matrix.ncols}) must match "
                f"num_vertices ({num_vertices})"
            )

        self._vertices: List[V] = list(vertices)
        self._index: Dict[V, int] = {v: i for i, v in enumerate(self._vertices)}
        if len(self._index) != num_vertices:
            raise ValueError("Vertices must be distinct")
        self._matrix = matrix

        rows, cols, _ = matrix.to_coo()
        rows = np.asarray(rows, dtype=np.int64)
        cols = np.asarray(cols, dtype=np.int64)
        self.indptr, self.indices = _csr(rows, cols, num_vertices)
        self.t_indptr, self.t_indices = _csr(cols, rows, num_vertices)

    @classmethod
    def from_adjacency_map(cls, graph: AdjacencyMap[V]) -> IndexedGraph[V]:
        """Index the vertices of `graph` and build its adjacency matrix."""
        vertices = graph.vertex_list()
        index = {v: i for i, v in enumerate(vertices)}
        num_vertices = len(vertices)

        adjacency = graph.adjacency
        num_edges = graph.edge_count()
        src = np.fromiter(
            (index[v] for v in vertices for _ in adjacency[v]),
            dtype=np.int64,
            count=num_edges,
        )
        dst = np.fromiter(
            (index[w] for v in vertices for w in adjacency[v]),
            dtype=np.int64,
            count=num_edges,
        )

        if num_edges == 0:
            mat = gb.Matrix(gb.dtypes.BOOL, nrows=num_vertices, ncols=num_vertices)
        else:
            mat = gb.Matrix.from_coo(
                src,
                dst,
                True,
                dtype=gb.dtypes.BOOL,
                nrows=num_vertices,
                ncols=num_vertices,
            )

        logger.debug(
            "Indexed graph with %d vertices and %d edges", num_vertices, num_edges
        )
        return cls(vertices, mat)

    # ------------------------------------------------------------------ #
    # Structural accessors
    # ------------------------------------------------------------------ #
    @property
    def num_vertices(self) -> int:
        return len(self._vertices)

    @property
    def num_edges(self) -> int:
        return int(self._matrix.nvals)

    @property
    def matrix(self) -> Matrix:
        """The boolean adjacency matrix (rows = sources)."""
        return self._matrix

    def vertex(self, i: int) -> V:
        return self._vertices[i]

    def index_of(self, v: V) -> int:
        return self._index[v]

    def successors(self, i: int) -> np.ndarray:
        """Indices of the direct successors of vertex index `i`."""
        return self.indices[self.indptr[i]:self.indptr[i + 1]]

    def predecessors(self, i: int) -> np.ndarray:
        """Indices of the direct predecessors of vertex index `i`."""
        return self.t_indices[self.t_indptr[i]:self.t_indptr[i + 1]]

    def __repr__(self) -> str:
        return f"IndexedGraph(num_vertices={self.num_vertices}, num_edges={self.num_edges})"


def _csr(rows: np.ndarray, cols: np.ndarray, num_rows: int) -> tuple[np.ndarray, np.ndarray]:
    order = np.lexsort((cols, rows))
    sorted_rows = rows[order]
    indptr = np.searchsorted(sorted_rows, np.arange(num_rows + 1), side="left").astype(np.int64)
    return indptr, cols[order]
