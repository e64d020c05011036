"""simplicial_ph.boundary

Sparse boundary matrices over GF(2).

Column i lists the positions of the codimension-1 faces of the i-th simplex of
a face-ordered complex, so every entry sits strictly above the diagonal
(row < column). The reduction algorithms rely on this; `make_boundary_matrix`
refuses complexes that violate it.

`dualize` anti-transposes the matrix (row r, column c) -> (n-1-c, n-1-r). The
dual is the coboundary matrix in reverse filtration order; reducing it yields
the persistent cohomology pairing, which `pairing` maps back to the original
indices. Dualizing twice gives the original matrix back.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

import numpy as np
from scipy.sparse import csr_matrix

from .complex import SimplicialComplex
from .errors import StructuralError
from .representations import Representation, make_representation


class BoundaryMatrix:
    """Column-sparse GF(2) matrix with per-column dimensions.

    Parameters
    ----------
    columns:
        Iterable of row-index iterables, one per column.
    dimensions:
        Optional dimension of every column. When omitted the dimension of a
        column is derived from its size (len - 1, empty columns are 0), which
        is correct for simplicial boundaries.
    representation:
        "vector" (sorted lists) or "set".
    """

    def __init__(
        self,
        columns: Iterable[Iterable[int]] = (),
        dimensions: Optional[Sequence[int]] = None,
        representation: str = "vector",
    ) -> None:
        cols = [list(c) for c in columns]
        self._data: Representation = make_representation(representation, len(cols))
        for j, rows in enumerate(cols):
            self._data.set_column(j, rows)
        if dimensions is not None:
            if len(dimensions) != len(cols):
                raise ValueError("Need exactly one dimension per column")
            self._dimensions: Optional[List[int]] = [int(d) for d in dimensions]
        else:
            self._dimensions = None
        self.dualized = False
        self._dual_top: Optional[int] = None

    # -- shape / access ---------------------------------------------------

    @property
    def representation(self) -> str:
        return self._data.name

    @property
    def num_columns(self) -> int:
        return self._data.num_columns

    def __len__(self) -> int:
        return self._data.num_columns

    def column(self, j: int) -> List[int]:
        return self._data.column(j)

    def set_column(self, j: int, rows: Iterable[int]) -> None:
        self._data.set_column(j, rows)

    def max_index(self, j: int) -> Optional[int]:
        """Row of the lowest one (the pivot), or None for an empty column."""
        return self._data.max_index(j)

    def min_index(self, j: int) -> Optional[int]:
        return self._data.min_index(j)

    def is_empty(self, j: int) -> bool:
        return self._data.is_empty(j)

    def add_column(self, target: int, source: int) -> None:
        self._data.add_column(target, source)

    def clear_column(self, j: int) -> None:
        self._data.clear_column(j)

    def dimension(self, j: int) -> int:
        if self._dimensions is not None:
            return self._dimensions[j]
        return max(len(self._data.column(j)) - 1, 0)

    def dimensions(self) -> List[int]:
        return [self.dimension(j) for j in range(self.num_columns)]

    @property
    def dimension_max(self) -> int:
        return max(self.dimensions(), default=0)

    # -- copies / conversions ---------------------------------------------

    def copy(self) -> "BoundaryMatrix":
        other = BoundaryMatrix(representation=self.representation)
        other._data = self._data.copy()
        other._dimensions = None if self._dimensions is None else list(self._dimensions)
        other.dualized = self.dualized
        other._dual_top = self._dual_top
        return other

    def to_sparse(self) -> csr_matrix:
        """Dense-able scipy view, entry (row, column) = 1."""
        rows: List[int] = []
        cols: List[int] = []
        for j in range(self.num_columns):
            col = self.column(j)
            rows.extend(col)
            cols.extend([j] * len(col))
        n = self.num_columns
        return csr_matrix((np.ones(len(rows), dtype=np.int8), (rows, cols)), shape=(n, n))

    def is_lower_triangular(self) -> bool:
        """True if every entry satisfies row < column."""
        return all(
            self.max_index(j) is None or self.max_index(j) < j
            for j in range(self.num_columns)
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoundaryMatrix):
            return NotImplemented
        if self.num_columns != other.num_columns:
            return False
        return all(
            self.column(j) == other.column(j) and self.dimension(j) == other.dimension(j)
            for j in range(self.num_columns)
        )

    def __repr__(self) -> str:
        nnz = sum(len(self.column(j)) for j in range(self.num_columns))
        return f"BoundaryMatrix(n={self.num_columns}, nnz={nnz}, representation={self.representation!r}, dualized={self.dualized})"

    def __str__(self) -> str:
        return "\n".join(
            f"{j}: " + " ".join(str(r) for r in self.column(j))
            for j in range(self.num_columns)
        )


def make_boundary_matrix(
    K: SimplicialComplex,
    representation: str = "vector",
    partition_index: Optional[int] = None,
) -> BoundaryMatrix:
    """Build the boundary matrix of a face-ordered complex.

    Parameters
    ----------
    K:
        Complex whose order is the filtration.
    representation:
        Column storage, "vector" or "set".
    partition_index:
        Set by intersection homology, where allowable simplices are moved in
        front of the rest. The face-before-coface check is skipped in that case
        because the reordering breaks it on purpose.

    Raises
    ------
    StructuralError
        If a boundary face is missing, or (without a partition index) if a face
        does not precede its coface.
    """
    columns: List[List[int]] = []
    for j, s in enumerate(K):
        rows: List[int] = []
        for face in s.boundary():
            i = K.index(face)
            if partition_index is None and i >= j:
                raise StructuralError(
                    f"Face {face.vertices} (position {i}) does not precede {s.vertices} (position {j})"
                )
            rows.append(i)
        columns.append(rows)
    return BoundaryMatrix(columns, dimensions=[s.dimension for s in K], representation=representation)


def dualize(M: BoundaryMatrix) -> BoundaryMatrix:
    """Anti-transpose M; `dualize(dualize(M)) == M`.

    Dual column j stands for original column n-1-j and holds its cofaces, so
    dimensions are mirrored around the top dimension of the original matrix.
    """
    n = M.num_columns
    dual_columns: List[List[int]] = [[] for _ in range(n)]
    for i in range(n):
        for r in M.column(i):
            dual_columns[n - 1 - r].append(n - 1 - i)

    top = M._dual_top if M.dualized and M._dual_top is not None else M.dimension_max
    dims = M.dimensions()
    dual_dims = [top - dims[n - 1 - j] for j in range(n)]

    D = BoundaryMatrix(dual_columns, dimensions=dual_dims, representation=M.representation)
    D.dualized = not M.dualized
    D._dual_top = top
    return D
