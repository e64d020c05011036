"""simplicial_ph.reduction

Column reduction of GF(2) boundary matrices.

Both algorithms work in place and leave every non-empty column with a unique
pivot (lowest one). Reading off `(pivot, column)` for the non-empty columns
gives the persistence pairing; see `simplicial_ph.pairing`.

- Standard: one left-to-right pass. Column j absorbs the column that already
  owns its pivot until the pivot is new or the column vanishes.
- Twist: the same rule, run one dimension at a time from the top down. Once
  column j settles with pivot r, column r is known to reduce to zero (r is a
  creator that j destroys) and is cleared without being touched. The pairing
  is identical to Standard's.
"""

from __future__ import annotations

from typing import Callable, Dict, List

from .boundary import BoundaryMatrix
from .config import resolve_option

ReductionAlgorithm = Callable[[BoundaryMatrix], BoundaryMatrix]


def _reduce_column(M: BoundaryMatrix, j: int, owner: Dict[int, int]) -> None:
    pivot = M.max_index(j)
    while pivot is not None and pivot in owner:
        M.add_column(j, owner[pivot])
        pivot = M.max_index(j)
    if pivot is not None:
        owner[pivot] = j


def standard_reduction(M: BoundaryMatrix) -> BoundaryMatrix:
    """Reduce M left to right (in place); returns M."""
    owner: Dict[int, int] = {}
    for j in range(M.num_columns):
        _reduce_column(M, j, owner)
    return M


def twist_reduction(M: BoundaryMatrix) -> BoundaryMatrix:
    """Reduce M with the clearing optimisation (in place); returns M."""
    by_dimension: Dict[int, List[int]] = {}
    for j in range(M.num_columns):
        by_dimension.setdefault(M.dimension(j), []).append(j)

    owner: Dict[int, int] = {}
    for d in sorted(by_dimension, reverse=True):
        for j in by_dimension[d]:
            if M.is_empty(j):
                continue
            _reduce_column(M, j, owner)
            pivot = M.max_index(j)
            if pivot is not None:
                M.clear_column(pivot)
    return M


REDUCTION_ALGORITHMS: Dict[str, ReductionAlgorithm] = {
    "standard": standard_reduction,
    "twist": twist_reduction,
}


def get_reduction_algorithm(name: str) -> ReductionAlgorithm:
    """Look up a reduction algorithm; unknown names fall back with a warning."""
    return REDUCTION_ALGORITHMS[resolve_option("reduction_algorithm", name)]
