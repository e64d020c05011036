"""simplicial_ph.intersection

Persistent intersection homology of a stratified complex.

A stratification is a sequence of nested subcomplexes X_0 ⊆ X_1 ⊆ ... ⊆ X_n.
A simplex sigma is allowable for a perversity p if, for k = 1..n,

    dim(sigma ∩ X_{n-k}) <= dim(sigma) - k + p(k)

where the intersection dimension is that of the largest face of sigma lying
in the stratum (no common face is always fine).

The computation moves allowable simplices in front of the rest, keeping
their relative order, and reduces the resulting boundary matrix. Only the
allowable block is read: a chain whose pivot falls outside it is not an
allowable chain and pairs with nothing.
"""

from __future__ import annotations

from itertools import combinations
from typing import Callable, List, Sequence, Tuple

from .boundary import make_boundary_matrix
from .complex import SimplicialComplex
from .diagrams import PersistenceDiagram, make_persistence_diagrams
from .errors import StructuralError
from .pairing import calculate_persistence_pairing
from .simplex import Simplex


class Perversity:
    """Perversity function p(k) = values[k-1]; 0 outside the given range."""

    def __init__(self, values: Sequence[int]) -> None:
        self.values = [int(v) for v in values]

    def __call__(self, k: int) -> int:
        if 1 <= k <= len(self.values):
            return self.values[k - 1]
        return 0

    def __repr__(self) -> str:
        return f"Perversity({self.values})"


def partition(K: SimplicialComplex, predicate: Callable[[Simplex], bool]) -> Tuple[SimplicialComplex, int]:
    """Stable partition: simplices satisfying `predicate` first.

    Returns the reordered copy and the number of simplices in the front block.
    """
    front: List[Simplex] = []
    back: List[Simplex] = []
    for s in K:
        (front if predicate(s) else back).append(s.copy())
    return SimplicialComplex(front + back), len(front)


def _intersection_dimension(simplex: Simplex, stratum: SimplicialComplex) -> int:
    verts = simplex.vertices
    for size in range(len(verts), 0, -1):
        for face in combinations(verts, size):
            if Simplex(face) in stratum:
                return size - 1
    return -1


def is_admissible(simplex: Simplex, strata: Sequence[SimplicialComplex], perversity: Perversity) -> bool:
    n = len(strata) - 1
    for k in range(1, n + 1):
        d = _intersection_dimension(simplex, strata[n - k])
        if d < 0:
            continue
        if d > simplex.dimension - k + perversity(k):
            return False
    return True


def _check_nesting(strata: Sequence[SimplicialComplex]) -> None:
    for i in range(len(strata) - 1):
        for s in strata[i]:
            if s not in strata[i + 1]:
                raise StructuralError(f"Strata are not nested: {s!r} is in X_{i} but not in X_{i + 1}")


def calculate_intersection_homology(
    K: SimplicialComplex,
    strata: Sequence[SimplicialComplex],
    perversity: Perversity,
) -> List[PersistenceDiagram]:
    """Persistent intersection homology diagrams of K.

    Parameters
    ----------
    K:
        Face-ordered complex.
    strata:
        Nested subcomplexes X_0 ⊆ ... ⊆ X_n, usually with X_n = K.
    perversity:
        Allowability function.

    Returns
    -------
    Non-empty diagrams (diagonal points removed), in increasing dimension.
    """
    if len(strata) < 2:
        raise ValueError("Need at least two strata")
    _check_nesting(strata)

    L, s = partition(K, lambda sigma: is_admissible(sigma, strata, perversity))
    M = make_boundary_matrix(L, partition_index=s)
    pairing = calculate_persistence_pairing(
        M,
        algorithm="standard",
        include_all_unpaired_creators=True,
        max_index=s,
    )
    diagrams = make_persistence_diagrams(pairing, L)
    return [D for D in (D.remove_diagonal() for D in diagrams) if not D.empty()]
