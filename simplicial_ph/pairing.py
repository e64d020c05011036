"""simplicial_ph.pairing

Persistence pairings read off a reduced boundary matrix.

A pairing is a list of `(creator, destroyer)` column indices. The destroyer is
`None` for an essential class (a creator no later column ever kills).
Indices always refer to the *original* filtration order: pairings computed on
a dualized matrix are translated back before they are returned.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Set, Tuple

from .boundary import BoundaryMatrix
from .reduction import get_reduction_algorithm

Pair = Tuple[int, Optional[int]]


class PersistencePairing:
    """Ordered collection of (creator, destroyer-or-None) pairs."""

    def __init__(self, pairs: Iterable[Pair] = (), dualized: bool = False) -> None:
        self._pairs: List[Pair] = [(int(c), None if d is None else int(d)) for c, d in pairs]
        self.dualized = dualized

    def add(self, creator: int, destroyer: Optional[int] = None) -> None:
        self._pairs.append((creator, destroyer))

    def paired(self) -> List[Tuple[int, int]]:
        return [(c, d) for c, d in self._pairs if d is not None]

    def unpaired(self) -> List[int]:
        return [c for c, d in self._pairs if d is None]

    def as_set(self) -> Set[Pair]:
        return set(self._pairs)

    def sort(self) -> "PersistencePairing":
        self._pairs.sort(key=lambda p: (p[0], p[1] is None, p[1] or 0))
        return self

    def __iter__(self) -> Iterator[Pair]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __contains__(self, pair: object) -> bool:
        return pair in self._pairs

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PersistencePairing):
            return NotImplemented
        return self.as_set() == other.as_set()

    def __repr__(self) -> str:
        return f"PersistencePairing(paired={len(self.paired())}, unpaired={len(self.unpaired())})"


def calculate_persistence_pairing(
    M: BoundaryMatrix,
    algorithm: str = "standard",
    include_all_unpaired_creators: bool = True,
    max_index: Optional[int] = None,
) -> PersistencePairing:
    """Reduce a copy of M and extract its persistence pairing.

    Parameters
    ----------
    M:
        Boundary matrix, possibly dualized. It is not modified.
    algorithm:
        "standard" or "twist".
    include_all_unpaired_creators:
        If False, essential classes of the top dimension are dropped. For a
        complex truncated at that dimension they are usually artefacts of the
        truncation rather than features.
    max_index:
        Partition index. Only columns before it count; a column whose pivot
        lies at or beyond it is not a valid chain and pairs with nothing.

    Returns
    -------
    PersistencePairing, sorted by creator, in the index space of the original
    (non-dualized) filtration.
    """
    R = get_reduction_algorithm(algorithm)(M.copy())
    n = R.num_columns
    limit = n if max_index is None else min(int(max_index), n)

    pairing = PersistencePairing(dualized=M.dualized)
    claimed: Set[int] = set()
    creators: List[int] = []

    for j in range(limit):
        pivot = R.max_index(j)
        if pivot is None:
            creators.append(j)
        elif pivot < limit:
            pairing.add(pivot, j)
            claimed.add(pivot)

    top = M.dimension_max
    for j in creators:
        if j in claimed:
            continue
        if not include_all_unpaired_creators and M.dimension(j) == (0 if M.dualized else top):
            continue
        pairing.add(j, None)

    if M.dualized:
        pairing = PersistencePairing(
            [
                (n - 1 - u, None) if d is None else (n - 1 - d, n - 1 - u)
                for u, d in pairing
            ],
            dualized=True,
        )
    return pairing.sort()
