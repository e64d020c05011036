"""simplicial_ph.diagrams

Persistence diagrams and the pipeline that produces them.

A diagram is a multiset of `(birth, death)` points for one homological
dimension. Essential classes die at `inf`. Points are plain float tuples; two
features with identical values are kept as two points.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Sequence, Tuple

import math

import numpy as np
from numpy.typing import NDArray

from .boundary import BoundaryMatrix, dualize as dualize_matrix, make_boundary_matrix
from .complex import SimplicialComplex
from .errors import DimensionMismatchError
from .pairing import PersistencePairing, calculate_persistence_pairing

Point = Tuple[float, float]

INF = float("inf")


class PersistenceDiagram:
    """Multiset of (birth, death) points of a single dimension."""

    def __init__(self, dimension: int = 0, points: Iterable[Sequence[float]] = ()) -> None:
        self.dimension = int(dimension)
        self._points: List[Point] = []
        for p in points:
            self.add(*p)

    @property
    def points(self) -> List[Point]:
        return list(self._points)

    def add(self, x: float, y: float = INF) -> None:
        self._points.append((float(x), float(y)))

    def empty(self) -> bool:
        return not self._points

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PersistenceDiagram):
            return NotImplemented
        return self.dimension == other.dimension and sorted(self._points) == sorted(other._points)

    def __repr__(self) -> str:
        return f"PersistenceDiagram(dimension={self.dimension}, points={len(self._points)}, betti={self.betti()})"

    # -- destructive cleaning -----------------------------------------------

    def remove_diagonal(self) -> "PersistenceDiagram":
        """Drop zero-persistence points (birth == death)."""
        self._points = [(x, y) for x, y in self._points if x != y]
        return self

    def remove_unpaired(self) -> "PersistenceDiagram":
        """Drop essential points (death == inf)."""
        self._points = [(x, y) for x, y in self._points if not math.isinf(y)]
        return self

    def normalize(self, min_value: float, max_value: float) -> "PersistenceDiagram":
        """Rescale finite coordinates from [min_value, max_value] to [0, 1].

        A degenerate range leaves the diagram untouched.
        """
        span = float(max_value) - float(min_value)
        if span == 0 or not math.isfinite(span):
            return self

        def _scale(v: float) -> float:
            return v if math.isinf(v) else (v - min_value) / span

        self._points = [(_scale(x), _scale(y)) for x, y in self._points]
        return self

    # -- summaries ------------------------------------------------------------

    def betti(self) -> int:
        """Number of essential classes, i.e. the Betti number at the end."""
        return sum(1 for _, y in self._points if math.isinf(y))

    def persistence(self) -> NDArray[np.float64]:
        """|death - birth| for every finite point."""
        return np.array([abs(y - x) for x, y in self._points if not math.isinf(y)], dtype=np.float64)

    def as_array(self) -> NDArray[np.float64]:
        if not self._points:
            return np.zeros((0, 2), dtype=np.float64)
        return np.array(self._points, dtype=np.float64)

    def copy(self) -> "PersistenceDiagram":
        return PersistenceDiagram(self.dimension, self._points)


def merge(D: PersistenceDiagram, E: PersistenceDiagram) -> PersistenceDiagram:
    """Union of two diagrams of the same dimension."""
    if D.dimension != E.dimension:
        raise DimensionMismatchError(f"Cannot merge diagrams of dimension {D.dimension} and {E.dimension}")
    return PersistenceDiagram(D.dimension, list(D) + list(E))


def make_persistence_diagrams(pairing: PersistencePairing, K: SimplicialComplex) -> List[PersistenceDiagram]:
    """Convert a pairing into one diagram per dimension 0..K.dimension.

    Each pair lands in the diagram of its creator's dimension; the point is
    (data(creator), data(destroyer)), or (data(creator), inf) if unpaired.
    """
    diagrams = [PersistenceDiagram(d) for d in range(K.dimension + 1)]
    for creator, destroyer in pairing:
        sigma = K[creator]
        death = INF if destroyer is None else float(K[destroyer].data)
        diagrams[sigma.dimension].add(float(sigma.data), death)
    return diagrams


def calculate_persistence_diagrams(
    K: SimplicialComplex,
    dualize: bool = True,
    include_all_unpaired_creators: bool = False,
    algorithm: str = "twist",
    representation: str = "vector",
) -> List[PersistenceDiagram]:
    """Persistence diagrams of a filtered complex.

    Parameters
    ----------
    K:
        Complex sorted in a face-respecting filtration order.
    dualize:
        Reduce the coboundary matrix instead; the pairing is the same but the
        reduction is usually much cheaper.
    include_all_unpaired_creators:
        Keep essential classes of the top dimension.
    algorithm, representation:
        Reduction strategy and column storage.

    Returns
    -------
    List of diagrams indexed by dimension.
    """
    M = make_boundary_matrix(K, representation=representation)
    if dualize:
        M = dualize_matrix(M)
    pairing = calculate_persistence_pairing(
        M,
        algorithm=algorithm,
        include_all_unpaired_creators=include_all_unpaired_creators,
    )
    return make_persistence_diagrams(pairing, K)


def calculate_persistence_diagram(
    M: BoundaryMatrix,
    function_values: Sequence[float],
    algorithm: str = "standard",
    dimension: int = 0,
) -> PersistenceDiagram:
    """Single diagram of a bare boundary matrix with one value per column.

    Used for 1-D functions loaded with `io.load_function`, where there is no
    complex to look values up in. Only creators of `dimension` are kept.
    """
    if len(function_values) != M.num_columns:
        raise ValueError("Need exactly one function value per column")
    pairing = calculate_persistence_pairing(M, algorithm=algorithm, include_all_unpaired_creators=True)
    D = PersistenceDiagram(dimension)
    for creator, destroyer in pairing:
        if M.dimension(creator) != dimension:
            continue
        death = INF if destroyer is None else float(function_values[destroyer])
        D.add(float(function_values[creator]), death)
    return D
