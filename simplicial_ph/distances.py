"""simplicial_ph.distances

Distances between persistence diagrams of the same dimension.

All ground distances are L-infinity on (birth, death). The bottleneck and
Wasserstein distances use the usual augmented bipartite graph: every point
may also be matched to its projection onto the diagonal, at cost half its
persistence, and diagonal projections match each other for free.

Essential points (death = inf) cannot be matched to finite ones. They are
matched among themselves in birth order; if their counts differ the distance
is inf. The Hausdorff distance only looks at finite points.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Sequence, Tuple

import math

import numpy as np
from numpy.typing import NDArray
from scipy.optimize import linear_sum_assignment
from scipy.sparse import csr_matrix
from scipy.sparse.csgraph import maximum_bipartite_matching

from .config import resolve_option
from .diagrams import PersistenceDiagram
from .errors import DimensionMismatchError


def _check_dimensions(D: PersistenceDiagram, E: PersistenceDiagram) -> None:
    if D.dimension != E.dimension:
        raise DimensionMismatchError(f"Cannot compare diagrams of dimension {D.dimension} and {E.dimension}")


def _split(D: PersistenceDiagram) -> Tuple[NDArray[np.float64], List[float]]:
    finite = np.array([(x, y) for x, y in D if not math.isinf(y)], dtype=np.float64).reshape(-1, 2)
    essential = sorted(x for x, y in D if math.isinf(y))
    return finite, essential


def _pairwise_linf(A: NDArray[np.float64], B: NDArray[np.float64]) -> NDArray[np.float64]:
    return np.max(np.abs(A[:, None, :] - B[None, :, :]), axis=2)


def _augmented_costs(A: NDArray[np.float64], B: NDArray[np.float64]) -> NDArray[np.float64]:
    """Square (n_a + n_b) cost matrix: rows are A then diagonal slots for B."""
    n_a, n_b = len(A), len(B)
    n = n_a + n_b
    C = np.full((n, n), np.inf, dtype=np.float64)
    if n_a and n_b:
        C[:n_a, :n_b] = _pairwise_linf(A, B)
    for i in range(n_a):
        C[i, n_b + i] = abs(A[i, 1] - A[i, 0]) / 2.0
    for j in range(n_b):
        C[n_a + j, j] = abs(B[j, 1] - B[j, 0]) / 2.0
    C[n_a:, n_b:] = 0.0
    return C


def _essential_costs(a: Sequence[float], b: Sequence[float]) -> List[float]:
    if len(a) != len(b):
        return [math.inf]
    return [abs(x - y) for x, y in zip(a, b)]


def hausdorff_distance(D: PersistenceDiagram, E: PersistenceDiagram) -> float:
    """Symmetric Hausdorff distance between the finite point sets."""
    _check_dimensions(D, E)
    A, _ = _split(D)
    B, _ = _split(E)
    if len(A) == 0 and len(B) == 0:
        return 0.0
    if len(A) == 0 or len(B) == 0:
        return math.inf
    P = _pairwise_linf(A, B)
    return float(max(P.min(axis=1).max(), P.min(axis=0).max()))


def _has_perfect_matching(C: NDArray[np.float64], threshold: float) -> bool:
    rows, cols = np.nonzero(C <= threshold)
    graph = csr_matrix((np.ones(len(rows), dtype=np.int8), (rows, cols)), shape=C.shape)
    matching = maximum_bipartite_matching(graph, perm_type="column")
    return bool(np.all(matching >= 0))


def bottleneck_distance(D: PersistenceDiagram, E: PersistenceDiagram) -> float:
    """Exact bottleneck distance.

    Binary search over the sorted candidate costs; a threshold is feasible if
    the graph of edges no more expensive than it has a perfect matching.
    """
    _check_dimensions(D, E)
    A, ess_a = _split(D)
    B, ess_b = _split(E)
    essential = max(_essential_costs(ess_a, ess_b), default=0.0)
    if math.isinf(essential):
        return math.inf
    if len(A) == 0 and len(B) == 0:
        return essential

    C = _augmented_costs(A, B)
    candidates = np.unique(C[np.isfinite(C)])
    lo, hi = 0, len(candidates) - 1
    while lo < hi:
        mid = (lo + hi) // 2
        if _has_perfect_matching(C, candidates[mid]):
            hi = mid
        else:
            lo = mid + 1
    return max(float(candidates[lo]), essential)


def wasserstein_distance(D: PersistenceDiagram, E: PersistenceDiagram, q: float = 2.0) -> float:
    """q-Wasserstein distance, (sum of matched costs^q)^(1/q)."""
    _check_dimensions(D, E)
    if q <= 0:
        raise ValueError(f"q must be positive, got {q}")
    A, ess_a = _split(D)
    B, ess_b = _split(E)
    terms = _essential_costs(ess_a, ess_b)
    if any(math.isinf(t) for t in terms):
        return math.inf

    if len(A) or len(B):
        C = _augmented_costs(A, B) ** q
        finite = np.isfinite(C)
        # forbidden edges get a cost no optimal assignment would pick
        big = (C[finite].sum() + 1.0) * 2.0
        C = np.where(finite, C, big)
        rows, cols = linear_sum_assignment(C)
        terms = [t ** q for t in terms] + [float(c) for c in C[rows, cols]]
    else:
        terms = [t ** q for t in terms]
    return math.fsum(terms) ** (1.0 / q)


DISTANCES: Dict[str, Callable[[PersistenceDiagram, PersistenceDiagram], float]] = {
    "hausdorff": hausdorff_distance,
    "bottleneck": bottleneck_distance,
    "wasserstein": wasserstein_distance,
}


def diagram_distance_matrix(diagrams: Sequence[PersistenceDiagram], metric: str = "hausdorff") -> NDArray[np.float64]:
    """Symmetric matrix of pairwise diagram distances (zero diagonal).

    Typically used on a sequence of diagrams over time to measure how far a
    trajectory moves.
    """
    fn = DISTANCES[resolve_option("distance", metric)]
    n = len(diagrams)
    out = np.zeros((n, n), dtype=np.float64)
    for i in range(n):
        for j in range(i + 1, n):
            out[i, j] = out[j, i] = fn(diagrams[i], diagrams[j])
    return out
