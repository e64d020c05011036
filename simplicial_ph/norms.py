"""simplicial_ph.norms

Norms of persistence diagrams, computed over the finite points only.

Sums go through `math.fsum`, which is exact up to the final rounding, so the
result does not depend on the order of the points.
"""

from __future__ import annotations

import math

from .diagrams import PersistenceDiagram


def total_persistence(D: PersistenceDiagram, k: float = 2.0) -> float:
    """Degree-k total persistence: sum of |death - birth|^k."""
    if k <= 0:
        raise ValueError(f"k must be positive, got {k}")
    return math.fsum(abs(y - x) ** k for x, y in D if not math.isinf(y))


def p_norm(D: PersistenceDiagram, p: float = 2.0) -> float:
    """(sum of |death - birth|^p)^(1/p)."""
    if p <= 0:
        raise ValueError(f"p must be positive, got {p}")
    return total_persistence(D, p) ** (1.0 / p)


def infinity_norm(D: PersistenceDiagram) -> float:
    """Largest |death - birth|; 0 for a diagram without finite points."""
    return max((abs(y - x) for x, y in D if not math.isinf(y)), default=0.0)
