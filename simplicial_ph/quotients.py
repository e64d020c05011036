"""simplicial_ph.quotients

Cone and suspension of a complex with integer vertex ids.

New apex vertices get ids above the current maximum. A coned simplex
sigma + {w} carries the data of sigma, and every apex carries the minimum
weight of the complex, so a face-ordered input stays face-ordered.
"""

from __future__ import annotations

from typing import List

from .complex import SimplicialComplex
from .simplex import Simplex


def _apex_data(K: SimplicialComplex) -> float:
    return min((s.data for s in K), default=0.0)


def _coned(K: SimplicialComplex, apex: int) -> List[Simplex]:
    return [Simplex(s.vertices + (apex,), s.data) for s in K]


def cone(K: SimplicialComplex) -> SimplicialComplex:
    """K plus an apex joined to every simplex; size 2n + 1."""
    if K.empty():
        return SimplicialComplex()
    apex = int(max(K.vertices())) + 1
    simplices = [s.copy() for s in K]
    simplices.append(Simplex(apex, _apex_data(K)))
    simplices.extend(_coned(K, apex))
    return SimplicialComplex(simplices)


def suspension(K: SimplicialComplex) -> SimplicialComplex:
    """Two cones over K glued along K; size 3n + 2."""
    if K.empty():
        return SimplicialComplex()
    north = int(max(K.vertices())) + 1
    south = north + 1
    data = _apex_data(K)
    simplices = [s.copy() for s in K]
    simplices.append(Simplex(north, data))
    simplices.append(Simplex(south, data))
    simplices.extend(_coned(K, north))
    simplices.extend(_coned(K, south))
    return SimplicialComplex(simplices)
