"""simplicial_ph.filtrations

Sort keys and re-weighting helpers that turn a complex into a filtration.

Every key breaks ties on equal data by dimension (lower first), so that a face
with the same weight as its coface is still placed before it. Keys do not check
that the weights themselves are monotone along the face poset; that is the
caller's responsibility (lower_star / upper_star guarantee it).
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Sequence, Tuple, Union

from .complex import SimplicialComplex, dimension_key
from .config import resolve_option
from .simplex import Simplex

SortKey = Callable[[Simplex], Any]

__all__ = [
    "dimension_key",
    "data_key",
    "absolute_data_key",
    "lower_star",
    "upper_star",
    "semi_filtration",
    "assign_vertex_weights",
]


def data_key(descending: bool = False) -> SortKey:
    """Order by data (ascending, or descending), then dimension, then vertices."""
    sign = -1.0 if descending else 1.0

    def key(s: Simplex) -> Tuple[float, int, Tuple[Any, ...]]:
        return (sign * float(s.data), s.dimension, s.vertices)

    return key


def absolute_data_key(descending: bool = False) -> SortKey:
    """Order by |data|; on equal magnitude negative weights come first.

    Remaining ties fall back to dimension and the lexicographic order.
    """
    sign = -1.0 if descending else 1.0

    def key(s: Simplex) -> Tuple[float, float, int, Tuple[Any, ...]]:
        w = float(s.data)
        return (sign * abs(w), w, s.dimension, s.vertices)

    return key


def _vertex_values(values: Union[Sequence[float], Mapping[Any, float]]):
    if isinstance(values, Mapping):
        return values.__getitem__
    return lambda v: values[v]


def lower_star(K: SimplicialComplex, values: Union[Sequence[float], Mapping[Any, float]]) -> SimplicialComplex:
    """Lower-star filtration of a vertex function.

    Every simplex gets the maximum of its vertex values and the complex is
    sorted ascending. Vertex ids index into `values`.
    """
    f = _vertex_values(values)
    for s in K:
        s.data = max(float(f(v)) for v in s)
    return K.sort(key=data_key())


def upper_star(K: SimplicialComplex, values: Union[Sequence[float], Mapping[Any, float]]) -> SimplicialComplex:
    """Upper-star filtration: minimum of the vertex values, sorted descending."""
    f = _vertex_values(values)
    for s in K:
        s.data = min(float(f(v)) for v in s)
    return K.sort(key=data_key(descending=True))


def semi_filtration(K: SimplicialComplex, upper: bool = False) -> SimplicialComplex:
    """Restrict a signed-weight complex to its negative (or positive) part.

    Simplices on the wrong side of zero are reset to weight 0, vertices always
    live at 0, and higher-dimensional simplices left at 0 are dropped since
    they carry no structure for this half of the filtration. A simplex that
    lost one of its faces this way is dropped as well.
    """
    kept = []
    present = set()
    for s in sorted(K, key=lambda s: s.dimension):
        w = float(s.data)
        keep = (upper and w > 0.0) or (not upper and w < 0.0)
        t = s.with_data(w if keep else 0.0)
        if t.dimension == 0:
            t.data = 0.0
        elif t.data == 0.0 or not all(face in present for face in t.boundary()):
            continue
        kept.append(t)
        present.add(t)
    return SimplicialComplex(kept)


def assign_vertex_weights(K: SimplicialComplex, minimum: str = "global", reverse: bool = False) -> SimplicialComplex:
    """Re-weight the vertices of a weighted graph from its edges, in place.

    - "global": every vertex gets the smallest edge weight of the complex
    - "local": every vertex gets the smallest weight of its incident edges
    - "local_abs": the incident weight of smallest magnitude (negative first)

    With `reverse`, "global" and "local" take the largest weight instead, so
    vertices still precede their edges in a descending filtration. "local_abs"
    ignores `reverse`. Isolated vertices keep their weight under the local
    policies.
    """
    minimum = resolve_option("minimum", minimum)
    pick = max if reverse else min
    edges = [s for s in K if s.dimension == 1]
    if not edges:
        return K

    if minimum == "global":
        w = pick(float(e.data) for e in edges)
        for s in K:
            if s.dimension == 0:
                s.data = w
        return K

    incident: Dict[Any, List[float]] = {}
    for e in edges:
        for v in e:
            incident.setdefault(v, []).append(float(e.data))
    for s in K:
        if s.dimension != 0:
            continue
        weights = incident.get(s.vertices[0])
        if not weights:
            continue
        if minimum == "local":
            s.data = pick(weights)
        else:
            s.data = min(weights, key=lambda w: (abs(w), w))
    return K
