"""simplicial_ph.rips

Vietoris–Rips complexes.

`RipsExpander` turns a weighted graph (a complex of vertices and edges) into
its clique complex up to a given dimension. Expanded simplices start with
data 0; `assign_maximum_weight` then gives each of them the largest weight of
its edges, which is the Rips filtration value.

`build_vietoris_rips_complex` goes straight from a distance matrix to a
sorted filtration, either natively or through GUDHI's RipsComplex when the
optional `gudhi` package is installed.
"""

from __future__ import annotations

from itertools import combinations
from typing import Any, Dict, List, Set, Tuple

import warnings

import numpy as np
from numpy.typing import NDArray
from scipy.spatial.distance import pdist, squareform

from .complex import SimplicialComplex, dimension_key
from .config import resolve_option
from .filtrations import data_key
from .simplex import Simplex


def _try_import_gudhi():
    try:
        import gudhi  # type: ignore
        return gudhi
    except Exception:
        return None


class RipsExpander:
    """Clique (flag) expansion of the 1-skeleton of a complex."""

    def __call__(self, K: SimplicialComplex, dimension: int) -> SimplicialComplex:
        return self.expand(K, dimension)

    def expand(self, K: SimplicialComplex, dimension: int) -> SimplicialComplex:
        """Return a copy of K with every clique of up to `dimension`+1 vertices.

        Existing simplices keep their position and data; new ones are
        appended in dimension order.
        """
        upper: Dict[Any, Set[Any]] = {v: set() for v in K.vertices()}
        for s in K:
            if s.dimension == 1:
                u, v = s.vertices
                upper[u].add(v)

        found: List[Tuple[Any, ...]] = []

        def _add_cofaces(tau: Tuple[Any, ...], candidates: Set[Any]) -> None:
            found.append(tau)
            if len(tau) > dimension:
                return
            for v in sorted(candidates):
                _add_cofaces(tau + (v,), candidates & upper[v])

        for u in sorted(upper):
            _add_cofaces((u,), upper[u])

        L = K.copy()
        new = [Simplex(tau) for tau in found if Simplex(tau) not in L]
        for s in sorted(new, key=dimension_key):
            L.push_back(s)
        return L

    def assign_maximum_weight(self, K: SimplicialComplex) -> SimplicialComplex:
        """Set the data of every simplex above dimension 1 to its largest edge weight."""
        for s in K:
            if s.dimension < 2:
                continue
            s.data = max(K[K.index(Simplex(edge))].data for edge in combinations(s.vertices, 2))
        return K


def point_cloud_distances(points: Any, metric: str = "euclidean") -> NDArray[np.float64]:
    """Square distance matrix of a point cloud (rows are points)."""
    X = np.asarray(points, dtype=np.float64)
    if X.ndim == 1:
        X = X[:, None]
    return squareform(pdist(X, metric=metric))


def from_simplex_tree(st: Any) -> SimplicialComplex:
    """Convert a GUDHI SimplexTree into a data-sorted complex."""
    K = SimplicialComplex(Simplex(tuple(simplex), float(value)) for simplex, value in st.get_filtration())
    return K.sort(key=data_key())


def _native_rips(D: NDArray[np.float64], max_edge_length: float, max_dimension: int) -> SimplicialComplex:
    n = D.shape[0]
    K = SimplicialComplex(Simplex(i, 0.0) for i in range(n))
    for i in range(n):
        for j in range(i + 1, n):
            if D[i, j] <= max_edge_length:
                K.push_back(Simplex((i, j), float(D[i, j])))
    expander = RipsExpander()
    K = expander.assign_maximum_weight(expander(K, max_dimension))
    return K.sort(key=data_key())


def build_vietoris_rips_complex(
    distance_matrix: Any,
    max_edge_length: float,
    max_dimension: int = 1,
    backend: str = "native",
) -> SimplicialComplex:
    """Vietoris–Rips filtration of a distance matrix.

    Parameters
    ----------
    distance_matrix:
        Symmetric (n, n) matrix.
    max_edge_length:
        Edges longer than this are left out.
    max_dimension:
        Highest simplex dimension.
    backend:
        "native" or "gudhi". Without gudhi installed the native backend is used.

    Returns
    -------
    A complex sorted by filtration value (ties: lower dimension first).
    """
    D = np.asarray(distance_matrix, dtype=np.float64)
    if D.ndim != 2 or D.shape[0] != D.shape[1]:
        raise ValueError(f"Expected a square distance matrix, got shape {D.shape}")

    backend = resolve_option("rips_backend", backend)
    if backend == "gudhi":
        gudhi = _try_import_gudhi()
        if gudhi is not None:
            rips = gudhi.RipsComplex(distance_matrix=D, max_edge_length=max_edge_length)
            st = rips.create_simplex_tree(max_dimension=max_dimension)
            return from_simplex_tree(st)
        warnings.warn("[simplicial_ph] gudhi not available; falling back to the native Rips backend", RuntimeWarning)

    return _native_rips(D, float(max_edge_length), int(max_dimension))
