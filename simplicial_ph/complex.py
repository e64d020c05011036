"""simplicial_ph.complex

An ordered collection of unique simplices.

The order of the backing list *is* the filtration: column i of a boundary
matrix built from a complex corresponds to its i-th simplex. Faces are never
stored as references; they are recomputed from vertex sets and located through
an index map (simplex -> position) that is rebuilt lazily whenever the order or
the contents change.

Duplicate policy: last wins. Adding a simplex whose vertex set is already
present replaces the stored element in place (its position is kept, its data
is overwritten).
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from .errors import StructuralError
from .simplex import Simplex


SimplexLike = Union[Simplex, Iterable[Any], Any]


def _as_simplex(s: SimplexLike) -> Simplex:
    return s if isinstance(s, Simplex) else Simplex(s)


def dimension_key(s: Simplex) -> Tuple[int, Tuple[Any, ...]]:
    """Default order: dimension first, then lexicographic on vertices."""
    return (s.dimension, s.vertices)


class SimplicialComplex:
    """Ordered sequence of unique simplices with O(1) index lookup."""

    def __init__(self, simplices: Iterable[SimplexLike] = ()) -> None:
        self._simplices: List[Simplex] = []
        self._index: Optional[Dict[Simplex, int]] = {}
        self._spans: Optional[Dict[int, Tuple[int, int, int]]] = None
        for s in simplices:
            self.push_back(s)

    # -- index map --------------------------------------------------------

    def _invalidate(self) -> None:
        self._index = None
        self._spans = None

    def _index_map(self) -> Dict[Simplex, int]:
        if self._index is None:
            self._index = {s: i for i, s in enumerate(self._simplices)}
        return self._index

    def _span_map(self) -> Dict[int, Tuple[int, int, int]]:
        # dimension -> (first position, last position + 1, count)
        if self._spans is None:
            spans: Dict[int, Tuple[int, int, int]] = {}
            for i, s in enumerate(self._simplices):
                start, _, count = spans.get(s.dimension, (i, i, 0))
                spans[s.dimension] = (start, i + 1, count + 1)
            self._spans = spans
        return self._spans

    # -- insertion / removal ----------------------------------------------

    def push_back(self, simplex: SimplexLike) -> int:
        """Append a simplex, or replace the existing one with the same vertices.

        Returns the position of the simplex.
        """
        s = _as_simplex(simplex)
        index = self._index_map()
        pos = index.get(s)
        if pos is not None:
            self._simplices[pos] = s
            return pos
        self._simplices.append(s)
        index[s] = len(self._simplices) - 1
        self._spans = None
        return len(self._simplices) - 1

    insert = push_back

    def replace(self, position: int, simplex: SimplexLike) -> None:
        """Overwrite the simplex at `position` (typically a re-weighted copy)."""
        s = _as_simplex(simplex)
        old = self.at(position)
        if s != old and s in self._index_map():
            raise StructuralError(f"{s!r} is already part of the complex")
        self._simplices[position] = s
        if s != old:
            self._invalidate()

    def remove_without_validation(self, simplex: SimplexLike) -> None:
        """Remove a simplex without checking that its cofaces are gone.

        Only safe when the caller guarantees the result is still a complex
        (e.g. elementary collapses). Positions of later simplices shift.
        """
        pos = self.index(simplex)
        del self._simplices[pos]
        self._invalidate()

    # -- ordering ---------------------------------------------------------

    def sort(self, key: Optional[Callable[[Simplex], Any]] = None, reverse: bool = False) -> "SimplicialComplex":
        """Sort in place. Default order is dimension, then lexicographic.

        Filtration keys live in `simplicial_ph.filtrations`. A key must place
        every face before its cofaces for the result to be a valid filtration.
        """
        self._simplices.sort(key=key or dimension_key, reverse=reverse)
        self._invalidate()
        return self

    def range(self, dimension: int) -> Tuple[int, int]:
        """Return `(start, stop)` of the contiguous block of a given dimension.

        Requires simplices of that dimension to be contiguous, which holds for
        any dimension-major order. `(0, 0)` when the dimension is absent.
        """
        span = self._span_map().get(dimension)
        if span is None:
            return (0, 0)
        start, stop, count = span
        if stop - start != count:
            raise StructuralError(f"Simplices of dimension {dimension} are not contiguous; sort the complex first")
        return (start, stop)

    def simplices_of_dimension(self, dimension: int) -> List[Simplex]:
        start, stop = self.range(dimension)
        return self._simplices[start:stop]

    # -- lookup -----------------------------------------------------------

    def index(self, simplex: SimplexLike) -> int:
        s = _as_simplex(simplex)
        try:
            return self._index_map()[s]
        except KeyError:
            raise StructuralError(f"{s!r} is not part of the complex") from None

    def at(self, position: int) -> Simplex:
        if not 0 <= position < len(self._simplices):
            raise StructuralError(f"Index {position} out of range for complex of size {len(self._simplices)}")
        return self._simplices[position]

    def vertices(self) -> List[Any]:
        """Sorted list of the distinct vertex ids of the complex."""
        verts = set()
        for s in self._simplices:
            verts.update(s.vertices)
        return sorted(verts)

    @property
    def dimension(self) -> int:
        return max((s.dimension for s in self._simplices), default=-1)

    def empty(self) -> bool:
        return not self._simplices

    def is_face_ordered(self) -> bool:
        """True if every boundary face is present and precedes its coface."""
        index = self._index_map()
        for i, s in enumerate(self._simplices):
            for face in s.boundary():
                j = index.get(face)
                if j is None or j >= i:
                    return False
        return True

    def copy(self) -> "SimplicialComplex":
        return SimplicialComplex(s.copy() for s in self._simplices)

    # -- container protocol -----------------------------------------------

    def __len__(self) -> int:
        return len(self._simplices)

    def __iter__(self) -> Iterator[Simplex]:
        return iter(self._simplices)

    def __getitem__(self, position: int) -> Simplex:
        return self._simplices[position]

    def __contains__(self, simplex: object) -> bool:
        try:
            s = _as_simplex(simplex)
        except (TypeError, ValueError):
            return False
        return s in self._index_map()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SimplicialComplex):
            return NotImplemented
        return self._simplices == other._simplices

    def __repr__(self) -> str:
        return f"SimplicialComplex(size={len(self)}, dimension={self.dimension})"

    def __str__(self) -> str:
        return "\n".join(f"{s.vertices} [{s.data}]" for s in self._simplices)
