"""simplicial_ph.simplex

A simplex is a set of vertex ids plus a scalar `data` value (the filtration
weight).

Topology and weight are deliberately separate:

- the vertex set is fixed at construction, stored sorted and deduplicated, and
  is the *only* thing equality and hashing look at;
- `data` is mutable, so lower-star / upper-star filtrations can re-weight a
  complex in place.

Two simplices with the same vertices but different weights are therefore the
same entity; `SimplicialComplex` treats a second insertion as a replacement.
"""

from __future__ import annotations

from functools import total_ordering
from typing import Any, Hashable, Iterable, Iterator, Tuple, Union

Vertex = Hashable


@total_ordering
class Simplex:
    """An ordered vertex tuple with an attached filtration value.

    Parameters
    ----------
    vertices:
        Iterable of vertex ids, or a single id for a 0-simplex. The ids must be
        mutually orderable; they are sorted and deduplicated.
    data:
        Filtration value (defaults to 0.0).
    """

    __slots__ = ("_vertices", "data")

    def __init__(self, vertices: Union[Vertex, Iterable[Vertex]], data: float = 0.0) -> None:
        if isinstance(vertices, (str, bytes)) or not isinstance(vertices, Iterable):
            vertices = (vertices,)
        verts = tuple(sorted(set(vertices)))
        if not verts:
            raise ValueError("A simplex needs at least one vertex")
        self._vertices: Tuple[Any, ...] = verts
        self.data = data

    # -- topology ---------------------------------------------------------

    @property
    def vertices(self) -> Tuple[Any, ...]:
        return self._vertices

    @property
    def dimension(self) -> int:
        return len(self._vertices) - 1

    def __len__(self) -> int:
        return len(self._vertices)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._vertices)

    def __contains__(self, vertex: object) -> bool:
        return vertex in self._vertices

    def is_face_of(self, other: "Simplex") -> bool:
        return set(self._vertices).issubset(other._vertices)

    def boundary(self) -> Iterator["Simplex"]:
        """Yield the codimension-1 faces.

        Face k omits the k-th vertex, k = 0..dim. Faces inherit `data`.
        A vertex has no boundary. Each call returns a fresh generator.
        """
        if len(self._vertices) <= 1:
            return
        for k in range(len(self._vertices)):
            yield Simplex(self._vertices[:k] + self._vertices[k + 1:], self.data)

    # -- copies -----------------------------------------------------------

    def copy(self) -> "Simplex":
        return Simplex(self._vertices, self.data)

    def with_data(self, data: float) -> "Simplex":
        return Simplex(self._vertices, data)

    # -- identity ---------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Simplex):
            return NotImplemented
        return self._vertices == other._vertices

    def __lt__(self, other: "Simplex") -> bool:
        if not isinstance(other, Simplex):
            return NotImplemented
        return self._vertices < other._vertices

    def __hash__(self) -> int:
        return hash(self._vertices)

    def __repr__(self) -> str:
        verts = ", ".join(str(v) for v in self._vertices)
        return f"Simplex({{{verts}}}, data={self.data})"
