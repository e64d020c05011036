"""simplicial_ph.representations

Sparse GF(2) column storage for boundary matrices.

Two interchangeable strategies share one small operation set
(set_column / column / max_index / min_index / add_column / clear_column /
is_empty / num_columns / copy):

- SetColumns: one python `set` per column. Deduplicated by construction;
  column addition is an in-place symmetric difference.
- VectorColumns: one sorted (ascending) list per column. The pivot is the last
  element, and additions are a two-pointer merge that keeps the order.

The matrix and the reduction algorithms only talk to this interface, so either
strategy can be selected by name via `make_representation`.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Set, Type, Union


class SetColumns:
    name = "set"

    def __init__(self, num_columns: int = 0) -> None:
        self._columns: List[Set[int]] = [set() for _ in range(num_columns)]

    @property
    def num_columns(self) -> int:
        return len(self._columns)

    def set_column(self, j: int, rows: Iterable[int]) -> None:
        self._columns[j] = {int(r) for r in rows}

    def column(self, j: int) -> List[int]:
        return sorted(self._columns[j])

    def max_index(self, j: int) -> Optional[int]:
        col = self._columns[j]
        return max(col) if col else None

    def min_index(self, j: int) -> Optional[int]:
        col = self._columns[j]
        return min(col) if col else None

    def add_column(self, target: int, source: int) -> None:
        """target <- target XOR source."""
        self._columns[target] ^= self._columns[source]

    def clear_column(self, j: int) -> None:
        self._columns[j] = set()

    def is_empty(self, j: int) -> bool:
        return not self._columns[j]

    def copy(self) -> "SetColumns":
        other = SetColumns()
        other._columns = [set(c) for c in self._columns]
        return other


def _symmetric_difference_sorted(a: List[int], b: List[int]) -> List[int]:
    out: List[int] = []
    i = j = 0
    na, nb = len(a), len(b)
    while i < na and j < nb:
        x, y = a[i], b[j]
        if x < y:
            out.append(x)
            i += 1
        elif y < x:
            out.append(y)
            j += 1
        else:
            i += 1
            j += 1
    if i < na:
        out.extend(a[i:])
    if j < nb:
        out.extend(b[j:])
    return out


class VectorColumns:
    name = "vector"

    def __init__(self, num_columns: int = 0) -> None:
        self._columns: List[List[int]] = [[] for _ in range(num_columns)]

    @property
    def num_columns(self) -> int:
        return len(self._columns)

    def set_column(self, j: int, rows: Iterable[int]) -> None:
        # duplicates cancel over GF(2)
        col: List[int] = []
        for r in sorted(int(r) for r in rows):
            if col and col[-1] == r:
                col.pop()
            else:
                col.append(r)
        self._columns[j] = col

    def column(self, j: int) -> List[int]:
        return list(self._columns[j])

    def max_index(self, j: int) -> Optional[int]:
        col = self._columns[j]
        return col[-1] if col else None

    def min_index(self, j: int) -> Optional[int]:
        col = self._columns[j]
        return col[0] if col else None

    def add_column(self, target: int, source: int) -> None:
        self._columns[target] = _symmetric_difference_sorted(self._columns[target], self._columns[source])

    def clear_column(self, j: int) -> None:
        self._columns[j] = []

    def is_empty(self, j: int) -> bool:
        return not self._columns[j]

    def copy(self) -> "VectorColumns":
        other = VectorColumns()
        other._columns = [list(c) for c in self._columns]
        return other


Representation = Union[SetColumns, VectorColumns]

REPRESENTATIONS: Dict[str, Type] = {
    SetColumns.name: SetColumns,
    VectorColumns.name: VectorColumns,
}


def make_representation(name: str, num_columns: int = 0) -> Representation:
    """Create empty column storage; `name` is "set" or "vector"."""
    try:
        cls = REPRESENTATIONS[name]
    except KeyError:
        raise ValueError(f"Unknown representation: {name}") from None
    return cls(num_columns)
