"""Pretty-print helpers for CLI output.

Keeps presentation logic out of the core algorithms so it stays easy to
extend. Everything here writes to stdout.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Sequence

import math

from .diagrams import PersistenceDiagram
from .utils import format_value


def print_diagram(D: PersistenceDiagram, infinity_token: str = "inf") -> None:
    """Print "birth death" lines, the plain-text diagram format."""
    for x, y in D:
        print(f"{format_value(x, infinity_token)} {format_value(y, infinity_token)}")


def print_diagrams(diagrams: Iterable[PersistenceDiagram], infinity_token: str = "inf") -> None:
    """Print several diagrams, separated by blank lines."""
    for i, D in enumerate(diagrams):
        if i:
            print()
        print(f"# dimension {D.dimension}")
        print_diagram(D, infinity_token)


def print_norms(rows: Iterable[Mapping[str, Any]]) -> None:
    """One "index<TAB>p-norm" line per analysed complex."""
    for r in rows:
        print(f"{r.get('index')}\t{r.get('norm')}")


def print_distance_matrix(
    matrix: Sequence[Sequence[float]],
    labels: Optional[Sequence[str]] = None,
    precision: int = 4,
) -> None:
    """Print a square distance matrix with optional row labels."""
    rows = [list(r) for r in matrix]
    if not rows:
        print("(empty matrix)")
        return

    width = precision + 6

    def _cell(x: float) -> str:
        if math.isinf(x):
            return f"{'inf':>{width}}"
        return f"{x:>{width}.{precision}f}"

    label_width = max((len(str(l)) for l in labels), default=0) if labels else 0
    for i, r in enumerate(rows):
        prefix = f"{str(labels[i]):<{label_width}}  " if labels else ""
        print(prefix + " ".join(_cell(float(x)) for x in r))
