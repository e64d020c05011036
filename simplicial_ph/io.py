"""simplicial_ph.io

Plain-text and JSON (de)serialisation.

Text formats
------------
- Diagrams: one "birth death" pair per line; infinite deaths are written as a
  sentinel token ("inf" by default). Several diagrams go into one file as
  blocks headed by "# dimension d" and separated by a blank line.
- Boundary matrices: one column per line, whitespace-separated row indices;
  an empty line is an empty column. Lines starting with "#" are comments.
- Functions: whitespace-separated values of a 1-D function, read as a path
  graph.
- Simplicial complexes: one simplex per line, its vertex ids optionally
  followed by ": data".
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, List, Tuple, Union

import json
import math
import re

from .boundary import BoundaryMatrix, make_boundary_matrix
from .complex import SimplicialComplex
from .diagrams import PersistenceDiagram
from .filtrations import lower_star
from .schema import DiagramRecord
from .simplex import Simplex
from .utils import format_value, to_jsonable

PathLike = Union[str, Path]

_DIMENSION_HEADER = re.compile(r"^#\s*dimension\s+(-?\d+)\s*$", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Diagrams (text)
# ---------------------------------------------------------------------------

def format_diagram(D: PersistenceDiagram, infinity_token: str = "inf", header: bool = True) -> str:
    lines = [f"# dimension {D.dimension}"] if header else []
    lines.extend(f"{format_value(x, infinity_token)} {format_value(y, infinity_token)}" for x, y in D)
    return "\n".join(lines)


def write_diagrams(diagrams: Iterable[PersistenceDiagram], path: PathLike, infinity_token: str = "inf") -> Path:
    """Write diagrams to a text file, one block per dimension."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    text = "\n\n".join(format_diagram(D, infinity_token) for D in diagrams)
    path.write_text(text + "\n", encoding="utf-8")
    return path


def _parse_value(token: str, infinity_token: str) -> float:
    if token == infinity_token:
        return math.inf
    return float(token)


def parse_diagram(text: str, dimension: int = 0, infinity_token: str = "inf") -> PersistenceDiagram:
    """Parse "birth death" lines into a diagram; comments and blanks are skipped."""
    D = PersistenceDiagram(dimension)
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        tokens = line.split()
        if len(tokens) != 2:
            raise ValueError(f"Line {lineno}: expected 'birth death', got {raw!r}")
        D.add(_parse_value(tokens[0], infinity_token), _parse_value(tokens[1], infinity_token))
    return D


def load_diagrams(path: PathLike, infinity_token: str = "inf") -> List[PersistenceDiagram]:
    """Read a file written by `write_diagrams`.

    Blocks without a "# dimension d" header are numbered by position.
    """
    text = Path(path).read_text(encoding="utf-8")
    diagrams: List[PersistenceDiagram] = []
    for position, block in enumerate(b for b in re.split(r"\n\s*\n", text) if b.strip()):
        dimension = position
        for line in block.splitlines():
            m = _DIMENSION_HEADER.match(line.strip())
            if m:
                dimension = int(m.group(1))
                break
        diagrams.append(parse_diagram(block, dimension=dimension, infinity_token=infinity_token))
    return diagrams


# ---------------------------------------------------------------------------
# Diagrams (JSON)
# ---------------------------------------------------------------------------

def diagram_record(D: PersistenceDiagram, infinity_token: str = "inf") -> DiagramRecord:
    return {
        "dimension": D.dimension,
        "betti": D.betti(),
        "num_points": len(D),
        "points": [
            {"birth": to_jsonable(x, infinity_token), "death": to_jsonable(y, infinity_token)}
            for x, y in D
        ],
    }


def _as_record(obj: Any, infinity_token: str) -> Any:
    if isinstance(obj, PersistenceDiagram):
        return diagram_record(obj, infinity_token)
    if isinstance(obj, (list, tuple)):
        return [_as_record(o, infinity_token) for o in obj]
    if isinstance(obj, dict):
        return {k: _as_record(v, infinity_token) for k, v in obj.items()}
    return obj


def diagram_to_json(diagram: Any, indent: int = 2, infinity_token: str = "inf") -> str:
    """Convert a diagram (or a list / dict holding diagrams) to a JSON string."""
    return json.dumps(to_jsonable(_as_record(diagram, infinity_token), infinity_token), indent=indent, ensure_ascii=False)


def save_diagram(diagram: Any, path: PathLike, indent: int = 2, infinity_token: str = "inf") -> Path:
    """Save a diagram to JSON on disk."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(diagram_to_json(diagram, indent=indent, infinity_token=infinity_token), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Boundary matrices
# ---------------------------------------------------------------------------

def load_boundary_matrix(path: PathLike, representation: str = "vector") -> BoundaryMatrix:
    """Read a boundary matrix; column dimensions are derived from column sizes."""
    columns: List[List[int]] = []
    for lineno, raw in enumerate(Path(path).read_text(encoding="utf-8").splitlines(), start=1):
        line = raw.strip()
        if line.startswith("#"):
            continue
        try:
            columns.append([int(tok) for tok in line.split()])
        except ValueError:
            raise ValueError(f"Line {lineno}: row indices must be integers, got {raw!r}") from None
    return BoundaryMatrix(columns, representation=representation)


def save_boundary_matrix(M: BoundaryMatrix, path: PathLike) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = [" ".join(str(r) for r in M.column(j)) for j in range(M.num_columns)]
    path.write_text("\n".join(lines) + ("\n" if lines else ""), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Functions and complexes
# ---------------------------------------------------------------------------

def load_function(path: PathLike, representation: str = "vector") -> Tuple[BoundaryMatrix, List[float]]:
    """Read a 1-D function and return its path-graph boundary matrix and column values.

    Vertex i carries the i-th value, edge (i, i+1) the larger of its two
    endpoint values (lower-star filtration). Columns are sorted by value,
    vertices before edges on ties.
    """
    values: List[float] = []
    for raw in Path(path).read_text(encoding="utf-8").splitlines():
        line = raw.split("#", 1)[0]
        values.extend(float(tok) for tok in line.split())
    if not values:
        raise ValueError(f"No function values in {path}")

    K = SimplicialComplex(Simplex(i) for i in range(len(values)))
    for i in range(len(values) - 1):
        K.push_back(Simplex((i, i + 1)))
    lower_star(K, values)
    return make_boundary_matrix(K, representation=representation), [float(s.data) for s in K]


def _parse_vertex(token: str) -> Any:
    try:
        return int(token)
    except ValueError:
        return token


def load_simplicial_complex(path: PathLike) -> SimplicialComplex:
    """Read a simplex-list file, e.g. "0 1 2 : 0.5" or "0,1".

    The complex is returned in file order; sort it before computing anything.
    """
    K = SimplicialComplex()
    for lineno, raw in enumerate(Path(path).read_text(encoding="utf-8").splitlines(), start=1):
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        vertex_part, _, data_part = line.partition(":")
        tokens = vertex_part.replace(",", " ").split()
        if not tokens:
            raise ValueError(f"Line {lineno}: simplex without vertices: {raw!r}")
        data = 0.0
        if data_part.strip():
            try:
                data = float(data_part)
            except ValueError:
                raise ValueError(f"Line {lineno}: invalid data value {data_part.strip()!r}") from None
        K.push_back(Simplex([_parse_vertex(t) for t in tokens], data))
    return K
