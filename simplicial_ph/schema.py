"""simplicial_ph.schema

Lightweight data-model definitions for serialised results.

Core objects (Simplex, SimplicialComplex, PersistenceDiagram) are classes; what
leaves the library (JSON files, analysis summaries) is plain TypedDicts so that
results are JSON-serialisable with minimal fuss.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, TypedDict, Union


Number = Union[float, str]  # "inf" once serialised


class Bar(TypedDict):
    birth: Number
    death: Number


class DiagramRecord(TypedDict):
    dimension: int
    betti: int
    num_points: int
    points: List[Bar]


class ComplexSummary(TypedDict, total=False):
    index: int
    name: str
    size: int
    dimension: int
    weight_min: float
    weight_max: float
    diagram: DiagramRecord
    norm: float
    infinity_norm: float


class AnalysisResult(TypedDict, total=False):
    config: Dict[str, Any]
    provenance: Dict[str, Any]
    diagram_dimension: int
    complexes: List[ComplexSummary]
    trajectory_distances: Optional[List[List[float]]]
