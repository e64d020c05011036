"""simplicial_ph.analysis

High-level entry point for batch analysis of weighted complexes
(e.g. a time series of weighted graphs):

- analyse_complexes: one persistence diagram per complex, its norms, and
  optionally the trajectory distance matrix between all diagrams
- print_analysis_summary: human-readable overview

Filtration modes
----------------
- "standard": sort by weight (ascending, or descending with `reverse`)
- "absolute": sort by |weight|, negative before positive on ties
- "double": the negative and the positive part of the weights are filtered
  separately, both growing away from zero, and their diagrams are merged
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from .complex import SimplicialComplex
from .config import get_library_versions, resolve_config, set_global_seeds
from .diagrams import PersistenceDiagram, calculate_persistence_diagrams, merge
from .distances import diagram_distance_matrix
from .filtrations import absolute_data_key, assign_vertex_weights, data_key, semi_filtration
from .io import diagram_record
from .norms import infinity_norm, p_norm
from .schema import AnalysisResult, ComplexSummary
from .utils import to_jsonable, weight_range


def _diagrams(K: SimplicialComplex, cfg: Dict[str, Any]) -> List[PersistenceDiagram]:
    return calculate_persistence_diagrams(
        K,
        dualize=bool(cfg["dualize"]),
        include_all_unpaired_creators=bool(cfg["include_all_unpaired_creators"]),
        algorithm=cfg["reduction_algorithm"],
        representation=cfg["representation"],
    )


def _filtered_diagrams(K: SimplicialComplex, cfg: Dict[str, Any], verbose: bool = False) -> List[PersistenceDiagram]:
    mode = cfg["filtration"]
    reverse = bool(cfg["reverse"])

    if mode == "absolute":
        L = K.copy().sort(key=absolute_data_key(descending=reverse))
        if verbose:
            print(f"[simplicial_ph] absolute value complex:\n{L}")
        return _diagrams(L, cfg)

    if mode == "double":
        L = semi_filtration(K).sort(key=data_key(descending=True))
        U = semi_filtration(K, upper=True).sort(key=data_key())
        if verbose:
            print(f"[simplicial_ph] lower complex:\n{L}\n[simplicial_ph] upper complex:\n{U}")
        lower, upper = _diagrams(L, cfg), _diagrams(U, cfg)
        # either half may lack the higher dimensions of the other
        return [
            merge(
                lower[d] if d < len(lower) else PersistenceDiagram(d),
                upper[d] if d < len(upper) else PersistenceDiagram(d),
            )
            for d in range(max(len(lower), len(upper)))
        ]

    L = K.copy().sort(key=data_key(descending=reverse))
    if verbose:
        print(f"[simplicial_ph] default complex:\n{L}")
    return _diagrams(L, cfg)


def _clean(D: PersistenceDiagram, cfg: Dict[str, Any]) -> PersistenceDiagram:
    if cfg["remove_diagonal"]:
        D.remove_diagonal()
    if cfg["remove_unpaired"]:
        D.remove_unpaired()
    return D


def analyse_complexes(
    complexes: Sequence[SimplicialComplex],
    *,
    config: Optional[Dict[str, Any]] = None,
    names: Optional[Sequence[str]] = None,
    trajectories: bool = False,
    verbose: bool = False,
) -> Dict[str, Any]:
    """Analyse a sequence of weighted complexes.

    Parameters
    ----------
    complexes:
        Weighted complexes, typically graphs (vertices + edges). They are not
        modified.
    config:
        Overrides for `default_config()`. Invalid mode strings fall back to
        their defaults with a RuntimeWarning.
    names:
        Optional labels stored in the output (e.g. file names).
    trajectories:
        Also compute the pairwise distance matrix between the diagrams.
    verbose:
        Print basic progress.

    Returns
    -------
    dict with keys:
        config, provenance, diagram_dimension, complexes, diagrams,
        trajectory_distances (None unless requested)

    Notes
    -----
    Every complex contributes the diagram of one common dimension so that
    diagrams stay comparable: `config["diagram_dimension"]` if set, otherwise
    the highest dimension in which any complex has a point after cleaning.
    """
    cfg = resolve_config(config)
    set_global_seeds(int(cfg.get("random_seed", 0)))

    weighted: List[SimplicialComplex] = []
    ranges = []
    per_complex: List[List[PersistenceDiagram]] = []
    for i, K in enumerate(complexes):
        L = assign_vertex_weights(K.copy(), cfg["minimum"], reverse=bool(cfg["reverse"]))
        if verbose:
            label = names[i] if names else i
            print(f"[simplicial_ph] complex {label}: {len(L)} simplices, dimension {L.dimension}")
        weighted.append(L)
        ranges.append(weight_range(L))
        per_complex.append([_clean(D, cfg) for D in _filtered_diagrams(L, cfg, verbose=verbose)])

    target = cfg.get("diagram_dimension")
    if target is None:
        target = max((D.dimension for ds in per_complex for D in ds if not D.empty()), default=0)
    target = int(target)

    selected: List[PersistenceDiagram] = []
    for (lo, hi), ds in zip(ranges, per_complex):
        D = ds[target] if target < len(ds) else PersistenceDiagram(target)
        if cfg["normalize"]:
            D.normalize(lo, hi)
        selected.append(D)

    p = float(cfg["p"])
    summaries: List[ComplexSummary] = []
    for i, (L, (lo, hi), D) in enumerate(zip(weighted, ranges, selected)):
        summary: ComplexSummary = {
            "index": i,
            "size": len(L),
            "dimension": L.dimension,
            "weight_min": lo,
            "weight_max": hi,
            "diagram": diagram_record(D, cfg["infinity_token"]),
            "norm": p_norm(D, p),
            "infinity_norm": infinity_norm(D),
        }
        if names:
            summary["name"] = str(names[i])
        summaries.append(summary)

    distances = None
    if trajectories:
        if verbose:
            print(f"[simplicial_ph] computing {cfg['distance']} distances between {len(selected)} diagrams")
        distances = diagram_distance_matrix(selected, metric=cfg["distance"])

    result: AnalysisResult = {
        "config": cfg,
        "provenance": {"library_versions": get_library_versions()},
        "diagram_dimension": target,
        "complexes": summaries,
        "trajectory_distances": None if distances is None else distances.tolist(),
    }
    # live diagram objects ride along for callers; analysis_to_jsonable drops them
    out: Dict[str, Any] = dict(result)
    out["diagrams"] = selected

    if verbose:
        print_analysis_summary(out)
    return out


def analysis_to_jsonable(result: Dict[str, Any]) -> Dict[str, Any]:
    """Drop the live diagram objects and convert the rest for json.dumps."""
    return to_jsonable({k: v for k, v in result.items() if k != "diagrams"}, result["config"]["infinity_token"])


def print_analysis_summary(result: Dict[str, Any]) -> None:
    """Pretty-print a lightweight summary."""
    rows = list(result.get("complexes", []))
    cfg = result.get("config", {})
    print(f"Analysis of {len(rows)} complexes")
    print(f"  filtration: {cfg.get('filtration')}  (reverse={cfg.get('reverse')}, normalize={cfg.get('normalize')})")
    print(f"  dimension:  {result.get('diagram_dimension')}")
    print(f"  {'#':>4}  {'size':>6}  {'points':>6}  {'p-norm':>10}  {'inf-norm':>10}")
    for r in rows:
        diagram = r.get("diagram", {})
        print(
            f"  {r.get('index'):>4}  {r.get('size'):>6}  {diagram.get('num_points', 0):>6}  "
            f"{r.get('norm', 0.0):>10.4f}  {r.get('infinity_norm', 0.0):>10.4f}"
        )
