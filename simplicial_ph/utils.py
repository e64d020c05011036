"""simplicial_ph.utils

Small utilities used throughout the codebase.
"""

from __future__ import annotations

from typing import Any, Tuple

import math

import numpy as np

from .complex import SimplicialComplex


def weight_range(K: SimplicialComplex) -> Tuple[float, float]:
    """(min, max) of the data values of K; (0, 0) for an empty complex."""
    values = [float(s.data) for s in K]
    if not values:
        return (0.0, 0.0)
    return (min(values), max(values))


def format_value(x: float, infinity_token: str = "inf") -> str:
    if math.isinf(x):
        return infinity_token if x > 0 else f"-{infinity_token}"
    return repr(float(x))


def to_jsonable(obj: Any, infinity_token: str = "inf") -> Any:
    """Recursively convert numpy types into JSON-friendly python types.

    Non-finite floats become strings so the output stays strict JSON.
    """
    if isinstance(obj, bool) or obj is None or isinstance(obj, (str, int)):
        return obj
    if isinstance(obj, (float, np.floating)):
        x = float(obj)
        if math.isnan(x):
            return "nan"
        if math.isinf(x):
            return format_value(x, infinity_token)
        return x
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, dict):
        return {str(k): to_jsonable(v, infinity_token) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(v, infinity_token) for v in obj]
    if isinstance(obj, np.ndarray):
        return to_jsonable(obj.tolist(), infinity_token)
    # fall back to string
    return str(obj)
