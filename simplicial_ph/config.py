"""simplicial_ph.config

Centralised configuration + reproducibility helpers.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple

import random
import warnings

import numpy as np

from .errors import ConfigurationError


# Allowed values for every mode-like key; the first entry is not necessarily
# the default, see default_config().
OPTION_CHOICES: Dict[str, Tuple[str, ...]] = {
    "reduction_algorithm": ("standard", "twist"),
    "representation": ("set", "vector"),
    "filtration": ("standard", "double", "absolute"),
    "minimum": ("global", "local", "local_abs"),
    "distance": ("hausdorff", "bottleneck", "wasserstein"),
    "rips_backend": ("native", "gudhi"),
}


def default_config() -> Dict[str, Any]:
    """Return a *copy* of the default configuration.

    You can override any key in the returned dict.
    """
    return {
        # --- reduction engine ---
        "reduction_algorithm": "twist",  # "twist" | "standard"
        "representation": "vector",      # "vector" | "set"
        "dualize": True,                 # reduce the coboundary matrix
        "include_all_unpaired_creators": False,

        # --- filtration ---
        "filtration": "standard",        # "standard" | "double" | "absolute"
        "minimum": "global",             # weight given to vertices: "global" | "local" | "local_abs"
        "reverse": False,                # descending weights (superlevel sets)
        "normalize": False,              # rescale diagrams to [0,1] by the complex's weight range

        # --- diagram cleaning ---
        "remove_diagonal": True,
        "remove_unpaired": True,
        "diagram_dimension": None,       # None: highest dimension with finite points

        # --- norms / distances ---
        "p": 2.0,
        "distance": "hausdorff",         # "hausdorff" | "bottleneck" | "wasserstein"

        # --- rips ---
        "rips_backend": "native",        # "native" | "gudhi"

        # --- output ---
        "infinity_token": "inf",

        # --- reproducibility ---
        "random_seed": 0,
    }


def _check_option(name: str, value: Any) -> str:
    choices = OPTION_CHOICES.get(name)
    if choices is None:
        raise ConfigurationError(f"Unknown option: {name}")
    if value not in choices:
        raise ConfigurationError(f"Invalid value {value!r} for {name}; expected one of {', '.join(choices)}")
    return value


def resolve_option(name: str, value: Any) -> str:
    """Validate a mode string; invalid values fall back to the default.

    The fallback is announced with a RuntimeWarning and is never fatal.
    """
    try:
        return _check_option(name, value)
    except ConfigurationError as e:
        if name not in OPTION_CHOICES:
            raise
        fallback = default_config()[name]
        warnings.warn(f"[simplicial_ph] {e}; falling back to {fallback!r}", RuntimeWarning)
        return fallback


def resolve_config(overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Merge overrides into the defaults and resolve every mode key."""
    cfg = default_config()
    if overrides:
        cfg.update(overrides)
    for name in OPTION_CHOICES:
        cfg[name] = resolve_option(name, cfg[name])
    if float(cfg["p"]) <= 0:
        raise ValueError(f"p must be positive, got {cfg['p']}")
    return cfg


def set_global_seeds(seed: int) -> None:
    """Best-effort reproducibility across numpy / python."""
    random.seed(seed)
    np.random.seed(seed)


def get_library_versions() -> Dict[str, str]:
    """Collect versions of key libraries for provenance."""
    versions: Dict[str, str] = {}

    def _add(pkg: str) -> None:
        try:
            import importlib.metadata as md
            versions[pkg] = md.version(pkg)
        except Exception:
            pass

    for pkg in ["numpy", "scipy", "gudhi"]:
        _add(pkg)
    return versions
