"""simplicial_ph.errors

Exception taxonomy.

- StructuralError: the input complex cannot yield a meaningful boundary matrix
  (a face is missing or comes after one of its cofaces), or a lookup refers to
  a simplex that is not part of the complex. Never recovered.
- ConfigurationError: an unknown mode string. `config.resolve_option` catches it
  and falls back to the documented default with a warning.
- DimensionMismatchError: two diagrams of different homological dimension were
  merged or compared.
"""

from __future__ import annotations


class StructuralError(ValueError):
    """Malformed complex or boundary matrix."""


class ConfigurationError(ValueError):
    """Invalid filtration / mode / algorithm name."""


class DimensionMismatchError(ValueError):
    """Diagrams of different dimension cannot be merged or compared."""
