"""simplicial_ph

Persistent homology of filtered simplicial complexes.

The public API:

- Simplex, SimplicialComplex, filtration keys (data_key, lower_star, ...)
- BoundaryMatrix, make_boundary_matrix, dualize
- standard_reduction, twist_reduction, calculate_persistence_pairing
- PersistenceDiagram, calculate_persistence_diagrams
- p_norm, total_persistence, infinity_norm
- hausdorff_distance, bottleneck_distance, wasserstein_distance
- cone, suspension, RipsExpander, build_vietoris_rips_complex
- Perversity, calculate_intersection_homology
- analyse_complexes, default_config
- text / JSON I/O helpers
"""

from .config import default_config, resolve_config, resolve_option
from .errors import ConfigurationError, DimensionMismatchError, StructuralError
from .simplex import Simplex
from .complex import SimplicialComplex
from .filtrations import (
    absolute_data_key,
    assign_vertex_weights,
    data_key,
    dimension_key,
    lower_star,
    semi_filtration,
    upper_star,
)
from .boundary import BoundaryMatrix, dualize, make_boundary_matrix
from .reduction import get_reduction_algorithm, standard_reduction, twist_reduction
from .pairing import PersistencePairing, calculate_persistence_pairing
from .diagrams import (
    PersistenceDiagram,
    calculate_persistence_diagram,
    calculate_persistence_diagrams,
    make_persistence_diagrams,
    merge,
)
from .norms import infinity_norm, p_norm, total_persistence
from .distances import bottleneck_distance, diagram_distance_matrix, hausdorff_distance, wasserstein_distance
from .quotients import cone, suspension
from .rips import RipsExpander, build_vietoris_rips_complex, from_simplex_tree, point_cloud_distances
from .intersection import Perversity, calculate_intersection_homology, is_admissible, partition
from .analysis import analyse_complexes, print_analysis_summary
from .io import (
    diagram_to_json,
    load_boundary_matrix,
    load_diagrams,
    load_function,
    load_simplicial_complex,
    save_boundary_matrix,
    save_diagram,
    write_diagrams,
)

__all__ = [
    "default_config",
    "resolve_config",
    "resolve_option",
    "ConfigurationError",
    "DimensionMismatchError",
    "StructuralError",
    "Simplex",
    "SimplicialComplex",
    "absolute_data_key",
    "assign_vertex_weights",
    "data_key",
    "dimension_key",
    "lower_star",
    "semi_filtration",
    "upper_star",
    "BoundaryMatrix",
    "dualize",
    "make_boundary_matrix",
    "get_reduction_algorithm",
    "standard_reduction",
    "twist_reduction",
    "PersistencePairing",
    "calculate_persistence_pairing",
    "PersistenceDiagram",
    "calculate_persistence_diagram",
    "calculate_persistence_diagrams",
    "make_persistence_diagrams",
    "merge",
    "infinity_norm",
    "p_norm",
    "total_persistence",
    "bottleneck_distance",
    "diagram_distance_matrix",
    "hausdorff_distance",
    "wasserstein_distance",
    "cone",
    "suspension",
    "RipsExpander",
    "build_vietoris_rips_complex",
    "from_simplex_tree",
    "point_cloud_distances",
    "Perversity",
    "calculate_intersection_homology",
    "is_admissible",
    "partition",
    "analyse_complexes",
    "print_analysis_summary",
    "diagram_to_json",
    "load_boundary_matrix",
    "load_diagrams",
    "load_function",
    "load_simplicial_complex",
    "save_boundary_matrix",
    "save_diagram",
    "write_diagrams",
]
