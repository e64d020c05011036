from itertools import combinations

import numpy as np
import pytest

from simplicial_ph import (
    BoundaryMatrix,
    SimplicialComplex,
    StructuralError,
    calculate_persistence_pairing,
    dualize,
    get_reduction_algorithm,
    lower_star,
    make_boundary_matrix,
    standard_reduction,
    twist_reduction,
)
from simplicial_ph.representations import SetColumns, VectorColumns, make_representation


def _make_triangle():
    return SimplicialComplex([[0], [1], [2], [0, 1], [0, 2], [1, 2]])


def _make_filtered_tetrahedron(seed=0):
    """Full 3-simplex with a random lower-star filtration."""
    simplices = [c for k in range(1, 5) for c in combinations(range(4), k)]
    K = SimplicialComplex(simplices)
    values = np.random.default_rng(seed).random(4)
    return lower_star(K, list(values))


def _make_random_graph_complex(n=8, p=0.5, seed=0):
    """Clique-free random graph plus a few triangles, lower-star filtered."""
    rng = np.random.default_rng(seed)
    edges = [(i, j) for i in range(n) for j in range(i + 1, n) if rng.random() < p]
    edge_set = set(edges)
    triangles = [t for t in combinations(range(n), 3) if all(e in edge_set for e in combinations(t, 2))]
    K = SimplicialComplex([[v] for v in range(n)] + edges + triangles[:3])
    return lower_star(K, list(rng.random(n)))


# ---------------------------------------------------------------------------
# column representations
# ---------------------------------------------------------------------------

def test_vector_columns_cancel_duplicates_and_stay_sorted():
    cols = VectorColumns(2)
    cols.set_column(0, [3, 1, 1, 2])
    assert cols.column(0) == [2, 3]
    cols.set_column(1, [2, 5])
    cols.add_column(0, 1)
    assert cols.column(0) == [3, 5]
    assert cols.max_index(0) == 5
    assert cols.min_index(0) == 3
    cols.clear_column(0)
    assert cols.is_empty(0)
    assert cols.max_index(0) is None


def test_set_columns_xor_merge():
    cols = SetColumns(2)
    cols.set_column(0, [1, 2, 3])
    cols.set_column(1, [2, 3, 4])
    cols.add_column(0, 1)
    assert cols.column(0) == [1, 4]
    other = cols.copy()
    other.clear_column(0)
    assert cols.column(0) == [1, 4]


def test_unknown_representation():
    with pytest.raises(ValueError):
        make_representation("dense", 3)


# ---------------------------------------------------------------------------
# boundary matrix
# ---------------------------------------------------------------------------

def test_boundary_matrix_of_triangle():
    M = make_boundary_matrix(_make_triangle())
    assert M.num_columns == 6
    assert [M.column(j) for j in range(6)] == [[], [], [], [0, 1], [0, 2], [1, 2]]
    assert M.dimensions() == [0, 0, 0, 1, 1, 1]
    assert M.dimension_max == 1
    assert M.is_lower_triangular()


def test_representations_build_equal_matrices():
    K = _make_filtered_tetrahedron()
    assert make_boundary_matrix(K, representation="set") == make_boundary_matrix(K, representation="vector")


def test_face_after_coface_is_a_structural_error():
    K = SimplicialComplex([[0, 1], [0], [1]])
    with pytest.raises(StructuralError):
        make_boundary_matrix(K)


def test_missing_face_is_a_structural_error():
    K = SimplicialComplex([[0], [0, 1]])
    with pytest.raises(StructuralError):
        make_boundary_matrix(K)


def test_partition_index_skips_order_check():
    K = SimplicialComplex([[0, 1], [0], [1]])
    M = make_boundary_matrix(K, partition_index=1)
    assert M.column(0) == [1, 2]


def test_derived_dimensions():
    M = BoundaryMatrix([[], [], [0, 1]])
    assert M.dimensions() == [0, 0, 1]


def test_to_sparse():
    A = make_boundary_matrix(_make_triangle()).to_sparse().toarray()
    assert A.shape == (6, 6)
    assert A.sum() == 6
    assert A[0, 3] == 1 and A[3, 0] == 0


def test_dualize_anti_transposes():
    M = make_boundary_matrix(_make_triangle())
    D = dualize(M)
    assert D.dualized
    assert [D.column(j) for j in range(6)] == [[], [], [], [0, 1], [0, 2], [1, 2]]
    assert D.dimensions() == [0, 0, 0, 1, 1, 1]
    assert D.is_lower_triangular()


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_double_dualization_is_identity(seed):
    M = make_boundary_matrix(_make_filtered_tetrahedron(seed))
    DD = dualize(dualize(M))
    assert DD == M
    assert not DD.dualized


# ---------------------------------------------------------------------------
# reduction and pairing
# ---------------------------------------------------------------------------

def test_triangle_pairing():
    M = make_boundary_matrix(_make_triangle())
    pairing = calculate_persistence_pairing(M)
    assert pairing.as_set() == {(0, None), (1, 3), (2, 4), (5, None)}
    assert pairing.unpaired() == [0, 5]
    assert pairing.paired() == [(1, 3), (2, 4)]


def test_pairing_does_not_modify_input():
    M = make_boundary_matrix(_make_triangle())
    before = M.copy()
    calculate_persistence_pairing(M, algorithm="twist")
    assert M == before


def test_top_dimension_essentials_can_be_omitted():
    M = make_boundary_matrix(_make_triangle())
    pairing = calculate_persistence_pairing(M, include_all_unpaired_creators=False)
    assert pairing.as_set() == {(0, None), (1, 3), (2, 4)}


def test_max_index_limits_pairing():
    M = make_boundary_matrix(_make_triangle())
    pairing = calculate_persistence_pairing(M, max_index=5)
    assert pairing.as_set() == {(0, None), (1, 3), (2, 4)}


@pytest.mark.parametrize("representation", ["set", "vector"])
@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_standard_and_twist_agree(representation, seed):
    K = _make_random_graph_complex(seed=seed)
    M = make_boundary_matrix(K, representation=representation)
    standard = calculate_persistence_pairing(M, algorithm="standard")
    twist = calculate_persistence_pairing(M, algorithm="twist")
    assert standard.as_set() == twist.as_set()


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_dual_pairing_matches_primal(seed):
    M = make_boundary_matrix(_make_filtered_tetrahedron(seed))
    primal = calculate_persistence_pairing(M)
    for algorithm in ("standard", "twist"):
        dual = calculate_persistence_pairing(dualize(M), algorithm=algorithm)
        assert dual.dualized
        assert dual.as_set() == primal.as_set()


@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_pairs_are_ordered_and_pivots_unique(seed):
    M = make_boundary_matrix(_make_random_graph_complex(seed=seed))
    for reduce in (standard_reduction, twist_reduction):
        R = reduce(M.copy())
        pivots = [R.max_index(j) for j in range(R.num_columns) if not R.is_empty(j)]
        assert len(pivots) == len(set(pivots))
        assert all(R.max_index(j) < j for j in range(R.num_columns) if not R.is_empty(j))

    for creator, destroyer in calculate_persistence_pairing(M):
        assert destroyer is None or creator < destroyer


def test_every_column_appears_once_in_pairing():
    M = make_boundary_matrix(_make_filtered_tetrahedron())
    pairing = calculate_persistence_pairing(M)
    seen = []
    for creator, destroyer in pairing:
        seen.append(creator)
        if destroyer is not None:
            seen.append(destroyer)
    assert sorted(seen) == list(range(M.num_columns))


def test_unknown_algorithm_falls_back_to_twist():
    with pytest.warns(RuntimeWarning):
        assert get_reduction_algorithm("fancy") is twist_reduction
    assert get_reduction_algorithm("standard") is standard_reduction
