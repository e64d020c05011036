import math

import numpy as np
import pytest

from simplicial_ph import (
    DimensionMismatchError,
    PersistenceDiagram,
    SimplicialComplex,
    bottleneck_distance,
    calculate_persistence_diagrams,
    diagram_distance_matrix,
    hausdorff_distance,
    infinity_norm,
    lower_star,
    merge,
    p_norm,
    total_persistence,
    wasserstein_distance,
)

INF = math.inf


def _make_triangle():
    return SimplicialComplex([[0], [1], [2], [0, 1], [0, 2], [1, 2]])


def _make_mixed_diagram():
    return PersistenceDiagram(0, [(0, 1), (0, 2), (1, 4), (0, INF)])


# ---------------------------------------------------------------------------
# diagram container
# ---------------------------------------------------------------------------

def test_add_defaults_to_essential():
    D = PersistenceDiagram(1)
    D.add(0.5)
    D.add(0.5, 2.0)
    assert D.points == [(0.5, INF), (0.5, 2.0)]
    assert D.betti() == 1
    assert len(D) == 2


def test_multiset_semantics():
    D = PersistenceDiagram(0, [(1, 2), (1, 2)])
    assert len(D) == 2
    assert D == PersistenceDiagram(0, [(1, 2), (1, 2)])
    assert D != PersistenceDiagram(0, [(1, 2)])
    assert D != PersistenceDiagram(1, [(1, 2), (1, 2)])


def test_remove_diagonal_and_unpaired():
    D = PersistenceDiagram(0, [(1, 1), (1, 2), (3, INF)])
    assert D.copy().remove_diagonal().points == [(1, 2), (3, INF)]
    assert D.copy().remove_unpaired().points == [(1, 1), (1, 2)]
    assert len(D) == 3


def test_remove_diagonal_is_idempotent():
    rng = np.random.default_rng(11)
    births = rng.integers(0, 5, 40).astype(float)
    deaths = births + rng.integers(0, 3, 40)
    D = PersistenceDiagram(1, list(zip(births, deaths)) + [(2.0, INF)])
    once = D.copy().remove_diagonal()
    assert once.copy().remove_diagonal() == once
    assert all(x != y for x, y in once)
    assert len(once) == len(D) - int(np.sum(births == deaths))


def test_normalize_keeps_infinity():
    D = PersistenceDiagram(0, [(2, 4), (2, INF)]).normalize(2, 6)
    assert D.points == [(0.0, 0.5), (0.0, INF)]


def test_normalize_with_degenerate_range_is_a_no_op():
    D = PersistenceDiagram(0, [(2, 4)])
    assert D.normalize(3, 3).points == [(2.0, 4.0)]


def test_persistence_and_array_views():
    D = _make_mixed_diagram()
    np.testing.assert_allclose(D.persistence(), [1, 2, 3])
    assert D.as_array().shape == (4, 2)
    assert PersistenceDiagram().as_array().shape == (0, 2)


def test_merge():
    D = merge(PersistenceDiagram(1, [(0, 1)]), PersistenceDiagram(1, [(2, 3)]))
    assert D.points == [(0.0, 1.0), (2.0, 3.0)]
    with pytest.raises(DimensionMismatchError):
        merge(PersistenceDiagram(0), PersistenceDiagram(1))


# ---------------------------------------------------------------------------
# diagrams from complexes
# ---------------------------------------------------------------------------

def test_triangle_diagrams():
    K = _make_triangle()
    diagrams = calculate_persistence_diagrams(K, include_all_unpaired_creators=True)
    assert [D.dimension for D in diagrams] == [0, 1]
    assert [D.betti() for D in diagrams] == [1, 1]

    diagrams = calculate_persistence_diagrams(K)
    assert [D.betti() for D in diagrams] == [1, 0]


def test_isolated_vertex_adds_a_component():
    K = SimplicialComplex([[0], [1], [2], [3], [0, 1], [0, 2], [1, 2]])
    assert calculate_persistence_diagrams(K)[0].betti() == 2


@pytest.mark.parametrize("dualize", [True, False])
@pytest.mark.parametrize("algorithm", ["standard", "twist"])
def test_lower_star_triangle(dualize, algorithm):
    K = lower_star(_make_triangle(), [0.0, 2.0, 1.0])
    D0 = calculate_persistence_diagrams(K, dualize=dualize, algorithm=algorithm)[0]
    assert D0.remove_diagonal().points == [(0.0, INF)]


def test_primal_and_dual_diagrams_agree():
    K = lower_star(SimplicialComplex([[0], [1], [2], [3], [0, 1], [1, 2], [2, 3], [0, 3]]), [0.0, 3.0, 1.0, 2.0])
    primal = calculate_persistence_diagrams(K, dualize=False, include_all_unpaired_creators=True)
    dual = calculate_persistence_diagrams(K, dualize=True, include_all_unpaired_creators=True)
    assert primal == dual
    assert [D.betti() for D in dual] == [1, 1]


# ---------------------------------------------------------------------------
# norms
# ---------------------------------------------------------------------------

def test_total_persistence_skips_essential_points():
    D = _make_mixed_diagram()
    assert total_persistence(D, 2) == pytest.approx(14.0)
    assert total_persistence(D, 1) == pytest.approx(6.0)


def test_p_norm_and_infinity_norm():
    D = _make_mixed_diagram()
    assert p_norm(D) == pytest.approx(math.sqrt(14.0))
    assert infinity_norm(D) == pytest.approx(3.0)
    assert infinity_norm(PersistenceDiagram()) == 0.0
    assert p_norm(PersistenceDiagram()) == 0.0


def test_norms_ignore_point_order():
    rng = np.random.default_rng(5)
    births = rng.random(500)
    points = [(b, b + 1e-9 * l) for b, l in zip(births, rng.random(500))]
    points += [(0.0, 1e6), (0.5, INF)]
    D = PersistenceDiagram(1, points)
    shuffled = PersistenceDiagram(1, [points[i] for i in rng.permutation(len(points))])

    for k in (1.0, 2.0, 3.5):
        assert total_persistence(shuffled, k) == total_persistence(D, k)
        assert p_norm(shuffled, k) == p_norm(D, k)
    assert infinity_norm(D) == float(np.max(D.persistence()))
    assert infinity_norm(shuffled) == infinity_norm(D)


def test_norm_exponent_must_be_positive():
    with pytest.raises(ValueError):
        p_norm(_make_mixed_diagram(), 0)
    with pytest.raises(ValueError):
        total_persistence(_make_mixed_diagram(), -1)


# ---------------------------------------------------------------------------
# distances
# ---------------------------------------------------------------------------

def test_hausdorff_distance():
    D = PersistenceDiagram(0, [(0, 1), (0, 3)])
    E = PersistenceDiagram(0, [(0, 1)])
    assert hausdorff_distance(D, E) == pytest.approx(2.0)
    assert hausdorff_distance(E, D) == pytest.approx(2.0)
    assert hausdorff_distance(D, D) == 0.0


def test_bottleneck_distance():
    D = PersistenceDiagram(0, [(0, 2)])
    assert bottleneck_distance(D, PersistenceDiagram(0, [(0, 2.5)])) == pytest.approx(0.5)
    assert bottleneck_distance(D, PersistenceDiagram(0)) == pytest.approx(1.0)
    assert bottleneck_distance(D, D) == 0.0


def test_bottleneck_matches_small_points_to_the_diagonal():
    D = PersistenceDiagram(0, [(0, 2), (1, 1.2)])
    E = PersistenceDiagram(0, [(0, 2)])
    assert bottleneck_distance(D, E) == pytest.approx(0.1)


def test_essential_points_are_matched_among_themselves():
    D = PersistenceDiagram(0, [(0, INF)])
    E = PersistenceDiagram(0, [(1, INF)])
    assert bottleneck_distance(D, E) == pytest.approx(1.0)
    assert wasserstein_distance(D, E) == pytest.approx(1.0)
    F = PersistenceDiagram(0, [(0, INF), (1, INF)])
    assert math.isinf(bottleneck_distance(D, F))
    assert math.isinf(wasserstein_distance(D, F))


def test_wasserstein_distance():
    D = PersistenceDiagram(0, [(0, 2)])
    assert wasserstein_distance(D, PersistenceDiagram(0, [(0, 2.5)])) == pytest.approx(0.5)

    E = PersistenceDiagram(0, [(0, 2), (0, 4)])
    empty = PersistenceDiagram(0)
    assert wasserstein_distance(E, empty) == pytest.approx(math.sqrt(5.0))
    assert wasserstein_distance(E, empty, q=1) == pytest.approx(3.0)
    assert wasserstein_distance(empty, empty) == 0.0


def test_wasserstein_is_bounded_by_bottleneck_sum():
    rng = np.random.default_rng(3)
    births = rng.random((2, 6))
    D = PersistenceDiagram(1, [(b, b + l) for b, l in zip(births[0], rng.random(6))])
    E = PersistenceDiagram(1, [(b, b + l) for b, l in zip(births[1], rng.random(6))])
    b = bottleneck_distance(D, E)
    w = wasserstein_distance(D, E, q=1)
    assert b <= w + 1e-12
    assert w <= 12 * b + 1e-12


def test_distances_require_equal_dimensions():
    with pytest.raises(DimensionMismatchError):
        bottleneck_distance(PersistenceDiagram(0), PersistenceDiagram(1))


def test_distance_matrix_is_symmetric():
    diagrams = [
        PersistenceDiagram(0, [(0, 1)]),
        PersistenceDiagram(0, [(0, 2)]),
        PersistenceDiagram(0, [(0, 4)]),
    ]
    M = diagram_distance_matrix(diagrams, metric="bottleneck")
    assert M.shape == (3, 3)
    np.testing.assert_allclose(M, M.T)
    np.testing.assert_allclose(np.diag(M), 0.0)
    # (0, 4) is cheaper to send to the diagonal than to (0, 1)
    assert M[0, 2] == pytest.approx(2.0)


def test_distance_matrix_unknown_metric_falls_back():
    diagrams = [PersistenceDiagram(0, [(0, 1)]), PersistenceDiagram(0, [(0, 3)])]
    with pytest.warns(RuntimeWarning):
        M = diagram_distance_matrix(diagrams, metric="earth-movers")
    assert M[0, 1] == pytest.approx(2.0)
