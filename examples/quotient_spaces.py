"""Quotient spaces and intersection homology

Cone and suspension of a hollow tetrahedron (a 2-sphere), followed by the
intersection homology of a wedge of two circles for two perversities.

Run:
    python examples/quotient_spaces.py
"""

from simplicial_ph import (
    Perversity,
    SimplicialComplex,
    calculate_intersection_homology,
    calculate_persistence_diagrams,
    cone,
    suspension,
)


def sphere() -> SimplicialComplex:
    return SimplicialComplex([
        [0], [1], [2], [3],
        [0, 1], [0, 2], [0, 3], [1, 2], [1, 3], [2, 3],
        [0, 1, 2], [0, 1, 3], [0, 2, 3], [1, 2, 3],
    ])


def wedge() -> SimplicialComplex:
    return SimplicialComplex([
        [0], [1], [2], [3], [4], [5], [6],
        [0, 1], [0, 6], [1, 2], [2, 3], [2, 5], [2, 6], [3, 4], [4, 5],
    ])


def bettis(K: SimplicialComplex):
    return [D.betti() for D in calculate_persistence_diagrams(K, include_all_unpaired_creators=True)]


def main() -> None:
    K = sphere()
    C = cone(K)
    S = suspension(K).sort()

    print(f"sphere      size={len(K):>3}  betti={bettis(K)}")
    print(f"cone        size={len(C):>3}  betti={bettis(C)}")
    print(f"suspension  size={len(S):>3}  betti={bettis(S)}")

    W = wedge()
    X0 = SimplicialComplex([[2]])
    print("\nWedge of two circles, singular stratum {2}:")
    for values in ([-1], [0]):
        diagrams = calculate_intersection_homology(W, [X0, W], Perversity(values))
        summary = ", ".join(f"dim {D.dimension}: betti {D.betti()}" for D in diagrams)
        print(f"  p={values}  {summary}")


if __name__ == "__main__":
    main()
