"""Worked example: from a filtered complex to diagrams, norms and distances

The pipeline step by step:
complex → lower-star filtration → boundary matrix → (dual) reduction → pairing
→ persistence diagrams → norms / distances.

Run:
    python examples/triangle_pipeline.py
"""

from simplicial_ph import (
    SimplicialComplex,
    bottleneck_distance,
    calculate_persistence_pairing,
    dualize,
    hausdorff_distance,
    lower_star,
    make_boundary_matrix,
    make_persistence_diagrams,
    p_norm,
    wasserstein_distance,
)
from simplicial_ph.pretty import print_diagrams


def build(values):
    # two triangles sharing the edge {1, 2}, only one of them filled
    K = SimplicialComplex([
        [0], [1], [2], [3],
        [0, 1], [0, 2], [1, 2], [1, 3], [2, 3],
        [0, 1, 2],
    ])
    return lower_star(K, values)


def main() -> None:
    K = build([0.0, 1.0, 2.0, 4.0])
    print("Filtration:")
    print(K)

    M = make_boundary_matrix(K)
    print("\nBoundary matrix:")
    print(M)

    pairing = calculate_persistence_pairing(dualize(M), algorithm="twist")
    print(f"\nPairing (computed on the dual): {list(pairing)}")

    diagrams = make_persistence_diagrams(pairing, K)
    print()
    print_diagrams(diagrams)

    L = build([0.0, 1.5, 2.0, 3.0])
    other = make_persistence_diagrams(calculate_persistence_pairing(make_boundary_matrix(L)), L)

    print("\nDimension 1:")
    print(f"  p-norm        {p_norm(diagrams[1]):.4f}")
    print(f"  hausdorff     {hausdorff_distance(diagrams[1], other[1]):.4f}")
    print(f"  bottleneck    {bottleneck_distance(diagrams[1], other[1]):.4f}")
    print(f"  wasserstein   {wasserstein_distance(diagrams[1], other[1]):.4f}")


if __name__ == "__main__":
    main()
