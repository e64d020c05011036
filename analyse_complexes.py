#!/usr/bin/env python3
"""
Weighted Complex Analyser
=========================

Computes one persistence diagram per weighted complex (simplex-list files,
one simplex per line as "v0 v1 ... : weight") and reports, per file:

- the p-norm of the diagram (default),
- the diagrams themselves (--diagrams),
- or the distance matrix between all diagrams (--trajectories).

Usage:
    python analyse_complexes.py graph_000.txt graph_001.txt graph_002.txt
    python analyse_complexes.py --filtration double --normalize --trajectories data/*.txt
    python analyse_complexes.py --diagrams --json out/result.json data/*.txt
"""

import argparse
import sys

from simplicial_ph import analyse_complexes, default_config, load_simplicial_complex, save_diagram
from simplicial_ph.analysis import analysis_to_jsonable
from simplicial_ph.pretty import print_diagrams, print_distance_matrix, print_norms


def build_parser() -> argparse.ArgumentParser:
    defaults = default_config()
    parser = argparse.ArgumentParser(description="Persistent homology of weighted simplicial complexes")
    parser.add_argument("files", nargs="+", help="Simplex-list files, one complex each")
    parser.add_argument("-f", "--filtration", default=defaults["filtration"],
                        help="standard | double | absolute (invalid values fall back to standard)")
    parser.add_argument("-m", "--minimum", default=defaults["minimum"],
                        help="Vertex weights: global | local | local_abs")
    parser.add_argument("-n", "--normalize", action="store_true", help="Rescale diagrams to [0,1]")
    parser.add_argument("-r", "--reverse", action="store_true", help="Descending filtration")
    parser.add_argument("-p", "--diagrams", action="store_true", help="Print persistence diagrams")
    parser.add_argument("-t", "--trajectories", action="store_true", help="Print the diagram distance matrix")
    parser.add_argument("-d", "--distance", default=defaults["distance"],
                        help="hausdorff | bottleneck | wasserstein")
    parser.add_argument("--power", type=float, default=defaults["p"], help="Exponent of the p-norm")
    parser.add_argument("--algorithm", default=defaults["reduction_algorithm"], help="twist | standard")
    parser.add_argument("--json", default=None, help="Also write the full result as JSON")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    config = {
        "filtration": args.filtration,
        "minimum": args.minimum,
        "normalize": args.normalize,
        "reverse": args.reverse,
        "distance": args.distance,
        "p": args.power,
        "reduction_algorithm": args.algorithm,
    }

    complexes = []
    for filename in args.files:
        print(f"* Processing {filename}...", file=sys.stderr)
        complexes.append(load_simplicial_complex(filename))

    result = analyse_complexes(
        complexes,
        config=config,
        names=args.files,
        trajectories=args.trajectories,
        verbose=args.verbose,
    )

    token = result["config"]["infinity_token"]
    if args.diagrams:
        print_diagrams(result["diagrams"], infinity_token=token)
    elif args.trajectories:
        print_distance_matrix(result["trajectory_distances"], labels=args.files)
    else:
        print_norms(result["complexes"])

    if args.json:
        save_diagram(analysis_to_jsonable(result), args.json)
        print(f"* Wrote {args.json}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
