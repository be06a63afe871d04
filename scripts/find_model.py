#!/usr/bin/env python3
"""
Search for Models with Tensor SAT

This script:
    1. Builds a derangement problem: a permutation of `size` elements
       without fixed points, stated as tensor clauses over a relation R
    2. Builds an arithmetic problem: two `bits`-bit numbers a < b with
       a + b == target (mod 2**bits)
    3. Solves both, decodes the models and prints solver statistics
    4. Saves the results as JSON
"""

import argparse
import json
import logging
from pathlib import Path

from tensor_sat.algebra import BinaryAlgebra, Solver, TensorSat
from tensor_sat.core import Shape, Tensor
from tensor_sat.utils import collect_stats, format_stats, to_numpy


def parse_args():
    parser = argparse.ArgumentParser(description="Find models with Tensor SAT")
    parser.add_argument("--size", type=int, default=5)
    parser.add_argument("--bits", type=int, default=6)
    parser.add_argument("--target", type=int, default=21)
    parser.add_argument("--output_dir", type=str, default="results")
    parser.add_argument("--log_level", type=str, default="INFO")
    return parser.parse_args()


def add_functional(sat: TensorSat, rel: Tensor) -> None:
    """Require rel[y, x] to be the graph of a function x -> y."""
    size = rel.shape[0]
    # every x has at least one image
    sat.tensor_add_clause([sat.tensor_any(rel)])

    # no x has two different images
    shape = Shape([size, size, size])
    rel0 = sat.polymer(rel, shape, [0, 2])
    rel1 = sat.polymer(rel, shape, [1, 2])
    diag = sat.polymer(sat.diagonal(size), shape, [0, 1])
    sat.tensor_add_clause([sat.tensor_not(rel0), sat.tensor_not(rel1), diag])


def solve_derangement(size: int):
    solver = Solver()
    sat = TensorSat(solver)

    rel = sat.tensor_add_variable(Shape([size, size]))
    add_functional(sat, rel)
    add_functional(sat, sat.polymer(rel, Shape([size, size]), [1, 0]))
    sat.tensor_add_clause([sat.tensor_not(sat.tensor_and(rel, sat.diagonal(size)))])

    if not sat.tensor_find_model():
        return None, collect_stats(solver)

    graph = to_numpy(sat.tensor_get_value(rel))
    perm = [int(graph[:, x].nonzero()[0][0]) for x in range(size)]
    return perm, collect_stats(solver)


def decode(values: Tensor) -> int:
    return sum(1 << i for i, bit in enumerate(values.elems) if bit)


def solve_sum(bits: int, target: int):
    solver = Solver()
    sat = TensorSat(solver)
    binary = BinaryAlgebra(solver)

    a = sat.tensor_add_variable(Shape([bits]))
    b = sat.tensor_add_variable(Shape([bits]))

    total = binary.num_add(a.elems, b.elems)
    solver.bool_add_clause(binary.num_eq(total, binary.num_lift(bits, target)))
    solver.bool_add_clause(binary.num_lt(a.elems, b.elems))

    if not sat.tensor_find_model():
        return None, collect_stats(solver)

    return (decode(sat.tensor_get_value(a)), decode(sat.tensor_get_value(b))), collect_stats(solver)


def main():
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    print("=" * 60)
    print(" Tensor SAT Model Search")
    print("=" * 60)
    print(f"Output: {output_dir}")
    print()

    print(f"Searching derangement of {args.size} elements...")
    perm, perm_stats = solve_derangement(args.size)
    print(f"Permutation: {perm}")
    print(format_stats(perm_stats))
    print()

    print(f"Searching {args.bits}-bit a < b with a + b == {args.target}...")
    pair, sum_stats = solve_sum(args.bits, args.target)
    print(f"Pair: {pair}")
    print(format_stats(sum_stats))
    print()

    results = {
        "config": vars(args),
        "derangement": {"permutation": perm, "stats": perm_stats},
        "sum": {"pair": list(pair) if pair else None, "stats": sum_stats},
    }

    with open(output_dir / "results.json", "w") as f:
        json.dump(results, f, indent=2)

    print("=" * 60)
    print(" Search Complete")
    print("=" * 60)
    print(f"Results saved to: {output_dir / 'results.json'}")


if __name__ == "__main__":
    main()
