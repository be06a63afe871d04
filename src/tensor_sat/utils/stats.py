"""
Solver Statistics

Summaries of the clause accumulator of a Solver:
    - variables: number of allocated variables (including the TRUE variable)
    - clauses: number of recorded clauses
    - mean / max clause length
    - whether a model is currently available
"""

from typing import Dict, Union

import numpy as np

from ..algebra.solver import Solver


def compute_clause_lengths(solver: Solver) -> np.ndarray:
    """
    Collect the length of every recorded clause.

    Args:
        solver: Solver to inspect

    Returns:
        lengths: [num_clauses] integer array
    """
    return np.fromiter(
        (len(clause) for clause in solver.iter_clauses()),
        dtype=np.int64,
        count=solver.num_clauses,
    )


def compute_mean_clause_length(lengths: np.ndarray) -> float:
    """Mean clause length (0 if there are no clauses)."""
    if lengths.size == 0:
        return 0.0
    return float(lengths.mean())


def compute_max_clause_length(lengths: np.ndarray) -> int:
    """Longest clause length (0 if there are no clauses)."""
    if lengths.size == 0:
        return 0
    return int(lengths.max())


def collect_stats(solver: Solver) -> Dict[str, Union[int, float, bool]]:
    """
    Compute all statistics of a solver.

    Args:
        solver: Solver to inspect

    Returns:
        Dict with variables, clauses, mean_clause_len, max_clause_len, has_model
    """
    lengths = compute_clause_lengths(solver)
    return {
        "variables": solver.num_variables,
        "clauses": solver.num_clauses,
        "mean_clause_len": compute_mean_clause_length(lengths),
        "max_clause_len": compute_max_clause_length(lengths),
        "has_model": solver.has_model,
    }


def format_stats(stats: Dict[str, Union[int, float, bool]]) -> str:
    """Format statistics for display."""
    return (
        f"Vars: {stats['variables']} | "
        f"Clauses: {stats['clauses']} | "
        f"Mean len: {stats['mean_clause_len']:.2f} | "
        f"Max len: {stats['max_clause_len']} | "
        f"Model: {'yes' if stats['has_model'] else 'no'}"
    )
