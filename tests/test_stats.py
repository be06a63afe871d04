"""
Tests for solver statistics
"""

from tensor_sat.algebra import Solver
from tensor_sat.utils import collect_stats, format_stats


class TestStats:
    """Test statistics of the clause accumulator."""

    def test_fresh_solver(self):
        stats = collect_stats(Solver())
        assert stats == {
            "variables": 1,
            "clauses": 1,
            "mean_clause_len": 1.0,
            "max_clause_len": 1,
            "has_model": False,
        }

    def test_after_gates(self):
        solver = Solver()
        x = solver.bool_add_variable()
        y = solver.bool_add_variable()
        solver.bool_add_clause([solver.bool_or(x, y)])
        solver.bool_find_model()

        stats = collect_stats(solver)
        assert stats["variables"] == 4
        # TRUE unit, three Tseitin clauses, one unit clause
        assert stats["clauses"] == 5
        assert stats["max_clause_len"] == 3
        assert stats["mean_clause_len"] == (1 + 2 + 2 + 3 + 1) / 5
        assert stats["has_model"] is True

    def test_format(self):
        line = format_stats(collect_stats(Solver()))
        assert line == "Vars: 1 | Clauses: 1 | Mean len: 1.00 | Max len: 1 | Model: no"
