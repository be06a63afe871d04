"""
SAT-backed Symbolic Boolean Algebra

Elements are literals in DIMACS convention:
    - variable k is the literal k, its negation is -k
    - variable 1 is pinned to true by a unit clause, so TRUE = 1, FALSE = -1

Each gate either folds to an existing literal (constants, x or x,
x or not x, ...) or allocates one fresh variable c and records the
Tseitin clauses tying c to its inputs. For c = a or b:

    (-a, c)  (-b, c)  (a, b, -c)

Clauses accumulate in the instance and are handed to z3 lazily, right
before a solve. z3 is used only as a clause store with check() and
model(); nothing else of the SMT layer is involved.
"""

import logging
import time
from typing import Iterator, List, Optional, Sequence, Tuple

import z3

from ..core.genvec import DenseVector
from .base import BooleanSat

logger = logging.getLogger(__name__)

TRUE = 1
FALSE = -1


class Solver(BooleanSat):
    """
    Symbolic boolean algebra over a SAT solver.

    Owns the clause accumulator: the variable counter, the clause list and
    the last found model. Every operation mutates this state, so one
    instance serves one thread; run separate instances for parallel
    searches.
    """

    elem_type = int
    vector_type = DenseVector

    def __init__(self, logic: Optional[str] = None):
        """
        Initialize solver.

        Args:
            logic: Optional z3 logic name passed to z3.SolverFor
                (default: a plain z3.Solver)
        """
        self._solver = z3.SolverFor(logic) if logic else z3.Solver()
        self._z3_vars: List[z3.BoolRef] = []
        self._num_vars = 0
        self._clauses: List[Tuple[int, ...]] = []
        self._submitted = 0
        self._model: Optional[z3.ModelRef] = None
        self._model_vars = 0

        self.bool_add_variable()
        self.bool_add_clause([TRUE])

    # ------------------------------------------------------------------
    # Accumulator state
    # ------------------------------------------------------------------

    @property
    def num_variables(self) -> int:
        return self._num_vars

    @property
    def num_clauses(self) -> int:
        return len(self._clauses)

    @property
    def has_model(self) -> bool:
        return self._model is not None

    def iter_clauses(self) -> Iterator[Tuple[int, ...]]:
        return iter(self._clauses)

    def dimacs(self) -> str:
        """Returns the accumulated clauses in DIMACS CNF format."""
        lines = [f"p cnf {self._num_vars} {len(self._clauses)}"]
        for clause in self._clauses:
            lines.append(" ".join(str(lit) for lit in clause + (0,)))
        return "\n".join(lines) + "\n"

    def _new_clause(self, *clause: int) -> None:
        self._clauses.append(clause)

    # ------------------------------------------------------------------
    # Gates
    # ------------------------------------------------------------------

    def bool_lift(self, value: bool) -> int:
        return TRUE if value else FALSE

    def bool_not(self, elem: int) -> int:
        return -elem

    def bool_or(self, elem1: int, elem2: int) -> int:
        if elem1 == TRUE or elem2 == TRUE or elem1 == -elem2:
            return TRUE
        if elem1 == FALSE or elem1 == elem2:
            return elem2
        if elem2 == FALSE:
            return elem1

        elem3 = self.bool_add_variable()
        self._new_clause(-elem1, elem3)
        self._new_clause(-elem2, elem3)
        self._new_clause(elem1, elem2, -elem3)
        return elem3

    def bool_and(self, elem1: int, elem2: int) -> int:
        return -self.bool_or(-elem1, -elem2)

    def bool_imp(self, elem1: int, elem2: int) -> int:
        return self.bool_or(-elem1, elem2)

    def bool_xor(self, elem1: int, elem2: int) -> int:
        if elem1 == FALSE:
            return elem2
        if elem1 == TRUE:
            return -elem2
        if elem2 == FALSE:
            return elem1
        if elem2 == TRUE:
            return -elem1
        if elem1 == elem2:
            return FALSE
        if elem1 == -elem2:
            return TRUE

        elem3 = self.bool_add_variable()
        self._new_clause(-elem1, -elem2, -elem3)
        self._new_clause(elem1, elem2, -elem3)
        self._new_clause(elem1, -elem2, elem3)
        self._new_clause(-elem1, elem2, elem3)
        return elem3

    def bool_equ(self, elem1: int, elem2: int) -> int:
        return -self.bool_xor(elem1, elem2)

    def bool_maj(self, elem1: int, elem2: int, elem3: int) -> int:
        rotations = ((elem1, elem2, elem3), (elem2, elem3, elem1), (elem3, elem1, elem2))
        for a, b, c in rotations:
            if a == b:
                return a
            if a == -b:
                return c
        for a, b, c in rotations:
            if a == TRUE:
                return self.bool_or(b, c)
            if a == FALSE:
                return self.bool_and(b, c)

        elem4 = self.bool_add_variable()
        self._new_clause(-elem1, -elem2, elem4)
        self._new_clause(-elem1, -elem3, elem4)
        self._new_clause(-elem2, -elem3, elem4)
        self._new_clause(elem1, elem2, -elem4)
        self._new_clause(elem1, elem3, -elem4)
        self._new_clause(elem2, elem3, -elem4)
        return elem4

    def bool_sum3(self, elem1: int, elem2: int, elem3: int) -> int:
        # fold through xor when any input is constant or two inputs are related
        for a, b, c in ((elem1, elem2, elem3), (elem2, elem3, elem1), (elem3, elem1, elem2)):
            if a in (TRUE, FALSE) or abs(a) == abs(b):
                return self.bool_xor(self.bool_xor(a, b), c)

        elem4 = self.bool_add_variable()
        self._new_clause(-elem1, -elem2, -elem3, elem4)
        self._new_clause(-elem1, elem2, elem3, elem4)
        self._new_clause(elem1, -elem2, elem3, elem4)
        self._new_clause(elem1, elem2, -elem3, elem4)
        self._new_clause(elem1, elem2, elem3, -elem4)
        self._new_clause(elem1, -elem2, -elem3, -elem4)
        self._new_clause(-elem1, elem2, -elem3, -elem4)
        self._new_clause(-elem1, -elem2, elem3, -elem4)
        return elem4

    # ------------------------------------------------------------------
    # SAT interface
    # ------------------------------------------------------------------

    def bool_add_variable(self) -> int:
        self._num_vars += 1
        return self._num_vars

    def bool_add_clause(self, clause: Sequence[int]) -> None:
        """
        Records a raw disjunctive clause.

        An empty clause makes the problem unsatisfiable.

        Raises:
            ValueError: If a literal does not name an allocated variable
        """
        clause = tuple(int(lit) for lit in clause)
        for lit in clause:
            if lit == 0 or abs(lit) > self._num_vars:
                raise ValueError(f"invalid literal {lit} in clause {list(clause)}")
        self._clauses.append(clause)

    def bool_find_model(self, assumptions: Sequence[int] = ()) -> bool:
        """
        Solves the accumulated clauses.

        Blocks until z3 answers; there is no timeout, so callers needing a
        bounded search must enforce their own deadline.

        Args:
            assumptions: Literals assumed true for this call only

        Returns:
            True if satisfiable; the model is then kept for bool_get_value
        """
        self._sync()
        literals = [self._to_z3(int(lit)) for lit in assumptions]

        logger.debug(
            "solving %d variables, %d clauses, %d assumptions",
            self._num_vars,
            len(self._clauses),
            len(literals),
        )
        start_time = time.time()
        result = self._solver.check(*literals)
        elapsed = time.time() - start_time

        if result == z3.sat:
            self._model = self._solver.model()
            self._model_vars = self._num_vars
        elif result == z3.unsat:
            self._model = None
        else:
            self._model = None
            raise RuntimeError(f"solver gave up: {self._solver.reason_unknown()}")

        logger.info("solver answered %s in %.3fs", result, elapsed)
        return self._model is not None

    def bool_get_value(self, elem: int) -> bool:
        """
        Returns the value of a literal in the last found model.

        Raises:
            RuntimeError: If no model is available, or the literal's
                variable was allocated after the last solve
        """
        if self._model is None:
            raise RuntimeError("no model available; call bool_find_model first")
        if elem == 0 or abs(elem) > self._num_vars:
            raise ValueError(f"invalid literal {elem}")
        if abs(elem) > self._model_vars:
            raise RuntimeError(f"literal {elem} was created after the last solve")

        self._extend_vars()
        value = z3.is_true(self._model.eval(self._z3_vars[abs(elem) - 1], model_completion=True))
        return value if elem > 0 else not value

    # ------------------------------------------------------------------
    # z3 bridge
    # ------------------------------------------------------------------

    def _extend_vars(self) -> None:
        while len(self._z3_vars) < self._num_vars:
            self._z3_vars.append(z3.Bool(f"x{len(self._z3_vars) + 1}"))

    def _to_z3(self, lit: int) -> z3.BoolRef:
        if lit == 0 or abs(lit) > self._num_vars:
            raise ValueError(f"invalid literal {lit}")
        var = self._z3_vars[abs(lit) - 1]
        return var if lit > 0 else z3.Not(var)

    def _sync(self) -> None:
        """Hands the clauses recorded since the last solve to z3."""
        self._extend_vars()
        for clause in self._clauses[self._submitted :]:
            if not clause:
                self._solver.add(z3.BoolVal(False))
            elif len(clause) == 1:
                self._solver.add(self._to_z3(clause[0]))
            else:
                self._solver.add(z3.Or([self._to_z3(lit) for lit in clause]))
        self._submitted = len(self._clauses)
