"""
Boolean Algebra Contracts

A boolean algebra supplies the cell-level operations that the binary and
tensor layers are built from. Backends only need four primitives:

    bool_lift, bool_not, bool_or, bool_xor

Everything else has a default derived from them by fixed identities:

    imp(a, b)     = or(not a, b)
    and(a, b)     = not imp(a, not b)              (de Morgan)
    equ(a, b)     = xor(not a, b)
    maj(a, b, c)  = or(and(a, b), and(c, or(a, b)))
    sum3(a, b, c) = xor(xor(a, b), c)
    all, any, sum = folds of and, or, xor

so a new backend gets correct derived behavior for free and may override
any of them with a cheaper version.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable, Sequence, Type

from ..core.genvec import DenseVector, GenVector


class BooleanAlgebra(ABC):
    """
    Abstract boolean algebra.

    Operations may mutate internal state (the SAT backend allocates
    variables and records clauses), so an instance must not be shared
    between threads.
    """

    # Type of the elements and the vector used to store them
    elem_type: type = object
    vector_type: Type[GenVector] = DenseVector

    @abstractmethod
    def bool_lift(self, value: bool) -> Any:
        """Returns the element representing the constant `value`."""
        pass

    def bool_zero(self) -> Any:
        return self.bool_lift(False)

    def bool_unit(self) -> Any:
        return self.bool_lift(True)

    @abstractmethod
    def bool_not(self, elem: Any) -> Any:
        pass

    @abstractmethod
    def bool_or(self, elem1: Any, elem2: Any) -> Any:
        pass

    @abstractmethod
    def bool_xor(self, elem1: Any, elem2: Any) -> Any:
        pass

    def bool_and(self, elem1: Any, elem2: Any) -> Any:
        elem2 = self.bool_not(elem2)
        elem3 = self.bool_imp(elem1, elem2)
        return self.bool_not(elem3)

    def bool_equ(self, elem1: Any, elem2: Any) -> Any:
        elem1 = self.bool_not(elem1)
        return self.bool_xor(elem1, elem2)

    def bool_imp(self, elem1: Any, elem2: Any) -> Any:
        elem1 = self.bool_not(elem1)
        return self.bool_or(elem1, elem2)

    def bool_maj(self, elem1: Any, elem2: Any, elem3: Any) -> Any:
        """Majority of three, i.e. the carry of a full adder."""
        both = self.bool_and(elem1, elem2)
        either = self.bool_or(elem1, elem2)
        return self.bool_or(both, self.bool_and(elem3, either))

    def bool_sum3(self, elem1: Any, elem2: Any, elem3: Any) -> Any:
        """Parity of three, i.e. the sum bit of a full adder."""
        return self.bool_xor(self.bool_xor(elem1, elem2), elem3)

    def bool_all(self, elems: Iterable[Any]) -> Any:
        """Conjunction of all elements (true for an empty sequence)."""
        result = self.bool_unit()
        for elem in elems:
            result = self.bool_and(result, elem)
        return result

    def bool_any(self, elems: Iterable[Any]) -> Any:
        """Disjunction of all elements (false for an empty sequence)."""
        result = self.bool_zero()
        for elem in elems:
            result = self.bool_or(result, elem)
        return result

    def bool_sum(self, elems: Iterable[Any]) -> Any:
        """Exclusive or of all elements (false for an empty sequence)."""
        result = self.bool_zero()
        for elem in elems:
            result = self.bool_xor(result, elem)
        return result

    def vector(self, elems: Iterable[Any] = ()) -> GenVector:
        """Collects elements of this algebra into its vector type."""
        return self.vector_type.from_iterable(elems)


class BooleanSat(BooleanAlgebra):
    """
    Boolean algebra backed by a SAT solver.

    Elements are formulas over solver variables. Constraints are asserted
    as disjunctive clauses, and after a successful solve every element can
    be evaluated in the found model.
    """

    @abstractmethod
    def bool_add_variable(self) -> Any:
        """Allocates a fresh unconstrained variable."""
        pass

    @abstractmethod
    def bool_add_clause(self, clause: Sequence[Any]) -> None:
        """Asserts that at least one element of `clause` is true."""
        pass

    @abstractmethod
    def bool_find_model(self, assumptions: Sequence[Any] = ()) -> bool:
        """
        Runs the solver.

        Args:
            assumptions: Elements required to be true for this call only

        Returns:
            True if a satisfying assignment was found
        """
        pass

    @abstractmethod
    def bool_get_value(self, elem: Any) -> bool:
        """Returns the value of `elem` in the last found model."""
        pass
