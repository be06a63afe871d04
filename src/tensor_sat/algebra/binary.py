"""
Binary Arithmetic over a Boolean Algebra

Bit vectors and fixed-width two's-complement numbers are generic vectors
of algebra elements, least significant bit first. Every circuit is built
from the gates of the underlying algebra, so the same code computes
concrete values (Boolean), emits clauses (Solver) or just checks lengths
(Trivial).

Circuits:
    add:  ripple carry, s_i = sum3(a_i, b_i, c), c = maj(a_i, b_i, c), c_0 = 0
    sub:  a + not(b) with carry-in 1
    neg:  not(a) + 1 as a half adder chain with carry-in 1
    le:   r = maj(not a_i, b_i, r) from r = 1, unsigned
"""

from typing import Any, Iterable, List, Sequence

from ..core.genvec import GenVector
from .base import BooleanAlgebra


class BinaryAlgebra:
    """
    Bit vector and binary number operations for a boolean algebra.

    Operations that combine two vectors require equal lengths. Results of
    reductions and comparisons are one-element vectors.
    """

    def __init__(self, alg: BooleanAlgebra):
        self.alg = alg

    def _check_lengths(self, elem1: GenVector, elem2: GenVector) -> None:
        if len(elem1) != len(elem2):
            raise ValueError(f"operand lengths differ: {len(elem1)} and {len(elem2)}")

    def _zip(self, oper, elem1: GenVector, elem2: GenVector) -> GenVector:
        self._check_lengths(elem1, elem2)
        return self.alg.vector(oper(a, b) for a, b in zip(elem1, elem2))

    # ------------------------------------------------------------------
    # Bit vectors
    # ------------------------------------------------------------------

    def length(self, elem: GenVector) -> int:
        return len(elem)

    def concat(self, elems: Iterable[GenVector]) -> GenVector:
        """Concatenates vectors; earlier parts become the lower bits."""
        return self.alg.vector_type.concat(elems)

    def split(self, elem: GenVector, length: int) -> List[GenVector]:
        return elem.split(length)

    def bit_lift(self, values: Sequence[bool]) -> GenVector:
        """Creates a vector of constants."""
        return self.alg.vector(self.alg.bool_lift(value) for value in values)

    def bit_not(self, elem: GenVector) -> GenVector:
        return self.alg.vector(self.alg.bool_not(a) for a in elem)

    def bit_or(self, elem1: GenVector, elem2: GenVector) -> GenVector:
        return self._zip(self.alg.bool_or, elem1, elem2)

    def bit_and(self, elem1: GenVector, elem2: GenVector) -> GenVector:
        return self._zip(self.alg.bool_and, elem1, elem2)

    def bit_xor(self, elem1: GenVector, elem2: GenVector) -> GenVector:
        return self._zip(self.alg.bool_xor, elem1, elem2)

    def bit_equ(self, elem1: GenVector, elem2: GenVector) -> GenVector:
        return self._zip(self.alg.bool_equ, elem1, elem2)

    def bit_imp(self, elem1: GenVector, elem2: GenVector) -> GenVector:
        return self._zip(self.alg.bool_imp, elem1, elem2)

    def bit_all(self, elem: GenVector) -> GenVector:
        """Conjunction of all bits as a one-element vector."""
        return self.alg.vector_type.from_elem(self.alg.bool_all(elem))

    def bit_any(self, elem: GenVector) -> GenVector:
        """Disjunction of all bits as a one-element vector."""
        return self.alg.vector_type.from_elem(self.alg.bool_any(elem))

    # ------------------------------------------------------------------
    # Binary numbers
    # ------------------------------------------------------------------

    def num_lift(self, length: int, value: int) -> GenVector:
        """
        Creates the `length`-bit two's-complement representation of
        `value`, i.e. of value mod 2**length.
        """
        return self.alg.vector(self.alg.bool_lift((value >> i) & 1) for i in range(length))

    def num_neg(self, elem: GenVector) -> GenVector:
        """Returns -elem mod 2**len(elem)."""
        alg = self.alg
        carry = alg.bool_unit()
        result = alg.vector_type.with_capacity(len(elem))
        for a in elem:
            b = alg.bool_not(a)
            result.push(alg.bool_xor(b, carry))
            carry = alg.bool_and(b, carry)
        return result

    def num_add(self, elem1: GenVector, elem2: GenVector) -> GenVector:
        """Returns elem1 + elem2 mod 2**len."""
        self._check_lengths(elem1, elem2)
        return self._ripple(elem1, elem2, self.alg.bool_zero())

    def num_sub(self, elem1: GenVector, elem2: GenVector) -> GenVector:
        """Returns elem1 - elem2 mod 2**len."""
        self._check_lengths(elem1, elem2)
        return self._ripple(elem1, self.bit_not(elem2), self.alg.bool_unit())

    def _ripple(self, elem1: GenVector, elem2: GenVector, carry: Any) -> GenVector:
        alg = self.alg
        result = alg.vector_type.with_capacity(len(elem1))
        for a, b in zip(elem1, elem2):
            result.push(alg.bool_sum3(a, b, carry))
            carry = alg.bool_maj(a, b, carry)
        return result

    def num_eq(self, elem1: GenVector, elem2: GenVector) -> GenVector:
        return self.bit_all(self.bit_equ(elem1, elem2))

    def num_ne(self, elem1: GenVector, elem2: GenVector) -> GenVector:
        return self.bit_not(self.num_eq(elem1, elem2))

    def num_le(self, elem1: GenVector, elem2: GenVector) -> GenVector:
        """Unsigned elem1 <= elem2 as a one-element vector."""
        self._check_lengths(elem1, elem2)
        alg = self.alg
        result = alg.bool_unit()
        for a, b in zip(elem1, elem2):
            result = alg.bool_maj(alg.bool_not(a), b, result)
        return alg.vector_type.from_elem(result)

    def num_lt(self, elem1: GenVector, elem2: GenVector) -> GenVector:
        """Unsigned elem1 < elem2 as a one-element vector."""
        return self.bit_not(self.num_le(elem2, elem1))
