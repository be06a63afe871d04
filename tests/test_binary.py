"""
Tests for Binary Arithmetic

These tests verify:
    - Bitwise operations and reductions
    - Two's-complement add, sub and neg wrap mod 2**n
    - Unsigned comparisons
    - The same circuits run over Trivial and Solver
"""

import itertools

import pytest

from tensor_sat.algebra import BinaryAlgebra, Boolean, Solver, Trivial
from tensor_sat.core import BitVector, DenseVector, UnitVector

BITS = 4
MOD = 1 << BITS


def value_of(vec):
    """Reads an unsigned integer back from a little-endian bit vector."""
    return sum(1 << i for i, bit in enumerate(vec) if bit)


@pytest.fixture
def binary():
    return BinaryAlgebra(Boolean())


class TestLift:
    """Test constant construction."""

    def test_num_lift(self, binary):
        assert list(binary.num_lift(4, 13)) == [True, False, True, True]
        assert isinstance(binary.num_lift(4, 13), BitVector)

    def test_negative_wraps(self, binary):
        assert binary.num_lift(4, 13) == binary.num_lift(4, -3)
        assert value_of(binary.num_lift(8, -1)) == 255

    def test_bit_lift(self, binary):
        assert list(binary.bit_lift([True, False])) == [True, False]

    def test_trivial_length(self):
        binary = BinaryAlgebra(Trivial())
        vec = binary.num_lift(3, 13)
        assert isinstance(vec, UnitVector)
        assert binary.length(vec) == 3


class TestArithmetic:
    """Exhaustive check of the 4-bit circuits."""

    @pytest.mark.parametrize("a,b", itertools.product(range(MOD), repeat=2))
    def test_add_sub(self, binary, a, b):
        x = binary.num_lift(BITS, a)
        y = binary.num_lift(BITS, b)
        assert value_of(binary.num_add(x, y)) == (a + b) % MOD
        assert value_of(binary.num_sub(x, y)) == (a - b) % MOD

    @pytest.mark.parametrize("a,b", itertools.product(range(MOD), repeat=2))
    def test_comparisons(self, binary, a, b):
        x = binary.num_lift(BITS, a)
        y = binary.num_lift(BITS, b)
        assert list(binary.num_eq(x, y)) == [a == b]
        assert list(binary.num_ne(x, y)) == [a != b]
        assert list(binary.num_le(x, y)) == [a <= b]
        assert list(binary.num_lt(x, y)) == [a < b]

    @pytest.mark.parametrize("a,b", itertools.product(range(MOD), repeat=2))
    def test_bitwise(self, binary, a, b):
        x = binary.num_lift(BITS, a)
        y = binary.num_lift(BITS, b)
        assert value_of(binary.bit_or(x, y)) == a | b
        assert value_of(binary.bit_and(x, y)) == a & b
        assert value_of(binary.bit_xor(x, y)) == a ^ b
        assert value_of(binary.bit_equ(x, y)) == ~(a ^ b) % MOD
        assert value_of(binary.bit_imp(x, y)) == (~a | b) % MOD

    @pytest.mark.parametrize("a", range(MOD))
    def test_neg_not(self, binary, a):
        x = binary.num_lift(BITS, a)
        assert value_of(binary.num_neg(x)) == (-a) % MOD
        assert value_of(binary.bit_not(x)) == ~a % MOD

    def test_empty_vectors(self, binary):
        empty = binary.num_lift(0, 5)
        assert len(binary.num_add(empty, empty)) == 0
        assert len(binary.num_neg(empty)) == 0
        assert list(binary.num_le(empty, empty)) == [True]
        assert list(binary.num_lt(empty, empty)) == [False]


class TestVectors:
    """Test reductions, concat and split."""

    def test_reductions(self, binary):
        vec = binary.bit_lift([True, True, False])
        assert list(binary.bit_all(vec)) == [False]
        assert list(binary.bit_any(vec)) == [True]
        assert list(binary.bit_all(binary.bit_lift([]))) == [True]
        assert list(binary.bit_any(binary.bit_lift([]))) == [False]

    def test_concat_low_bits_first(self, binary):
        low = binary.num_lift(4, 5)
        high = binary.num_lift(4, 9)
        joined = binary.concat([low, high])
        assert binary.length(joined) == 8
        assert value_of(joined) == 5 + 16 * 9

    def test_split(self, binary):
        parts = binary.split(binary.num_lift(8, 0x9A), 4)
        assert [value_of(part) for part in parts] == [0xA, 0x9]

    def test_length_mismatch_fails(self, binary):
        x = binary.num_lift(4, 1)
        y = binary.num_lift(3, 1)
        for oper in (binary.bit_or, binary.num_add, binary.num_sub, binary.num_le, binary.num_eq):
            with pytest.raises(ValueError):
                oper(x, y)


class TestSolverArithmetic:
    """Run the circuits symbolically and search for operands."""

    def _variables(self, solver, length):
        return DenseVector(solver.bool_add_variable() for _ in range(length))

    def test_find_addends(self):
        solver = Solver()
        binary = BinaryAlgebra(solver)
        a = self._variables(solver, 5)
        b = self._variables(solver, 5)

        total = binary.num_add(a, b)
        solver.bool_add_clause(binary.num_eq(total, binary.num_lift(5, 21)))
        solver.bool_add_clause(binary.num_lt(a, b))
        solver.bool_add_clause(binary.num_ne(a, binary.num_lift(5, 0)))

        assert solver.bool_find_model()
        x = value_of(solver.bool_get_value(lit) for lit in a)
        y = value_of(solver.bool_get_value(lit) for lit in b)
        assert (x + y) % 32 == 21
        assert 0 < x < y

    def test_impossible_sum(self):
        """Two 3-bit values below 4 never add up to 7."""
        solver = Solver()
        binary = BinaryAlgebra(solver)
        a = self._variables(solver, 3)
        b = self._variables(solver, 3)
        four = binary.num_lift(3, 4)

        solver.bool_add_clause(binary.num_lt(a, four))
        solver.bool_add_clause(binary.num_lt(b, four))
        solver.bool_add_clause(binary.num_eq(binary.num_add(a, b), binary.num_lift(3, 7)))

        assert not solver.bool_find_model()

    def test_neg_is_inverse(self):
        """No 4-bit value satisfies a + neg(a) != 0."""
        solver = Solver()
        binary = BinaryAlgebra(solver)
        a = self._variables(solver, 4)
        total = binary.num_add(a, binary.num_neg(a))

        solver.bool_add_clause(binary.num_ne(total, binary.num_lift(4, 0)))
        assert not solver.bool_find_model()
