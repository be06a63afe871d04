"""
Tests for Tensor Algebra

These tests verify:
    - Elementwise operations and first-axis folds
    - The numpy-backed algebra agrees with the generic one
    - Shape errors are reported
    - TensorSat variables, clauses and model readback
"""

import itertools

import numpy as np
import pytest

from tensor_sat.algebra import (
    Boolean,
    BooleanTensorAlgebra,
    Solver,
    TensorAlgebra,
    TensorSat,
    Trivial,
)
from tensor_sat.core import BitVector, Shape, Tensor


def example_tensor(alg):
    """[2, 4] tensor true at [0, 1], [1, 2], [0, 3] and [1, 3]."""
    tensor = alg.constant(Shape([2, 4]), False)
    for coords in ([0, 1], [1, 2], [0, 3], [1, 3]):
        tensor.very_slow_set(coords, True)
    return tensor


def random_tensor(rng, dims):
    bits = rng.random(int(np.prod(dims))) < 0.5
    return Tensor(Shape(dims), BitVector.from_numpy(bits))


ALGEBRAS = [TensorAlgebra(Boolean()), BooleanTensorAlgebra()]


class TestFolds:
    """Test folds along the first axis."""

    @pytest.mark.parametrize("alg", ALGEBRAS)
    def test_folds(self, alg):
        tensor = example_tensor(alg)
        assert list(alg.tensor_all(tensor).elems) == [False, False, False, True]
        assert list(alg.tensor_any(tensor).elems) == [False, True, True, True]
        assert list(alg.tensor_sum(tensor).elems) == [False, True, True, False]
        assert alg.tensor_all(tensor).shape == Shape([4])

    @pytest.mark.parametrize("alg", ALGEBRAS)
    def test_fold_after_join(self, alg):
        tensor = alg.reshape_join(example_tensor(alg), 2)
        assert tensor.shape == Shape([8])

        result = alg.tensor_all(tensor)
        assert result.shape == Shape([])
        assert result.very_slow_get([]) is False
        assert alg.tensor_any(tensor).very_slow_get([]) is True

    @pytest.mark.parametrize("alg", ALGEBRAS)
    def test_fold_zero_length_axis(self, alg):
        tensor = alg.constant(Shape([0, 3]), False)
        assert list(alg.tensor_all(tensor).elems) == [True] * 3
        assert list(alg.tensor_any(tensor).elems) == [False] * 3

    @pytest.mark.parametrize("alg", ALGEBRAS)
    def test_fold_scalar_fails(self, alg):
        with pytest.raises(ValueError):
            alg.tensor_all(alg.scalar(True))


class TestElementwise:
    """Test elementwise operations."""

    @pytest.mark.parametrize("alg", ALGEBRAS)
    def test_getset_not_and(self, alg):
        tensor1 = alg.constant(Shape([2, 3]), False)
        tensor1.very_slow_set([0, 0], True)
        tensor1.very_slow_set([1, 2], True)
        assert tensor1.very_slow_get([0, 0]) is True
        assert tensor1.very_slow_get([1, 1]) is False

        tensor2 = alg.tensor_not(tensor1)
        assert tensor2.very_slow_get([0, 0]) is False
        assert tensor2.very_slow_get([1, 1]) is True

        tensor3 = alg.tensor_and(tensor1, tensor2)
        assert not any(tensor3.elems)

        tensor4 = alg.tensor_or(tensor1, tensor2)
        assert all(tensor4.elems)

    @pytest.mark.parametrize("alg", ALGEBRAS)
    def test_inputs_unchanged(self, alg):
        tensor = example_tensor(alg)
        before = tensor.copy()
        alg.tensor_not(tensor)
        alg.reshape_join(tensor, 2)
        assert tensor == before

    @pytest.mark.parametrize("alg", ALGEBRAS)
    def test_shape_mismatch_fails(self, alg):
        with pytest.raises(ValueError):
            alg.tensor_or(alg.constant([2, 3], False), alg.constant([3, 2], False))


class TestAgreement:
    """The numpy-backed algebra must agree with the generic one."""

    @pytest.mark.parametrize("dims", [[5], [3, 4], [2, 3, 5], [7, 1, 2]])
    def test_random(self, dims):
        rng = np.random.default_rng(len(dims))
        generic = TensorAlgebra(Boolean())
        fast = BooleanTensorAlgebra()
        tensor1 = random_tensor(rng, dims)
        tensor2 = random_tensor(rng, dims)

        for name in ["tensor_or", "tensor_and", "tensor_xor", "tensor_equ", "tensor_imp"]:
            assert getattr(fast, name)(tensor1, tensor2) == getattr(generic, name)(tensor1, tensor2)
        for name in ["tensor_not", "tensor_all", "tensor_any", "tensor_sum"]:
            assert getattr(fast, name)(tensor1) == getattr(generic, name)(tensor1)


class TestConstruction:
    """Test scalar, constant, diagonal and polymer."""

    def test_scalar(self):
        alg = TensorAlgebra(Boolean())
        tensor = alg.scalar(True)
        assert tensor.shape == Shape([])
        assert list(tensor.elems) == [True]

    def test_diagonal(self):
        alg = TensorAlgebra(Boolean())
        tensor = alg.diagonal(3)
        for i, j in itertools.product(range(3), repeat=2):
            assert tensor.very_slow_get([i, j]) == (i == j)

    def test_polymer_transpose(self):
        alg = BooleanTensorAlgebra()
        tensor = example_tensor(alg)
        result = alg.polymer(tensor, Shape([4, 2]), [1, 0])
        for i, j in itertools.product(range(2), range(4)):
            assert result.very_slow_get([j, i]) == tensor.very_slow_get([i, j])

    def test_default_algebra(self):
        assert isinstance(BooleanTensorAlgebra().alg, Boolean)
        alg = Boolean()
        assert BooleanTensorAlgebra(alg).alg is alg

    def test_trivial_shapes(self):
        alg = TensorAlgebra(Trivial())
        tensor = alg.constant(Shape([2, 3, 4]), False)
        assert alg.tensor_all(tensor).shape == Shape([3, 4])
        assert alg.tensor_or(tensor, tensor).shape == Shape([2, 3, 4])
        assert len(alg.diagonal(3).elems) == 9
        with pytest.raises(ValueError):
            alg.tensor_and(tensor, alg.constant(Shape([2, 3]), False))


class TestTensorSat:
    """Test the solver-backed tensor algebra."""

    def test_requires_sat_algebra(self):
        with pytest.raises(TypeError):
            TensorSat(Boolean())

    def test_add_variable(self):
        solver = Solver()
        sat = TensorSat(solver)
        before = solver.num_variables
        tensor = sat.tensor_add_variable(Shape([2, 3]))
        assert tensor.shape == Shape([2, 3])
        assert solver.num_variables == before + 6
        assert len(set(tensor.elems)) == 6

    def test_exactly_one_per_column(self):
        """Every column of a [3, 2] variable tensor gets exactly one true cell."""
        sat = TensorSat(Solver())
        rel = sat.tensor_add_variable(Shape([3, 2]))

        sat.tensor_add_clause([sat.tensor_any(rel)])
        for k in range(2):
            for i, j in itertools.combinations(range(3), 2):
                a = rel.very_slow_get([i, k])
                b = rel.very_slow_get([j, k])
                sat.alg.bool_add_clause([-a, -b])

        assert sat.tensor_find_model()
        value = sat.tensor_get_value(rel)
        assert isinstance(value.elems, BitVector)
        for k in range(2):
            column = [value.very_slow_get([i, k]) for i in range(3)]
            assert column.count(True) == 1

    def test_clause_over_tensors(self):
        sat = TensorSat(Solver())
        x = sat.tensor_add_variable([4])
        y = sat.tensor_add_variable([4])
        sat.tensor_add_clause([sat.tensor_not(x)])
        sat.tensor_add_clause([x, y])

        assert sat.tensor_find_model()
        assert list(sat.tensor_get_value(x).elems) == [False] * 4
        assert list(sat.tensor_get_value(y).elems) == [True] * 4

    def test_assumptions(self):
        sat = TensorSat(Solver())
        x = sat.tensor_add_variable([2])
        sat.tensor_add_clause([sat.tensor_not(x)])
        assert not sat.tensor_find_model([x.elems.get(0)])
        assert sat.tensor_find_model()

    def test_empty_clause_list(self):
        sat = TensorSat(Solver())
        sat.tensor_add_clause([])
        assert not sat.tensor_find_model()

    def test_zero_size_adds_nothing(self):
        solver = Solver()
        sat = TensorSat(solver)
        before = solver.num_clauses
        sat.tensor_add_clause([sat.tensor_add_variable([0, 3])])
        assert solver.num_clauses == before

    def test_clause_shape_mismatch(self):
        sat = TensorSat(Solver())
        with pytest.raises(ValueError):
            sat.tensor_add_clause([sat.tensor_add_variable([2]), sat.tensor_add_variable([3])])

    def test_constant_tensors(self):
        sat = TensorSat(Solver())
        sat.tensor_add_clause([sat.constant([3], True)])
        assert sat.tensor_find_model()
        assert list(sat.tensor_get_value(sat.diagonal(2)).elems) == [True, False, False, True]
