"""
Tests for numpy / torch conversion

These tests verify:
    - Coordinates line up with very_slow_get
    - Non-boolean storage converts too
    - Arrays come back as bit-packed tensors
"""

import itertools

import numpy as np
import torch

from tensor_sat.algebra import BooleanTensorAlgebra, Solver, TensorSat
from tensor_sat.core import BitVector, DenseVector, Shape, Tensor
from tensor_sat.utils import from_numpy, from_torch, to_numpy, to_torch


def sample_tensor():
    tensor = BooleanTensorAlgebra().constant(Shape([2, 3, 4]), False)
    for coords in ([0, 0, 0], [1, 2, 3], [1, 0, 2], [0, 1, 3]):
        tensor.very_slow_set(coords, True)
    return tensor


class TestNumpy:
    """Test numpy conversion."""

    def test_coordinates_match(self):
        tensor = sample_tensor()
        array = to_numpy(tensor)
        assert array.shape == (2, 3, 4)
        assert array.dtype == np.bool_
        for coords in itertools.product(range(2), range(3), range(4)):
            assert array[coords] == tensor.very_slow_get(list(coords))

    def test_dense_storage(self):
        tensor = Tensor(Shape([2, 2]), DenseVector([True, False, False, True]))
        assert np.array_equal(to_numpy(tensor), np.eye(2, dtype=bool))

    def test_from_numpy(self):
        array = np.arange(12).reshape(3, 4) % 5 == 0
        tensor = from_numpy(array)
        assert isinstance(tensor.elems, BitVector)
        assert tensor.shape == Shape([3, 4])
        assert np.array_equal(to_numpy(tensor), array)
        assert tensor == from_numpy(to_numpy(tensor))

    def test_scalar(self):
        tensor = BooleanTensorAlgebra().scalar(True)
        assert to_numpy(tensor).shape == ()
        assert bool(to_numpy(tensor)) is True

    def test_model_values(self):
        sat = TensorSat(Solver())
        x = sat.tensor_add_variable([2, 2])
        sat.tensor_add_clause([x])
        assert sat.tensor_find_model()
        assert to_numpy(sat.tensor_get_value(x)).all()


class TestTorch:
    """Test torch conversion."""

    def test_coordinates_match(self):
        tensor = sample_tensor()
        data = to_torch(tensor)
        assert data.dtype == torch.bool
        assert tuple(data.shape) == (2, 3, 4)
        for coords in itertools.product(range(2), range(3), range(4)):
            assert bool(data[coords]) == tensor.very_slow_get(list(coords))

    def test_from_torch(self):
        data = torch.tensor([[0.0, 1.5], [2.0, 0.0]])
        tensor = from_torch(data)
        assert tensor.very_slow_get([0, 1]) is True
        assert tensor.very_slow_get([1, 1]) is False
        assert tensor == from_torch(to_torch(tensor))
