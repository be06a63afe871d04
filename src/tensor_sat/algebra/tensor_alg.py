"""
Tensor Algebra over a Boolean Algebra

Lifts the cell operations of a boolean algebra to whole tensors:

    - elementwise: not, or, and, xor, equ, imp (shapes must match)
    - folds along the first axis: all, any, sum
    - reindexing: polymer, reshape_join

Folds remove the first dimension. Because the first dimension varies
fastest, the cells folded into output i are the contiguous block
[i * head, (i + 1) * head) of the storage.

TensorSat adds the solver side: variable tensors, clauses built from
parallel tensors, solving, and reading tensors back from the model.
"""

from typing import Any, Callable, Iterable, Optional, Sequence, Union

import numpy as np

from ..core.genvec import BitVector
from ..core.shape import Shape
from ..core.tensor import Tensor
from .base import BooleanAlgebra, BooleanSat
from .boolean import Boolean


class TensorAlgebra:
    """
    Tensor operations generic over any boolean algebra.

    Tensors passed in are never modified; every operation returns a new
    tensor.
    """

    def __init__(self, alg: BooleanAlgebra):
        self.alg = alg

    @staticmethod
    def shape(tensor: Tensor) -> Shape:
        return tensor.shape

    def _tensor(self, shape: Shape, elems: Iterable[Any]) -> Tensor:
        return Tensor(shape, self.alg.vector(elems))

    def _check_shapes(self, tensor1: Tensor, tensor2: Tensor) -> None:
        if tensor1.shape != tensor2.shape:
            raise ValueError(f"shape mismatch: {tensor1.shape} and {tensor2.shape}")

    def _zip(self, oper: Callable[[Any, Any], Any], tensor1: Tensor, tensor2: Tensor) -> Tensor:
        self._check_shapes(tensor1, tensor2)
        elems = (oper(a, b) for a, b in zip(tensor1.elems, tensor2.elems))
        return self._tensor(tensor1.shape, elems)

    def _fold(self, oper: Callable[[Iterable[Any]], Any], tensor: Tensor) -> Tensor:
        head, shape = tensor.shape.split()
        elems = tensor.elems
        return self._tensor(
            shape,
            (oper(elems.iter_range(i * head, i * head + head)) for i in range(shape.size())),
        )

    # ------------------------------------------------------------------
    # Construction and reindexing
    # ------------------------------------------------------------------

    def scalar(self, value: bool) -> Tensor:
        """Creates a rank-0 tensor holding the constant `value`."""
        return self.constant(Shape([]), value)

    def constant(self, shape: Union[Shape, Iterable[int]], value: bool) -> Tensor:
        return Tensor.constant(shape, self.alg.bool_lift(value), self.alg.vector_type)

    def diagonal(self, dim: int) -> Tensor:
        """
        Returns the [dim, dim] tensor that is true exactly on the diagonal.
        """
        tensor = self.constant(Shape([dim, dim]), False)
        unit = self.alg.bool_unit()
        for idx in range(dim):
            tensor.elems.set(idx * (dim + 1), unit)
        return tensor

    def polymer(
        self,
        tensor: Tensor,
        shape: Union[Shape, Iterable[int]],
        mapping: Sequence[int],
    ) -> Tensor:
        return tensor.polymer(shape, mapping)

    def reshape_join(self, tensor: Tensor, count: int) -> Tensor:
        """Joins the first `count` dimensions of a copy of `tensor`."""
        tensor = tensor.copy()
        tensor.reshape_join(count)
        return tensor

    # ------------------------------------------------------------------
    # Elementwise operations
    # ------------------------------------------------------------------

    def tensor_not(self, tensor: Tensor) -> Tensor:
        return self._tensor(tensor.shape, (self.alg.bool_not(a) for a in tensor.elems))

    def tensor_or(self, tensor1: Tensor, tensor2: Tensor) -> Tensor:
        return self._zip(self.alg.bool_or, tensor1, tensor2)

    def tensor_and(self, tensor1: Tensor, tensor2: Tensor) -> Tensor:
        return self._zip(self.alg.bool_and, tensor1, tensor2)

    def tensor_xor(self, tensor1: Tensor, tensor2: Tensor) -> Tensor:
        return self._zip(self.alg.bool_xor, tensor1, tensor2)

    def tensor_equ(self, tensor1: Tensor, tensor2: Tensor) -> Tensor:
        return self._zip(self.alg.bool_equ, tensor1, tensor2)

    def tensor_imp(self, tensor1: Tensor, tensor2: Tensor) -> Tensor:
        return self._zip(self.alg.bool_imp, tensor1, tensor2)

    # ------------------------------------------------------------------
    # Folds along the first axis
    # ------------------------------------------------------------------

    def tensor_all(self, tensor: Tensor) -> Tensor:
        return self._fold(self.alg.bool_all, tensor)

    def tensor_any(self, tensor: Tensor) -> Tensor:
        return self._fold(self.alg.bool_any, tensor)

    def tensor_sum(self, tensor: Tensor) -> Tensor:
        """Folds the first axis with exclusive or."""
        return self._fold(self.alg.bool_sum, tensor)


class BooleanTensorAlgebra(TensorAlgebra):
    """
    Tensor algebra over concrete booleans, vectorized with numpy.

    Bits are unpacked once per operation and combined as whole arrays;
    results are identical to the generic cell-by-cell path.
    """

    def __init__(self, alg: Optional[Boolean] = None):
        super().__init__(alg or Boolean())

    @staticmethod
    def _bits(tensor: Tensor) -> np.ndarray:
        elems = tensor.elems
        if isinstance(elems, BitVector):
            return elems.to_numpy()
        return np.fromiter(elems, dtype=bool, count=len(elems))

    @staticmethod
    def _from_bits(shape: Shape, bits: np.ndarray) -> Tensor:
        return Tensor(shape, BitVector.from_numpy(bits))

    def _zip_bits(self, oper, tensor1: Tensor, tensor2: Tensor) -> Tensor:
        self._check_shapes(tensor1, tensor2)
        return self._from_bits(tensor1.shape, oper(self._bits(tensor1), self._bits(tensor2)))

    def _fold_bits(self, oper, tensor: Tensor) -> Tensor:
        head, shape = tensor.shape.split()
        # row i holds the cells folded into output cell i
        rows = self._bits(tensor).reshape(shape.size(), head)
        return self._from_bits(shape, oper(rows, axis=1))

    def tensor_not(self, tensor: Tensor) -> Tensor:
        return self._from_bits(tensor.shape, ~self._bits(tensor))

    def tensor_or(self, tensor1: Tensor, tensor2: Tensor) -> Tensor:
        return self._zip_bits(np.logical_or, tensor1, tensor2)

    def tensor_and(self, tensor1: Tensor, tensor2: Tensor) -> Tensor:
        return self._zip_bits(np.logical_and, tensor1, tensor2)

    def tensor_xor(self, tensor1: Tensor, tensor2: Tensor) -> Tensor:
        return self._zip_bits(np.logical_xor, tensor1, tensor2)

    def tensor_equ(self, tensor1: Tensor, tensor2: Tensor) -> Tensor:
        return self._zip_bits(np.equal, tensor1, tensor2)

    def tensor_imp(self, tensor1: Tensor, tensor2: Tensor) -> Tensor:
        return self._zip_bits(lambda a, b: ~a | b, tensor1, tensor2)

    def tensor_all(self, tensor: Tensor) -> Tensor:
        return self._fold_bits(np.all, tensor)

    def tensor_any(self, tensor: Tensor) -> Tensor:
        return self._fold_bits(np.any, tensor)

    def tensor_sum(self, tensor: Tensor) -> Tensor:
        return self._fold_bits(np.logical_xor.reduce, tensor)


class TensorSat(TensorAlgebra):
    """
    Tensor algebra over a SAT-backed boolean algebra.

    Typical use:
        sat = TensorSat(Solver())
        x = sat.tensor_add_variable(Shape([3, 3]))
        sat.tensor_add_clause([x, sat.tensor_not(sat.polymer(x, ...))])
        if sat.tensor_find_model():
            print(sat.tensor_get_value(x))
    """

    def __init__(self, alg: BooleanSat):
        if not isinstance(alg, BooleanSat):
            raise TypeError(f"{type(alg).__name__} is not a SAT-backed boolean algebra")
        super().__init__(alg)

    def tensor_add_variable(self, shape: Union[Shape, Iterable[int]]) -> Tensor:
        """Creates a tensor of fresh solver variables."""
        shape = shape if isinstance(shape, Shape) else Shape(shape)
        return self._tensor(shape, (self.alg.bool_add_variable() for _ in range(shape.size())))

    def tensor_add_clause(self, tensors: Sequence[Tensor]) -> None:
        """
        Adds one clause per cell position: for every index i, at least one
        of tensors[0][i], tensors[1][i], ... must be true.

        An empty list adds the empty clause (making the problem
        unsatisfiable); zero-size tensors add nothing.
        """
        if not tensors:
            self.alg.bool_add_clause([])
            return

        shape = tensors[0].shape
        for tensor in tensors[1:]:
            if tensor.shape != shape:
                raise ValueError(f"shape mismatch: {shape} and {tensor.shape}")

        for clause in zip(*(tensor.elems for tensor in tensors)):
            self.alg.bool_add_clause(clause)

    def tensor_find_model(self, assumptions: Sequence[Any] = ()) -> bool:
        return self.alg.bool_find_model(assumptions)

    def tensor_get_value(self, tensor: Tensor) -> Tensor:
        """Reads the tensor back as booleans from the last found model."""
        bits = BitVector.from_iterable(self.alg.bool_get_value(e) for e in tensor.elems)
        return Tensor(tensor.shape, bits)
