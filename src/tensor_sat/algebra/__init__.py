"""Boolean algebra backends and the binary and tensor layers built on them."""

from .base import BooleanAlgebra, BooleanSat
from .trivial import Trivial
from .boolean import Boolean
from .solver import Solver, TRUE, FALSE
from .binary import BinaryAlgebra
from .tensor_alg import TensorAlgebra, BooleanTensorAlgebra, TensorSat

__all__ = [
    "BooleanAlgebra",
    "BooleanSat",
    "Trivial",
    "Boolean",
    "Solver",
    "TRUE",
    "FALSE",
    "BinaryAlgebra",
    "TensorAlgebra",
    "BooleanTensorAlgebra",
    "TensorSat",
]
