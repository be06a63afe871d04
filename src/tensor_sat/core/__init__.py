"""Core storage, shape and tensor types for Tensor SAT."""

from .genvec import (
    GenVector,
    DenseVector,
    BitVector,
    UnitVector,
    vector_for,
    register_vector_type,
)
from .shape import Shape, StrideIter
from .tensor import Tensor

__all__ = [
    "GenVector",
    "DenseVector",
    "BitVector",
    "UnitVector",
    "vector_for",
    "register_vector_type",
    "Shape",
    "StrideIter",
    "Tensor",
]
