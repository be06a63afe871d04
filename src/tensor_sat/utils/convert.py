"""
Conversion between boolean tensors and numpy / torch arrays.

Tensors store the first dimension fastest (Fortran order), numpy and torch
default to C order. The converters keep coordinates aligned:

    to_numpy(t)[i, j, k] == t.very_slow_get([i, j, k])
"""

import numpy as np
import torch

from ..core.genvec import BitVector
from ..core.shape import Shape
from ..core.tensor import Tensor


def to_numpy(tensor: Tensor) -> np.ndarray:
    """
    Convert a concrete boolean tensor to a numpy bool array.

    Args:
        tensor: Tensor with boolean cells

    Returns:
        array: bool array of shape tensor.shape.dims
    """
    elems = tensor.elems
    if isinstance(elems, BitVector):
        bits = elems.to_numpy()
    else:
        bits = np.fromiter(elems, dtype=bool, count=len(elems))
    return bits.reshape(tensor.shape.dims, order="F")


def from_numpy(array: np.ndarray) -> Tensor:
    """Convert an array (cast to bool) into a bit-packed tensor."""
    array = np.asarray(array, dtype=bool)
    return Tensor(Shape(array.shape), BitVector.from_numpy(array.ravel(order="F")))


def to_torch(tensor: Tensor, device: torch.device = None) -> torch.Tensor:
    """
    Convert a concrete boolean tensor to a torch bool tensor.

    Args:
        tensor: Tensor with boolean cells
        device: Target device (default: CPU)

    Returns:
        torch.Tensor of dtype torch.bool and shape tensor.shape.dims
    """
    result = torch.from_numpy(np.ascontiguousarray(to_numpy(tensor)))
    if device is not None:
        result = result.to(device)
    return result


def from_torch(data: torch.Tensor) -> Tensor:
    """Convert a torch tensor (nonzero means true) into a bit-packed tensor."""
    return from_numpy(data.detach().cpu().numpy().astype(bool))
