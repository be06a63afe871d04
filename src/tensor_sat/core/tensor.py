"""
Tensor: multidimensional array over generic vector storage.

A tensor is a Shape plus a GenVector holding exactly shape.size() cells in
linear order (first dimension fastest). The element type decides the
storage: booleans are bit-packed, solver literals are dense, placeholder
elements take no space.

Reindexing is done by a single operation, polymer:

    result[c'] = self[c]   where c'[mapping[i]] = c[i]

    - permutation:  mapping [1, 0] on a matrix is the transpose
    - broadcast:    target dimensions not in mapping repeat the data
    - diagonal:     two source dimensions mapped to the same target
"""

from typing import Any, Iterable, Optional, Sequence, Type, Union

from .genvec import GenVector, vector_for
from .shape import Shape, StrideIter


def _as_shape(shape: Union[Shape, Iterable[int]]) -> Shape:
    return shape if isinstance(shape, Shape) else Shape(shape)


class Tensor:
    """
    A shape-tagged flat vector of elements.

    Invariant: len(elems) == shape.size()
    """

    __slots__ = ("_shape", "_elems")

    def __init__(self, shape: Union[Shape, Iterable[int]], elems: GenVector):
        """
        Creates a tensor of the given shape and elements.

        Args:
            shape: Shape (or dimension list) of the tensor
            elems: Cells in linear order; must hold exactly shape.size()
        """
        shape = _as_shape(shape)
        if shape.size() != len(elems):
            raise ValueError(
                f"{shape} needs {shape.size()} elements, got {len(elems)}"
            )
        self._shape = shape
        self._elems = elems

    @classmethod
    def constant(
        cls,
        shape: Union[Shape, Iterable[int]],
        elem: Any,
        vector_type: Optional[Type[GenVector]] = None,
    ) -> "Tensor":
        """
        Creates a tensor with every cell set to `elem`.

        Args:
            shape: Shape of the tensor
            elem: Fill value
            vector_type: Storage to use (default: chosen by type of elem)
        """
        shape = _as_shape(shape)
        vector_type = vector_type or vector_for(type(elem))
        size = shape.size()
        elems = vector_type.with_capacity(size)
        elems.resize(size, elem)
        return cls(shape, elems)

    @classmethod
    def from_iterable(
        cls,
        shape: Union[Shape, Iterable[int]],
        elems: Iterable[Any],
        elem_type: type,
    ) -> "Tensor":
        """Creates a tensor from cells in linear order."""
        return cls(shape, vector_for(elem_type).from_iterable(elems))

    @property
    def shape(self) -> Shape:
        return self._shape

    @property
    def elems(self) -> GenVector:
        return self._elems

    def very_slow_get(self, coords: Sequence[int]) -> Any:
        """
        Returns the cell at the given coordinates.

        Intended for tests and setup code; iterate over elems instead
        when touching many cells.
        """
        return self._elems.get(self._shape.index(coords))

    def very_slow_set(self, coords: Sequence[int], elem: Any) -> None:
        """Sets the cell at the given coordinates."""
        self._elems.set(self._shape.index(coords), elem)

    def polymer(self, shape: Union[Shape, Iterable[int]], mapping: Sequence[int]) -> "Tensor":
        """
        Creates a new tensor of the given shape with permuted, identified
        or new dummy coordinates.

        Args:
            shape: Shape of the result
            mapping: For every dimension i of this tensor, the dimension of
                the result it corresponds to; self.shape[i] must equal
                shape[mapping[i]]

        Returns:
            The reindexed tensor
        """
        shape = _as_shape(shape)
        if len(mapping) != len(self._shape):
            raise ValueError(
                f"mapping {list(mapping)} does not match the rank of {self._shape}"
            )

        iterator = StrideIter(shape)
        strides = self._shape.strides()
        for idx, val in enumerate(mapping):
            if not 0 <= val < len(shape) or self._shape[idx] != shape[val]:
                raise ValueError(
                    f"mapping {list(mapping)} from {self._shape} to {shape} is invalid"
                )
            iterator.add_stride(val, strides[idx])

        return Tensor(shape, self._elems.gather(iterator))

    def reshape_join(self, count: int) -> None:
        """
        Joins the first `count` dimensions into one, in place.

        The elements are not touched, only the shape. With count == 0 a
        new leading dimension of size 1 is created.
        """
        if not 0 <= count <= len(self._shape):
            raise ValueError(f"cannot join {count} dimensions of {self._shape}")

        dims = self._shape.dims
        head = 1
        for dim in dims[:count]:
            head *= dim
        self._shape = Shape((head,) + dims[count:])

    def copy(self) -> "Tensor":
        return Tensor(self._shape, self._elems.copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tensor):
            return NotImplemented
        return self._shape == other._shape and self._elems == other._elems

    __hash__ = None

    def __repr__(self) -> str:
        return f"Tensor({self._shape!r}, {self._elems!r})"
