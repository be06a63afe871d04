"""
Shapes and Stride Iteration

Linear layout:
    A tensor of shape [d0, d1, ..., dn] stores cell (c0, c1, ..., cn) at

        index = c0 * s0 + c1 * s1 + ... + cn * sn

    with strides s0 = 1 and s(k+1) = sk * dk. The first dimension varies
    fastest.

Stride iteration:
    StrideIter walks a target shape like an odometer and yields, for each
    target position, a linear index into some source storage. Every target
    dimension carries an accumulated stride; the polymer operation adds
    the source stride of each source dimension onto the target dimension
    it is mapped to. Target dimensions with no source get stride 0
    (broadcast), dimensions receiving several sources get the sum
    (diagonal).
"""

import math
from typing import Iterable, Iterator, List, Sequence, Tuple


class Shape:
    """
    Immutable sequence of non-negative dimension sizes.

    size = product of dims (1 for the empty shape, 0 if any dim is 0)
    """

    __slots__ = ("_dims",)

    def __init__(self, dims: Iterable[int]):
        dims = tuple(dims)
        for dim in dims:
            if dim < 0:
                raise ValueError(f"dimensions must be non-negative, got {list(dims)}")
        self._dims: Tuple[int, ...] = dims

    @property
    def dims(self) -> Tuple[int, ...]:
        return self._dims

    def __len__(self) -> int:
        return len(self._dims)

    def __getitem__(self, idx: int) -> int:
        return self._dims[idx]

    def __iter__(self) -> Iterator[int]:
        return iter(self._dims)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Shape):
            return NotImplemented
        return self._dims == other._dims

    def __hash__(self) -> int:
        return hash(self._dims)

    def __repr__(self) -> str:
        return f"Shape({list(self._dims)})"

    def is_empty(self) -> bool:
        """Checks if the number of dimensions is zero."""
        return not self._dims

    def is_rectangular(self, dim: int) -> bool:
        """Checks if all dimensions are equal to `dim`."""
        return all(d == dim for d in self._dims)

    def size(self) -> int:
        """Number of cells a tensor of this shape holds."""
        return math.prod(self._dims)

    def split(self) -> Tuple[int, "Shape"]:
        """
        Returns the first dimension and the shape of the remaining ones.

        Raises:
            ValueError: If the shape has no dimensions
        """
        if not self._dims:
            raise ValueError("cannot split a shape with no dimensions")
        return self._dims[0], Shape(self._dims[1:])

    def insert(self, pos: int, dims: Sequence[int]) -> "Shape":
        """
        Returns a new shape with `dims` spliced in at position `pos`.

        Args:
            pos: Insertion point, 0 <= pos <= len(self)
            dims: Dimensions to insert

        Returns:
            The extended shape
        """
        if not 0 <= pos <= len(self._dims):
            raise ValueError(f"insert position {pos} out of range for {self}")
        return Shape(self._dims[:pos] + tuple(dims) + self._dims[pos:])

    def mapping(self, part: Sequence[int], rest: int) -> List[int]:
        """
        Creates a polymer mapping for this (source) shape.

        The first len(part) dimensions go to the target dimensions listed in
        `part` (each below `rest`); the remaining dimensions go to fresh
        target dimensions rest, rest + 1, ...

        Example:
            Shape([2, 3, 4]).mapping([1], 2) == [1, 2, 3]
        """
        if len(part) > len(self._dims):
            raise ValueError(f"mapping prefix {list(part)} longer than {self}")

        mapping = []
        for dim in part:
            if dim >= rest:
                raise ValueError(f"mapping entry {dim} must be less than {rest}")
            mapping.append(dim)
        mapping.extend(range(rest, rest + len(self._dims) - len(part)))
        return mapping

    def index(self, coords: Sequence[int]) -> int:
        """
        Returns the linear index of the cell at the given coordinates.

        Raises:
            ValueError: If the number of coordinates is wrong
            IndexError: If a coordinate is out of range
        """
        if len(coords) != len(self._dims):
            raise ValueError(f"expected {len(self._dims)} coordinates, got {len(coords)}")

        index = 0
        size = 1
        for coord, dim in zip(coords, self._dims):
            if not 0 <= coord < dim:
                raise IndexError(f"coordinates {list(coords)} out of range for {self}")
            index += coord * size
            size *= dim
        return index

    def strides(self) -> List[int]:
        """Returns the linear index multiplier of each dimension."""
        strides = []
        size = 1
        for dim in self._dims:
            strides.append(size)
            size *= dim
        return strides


class StrideIter:
    """
    Odometer iterator over a target shape.

    Keeps one (counter, bound, stride) triple per target dimension and a
    running index. Each step emits the running index, then advances the
    first dimension; a dimension that reaches its bound resets to zero
    (removing its accumulated stride) and carries into the next one.

    Yields nothing if any dimension is 0, and exactly one index for the
    empty shape. Not restartable: build a new one to iterate again.
    """

    def __init__(self, shape: Shape):
        self._counters = [0] * len(shape)
        self._bounds = list(shape.dims)
        self._strides = [0] * len(shape)
        self._index = 0
        self._done = any(dim == 0 for dim in self._bounds)

    def add_stride(self, dim: int, stride: int) -> None:
        """Adds `stride` to the accumulated stride of target dimension `dim`."""
        self._strides[dim] += stride

    def __iter__(self) -> "StrideIter":
        return self

    def __next__(self) -> int:
        if self._done:
            raise StopIteration

        index = self._index
        counters, bounds, strides = self._counters, self._bounds, self._strides
        for dim in range(len(bounds)):
            self._index += strides[dim]
            counters[dim] += 1
            if counters[dim] >= bounds[dim]:
                self._index -= counters[dim] * strides[dim]
                counters[dim] = 0
            else:
                return index

        self._done = True
        return index
