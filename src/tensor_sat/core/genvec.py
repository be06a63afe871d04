"""
Generic Vector Storage for Tensor SAT

One sequence contract, three interchangeable representations:
    - DenseVector: one Python object per element (literals, ints, anything)
    - BitVector:   one bit per element, packed into numpy uint32 words
    - UnitVector:  only a length is stored, for the placeholder element None

The representation is chosen by element type through vector_for(), so the
same tensor and arithmetic code runs over all of them:

    vector_for(bool)        -> BitVector
    vector_for(type(None))  -> UnitVector
    vector_for(int)         -> DenseVector

BitVector bit i lives in word i // 32 at position i % 32. Bits at
positions >= len are always zero.
"""

import sys
from abc import ABC, abstractmethod
from itertools import islice, repeat
from typing import Any, Dict, Iterable, Iterator, List, Type

import numpy as np

_WORD_BITS = 32
_ALL_ONES = np.uint32(0xFFFFFFFF)


def _num_words(bits: int) -> int:
    return (bits + _WORD_BITS - 1) // _WORD_BITS


class GenVector(ABC):
    """
    Abstract generic vector.

    Subclasses must implement the storage primitives (push, pop, get, set,
    resize, ...). Bulk operations like concat, split and gather have
    generic defaults built on iteration, and may be specialized.

    Invariant: len(vec) <= vec.capacity
    """

    __slots__ = ()

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def new(cls) -> "GenVector":
        """Constructs a new empty vector."""
        return cls()

    @classmethod
    @abstractmethod
    def with_capacity(cls, capacity: int) -> "GenVector":
        """Constructs an empty vector able to hold `capacity` elements."""
        pass

    @classmethod
    def from_elem(cls, elem: Any) -> "GenVector":
        """Creates a vector with a single element."""
        vec = cls.with_capacity(1)
        vec.push(elem)
        return vec

    @classmethod
    def from_iterable(cls, elems: Iterable[Any]) -> "GenVector":
        """Collects the elements of an iterable into a new vector."""
        vec = cls()
        vec.extend(elems)
        return vec

    @classmethod
    def concat(cls, parts: Iterable["GenVector"]) -> "GenVector":
        """
        Concatenates the given vectors into a new one.

        Args:
            parts: Vectors to join, in order

        Returns:
            A vector holding all elements of all parts
        """
        parts = list(parts)
        result = cls.with_capacity(sum(len(part) for part in parts))
        for part in parts:
            result.extend(part)
        return result

    def split(self, length: int) -> List["GenVector"]:
        """
        Splits this vector into consecutive vectors of the given length.

        A trailing remainder shorter than `length` is dropped, so the number
        of chunks is len(self) // length. An empty vector gives no chunks.

        Args:
            length: Size of each chunk (must be positive unless empty)

        Returns:
            List of chunks
        """
        if len(self) == 0:
            return []
        if length <= 0:
            raise ValueError(f"split length must be positive, got {length}")

        count = len(self) // length
        iterator = iter(self)
        return [type(self).from_iterable(islice(iterator, length)) for _ in range(count)]

    # ------------------------------------------------------------------
    # Storage primitives
    # ------------------------------------------------------------------

    @abstractmethod
    def clear(self) -> None:
        """Removes all elements, keeping the capacity."""
        pass

    @abstractmethod
    def truncate(self, new_len: int) -> None:
        """Keeps the first `new_len` elements. Fails if `new_len` > len."""
        pass

    @abstractmethod
    def resize(self, new_len: int, elem: Any) -> None:
        """Grows by appending copies of `elem`, or truncates to `new_len`."""
        pass

    @abstractmethod
    def reserve(self, additional: int) -> None:
        """Reserves room for at least `additional` more elements."""
        pass

    @abstractmethod
    def push(self, elem: Any) -> None:
        """Appends an element to the back of the vector."""
        pass

    @abstractmethod
    def pop(self) -> Any:
        """Removes and returns the last element. Fails on an empty vector."""
        pass

    @abstractmethod
    def get(self, index: int) -> Any:
        """Returns the element at `index`, raising IndexError if out of range."""
        pass

    @abstractmethod
    def set(self, index: int, elem: Any) -> None:
        """Sets the element at `index`, raising IndexError if out of range."""
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

    @abstractmethod
    def __iter__(self) -> Iterator[Any]:
        pass

    @property
    @abstractmethod
    def capacity(self) -> int:
        """Number of elements the vector can hold without growing."""
        pass

    # ------------------------------------------------------------------
    # Fast path
    #
    # The caller guarantees 0 <= index < len(self). Only hot loops whose
    # bound already implies this (e.g. walking a tensor) should use these.
    # ------------------------------------------------------------------

    def get_unchecked(self, index: int) -> Any:
        return self.get(index)

    def set_unchecked(self, index: int, elem: Any) -> None:
        self.set(index, elem)

    # ------------------------------------------------------------------
    # Derived operations
    # ------------------------------------------------------------------

    def is_empty(self) -> bool:
        return len(self) == 0

    def extend(self, elems: Iterable[Any]) -> None:
        for elem in elems:
            self.push(elem)

    def append(self, other: "GenVector") -> None:
        """
        Moves all elements of `other` onto this vector, leaving `other` empty.

        Raises:
            ValueError: If `other` is this vector
        """
        self._check_not_self(other)
        self.extend(other)
        other.clear()

    def iter_range(self, start: int, stop: int) -> Iterator[Any]:
        """Returns an iterator over the elements with index in [start, stop)."""
        self._check_range(start, stop)
        return islice(iter(self), start, stop)

    def gather(self, indices: Iterable[int]) -> "GenVector":
        """
        Builds a new vector from the elements at the given indices.

        This is the kernel of the polymer operation: the indices come from
        a StrideIter and are always in range.
        """
        get = self.get_unchecked
        return type(self).from_iterable(get(index) for index in indices)

    def copy(self) -> "GenVector":
        return type(self).from_iterable(self)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self):
            raise IndexError(f"index {index} out of range for vector of length {len(self)}")

    def _check_not_self(self, other: "GenVector") -> None:
        if other is self:
            raise ValueError("cannot append a vector to itself")

    def _check_range(self, start: int, stop: int) -> None:
        if not 0 <= start <= stop <= len(self):
            raise IndexError(
                f"range [{start}, {stop}) out of bounds for vector of length {len(self)}"
            )

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return len(self) == len(other) and all(a == b for a, b in zip(self, other))

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"


class DenseVector(GenVector):
    """
    Vector storing one Python object per element.

    Used for solver literals, plain integers and any element type without
    a specialized representation.
    """

    __slots__ = ("_data", "_capacity")

    def __init__(self, elems: Iterable[Any] = ()):
        self._data: List[Any] = list(elems)
        self._capacity = len(self._data)

    @classmethod
    def with_capacity(cls, capacity: int) -> "DenseVector":
        vec = cls()
        vec._capacity = capacity
        return vec

    @classmethod
    def from_iterable(cls, elems: Iterable[Any]) -> "DenseVector":
        return cls(elems)

    def clear(self) -> None:
        self._data.clear()

    def truncate(self, new_len: int) -> None:
        if new_len > len(self._data):
            raise ValueError(f"cannot truncate vector of length {len(self._data)} to {new_len}")
        del self._data[new_len:]

    def resize(self, new_len: int, elem: Any) -> None:
        if new_len > len(self._data):
            self._data.extend(repeat(elem, new_len - len(self._data)))
        else:
            del self._data[new_len:]

    def reserve(self, additional: int) -> None:
        self._capacity = max(self._capacity, len(self._data) + additional)

    def push(self, elem: Any) -> None:
        self._data.append(elem)

    def pop(self) -> Any:
        if not self._data:
            raise IndexError("pop from empty vector")
        return self._data.pop()

    def extend(self, elems: Iterable[Any]) -> None:
        self._data.extend(elems)

    def get(self, index: int) -> Any:
        self._check_index(index)
        return self._data[index]

    def get_unchecked(self, index: int) -> Any:
        return self._data[index]

    def set(self, index: int, elem: Any) -> None:
        self._check_index(index)
        self._data[index] = elem

    def set_unchecked(self, index: int, elem: Any) -> None:
        self._data[index] = elem

    def iter_range(self, start: int, stop: int) -> Iterator[Any]:
        self._check_range(start, stop)
        return iter(self._data[start:stop])

    def gather(self, indices: Iterable[int]) -> "DenseVector":
        data = self._data
        return DenseVector([data[index] for index in indices])

    def copy(self) -> "DenseVector":
        return DenseVector(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data)

    @property
    def capacity(self) -> int:
        return max(self._capacity, len(self._data))


class BitVector(GenVector):
    """
    Bit-packed vector of booleans.

    Bits live in a numpy uint32 array, bit i in word i // 32 at position
    i % 32. Bits at positions >= len are always zero, which lets equality
    and bulk conversion work directly on the words.
    """

    __slots__ = ("_words", "_len")

    def __init__(self, elems: Iterable[bool] = ()):
        self._words = np.zeros(0, dtype=np.uint32)
        self._len = 0
        self.extend(elems)

    @classmethod
    def with_capacity(cls, capacity: int) -> "BitVector":
        vec = cls()
        vec._words = np.zeros(_num_words(capacity), dtype=np.uint32)
        return vec

    @classmethod
    def from_iterable(cls, elems: Iterable[bool]) -> "BitVector":
        return cls.from_numpy(np.fromiter(elems, dtype=bool))

    @classmethod
    def concat(cls, parts: Iterable[GenVector]) -> "BitVector":
        arrays = [
            part.to_numpy() if isinstance(part, BitVector) else np.fromiter(part, dtype=bool)
            for part in parts
        ]
        if not arrays:
            return cls()
        return cls.from_numpy(np.concatenate(arrays))

    @classmethod
    def from_numpy(cls, bits: np.ndarray) -> "BitVector":
        """
        Packs a numpy array of booleans (flattened in C order).

        Args:
            bits: Array convertible to dtype bool

        Returns:
            BitVector with the same elements
        """
        bits = np.asarray(bits, dtype=bool).ravel()
        packed = np.packbits(bits, bitorder="little")

        padded = np.zeros(_num_words(bits.size) * 4, dtype=np.uint8)
        padded[: packed.size] = packed

        vec = cls()
        vec._words = padded.view("<u4").astype(np.uint32)
        vec._len = int(bits.size)
        return vec

    def to_numpy(self) -> np.ndarray:
        """Unpacks the bits into a numpy bool array of length len(self)."""
        return self._unpack(0, self._len)

    def _unpack(self, start: int, stop: int) -> np.ndarray:
        first = start // _WORD_BITS
        last = _num_words(stop)
        raw = self._words[first:last].astype("<u4").view(np.uint8)
        bits = np.unpackbits(raw, bitorder="little")
        offset = start - first * _WORD_BITS
        return bits[offset : offset + stop - start].astype(bool)

    def _grow(self, new_len: int) -> None:
        needed = _num_words(new_len)
        if needed > len(self._words):
            words = np.zeros(max(needed, 2 * len(self._words)), dtype=np.uint32)
            words[: len(self._words)] = self._words
            self._words = words

    def _fill_ones(self, start: int, stop: int) -> None:
        while start < stop and start % _WORD_BITS:
            self.set_unchecked(start, True)
            start += 1
        full_stop = stop - stop % _WORD_BITS
        if full_stop > start:
            self._words[start // _WORD_BITS : full_stop // _WORD_BITS] = _ALL_ONES
            start = full_stop
        while start < stop:
            self.set_unchecked(start, True)
            start += 1

    def clear(self) -> None:
        self._words[:] = 0
        self._len = 0

    def truncate(self, new_len: int) -> None:
        if new_len > self._len:
            raise ValueError(f"cannot truncate vector of length {self._len} to {new_len}")

        word, bit = divmod(new_len, _WORD_BITS)
        if bit:
            self._words[word] &= np.uint32((1 << bit) - 1)
            word += 1
        self._words[word:] = 0
        self._len = new_len

    def resize(self, new_len: int, elem: bool) -> None:
        if new_len <= self._len:
            self.truncate(new_len)
            return

        old_len = self._len
        self._grow(new_len)
        self._len = new_len
        if elem:
            self._fill_ones(old_len, new_len)

    def reserve(self, additional: int) -> None:
        self._grow(self._len + additional)

    def push(self, elem: bool) -> None:
        self._grow(self._len + 1)
        self._len += 1
        if elem:
            self.set_unchecked(self._len - 1, True)

    def pop(self) -> bool:
        if self._len == 0:
            raise IndexError("pop from empty vector")
        elem = self.get_unchecked(self._len - 1)
        self.set_unchecked(self._len - 1, False)
        self._len -= 1
        return elem

    def extend(self, elems: Iterable[bool]) -> None:
        bits = np.fromiter(elems, dtype=bool)
        if bits.size:
            self.append(BitVector.from_numpy(bits))

    def append(self, other: GenVector) -> None:
        self._check_not_self(other)
        if len(other) == 0:
            return
        if isinstance(other, BitVector):
            bits = other.to_numpy()
        else:
            bits = np.fromiter(other, dtype=bool)
        merged = BitVector.from_numpy(np.concatenate([self.to_numpy(), bits]))
        self._words = merged._words
        self._len = merged._len
        other.clear()

    def get(self, index: int) -> bool:
        self._check_index(index)
        return self.get_unchecked(index)

    def get_unchecked(self, index: int) -> bool:
        word = int(self._words[index // _WORD_BITS])
        return bool((word >> (index % _WORD_BITS)) & 1)

    def set(self, index: int, elem: bool) -> None:
        self._check_index(index)
        self.set_unchecked(index, elem)

    def set_unchecked(self, index: int, elem: bool) -> None:
        mask = np.uint32(1 << (index % _WORD_BITS))
        if elem:
            self._words[index // _WORD_BITS] |= mask
        else:
            self._words[index // _WORD_BITS] &= ~mask

    def iter_range(self, start: int, stop: int) -> Iterator[bool]:
        self._check_range(start, stop)
        return iter(self._unpack(start, stop).tolist())

    def gather(self, indices: Iterable[int]) -> "BitVector":
        positions = np.fromiter(indices, dtype=np.intp)
        return BitVector.from_numpy(self.to_numpy()[positions])

    def split(self, length: int) -> List["BitVector"]:
        if self._len == 0:
            return []
        if length <= 0:
            raise ValueError(f"split length must be positive, got {length}")

        count = self._len // length
        bits = self.to_numpy()[: count * length].reshape(count, length)
        return [BitVector.from_numpy(row) for row in bits]

    def copy(self) -> "BitVector":
        vec = BitVector()
        vec._words = self._words.copy()
        vec._len = self._len
        return vec

    def __len__(self) -> int:
        return self._len

    def __iter__(self) -> Iterator[bool]:
        return iter(self.to_numpy().tolist())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitVector):
            return NotImplemented
        if self._len != other._len:
            return False
        count = _num_words(self._len)
        return bool(np.array_equal(self._words[:count], other._words[:count]))

    __hash__ = None

    @property
    def capacity(self) -> int:
        return len(self._words) * _WORD_BITS


class UnitVector(GenVector):
    """
    Vector of placeholder elements.

    Only the length is stored; every element is None. Algorithms written
    against GenVector behave identically on shapes and lengths while
    paying nothing for the element contents.
    """

    __slots__ = ("_len",)

    def __init__(self, elems: Iterable[None] = ()):
        self._len = sum(1 for _ in elems)

    @classmethod
    def of_length(cls, length: int) -> "UnitVector":
        vec = cls()
        vec._len = length
        return vec

    @classmethod
    def with_capacity(cls, capacity: int) -> "UnitVector":
        return cls()

    @classmethod
    def from_iterable(cls, elems: Iterable[None]) -> "UnitVector":
        return cls(elems)

    def split(self, length: int) -> List["UnitVector"]:
        if self._len == 0:
            return []
        if length <= 0:
            raise ValueError(f"split length must be positive, got {length}")
        return [UnitVector.of_length(length) for _ in range(self._len // length)]

    def clear(self) -> None:
        self._len = 0

    def truncate(self, new_len: int) -> None:
        if new_len > self._len:
            raise ValueError(f"cannot truncate vector of length {self._len} to {new_len}")
        self._len = new_len

    def resize(self, new_len: int, elem: None) -> None:
        self._len = new_len

    def reserve(self, additional: int) -> None:
        pass

    def push(self, elem: None) -> None:
        self._len += 1

    def pop(self) -> None:
        if self._len == 0:
            raise IndexError("pop from empty vector")
        self._len -= 1

    def extend(self, elems: Iterable[None]) -> None:
        self._len += sum(1 for _ in elems)

    def append(self, other: GenVector) -> None:
        self._check_not_self(other)
        self._len += len(other)
        other.clear()

    def get(self, index: int) -> None:
        self._check_index(index)

    def get_unchecked(self, index: int) -> None:
        return None

    def set(self, index: int, elem: None) -> None:
        self._check_index(index)

    def set_unchecked(self, index: int, elem: None) -> None:
        pass

    def iter_range(self, start: int, stop: int) -> Iterator[None]:
        self._check_range(start, stop)
        return repeat(None, stop - start)

    def gather(self, indices: Iterable[int]) -> "UnitVector":
        return UnitVector(None for _ in indices)

    def copy(self) -> "UnitVector":
        return UnitVector.of_length(self._len)

    def __len__(self) -> int:
        return self._len

    def __iter__(self) -> Iterator[None]:
        return repeat(None, self._len)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UnitVector):
            return NotImplemented
        return self._len == other._len

    __hash__ = None

    def __repr__(self) -> str:
        return f"UnitVector(len={self._len})"

    @property
    def capacity(self) -> int:
        return sys.maxsize


_VECTOR_TYPES: Dict[type, Type[GenVector]] = {
    bool: BitVector,
    np.bool_: BitVector,
    type(None): UnitVector,
}


def vector_for(elem_type: type) -> Type[GenVector]:
    """
    Returns the vector representation used for an element type.

    Args:
        elem_type: Element type (e.g. bool, int, type(None))

    Returns:
        BitVector for booleans, UnitVector for None, DenseVector otherwise
    """
    return _VECTOR_TYPES.get(elem_type, DenseVector)


def register_vector_type(elem_type: type, vector_type: Type[GenVector]) -> None:
    """Selects `vector_type` as the storage for elements of `elem_type`."""
    _VECTOR_TYPES[elem_type] = vector_type
