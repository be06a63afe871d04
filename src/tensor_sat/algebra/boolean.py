"""
Two-element boolean algebra over Python bools.

Operations evaluate eagerly; tensors over this algebra are bit-packed.
"""

from typing import Iterable

from ..core.genvec import BitVector
from .base import BooleanAlgebra


class Boolean(BooleanAlgebra):
    """Concrete boolean algebra: elements are True and False."""

    elem_type = bool
    vector_type = BitVector

    def bool_lift(self, value: bool) -> bool:
        return bool(value)

    def bool_not(self, elem: bool) -> bool:
        return not elem

    def bool_or(self, elem1: bool, elem2: bool) -> bool:
        return elem1 or elem2

    def bool_and(self, elem1: bool, elem2: bool) -> bool:
        return elem1 and elem2

    def bool_xor(self, elem1: bool, elem2: bool) -> bool:
        return elem1 != elem2

    def bool_equ(self, elem1: bool, elem2: bool) -> bool:
        return elem1 == elem2

    def bool_imp(self, elem1: bool, elem2: bool) -> bool:
        return (not elem1) or elem2

    def bool_maj(self, elem1: bool, elem2: bool, elem3: bool) -> bool:
        return (elem1 + elem2 + elem3) >= 2

    def bool_sum3(self, elem1: bool, elem2: bool, elem3: bool) -> bool:
        return bool((elem1 + elem2 + elem3) & 1)

    def bool_all(self, elems: Iterable[bool]) -> bool:
        return all(elems)

    def bool_any(self, elems: Iterable[bool]) -> bool:
        return any(elems)

    def bool_sum(self, elems: Iterable[bool]) -> bool:
        return bool(sum(elems) & 1)
