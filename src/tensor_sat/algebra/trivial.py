"""
Trivial boolean algebra.

Every element is None and every operation returns None. Running tensor
code over this algebra checks shapes and lengths at no storage cost.
"""

from typing import Iterable

from ..core.genvec import UnitVector
from .base import BooleanAlgebra


class Trivial(BooleanAlgebra):
    """The one-element boolean algebra."""

    elem_type = type(None)
    vector_type = UnitVector

    def bool_lift(self, value: bool) -> None:
        return None

    def bool_not(self, elem: None) -> None:
        return None

    def bool_or(self, elem1: None, elem2: None) -> None:
        return None

    def bool_and(self, elem1: None, elem2: None) -> None:
        return None

    def bool_xor(self, elem1: None, elem2: None) -> None:
        return None

    def bool_equ(self, elem1: None, elem2: None) -> None:
        return None

    def bool_imp(self, elem1: None, elem2: None) -> None:
        return None

    def bool_maj(self, elem1: None, elem2: None, elem3: None) -> None:
        return None

    def bool_sum3(self, elem1: None, elem2: None, elem3: None) -> None:
        return None

    def bool_all(self, elems: Iterable[None]) -> None:
        return None

    def bool_any(self, elems: Iterable[None]) -> None:
        return None

    def bool_sum(self, elems: Iterable[None]) -> None:
        return None
