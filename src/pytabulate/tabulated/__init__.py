"""
Tabulated functions.

Provides the :class:`TabulatedFunction` contract and its two storage backends,
a growable contiguous array and a circular doubly linked list.
"""

from __future__ import annotations

from pytabulate.tabulated.array import ArrayTabulatedFunction
from pytabulate.tabulated.core import (
    TabulatedFunction,
    checked_points,
    interpolate,
    uniform_grid,
)
from pytabulate.tabulated.linked_list import LinkedListTabulatedFunction

registered_backends: dict[str, type[TabulatedFunction]] = {
    "array": ArrayTabulatedFunction,
    "linked_list": LinkedListTabulatedFunction,
}

__all__ = (
    "ArrayTabulatedFunction",
    "LinkedListTabulatedFunction",
    "TabulatedFunction",
    "checked_points",
    "interpolate",
    "registered_backends",
    "uniform_grid",
)
