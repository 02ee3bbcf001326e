"""
Elementary functions.
"""

from __future__ import annotations

import math

from pytabulate.exceptions import InvalidArgumentError
from pytabulate.functions.core import Function


class _Everywhere(Function):
    """Function defined on the whole real line."""

    def domain_left(self) -> float:
        return -math.inf

    def domain_right(self) -> float:
        return math.inf

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Sin(_Everywhere):
    """Sine."""

    def value_at(self, x: float) -> float:
        if math.isinf(x):
            return math.nan
        return math.sin(x)


class Cos(_Everywhere):
    """Cosine."""

    def value_at(self, x: float) -> float:
        if math.isinf(x):
            return math.nan
        return math.cos(x)


class Exp(_Everywhere):
    """Exponential; overflows to ``inf``."""

    def value_at(self, x: float) -> float:
        try:
            return math.exp(x)
        except OverflowError:
            return math.inf


class Log(Function):
    """
    Logarithm to an arbitrary base.

    Defined on ``[0, inf)``; evaluates to ``nan`` for ``x <= 0``.

    Parameters:
        base: Logarithm base, positive and different from one
    """

    def __init__(self, base: float = math.e) -> None:
        if base <= 0 or base == 1:
            msg = f"Logarithm base must be positive and not equal to 1, got {base}"
            raise InvalidArgumentError(msg)
        self.base = base

    def domain_left(self) -> float:
        return 0.0

    def domain_right(self) -> float:
        return math.inf

    def value_at(self, x: float) -> float:
        if x <= 0:
            return math.nan
        return math.log(x) / math.log(self.base)

    def __repr__(self) -> str:
        return f"Log(base={self.base})"
