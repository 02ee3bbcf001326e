"""
Analytic combinations of functions.

Each wrapper delegates evaluation to the functions it holds and derives its
domain from theirs.
"""

from __future__ import annotations

import math

from pytabulate.functions.core import Function


class Shift(Function):
    """
    ``f`` translated by ``shift_x`` along the abscissa and ``shift_y`` along the ordinate.
    """

    def __init__(self, function: Function, shift_x: float, shift_y: float) -> None:
        self.function = function
        self.shift_x = shift_x
        self.shift_y = shift_y

    def domain_left(self) -> float:
        return self.function.domain_left() + self.shift_x

    def domain_right(self) -> float:
        return self.function.domain_right() + self.shift_x

    def value_at(self, x: float) -> float:
        return self.function.value_at(x - self.shift_x) + self.shift_y


class Scale(Function):
    """
    ``f`` stretched by ``scale_x`` along the abscissa and ``scale_y`` along the ordinate.

    A negative ``scale_x`` mirrors the domain; a zero ``scale_x`` collapses it
    to the single point ``0``.
    """

    def __init__(self, function: Function, scale_x: float, scale_y: float) -> None:
        self.function = function
        self.scale_x = scale_x
        self.scale_y = scale_y

    def _borders(self) -> tuple[float, float]:
        if self.scale_x == 0:
            return (0.0, 0.0)
        left = self.function.domain_left() * self.scale_x
        right = self.function.domain_right() * self.scale_x
        return (min(left, right), max(left, right))

    def domain_left(self) -> float:
        return self._borders()[0]

    def domain_right(self) -> float:
        return self._borders()[1]

    def value_at(self, x: float) -> float:
        if self.scale_x == 0:
            return self.scale_y * self.function.value_at(0.0)
        return self.scale_y * self.function.value_at(x / self.scale_x)


class Power(Function):
    """``f`` raised to a constant power; ``nan`` where the power is undefined."""

    def __init__(self, function: Function, power: float) -> None:
        self.function = function
        self.power = power

    def domain_left(self) -> float:
        return self.function.domain_left()

    def domain_right(self) -> float:
        return self.function.domain_right()

    def value_at(self, x: float) -> float:
        try:
            return math.pow(self.function.value_at(x), self.power)
        except (ValueError, ZeroDivisionError):
            return math.nan
        except OverflowError:
            return math.inf


class _Binary(Function):
    """Combination of two functions over the intersection of their domains."""

    def __init__(self, first: Function, second: Function) -> None:
        self.first = first
        self.second = second

    def domain_left(self) -> float:
        return max(self.first.domain_left(), self.second.domain_left())

    def domain_right(self) -> float:
        return min(self.first.domain_right(), self.second.domain_right())


class Sum(_Binary):
    """Pointwise sum of two functions."""

    def value_at(self, x: float) -> float:
        return self.first.value_at(x) + self.second.value_at(x)


class Mult(_Binary):
    """Pointwise product of two functions."""

    def value_at(self, x: float) -> float:
        return self.first.value_at(x) * self.second.value_at(x)


class Composition(Function):
    """``outer(inner(x))``, defined wherever ``inner`` is."""

    def __init__(self, outer: Function, inner: Function) -> None:
        self.outer = outer
        self.inner = inner

    def domain_left(self) -> float:
        return self.inner.domain_left()

    def domain_right(self) -> float:
        return self.inner.domain_right()

    def value_at(self, x: float) -> float:
        return self.outer.value_at(self.inner.value_at(x))
