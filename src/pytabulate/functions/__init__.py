"""
Scalar functions.

Provides the :class:`Function` capability consumed by tabulation, a handful of
elementary functions, analytic combinations of functions and numerical
integration.
"""

from __future__ import annotations

import logging

from pytabulate.exceptions import InvalidArgumentError
from pytabulate.functions import basic, meta
from pytabulate.functions.core import Function

log = logging.getLogger(__name__)

Sin = basic.Sin
Cos = basic.Cos
Exp = basic.Exp
Log = basic.Log

Shift = meta.Shift
Scale = meta.Scale
Power = meta.Power
Sum = meta.Sum
Mult = meta.Mult
Composition = meta.Composition


def shift(function: Function, shift_x: float, shift_y: float) -> Function:
    """Translate ``function`` by ``shift_x`` along x and ``shift_y`` along y."""
    return Shift(function, shift_x, shift_y)


def scale(function: Function, scale_x: float, scale_y: float) -> Function:
    """Stretch ``function`` by ``scale_x`` along x and ``scale_y`` along y."""
    return Scale(function, scale_x, scale_y)


def power(function: Function, exponent: float) -> Function:
    """Raise ``function`` to ``exponent``."""
    return Power(function, exponent)


def sum_of(first: Function, second: Function) -> Function:
    """Pointwise sum of two functions."""
    return Sum(first, second)


def mult(first: Function, second: Function) -> Function:
    """Pointwise product of two functions."""
    return Mult(first, second)


def composition(outer: Function, inner: Function) -> Function:
    """Compose two functions as ``outer(inner(x))``."""
    return Composition(outer, inner)


def integrate(function: Function, left: float, right: float, step: float) -> float:
    """
    Integrate ``function`` over ``[left, right]`` with the trapezoid rule.

    Panels are ``step`` wide except the last one, which is cut at ``right``.

    Args:
        function: Function to integrate
        left: Lower integration bound, inside the function's domain
        right: Upper integration bound, inside the function's domain
        step: Panel width, strictly positive

    Returns:
        float: Approximation of the definite integral.

    Raises:
        InvalidArgumentError: If the interval leaves the domain, is empty, or the step is not positive.

    Examples:
        >>> from pytabulate.functions import Exp, integrate
        >>> round(integrate(Exp(), 0.0, 1.0, 1e-4), 6)
        1.718282
    """
    if left < function.domain_left() or right > function.domain_right():
        msg = (
            f"Integration interval [{left}, {right}] exceeds the domain "
            f"[{function.domain_left()}, {function.domain_right()}]"
        )
        raise InvalidArgumentError(msg)
    if left >= right:
        msg = f"Left integration bound ({left}) must be less than the right one ({right})"
        raise InvalidArgumentError(msg)
    if step <= 0:
        msg = f"Integration step must be positive, got {step}"
        raise InvalidArgumentError(msg)

    integral = 0.0
    x = left
    y_previous = function.value_at(x)
    while x < right:
        x_next = min(x + step, right)
        y_next = function.value_at(x_next)
        integral += (y_previous + y_next) * (x_next - x) / 2
        x = x_next
        y_previous = y_next

    log.debug("Integrated %r over [%s, %s] with step %s", function, left, right, step)
    return integral


__all__ = (
    "Composition",
    "Cos",
    "Exp",
    "Function",
    "Log",
    "Mult",
    "Power",
    "Scale",
    "Shift",
    "Sin",
    "Sum",
    "composition",
    "integrate",
    "mult",
    "power",
    "scale",
    "shift",
    "sum_of",
)
