"""
Approximate floating-point comparisons.

Every ordering and equality decision made by the tabulated functions goes
through these helpers so that both storage backends agree on the outcome for
identical inputs.
"""

from __future__ import annotations

EPSILON = 1e-9


def eq(a: float, b: float) -> bool:
    """``a`` and ``b`` differ by less than :data:`EPSILON`."""
    return abs(a - b) < EPSILON


def lt(a: float, b: float) -> bool:
    """``a`` is below ``b`` by more than :data:`EPSILON`."""
    return a < b - EPSILON


def gt(a: float, b: float) -> bool:
    """``a`` is above ``b`` by more than :data:`EPSILON`."""
    return a > b + EPSILON


def le(a: float, b: float) -> bool:
    """``a`` is below ``b`` or equal to it within :data:`EPSILON`."""
    return a < b + EPSILON


def ge(a: float, b: float) -> bool:
    """``a`` is above ``b`` or equal to it within :data:`EPSILON`."""
    return a > b - EPSILON


__all__ = ("EPSILON", "eq", "ge", "gt", "le", "lt")
