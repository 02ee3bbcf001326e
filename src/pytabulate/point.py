"""
Sample points of a tabulated function.

Provides the immutable :class:`Point` model shared by every storage backend.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, ValidationError

from pytabulate import tolerance
from pytabulate.exceptions import InvalidArgumentError, custom_error_msg

Coordinate = Annotated[
    float,
    custom_error_msg(
        {
            "float_parsing": "Point coordinate must be a number, got {input}",
            "float_type": "Point coordinate must be a number, got {input}",
        }
    ),
]


def _hash_key(value: float) -> float | None:
    # hash(nan) is identity based, so NaN gets a fixed key
    if math.isnan(value):
        return None
    return round(value, 9)


class Point(BaseModel):
    """
    A single ``(x, y)`` sample.

    Points are frozen, so a point handed out by a tabulated function can never
    alias the function's internal storage. Two points compare equal when both
    coordinates agree within :data:`pytabulate.tolerance.EPSILON`.

    Parameters:
        x: Abscissa of the sample
        y: Ordinate of the sample

    Examples:
        >>> Point(1.0, 2.0) == Point(x=1.0 + 1e-12, y=2.0)
        True
        >>> str(Point(1, 2))
        '(1.0; 2.0)'
    """

    model_config = ConfigDict(frozen=True)

    x: Coordinate
    y: Coordinate

    def __init__(self, *coordinates: float, **data: Any) -> None:
        if len(coordinates) > 2:
            msg = f"Point takes at most 2 positional coordinates, got {len(coordinates)}"
            raise TypeError(msg)
        super().__init__(**dict(zip(("x", "y"), coordinates, strict=False)), **data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return tolerance.eq(self.x, other.x) and tolerance.eq(self.y, other.y)

    def __hash__(self) -> int:
        """
        Hash of both coordinates rounded to 9 decimal places.

        Tolerance equality is not transitive, so two points that compare equal
        can still straddle a rounding boundary and hash differently.
        """
        return hash((_hash_key(self.x), _hash_key(self.y)))

    def __str__(self) -> str:
        return f"({self.x}; {self.y})"

    def with_x(self, x: float) -> Point:
        """Return a copy of this point with a new abscissa."""
        return Point(x, self.y)

    def with_y(self, y: float) -> Point:
        """Return a copy of this point with a new ordinate."""
        return Point(self.x, y)

    def as_tuple(self) -> tuple[float, float]:
        """Return the point as a plain ``(x, y)`` tuple."""
        return (self.x, self.y)


PointLike = Point | Sequence[float]


def coerce_point(point: PointLike | None) -> Point:
    """
    Convert a point-like value into a :class:`Point`.

    Args:
        point: A :class:`Point` or an ``(x, y)`` pair.

    Returns:
        Point: The matching point.

    Raises:
        InvalidArgumentError: If ``point`` is ``None`` or is not an ``(x, y)`` pair of numbers.
    """
    if point is None:
        msg = "Point must not be None"
        raise InvalidArgumentError(msg)
    if isinstance(point, Point):
        return point
    try:
        x, y = point
    except (TypeError, ValueError) as exc:
        msg = f"Expected an (x, y) pair, got {point!r}"
        raise InvalidArgumentError(msg) from exc
    try:
        return Point(x, y)
    except ValidationError as exc:
        msg = f"Invalid point {point!r}: {exc}"
        raise InvalidArgumentError(msg) from exc


__all__ = ("Point", "PointLike", "coerce_point")
