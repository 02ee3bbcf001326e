"""
Tabulated function contract.

Provides the abstract :class:`TabulatedFunction` shared by the array and
linked-list backends: construction helpers, index and ordering checks, and
structural equality that holds across backends.
"""

from __future__ import annotations

import logging
import math
import operator
from abc import abstractmethod
from collections.abc import Iterable, Iterator, Sequence
from typing import Any, ClassVar, TypeVar

import numpy as np

from pytabulate import tolerance
from pytabulate.exceptions import (
    IndexOutOfRangeError,
    InvalidArgumentError,
    OrderingViolationError,
    TooFewPointsError,
)
from pytabulate.functions.core import Function
from pytabulate.point import Point, PointLike, coerce_point
from pytabulate.typing.aliases import FloatArray

log = logging.getLogger(__name__)

TableT = TypeVar("TableT", bound="TabulatedFunction")


def uniform_grid(left: float, right: float, count: int) -> FloatArray:
    """
    Evenly spaced abscissas ``left + i * step`` for ``i`` in ``range(count)``.

    Args:
        left: First abscissa
        right: Last abscissa, strictly greater than ``left``
        count: Number of abscissas, at least two

    Returns:
        FloatArray: The grid, with ``step = (right - left) / (count - 1)``.

    Raises:
        InvalidArgumentError: If the bounds are not increasing or ``count < 2``.

    Examples:
        >>> uniform_grid(0.0, 1.0, 5).tolist()
        [0.0, 0.25, 0.5, 0.75, 1.0]
    """
    if not left < right:
        msg = f"Left domain border ({left}) must be less than the right one ({right})"
        raise InvalidArgumentError(msg)
    try:
        count = operator.index(count)
    except TypeError as exc:
        msg = f"Point count must be an integer, got {count!r}"
        raise InvalidArgumentError(msg) from exc
    if count < 2:
        msg = f"A tabulated function needs at least 2 points, got {count}"
        raise InvalidArgumentError(msg)
    step = (right - left) / (count - 1)
    return left + np.arange(count, dtype=np.float64) * step


def checked_points(points: Iterable[PointLike | None]) -> list[Point]:
    """
    Validate an explicit point sequence for construction.

    Args:
        points: Candidate points, as :class:`Point` objects or ``(x, y)`` pairs

    Returns:
        list[Point]: The points, strictly increasing in x.

    Raises:
        InvalidArgumentError: If fewer than two points are given, a point is
            ``None`` or has a NaN abscissa, or the abscissas do not strictly increase.
    """
    result: list[Point] = []
    for index, candidate in enumerate(points):
        if candidate is None:
            msg = f"Point {index} must not be None"
            raise InvalidArgumentError(msg)
        point = coerce_point(candidate)
        if math.isnan(point.x):
            msg = f"Point {index} has an undefined abscissa"
            raise InvalidArgumentError(msg)
        if result and tolerance.le(point.x, result[-1].x):
            msg = (
                f"Points must be strictly increasing in x: point {index} (x={point.x}) "
                f"does not follow x={result[-1].x}"
            )
            raise InvalidArgumentError(msg)
        result.append(point)
    if len(result) < 2:
        msg = f"A tabulated function needs at least 2 points, got {len(result)}"
        raise InvalidArgumentError(msg)
    return result


def interpolate(x: float, left: Point, right: Point) -> float:
    """Linear interpolation between two samples."""
    return left.y + (x - left.x) * (right.y - left.y) / (right.x - left.x)


class TabulatedFunction(Function):
    """
    Function given by a finite set of samples, strictly increasing in x.

    The domain is ``[first x, last x]``. Inside it the function is evaluated by
    linear interpolation between neighbouring samples; outside it evaluates to
    ``nan``. Every comparison of abscissas goes through :mod:`pytabulate.tolerance`.

    Subclasses provide the storage. Equality is structural: two tabulated
    functions are equal when they hold the same number of points and the points
    agree pairwise within tolerance, whichever backend stores them.

    Attributes:
        deletion_floor: :meth:`delete_point` refuses to run when the function holds
            this many points or fewer.
    """

    deletion_floor: ClassVar[int] = 2

    @abstractmethod
    def __init__(self, points: Iterable[PointLike]) -> None: ...

    @classmethod
    def from_grid(cls: type[TableT], left: float, right: float, count: int) -> TableT:
        """
        Build a function on an even grid over ``[left, right]`` with all values zero.

        Args:
            left: Left domain border
            right: Right domain border
            count: Number of points

        Returns:
            The new tabulated function.
        """
        return cls(Point(x, 0.0) for x in uniform_grid(left, right, count).tolist())

    @classmethod
    def from_values(
        cls: type[TableT], left: float, right: float, values: Sequence[float] | FloatArray
    ) -> TableT:
        """
        Build a function on an even grid over ``[left, right]`` with the given values.

        Args:
            left: Left domain border
            right: Right domain border
            values: One value per grid point; the grid has ``len(values)`` points

        Returns:
            The new tabulated function.
        """
        ys = np.asarray(values, dtype=np.float64)
        if ys.ndim != 1:
            msg = f"Values must be a flat sequence, got an array of shape {ys.shape}"
            raise InvalidArgumentError(msg)
        xs = uniform_grid(left, right, len(ys))
        return cls(Point(x, y) for x, y in zip(xs.tolist(), ys.tolist(), strict=True))

    @classmethod
    def from_points(cls: type[TableT], points: Iterable[PointLike]) -> TableT:
        """Build a function from explicit points, strictly increasing in x."""
        return cls(points)

    @abstractmethod
    def point_count(self) -> int:
        """Number of points."""

    @abstractmethod
    def point_at(self, index: int) -> Point:
        """Point at ``index``."""

    @abstractmethod
    def set_point(self, index: int, point: PointLike) -> None:
        """Replace the point at ``index``, keeping the abscissas ordered."""

    @abstractmethod
    def point_x(self, index: int) -> float:
        """Abscissa of the point at ``index``."""

    @abstractmethod
    def set_point_x(self, index: int, x: float) -> None:
        """Move the point at ``index`` to a new abscissa, keeping the abscissas ordered."""

    @abstractmethod
    def point_y(self, index: int) -> float:
        """Ordinate of the point at ``index``."""

    @abstractmethod
    def set_point_y(self, index: int, y: float) -> None:
        """Change the ordinate of the point at ``index``."""

    @abstractmethod
    def delete_point(self, index: int) -> None:
        """Remove the point at ``index``."""

    @abstractmethod
    def add_point(self, point: PointLike) -> None:
        """Insert a point at the position its abscissa calls for."""

    @abstractmethod
    def clone(self: TableT) -> TableT:
        """Independent copy holding equal points."""

    @abstractmethod
    def __iter__(self) -> Iterator[Point]: ...

    def points(self) -> list[Point]:
        """All points in index order."""
        return list(self)

    def _check_index(self, index: int) -> None:
        count = self.point_count()
        if not 0 <= index < count:
            msg = f"Index {index} is out of range [0, {count})"
            raise IndexOutOfRangeError(msg)

    def _check_can_delete(self) -> None:
        count = self.point_count()
        if count <= self.deletion_floor:
            msg = (
                f"Cannot delete a point from {type(self).__name__} holding {count} points; "
                f"at least {self.deletion_floor} must remain"
            )
            raise TooFewPointsError(msg)

    @staticmethod
    def _check_between(
        index: int, x: float, previous_x: float | None, next_x: float | None
    ) -> None:
        """Check that ``x`` may sit between the abscissas of its neighbours."""
        if math.isnan(x):
            msg = f"Point {index} cannot take an undefined abscissa"
            raise OrderingViolationError(msg)
        if previous_x is not None and tolerance.le(x, previous_x):
            msg = (
                f"Point {index} must stay to the right of its predecessor: "
                f"x={x} is not greater than {previous_x}"
            )
            raise OrderingViolationError(msg)
        if next_x is not None and tolerance.ge(x, next_x):
            msg = (
                f"Point {index} must stay to the left of its successor: "
                f"x={x} is not less than {next_x}"
            )
            raise OrderingViolationError(msg)

    def _same_backend_equals(self: TableT, other: TableT) -> bool:
        """Pointwise comparison of two functions stored by the same backend."""
        return all(a == b for a, b in zip(self, other, strict=True))

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, TabulatedFunction):
            return NotImplemented
        count = self.point_count()
        if count != other.point_count():
            return False
        if type(other) is type(self):
            return self._same_backend_equals(other)
        return all(self.point_at(i) == other.point_at(i) for i in range(count))

    def __hash__(self) -> int:
        # points equal within tolerance may round to different values
        return hash(self.point_count())

    def __len__(self) -> int:
        return self.point_count()

    def __copy__(self: TableT) -> TableT:
        return self.clone()

    def __deepcopy__(self: TableT, memo: dict[int, Any]) -> TableT:
        return self.clone()

    def __str__(self) -> str:
        return "{" + ", ".join(str(point) for point in self) + "}"

    def __repr__(self) -> str:
        pairs = ", ".join(repr(point.as_tuple()) for point in self)
        return f"{type(self).__name__}([{pairs}])"
