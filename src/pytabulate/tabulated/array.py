"""
Array-backed tabulated function.

Points live in one contiguous ``(capacity, 2)`` float64 buffer: column 0 holds
the abscissas and column 1 the ordinates. Only the first ``count`` rows are
live; the rest is slack for insertions.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Iterator
from typing import ClassVar

import numpy as np

from pytabulate import tolerance
from pytabulate.exceptions import (
    DuplicateAbscissaError,
    EmptyStateError,
    InvalidArgumentError,
)
from pytabulate.point import Point, PointLike, coerce_point
from pytabulate.tabulated.core import TabulatedFunction, checked_points, interpolate
from pytabulate.typing.aliases import FloatArray

log = logging.getLogger(__name__)

#: rows kept free beyond the live points when a buffer is allocated
SLACK = 2


class ArrayTabulatedFunction(TabulatedFunction):
    """
    Tabulated function stored in a growable contiguous array.

    Positional access is O(1). Insertion and deletion shift the tail of the
    buffer, so they are O(n). When the buffer is full it grows to
    ``2 * capacity + 2`` rows.

    Deleting is refused once only three points remain.

    Parameters:
        points: Points strictly increasing in x, at least two

    Examples:
        >>> f = ArrayTabulatedFunction([(1, 1), (2, 4), (3, 9)])
        >>> f.value_at(2.5)
        6.5
        >>> f.value_at(4.0)
        nan
    """

    deletion_floor: ClassVar[int] = 3

    def __init__(self, points: Iterable[PointLike]) -> None:
        checked = checked_points(points)
        self._count = len(checked)
        self._buffer: FloatArray = np.empty((self._count + SLACK, 2), dtype=np.float64)
        self._buffer[: self._count] = [point.as_tuple() for point in checked]

    @property
    def capacity(self) -> int:
        """Number of rows allocated in the buffer."""
        return len(self._buffer)

    def domain_left(self) -> float:
        if self._count == 0:
            msg = "Tabulated function holds no points"
            raise EmptyStateError(msg)
        return float(self._buffer[0, 0])

    def domain_right(self) -> float:
        if self._count == 0:
            msg = "Tabulated function holds no points"
            raise EmptyStateError(msg)
        return float(self._buffer[self._count - 1, 0])

    def value_at(self, x: float) -> float:
        if tolerance.lt(x, self.domain_left()) or tolerance.gt(x, self.domain_right()):
            return math.nan

        xs = self._buffer[: self._count, 0].tolist()
        ys = self._buffer[: self._count, 1].tolist()
        for i in range(self._count - 1):
            x_1, x_2 = xs[i], xs[i + 1]
            if tolerance.eq(x, x_1):
                return float(ys[i])
            if tolerance.eq(x, x_2):
                return float(ys[i + 1])
            if tolerance.gt(x, x_1) and tolerance.lt(x, x_2):
                return interpolate(x, Point(x_1, ys[i]), Point(x_2, ys[i + 1]))
        return math.nan

    def point_count(self) -> int:
        return self._count

    def point_at(self, index: int) -> Point:
        self._check_index(index)
        x, y = self._buffer[index].tolist()
        return Point(x, y)

    def _neighbours(self, index: int) -> tuple[float | None, float | None]:
        previous_x = float(self._buffer[index - 1, 0]) if index > 0 else None
        next_x = float(self._buffer[index + 1, 0]) if index < self._count - 1 else None
        return previous_x, next_x

    def set_point(self, index: int, point: PointLike) -> None:
        point = coerce_point(point)
        self._check_index(index)
        self._check_between(index, point.x, *self._neighbours(index))
        self._buffer[index] = point.as_tuple()

    def point_x(self, index: int) -> float:
        self._check_index(index)
        return float(self._buffer[index, 0])

    def set_point_x(self, index: int, x: float) -> None:
        self._check_index(index)
        self._check_between(index, x, *self._neighbours(index))
        self._buffer[index, 0] = x

    def point_y(self, index: int) -> float:
        self._check_index(index)
        return float(self._buffer[index, 1])

    def set_point_y(self, index: int, y: float) -> None:
        self._check_index(index)
        self._buffer[index, 1] = y

    def delete_point(self, index: int) -> None:
        self._check_can_delete()
        self._check_index(index)
        # numpy buffers overlapping slice assignments
        self._buffer[index : self._count - 1] = self._buffer[index + 1 : self._count]
        self._count -= 1

    def add_point(self, point: PointLike) -> None:
        point = coerce_point(point)
        if math.isnan(point.x):
            msg = "Cannot add a point with an undefined abscissa"
            raise InvalidArgumentError(msg)

        index = 0
        while index < self._count and tolerance.lt(self._buffer[index, 0], point.x):
            index += 1
        if index < self._count and tolerance.eq(self._buffer[index, 0], point.x):
            msg = f"A point with x={point.x} already exists at index {index}"
            raise DuplicateAbscissaError(msg)

        if self._count == len(self._buffer):
            self._grow()
        self._buffer[index + 1 : self._count + 1] = self._buffer[index : self._count]
        self._buffer[index] = point.as_tuple()
        self._count += 1

    def _grow(self) -> None:
        capacity = 2 * len(self._buffer) + 2
        log.debug("Growing point buffer from %d to %d rows", len(self._buffer), capacity)
        buffer = np.empty((capacity, 2), dtype=np.float64)
        buffer[: self._count] = self._buffer[: self._count]
        self._buffer = buffer

    def clone(self) -> ArrayTabulatedFunction:
        cloned = object.__new__(type(self))
        cloned._count = self._count
        cloned._buffer = self._buffer.copy()
        return cloned

    def __iter__(self) -> Iterator[Point]:
        for index in range(self._count):
            x, y = self._buffer[index].tolist()
            yield Point(x, y)

    def _same_backend_equals(self, other: ArrayTabulatedFunction) -> bool:  # type: ignore[override]
        difference = np.abs(
            self._buffer[: self._count] - other._buffer[: other._count]
        )
        return bool(np.all(difference < tolerance.EPSILON))
