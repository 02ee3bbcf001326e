"""
Linked-list-backed tabulated function.

Points live in a circular doubly linked list built on an arena of cells
addressed by integer index. Cell ``0`` is the sentinel: it never holds a point,
its ``next`` is the first point and its ``previous`` the last one. Cells freed by
deletion are recycled by later insertions.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Iterator
from typing import ClassVar

from pytabulate import tolerance
from pytabulate.exceptions import (
    DuplicateAbscissaError,
    EmptyStateError,
    InvalidArgumentError,
)
from pytabulate.point import Point, PointLike, coerce_point
from pytabulate.tabulated.core import TabulatedFunction, checked_points, interpolate

log = logging.getLogger(__name__)

HEAD = 0


class LinkedListTabulatedFunction(TabulatedFunction):
    """
    Tabulated function stored in a circular doubly linked list.

    The list remembers the last cell it visited together with that cell's
    index. Looking up the same index again, or one of its neighbours, is a
    single step; any other lookup walks from whichever end of the list is
    closer. :meth:`value_at` resumes its scan from the remembered cell when the
    queried abscissa is not to its left, so ascending queries are cheap. None of
    this changes any result.

    Deleting is refused once only two points remain.

    Parameters:
        points: Points strictly increasing in x, at least two

    Examples:
        >>> f = LinkedListTabulatedFunction([(0, 0), (10, 10)])
        >>> f.add_point((5, 5))
        >>> str(f)
        '{(0.0; 0.0), (5.0; 5.0), (10.0; 10.0)}'
    """

    deletion_floor: ClassVar[int] = 2

    def __init__(self, points: Iterable[PointLike]) -> None:
        checked = checked_points(points)
        self._clear()
        for point in checked:
            self._append(point)

    def _clear(self) -> None:
        self._points: list[Point | None] = [None]
        self._previous: list[int] = [HEAD]
        self._next: list[int] = [HEAD]
        self._free: list[int] = []
        self._count = 0
        self._forget()

    def _forget(self) -> None:
        self._last_node = HEAD
        self._last_index = -1

    def _remember(self, node: int, index: int) -> None:
        self._last_node = node
        self._last_index = index

    def _allocate(self, point: Point, previous: int, following: int) -> int:
        if self._free:
            node = self._free.pop()
            self._points[node] = point
            self._previous[node] = previous
            self._next[node] = following
        else:
            node = len(self._points)
            self._points.append(point)
            self._previous.append(previous)
            self._next.append(following)
        return node

    def _link_before(self, following: int, point: Point) -> int:
        """Insert ``point`` in a new cell just before ``following``."""
        previous = self._previous[following]
        node = self._allocate(point, previous, following)
        self._next[previous] = node
        self._previous[following] = node
        self._count += 1
        return node

    def _append(self, point: Point) -> int:
        node = self._link_before(HEAD, point)
        self._remember(node, self._count - 1)
        return node

    def _node_at(self, index: int) -> int:
        """Cell holding the point at ``index``; ``index`` must already be checked."""
        if self._last_node != HEAD:
            if index == self._last_index:
                return self._last_node
            if index == self._last_index + 1:
                self._remember(self._next[self._last_node], index)
                return self._last_node
            if index == self._last_index - 1:
                self._remember(self._previous[self._last_node], index)
                return self._last_node

        if index < self._count // 2:
            node = self._next[HEAD]
            for _ in range(index):
                node = self._next[node]
        else:
            node = self._previous[HEAD]
            for _ in range(self._count - 1 - index):
                node = self._previous[node]
        self._remember(node, index)
        return node

    def _point(self, node: int) -> Point:
        point = self._points[node]
        if point is None:
            msg = f"Cell {node} holds no point"
            raise EmptyStateError(msg)
        return point

    def _unlink(self, index: int) -> None:
        node = self._node_at(index)
        previous, following = self._previous[node], self._next[node]
        self._next[previous] = following
        self._previous[following] = previous
        self._count -= 1
        # _node_at left the removed cell in the cache
        self._forget()

        self._points[node] = None
        self._free.append(node)

    def domain_left(self) -> float:
        if self._count == 0:
            msg = "Tabulated function holds no points"
            raise EmptyStateError(msg)
        return self._point(self._next[HEAD]).x

    def domain_right(self) -> float:
        if self._count == 0:
            msg = "Tabulated function holds no points"
            raise EmptyStateError(msg)
        return self._point(self._previous[HEAD]).x

    def value_at(self, x: float) -> float:
        if tolerance.lt(x, self.domain_left()) or tolerance.gt(x, self.domain_right()):
            return math.nan

        node, index = self._next[HEAD], 0
        cached = self._last_node
        if (
            cached != HEAD
            and self._next[cached] != HEAD
            and tolerance.ge(x, self._point(cached).x)
        ):
            node, index = cached, self._last_index

        while node != HEAD and self._next[node] != HEAD:
            following = self._next[node]
            left, right = self._point(node), self._point(following)
            if tolerance.eq(x, left.x):
                self._remember(node, index)
                return left.y
            if tolerance.eq(x, right.x):
                self._remember(following, index + 1)
                return right.y
            if tolerance.gt(x, left.x) and tolerance.lt(x, right.x):
                self._remember(node, index)
                return interpolate(x, left, right)
            node, index = following, index + 1
        return math.nan

    def point_count(self) -> int:
        return self._count

    def point_at(self, index: int) -> Point:
        self._check_index(index)
        return self._point(self._node_at(index))

    def _neighbours(self, index: int, node: int) -> tuple[float | None, float | None]:
        previous_x = self._point(self._previous[node]).x if index > 0 else None
        next_x = (
            self._point(self._next[node]).x if index < self._count - 1 else None
        )
        return previous_x, next_x

    def set_point(self, index: int, point: PointLike) -> None:
        point = coerce_point(point)
        self._check_index(index)
        node = self._node_at(index)
        self._check_between(index, point.x, *self._neighbours(index, node))
        self._points[node] = point

    def point_x(self, index: int) -> float:
        self._check_index(index)
        return self._point(self._node_at(index)).x

    def set_point_x(self, index: int, x: float) -> None:
        self._check_index(index)
        node = self._node_at(index)
        self._check_between(index, x, *self._neighbours(index, node))
        self._points[node] = self._point(node).with_x(x)

    def point_y(self, index: int) -> float:
        self._check_index(index)
        return self._point(self._node_at(index)).y

    def set_point_y(self, index: int, y: float) -> None:
        self._check_index(index)
        node = self._node_at(index)
        self._points[node] = self._point(node).with_y(y)

    def delete_point(self, index: int) -> None:
        self._check_can_delete()
        self._check_index(index)
        self._unlink(index)

    def add_point(self, point: PointLike) -> None:
        point = coerce_point(point)
        if math.isnan(point.x):
            msg = "Cannot add a point with an undefined abscissa"
            raise InvalidArgumentError(msg)

        node, index = self._next[HEAD], 0
        while node != HEAD and tolerance.lt(self._point(node).x, point.x):
            node, index = self._next[node], index + 1
        if node != HEAD and tolerance.eq(self._point(node).x, point.x):
            msg = f"A point with x={point.x} already exists at index {index}"
            raise DuplicateAbscissaError(msg)

        self._remember(self._link_before(node, point), index)

    def clone(self) -> LinkedListTabulatedFunction:
        cloned = object.__new__(type(self))
        cloned._clear()
        for point in self:
            cloned._append(point)
        return cloned

    def __iter__(self) -> Iterator[Point]:
        node = self._next[HEAD]
        while node != HEAD:
            yield self._point(node)
            node = self._next[node]

    def _same_backend_equals(self, other: LinkedListTabulatedFunction) -> bool:  # type: ignore[override]
        node, other_node = self._next[HEAD], other._next[HEAD]
        while node != HEAD and other_node != HEAD:
            if self._point(node) != other._point(other_node):
                return False
            node, other_node = self._next[node], other._next[other_node]
        return True
