"""
Reading and writing tabulated functions.

Provides two flat point-list encodings and a structured model:

- binary: big-endian ``int32`` point count followed by one ``float64`` pair
  ``(x, y)`` per point, in index order;
- text: the decimal point count followed by the decimal ``x`` and ``y`` of every
  point, separated by whitespace;
- :class:`TableData`: a pydantic model for dictionary/JSON exchange.

Every reader rebuilds the function through its explicit-points constructor, so
decoded points are validated exactly like points supplied by a caller.
"""

from __future__ import annotations

import io
import logging
import math
import re
from typing import IO, Any

import numpy as np
from pydantic import BaseModel, Field, ValidationError

from pytabulate.construction import create_from_points
from pytabulate.exceptions import FormatError
from pytabulate.factories import (
    Backend,
    BackendDescriptor,
    TabulatedFunctionFactory,
    backend_of,
)
from pytabulate.point import Point
from pytabulate.tabulated import TabulatedFunction

log = logging.getLogger(__name__)

COUNT_DTYPE = np.dtype(">i4")
COORDINATE_DTYPE = np.dtype(">f8")

_NUMBER_TOKEN = re.compile(r"[0-9.eE-]+")


def write_binary(table: TabulatedFunction, stream: IO[bytes]) -> None:
    """
    Write ``table`` to a binary stream.

    Args:
        table: Function to write
        stream: Writable binary stream
    """
    header = np.array([table.point_count()], dtype=COUNT_DTYPE)
    body = np.array([point.as_tuple() for point in table], dtype=COORDINATE_DTYPE)
    stream.write(header.tobytes())
    stream.write(body.tobytes())
    stream.flush()
    log.debug("Wrote %d points in binary form", table.point_count())


def _read_exactly(stream: IO[bytes], size: int) -> bytes:
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def read_binary(
    stream: IO[bytes],
    *,
    backend: BackendDescriptor | None = None,
    factory: TabulatedFunctionFactory | None = None,
) -> TabulatedFunction:
    """
    Read a function written by :func:`write_binary`.

    Args:
        stream: Readable binary stream
        backend: Backend to build, see :func:`~pytabulate.factories.resolve_factory`
        factory: Factory to build with; the default factory when neither this
            nor ``backend`` is given

    Returns:
        TabulatedFunction: The decoded function.

    Raises:
        FormatError: If the stream ends early or declares a negative point count.
    """
    header = _read_exactly(stream, COUNT_DTYPE.itemsize)
    if len(header) < COUNT_DTYPE.itemsize:
        msg = f"Binary stream ended after {len(header)} bytes, before the point count"
        raise FormatError(msg)
    count = int(np.frombuffer(header, dtype=COUNT_DTYPE)[0])
    if count < 0:
        msg = f"Binary stream declares a negative point count ({count})"
        raise FormatError(msg)

    size = count * 2 * COORDINATE_DTYPE.itemsize
    body = _read_exactly(stream, size)
    if len(body) < size:
        msg = f"Binary stream declares {count} points ({size} bytes) but holds only {len(body)} bytes"
        raise FormatError(msg)

    pairs = np.frombuffer(body, dtype=COORDINATE_DTYPE).reshape(count, 2)
    log.debug("Read %d points in binary form", count)
    return create_from_points(
        (Point(x, y) for x, y in pairs.tolist()), backend=backend, factory=factory
    )


def _format_number(value: float) -> str:
    if not math.isfinite(value):
        msg = f"Text form cannot represent the non-finite value {value}"
        raise FormatError(msg)
    # the reader takes no '+' signs
    return repr(value).replace("e+", "e")


def write_text(table: TabulatedFunction, stream: IO[str]) -> None:
    """
    Write ``table`` to a text stream as ``count x0 y0 x1 y1 ...``.

    Args:
        table: Function to write
        stream: Writable text stream

    Raises:
        FormatError: If a coordinate is infinite or NaN; nothing is written then.
    """
    tokens = [str(table.point_count())]
    for point in table:
        tokens.extend((_format_number(point.x), _format_number(point.y)))
    stream.write(" ".join(tokens))
    stream.flush()
    log.debug("Wrote %d points in text form", table.point_count())


def _next_number(tokens: list[str], position: int, what: str) -> str:
    if position >= len(tokens):
        msg = f"Text stream ended before the {what}"
        raise FormatError(msg)
    token = tokens[position]
    if not _NUMBER_TOKEN.fullmatch(token):
        msg = f"Expected the {what}, got {token!r}"
        raise FormatError(msg)
    return token


def read_text(
    stream: IO[str],
    *,
    backend: BackendDescriptor | None = None,
    factory: TabulatedFunctionFactory | None = None,
) -> TabulatedFunction:
    """
    Read a function written by :func:`write_text`.

    Tokens may be separated by any run of whitespace; anything after the
    declared points is ignored.

    Args:
        stream: Readable text stream
        backend: Backend to build, see :func:`~pytabulate.factories.resolve_factory`
        factory: Factory to build with; the default factory when neither this
            nor ``backend`` is given

    Returns:
        TabulatedFunction: The decoded function.

    Raises:
        FormatError: If a token is missing or is not a number.
    """
    tokens = stream.read().split()

    token = _next_number(tokens, 0, "point count")
    try:
        count = int(token)
    except ValueError as exc:
        msg = f"Point count must be an integer, got {token!r}"
        raise FormatError(msg) from exc
    if count < 0:
        msg = f"Text stream declares a negative point count ({count})"
        raise FormatError(msg)

    points = []
    for index in range(count):
        x_token = _next_number(tokens, 1 + 2 * index, f"x coordinate of point {index}")
        y_token = _next_number(tokens, 2 + 2 * index, f"y coordinate of point {index}")
        try:
            points.append(Point(float(x_token), float(y_token)))
        except ValueError as exc:
            msg = f"Point {index} has a malformed coordinate: ({x_token}, {y_token})"
            raise FormatError(msg) from exc

    log.debug("Read %d points in text form", count)
    return create_from_points(points, backend=backend, factory=factory)


def to_bytes(table: TabulatedFunction) -> bytes:
    """Binary form of ``table``."""
    buffer = io.BytesIO()
    write_binary(table, buffer)
    return buffer.getvalue()


def from_bytes(data: bytes, **kwargs: Any) -> TabulatedFunction:
    """Decode the binary form; keyword arguments go to :func:`read_binary`."""
    return read_binary(io.BytesIO(data), **kwargs)


def to_text(table: TabulatedFunction) -> str:
    """Text form of ``table``."""
    buffer = io.StringIO()
    write_text(table, buffer)
    return buffer.getvalue()


def from_text(text: str, **kwargs: Any) -> TabulatedFunction:
    """Decode the text form; keyword arguments go to :func:`read_text`."""
    return read_text(io.StringIO(text), **kwargs)


class TableData(BaseModel):
    """
    Structured form of a tabulated function.

    Parameters:
        backend: Backend that stored the function, if it is a registered one
        points: The points in index order

    Examples:
        >>> data = TableData.model_validate(
        ...     {"backend": "linked_list", "points": [{"x": 0, "y": 1}, {"x": 1, "y": 3}]}
        ... )
        >>> data.to_table().value_at(0.5)
        2.0
    """

    backend: Backend | None = None
    points: list[Point] = Field(min_length=2)

    @classmethod
    def from_table(cls, table: TabulatedFunction) -> TableData:
        """Capture the points and backend of ``table``."""
        return cls(backend=backend_of(table), points=table.points())

    def to_table(
        self, factory: TabulatedFunctionFactory | None = None
    ) -> TabulatedFunction:
        """
        Rebuild the function.

        The recorded backend is used unless ``factory`` is given; with neither,
        the default factory builds it.
        """
        if factory is not None or self.backend is None:
            return create_from_points(self.points, factory=factory)
        return create_from_points(self.points, backend=self.backend)


def to_dict(table: TabulatedFunction) -> dict[str, Any]:
    """JSON-compatible dictionary describing ``table``."""
    return TableData.from_table(table).model_dump(mode="json")


def from_dict(data: dict[str, Any]) -> TabulatedFunction:
    """
    Rebuild a function from :func:`to_dict` output.

    Raises:
        FormatError: If ``data`` does not describe a tabulated function.
    """
    try:
        table_data = TableData.model_validate(data)
    except ValidationError as exc:
        msg = f"Invalid tabulated function data: {exc}"
        raise FormatError(msg) from exc
    return table_data.to_table()


__all__ = (
    "TableData",
    "from_bytes",
    "from_dict",
    "from_text",
    "read_binary",
    "read_text",
    "to_bytes",
    "to_dict",
    "to_text",
    "write_binary",
    "write_text",
)
