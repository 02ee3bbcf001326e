"""
Unit tests for reading and writing tabulated functions.
"""

from __future__ import annotations

import io
import json
import math
import struct

import pytest

from pytabulate.exceptions import FormatError, InvalidArgumentError
from pytabulate.factories import (
    Backend,
    LinkedListTabulatedFunctionFactory,
    use_factory,
)
from pytabulate.point import Point
from pytabulate.serialization import (
    TableData,
    from_bytes,
    from_dict,
    from_text,
    read_binary,
    read_text,
    to_bytes,
    to_dict,
    to_text,
    write_binary,
    write_text,
)
from pytabulate.tabulated import (
    ArrayTabulatedFunction,
    LinkedListTabulatedFunction,
)


@pytest.fixture
def sample(table_type):
    """A small function with awkward coordinates."""
    return table_type(
        [(-1.5, 0.1), (0.0, -2.0e-7), (0.3, 1.0e20), (2.0, 1.0 / 3.0), (1.0e3, -4.0)]
    )


class TestBinary:
    """Tests for the binary form."""

    def test_layout(self):
        """Test the big-endian count and coordinate layout."""
        table = ArrayTabulatedFunction([(1.0, 2.0), (3.0, 4.0)])
        assert to_bytes(table) == struct.pack(">i4d", 2, 1.0, 2.0, 3.0, 4.0)

    def test_round_trip(self, sample):
        """Test decoding what was encoded."""
        decoded = from_bytes(to_bytes(sample))
        assert decoded == sample
        assert [point.as_tuple() for point in decoded] == [
            point.as_tuple() for point in sample
        ]

    def test_streams(self, sample):
        """Test writing to and reading from a stream."""
        stream = io.BytesIO()
        write_binary(sample, stream)
        stream.seek(0)
        assert read_binary(stream) == sample

    def test_backend_choice(self, sample):
        """Test selecting the decoded backend."""
        data = to_bytes(sample)
        assert type(from_bytes(data)) is ArrayTabulatedFunction
        assert type(from_bytes(data, backend="linked_list")) is LinkedListTabulatedFunction
        decoded = from_bytes(data, factory=LinkedListTabulatedFunctionFactory())
        assert type(decoded) is LinkedListTabulatedFunction
        with use_factory(LinkedListTabulatedFunctionFactory()):
            assert type(from_bytes(data)) is LinkedListTabulatedFunction

    def test_trailing_bytes_are_left_in_stream(self):
        """Test that reading stops after the declared points."""
        table = ArrayTabulatedFunction([(1.0, 2.0), (3.0, 4.0)])
        stream = io.BytesIO(to_bytes(table) + b"tail")
        read_binary(stream)
        assert stream.read() == b"tail"

    @pytest.mark.parametrize(
        "data",
        [b"", b"\x00\x00", struct.pack(">i", 3), struct.pack(">i3d", 2, 1.0, 2.0, 3.0)],
        ids=["empty", "short-count", "no-points", "short-points"],
    )
    def test_truncated(self, data):
        """Test that a short stream is a format error."""
        with pytest.raises(FormatError, match="Binary stream"):
            from_bytes(data)

    def test_negative_count(self):
        """Test that a negative count is a format error."""
        with pytest.raises(FormatError, match="negative point count"):
            from_bytes(struct.pack(">i", -1))

    def test_decoded_points_are_validated(self):
        """Test that decoding rebuilds through the validating constructor."""
        with pytest.raises(InvalidArgumentError, match="strictly increasing"):
            from_bytes(struct.pack(">i4d", 2, 3.0, 0.0, 1.0, 0.0))
        with pytest.raises(InvalidArgumentError, match="at least 2 points"):
            from_bytes(struct.pack(">i", 0))

    def test_non_finite_values(self):
        """Test that infinities and NaN survive the binary form."""
        table = ArrayTabulatedFunction([(0.0, math.inf), (1.0, math.nan)])
        decoded = from_bytes(to_bytes(table))
        assert decoded.point_y(0) == math.inf
        assert math.isnan(decoded.point_y(1))


class TestText:
    """Tests for the text form."""

    def test_layout(self):
        """Test the single-space separated layout."""
        table = ArrayTabulatedFunction([(1.0, 2.5), (3.0, -4.0)])
        assert to_text(table) == "2 1.0 2.5 3.0 -4.0"

    def test_exponent_without_plus(self):
        """Test that large exponents are written without a plus sign."""
        table = ArrayTabulatedFunction([(0.0, 1.0e20), (1.0, 1.0e-20)])
        assert to_text(table) == "2 0.0 1e20 1.0 1e-20"

    def test_round_trip(self, sample):
        """Test decoding what was encoded."""
        decoded = from_text(to_text(sample))
        assert decoded == sample
        assert [point.as_tuple() for point in decoded] == [
            point.as_tuple() for point in sample
        ]

    def test_streams(self, sample):
        """Test writing to and reading from a stream."""
        stream = io.StringIO()
        write_text(sample, stream)
        stream.seek(0)
        assert read_text(stream, backend=Backend.LINKED_LIST) == sample

    def test_any_whitespace(self):
        """Test that any run of whitespace separates tokens."""
        table = from_text("3\n0 0\t\t1 1\n\n  2   4  \n")
        assert table.points() == [Point(0, 0), Point(1, 1), Point(2, 4)]

    def test_exponent_tokens(self):
        """Test tokens in exponent notation."""
        table = from_text("2 -1E-3 5e2 1.5 .5")
        assert table.points() == [Point(-0.001, 500.0), Point(1.5, 0.5)]

    def test_trailing_tokens_ignored(self):
        """Test that tokens after the declared points are ignored."""
        table = from_text("2 0 0 1 1 9 9 whatever")
        assert table.point_count() == 2

    @pytest.mark.parametrize(
        ("text", "match"),
        [
            ("", "ended before the point count"),
            ("two 0 0 1 1", "Expected the point count"),
            ("2.5 0 0 1 1", "Point count must be an integer"),
            ("-2 0 0", "negative point count"),
            ("2 0 0 1", "ended before the y coordinate of point 1"),
            ("2 0 0 x 1", "Expected the x coordinate of point 1"),
            ("2 0 0 +1 1", "Expected the x coordinate of point 1"),
            ("2 0 0 1 inf", "Expected the y coordinate of point 1"),
            ("2 0 0 1-2 1", "malformed coordinate"),
            ("2 0 0 1 1e", "malformed coordinate"),
        ],
    )
    def test_malformed(self, text, match):
        """Test that missing or malformed tokens are format errors."""
        with pytest.raises(FormatError, match=match):
            from_text(text)

    def test_non_finite_values_rejected(self):
        """Test that the text form refuses non-finite coordinates."""
        table = ArrayTabulatedFunction([(0.0, math.inf), (1.0, 1.0)])
        stream = io.StringIO()
        with pytest.raises(FormatError, match="non-finite value inf"):
            write_text(table, stream)
        assert stream.getvalue() == ""

    def test_decoded_points_are_validated(self):
        """Test that decoding rebuilds through the validating constructor."""
        with pytest.raises(InvalidArgumentError, match="strictly increasing"):
            from_text("2 1 0 1 0")


class TestTableData:
    """Tests for the structured form."""

    def test_to_dict(self):
        """Test the dictionary layout."""
        table = LinkedListTabulatedFunction([(0.0, 1.0), (1.0, 3.0)])
        assert to_dict(table) == {
            "backend": "linked_list",
            "points": [{"x": 0.0, "y": 1.0}, {"x": 1.0, "y": 3.0}],
        }

    def test_round_trip_keeps_backend(self, sample):
        """Test that the recorded backend is rebuilt."""
        decoded = from_dict(json.loads(json.dumps(to_dict(sample))))
        assert decoded == sample
        assert type(decoded) is type(sample)

    def test_missing_backend_uses_default(self):
        """Test that data without a backend follows the default factory."""
        data = {"points": [{"x": 0, "y": 0}, {"x": 1, "y": 1}]}
        with use_factory(LinkedListTabulatedFunctionFactory()):
            assert type(from_dict(data)) is LinkedListTabulatedFunction

    def test_explicit_factory_wins(self):
        """Test that an explicit factory overrides the recorded backend."""
        data = TableData(backend=Backend.ARRAY, points=[Point(0, 0), Point(1, 1)])
        table = data.to_table(LinkedListTabulatedFunctionFactory())
        assert type(table) is LinkedListTabulatedFunction

    def test_from_table(self):
        """Test capturing a table."""
        table = ArrayTabulatedFunction([(0.0, 1.0), (1.0, 3.0)])
        data = TableData.from_table(table)
        assert data.backend is Backend.ARRAY
        assert data.points == table.points()

    @pytest.mark.parametrize(
        "data",
        [
            {"points": [{"x": 0, "y": 0}]},
            {"backend": "tree", "points": [{"x": 0, "y": 0}, {"x": 1, "y": 1}]},
            {"points": [{"x": "zero", "y": 0}, {"x": 1, "y": 1}]},
            {"backend": "array"},
        ],
        ids=["one-point", "unknown-backend", "bad-coordinate", "no-points"],
    )
    def test_invalid_data(self, data):
        """Test that malformed data is a format error."""
        with pytest.raises(FormatError, match="Invalid tabulated function data"):
            from_dict(data)

    def test_unordered_points(self):
        """Test that well-formed data still goes through construction checks."""
        data = {"points": [{"x": 1, "y": 0}, {"x": 0, "y": 0}]}
        with pytest.raises(InvalidArgumentError, match="strictly increasing"):
            from_dict(data)
