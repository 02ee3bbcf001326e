"""
typing
"""

from __future__ import annotations

from pytabulate.point import Point, PointLike
from pytabulate.typing.aliases import FloatArray

__all__ = (
    "FloatArray",
    "Point",
    "PointLike",
)
