"""
Geometric Primitives on the density grid.
"""
from __future__ import annotations
from dataclasses import dataclass
import math


@dataclass(frozen=True)
class Point:
    """A point in integer grid coordinates."""
    x: int
    y: int

    def __sub__(self, other: Point) -> Point:
        if isinstance(other, Point):
            return Point(self.x - other.x, self.y - other.y)
        return NotImplemented

    def distance_to(self, other: Point) -> float:
        offset = self - other
        return math.hypot(offset.x, offset.y)
