from __future__ import annotations

from chaosgame.model.geometry_primitives import Point
from chaosgame.utils import saturate_coordinate


def migrate_point(current: Point, target: Point, percent: float) -> Point:
    """
    Move ``percent`` % of the way from ``current`` towards ``target``.

    Percentages outside [0, 100] extrapolate past either end of the segment;
    the result is not clamped to the grid. Only coordinates beyond
    ``COORDINATE_LIMIT`` are pinned there, which no grid reaches.
    """
    fraction = percent / 100
    delta = target - current
    return Point(
        saturate_coordinate(current.x + delta.x * fraction),
        saturate_coordinate(current.y + delta.y * fraction),
    )
