from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Optional

from chaosgame.model.geometry_primitives import Point
from chaosgame.utils import round_half_away_from_zero

if TYPE_CHECKING:
    from chaosgame.analysis.grid import DensityGrid

logger = logging.getLogger(__name__)


def generate_polygon_vertices(
    degree: int,
    width: int,
    height: int,
    include_centroid: bool = False,
    grid: Optional[DensityGrid] = None,
) -> tuple[Point, ...]:
    """
    Generate the vertices of a regular polygon inscribed in the grid.

    The first vertex points straight up (angle -pi/2), the rest follow
    clockwise in screen coordinates. The radius is half the grid width.

    Args:
        degree: Number of polygon vertices, at least 3.
        width: Grid width.
        height: Grid height.
        include_centroid: Append the grid center as an extra vertex.
        grid: If given, every vertex is marked once on it.

    Raises:
        ValueError: If `degree` is less than 3.

    Returns:
        The vertex list, centroid last.
    """
    if degree < 3:
        raise ValueError(f"A polygon needs at least 3 vertices, got {degree}.")

    center = Point(width // 2, height // 2)
    radius = width // 2
    angle_offset = 2 * math.pi / degree

    vertices = []
    for i in range(degree):
        angle = -math.pi / 2 + i * angle_offset
        vertices.append(Point(
            round_half_away_from_zero(center.x + radius * math.cos(angle)),
            round_half_away_from_zero(center.y + radius * math.sin(angle)),
        ))

    if include_centroid:
        vertices.append(center)

    if grid is not None:
        for vertex in vertices:
            if not grid.increment(vertex):
                logger.debug(f"Vertex {vertex} lies outside the grid and was not marked.")

    logger.debug(f"Generated {len(vertices)} vertices for a {degree}-gon.")
    return tuple(vertices)
