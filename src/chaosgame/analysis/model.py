from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from chaosgame.analysis.grid import DensityGrid
from chaosgame.analysis.polygon import generate_polygon_vertices
from chaosgame.analysis.selection import VertexSelector, make_selector
from chaosgame.model.geometry_primitives import Point
from chaosgame.model.state import RunConfig

logger = logging.getLogger(__name__)


class Model:
    """
    Class representing one chaos game run.

    This class owns the density grid, the polygon vertices and the vertex
    selector. Building it validates the configuration and marks the vertices
    on the grid; nothing else is shared between runs.
    """
    def __init__(self, config: RunConfig, rng: Optional[np.random.Generator] = None) -> None:
        """
        Initialize the Model object.

        Args:
            config: Run configuration, validated here.
            rng: Random source; defaults to one seeded from ``config.seed``.
        """
        self.config = config.validate()
        self.rng = rng if rng is not None else np.random.default_rng(config.seed)

        self.grid = DensityGrid(config.width, config.height)
        self.vertices: tuple[Point, ...] = generate_polygon_vertices(
            degree=config.degree,
            width=config.width,
            height=config.height,
            include_centroid=config.include_centroid,
            grid=self.grid,
        )
        self.selector: VertexSelector = make_selector(
            policy=config.policy,
            vertex_count=len(self.vertices),
            degree=config.degree,
            rng=self.rng,
        )
        logger.info(
            f"Model ready: {config.degree}-gon on {config.width}x{config.height} grid, "
            f"policy={config.policy}, centroid={config.include_centroid}"
        )

    @property
    def number_of_vertices(self) -> int:
        return len(self.vertices)

    def random_start_point(self) -> Point:
        """A uniformly random cell of the grid."""
        return Point(
            int(self.rng.integers(0, self.config.width)),
            int(self.rng.integers(0, self.config.height)),
        )
