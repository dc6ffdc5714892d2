from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Optional

from chaosgame.analysis.migration import migrate_point

if TYPE_CHECKING:
    from chaosgame.analysis.grid import DensityGrid
    from chaosgame.analysis.model import Model

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]


class Solver:
    """
    Class for the chaos game iteration loop.
    """

    def __init__(
        self,
        model: Model,
    ) -> None:
        """
        Initialize the solver with a model.

        Args:
            model: The model to be iterated.
        """
        self.model = model
        self.landed: int = 0
        self.dropped: int = 0

    def solve(
        self,
        iterations: Optional[int] = None,
        progress: Optional[ProgressCallback] = None,
    ) -> DensityGrid:
        """
        Run the chaos game on the model's grid.

        The random starting point is recorded first, then every migrated
        point. Points outside the grid are dropped.

        Args:
            iterations: Number of jumps; defaults to the configured count.
            progress: Called with the completed percentage (1..100).

        Returns:
            The model's density grid.
        """
        if iterations is None:
            iterations = self.model.config.iterations
        if iterations < 0:
            raise ValueError(f"Iteration count must not be negative, got {iterations}.")

        grid = self.model.grid
        vertices = self.model.vertices
        selector = self.model.selector
        percent = self.model.config.percent

        selector.reset()
        self.landed = 0
        self.dropped = 0

        point = self.model.random_start_point()
        self._record(grid.increment(point))
        logger.debug(f"Starting point: {point}")

        reported = 0
        for i in range(iterations):
            vertex = vertices[selector.next()]
            point = migrate_point(point, vertex, percent)
            self._record(grid.increment(point))

            done = (i + 1) * 100 // iterations
            if done > reported:
                reported = done
                if progress is not None:
                    progress(done)
                if done % 10 == 0:
                    logger.info(f"Progress: {done} % - Iteration: {i + 1}/{iterations}")

        logger.info(f"Finished {iterations} iterations: {self.landed} points recorded, {self.dropped} dropped.")
        return grid

    def _record(self, landed: bool) -> None:
        if landed:
            self.landed += 1
        else:
            self.dropped += 1
