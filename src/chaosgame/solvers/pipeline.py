"""
Run Pipeline
============
Configuration -> Model -> Solver -> PPM file, as one synchronous pass.

The output file is opened before the first iteration so that an unwritable
destination aborts the run immediately. Should anything fail afterwards the
half-created file is removed again.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from typing import Optional

import numpy as np

from chaosgame.analysis.model import Model
from chaosgame.config import MAX_SAMPLE_VALUE
from chaosgame.model.image import dump_ppm, open_ppm
from chaosgame.model.state import RunConfig
from chaosgame.solvers.solver import ProgressCallback, Solver

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    model: Model
    image_path: str
    landed: int
    dropped: int


def run_chaos_game(
    config: RunConfig,
    output_dir: str = os.curdir,
    rng: Optional[np.random.Generator] = None,
    clamp: bool = False,
    progress: Optional[ProgressCallback] = None,
) -> RunResult:
    """
    Run the chaos game described by ``config`` and write its image.

    Args:
        config: Run configuration.
        output_dir: Directory receiving the image named by the configuration.
        rng: Random source; defaults to one seeded from ``config.seed``.
        clamp: Limit channels to the declared maximum sample value.
        progress: Forwarded to the solver.

    Raises:
        ConfigurationError: Before anything is written.
        ImageWriteError: If the image file cannot be opened or written.
    """
    model = Model(config, rng=rng)
    image_path = os.path.join(output_dir, config.output_filename())

    handle = open_ppm(image_path)

    try:
        with handle:
            solver = Solver(model)
            grid = solver.solve(progress=progress)
            dump_ppm(grid.counts, handle, max_value=MAX_SAMPLE_VALUE, clamp=clamp)
    except BaseException:
        logger.error(f"Run aborted, removing incomplete image '{image_path}'.")
        if os.path.exists(image_path):
            os.remove(image_path)
        raise

    logger.info(f"Image saved to: {os.path.abspath(image_path)}")
    return RunResult(model=model, image_path=image_path, landed=solver.landed, dropped=solver.dropped)
