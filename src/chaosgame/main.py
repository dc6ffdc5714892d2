"""
Application Entry Point
=======================
This module parses the command line, builds the run configuration and drives
one chaos game run.

Why is this file needed?
------------------------
It acts as the orchestration root. It:
1. Sets up logging.
2. Merges the optional JSON configuration file with command-line overrides.
3. Runs the pipeline (model, solver, image).
4. Invokes the post-processing hooks the user asked for.
"""
import argparse
import logging
import os
import sys
from typing import Optional, Sequence

from chaosgame.analysis.grid import DensityGrid
from chaosgame.config import DEFAULT_OUTPUT_DIR, load_config
from chaosgame.exceptions import ChaosGameError
from chaosgame.hooks import confirm_keep, open_image, print_ascii_preview
from chaosgame.logging_config import setup_logging
from chaosgame.model.image import write_ppm
from chaosgame.model.io import IOManager
from chaosgame.model.state import RunConfig
from chaosgame.solvers.pipeline import run_chaos_game

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chaosgame",
        description="Play the chaos game on a regular polygon and save the density as a PPM image.",
        allow_abbrev=False,
    )
    parser.add_argument("--config", help="JSON file with run parameters; other options override it")

    run = parser.add_argument_group("run parameters")
    run.add_argument("--degree", type=int, help="Number of polygon vertices (default: 4)")
    run.add_argument("--percent", type=float, help="Percent of the distance to jump towards the vertex (default: 50)")
    run.add_argument("--width", type=int, help="Grid width in cells (default: 500)")
    run.add_argument("--height", type=int, help="Grid height in cells (default: 500)")
    run.add_argument("--iterations", type=int, help="Number of jumps (default: 10000000)")
    run.add_argument(
        "--allow-same-vertex", action=argparse.BooleanOptionalAction, default=None,
        help="Allow the same vertex to be chosen twice in a row",
    )
    run.add_argument(
        "--no-neighbor-if-repeat", action=argparse.BooleanOptionalAction, default=None,
        help="After a repeated vertex, exclude it and its neighbors (needs --allow-same-vertex)",
    )
    run.add_argument(
        "--centroid", dest="include_centroid", action=argparse.BooleanOptionalAction, default=None,
        help="Add the polygon center as an extra vertex",
    )
    run.add_argument("--seed", type=int, help="Seed for reproducible output")

    out = parser.add_argument_group("output")
    out.add_argument("-o", "--output-dir", default=DEFAULT_OUTPUT_DIR, help="Directory for the PPM image")
    out.add_argument("--clamp", action="store_true", help="Clamp channels to the declared maximum sample value")
    out.add_argument("--save-h5", metavar="FILE", help="Also archive configuration and counters to an HDF5 file")
    out.add_argument(
        "--from-h5", metavar="FILE",
        help="Re-render the image of an archived run instead of playing a new one",
    )
    out.add_argument("--ascii", action="store_true", help="Print the grid to the console (small grids only)")
    out.add_argument("--plot", action="store_true", help="Show the density with matplotlib")
    out.add_argument("--open", action="store_true", help="Open the image with the default viewer")
    out.add_argument("--ask-keep", action="store_true", help="Ask whether to keep the image afterwards")

    log = parser.add_argument_group("logging")
    log.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    log.add_argument("--log-file", help="Also write the log to this file")
    return parser


def config_from_args(args: argparse.Namespace) -> RunConfig:
    base = load_config(args.config) if args.config else RunConfig()
    return base.with_overrides(
        degree=args.degree,
        percent=args.percent,
        width=args.width,
        height=args.height,
        iterations=args.iterations,
        allow_same_vertex=args.allow_same_vertex,
        no_neighbor_if_repeat=args.no_neighbor_if_repeat,
        include_centroid=args.include_centroid,
        seed=args.seed,
    )


def rerender_archive(h5_path: str, output_dir: str, clamp: bool = False) -> tuple[DensityGrid, str]:
    """Write the image of a run saved with ``--save-h5``, under the name its configuration implies."""
    config, counts = IOManager.load_run(h5_path)
    grid = DensityGrid.from_counts(counts)
    image_path = write_ppm(grid.counts, os.path.join(output_dir, config.output_filename()), clamp=clamp)
    return grid, image_path


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level, log_file=args.log_file)

    try:
        if args.from_h5:
            grid, image_path = rerender_archive(args.from_h5, args.output_dir, clamp=args.clamp)
        else:
            config = config_from_args(args)
            result = run_chaos_game(config, output_dir=args.output_dir, clamp=args.clamp)
            grid, image_path = result.model.grid, result.image_path
            if args.save_h5:
                IOManager.save_run(config, grid.counts, args.save_h5)
    except (ChaosGameError, OSError, ValueError) as e:
        logger.error(str(e))
        return 1

    if args.ascii:
        print_ascii_preview(grid)
    if args.plot:
        grid.plot()
    if args.open:
        open_image(image_path)
    if args.ask_keep:
        confirm_keep(image_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
