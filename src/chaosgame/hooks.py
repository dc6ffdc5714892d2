"""
Post-processing hooks for the command line.

Nothing in the model, analysis or solver layers calls these; they exist for
the CLI to run once an image has been written.
"""
import logging
import os
import subprocess
import sys
from typing import Callable, Optional

from chaosgame.analysis.grid import DensityGrid
from chaosgame.config import ASCII_PREVIEW_LIMIT

logger = logging.getLogger(__name__)


def print_ascii_preview(grid: DensityGrid, out: Callable[[str], None] = print) -> bool:
    """Draw the grid on the console; refused for grids wider or taller than the limit."""
    if grid.width > ASCII_PREVIEW_LIMIT or grid.height > ASCII_PREVIEW_LIMIT:
        logger.warning(
            f"Console preview skipped: {grid.width}x{grid.height} exceeds {ASCII_PREVIEW_LIMIT} cells per side."
        )
        return False
    out(grid.render_ascii())
    return True


def open_image(path: str) -> None:
    """Hand the image to the platform's default viewer."""
    logger.info(f"Opening {path}")
    if sys.platform.startswith("win"):
        os.startfile(path)  # type: ignore[attr-defined]
    elif sys.platform == "darwin":
        subprocess.run(["open", path], check=False)
    else:
        subprocess.run(["xdg-open", path], check=False)


def ask_yes_no(question: str, read: Optional[Callable[[str], str]] = None) -> bool:
    """Repeat ``question`` until the answer is 'y' or 'n'."""
    read = read or input
    answer = read(f"{question} (y/n) ").strip().lower()
    while answer not in ("y", "n"):
        answer = read(f"Invalid answer, {question} (y/n) ").strip().lower()
    return answer == "y"


def confirm_keep(path: str, read: Optional[Callable[[str], str]] = None) -> bool:
    """
    Ask whether to keep the image; delete it on 'n'.

    Returns:
        True if the file was kept.
    """
    if ask_yes_no("Do you want to keep this image?", read=read):
        return True
    os.remove(path)
    logger.info(f"Deleted {path}")
    return False
