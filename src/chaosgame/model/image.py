"""
Plain-text PPM (P3) Encoding
Turns the density counters into a color raster and reads such rasters back.
"""
from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, TextIO

import numpy as np

from chaosgame.config import BLUE_DIVISOR, MAX_SAMPLE_VALUE
from chaosgame.exceptions import ImageWriteError

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

PPM_MAGIC = "P3"


def counts_to_rgb(
    counts: npt.NDArray[np.int64],
    max_value: int = MAX_SAMPLE_VALUE,
    clamp: bool = False,
) -> npt.NDArray[np.int64]:
    """
    Map every cell count C to the pixel (C, 0, C // 12).

    Channels are not limited to ``max_value`` unless ``clamp`` is set,
    so busy cells can exceed the maximum declared in the header.

    Returns:
        Array of shape (height, width, 3).
    """
    counts = np.asarray(counts, dtype=np.int64)
    if counts.ndim != 2:
        raise ValueError(f"Expected a 2D counter matrix, got shape {counts.shape}.")

    rgb = np.zeros(counts.shape + (3,), dtype=np.int64)
    rgb[..., 0] = counts
    rgb[..., 2] = counts // BLUE_DIVISOR
    if clamp:
        np.minimum(rgb, max_value, out=rgb)
    return rgb


def encode_ppm(
    counts: npt.NDArray[np.int64],
    max_value: int = MAX_SAMPLE_VALUE,
    clamp: bool = False,
) -> str:
    """
    Encode a counter matrix as P3 text.

    Layout: magic, ``width height max`` line, then one line per grid row
    holding ``R G B`` for each column, left to right.
    """
    rgb = counts_to_rgb(counts, max_value=max_value, clamp=clamp)
    height, width, _ = rgb.shape

    lines = [PPM_MAGIC, f"{width} {height} {max_value}"]
    for row in rgb.reshape(height, width * 3):
        lines.append(" ".join(map(str, row.tolist())))
    return "\n".join(lines) + "\n"


def open_ppm(path: str) -> TextIO:
    """
    Open ``path`` for a PPM image.

    Raises:
        ImageWriteError: If the file cannot be created.
    """
    try:
        return open(path, "w", encoding="ascii")
    except OSError as e:
        logger.error(f"Failed to open image file '{path}'... exiting.")
        raise ImageWriteError(f"Failed to open image file '{path}': {e}") from e


def dump_ppm(
    counts: npt.NDArray[np.int64],
    handle: TextIO,
    max_value: int = MAX_SAMPLE_VALUE,
    clamp: bool = False,
) -> None:
    """Encode ``counts`` into an already opened text file."""
    text = encode_ppm(counts, max_value=max_value, clamp=clamp)
    try:
        handle.write(text)
    except OSError as e:
        name = getattr(handle, "name", "<stream>")
        logger.error(f"Failed to write image '{name}': {e}")
        raise ImageWriteError(f"Failed to write image '{name}': {e}") from e


def write_ppm(
    counts: npt.NDArray[np.int64],
    path: str,
    max_value: int = MAX_SAMPLE_VALUE,
    clamp: bool = False,
) -> str:
    """
    Encode ``counts`` and write them to ``path``.

    Raises:
        ImageWriteError: If the file cannot be opened or written.

    Returns:
        The path written.
    """
    with open_ppm(path) as f:
        dump_ppm(counts, f, max_value=max_value, clamp=clamp)
    logger.info(f"Image saved to: {os.path.abspath(path)}")
    return path


def decode_ppm(text: str) -> tuple[int, npt.NDArray[np.int64]]:
    """
    Parse P3 text.

    Comments (``#`` to end of line) are ignored.

    Raises:
        ValueError: On a malformed raster.

    Returns:
        The declared maximum and an array of shape (height, width, 3).
    """
    tokens = []
    for line in text.splitlines():
        tokens.extend(line.split("#", 1)[0].split())

    if len(tokens) < 4 or tokens[0] != PPM_MAGIC:
        raise ValueError("Not a plain-text PPM (P3) raster.")

    width, height, max_value = (int(t) for t in tokens[1:4])
    samples = tokens[4:]
    expected = width * height * 3
    if len(samples) != expected:
        raise ValueError(f"Expected {expected} samples for {width}x{height}, found {len(samples)}.")

    rgb = np.array(samples, dtype=np.int64).reshape(height, width, 3)
    return max_value, rgb


def read_ppm(path: str) -> tuple[int, npt.NDArray[np.int64]]:
    with open(path, "r", encoding="ascii") as f:
        return decode_ppm(f.read())
