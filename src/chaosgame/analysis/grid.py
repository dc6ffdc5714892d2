from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import numpy as np
import matplotlib.pyplot as plt

from chaosgame.model.geometry_primitives import Point

if TYPE_CHECKING:
    import numpy.typing as npt
    from matplotlib.axes import Axes


class DensityGrid:
    """
    Visitation counters for every cell of a width x height raster.

    Counters are stored row-major, indexed ``[y, x]``, so that a row of the
    array is a row of the output image.
    """

    def __init__(self, width: int, height: int) -> None:
        """
        Initialize an all-zero grid.

        Args:
            width: Number of columns.
            height: Number of rows.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid size must be positive, got {width}x{height}.")
        self.width = width
        self.height = height
        self._counts: npt.NDArray[np.int64] = np.zeros((height, width), dtype=np.int64)

    @classmethod
    def from_counts(cls, counts: npt.NDArray[np.int64]) -> DensityGrid:
        """Rebuild a grid from a saved (height, width) counter matrix."""
        counts = np.asarray(counts, dtype=np.int64)
        if counts.ndim != 2:
            raise ValueError(f"Expected a 2D counter matrix, got shape {counts.shape}.")
        grid = cls(counts.shape[1], counts.shape[0])
        grid._counts[...] = counts
        return grid

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(width={self.width}, height={self.height}, total={self.total})"

    def contains(self, point: Point) -> bool:
        return 0 <= point.x < self.width and 0 <= point.y < self.height

    def increment(self, point: Point) -> bool:
        """
        Count one visit of ``point``.

        Points outside the grid are dropped without error.

        Returns:
            True if the point landed inside the grid.
        """
        if not self.contains(point):
            return False
        self._counts[point.y, point.x] += 1
        return True

    @property
    def counts(self) -> npt.NDArray[np.int64]:
        """Read-only view of the counters, shape (height, width)."""
        view = self._counts.view()
        view.flags.writeable = False
        return view

    @property
    def shape(self) -> tuple[int, int]:
        return self._counts.shape

    @property
    def total(self) -> int:
        """Sum of all counters, i.e. the number of in-bounds increments."""
        return int(self._counts.sum())

    @property
    def nonzero_count(self) -> int:
        return int(np.count_nonzero(self._counts))

    def count_at(self, point: Point) -> int:
        if not self.contains(point):
            return 0
        return int(self._counts[point.y, point.x])

    def render_ascii(self, mark: str = "A") -> str:
        """Console preview: ``mark`` for every visited cell, blank otherwise."""
        lines = []
        for row in self._counts:
            lines.append("".join(f"{mark} " if count else "  " for count in row))
        return "\n".join(lines)

    def plot(self, ax: Optional[Axes] = None, cmap: str = "magma", show: bool = True) -> Axes:
        """
        Plot the density as an image, brightest where visited most.
        """
        if ax is None:
            fig = plt.figure(figsize=(6, 6 * self.height / self.width))
            ax = fig.add_subplot(111)

        # log scale
        ax.imshow(np.log1p(self._counts), cmap=cmap, origin="upper", interpolation="nearest")
        ax.set_title(f"Density ({self.total} visits)")
        ax.set_axis_off()

        if show:
            plt.show()
        return ax
