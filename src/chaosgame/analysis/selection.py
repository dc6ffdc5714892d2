from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
import logging
from typing import Optional

import numpy as np

from chaosgame.exceptions import ConfigurationError
from chaosgame.model.state import SelectionPolicy

logger = logging.getLogger(__name__)


@dataclass
class SelectionState:
    """The two most recent selections; both None before the first draw."""
    last: Optional[int] = None
    second_last: Optional[int] = None

    @property
    def just_repeated(self) -> bool:
        return self.last is not None and self.last == self.second_last

    def push(self, index: int) -> None:
        self.second_last = self.last
        self.last = index


class VertexSelector(ABC):
    """
    Abstract base class for vertex selection policies.

    A selector is created per run and is the only owner of its
    SelectionState.
    """
    POLICY: SelectionPolicy

    def __init__(self, vertex_count: int, rng: np.random.Generator) -> None:
        """
        Args:
            vertex_count: Length of the vertex list, centroid included.
            rng: Source of every random draw.
        """
        if vertex_count < 1:
            raise ConfigurationError("Cannot select from an empty vertex list.")
        self.vertex_count = vertex_count
        self.rng = rng
        self.state = SelectionState()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(vertex_count={self.vertex_count}, state={self.state})"

    def reset(self) -> None:
        """Forget the selection history."""
        self.state = SelectionState()

    def next(self) -> int:
        """
        Choose the index of the next target vertex and record it.

        Returns:
            An index in [0, vertex_count).
        """
        index = self._draw()
        self.state.push(index)
        return index

    @abstractmethod
    def _draw(self) -> int:
        pass

    def _uniform(self, upper: int) -> int:
        return int(self.rng.integers(0, upper))


class UnconstrainedSelector(VertexSelector):
    """Every vertex equally likely on every call."""
    POLICY = SelectionPolicy.UNCONSTRAINED

    def _draw(self) -> int:
        return self._uniform(self.vertex_count)


class NoImmediateRepeatSelector(VertexSelector):
    """Never returns the same index twice in a row."""
    POLICY = SelectionPolicy.NO_IMMEDIATE_REPEAT

    def __init__(self, vertex_count: int, rng: np.random.Generator) -> None:
        if vertex_count < 2:
            raise ConfigurationError(
                f"Avoiding immediate repeats needs at least 2 vertices, got {vertex_count}."
            )
        super().__init__(vertex_count, rng)

    def _draw(self) -> int:
        index = self._uniform(self.vertex_count)
        while index == self.state.last:
            index = self._uniform(self.vertex_count)
        return index


class NoNeighborOnRepeatSelector(VertexSelector):
    """
    After the same vertex was chosen twice in a row, excludes that vertex
    and its two polygon neighbors from the next draw.

    Adjacency is modulo ``degree``; a centroid vertex (index ``degree``)
    takes no part in it and can only come out of the unconstrained draw.
    """
    POLICY = SelectionPolicy.NO_NEIGHBOR_ON_REPEAT

    def __init__(self, vertex_count: int, degree: int, rng: np.random.Generator) -> None:
        if degree < 4:
            raise ConfigurationError(f"Neighbor avoidance needs a polygon degree of at least 4, got {degree}.")
        if vertex_count not in (degree, degree + 1):
            raise ConfigurationError(
                f"Vertex list of length {vertex_count} does not match a {degree}-gon."
            )
        super().__init__(vertex_count, rng)
        self.degree = degree

    def _draw(self) -> int:
        if not self.state.just_repeated:
            return self._uniform(self.vertex_count)

        last = self.state.last
        if last >= self.degree:
            # repeated centroid: any polygon vertex
            return self._uniform(self.degree)

        # offset in [0, degree - 4] skips last - 1, last and last + 1
        offset = self._uniform(self.degree - 3)
        return (offset + last + 2) % self.degree


def make_selector(
    policy: SelectionPolicy,
    vertex_count: int,
    degree: int,
    rng: np.random.Generator,
) -> VertexSelector:
    """Build the selector for ``policy``."""
    logger.debug(f"Creating {policy} selector over {vertex_count} vertices.")
    if policy == SelectionPolicy.UNCONSTRAINED:
        return UnconstrainedSelector(vertex_count, rng)
    if policy == SelectionPolicy.NO_IMMEDIATE_REPEAT:
        return NoImmediateRepeatSelector(vertex_count, rng)
    if policy == SelectionPolicy.NO_NEIGHBOR_ON_REPEAT:
        return NoNeighborOnRepeatSelector(vertex_count, degree, rng)
    raise ValueError(f"Unknown selection policy: {policy!r}")
