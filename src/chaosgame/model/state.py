"""
Run Configuration (Data Model)
==============================
This module defines the immutable configuration of a single chaos game run.

Why is this file needed?
------------------------
1. State Management: Every parameter of a run lives in one frozen object, so
   no process-wide settings survive between runs.
2. Validation: Invalid combinations are rejected here, before any grid is
   allocated or any iteration runs.
3. Naming: The output filename is derived from the configuration alone.

Classes:
    SelectionPolicy: The three vertex selection policies.
    RunConfig: The main configuration container.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, fields, replace
from enum import StrEnum
import logging
import math
from typing import Any, Dict, Optional

from chaosgame.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class SelectionPolicy(StrEnum):
    UNCONSTRAINED = "unconstrained"
    NO_IMMEDIATE_REPEAT = "no_immediate_repeat"
    NO_NEIGHBOR_ON_REPEAT = "no_neighbor_on_repeat"


@dataclass(frozen=True)
class RunConfig:
    """
    Parameters of one run.

    Logic:
    1. 'no_neighbor_if_repeat' wins -> NO_NEIGHBOR_ON_REPEAT
    2. 'allow_same_vertex' -> UNCONSTRAINED
    3. otherwise -> NO_IMMEDIATE_REPEAT
    """
    degree: int = 4
    percent: float = 50.0
    width: int = 500
    height: int = 500
    iterations: int = 10_000_000

    allow_same_vertex: bool = False
    no_neighbor_if_repeat: bool = False
    include_centroid: bool = False

    # None -> fresh OS entropy, output is not reproducible
    seed: Optional[int] = None

    @property
    def policy(self) -> SelectionPolicy:
        if self.no_neighbor_if_repeat:
            return SelectionPolicy.NO_NEIGHBOR_ON_REPEAT
        if self.allow_same_vertex:
            return SelectionPolicy.UNCONSTRAINED
        return SelectionPolicy.NO_IMMEDIATE_REPEAT

    @property
    def vertex_count(self) -> int:
        return self.degree + (1 if self.include_centroid else 0)

    def validate(self) -> RunConfig:
        """
        Reject configurations that cannot run.

        Raises:
            ConfigurationError: On the first violated constraint.

        Returns:
            The same configuration, for chaining.
        """
        if not math.isfinite(self.percent):
            raise ConfigurationError(f"Percent must be a finite number, got {self.percent}.")
        if self.degree < 3:
            raise ConfigurationError(f"Polygon degree must be at least 3, got {self.degree}.")
        if self.no_neighbor_if_repeat and self.degree < 4:
            raise ConfigurationError(
                f"Neighbor avoidance needs a polygon degree of at least 4, got {self.degree}."
            )
        if self.no_neighbor_if_repeat and not self.allow_same_vertex:
            raise ConfigurationError(
                "Neighbor avoidance only applies when the same vertex may repeat (allow_same_vertex)."
            )
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(f"Grid size must be positive, got {self.width}x{self.height}.")
        if self.iterations < 0:
            raise ConfigurationError(f"Iteration count must not be negative, got {self.iterations}.")

        if self.no_neighbor_if_repeat and self.include_centroid:
            logger.warning("Centroid vertex combined with neighbor avoidance; the centroid has no neighbors.")
        return self

    def output_filename(self) -> str:
        """e.g. ``4_50%500X500_xSV_xNR_xC.ppm``"""
        name = f"{self.degree}_{int(self.percent)}%{self.width}X{self.height}_"
        name += "SV_" if self.allow_same_vertex else "xSV_"
        name += "NR_" if self.no_neighbor_if_repeat else "xNR_"
        name += "C" if self.include_centroid else "xC"
        return name + ".ppm"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> RunConfig:
        """
        Build a configuration from plain values, e.g. parsed JSON.

        Raises:
            ConfigurationError: On unknown keys or values of the wrong type.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

        values = {}
        for key, val in data.items():
            kind = _FIELD_KINDS[key]
            if key == "seed" and val is None:
                values[key] = None
            elif kind is bool and isinstance(val, bool):
                values[key] = val
            elif kind is int and isinstance(val, int) and not isinstance(val, bool):
                values[key] = val
            elif kind is float and isinstance(val, (int, float)) and not isinstance(val, bool):
                values[key] = float(val)
            else:
                expected = "int or null" if key == "seed" else kind.__name__
                raise ConfigurationError(f"'{key}' must be {expected}, got {val!r}.")
        return cls(**values)

    def with_overrides(self, **changes: Any) -> RunConfig:
        """Copy with every non-None value in ``changes`` applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


_FIELD_KINDS: Dict[str, type] = {
    "degree": int,
    "percent": float,
    "width": int,
    "height": int,
    "iterations": int,
    "allow_same_vertex": bool,
    "no_neighbor_if_repeat": bool,
    "include_centroid": bool,
    "seed": int,
}
