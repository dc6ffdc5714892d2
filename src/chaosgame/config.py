"""
Configuration & Constants
=========================
This module serves as the central registry for global constants and for
reading run configurations from disk.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (sample maximum, color divisor)
   scattered throughout the code.
2. Persistence: Run configurations can be kept as JSON files next to the
   images they produced and replayed later.

Exports:
    MAX_SAMPLE_VALUE (int): Maximum sample value declared in the PPM header.
    BLUE_DIVISOR (int): Divisor mapping a cell count to its blue channel.
    ASCII_PREVIEW_LIMIT (int): Largest grid side the console preview accepts.
"""
import json
import logging
import os

from chaosgame.exceptions import ConfigurationError
from chaosgame.model.state import RunConfig

logger = logging.getLogger(__name__)

# Global Constants
MAX_SAMPLE_VALUE: int = 255
BLUE_DIVISOR: int = 12
ASCII_PREVIEW_LIMIT: int = 80

DEFAULT_OUTPUT_DIR: str = os.curdir


def load_config(path: str) -> RunConfig:
    """
    Read a RunConfig from a JSON object keyed by field name.

    Raises:
        ConfigurationError: If the file is not a JSON object or holds unknown or mistyped keys.
    """
    logger.info(f"Loading configuration from: {path}")
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"'{path}' is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"'{path}' must contain a JSON object.")
    return RunConfig.from_dict(data)


def save_config(config: RunConfig, path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2)
    logger.info(f"Configuration saved to: {path}")
