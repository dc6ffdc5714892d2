"""
Exception hierarchy shared by the model, analysis and solver layers.
"""


class ChaosGameError(Exception):
    """Base class for all errors raised by the chaos game."""


class ConfigurationError(ChaosGameError, ValueError):
    """A run configuration that must not be executed."""


class ImageWriteError(ChaosGameError, OSError):
    """The output image could not be opened or written."""
