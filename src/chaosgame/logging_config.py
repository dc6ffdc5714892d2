"""
Logging Configuration
Attaches console and file output to the package logger.

Only the ``chaosgame`` logger is touched; whatever the host application did to
the root logger stays in place, and records still propagate to it.
"""
import logging
import sys
from typing import Optional, Union

PACKAGE_LOGGER: str = __package__ or __name__.partition(".")[0]

LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT: str = '%H:%M:%S'

# Marks handlers installed here, so a second call replaces only those
_HANDLER_FLAG = "_chaosgame_handler"


def resolve_level(level: Union[int, str]) -> int:
    """Accept ``logging.DEBUG`` as well as ``"debug"``/``"DEBUG"``."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Route the package's log records to stdout and, optionally, a file.

    Args:
        level: Level number or name, e.g. ``logging.DEBUG`` or ``"INFO"``.
        log_file: Optional path; the file is truncated on every run.

    Returns:
        The configured package logger.
    """
    level = resolve_level(level)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    for handler in [h for h in logger.handlers if getattr(h, _HANDLER_FLAG, False)]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_FLAG, True)
        logger.addHandler(handler)

    logger.debug(f"Logging to stdout{' and ' + log_file if log_file else ''} at {logging.getLevelName(level)}.")
    return logger
