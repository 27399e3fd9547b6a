"""Logging helpers: one named logger per module, one stream handler at the root."""

import logging
import sys

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

_ROOT_LOGGER_NAME = "wpdocs"


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module (use ``get_logger(__name__)``)."""
    return logging.getLogger(name)


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach a single stderr handler to the package logger.

    Calling this more than once replaces the previous handler instead of
    stacking duplicates.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)

    Returns:
        The package root logger
    """
    logger = logging.getLogger(_ROOT_LOGGER_NAME)
    numeric_level = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")
    logger.setLevel(numeric_level)

    logger.handlers.clear()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATEFMT))
    logger.addHandler(handler)
    return logger
