"""Logging configuration for dotlink.

Modules log through ``logging.getLogger(__name__)``; this module attaches
a single stderr handler to the package logger when the CLI starts.
"""

import logging
import sys
from typing import TextIO

LOGGER_NAME = "dotlink"

DEFAULT_FORMAT = "%(levelname)s %(name)s: %(message)s"


def setup_logging(
    level: int | str = logging.WARNING,
    *,
    stream: TextIO | None = None,
    format_string: str | None = None,
) -> logging.Logger:
    """Configure the dotlink package logger.

    Repeated calls replace the handler installed by a previous call
    instead of stacking a new one.

    Args:
        level: Logging level for the handler.
        stream: Stream to write to. If None, uses sys.stderr.
        format_string: Optional custom format string.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if getattr(handler, "_dotlink", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    handler.setLevel(level)
    handler._dotlink = True  # type: ignore[attr-defined]
    logger.addHandler(handler)

    logger.debug("Logging initialized at %s", logging.getLevelName(logger.level))
    return logger


def level_for(verbose: bool, quiet: bool) -> int:
    """Map the global CLI flags to a logging level.

    Args:
        verbose: --verbose was given.
        quiet: --quiet was given.

    Returns:
        DEBUG when verbose, ERROR when quiet, WARNING otherwise.
    """
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.WARNING
