"""Diagnostics for docdiff.

Commands write their product (reports, graphs, diffs) to stdout. Everything
logged under the ``docdiff`` hierarchy goes to a single stderr handler.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

_LOGGER_NAME = "docdiff"
_FORMAT = "[docdiff] %(levelname)s %(message)s"
_VERBOSE_FORMAT = "[docdiff] %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``docdiff.<name>``, or the package logger when ``name`` is empty."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(*, verbose: bool = False, stream: TextIO | None = None) -> logging.Logger:
    """Route docdiff diagnostics to ``stream`` (stderr by default).

    Only warnings are shown unless ``verbose`` is set, in which case debug
    records are shown along with the emitting module.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Calling main() twice in one process must not stack handlers.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_VERBOSE_FORMAT if verbose else _FORMAT))
    logger.addHandler(handler)
    return logger


__all__ = ["configure_logging", "get_logger"]
