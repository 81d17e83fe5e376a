"""Logging configuration for the taskgraph command-line tools.

Library modules only create loggers (``logging.getLogger(__name__)``); the
CLI calls :func:`setup_logging` once at start-up.
"""

from __future__ import annotations

import logging
import sys
from typing import Union

_OWN_PREFIXES = ("taskgraph.", "cli.")


class _ConsoleNoiseFilter(logging.Filter):
    """Let our own records through; other libraries only at ERROR+."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith(_OWN_PREFIXES):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(level: Union[int, str] = logging.WARNING) -> None:
    """Configure the root logger with a single stderr handler.

    Safe to call more than once: existing handlers are replaced.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root = logging.getLogger()
    root.setLevel(level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    logging.captureWarnings(True)
