"""Central logging setup shared by the app factory and scripts."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-40s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Top-level package logger, whatever path the package was imported under.
PACKAGE_LOGGER = __name__.rsplit(".core.", 1)[0]


def setup_logging(level: str = "INFO", *, stream=None) -> logging.Logger:
    """Install a single stream handler on the package logger.

    Calling it twice replaces the handler instead of stacking a second one.
    """

    root = logging.getLogger(PACKAGE_LOGGER)
    root.setLevel(_to_level(level))

    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(handler)
    root.propagate = False
    return root


def _to_level(level: str) -> int:
    value = logging.getLevelName(str(level).upper())
    return value if isinstance(value, int) else logging.INFO
