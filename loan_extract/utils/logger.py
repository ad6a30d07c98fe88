"""Logging setup shared by the extractor, exporter, CLI and API.

Every module logs through a named logger from :func:`get_logger`; the
entry points call :func:`setup_logging` once to attach a stdout handler.
"""

import logging
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> None:
    """Configure the root logger once.

    Later calls are no-ops while the root logger already has handlers.

    Args:
        level: Logging level name. Unknown names fall back to INFO.
        stream: Destination stream, stdout by default.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name``, usually the caller's ``__name__``."""
    return logging.getLogger(name)
