"""Logging setup shared by the CLI and the API server."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s [%(levelname)-5s] %(name)-25s | %(message)s"

# Per-request access lines drown out game events at INFO.
_NOISY_LOGGERS = ("uvicorn.access",)


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> None:
    """Install a single handler on the root logger.

    Unknown level names fall back to INFO. Calling this twice replaces the
    previous handler instead of stacking a second one.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))
