"""Logging configuration shared by the CLI and the API server."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

_FORMAT = "%(asctime)s [%(levelname)-5s] %(name)-28s | %(message)s"

# Per-request access lines duplicate the generation history
_QUIET_LOGGERS = ("uvicorn.access",)


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> None:
    """Send all records to a single handler on *stream* (stdout by default).

    The CLI passes ``sys.stderr`` so text dumps on stdout stay clean.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))
