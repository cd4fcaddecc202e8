"""Diagnostic logging on the stderr side channel.

stdout carries protocol traffic only, so every log record goes to stderr as
a single line prefixed with a fixed tag::

    [ocrtool-mcp] Server starting, awaiting initialization...
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOG_TAG = "[ocrtool-mcp]"
_ROOT_LOGGER = "ocrtool"


class _SingleLineFormatter(logging.Formatter):
    """Keeps each record on one line, tracebacks included."""

    def format(self, record: logging.LogRecord) -> str:
        return super().format(record).replace("\n", " | ")


def configure_logging(level: str | int = "INFO", stream: TextIO | None = None) -> logging.Logger:
    """Route ``ocrtool.*`` loggers to *stream* (stderr by default).

    Replaces any handler installed by a previous call so repeated
    configuration never duplicates lines.
    """
    logger = logging.getLogger(_ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(_SingleLineFormatter(f"{LOG_TAG} %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    logger.propagate = False
    return logger
