"""Logging that stays off the terminal while curses owns it.

Records are held in a ``MemoryHandler`` and written to stderr only when
``flush_logging()`` runs after the screen has been torn down.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys

_LOGGER_NAME = "gostat"
_BUFFER_CAPACITY = 1000


class _TailHandler(logging.handlers.MemoryHandler):
    """Keeps the most recent records and only writes them on an explicit flush."""

    def shouldFlush(self, record: logging.LogRecord) -> bool:
        return False

    def emit(self, record: logging.LogRecord) -> None:
        super().emit(record)
        if len(self.buffer) > self.capacity:
            del self.buffer[0]


def configure_logging(level: str = "WARNING") -> logging.Logger:
    logger = logging.getLogger(_LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(level)
    logger.propagate = False
    target = logging.StreamHandler(sys.stderr)
    target.setFormatter(logging.Formatter("gostat: %(levelname)s %(name)s: %(message)s"))
    buffered = _TailHandler(_BUFFER_CAPACITY, target=target)
    logger.addHandler(buffered)
    return logger


def flush_logging() -> None:
    """Write buffered records to stderr."""
    for handler in logging.getLogger(_LOGGER_NAME).handlers:
        handler.flush()
