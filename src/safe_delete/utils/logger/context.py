"""
Logging context for safe-delete.

Each analysis gets a short id so every line logged while analyzing one
command (splitting, size queries, detector hits) can be correlated.
"""

import logging
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Generator, Optional

analysis_id_var: ContextVar[Optional[str]] = ContextVar("analysis_id", default=None)


def get_analysis_id() -> Optional[str]:
    return analysis_id_var.get()


def generate_analysis_id() -> str:
    """A new 8-character analysis id."""
    return uuid.uuid4().hex[:8]


@contextmanager
def log_context(analysis_id: Optional[str] = None) -> Generator[str, None, None]:
    """Tag log records with an analysis id for the duration of the block.

    Example:
        with log_context() as analysis_id:
            logger.debug("Analyzing command")  # carries [analysis=<id>]
    """
    new_id = analysis_id or generate_analysis_id()
    token = analysis_id_var.set(new_id)
    try:
        yield new_id
    finally:
        analysis_id_var.reset(token)


class ContextFilter(logging.Filter):
    """Adds ``analysis_id`` to every record passing through the logger."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.analysis_id = analysis_id_var.get()
        return True
