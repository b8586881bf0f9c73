"""
Log formatters for safe-delete.

Provides a human-readable formatter and a JSON Lines formatter.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any


class HumanFormatter(logging.Formatter):
    """Human-readable log formatter.

    Format: YYYY-MM-DD HH:MM:SS.mmm | LEVEL | component | file:line | message

    Example:
        2026-01-15 14:23:45.123 | INFO  | safe_delete.analyzer | command.py:88 | 2 threat(s) [analysis=1f2e3d4c]
    """

    LEVEL_WIDTH = 5
    NAME_WIDTH = 20

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        time_str = timestamp.strftime("%Y-%m-%d %H:%M:%S.") + f"{int(record.msecs):03d}"

        level = record.levelname.ljust(self.LEVEL_WIDTH)
        component = record.name.ljust(self.NAME_WIDTH)
        location = f"{record.filename}:{record.lineno}"

        message = record.getMessage()
        analysis_id = getattr(record, "analysis_id", None)
        if analysis_id:
            message = f"{message} [analysis={analysis_id}]"

        formatted = f"{time_str} | {level} | {component} | {location} | {message}"

        if record.exc_info:
            formatted = f"{formatted}\n{self.formatException(record.exc_info)}"

        return formatted


class JsonFormatter(logging.Formatter):
    """JSON Lines log formatter, one object per record.

    Output fields: timestamp, level, logger, message, file, line, function,
    and analysis_id / exception when present.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }

        analysis_id = getattr(record, "analysis_id", None)
        if analysis_id:
            log_data["analysis_id"] = analysis_id

        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            log_data["exception"] = {
                "type": exc_type.__name__ if exc_type else None,
                "message": str(exc_value) if exc_value else None,
                "traceback": self.formatException(record.exc_info).splitlines(),
            }

        return json.dumps(log_data, ensure_ascii=False, default=str)
