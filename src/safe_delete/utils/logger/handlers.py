"""
Log handlers for safe-delete.

Provides rotating file handlers for human-readable and JSON logs and an
optional stderr console handler. stdout is left alone: the hook protocol
writes its decision there.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .config import LogConfig, ensure_log_directory
from .context import ContextFilter
from .formatters import HumanFormatter, JsonFormatter


def _rotating_handler(
    path: Path, config: LogConfig, formatter: logging.Formatter
) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        filename=path,
        maxBytes=config.log_max_bytes,
        backupCount=config.log_backup_count,
        encoding="utf-8",
    )
    handler.setLevel(logging.DEBUG)  # Files get everything the logger lets through
    handler.setFormatter(formatter)
    return handler


def create_file_handlers(config: LogConfig) -> list[logging.Handler]:
    """Human and JSON rotating handlers, or nothing when file logging is off."""
    if not config.file_enabled:
        return []

    ensure_log_directory(config)
    return [
        _rotating_handler(config.human_log_path, config, HumanFormatter()),
        _rotating_handler(config.json_log_path, config, JsonFormatter()),
    ]


def create_console_handler(config: LogConfig) -> logging.StreamHandler:
    """stderr handler: warnings and above unless running at debug level."""
    handler = logging.StreamHandler(sys.stderr)
    if config.default_level == logging.DEBUG:
        handler.setLevel(logging.DEBUG)
    else:
        handler.setLevel(logging.WARNING)
    handler.setFormatter(HumanFormatter())
    return handler


def setup_handlers(logger: logging.Logger, config: LogConfig) -> None:
    """Replace the logger's handlers according to ``config``."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers = create_file_handlers(config)
    if config.console_enabled:
        handlers.append(create_console_handler(config))
    if not handlers:
        handlers.append(logging.NullHandler())

    # Filters on the handler see records propagated from child loggers
    context_filter = ContextFilter()
    for handler in handlers:
        handler.addFilter(context_filter)
        logger.addHandler(handler)

    logger.setLevel(config.default_level)
