"""
Structured logging for safe-delete.

Usage:
    from safe_delete.utils.logger import get_logger, log_context

    logger = get_logger("analyzer")   # "safe_delete.analyzer"
    with log_context():
        logger.debug("Analyzing command")

Nothing is written anywhere until configured through the environment (see
``config.get_config``) or an explicit ``setup_logging(LogConfig(...))``.
"""

import logging
from typing import Optional

from .config import LogConfig, get_config
from .context import ContextFilter, generate_analysis_id, get_analysis_id, log_context
from .handlers import setup_handlers

ROOT_LOGGER_NAME = "safe_delete"

_initialized = False


def setup_logging(config: Optional[LogConfig] = None) -> logging.Logger:
    """Configure the ``safe_delete`` logger hierarchy.

    Safe to call again; handlers are replaced, not duplicated.
    """
    global _initialized

    if config is None:
        config = get_config()

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    setup_handlers(logger, config)
    logger.propagate = False

    _initialized = True
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get the root ``safe_delete`` logger or one of its children.

    The logging system is initialized from the environment on first use.
    """
    if not _initialized:
        setup_logging()

    if name:
        return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
    return logging.getLogger(ROOT_LOGGER_NAME)


__all__ = [
    "setup_logging",
    "get_logger",
    "LogConfig",
    "get_config",
    "log_context",
    "get_analysis_id",
    "generate_analysis_id",
    "ContextFilter",
]
