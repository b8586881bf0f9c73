"""
Logging configuration for safe-delete.

Settings come from environment variables so the gate can be made verbose
from inside an agent hook without touching any file.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Environment variable names
DEBUG_ENV = "SAFE_DELETE_DEBUG"
LOG_LEVEL_ENV = "SAFE_DELETE_LOG_LEVEL"
LOG_CONSOLE_ENV = "SAFE_DELETE_LOG_CONSOLE"
LOG_DIR_ENV = "SAFE_DELETE_LOG_DIR"

# Log file names
HUMAN_LOG_FILE = "safe-delete.log"
JSON_LOG_FILE = "safe-delete.json"

LOG_LEVEL_MAP = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

_TRUTHY = ("1", "true", "yes")
_FALSY = ("0", "false", "no")


@dataclass
class LogConfig:
    """Configuration for the logging system.

    Attributes:
        log_dir: Directory for log files; None disables file logging
        log_max_bytes: Size at which a log file is rotated
        log_backup_count: Number of rotated files to keep
        default_level: Logger level
        console_enabled: Whether to log to stderr
    """

    log_dir: Optional[Path] = None
    log_max_bytes: int = 5 * 1024 * 1024  # 5MB
    log_backup_count: int = 3
    default_level: int = logging.INFO
    console_enabled: bool = False

    @property
    def file_enabled(self) -> bool:
        return self.log_dir is not None

    @property
    def human_log_path(self) -> Optional[Path]:
        return self.log_dir / HUMAN_LOG_FILE if self.log_dir else None

    @property
    def json_log_path(self) -> Optional[Path]:
        return self.log_dir / JSON_LOG_FILE if self.log_dir else None


def get_config() -> LogConfig:
    """Create a LogConfig from environment variables.

    Environment variables:
        SAFE_DELETE_DEBUG: '1', 'true' or 'yes' enables debug level and console
        SAFE_DELETE_LOG_LEVEL: 'debug', 'info', 'warning', 'error', 'critical'
        SAFE_DELETE_LOG_CONSOLE: force console output on or off
        SAFE_DELETE_LOG_DIR: write rotating human and JSON logs here
    """
    config = LogConfig()

    if os.environ.get(DEBUG_ENV, "").lower() in _TRUTHY:
        config.default_level = logging.DEBUG
        config.console_enabled = True

    log_level_str = os.environ.get(LOG_LEVEL_ENV, "").lower()
    if log_level_str in LOG_LEVEL_MAP:
        config.default_level = LOG_LEVEL_MAP[log_level_str]

    console_env = os.environ.get(LOG_CONSOLE_ENV, "").lower()
    if console_env in _TRUTHY:
        config.console_enabled = True
    elif console_env in _FALSY:
        config.console_enabled = False

    log_dir = os.environ.get(LOG_DIR_ENV, "")
    if log_dir:
        config.log_dir = Path(log_dir).expanduser()

    return config


def ensure_log_directory(config: LogConfig) -> Optional[Path]:
    """Create the log directory if file logging is enabled."""
    if config.log_dir is None:
        return None
    config.log_dir.mkdir(parents=True, exist_ok=True)
    return config.log_dir
