"""
Settings management for safe-delete
"""

import json
import os
from dataclasses import asdict, dataclass, fields
from typing import Optional

from .logger import get_logger

logger = get_logger("settings")

CONFIG_DIR = os.path.expanduser("~/.config/safe-delete")
CONFIG_FILE = os.path.join(CONFIG_DIR, "settings.json")


def _same_type(value: object, default: object) -> bool:
    # bool is an int subclass; ints are fine where a float is expected
    if isinstance(value, bool) or isinstance(default, bool):
        return type(value) is type(default)
    if isinstance(default, float):
        return isinstance(value, (int, float))
    return isinstance(value, type(default))


@dataclass
class Settings:
    """Runtime settings"""

    # Recursive deletions, find -delete and truncate at or above this size
    # are reported even when the target is not protected
    size_threshold_bytes: int = 100 * 1024 * 1024

    # Upper bound on a single directory size query (du) in seconds
    size_query_timeout: float = 10.0

    # Optional YAML file overriding the protected path defaults
    protected_paths_file: str = os.path.join(CONFIG_DIR, "protected_paths.yaml")

    def save(self) -> None:
        """Save settings to config file"""
        os.makedirs(CONFIG_DIR, exist_ok=True)
        with open(CONFIG_FILE, "w") as f:
            json.dump(asdict(self), f, indent=2)

    @classmethod
    def load(cls) -> "Settings":
        """Load settings from config file, or return defaults"""
        if not os.path.exists(CONFIG_FILE):
            return cls()

        try:
            with open(CONFIG_FILE, "r") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Using default settings, cannot read %s: %s", CONFIG_FILE, e)
            return cls()

        if not isinstance(data, dict):
            logger.warning("Using default settings, %s is not an object", CONFIG_FILE)
            return cls()

        # Ignore keys from other versions and values of the wrong type
        defaults = cls()
        filtered_data = {}
        for f in fields(cls):
            if f.name not in data:
                continue
            value = data[f.name]
            default = getattr(defaults, f.name)
            if not _same_type(value, default):
                logger.warning(
                    "Using default %s=%r, %r in %s is not a %s",
                    f.name,
                    default,
                    value,
                    CONFIG_FILE,
                    type(default).__name__,
                )
                continue
            filtered_data[f.name] = value
        return cls(**filtered_data)


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def save_settings() -> None:
    """Save the global settings"""
    if _settings is not None:
        _settings.save()
