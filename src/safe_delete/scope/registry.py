"""Protected path registry.

Built once from the defaults in ``patterns.py`` (optionally overridden by a
YAML file) and read-only afterwards.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

import yaml

from ..utils.logger import get_logger
from .patterns import HOME_DIRS, SYSTEM_ROOTS
from .resolver import PathResolver

logger = get_logger("registry")


def _string_list(value: object) -> Optional[list[str]]:
    """Accept a YAML list of strings, anything else means 'use the default'."""
    if isinstance(value, list):
        return [str(item) for item in value if item]
    return None


def _normalize(path: str, resolver: PathResolver) -> str:
    """Absolute, ~-expanded, no trailing slash (except for the root)."""
    return resolver.resolve(path, "/")


@dataclass(frozen=True)
class ProtectedPathRegistry:
    """
    Immutable set of absolute paths whose deletion is always catastrophic.

    A target is protected when it equals a registered path, or when it is an
    ancestor of one (removing it would take the registered path with it).
    Descendants of a registered path are not protected here; they are left to
    the size heuristic.

    Example:
        registry = ProtectedPathRegistry.build(home="/home/user")
        registry.is_protected("/home", "/tmp")          # True (ancestor)
        registry.is_protected("~/.ssh", "/tmp")         # True (exact)
        registry.is_protected("~/.ssh/known_hosts", "/tmp")  # False
    """

    paths: tuple[str, ...]
    resolver: PathResolver = field(default_factory=PathResolver)

    @classmethod
    def build(
        cls,
        home: Optional[str] = None,
        system_roots: Optional[Iterable[str]] = None,
        home_dirs: Optional[Iterable[str]] = None,
        extra_paths: Optional[Iterable[str]] = None,
    ) -> "ProtectedPathRegistry":
        """Assemble a registry from system roots plus home subdirectories."""
        resolver = PathResolver(home=home) if home else PathResolver()
        roots = list(SYSTEM_ROOTS if system_roots is None else system_roots)
        subdirs = list(HOME_DIRS if home_dirs is None else home_dirs)

        candidates = roots + [resolver.home]
        candidates += [os.path.join(resolver.home, subdir) for subdir in subdirs]
        candidates += list(extra_paths or [])

        paths: list[str] = []
        for candidate in candidates:
            if not candidate:
                continue
            normalized = _normalize(candidate, resolver)
            if normalized not in paths:
                paths.append(normalized)

        return cls(paths=tuple(paths), resolver=resolver)

    @classmethod
    def from_yaml(
        cls, config_path: Path, home: Optional[str] = None
    ) -> "ProtectedPathRegistry":
        """Build a registry from a YAML override file.

        Recognized keys: ``system_roots`` and ``home_dirs`` replace the
        defaults, ``extra_paths`` are appended. A missing or malformed file
        yields the defaults.
        """
        if not config_path.exists():
            return cls.build(home=home)

        try:
            with open(config_path, "r") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Ignoring protected path file %s: %s", config_path, e)
            return cls.build(home=home)

        if not isinstance(data, dict):
            logger.warning(
                "Ignoring protected path file %s: expected a mapping", config_path
            )
            return cls.build(home=home)

        return cls.build(
            home=home,
            system_roots=_string_list(data.get("system_roots")),
            home_dirs=_string_list(data.get("home_dirs")),
            extra_paths=_string_list(data.get("extra_paths")),
        )

    def resolve(self, target: str, cwd: str) -> str:
        return self.resolver.resolve(target, cwd)

    def is_protected(self, target: str, cwd: str) -> bool:
        """Check whether removing ``target`` would destroy a protected path."""
        resolved = self.resolve(target, cwd)
        prefix = resolved if resolved.endswith("/") else resolved + "/"

        for protected in self.paths:
            if protected == resolved:
                return True
            if protected.startswith(prefix):
                return True

        return False


# Singleton instance
_registry: Optional[ProtectedPathRegistry] = None


def get_protected_registry() -> ProtectedPathRegistry:
    """Get the process-wide registry, built from settings on first use."""
    global _registry
    if _registry is None:
        from ..utils.settings import get_settings

        settings = get_settings()
        _registry = ProtectedPathRegistry.from_yaml(
            Path(settings.protected_paths_file).expanduser()
        )
    return _registry
