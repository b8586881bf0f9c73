"""Resolve path arguments taken from shell commands."""

import os
from dataclasses import dataclass, field
from pathlib import Path


def _default_home() -> str:
    return str(Path.home())


@dataclass(frozen=True)
class PathResolver:
    """
    Turns a path as written in a command into an absolute, normalized path.

    Handles:
    - ``~`` and ``~/...`` expansion (``~user`` is left literal)
    - ``$HOME`` and ``${HOME}`` substitution
    - Relative paths (resolved against the command's working directory)
    - ``.`` and ``..`` components

    Symlinks are not followed: the path is what the command names, not what
    it points to. Resolution never fails; unparseable input is treated as a
    literal relative path.

    Example:
        resolver = PathResolver(home="/home/user")
        resolver.resolve("~/../other", "/tmp")  # "/home/other"
    """

    home: str = field(default_factory=_default_home)

    def expand(self, target: str) -> str:
        """Expand home references without touching the rest of the path."""
        expanded = target
        if expanded == "~" or expanded.startswith("~/"):
            expanded = self.home + expanded[1:]

        expanded = expanded.replace("${HOME}", self.home)
        expanded = expanded.replace("$HOME", self.home)
        return expanded

    def resolve(self, target: str, cwd: str) -> str:
        """
        Resolve a path to its absolute, normalized form.

        Args:
            target: Path as it appears in the command
            cwd: Working directory the command will run in

        Returns:
            Absolute path with no trailing slash (except for ``/``)
        """
        expanded = self.expand(target)
        # os.path.join discards cwd when expanded is already absolute
        joined = os.path.join(cwd, expanded)
        resolved = os.path.normpath(joined)
        # POSIX normpath keeps a leading double slash
        if resolved.startswith("//"):
            resolved = "/" + resolved.lstrip("/")
        return resolved
