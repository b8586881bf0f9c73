"""
Size measurement for the large-deletion heuristics.

Provides:
- SizeOracle: Protocol consumed by the detectors
- DiskUsageSizeOracle: stat for files, ``du`` for directories
- format_bytes: Render a byte count for threat descriptions
"""

import subprocess
from pathlib import Path
from typing import Protocol

from ..utils.logger import get_logger

logger = get_logger("size")

KIB = 1024
MIB = 1024 * KIB
GIB = 1024 * MIB

# Deletions and truncations at or above this size are reported
DEFAULT_SIZE_THRESHOLD = 100 * MIB

DEFAULT_SIZE_TIMEOUT = 10.0


class SizeOracle(Protocol):
    """Reports the size of a file, or the recursive usage of a directory.

    Implementations must never raise: anything unknown is 0.
    """

    def size_of(self, path: str) -> int: ...


class DiskUsageSizeOracle:
    """SizeOracle backed by ``os.stat`` and ``du -sk``.

    Directory walks can be slow on large trees, so ``du`` runs with a
    timeout; a timeout reads as "unknown" (0) rather than blocking the gate.
    """

    def __init__(self, timeout: float = DEFAULT_SIZE_TIMEOUT) -> None:
        self.timeout = timeout

    def size_of(self, path: str) -> int:
        target = Path(path)
        try:
            if target.is_file():
                return target.stat().st_size
            if target.is_dir():
                return self._disk_usage(path)
        except OSError as e:
            logger.debug("stat failed for %s: %s", path, e)
        return 0

    def _disk_usage(self, path: str) -> int:
        try:
            result = subprocess.run(
                ["du", "-sk", path],
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.debug("du timed out after %.1fs for %s", self.timeout, path)
            return 0
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug("du failed for %s: %s", path, e)
            return 0

        # du exits non-zero on unreadable subdirectories but still prints a total
        fields = result.stdout.split()
        if not fields:
            return 0
        try:
            return int(fields[0]) * KIB
        except ValueError:
            logger.debug("Unexpected du output for %s: %r", path, result.stdout)
            return 0


def format_bytes(size: int) -> str:
    """Format a byte count: 512B, 1.5KB, 150.0MB, 1.25GB."""
    if size < KIB:
        return f"{size}B"
    if size < MIB:
        return f"{size / KIB:.1f}KB"
    if size < GIB:
        return f"{size / MIB:.1f}MB"
    return f"{size / GIB:.2f}GB"
