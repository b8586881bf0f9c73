"""
Path scope for destructive-command analysis.

Exports:
- PathResolver: Expands ~ and $HOME and normalizes paths against a cwd
- ProtectedPathRegistry: Immutable set of paths whose removal is catastrophic
- SizeOracle: Protocol for measuring file/directory size
- DiskUsageSizeOracle: stat/du backed SizeOracle
- format_bytes: Human-readable byte counts
"""

from .registry import ProtectedPathRegistry, get_protected_registry
from .resolver import PathResolver
from .size import DiskUsageSizeOracle, SizeOracle, format_bytes

__all__ = [
    "PathResolver",
    "ProtectedPathRegistry",
    "get_protected_registry",
    "SizeOracle",
    "DiskUsageSizeOracle",
    "format_bytes",
]
