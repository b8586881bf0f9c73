"""
Protected path defaults.

Provides:
- SYSTEM_ROOTS: Absolute system locations (Linux and macOS)
- HOME_DIRS: Directories relative to the user's home

The home directory itself is always protected in addition to HOME_DIRS.
"""

from typing import List


SYSTEM_ROOTS: List[str] = [
    "/",
    "/bin",
    "/sbin",
    "/usr",
    "/etc",
    "/var",
    "/lib",
    "/lib64",
    "/boot",
    "/home",
    "/root",
    # macOS
    "/System",
    "/Applications",
    "/Library",
    "/opt",
    "/private",
]


HOME_DIRS: List[str] = [
    "Documents",
    "Desktop",
    "Downloads",
    "Pictures",
    "Work",
    ".ssh",
    ".config",
    ".local",
    ".gnupg",
]
