"""
Mock factories for safe_delete tests.

Usage:
    from tests.mocks import FakeSizeOracle
"""

from .sizes import FakeSizeOracle

__all__ = [
    "FakeSizeOracle",
]
