"""
Analyzer Types - Common types for destructive command analysis

Provides:
- Severity: Enum for threat severity tiers
- Threat: One detected destructive pattern
- Subcommand: One segment of a compound command line
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(Enum):
    """Threat severity tiers, most severe first"""

    CRITICAL = "critical"  # Catastrophic or unrecoverable
    HIGH = "high"  # Large or uncontrolled data loss
    MEDIUM = "medium"

    @property
    def rank(self) -> int:
        """Sort key: critical < high < medium"""
        return _RANKS[self]

    @property
    def tag(self) -> str:
        return f"[{self.name}]"


_RANKS = {
    Severity.CRITICAL: 0,
    Severity.HIGH: 1,
    Severity.MEDIUM: 2,
}


@dataclass(frozen=True)
class Threat:
    """A destructive pattern found in a command"""

    description: str
    severity: Severity
    affected_paths: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "severity": self.severity.value,
            "affected_paths": list(self.affected_paths),
        }


@dataclass(frozen=True)
class Subcommand:
    """A command segment with any sudo/doas prefix removed"""

    text: str
    has_escalation: bool = False
