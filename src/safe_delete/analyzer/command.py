"""
Command analysis - run the detector battery over a command line

Provides:
- CommandAnalyzer: Splits, strips sudo, detects, escalates and orders threats
- escalate: Force threats from a sudo subcommand to critical
- sort_threats: Severity-major, detection order within a tier
- analyze_command: Convenience wrapper around the default analyzer
- get_command_analyzer: Get the process-wide CommandAnalyzer instance
"""

from dataclasses import replace
from typing import Iterable, List, Optional

from ..scope import DiskUsageSizeOracle, ProtectedPathRegistry, SizeOracle
from ..scope import get_protected_registry
from ..scope.size import DEFAULT_SIZE_THRESHOLD
from ..utils.logger import get_logger, log_context
from .detectors import (
    COMMAND_LINE_DETECTORS,
    SUBCOMMAND_DETECTORS,
    DetectionContext,
    Detector,
)
from .splitter import split_commands, strip_escalation
from .types import Severity, Threat

logger = get_logger("analyzer")

ESCALATION_MARKER = "[sudo] "


def escalate(threats: Iterable[Threat], has_escalation: bool) -> List[Threat]:
    """Anything destructive becomes critical when run with elevated privileges."""
    if not has_escalation:
        return list(threats)
    return [
        replace(
            threat,
            description=f"{ESCALATION_MARKER}{threat.description}",
            severity=Severity.CRITICAL,
        )
        for threat in threats
    ]


def sort_threats(threats: Iterable[Threat]) -> List[Threat]:
    # sorted() is stable, so detection order survives within a tier
    return sorted(threats, key=lambda threat: threat.severity.rank)


class CommandAnalyzer:
    """
    Finds operations in a shell command that could destroy data.

    The analyzer holds only immutable configuration (registry, size oracle,
    threshold), so one instance can serve any number of callers.

    Example:
        analyzer = CommandAnalyzer(ProtectedPathRegistry.build())
        for threat in analyzer.analyze("sudo rm -rf /opt", "/home/user"):
            print(threat.severity.tag, threat.description)
    """

    def __init__(
        self,
        registry: ProtectedPathRegistry,
        size_oracle: Optional[SizeOracle] = None,
        size_threshold: Optional[int] = None,
    ) -> None:
        self.context = DetectionContext(
            registry=registry,
            size_oracle=size_oracle or DiskUsageSizeOracle(),
            size_threshold=(
                DEFAULT_SIZE_THRESHOLD if size_threshold is None else size_threshold
            ),
        )

    def _run(self, detectors: Iterable[Detector], command: str, cwd: str) -> List[Threat]:
        threats: List[Threat] = []
        for detect in detectors:
            threats.extend(detect(command, cwd, self.context))
        return threats

    def analyze(self, command: str, cwd: str) -> List[Threat]:
        """
        Analyze a command line before it is executed.

        Args:
            command: Raw command line as the agent issued it
            cwd: Absolute working directory the command will run in

        Returns:
            Threats ordered critical, high, medium; empty when nothing
            destructive was recognized
        """
        if not command or not command.strip():
            return []

        with log_context():
            logger.debug("Analyzing command in %s: %r", cwd, command)

            # Pipe-aware detectors need the line before it is split at |
            threats = self._run(COMMAND_LINE_DETECTORS, command, cwd)

            for segment in split_commands(command):
                subcommand = strip_escalation(segment)
                found = self._run(SUBCOMMAND_DETECTORS, subcommand.text, cwd)
                threats.extend(escalate(found, subcommand.has_escalation))

            ordered = sort_threats(threats)
            if ordered:
                logger.info(
                    "%d threat(s) in command: %s",
                    len(ordered),
                    "; ".join(threat.description for threat in ordered),
                )
            return ordered


# Singleton instance
_analyzer: Optional[CommandAnalyzer] = None


def get_command_analyzer() -> CommandAnalyzer:
    """Get the process-wide CommandAnalyzer, configured from settings."""
    global _analyzer
    if _analyzer is None:
        from ..utils.settings import get_settings

        settings = get_settings()
        _analyzer = CommandAnalyzer(
            registry=get_protected_registry(),
            size_oracle=DiskUsageSizeOracle(timeout=settings.size_query_timeout),
            size_threshold=settings.size_threshold_bytes,
        )
    return _analyzer


def analyze_command(command: str, cwd: str) -> List[Threat]:
    """Analyze ``command`` with the default analyzer."""
    return get_command_analyzer().analyze(command, cwd)
