"""
Confirmation gate around the analyzer.

The host decides how to ask a human; this module decides what to show and
what an answer (or the lack of one) means. Anything other than an explicit
yes blocks the command.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from .analyzer import CommandAnalyzer, Severity, Threat, get_command_analyzer
from .analyzer.command import sort_threats
from .utils.logger import get_logger

logger = get_logger("guard")

# confirm(title, body) -> True to allow; False or None (no answer) to deny
ConfirmCallback = Callable[[str, str], Optional[bool]]


@dataclass(frozen=True)
class GuardDecision:
    """Outcome of reviewing one command"""

    allowed: bool
    reason: str
    threats: tuple[Threat, ...] = field(default_factory=tuple)


def format_threats(threats: Sequence[Threat]) -> str:
    """One ``[SEVERITY] description`` line per threat, most severe first."""
    return "\n".join(
        f"{threat.severity.tag} {threat.description}" for threat in sort_threats(threats)
    )


def confirmation_title(threats: Sequence[Threat]) -> str:
    if any(threat.severity == Severity.CRITICAL for threat in threats):
        return "CRITICAL: Destructive command detected"
    return "Destructive command detected"


def confirmation_body(threats: Sequence[Threat], command: str) -> str:
    return (
        f"{format_threats(threats)}\n\n"
        f"Command:\n  {command}\n\n"
        "Allow this command to run?"
    )


def review_command(
    command: str,
    cwd: str,
    confirm: ConfirmCallback,
    analyzer: Optional[CommandAnalyzer] = None,
) -> GuardDecision:
    """
    Analyze a command and, if it is destructive, ask for confirmation.

    Args:
        command: Command about to be executed
        cwd: Directory it will run in
        confirm: Asks the human; called only when threats were found
        analyzer: Defaults to the process-wide analyzer

    Returns:
        GuardDecision; ``reason`` carries the formatted threats on denial
    """
    analyzer = analyzer or get_command_analyzer()
    threats: List[Threat] = analyzer.analyze(command, cwd)

    if not threats:
        return GuardDecision(allowed=True, reason="No destructive patterns detected")

    title = confirmation_title(threats)
    body = confirmation_body(threats, command)

    try:
        answer = confirm(title, body)
    except Exception:
        # No answer obtained: deny
        logger.exception("Confirmation failed, blocking command")
        answer = None

    if answer is True:
        logger.info("User allowed destructive command: %s", command)
        return GuardDecision(
            allowed=True,
            reason="User allowed destructive command",
            threats=tuple(threats),
        )

    logger.info("Blocked destructive command: %s", command)
    return GuardDecision(
        allowed=False,
        reason=f"User blocked destructive command.\n{format_threats(threats)}",
        threats=tuple(threats),
    )
