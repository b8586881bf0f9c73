"""
Safe Delete - pre-execution gate for destructive shell commands.

Usage:
    from safe_delete import analyze_command

    threats = analyze_command("rm -rf ~/*", "/home/user/project")
    for threat in threats:
        print(threat.severity.tag, threat.description)
"""

from .analyzer import (
    CommandAnalyzer,
    Severity,
    Subcommand,
    Threat,
    analyze_command,
    get_command_analyzer,
)
from .guard import GuardDecision, review_command

__version__ = "0.3.0"

__all__ = [
    "CommandAnalyzer",
    "GuardDecision",
    "Severity",
    "Subcommand",
    "Threat",
    "analyze_command",
    "get_command_analyzer",
    "review_command",
]
