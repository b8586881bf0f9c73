"""
Destructive Command Analyzer - find data-loss risks in shell commands

Provides:
- Command analysis (CommandAnalyzer, analyze_command)
- Splitting and sudo stripping (split_commands, strip_escalation)
- The detector battery (detect_* functions)

This module re-exports all public symbols.
"""

# Types
from .types import Severity, Subcommand, Threat

# Splitting
from .splitter import split_commands, strip_escalation, tokenize

# Detectors
from .detectors import (
    COMMAND_LINE_DETECTORS,
    SUBCOMMAND_DETECTORS,
    DetectionContext,
    detect_deletion,
    detect_device_write,
    detect_find_delete,
    detect_git_clean,
    detect_permission_change,
    detect_piped_deletion,
    detect_truncation,
    is_wildcard_explosion,
)

# Command analysis
from .command import (
    ESCALATION_MARKER,
    CommandAnalyzer,
    analyze_command,
    escalate,
    get_command_analyzer,
    sort_threats,
)

__all__ = [
    # Types
    "Severity",
    "Subcommand",
    "Threat",
    # Splitting
    "split_commands",
    "strip_escalation",
    "tokenize",
    # Detectors
    "COMMAND_LINE_DETECTORS",
    "SUBCOMMAND_DETECTORS",
    "DetectionContext",
    "detect_deletion",
    "detect_device_write",
    "detect_find_delete",
    "detect_git_clean",
    "detect_permission_change",
    "detect_piped_deletion",
    "detect_truncation",
    "is_wildcard_explosion",
    # Command analysis
    "ESCALATION_MARKER",
    "CommandAnalyzer",
    "analyze_command",
    "escalate",
    "get_command_analyzer",
    "sort_threats",
]
