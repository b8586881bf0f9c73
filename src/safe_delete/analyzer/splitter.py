"""
Command splitting - separate a command line into analyzable pieces

Provides:
- split_commands: Split at top-level ;, |, && and ||
- strip_escalation: Remove a leading sudo/doas prefix
- tokenize: Quote-aware argument tokens
- split_flags: Separate option tokens from operands

This is a token-level scan, not a shell grammar: subshells, $( ),
here-documents and backslash-escaped quotes are not understood.
"""

import re
import shlex
from typing import List

from .types import Subcommand

# sudo/doas with flag clusters and the sudo options that take a value
ESCALATION_PATTERN = re.compile(
    r"^(?:sudo|doas)\s+(?:(?:-[ugCDhprtU]\s+\S+|-[a-zA-Z]+)\s+)*"
)


def split_commands(command: str) -> List[str]:
    """Split a command line at ;, |, && and || outside of quotes.

    Quoted text is copied verbatim, separators included. Blank segments are
    dropped.

    Example:
        split_commands("cd /tmp && rm -rf 'a;b' | tee log")
        # ["cd /tmp", "rm -rf 'a;b'", "tee log"]
    """
    commands: List[str] = []
    current: List[str] = []
    in_single = False
    in_double = False
    i = 0

    def flush() -> None:
        segment = "".join(current).strip()
        if segment:
            commands.append(segment)
        current.clear()

    while i < len(command):
        char = command[i]
        pair = command[i : i + 2]

        if char == "'" and not in_double:
            in_single = not in_single
        elif char == '"' and not in_single:
            in_double = not in_double
        elif not in_single and not in_double:
            if pair in ("&&", "||"):
                flush()
                i += 2
                continue
            if char in (";", "|"):
                flush()
                i += 1
                continue

        current.append(char)
        i += 1

    flush()
    return commands


def strip_escalation(command: str) -> Subcommand:
    """Remove a leading ``sudo``/``doas`` invocation.

    Example:
        strip_escalation("sudo -E rm -rf /opt")
        # Subcommand(text="rm -rf /opt", has_escalation=True)
    """
    stripped = command.strip()
    match = ESCALATION_PATTERN.match(stripped)
    if match:
        return Subcommand(text=stripped[match.end() :], has_escalation=True)
    return Subcommand(text=stripped, has_escalation=False)


def tokenize(args: str) -> List[str]:
    """Split arguments the way the shell would, quotes removed.

    Falls back to whitespace splitting when shlex rejects the text
    (unbalanced quotes, trailing backslash).
    """
    try:
        return shlex.split(args)
    except ValueError:
        return args.split()


def split_flags(tokens: List[str]) -> tuple[List[str], List[str]]:
    """Partition tokens into (flags, operands).

    A literal ``--`` ends option parsing; everything after it is an operand.
    """
    flags: List[str] = []
    operands: List[str] = []
    options_done = False

    for token in tokens:
        if options_done:
            operands.append(token)
        elif token == "--":
            options_done = True
        elif token.startswith("-") and token != "-":
            flags.append(token)
        else:
            operands.append(token)

    return flags, operands


def has_short_flag(flags: List[str], letters: str) -> bool:
    """Check whether any short-flag cluster (``-rf``) contains one of ``letters``."""
    for flag in flags:
        if flag.startswith("--"):
            continue
        if any(letter in flag[1:] for letter in letters):
            return True
    return False
