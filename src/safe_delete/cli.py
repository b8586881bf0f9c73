"""
safe-delete command line.

Two modes:

    safe-delete [--cwd DIR] [--json] COMMAND...
        Analyze a command and print its threats. Exit 1 if any were found.
        Options go first; every word from COMMAND on belongs to the command.

    safe-delete --hook
        PreToolUse hook: read the tool call as JSON on stdin and, for a
        destructive Bash command, answer with a permissionDecision of "ask"
        so the host prompts the user.
"""

import argparse
import json
import os
import sys
from typing import List, Optional

from .analyzer import Threat, analyze_command
from .guard import confirmation_title, format_threats
from .utils.logger import get_logger

logger = get_logger("cli")

EXIT_CLEAN = 0
EXIT_THREATS = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="safe-delete",
        description="Detect shell commands that could cause irreversible data loss",
    )
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Command line to analyze (quote it to keep operators intact)",
    )
    parser.add_argument(
        "--cwd",
        default=None,
        help="Working directory the command would run in (default: current)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print threats as a JSON array",
    )
    parser.add_argument(
        "--hook",
        action="store_true",
        help="Run as an agent PreToolUse hook reading JSON from stdin",
    )
    return parser


def _print_threats(threats: List[Threat], as_json: bool) -> None:
    if as_json:
        print(json.dumps([threat.to_dict() for threat in threats], indent=2))
    elif threats:
        print(format_threats(threats))


def run_hook(stdin=None) -> int:
    """Handle one PreToolUse payload. Always exits 0; the decision is on stdout."""
    stream = stdin if stdin is not None else sys.stdin
    try:
        data = json.load(stream)
    except (json.JSONDecodeError, EOFError):
        logger.warning("Hook received malformed/empty JSON input, skipping analysis")
        return EXIT_CLEAN

    if not isinstance(data, dict) or data.get("tool_name") != "Bash":
        return EXIT_CLEAN

    tool_input = data.get("tool_input")
    if not isinstance(tool_input, dict):
        return EXIT_CLEAN

    command = str(tool_input.get("command", "")).strip()
    if not command:
        return EXIT_CLEAN

    cwd = data.get("cwd")
    if not isinstance(cwd, str) or not cwd:
        cwd = os.getcwd()
    threats = analyze_command(command, cwd)
    if not threats:
        return EXIT_CLEAN

    reason = f"{confirmation_title(threats)}\n{format_threats(threats)}"
    print(
        json.dumps(
            {
                "hookSpecificOutput": {
                    "hookEventName": "PreToolUse",
                    "permissionDecision": "ask",
                    "permissionDecisionReason": reason,
                }
            }
        )
    )
    return EXIT_CLEAN


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.hook:
        return run_hook()

    words = args.command
    if words[:1] == ["--"]:
        words = words[1:]
    if not words:
        parser.error("a command to analyze is required (or --hook)")

    command = " ".join(words)
    cwd = os.path.abspath(args.cwd or os.getcwd())

    threats = analyze_command(command, cwd)
    _print_threats(threats, args.json)
    return EXIT_THREATS if threats else EXIT_CLEAN


if __name__ == "__main__":
    sys.exit(main())
