"""
Analyzer Patterns - Regexes recognizing destructive invocations

Command names are matched when not glued to another word or option
(``/bin/rm`` matches, ``git-rm`` and ``--format`` do not).
"""

import re

# === Deletion ===
# git rm only touches the index/worktree of tracked files
RM_PATTERN = re.compile(r"(?<![\w.-])(?<!git\s)(rm|rmdir)\s+(.*)")

# Globs broad enough to take out a filesystem root or a home directory
DANGEROUS_GLOBS = frozenset({"/*", "~/*", "$HOME/*", "${HOME}/*", "../*"})
SHALLOW_GLOB_PATTERN = re.compile(r"^(?:/|~/|\$HOME/|\$\{HOME\}/|\.\./)[^/]*\*")

# === find -delete / find -exec rm ===
FIND_PATTERN = re.compile(r"(?<![\w.-])find\s+(.*)")
FIND_DELETE_PATTERN = re.compile(r"\s-delete\b")
FIND_EXEC_RM_PATTERN = re.compile(r"\s-exec(?:dir)?\s+(?:\S*/)?rm\b")
# Options find accepts before the starting points
FIND_PREFIX_OPTIONS = frozenset({"-H", "-L", "-P"})

# === Recursive chmod/chown/chgrp ===
PERMISSION_PATTERN = re.compile(r"(?<![\w.-])(chmod|chown|chgrp)\s+(.*)")

# === git clean ===
GIT_CLEAN_PATTERN = re.compile(r"\bgit\s+clean\b(.*)")

# === Piped deletion (runs on the unsplit command line) ===
PIPED_RM_PATTERN = re.compile(r"\|\s*(?:xargs|parallel)\s+(?:.*\s)?(?:\S*/)?rm\b")

# === Truncation ===
# Bare redirection at the start only; "echo x > file" is an intentional write
REDIRECT_TRUNCATE_PATTERN = re.compile(r"^>(?!>)(.+)")
TRUNCATE_PATTERN = re.compile(r"(?<![\w.-])truncate\s+(.*)")
# truncate options whose value is a separate token
TRUNCATE_VALUE_OPTIONS = frozenset({"-s", "--size", "-r", "--reference"})

# === Device writes ===
DD_PATTERN = re.compile(r"(?<![\w.-])dd\s")
DD_OUTPUT_PATTERN = re.compile(r"(?:^|\s)of=(\S+)")
PSEUDO_DEVICE_PATTERN = re.compile(r"^/dev/(?:null|zero|stdout|stderr|fd/)")
FORMAT_PATTERN = re.compile(
    r"(?<![\w.-])(mkfs(?:\.\w+)?|mke2fs|newfs(?:_\w+)?|format)(?=\s|$)"
)
MV_DEVNULL_PATTERN = re.compile(r"(?<![\w.-])mv\s+.*\s/dev/null\s*$")

# Placeholder paths for threats without a concrete filesystem target
PIPED_INPUT = "(piped input)"
DEVICE = "(device)"
