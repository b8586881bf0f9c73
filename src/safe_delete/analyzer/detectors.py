"""
Threat detectors - one function per destructive-operation class

Every detector takes the text of one subcommand (sudo already stripped) and
the working directory, and returns the threats it found. ``detect_piped_deletion``
is the exception: it needs the unsplit command line, since splitting cuts
the pipe it looks for. Detectors never raise on odd input; no match means
no threat.
"""

from dataclasses import dataclass
from typing import Callable, List

from ..scope import ProtectedPathRegistry, SizeOracle, format_bytes
from ..scope.size import DEFAULT_SIZE_THRESHOLD
from .patterns import (
    DANGEROUS_GLOBS,
    DD_OUTPUT_PATTERN,
    DD_PATTERN,
    DEVICE,
    FIND_DELETE_PATTERN,
    FIND_EXEC_RM_PATTERN,
    FIND_PATTERN,
    FIND_PREFIX_OPTIONS,
    FORMAT_PATTERN,
    GIT_CLEAN_PATTERN,
    MV_DEVNULL_PATTERN,
    PERMISSION_PATTERN,
    PIPED_INPUT,
    PIPED_RM_PATTERN,
    PSEUDO_DEVICE_PATTERN,
    REDIRECT_TRUNCATE_PATTERN,
    RM_PATTERN,
    SHALLOW_GLOB_PATTERN,
    TRUNCATE_PATTERN,
    TRUNCATE_VALUE_OPTIONS,
)
from .splitter import has_short_flag, split_flags, tokenize
from .types import Severity, Threat


@dataclass(frozen=True)
class DetectionContext:
    """What detectors need besides the command: the protected paths and sizes."""

    registry: ProtectedPathRegistry
    size_oracle: SizeOracle
    size_threshold: int = DEFAULT_SIZE_THRESHOLD

    def resolve(self, target: str, cwd: str) -> str:
        return self.registry.resolve(target, cwd)

    def is_protected(self, target: str, cwd: str) -> bool:
        return self.registry.is_protected(target, cwd)

    def large_size(self, resolved: str) -> int:
        """Size of ``resolved`` if it reaches the threshold, else 0."""
        size = self.size_oracle.size_of(resolved)
        return size if size >= self.size_threshold else 0


Detector = Callable[[str, str, DetectionContext], List[Threat]]


def is_wildcard_explosion(target: str) -> bool:
    """Check for globs like ``/*``, ``~/*`` or ``/us*`` at a shallow depth."""
    return target in DANGEROUS_GLOBS or bool(SHALLOW_GLOB_PATTERN.match(target))


def detect_deletion(command: str, cwd: str, ctx: DetectionContext) -> List[Threat]:
    """rm/rmdir on wildcard explosions, protected paths or large trees."""
    match = RM_PATTERN.search(command)
    if not match:
        return []

    verb = match.group(1)
    flags, targets = split_flags(tokenize(match.group(2)))
    is_recursive = has_short_flag(flags, "rR") or "--recursive" in flags

    threats: List[Threat] = []
    for target in targets:
        if is_wildcard_explosion(target):
            shown = " ".join([verb, *flags, target])
            threats.append(
                Threat(
                    description=f"Wildcard deletion: {shown}",
                    severity=Severity.CRITICAL,
                    affected_paths=(target,),
                )
            )
            continue

        resolved = ctx.resolve(target, cwd)

        if ctx.is_protected(target, cwd):
            threats.append(
                Threat(
                    description=f"Deletion targets protected path: {resolved}",
                    severity=Severity.CRITICAL,
                    affected_paths=(resolved,),
                )
            )
            continue

        if is_recursive:
            size = ctx.large_size(resolved)
            if size:
                threats.append(
                    Threat(
                        description=(
                            f"Large recursive deletion: {resolved} ({format_bytes(size)})"
                        ),
                        severity=Severity.HIGH,
                        affected_paths=(resolved,),
                    )
                )

    return threats


def _find_root(args: str) -> str:
    for token in tokenize(args):
        if token in FIND_PREFIX_OPTIONS:
            continue
        if token.startswith(("-", "(", "!")):
            break
        return token
    return "."


def detect_find_delete(command: str, cwd: str, ctx: DetectionContext) -> List[Threat]:
    """find ... -delete / find ... -exec rm rooted somewhere protected or large."""
    match = FIND_PATTERN.search(command)
    if not match:
        return []
    if not (FIND_DELETE_PATTERN.search(command) or FIND_EXEC_RM_PATTERN.search(command)):
        return []

    root = _find_root(match.group(1))
    resolved = ctx.resolve(root, cwd)

    if ctx.is_protected(root, cwd):
        return [
            Threat(
                description=f"find -delete rooted at protected path: {resolved}",
                severity=Severity.CRITICAL,
                affected_paths=(resolved,),
            )
        ]

    size = ctx.large_size(resolved)
    if size:
        return [
            Threat(
                description=(
                    f"find -delete in large directory: {resolved} ({format_bytes(size)})"
                ),
                severity=Severity.HIGH,
                affected_paths=(resolved,),
            )
        ]

    return []


def detect_permission_change(
    command: str, cwd: str, ctx: DetectionContext
) -> List[Threat]:
    """Recursive chmod/chown/chgrp on protected paths."""
    match = PERMISSION_PATTERN.search(command)
    if not match:
        return []

    verb = match.group(1)
    flags, operands = split_flags(tokenize(match.group(2)))
    # chmod -r is "remove read", not recursion
    if not (has_short_flag(flags, "R") or "--recursive" in flags):
        return []

    threats: List[Threat] = []
    # First operand is the mode or owner specifier
    for target in operands[1:]:
        if ctx.is_protected(target, cwd):
            resolved = ctx.resolve(target, cwd)
            threats.append(
                Threat(
                    description=f"Recursive {verb} on protected path: {resolved}",
                    severity=Severity.CRITICAL,
                    affected_paths=(resolved,),
                )
            )

    return threats


def detect_git_clean(command: str, cwd: str, ctx: DetectionContext) -> List[Threat]:
    """git clean -f combined with -d and/or -x/-X."""
    match = GIT_CLEAN_PATTERN.search(command)
    if not match:
        return []

    flags, _ = split_flags(tokenize(match.group(1)))
    if has_short_flag(flags, "n") or "--dry-run" in flags:
        return []

    is_forced = has_short_flag(flags, "f") or "--force" in flags
    removes_directories = has_short_flag(flags, "d")
    removes_ignored = has_short_flag(flags, "xX")

    if not is_forced or not (removes_directories or removes_ignored):
        return []

    shown = " ".join(flags)
    ignored = " and gitignored" if removes_ignored else ""
    directories = " and directories" if removes_directories else ""
    return [
        Threat(
            description=(
                f"Aggressive git clean ({shown}) -- will permanently delete "
                f"untracked{ignored} files{directories}"
            ),
            severity=Severity.HIGH,
            affected_paths=(".",),
        )
    ]


def detect_piped_deletion(
    command: str, cwd: str, ctx: DetectionContext
) -> List[Threat]:
    """Output piped into xargs/parallel rm: the deleted set is unknown."""
    if not PIPED_RM_PATTERN.search(command):
        return []
    return [
        Threat(
            description="Piped deletion via xargs rm -- uncontrolled scope",
            severity=Severity.HIGH,
            affected_paths=(PIPED_INPUT,),
        )
    ]


def _truncate_targets(args: str) -> List[str]:
    targets: List[str] = []
    skip_next = False
    for token in tokenize(args):
        if skip_next:
            skip_next = False
        elif token in TRUNCATE_VALUE_OPTIONS:
            skip_next = True
        elif token.startswith("-"):
            # -s0, --size=0, -c, ...
            continue
        else:
            targets.append(token)
    return targets


def detect_truncation(command: str, cwd: str, ctx: DetectionContext) -> List[Threat]:
    """``> file`` on a protected path, or truncate on a large file."""
    threats: List[Threat] = []

    redirect = REDIRECT_TRUNCATE_PATTERN.match(command)
    operands = tokenize(redirect.group(1)) if redirect else []
    if operands:
        target = operands[0]
        if ctx.is_protected(target, cwd):
            resolved = ctx.resolve(target, cwd)
            threats.append(
                Threat(
                    description=f"Truncation of protected file: {resolved}",
                    severity=Severity.CRITICAL,
                    affected_paths=(resolved,),
                )
            )

    truncate = TRUNCATE_PATTERN.search(command)
    if truncate:
        for target in _truncate_targets(truncate.group(1)):
            resolved = ctx.resolve(target, cwd)
            size = ctx.large_size(resolved)
            if size:
                threats.append(
                    Threat(
                        description=(
                            f"Truncating large file: {resolved} ({format_bytes(size)})"
                        ),
                        severity=Severity.HIGH,
                        affected_paths=(resolved,),
                    )
                )

    return threats


def detect_device_write(command: str, cwd: str, ctx: DetectionContext) -> List[Threat]:
    """dd onto a device, filesystem formatting, mv into /dev/null."""
    threats: List[Threat] = []

    if DD_PATTERN.search(command):
        output = DD_OUTPUT_PATTERN.search(command)
        if output:
            device = output.group(1).strip("'\"")
            if device.startswith("/dev/") and not PSEUDO_DEVICE_PATTERN.match(device):
                threats.append(
                    Threat(
                        description="dd writing directly to a device",
                        severity=Severity.CRITICAL,
                        affected_paths=(device,),
                    )
                )

    if FORMAT_PATTERN.search(command):
        threats.append(
            Threat(
                description="Filesystem format command detected",
                severity=Severity.CRITICAL,
                affected_paths=(DEVICE,),
            )
        )

    if MV_DEVNULL_PATTERN.search(command):
        threats.append(
            Threat(
                description="mv to /dev/null -- data will be destroyed",
                severity=Severity.HIGH,
                affected_paths=("/dev/null",),
            )
        )

    return threats


# Run on each subcommand, in this order
SUBCOMMAND_DETECTORS: tuple[Detector, ...] = (
    detect_deletion,
    detect_find_delete,
    detect_permission_change,
    detect_git_clean,
    detect_truncation,
    detect_device_write,
)

# Run once on the raw command line
COMMAND_LINE_DETECTORS: tuple[Detector, ...] = (detect_piped_deletion,)
