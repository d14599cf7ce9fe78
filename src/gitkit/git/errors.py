"""Classification of failed git invocations into the closed error taxonomy."""

from __future__ import annotations

import re

from gitkit.exceptions import (
    AmbiguousReferenceError,
    GitOperationError,
    MergeConflictError,
    NetworkUnavailableError,
    NotARepositoryError,
    PermissionDeniedError,
    UnknownGitError,
)
from gitkit.runners.models import CommandResult

__all__ = ["classify_error", "extract_conflicted_files"]

_NOT_A_REPOSITORY_PATTERNS = (
    "not a git repository",
    "must be run in a work tree",
)

_AMBIGUOUS_PATTERNS = (
    "ambiguous argument",
    "unknown revision",
    "bad revision",
    "invalid reference",
    "not a valid object name",
    "did not match any",
    "bad object",
)

_CONFLICT_PATTERNS = (
    "conflict",
    "could not apply",
    "unmerged",
    "fix conflicts",
)

_PERMISSION_PATTERNS = (
    "permission denied",
    "operation not permitted",
    "authentication failed",
)

#: HTTP 403 as reported by a remote helper
_FORBIDDEN_RE = re.compile(r"(?:returned error|http\S*):? 403\b")

_NETWORK_PATTERNS = (
    "could not resolve host",
    "connection refused",
    "connection timed out",
    "network is unreachable",
    "unable to access",
    "temporary failure in name resolution",
    "failed to connect",
)

_CONFLICT_PATH_RE = re.compile(
    r"^CONFLICT \([^)]*\):.*? in (?P<path>.+?)\s*$", re.MULTILINE
)


def extract_conflicted_files(text: str) -> tuple[str, ...]:
    """Collect paths from ``CONFLICT (...): ... in <path>`` lines, in order."""
    paths = (m.group("path") for m in _CONFLICT_PATH_RE.finditer(text))
    return tuple(dict.fromkeys(paths))


def _matches(text: str, patterns: tuple[str, ...]) -> bool:
    return any(pattern in text for pattern in patterns)


def classify_error(result: CommandResult, operation: str) -> GitOperationError:
    """Map a failed invocation to a :class:`GitOperationError` subclass.

    stderr is inspected first, stdout only when stderr matched nothing
    (some commands, merge among them, report conflicts on stdout). The first
    matching category wins, in this order: not a repository, ambiguous
    reference, conflict, permission denied, network unavailable, unknown.

    Args:
        result: Outcome of the failed git invocation.
        operation: Name of the operation that issued the call.

    Returns:
        The classified exception, ready to raise.
    """
    message = result.stderr.strip() or result.stdout.strip() or (
        f"git {operation} failed with exit code {result.returncode}"
    )
    kwargs = {
        "operation": operation,
        "exit_code": result.returncode,
        "stderr": result.stderr,
    }

    for text in (result.stderr, result.stdout):
        lowered = text.lower()
        if not lowered.strip():
            continue
        if _matches(lowered, _NOT_A_REPOSITORY_PATTERNS):
            return NotARepositoryError(message, **kwargs)
        if _matches(lowered, _AMBIGUOUS_PATTERNS):
            return AmbiguousReferenceError(message, **kwargs)
        if _matches(lowered, _CONFLICT_PATTERNS):
            return MergeConflictError(
                message,
                conflicted_files=extract_conflicted_files(
                    f"{result.stdout}\n{result.stderr}"
                ),
                **kwargs,
            )
        if _matches(lowered, _PERMISSION_PATTERNS) or _FORBIDDEN_RE.search(lowered):
            return PermissionDeniedError(message, **kwargs)
        if _matches(lowered, _NETWORK_PATTERNS):
            return NetworkUnavailableError(message, **kwargs)

    return UnknownGitError(message, **kwargs)
