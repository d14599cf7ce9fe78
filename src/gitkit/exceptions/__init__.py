"""gitkit exception hierarchy.

All exceptions can be imported from this package:
    from gitkit.exceptions import GitOperationError, NotARepositoryError
"""

from __future__ import annotations

# Base exception
from gitkit.exceptions.base import GitkitError

# Configuration exceptions
from gitkit.exceptions.config import ConfigError

# Git-related exceptions
from gitkit.exceptions.git import (
    AmbiguousReferenceError,
    DuplicateOperationError,
    ErrorKind,
    GitError,
    GitNotFoundError,
    GitOperationError,
    MergeConflictError,
    NetworkUnavailableError,
    NotARepositoryError,
    PermissionDeniedError,
    UnknownGitError,
    UnknownOperationError,
)

# Runner-related exceptions
from gitkit.exceptions.runner import (
    CommandTimeoutError,
    RunnerError,
    WorkingDirectoryError,
)

__all__ = [
    # Base
    "GitkitError",
    # Config
    "ConfigError",
    # Git
    "AmbiguousReferenceError",
    "DuplicateOperationError",
    "ErrorKind",
    "GitError",
    "GitNotFoundError",
    "GitOperationError",
    "MergeConflictError",
    "NetworkUnavailableError",
    "NotARepositoryError",
    "PermissionDeniedError",
    "UnknownGitError",
    "UnknownOperationError",
    # Runner
    "CommandTimeoutError",
    "RunnerError",
    "WorkingDirectoryError",
]
