from __future__ import annotations

from enum import Enum

from gitkit.exceptions.base import GitkitError


class ErrorKind(str, Enum):
    """Closed taxonomy of classified git failures."""

    NOT_A_REPOSITORY = "not_a_repository"
    AMBIGUOUS_REFERENCE = "ambiguous_reference"
    MERGE_CONFLICT = "merge_conflict"
    PERMISSION_DENIED = "permission_denied"
    NETWORK_UNAVAILABLE = "network_unavailable"
    UNKNOWN = "unknown"


class GitError(GitkitError):
    """Exception for git operation failures.

    Attributes:
        message: Human-readable error message.
        operation: Git operation that failed (e.g., "diff", "commit").
    """

    def __init__(self, message: str, operation: str | None = None) -> None:
        """Initialize the GitError.

        Args:
            message: Human-readable error message.
            operation: Git operation that failed.
        """
        self.operation = operation
        super().__init__(message)


class GitNotFoundError(GitError):
    """Exception raised when the git CLI is not installed or not in PATH.

    Attributes:
        message: Human-readable error message.
        executable: The git binary that could not be started.
    """

    def __init__(
        self,
        message: str = "Git CLI not found",
        executable: str | None = None,
    ) -> None:
        """Initialize the GitNotFoundError.

        Args:
            message: Human-readable error message.
            executable: The git binary that could not be started.
        """
        self.executable = executable
        super().__init__(message, operation="git_check")


class GitOperationError(GitError):
    """A git invocation exited nonzero and was classified.

    Subclasses pin ``kind`` to one member of :class:`ErrorKind`; callers can
    branch on either the class or the ``kind`` attribute.

    Attributes:
        message: Human-readable error message.
        operation: Name of the operation that issued the failing call.
        exit_code: Exit code of the failing git process.
        stderr: Diagnostic text captured from the process.
        kind: Classified error kind.
    """

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        exit_code: int | None = None,
        stderr: str = "",
    ) -> None:
        """Initialize the GitOperationError.

        Args:
            message: Human-readable error message.
            operation: Name of the operation that issued the failing call.
            exit_code: Exit code of the failing git process.
            stderr: Diagnostic text captured from the process.
        """
        self.exit_code = exit_code
        self.stderr = stderr
        super().__init__(message, operation=operation)

    def to_dict(self) -> dict[str, object]:
        return {
            "kind": self.kind.value,
            "operation": self.operation,
            "message": self.message,
            "exit_code": self.exit_code,
        }


class NotARepositoryError(GitOperationError):
    """The working directory is not inside a git repository."""

    kind = ErrorKind.NOT_A_REPOSITORY


class AmbiguousReferenceError(GitOperationError):
    """A revision or path argument could not be resolved unambiguously."""

    kind = ErrorKind.AMBIGUOUS_REFERENCE


class MergeConflictError(GitOperationError):
    """A merge, rebase, cherry-pick or pull stopped on conflicts.

    Attributes:
        conflicted_files: Paths git reported as conflicted, if any.
    """

    kind = ErrorKind.MERGE_CONFLICT

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        exit_code: int | None = None,
        stderr: str = "",
        conflicted_files: tuple[str, ...] = (),
    ) -> None:
        self.conflicted_files = conflicted_files
        super().__init__(
            message, operation=operation, exit_code=exit_code, stderr=stderr
        )

    def to_dict(self) -> dict[str, object]:
        data = super().to_dict()
        data["conflicted_files"] = list(self.conflicted_files)
        return data


class PermissionDeniedError(GitOperationError):
    """Filesystem or remote access was refused."""

    kind = ErrorKind.PERMISSION_DENIED


class NetworkUnavailableError(GitOperationError):
    """A remote could not be reached."""

    kind = ErrorKind.NETWORK_UNAVAILABLE


class UnknownGitError(GitOperationError):
    """Failure whose diagnostic text matched no known phrasing."""

    kind = ErrorKind.UNKNOWN


class UnknownOperationError(GitkitError):
    """No operation is registered under the requested name.

    Attributes:
        name: The requested operation name.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown git operation: {name!r}")


class DuplicateOperationError(GitkitError):
    """An operation with the same name is already registered.

    Attributes:
        name: The conflicting operation name.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Git operation already registered: {name!r}")
