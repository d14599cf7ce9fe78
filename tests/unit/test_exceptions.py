"""Tests for the gitkit exception hierarchy."""

from __future__ import annotations

import pytest

from gitkit.exceptions import (
    AmbiguousReferenceError,
    CommandTimeoutError,
    ConfigError,
    DuplicateOperationError,
    ErrorKind,
    GitError,
    GitkitError,
    GitNotFoundError,
    GitOperationError,
    MergeConflictError,
    NetworkUnavailableError,
    NotARepositoryError,
    PermissionDeniedError,
    RunnerError,
    UnknownGitError,
    UnknownOperationError,
    WorkingDirectoryError,
)


@pytest.mark.parametrize(
    ("cls", "kind"),
    [
        (NotARepositoryError, ErrorKind.NOT_A_REPOSITORY),
        (AmbiguousReferenceError, ErrorKind.AMBIGUOUS_REFERENCE),
        (MergeConflictError, ErrorKind.MERGE_CONFLICT),
        (PermissionDeniedError, ErrorKind.PERMISSION_DENIED),
        (NetworkUnavailableError, ErrorKind.NETWORK_UNAVAILABLE),
        (UnknownGitError, ErrorKind.UNKNOWN),
    ],
)
def test_operation_error_kinds(cls: type[GitOperationError], kind: ErrorKind) -> None:
    error = cls("boom", operation="diff", exit_code=128, stderr="boom\n")

    assert error.kind is kind
    assert isinstance(error, GitError)
    assert isinstance(error, GitkitError)
    assert error.operation == "diff"
    assert error.exit_code == 128
    assert error.stderr == "boom\n"
    assert str(error) == "boom"


def test_error_kind_is_string_valued() -> None:
    assert ErrorKind.MERGE_CONFLICT == "merge_conflict"


def test_merge_conflict_to_dict() -> None:
    error = MergeConflictError(
        "conflict", operation="merge", exit_code=1, conflicted_files=("a.py",)
    )

    assert error.to_dict() == {
        "kind": "merge_conflict",
        "operation": "merge",
        "message": "conflict",
        "exit_code": 1,
        "conflicted_files": ["a.py"],
    }


def test_git_not_found_defaults() -> None:
    error = GitNotFoundError(executable="/opt/git")

    assert error.message == "Git CLI not found"
    assert error.executable == "/opt/git"
    assert error.operation == "git_check"


def test_runner_errors() -> None:
    timeout = CommandTimeoutError("slow", timeout_seconds=5.0, command=["git", "gc"])
    missing = WorkingDirectoryError("gone", path="/nope")

    assert isinstance(timeout, RunnerError)
    assert timeout.command == ["git", "gc"]
    assert missing.path == "/nope"
    assert isinstance(missing, GitkitError)


def test_registry_errors() -> None:
    assert UnknownOperationError("bisect").name == "bisect"
    assert "bisect" in str(UnknownOperationError("bisect"))
    assert "diff" in DuplicateOperationError("diff").message


def test_config_error_fields() -> None:
    error = ConfigError("bad", field="timeout_seconds", value=-1)

    assert error.field == "timeout_seconds"
    assert error.value == -1
    assert isinstance(error, GitkitError)
