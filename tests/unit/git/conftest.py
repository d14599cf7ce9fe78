"""Shared fixtures for git layer tests."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from gitkit.git.context import OperationContext
from gitkit.git.executor import GitExecutor
from gitkit.runners.command import CommandRunner
from gitkit.runners.models import CommandResult


def make_result(
    *,
    returncode: int = 0,
    stdout: str = "",
    stderr: str = "",
    duration_ms: int = 50,
    timed_out: bool = False,
) -> CommandResult:
    """Create a CommandResult with convenient defaults."""
    return CommandResult(
        returncode=returncode,
        stdout=stdout,
        stderr=stderr,
        duration_ms=duration_ms,
        timed_out=timed_out,
    )


def issued_commands(runner: AsyncMock) -> list[list[str]]:
    """Every argv the mocked runner was asked to execute, in call order."""
    return [list(call.args[0]) for call in runner.run.call_args_list]


@pytest.fixture
def mock_runner() -> AsyncMock:
    """Create a mock CommandRunner that returns success by default."""
    runner = AsyncMock(spec=CommandRunner)
    runner.run.return_value = make_result()
    return runner


@pytest.fixture
def executor(mock_runner: AsyncMock) -> GitExecutor:
    """Create a GitExecutor with a mocked runner."""
    return GitExecutor(mock_runner, timeout=30.0, network_timeout=300.0)


@pytest.fixture
def context(temp_dir: Path) -> OperationContext:
    return OperationContext(
        working_directory=temp_dir,
        request_context={"request_id": "req-1"},
        tenant_id="tenant-a",
    )
