"""Command runner for safe async subprocess execution.

This module provides the CommandRunner class for executing external commands
with timeout handling, cancellation and working directory validation.
"""

from __future__ import annotations

import asyncio
import contextlib
import os
import time
from pathlib import Path
from typing import TYPE_CHECKING

from gitkit.exceptions import WorkingDirectoryError
from gitkit.runners.models import CommandResult

if TYPE_CHECKING:
    from collections.abc import Sequence

__all__ = ["CommandRunner"]

#: Seconds between SIGTERM and SIGKILL when a command times out
TERMINATION_GRACE_PERIOD: float = 2.0

#: Seconds allowed to drain partial output after a timeout
PARTIAL_OUTPUT_READ_TIMEOUT: float = 0.1


class CommandRunner:
    """Execute commands with timeout, cancellation and environment control.

    Provides async command execution with:
    - Timeout handling with graceful termination (SIGTERM + grace period + SIGKILL)
    - Cancellation: a cancelled caller kills the child process before unwinding
    - Working directory validation
    - Environment variable inheritance and override
    - Duration measurement

    The runner never raises for a nonzero exit code; the outcome is always
    returned as a :class:`CommandResult` with stdout and stderr intact.

    Example:
        ```python
        runner = CommandRunner(cwd=Path("/project"), timeout=30.0)
        result = await runner.run(["git", "status", "--porcelain"])
        if result.success:
            print(result.stdout)
        ```
    """

    def __init__(
        self,
        cwd: Path | None = None,
        timeout: float | None = 120.0,
        env: dict[str, str] | None = None,
    ) -> None:
        """Initialize the CommandRunner.

        Args:
            cwd: Working directory for commands. If None, uses current directory.
            timeout: Default timeout in seconds. Use None for no timeout.
            env: Additional environment variables to merge with os.environ.
        """
        self._cwd = cwd
        self._timeout = timeout
        self._extra_env = env or {}

    @property
    def cwd(self) -> Path | None:
        """Working directory for command execution."""
        return self._cwd

    @property
    def timeout(self) -> float | None:
        """Default timeout in seconds."""
        return self._timeout

    def _validate_cwd(self, cwd: Path | None) -> None:
        """Validate working directory exists.

        Raises:
            WorkingDirectoryError: If directory does not exist.
        """
        if cwd is not None and not cwd.is_dir():
            raise WorkingDirectoryError(
                f"Working directory does not exist: {cwd}",
                path=cwd,
            )

    def _build_env(self, extra_env: dict[str, str] | None = None) -> dict[str, str]:
        """Merge the parent environment with runner and per-call overrides."""
        env = os.environ.copy()
        env.update(self._extra_env)
        if extra_env:
            env.update(extra_env)
        return env

    async def run(
        self,
        command: Sequence[str],
        *,
        cwd: Path | None = None,
        timeout: float | None = None,
        env: dict[str, str] | None = None,
    ) -> CommandResult:
        """Execute a command and return the result.

        Args:
            command: Command and arguments as a sequence (no shell expansion).
            cwd: Override working directory for this command.
            timeout: Override timeout. Use 0 or negative for no timeout.
            env: Additional environment variables for this command.

        Returns:
            CommandResult with returncode, stdout, stderr, duration_ms, timed_out.

        Raises:
            WorkingDirectoryError: If working directory does not exist.
            asyncio.CancelledError: If the awaiting task is cancelled; the
                child process has been killed and reaped by then.
        """
        effective_cwd = cwd if cwd is not None else self._cwd
        self._validate_cwd(effective_cwd)

        effective_timeout = timeout if timeout is not None else self._timeout
        if effective_timeout is not None and effective_timeout <= 0:
            effective_timeout = None

        return await self._execute_once(
            command, effective_cwd, effective_timeout, self._build_env(env)
        )

    async def _execute_once(
        self,
        command: Sequence[str],
        cwd: Path | None,
        timeout: float | None,
        env: dict[str, str],
    ) -> CommandResult:
        """Execute a command once.

        Args:
            command: Command and arguments as a sequence.
            cwd: Working directory for the command.
            timeout: Timeout in seconds or None for no timeout.
            env: Environment variables for the command.

        Returns:
            CommandResult with returncode, stdout, stderr, duration_ms, timed_out.
        """
        start_time = time.monotonic()
        timed_out = False
        returncode = 0
        stdout_str = ""
        stderr_str = ""

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=cwd,
                env=env,
            )

            try:
                stdout_bytes, stderr_bytes = await asyncio.wait_for(
                    process.communicate(),
                    timeout=timeout,
                )
                returncode = process.returncode or 0
                stdout_str = stdout_bytes.decode("utf-8", errors="replace")
                stderr_str = stderr_bytes.decode("utf-8", errors="replace")

            except TimeoutError:
                timed_out = True
                await self._terminate(process)
                returncode = -1
                stdout_str = await self._read_partial(process.stdout)
                stderr_str = await self._read_partial(process.stderr)

            except asyncio.CancelledError:
                # Never leave an orphaned git process behind a cancelled caller
                if process.returncode is None:
                    process.kill()
                    with contextlib.suppress(ProcessLookupError):
                        await asyncio.shield(process.wait())
                raise

        except FileNotFoundError:
            returncode = 127
            stderr_str = f"Command not found: {command[0]}"
        except PermissionError:
            returncode = 126
            stderr_str = f"Permission denied: {command[0]}"

        duration_ms = int((time.monotonic() - start_time) * 1000)

        return CommandResult(
            returncode=returncode,
            stdout=stdout_str,
            stderr=stderr_str,
            duration_ms=duration_ms,
            timed_out=timed_out,
        )

    async def _terminate(self, process: asyncio.subprocess.Process) -> None:
        """SIGTERM, wait out the grace period, then SIGKILL."""
        process.terminate()
        try:
            await asyncio.wait_for(process.wait(), timeout=TERMINATION_GRACE_PERIOD)
        except TimeoutError:
            process.kill()
            await process.wait()

    async def _read_partial(self, stream: asyncio.StreamReader | None) -> str:
        """Drain whatever output a killed process left behind."""
        if stream is None:
            return ""
        try:
            data = await asyncio.wait_for(
                stream.read(), timeout=PARTIAL_OUTPUT_READ_TIMEOUT
            )
        except (TimeoutError, OSError):
            # The stream may already be closed once the process is gone
            return ""
        return data.decode("utf-8", errors="replace")
