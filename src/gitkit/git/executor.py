"""Async executor that runs one git command per call.

Wraps :class:`~gitkit.runners.command.CommandRunner` with the git binary,
the fixed git environment and per-call context. Supports dependency
injection of the runner for testing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gitkit.constants import (
    DEFAULT_GIT_BINARY,
    DEFAULT_NETWORK_TIMEOUT,
    DEFAULT_TIMEOUT,
    GIT_ENVIRONMENT,
)
from gitkit.exceptions import CommandTimeoutError, GitNotFoundError
from gitkit.git.errors import classify_error
from gitkit.logging import get_logger
from gitkit.runners.command import CommandRunner

if TYPE_CHECKING:
    from gitkit.git.command import CommandSpec
    from gitkit.git.context import OperationContext
    from gitkit.runners.models import CommandResult

__all__ = ["GitExecutor"]

logger = get_logger(__name__)

#: Exit code CommandRunner reports when the executable could not be started
_NOT_FOUND_EXIT_CODE = 127
_NOT_FOUND_PREFIX = "Command not found:"


class GitExecutor:
    """Run git commands and hand back their outcome.

    ``run`` returns a :class:`CommandResult` for every exit code, for callers
    that treat some nonzero exits as data. ``run_checked`` classifies any
    nonzero exit and raises it.

    Args:
        runner: Optional pre-configured CommandRunner. Created if not provided.
        git_binary: Executable to invoke.
        timeout: Timeout for local commands, in seconds.
        network_timeout: Timeout for commands that reach a remote.

    Example:
        ```python
        executor = GitExecutor()
        spec = build_command("status", ["--porcelain=v1"])
        result = await executor.run_checked(spec, context, "status")
        ```
    """

    def __init__(
        self,
        runner: CommandRunner | None = None,
        *,
        git_binary: str = DEFAULT_GIT_BINARY,
        timeout: float = DEFAULT_TIMEOUT,
        network_timeout: float = DEFAULT_NETWORK_TIMEOUT,
    ) -> None:
        self._runner = runner or CommandRunner(timeout=timeout)
        self._git_binary = git_binary
        self._timeout = timeout
        self._network_timeout = network_timeout

    @property
    def git_binary(self) -> str:
        return self._git_binary

    @property
    def timeout(self) -> float:
        """Timeout applied to local commands."""
        return self._timeout

    @property
    def network_timeout(self) -> float:
        """Timeout applied to clone, fetch, pull and push."""
        return self._network_timeout

    async def run(
        self,
        spec: CommandSpec,
        context: OperationContext,
        *,
        timeout: float | None = None,
    ) -> CommandResult:
        """Run *spec* in the context's working directory.

        Args:
            spec: Command to run, without the git binary.
            context: Caller context supplying the working directory and the
                ids bound onto log lines.
            timeout: Override timeout. Defaults to the local timeout.

        Returns:
            CommandResult for any exit code.

        Raises:
            WorkingDirectoryError: If the working directory does not exist.
            GitNotFoundError: If the git binary cannot be started.
            CommandTimeoutError: If the command exceeded its timeout.
        """
        command = [self._git_binary, *spec.argv]
        effective_timeout = timeout if timeout is not None else self._timeout
        log = logger.bind(subcommand=spec.subcommand, **context.log_fields())

        log.debug("git_command_started", command=command)
        result = await self._runner.run(
            command,
            cwd=context.working_directory,
            timeout=effective_timeout,
            env=GIT_ENVIRONMENT,
        )

        if result.timed_out:
            log.warning(
                "git_command_timed_out",
                timeout_seconds=effective_timeout,
                duration_ms=result.duration_ms,
            )
            raise CommandTimeoutError(
                f"git {spec.subcommand} timed out after {effective_timeout}s",
                timeout_seconds=effective_timeout,
                command=command,
            )

        if result.returncode == _NOT_FOUND_EXIT_CODE and result.stderr.startswith(
            _NOT_FOUND_PREFIX
        ):
            log.error("git_not_found", git_binary=self._git_binary)
            raise GitNotFoundError(
                f"Git CLI not found: {self._git_binary}",
                executable=self._git_binary,
            )

        log.debug(
            "git_command_completed",
            returncode=result.returncode,
            duration_ms=result.duration_ms,
        )
        return result

    async def run_checked(
        self,
        spec: CommandSpec,
        context: OperationContext,
        operation: str,
        *,
        timeout: float | None = None,
    ) -> CommandResult:
        """Run *spec* and raise a classified error on a nonzero exit.

        Args:
            spec: Command to run, without the git binary.
            context: Caller context.
            operation: Operation name attached to a raised error.
            timeout: Override timeout. Defaults to the local timeout.

        Returns:
            CommandResult of a successful invocation.

        Raises:
            GitOperationError: A subclass matching the classified failure.
        """
        result = await self.run(spec, context, timeout=timeout)
        if result.returncode != 0:
            error = classify_error(result, operation)
            logger.info(
                "git_command_failed",
                operation=operation,
                subcommand=spec.subcommand,
                kind=error.kind.value,
                returncode=result.returncode,
                **context.log_fields(),
            )
            raise error
        return result
