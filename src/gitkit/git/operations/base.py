"""GitOperation abstract base class.

Every operation pairs an options dataclass with a result dataclass. Most
operations issue a single git command: they build it, run it with
:meth:`GitExecutor.run_checked`, and parse stdout. Operations that need more
than one call (diff) override :meth:`GitOperation.execute`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, Generic, TypeVar

if TYPE_CHECKING:
    from gitkit.git.command import CommandSpec
    from gitkit.git.context import OperationContext
    from gitkit.git.executor import GitExecutor
    from gitkit.runners.models import CommandResult

__all__ = ["GitOperation"]

TOptions = TypeVar("TOptions")
TResult = TypeVar("TResult")


class GitOperation(ABC, Generic[TOptions, TResult]):
    """Abstract base class for git operations.

    Type Parameters:
        TOptions: Options dataclass accepted by the operation.
        TResult: Result dataclass produced by the operation.

    Attributes:
        name: Registry name, also attached to raised errors.
        options_type: Options class the operation accepts.
        network: True if the operation talks to a remote and should use the
            network timeout.

    Example:
        ```python
        class ShowOperation(GitOperation[ShowOptions, ShowResult]):
            name = "show"
            options_type = ShowOptions

            def build_command(self, options: ShowOptions) -> CommandSpec:
                return build_command("show", refs=[options.ref])

            def parse_result(
                self, options: ShowOptions, result: CommandResult
            ) -> ShowResult:
                return ShowResult(ref=options.ref, content=result.stdout)
        ```
    """

    name: ClassVar[str]
    options_type: ClassVar[type]
    network: ClassVar[bool] = False

    @abstractmethod
    def build_command(self, options: TOptions) -> CommandSpec:
        """Assemble the git command for *options*."""
        ...

    @abstractmethod
    def parse_result(self, options: TOptions, result: CommandResult) -> TResult:
        """Turn a successful invocation into the result dataclass."""
        ...

    async def execute(
        self,
        options: TOptions,
        context: OperationContext,
        executor: GitExecutor,
    ) -> TResult:
        """Run the operation.

        Args:
            options: Validated operation options.
            context: Caller context.
            executor: Executor issuing the git calls.

        Returns:
            The operation's result dataclass.

        Raises:
            GitOperationError: If git exits nonzero.
        """
        timeout = executor.network_timeout if self.network else None
        result = await executor.run_checked(
            self.build_command(options), context, self.name, timeout=timeout
        )
        return self.parse_result(options, result)
