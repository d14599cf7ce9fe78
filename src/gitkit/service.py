"""GitService façade over the operation registry."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from gitkit.git.executor import GitExecutor
from gitkit.git.models import (
    AddOptions,
    AddResult,
    BranchOptions,
    BranchResult,
    CheckoutOptions,
    CheckoutResult,
    CommitOptions,
    CommitResult,
    DiffOptions,
    DiffResult,
    FetchOptions,
    FetchResult,
    LogOptions,
    LogResult,
    PullOptions,
    PullResult,
    PushOptions,
    PushResult,
    StatusOptions,
    StatusResult,
)
from gitkit.git.operations import DiffOperation, OperationRegistry
from gitkit.git.operations import registry as default_registry
from gitkit.logging import get_logger
from gitkit.runners.command import CommandRunner

if TYPE_CHECKING:
    from gitkit.config import GitkitConfig
    from gitkit.git.context import OperationContext

__all__ = ["GitService"]

logger = get_logger(__name__)


class GitService:
    """Entry point for running git operations by name.

    Args:
        executor: Executor issuing the git calls. Created with defaults if
            not provided.
        registry: Operation registry. Defaults to the built-in registry.
        operation_options: Constructor keyword arguments per operation name,
            e.g. ``{"diff": {"untracked_concurrency": 4}}``.

    Example:
        ```python
        service = GitService.from_config(load_config())
        context = OperationContext(working_directory=Path("/repo"))
        result = await service.diff(DiffOptions(include_untracked=True), context)
        print(result.files_changed)
        ```
    """

    def __init__(
        self,
        executor: GitExecutor | None = None,
        *,
        registry: OperationRegistry | None = None,
        operation_options: Mapping[str, Mapping[str, Any]] | None = None,
    ) -> None:
        self._executor = executor or GitExecutor()
        self._registry = registry or default_registry
        self._operation_options = dict(operation_options or {})

    @classmethod
    def from_config(
        cls,
        config: GitkitConfig,
        runner: CommandRunner | None = None,
    ) -> GitService:
        """Build a service whose executor and diff settings follow *config*."""
        executor = GitExecutor(
            runner or CommandRunner(timeout=config.timeout_seconds),
            git_binary=config.git_binary,
            timeout=config.timeout_seconds,
            network_timeout=config.network_timeout_seconds,
        )
        return cls(
            executor,
            operation_options={
                DiffOperation.name: {
                    "untracked_concurrency": config.untracked_concurrency
                },
            },
        )

    @property
    def executor(self) -> GitExecutor:
        return self._executor

    def list_operations(self) -> list[str]:
        return self._registry.list_operations()

    async def execute(
        self,
        name: str,
        options: Any | None,
        context: OperationContext,
    ) -> Any:
        """Run the operation registered under *name*.

        Args:
            name: Operation name (e.g. ``"diff"``, ``"cherry_pick"``).
            options: Options instance for that operation. None builds the
                operation's default options.
            context: Caller context.

        Returns:
            The operation's result dataclass.

        Raises:
            UnknownOperationError: If *name* is not registered.
            TypeError: If *options* is not the operation's options type.
            GitOperationError: If git reports a failure.
        """
        operation = self._registry.create(
            name, **self._operation_options.get(name, {})
        )
        if options is None:
            options = operation.options_type()
        if not isinstance(options, operation.options_type):
            raise TypeError(
                f"{name} expects {operation.options_type.__name__}, "
                f"got {type(options).__name__}"
            )

        logger.debug("git_operation_started", operation=name, **context.log_fields())
        return await operation.execute(options, context, self._executor)

    # =========================================================================
    # Convenience coroutines
    # =========================================================================

    async def diff(
        self, options: DiffOptions | None, context: OperationContext
    ) -> DiffResult:
        result: DiffResult = await self.execute("diff", options, context)
        return result

    async def status(
        self, options: StatusOptions | None, context: OperationContext
    ) -> StatusResult:
        result: StatusResult = await self.execute("status", options, context)
        return result

    async def log(
        self, options: LogOptions | None, context: OperationContext
    ) -> LogResult:
        result: LogResult = await self.execute("log", options, context)
        return result

    async def add(self, options: AddOptions, context: OperationContext) -> AddResult:
        result: AddResult = await self.execute("add", options, context)
        return result

    async def commit(
        self, options: CommitOptions, context: OperationContext
    ) -> CommitResult:
        result: CommitResult = await self.execute("commit", options, context)
        return result

    async def branch(
        self, options: BranchOptions | None, context: OperationContext
    ) -> BranchResult:
        result: BranchResult = await self.execute("branch", options, context)
        return result

    async def checkout(
        self, options: CheckoutOptions, context: OperationContext
    ) -> CheckoutResult:
        result: CheckoutResult = await self.execute("checkout", options, context)
        return result

    async def fetch(
        self, options: FetchOptions | None, context: OperationContext
    ) -> FetchResult:
        result: FetchResult = await self.execute("fetch", options, context)
        return result

    async def pull(
        self, options: PullOptions | None, context: OperationContext
    ) -> PullResult:
        result: PullResult = await self.execute("pull", options, context)
        return result

    async def push(
        self, options: PushOptions | None, context: OperationContext
    ) -> PushResult:
        result: PushResult = await self.execute("push", options, context)
        return result
