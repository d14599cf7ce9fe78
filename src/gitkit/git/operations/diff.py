"""Diff operation.

Combines up to four kinds of git call into one :class:`DiffResult`:

- the content call (``git diff`` with the caller's flags, refs and paths)
- the stats call (the same comparison with ``--stat``)
- the untracked enumeration (``git ls-files --others --exclude-standard``)
- one ``git diff --no-index`` per untracked file, against ``/dev/null``

A ``--no-index`` comparison exits 1 whenever the inputs differ, which for a
new file is always. Those calls go through :meth:`GitExecutor.run` and their
stdout is used whatever the exit code.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from gitkit.constants import EMPTY_BASELINE, NO_INDEX_DIFFERS_EXIT_CODE
from gitkit.git.command import CommandSpec, build_command
from gitkit.git.models import DiffOptions, DiffResult
from gitkit.git.operations.base import GitOperation
from gitkit.git.operations.registry import register
from gitkit.git.parsing import (
    count_nonblank_lines,
    has_binary_marker,
    parse_diff_stat,
    split_path_list,
)
from gitkit.logging import get_logger

if TYPE_CHECKING:
    from gitkit.git.context import OperationContext
    from gitkit.git.executor import GitExecutor
    from gitkit.runners.models import CommandResult

__all__ = ["DiffOperation"]

logger = get_logger(__name__)


def _content_flags(options: DiffOptions) -> list[str]:
    flags = []
    if options.staged:
        flags.append("--cached")
    if options.name_only:
        flags.append("--name-only")
    if options.unified is not None:
        flags.append(f"--unified={options.unified}")
    return flags


def _refs(options: DiffOptions) -> list[str]:
    return [ref for ref in (options.commit1, options.commit2) if ref]


@register
class DiffOperation(GitOperation[DiffOptions, DiffResult]):
    """Show changes between commits, the index and the working tree.

    Args:
        untracked_concurrency: Maximum number of untracked-file comparisons
            in flight at once. 1 runs them one after another.
    """

    name = "diff"
    options_type = DiffOptions

    def __init__(self, untracked_concurrency: int = 1) -> None:
        if untracked_concurrency < 1:
            raise ValueError("untracked_concurrency must be at least 1")
        self._untracked_concurrency = untracked_concurrency

    @property
    def untracked_concurrency(self) -> int:
        return self._untracked_concurrency

    # =========================================================================
    # Command assembly
    # =========================================================================

    def build_command(self, options: DiffOptions) -> CommandSpec:
        """The content call."""
        return build_command(
            "diff", _content_flags(options), _refs(options), options.paths
        )

    def build_stat_command(self, options: DiffOptions) -> CommandSpec:
        """The stats call: content flags minus name-only/unified, plus --stat."""
        flags = ["--cached"] if options.staged else []
        flags.append("--stat")
        return build_command("diff", flags, _refs(options), options.paths)

    @staticmethod
    def build_untracked_list_command() -> CommandSpec:
        return build_command("ls-files", ["--others", "--exclude-standard", "-z"])

    @staticmethod
    def build_untracked_diff_command(path: str, *, stat: bool) -> CommandSpec:
        flags = ["--no-index", "--stat"] if stat else ["--no-index"]
        return build_command("diff", flags, paths=[EMPTY_BASELINE, path])

    def parse_result(self, options: DiffOptions, result: CommandResult) -> DiffResult:
        """Result of a content call alone, with no stats or untracked files."""
        if options.name_only:
            return DiffResult(
                diff=result.stdout,
                files_changed=count_nonblank_lines(result.stdout),
            )
        return DiffResult(
            diff=result.stdout,
            files_changed=0,
            insertions=0,
            deletions=0,
            binary=has_binary_marker(result.stdout),
        )

    # =========================================================================
    # Execution
    # =========================================================================

    async def execute(
        self,
        options: DiffOptions,
        context: OperationContext,
        executor: GitExecutor,
    ) -> DiffResult:
        """Run the diff.

        With ``stat`` set, only the stats call is made (``stat`` takes
        precedence over ``name_only``). Otherwise one content call is made,
        followed by one stats call unless ``name_only`` is set. Untracked
        files are enumerated and compared only with ``include_untracked``.

        Raises:
            GitOperationError: If any call other than an untracked-file
                comparison exits nonzero.
        """
        if options.stat:
            result = await self._execute_stat(options, context, executor)
        else:
            result = await self._execute_content(options, context, executor)

        logger.debug(
            "git_diff_completed",
            files_changed=result.files_changed,
            insertions=result.insertions,
            deletions=result.deletions,
            binary=result.binary,
            **context.log_fields(),
        )
        return result

    async def _execute_stat(
        self,
        options: DiffOptions,
        context: OperationContext,
        executor: GitExecutor,
    ) -> DiffResult:
        stat_result = await executor.run_checked(
            self.build_stat_command(options), context, self.name
        )
        tracked = parse_diff_stat(stat_result.stdout)

        untracked_output = ""
        untracked_count = 0
        if options.include_untracked:
            untracked = await self._list_untracked(context, executor)
            untracked_count = len(untracked)
            untracked_output = "".join(
                await self._compare_untracked(untracked, context, executor, stat=True)
            )
        extra = parse_diff_stat(untracked_output)

        return DiffResult(
            diff=stat_result.stdout + untracked_output,
            files_changed=tracked.files_changed + untracked_count,
            insertions=tracked.total_additions + extra.total_additions,
            deletions=tracked.total_deletions + extra.total_deletions,
            binary=tracked.binary or extra.binary,
        )

    async def _execute_content(
        self,
        options: DiffOptions,
        context: OperationContext,
        executor: GitExecutor,
    ) -> DiffResult:
        content_result = await executor.run_checked(
            self.build_command(options), context, self.name
        )
        combined = content_result.stdout

        untracked: list[str] = []
        if options.include_untracked:
            untracked = await self._list_untracked(context, executor)
            if options.name_only:
                if untracked and combined and not combined.endswith("\n"):
                    combined += "\n"
                combined += "".join(f"{path}\n" for path in untracked)
            else:
                combined += "".join(
                    await self._compare_untracked(
                        untracked, context, executor, stat=False
                    )
                )

        if options.name_only:
            return DiffResult(
                diff=combined,
                files_changed=count_nonblank_lines(combined),
            )

        stat_result = await executor.run_checked(
            self.build_stat_command(options), context, self.name
        )
        tracked = parse_diff_stat(stat_result.stdout)

        return DiffResult(
            diff=combined,
            files_changed=tracked.files_changed + len(untracked),
            insertions=tracked.total_additions,
            deletions=tracked.total_deletions,
            binary=has_binary_marker(combined) or tracked.binary,
        )

    # =========================================================================
    # Untracked files
    # =========================================================================

    async def _list_untracked(
        self, context: OperationContext, executor: GitExecutor
    ) -> list[str]:
        result = await executor.run_checked(
            self.build_untracked_list_command(), context, self.name
        )
        return split_path_list(result.stdout)

    async def _compare_untracked(
        self,
        paths: list[str],
        context: OperationContext,
        executor: GitExecutor,
        *,
        stat: bool,
    ) -> list[str]:
        """Compare each path against the empty baseline.

        Outputs are returned in the order of *paths* regardless of how many
        comparisons ran concurrently.
        """
        semaphore = asyncio.Semaphore(self._untracked_concurrency)

        async def compare(path: str) -> str:
            async with semaphore:
                result = await executor.run(
                    self.build_untracked_diff_command(path, stat=stat), context
                )
            if result.returncode not in (0, NO_INDEX_DIFFERS_EXIT_CODE):
                logger.warning(
                    "git_untracked_diff_failed",
                    path=path,
                    returncode=result.returncode,
                    stderr=result.stderr.strip(),
                    **context.log_fields(),
                )
            return result.stdout

        tasks = [asyncio.ensure_future(compare(path)) for path in paths]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            # A failed comparison must not leave siblings launching processes
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
