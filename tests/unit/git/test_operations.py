"""Unit tests for the single-command git operations."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock

import pytest

from gitkit.exceptions import MergeConflictError
from gitkit.git.context import OperationContext
from gitkit.git.executor import GitExecutor
from gitkit.git.models import (
    AddOptions,
    BlameOptions,
    BranchOptions,
    CheckoutOptions,
    CherryPickOptions,
    CleanOptions,
    CloneOptions,
    CommitOptions,
    FetchOptions,
    InitOptions,
    LogOptions,
    MergeOptions,
    PullOptions,
    PushOptions,
    RebaseOptions,
    ReflogOptions,
    RemoteOptions,
    ResetOptions,
    ShowOptions,
    StashOptions,
    StatusOptions,
    TagOptions,
    WorktreeOptions,
)
from gitkit.git.operations import (
    AddOperation,
    BlameOperation,
    BranchOperation,
    CheckoutOperation,
    CherryPickOperation,
    CleanOperation,
    CloneOperation,
    CommitOperation,
    FetchOperation,
    InitOperation,
    LogOperation,
    MergeOperation,
    PullOperation,
    PushOperation,
    RebaseOperation,
    ReflogOperation,
    RemoteOperation,
    ResetOperation,
    ShowOperation,
    StashOperation,
    StatusOperation,
    TagOperation,
    WorktreeOperation,
)
from gitkit.git.operations.branches import BRANCH_FORMAT, TAG_FORMAT
from gitkit.git.operations.commits import LOG_FORMAT, REFLOG_FORMAT

from .conftest import make_result

# =========================================================================
# Command assembly
# =========================================================================


@pytest.mark.parametrize(
    ("operation", "options", "expected"),
    [
        (InitOperation(), InitOptions(), ["init"]),
        (
            InitOperation(),
            InitOptions(bare=True, initial_branch="trunk"),
            ["init", "--bare", "--initial-branch=trunk"],
        ),
        (
            CloneOperation(),
            CloneOptions(url="https://example.com/r.git", depth=1, branch="dev"),
            ["clone", "--branch=dev", "--depth=1", "https://example.com/r.git"],
        ),
        (
            CloneOperation(),
            CloneOptions(url="/srv/r.git", directory="copy"),
            ["clone", "/srv/r.git", "copy"],
        ),
        (StatusOperation(), StatusOptions(), ["status", "--porcelain=v1", "--branch"]),
        (
            StatusOperation(),
            StatusOptions(include_untracked=False),
            ["status", "--porcelain=v1", "--branch", "--untracked-files=no"],
        ),
        (
            CleanOperation(),
            CleanOptions(dry_run=True, directories=True, paths=("build",)),
            ["clean", "-n", "-d", "--", "build"],
        ),
        (
            CleanOperation(),
            CleanOptions(force=True, ignored=True),
            ["clean", "-f", "-x"],
        ),
        (WorktreeOperation(), WorktreeOptions(), ["worktree", "list", "--porcelain"]),
        (
            WorktreeOperation(),
            WorktreeOptions(action="add", path="../wt", new_branch="wip", ref="main"),
            ["worktree", "add", "-b", "wip", "../wt", "main"],
        ),
        (
            WorktreeOperation(),
            WorktreeOptions(action="remove", path="../wt", force=True),
            ["worktree", "remove", "-f", "../wt"],
        ),
        (
            AddOperation(),
            AddOptions(paths=("a.py", "b.py")),
            ["add", "--verbose", "--", "a.py", "b.py"],
        ),
        (AddOperation(), AddOptions(all=True), ["add", "--verbose", "-A"]),
        (
            ResetOperation(),
            ResetOptions(mode="hard", ref="HEAD~1"),
            ["reset", "--hard", "HEAD~1"],
        ),
        (
            ResetOperation(),
            ResetOptions(paths=("a.py",)),
            ["reset", "--", "a.py"],
        ),
        (StashOperation(), StashOptions(), ["stash", "list", "--format=%gd%x1f%gs"]),
        (
            StashOperation(),
            StashOptions(action="push", message="wip", include_untracked=True),
            ["stash", "push", "--include-untracked", "--message=wip"],
        ),
        (
            StashOperation(),
            StashOptions(action="pop", ref="stash@{1}"),
            ["stash", "pop", "stash@{1}"],
        ),
        (
            CommitOperation(),
            CommitOptions(message="Fix bug", sign_off=True, paths=("a.py",)),
            ["commit", "--message=Fix bug", "--signoff", "--", "a.py"],
        ),
        (
            LogOperation(),
            LogOptions(max_count=5, author="ada", ref="main", paths=("src",)),
            [
                "log",
                f"--format={LOG_FORMAT}",
                "--max-count=5",
                "--author=ada",
                "main",
                "--",
                "src",
            ],
        ),
        (
            ShowOperation(),
            ShowOptions(ref="v1.0", stat=True),
            ["show", "--stat", "v1.0"],
        ),
        (
            BlameOperation(),
            BlameOptions(path="app.py", start_line=3, end_line=9),
            ["blame", "--line-porcelain", "-L", "3,9", "--", "app.py"],
        ),
        (
            ReflogOperation(),
            ReflogOptions(max_count=2),
            ["reflog", "show", f"--format={REFLOG_FORMAT}", "--max-count=2", "HEAD"],
        ),
        (
            BranchOperation(),
            BranchOptions(all=True),
            ["branch", "--list", f"--format={BRANCH_FORMAT}", "--all"],
        ),
        (
            BranchOperation(),
            BranchOptions(action="create", name="feat", start_point="main"),
            ["branch", "feat", "main"],
        ),
        (
            BranchOperation(),
            BranchOptions(action="delete", name="feat", force=True),
            ["branch", "-D", "feat"],
        ),
        (
            BranchOperation(),
            BranchOptions(action="rename", name="old", new_name="new"),
            ["branch", "-m", "old", "new"],
        ),
        (
            CheckoutOperation(),
            CheckoutOptions(target="feat", create_branch=True),
            ["checkout", "-b", "feat"],
        ),
        (
            CheckoutOperation(),
            CheckoutOptions(target="HEAD", paths=("a.py",)),
            ["checkout", "HEAD", "--", "a.py"],
        ),
        (
            MergeOperation(),
            MergeOptions(branch="feat", no_ff=True, message="Merge feat"),
            ["merge", "--no-ff", "--message=Merge feat", "feat"],
        ),
        (MergeOperation(), MergeOptions(abort=True), ["merge", "--abort"]),
        (
            RebaseOperation(),
            RebaseOptions(upstream="main", onto="release"),
            ["rebase", "--onto=release", "main"],
        ),
        (
            RebaseOperation(),
            RebaseOptions(control="continue"),
            ["rebase", "--continue"],
        ),
        (
            CherryPickOperation(),
            CherryPickOptions(commits=("abc", "def"), no_commit=True),
            ["cherry-pick", "--no-commit", "abc", "def"],
        ),
        (
            TagOperation(),
            TagOptions(pattern="v1.*"),
            ["tag", "--list", f"--format={TAG_FORMAT}", "v1.*"],
        ),
        (
            TagOperation(),
            TagOptions(action="create", name="v1.0", message="Release", ref="main"),
            ["tag", "-a", "--message=Release", "v1.0", "main"],
        ),
        (
            TagOperation(),
            TagOptions(action="delete", name="v1.0"),
            ["tag", "-d", "v1.0"],
        ),
        (
            FetchOperation(),
            FetchOptions(remote="origin", refspec="main", prune=True),
            ["fetch", "--prune", "origin", "main"],
        ),
        (FetchOperation(), FetchOptions(all=True), ["fetch", "--all"]),
        (
            PullOperation(),
            PullOptions(remote="origin", branch="main", ff_only=True),
            ["pull", "--ff-only", "origin", "main"],
        ),
        (
            PushOperation(),
            PushOptions(remote="origin", branch="feat", set_upstream=True),
            ["push", "--set-upstream", "origin", "feat"],
        ),
        (
            PushOperation(),
            PushOptions(remote="origin", branch="old", delete=True),
            ["push", "--delete", "origin", "old"],
        ),
        (RemoteOperation(), RemoteOptions(), ["remote", "-v"]),
        (
            RemoteOperation(),
            RemoteOptions(action="set_url", name="origin", url="git@h:r.git"),
            ["remote", "set-url", "origin", "git@h:r.git"],
        ),
    ],
)
def test_build_command(operation: Any, options: Any, expected: list[str]) -> None:
    assert operation.build_command(options).argv == expected


# =========================================================================
# Execution and parsing
# =========================================================================


async def execute(
    operation: Any,
    options: Any,
    executor: GitExecutor,
    context: OperationContext,
) -> Any:
    return await operation.execute(options, context, executor)


class TestTimeouts:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("operation", "options"),
        [
            (FetchOperation(), FetchOptions()),
            (PullOperation(), PullOptions()),
            (PushOperation(), PushOptions()),
            (CloneOperation(), CloneOptions(url="https://example.com/r.git")),
        ],
    )
    async def test_network_operations_use_network_timeout(
        self,
        operation: Any,
        options: Any,
        executor: GitExecutor,
        mock_runner: AsyncMock,
        context: OperationContext,
    ) -> None:
        await execute(operation, options, executor, context)

        assert mock_runner.run.call_args.kwargs["timeout"] == 300.0

    @pytest.mark.asyncio
    async def test_local_operations_use_local_timeout(
        self,
        executor: GitExecutor,
        mock_runner: AsyncMock,
        context: OperationContext,
    ) -> None:
        await execute(StatusOperation(), StatusOptions(), executor, context)

        assert mock_runner.run.call_args.kwargs["timeout"] == 30.0


class TestParsing:
    @pytest.mark.asyncio
    async def test_commit(
        self,
        executor: GitExecutor,
        mock_runner: AsyncMock,
        context: OperationContext,
    ) -> None:
        mock_runner.run.return_value = make_result(
            stdout=(
                "[main 1a2b3c4] Fix bug\n"
                " 2 files changed, 5 insertions(+), 1 deletion(-)\n"
            )
        )

        result = await execute(
            CommitOperation(), CommitOptions(message="Fix bug"), executor, context
        )

        assert result.commit_hash == "1a2b3c4"
        assert result.branch == "main"
        assert result.summary == "Fix bug"
        assert (result.files_changed, result.insertions, result.deletions) == (2, 5, 1)

    @pytest.mark.asyncio
    async def test_status(
        self,
        executor: GitExecutor,
        mock_runner: AsyncMock,
        context: OperationContext,
    ) -> None:
        mock_runner.run.return_value = make_result(
            stdout="## main...origin/main [behind 3]\n?? new.txt\n"
        )

        result = await execute(StatusOperation(), StatusOptions(), executor, context)

        assert result.branch == "main"
        assert result.behind == 3
        assert result.untracked == ("new.txt",)

    @pytest.mark.asyncio
    async def test_branch_list_current(
        self,
        executor: GitExecutor,
        mock_runner: AsyncMock,
        context: OperationContext,
    ) -> None:
        mock_runner.run.return_value = make_result(
            stdout=" \x1ffeat\x1f1111111\x1f\n*\x1fmain\x1f2222222\x1forigin/main\n"
        )

        result = await execute(BranchOperation(), BranchOptions(), executor, context)

        assert [b.name for b in result.branches] == ["feat", "main"]
        assert result.current == "main"

    @pytest.mark.asyncio
    async def test_branch_rename_reports_new_name(
        self, executor: GitExecutor, context: OperationContext
    ) -> None:
        result = await execute(
            BranchOperation(),
            BranchOptions(action="rename", name="old", new_name="new"),
            executor,
            context,
        )

        assert result.name == "new"
        assert result.branches == ()

    @pytest.mark.asyncio
    async def test_merge_fast_forward(
        self,
        executor: GitExecutor,
        mock_runner: AsyncMock,
        context: OperationContext,
    ) -> None:
        mock_runner.run.return_value = make_result(
            stdout="Updating 1a2b3c4..5d6e7f8\nFast-forward\n a.py | 1 +\n"
        )

        result = await execute(
            MergeOperation(), MergeOptions(branch="feat"), executor, context
        )

        assert result.fast_forward is True
        assert result.already_up_to_date is False

    @pytest.mark.asyncio
    async def test_merge_already_up_to_date(
        self,
        executor: GitExecutor,
        mock_runner: AsyncMock,
        context: OperationContext,
    ) -> None:
        mock_runner.run.return_value = make_result(stdout="Already up to date.\n")

        result = await execute(
            MergeOperation(), MergeOptions(branch="feat"), executor, context
        )

        assert result.already_up_to_date is True

    @pytest.mark.asyncio
    async def test_merge_conflict_raises(
        self,
        executor: GitExecutor,
        mock_runner: AsyncMock,
        context: OperationContext,
    ) -> None:
        mock_runner.run.return_value = make_result(
            returncode=1,
            stdout=(
                "Auto-merging a.py\n"
                "CONFLICT (content): Merge conflict in a.py\n"
                "Automatic merge failed; fix conflicts and then commit the result.\n"
            ),
        )

        with pytest.raises(MergeConflictError) as exc_info:
            await execute(
                MergeOperation(), MergeOptions(branch="feat"), executor, context
            )

        assert exc_info.value.operation == "merge"
        assert exc_info.value.conflicted_files == ("a.py",)

    @pytest.mark.asyncio
    async def test_push_up_to_date_reported_on_stderr(
        self,
        executor: GitExecutor,
        mock_runner: AsyncMock,
        context: OperationContext,
    ) -> None:
        mock_runner.run.return_value = make_result(stderr="Everything up-to-date\n")

        result = await execute(
            PushOperation(), PushOptions(remote="origin"), executor, context
        )

        assert result.up_to_date is True
        assert result.remote == "origin"

    @pytest.mark.asyncio
    async def test_pull_already_up_to_date(
        self,
        executor: GitExecutor,
        mock_runner: AsyncMock,
        context: OperationContext,
    ) -> None:
        mock_runner.run.return_value = make_result(stdout="Already up to date.\n")

        result = await execute(PullOperation(), PullOptions(), executor, context)

        assert result.already_up_to_date is True

    @pytest.mark.asyncio
    async def test_rebase_up_to_date(
        self,
        executor: GitExecutor,
        mock_runner: AsyncMock,
        context: OperationContext,
    ) -> None:
        mock_runner.run.return_value = make_result(
            stdout="Current branch feat is up to date.\n"
        )

        result = await execute(
            RebaseOperation(), RebaseOptions(upstream="main"), executor, context
        )

        assert result.up_to_date is True

    @pytest.mark.asyncio
    async def test_add_reports_staged_paths(
        self,
        executor: GitExecutor,
        mock_runner: AsyncMock,
        context: OperationContext,
    ) -> None:
        mock_runner.run.return_value = make_result(stdout="add 'a.py'\nadd 'b.py'\n")

        result = await execute(AddOperation(), AddOptions(all=True), executor, context)

        assert result.staged == ("a.py", "b.py")

    @pytest.mark.asyncio
    async def test_stash_list(
        self,
        executor: GitExecutor,
        mock_runner: AsyncMock,
        context: OperationContext,
    ) -> None:
        mock_runner.run.return_value = make_result(stdout="stash@{0}\x1fOn main: wip\n")

        result = await execute(StashOperation(), StashOptions(), executor, context)

        assert result.entries[0].ref == "stash@{0}"

    @pytest.mark.asyncio
    async def test_clean_dry_run(
        self,
        executor: GitExecutor,
        mock_runner: AsyncMock,
        context: OperationContext,
    ) -> None:
        mock_runner.run.return_value = make_result(stdout="Would remove junk.tmp\n")

        result = await execute(
            CleanOperation(), CleanOptions(dry_run=True), executor, context
        )

        assert result.removed == ("junk.tmp",)
        assert result.dry_run is True

    @pytest.mark.parametrize(
        ("url", "bare", "expected"),
        [
            ("https://example.com/org/project.git", False, "project"),
            ("git@example.com:org/project.git", False, "project"),
            ("git@example.com:project", False, "project"),
            ("/srv/repos/project/", True, "project.git"),
        ],
    )
    @pytest.mark.asyncio
    async def test_clone_derives_directory(
        self,
        url: str,
        bare: bool,
        expected: str,
        executor: GitExecutor,
        context: OperationContext,
    ) -> None:
        result = await execute(
            CloneOperation(), CloneOptions(url=url, bare=bare), executor, context
        )

        assert result.directory == expected

    @pytest.mark.asyncio
    async def test_log_total(
        self,
        executor: GitExecutor,
        mock_runner: AsyncMock,
        context: OperationContext,
    ) -> None:
        sha = "f" * 40
        mock_runner.run.return_value = make_result(
            stdout=f"{sha}\x1ffffffff\x1fAda\x1fa@x\x1f2026-01-01\x1f\x1fInit\x1f\x1e\n"
        )

        result = await execute(LogOperation(), LogOptions(), executor, context)

        assert result.total == 1
        assert result.commits[0].subject == "Init"

    @pytest.mark.asyncio
    async def test_remote_list(
        self,
        executor: GitExecutor,
        mock_runner: AsyncMock,
        context: OperationContext,
    ) -> None:
        mock_runner.run.return_value = make_result(
            stdout="origin\t/srv/r.git (fetch)\norigin\t/srv/r.git (push)\n"
        )

        result = await execute(RemoteOperation(), RemoteOptions(), executor, context)

        assert result.remotes[0].name == "origin"
        assert result.remotes[0].push_url == "/srv/r.git"
