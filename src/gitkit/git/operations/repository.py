"""Repository-level operations: init, clone, status, clean and worktree."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gitkit.git.command import CommandSpec, build_command
from gitkit.git.models import (
    CleanOptions,
    CleanResult,
    CloneOptions,
    CloneResult,
    InitOptions,
    InitResult,
    StatusOptions,
    StatusResult,
    WorktreeOptions,
    WorktreeResult,
)
from gitkit.git.operations.base import GitOperation
from gitkit.git.operations.registry import register
from gitkit.git.parsing import (
    parse_clean_output,
    parse_status_porcelain,
    parse_worktree_porcelain,
)

if TYPE_CHECKING:
    from gitkit.runners.models import CommandResult

__all__ = [
    "CleanOperation",
    "CloneOperation",
    "InitOperation",
    "StatusOperation",
    "WorktreeOperation",
]


@register
class InitOperation(GitOperation[InitOptions, InitResult]):
    name = "init"
    options_type = InitOptions

    def build_command(self, options: InitOptions) -> CommandSpec:
        flags = []
        if options.bare:
            flags.append("--bare")
        if options.initial_branch:
            flags.append(f"--initial-branch={options.initial_branch}")
        return build_command("init", flags)

    def parse_result(self, options: InitOptions, result: CommandResult) -> InitResult:
        return InitResult(success=True, bare=options.bare, output=result.stdout.strip())


def _directory_from_url(url: str, bare: bool) -> str:
    """Directory name git derives for a clone target (``humanish`` part)."""
    name = url.rstrip("/").rsplit("/", 1)[-1].rsplit(":", 1)[-1]
    name = name.removesuffix(".git")
    return f"{name}.git" if bare else name


@register
class CloneOperation(GitOperation[CloneOptions, CloneResult]):
    """Clone a repository into the working directory."""

    name = "clone"
    options_type = CloneOptions
    network = True

    def build_command(self, options: CloneOptions) -> CommandSpec:
        flags = []
        if options.branch:
            flags.append(f"--branch={options.branch}")
        if options.depth is not None:
            flags.append(f"--depth={options.depth}")
        if options.bare:
            flags.append("--bare")
        refs = [options.url]
        if options.directory:
            refs.append(options.directory)
        return build_command("clone", flags, refs)

    def parse_result(
        self, options: CloneOptions, result: CommandResult
    ) -> CloneResult:
        return CloneResult(
            success=True,
            url=options.url,
            directory=(
                options.directory or _directory_from_url(options.url, options.bare)
            ),
        )


@register
class StatusOperation(GitOperation[StatusOptions, StatusResult]):
    name = "status"
    options_type = StatusOptions

    def build_command(self, options: StatusOptions) -> CommandSpec:
        flags = ["--porcelain=v1", "--branch"]
        if not options.include_untracked:
            flags.append("--untracked-files=no")
        return build_command("status", flags)

    def parse_result(
        self, options: StatusOptions, result: CommandResult
    ) -> StatusResult:
        return parse_status_porcelain(result.stdout)


@register
class CleanOperation(GitOperation[CleanOptions, CleanResult]):
    """Remove untracked files. A dry run reports without deleting."""

    name = "clean"
    options_type = CleanOptions

    def build_command(self, options: CleanOptions) -> CommandSpec:
        flags = ["-n" if options.dry_run else "-f"]
        if options.directories:
            flags.append("-d")
        if options.ignored:
            flags.append("-x")
        return build_command("clean", flags, paths=options.paths)

    def parse_result(self, options: CleanOptions, result: CommandResult) -> CleanResult:
        return CleanResult(
            removed=parse_clean_output(result.stdout), dry_run=options.dry_run
        )


@register
class WorktreeOperation(GitOperation[WorktreeOptions, WorktreeResult]):
    """List, add, remove or prune linked worktrees."""

    name = "worktree"
    options_type = WorktreeOptions

    def build_command(self, options: WorktreeOptions) -> CommandSpec:
        if options.action == "list":
            return build_command("worktree", ["list", "--porcelain"])
        if options.action == "prune":
            return build_command("worktree", ["prune"])

        flags = [options.action]
        refs = [options.path or ""]
        if options.action == "add":
            if options.new_branch:
                flags.extend(["-b", options.new_branch])
            if options.force:
                flags.append("-f")
            if options.ref:
                refs.append(options.ref)
        elif options.force:
            flags.append("-f")
        return build_command("worktree", flags, refs)

    def parse_result(
        self, options: WorktreeOptions, result: CommandResult
    ) -> WorktreeResult:
        worktrees = (
            parse_worktree_porcelain(result.stdout) if options.action == "list" else ()
        )
        return WorktreeResult(
            action=options.action, worktrees=worktrees, path=options.path
        )
