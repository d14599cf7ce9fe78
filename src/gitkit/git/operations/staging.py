"""Index and stash operations: add, reset and stash."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gitkit.git.command import CommandSpec, build_command
from gitkit.git.models import (
    AddOptions,
    AddResult,
    ResetOptions,
    ResetResult,
    StashOptions,
    StashResult,
)
from gitkit.git.operations.base import GitOperation
from gitkit.git.operations.registry import register
from gitkit.git.parsing import parse_add_output, parse_stash_list

if TYPE_CHECKING:
    from gitkit.runners.models import CommandResult

__all__ = ["AddOperation", "ResetOperation", "StashOperation"]

#: ``stash list`` record format: reflog selector and subject
_STASH_FORMAT = "--format=%gd%x1f%gs"


@register
class AddOperation(GitOperation[AddOptions, AddResult]):
    """Stage paths. ``--verbose`` makes git report each staged path."""

    name = "add"
    options_type = AddOptions

    def build_command(self, options: AddOptions) -> CommandSpec:
        flags = ["--verbose"]
        if options.all:
            flags.append("-A")
        if options.update:
            flags.append("-u")
        return build_command("add", flags, paths=options.paths)

    def parse_result(self, options: AddOptions, result: CommandResult) -> AddResult:
        return AddResult(staged=parse_add_output(result.stdout))


@register
class ResetOperation(GitOperation[ResetOptions, ResetResult]):
    name = "reset"
    options_type = ResetOptions

    def build_command(self, options: ResetOptions) -> CommandSpec:
        flags = [f"--{options.mode}"] if options.mode else []
        refs = [options.ref] if options.ref else []
        return build_command("reset", flags, refs, options.paths)

    def parse_result(self, options: ResetOptions, result: CommandResult) -> ResetResult:
        return ResetResult(
            mode=options.mode, ref=options.ref, output=result.output.strip()
        )


@register
class StashOperation(GitOperation[StashOptions, StashResult]):
    """List, create, apply or drop stash entries."""

    name = "stash"
    options_type = StashOptions

    def build_command(self, options: StashOptions) -> CommandSpec:
        if options.action == "list":
            return build_command("stash", ["list", _STASH_FORMAT])
        if options.action == "clear":
            return build_command("stash", ["clear"])
        if options.action == "push":
            flags = ["push"]
            if options.include_untracked:
                flags.append("--include-untracked")
            if options.message:
                flags.append(f"--message={options.message}")
            return build_command("stash", flags)

        refs = [options.ref] if options.ref else []
        return build_command("stash", [options.action], refs)

    def parse_result(self, options: StashOptions, result: CommandResult) -> StashResult:
        if options.action == "list":
            return StashResult(action="list", entries=parse_stash_list(result.stdout))
        return StashResult(action=options.action, output=result.output.strip())
