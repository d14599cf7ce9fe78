"""Remote operations: fetch, pull, push and remote management.

fetch, pull and push run under the network timeout. git reports their
progress on stderr, so results keep the combined output.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gitkit.git.command import CommandSpec, build_command
from gitkit.git.models import (
    FetchOptions,
    FetchResult,
    PullOptions,
    PullResult,
    PushOptions,
    PushResult,
    RemoteOptions,
    RemoteResult,
)
from gitkit.git.operations.base import GitOperation
from gitkit.git.operations.registry import register
from gitkit.git.parsing import is_already_up_to_date, parse_remote_list

if TYPE_CHECKING:
    from gitkit.runners.models import CommandResult

__all__ = [
    "FetchOperation",
    "PullOperation",
    "PushOperation",
    "RemoteOperation",
]


def _remote_refs(remote: str | None, ref: str | None) -> list[str]:
    """``[REMOTE [REF]]``; *ref* is only meaningful after a remote."""
    if not remote:
        return []
    return [remote, ref] if ref else [remote]


@register
class FetchOperation(GitOperation[FetchOptions, FetchResult]):
    name = "fetch"
    options_type = FetchOptions
    network = True

    def build_command(self, options: FetchOptions) -> CommandSpec:
        flags = []
        if options.all:
            flags.append("--all")
        if options.prune:
            flags.append("--prune")
        if options.tags:
            flags.append("--tags")
        return build_command(
            "fetch", flags, _remote_refs(options.remote, options.refspec)
        )

    def parse_result(self, options: FetchOptions, result: CommandResult) -> FetchResult:
        return FetchResult(remote=options.remote, output=result.output.strip())


@register
class PullOperation(GitOperation[PullOptions, PullResult]):
    name = "pull"
    options_type = PullOptions
    network = True

    def build_command(self, options: PullOptions) -> CommandSpec:
        flags = []
        if options.rebase:
            flags.append("--rebase")
        if options.ff_only:
            flags.append("--ff-only")
        refs = _remote_refs(options.remote, options.branch)
        return build_command("pull", flags, refs)

    def parse_result(self, options: PullOptions, result: CommandResult) -> PullResult:
        return PullResult(
            remote=options.remote,
            branch=options.branch,
            already_up_to_date=is_already_up_to_date(result.output),
            fast_forward="Fast-forward" in result.output,
            output=result.output.strip(),
        )


@register
class PushOperation(GitOperation[PushOptions, PushResult]):
    name = "push"
    options_type = PushOptions
    network = True

    def build_command(self, options: PushOptions) -> CommandSpec:
        flags = []
        if options.force_with_lease:
            flags.append("--force-with-lease")
        if options.set_upstream:
            flags.append("--set-upstream")
        if options.tags:
            flags.append("--tags")
        if options.delete:
            flags.append("--delete")
        refs = _remote_refs(options.remote, options.branch)
        return build_command("push", flags, refs)

    def parse_result(self, options: PushOptions, result: CommandResult) -> PushResult:
        return PushResult(
            remote=options.remote,
            branch=options.branch,
            up_to_date="Everything up-to-date" in result.output,
            output=result.output.strip(),
        )


@register
class RemoteOperation(GitOperation[RemoteOptions, RemoteResult]):
    """List, add, remove or re-point remotes."""

    name = "remote"
    options_type = RemoteOptions

    def build_command(self, options: RemoteOptions) -> CommandSpec:
        if options.action == "list":
            return build_command("remote", ["-v"])
        name = options.name or ""
        if options.action == "remove":
            return build_command("remote", ["remove"], [name])
        subcommand = "add" if options.action == "add" else "set-url"
        return build_command("remote", [subcommand], [name, options.url or ""])

    def parse_result(
        self, options: RemoteOptions, result: CommandResult
    ) -> RemoteResult:
        if options.action == "list":
            return RemoteResult(
                action="list", remotes=parse_remote_list(result.stdout)
            )
        return RemoteResult(action=options.action, name=options.name)
