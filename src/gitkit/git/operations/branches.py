"""Branch, merge and tag operations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gitkit.git.command import CommandSpec, build_command
from gitkit.git.models import (
    BranchOptions,
    BranchResult,
    CheckoutOptions,
    CheckoutResult,
    CherryPickOptions,
    CherryPickResult,
    MergeOptions,
    MergeResult,
    RebaseOptions,
    RebaseResult,
    TagOptions,
    TagResult,
)
from gitkit.git.operations.base import GitOperation
from gitkit.git.operations.registry import register
from gitkit.git.parsing import (
    is_already_up_to_date,
    parse_branch_list,
    parse_tag_list,
)

if TYPE_CHECKING:
    from gitkit.runners.models import CommandResult

__all__ = [
    "BranchOperation",
    "CheckoutOperation",
    "CherryPickOperation",
    "MergeOperation",
    "RebaseOperation",
    "TagOperation",
]

#: for-each-ref format: HEAD marker, short name, short sha, upstream
BRANCH_FORMAT = "%(HEAD)%1f%(refname:short)%1f%(objectname:short)%1f%(upstream:short)"

#: for-each-ref format: short name, short sha, subject
TAG_FORMAT = "%(refname:short)%1f%(objectname:short)%1f%(subject)"


@register
class BranchOperation(GitOperation[BranchOptions, BranchResult]):
    """List, create, delete or rename branches."""

    name = "branch"
    options_type = BranchOptions

    def build_command(self, options: BranchOptions) -> CommandSpec:
        name = options.name or ""
        if options.action == "list":
            flags = ["--list", f"--format={BRANCH_FORMAT}"]
            if options.all:
                flags.append("--all")
            elif options.remotes:
                flags.append("--remotes")
            return build_command("branch", flags)
        if options.action == "create":
            flags = ["--force"] if options.force else []
            refs = [name]
            if options.start_point:
                refs.append(options.start_point)
            return build_command("branch", flags, refs)
        if options.action == "delete":
            return build_command("branch", ["-D" if options.force else "-d"], [name])
        return build_command(
            "branch",
            ["-M" if options.force else "-m"],
            [name, options.new_name or ""],
        )

    def parse_result(
        self, options: BranchOptions, result: CommandResult
    ) -> BranchResult:
        if options.action == "list":
            return BranchResult(
                action="list", branches=parse_branch_list(result.stdout)
            )
        name = options.new_name if options.action == "rename" else options.name
        return BranchResult(action=options.action, name=name)


@register
class CheckoutOperation(GitOperation[CheckoutOptions, CheckoutResult]):
    """Switch branches, or restore *paths* from *target*."""

    name = "checkout"
    options_type = CheckoutOptions

    def build_command(self, options: CheckoutOptions) -> CommandSpec:
        flags = ["--force"] if options.force else []
        if options.create_branch:
            flags.extend(["-b", options.target])
            return build_command("checkout", flags)
        return build_command("checkout", flags, [options.target], options.paths)

    def parse_result(
        self, options: CheckoutOptions, result: CommandResult
    ) -> CheckoutResult:
        return CheckoutResult(
            target=options.target,
            created=options.create_branch,
            output=result.output.strip(),
        )


@register
class MergeOperation(GitOperation[MergeOptions, MergeResult]):
    """Merge a branch into the current one, or abort a stopped merge.

    A merge that stops on conflicts exits nonzero and surfaces as
    :class:`~gitkit.exceptions.MergeConflictError`.
    """

    name = "merge"
    options_type = MergeOptions

    def build_command(self, options: MergeOptions) -> CommandSpec:
        if options.abort:
            return build_command("merge", ["--abort"])
        flags = []
        if options.no_ff:
            flags.append("--no-ff")
        if options.ff_only:
            flags.append("--ff-only")
        if options.squash:
            flags.append("--squash")
        if options.message:
            flags.append(f"--message={options.message}")
        return build_command("merge", flags, [options.branch or ""])

    def parse_result(self, options: MergeOptions, result: CommandResult) -> MergeResult:
        return MergeResult(
            success=True,
            fast_forward="Fast-forward" in result.stdout,
            already_up_to_date=is_already_up_to_date(result.output),
            aborted=options.abort,
            output=result.output.strip(),
        )


@register
class RebaseOperation(GitOperation[RebaseOptions, RebaseResult]):
    name = "rebase"
    options_type = RebaseOptions

    def build_command(self, options: RebaseOptions) -> CommandSpec:
        if options.control:
            return build_command("rebase", [f"--{options.control}"])
        flags = [f"--onto={options.onto}"] if options.onto else []
        return build_command("rebase", flags, [options.upstream or ""])

    def parse_result(
        self, options: RebaseOptions, result: CommandResult
    ) -> RebaseResult:
        return RebaseResult(
            success=True,
            up_to_date="is up to date" in result.output,
            output=result.output.strip(),
        )


@register
class CherryPickOperation(GitOperation[CherryPickOptions, CherryPickResult]):
    name = "cherry_pick"
    options_type = CherryPickOptions

    def build_command(self, options: CherryPickOptions) -> CommandSpec:
        if options.control:
            return build_command("cherry-pick", [f"--{options.control}"])
        flags = ["--no-commit"] if options.no_commit else []
        return build_command("cherry-pick", flags, options.commits)

    def parse_result(
        self, options: CherryPickOptions, result: CommandResult
    ) -> CherryPickResult:
        return CherryPickResult(success=True, output=result.output.strip())


@register
class TagOperation(GitOperation[TagOptions, TagResult]):
    """List, create or delete tags. A message makes the tag annotated."""

    name = "tag"
    options_type = TagOptions

    def build_command(self, options: TagOptions) -> CommandSpec:
        name = options.name or ""
        if options.action == "list":
            refs = [options.pattern] if options.pattern else []
            return build_command("tag", ["--list", f"--format={TAG_FORMAT}"], refs)
        if options.action == "delete":
            return build_command("tag", ["-d"], [name])

        flags = ["-a", f"--message={options.message}"] if options.message else []
        refs = [name]
        if options.ref:
            refs.append(options.ref)
        return build_command("tag", flags, refs)

    def parse_result(self, options: TagOptions, result: CommandResult) -> TagResult:
        if options.action == "list":
            return TagResult(action="list", tags=parse_tag_list(result.stdout))
        return TagResult(action=options.action, name=options.name)
