"""History operations: commit, log, show, blame and reflog.

``log`` and ``reflog`` ask git for machine-readable records: fields are
joined with the ASCII unit separator and each record is terminated with the
ASCII record separator, so subjects and bodies may contain any printable
text.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gitkit.git.command import CommandSpec, build_command
from gitkit.git.models import (
    BlameOptions,
    BlameResult,
    CommitOptions,
    CommitResult,
    LogOptions,
    LogResult,
    ReflogOptions,
    ReflogResult,
    ShowOptions,
    ShowResult,
)
from gitkit.git.operations.base import GitOperation
from gitkit.git.operations.registry import register
from gitkit.git.parsing import (
    parse_blame_porcelain,
    parse_commit_header,
    parse_log_records,
    parse_reflog_records,
    parse_shortstat,
)

if TYPE_CHECKING:
    from gitkit.runners.models import CommandResult

__all__ = [
    "BlameOperation",
    "CommitOperation",
    "LogOperation",
    "ReflogOperation",
    "ShowOperation",
]

#: sha, short sha, author, email, ISO date, parents, subject, body
LOG_FORMAT = "%H%x1f%h%x1f%an%x1f%ae%x1f%aI%x1f%P%x1f%s%x1f%b%x1e"

#: sha, selector, subject
REFLOG_FORMAT = "%H%x1f%gd%x1f%gs%x1e"


@register
class CommitOperation(GitOperation[CommitOptions, CommitResult]):
    """Record staged changes, or only *paths* when given."""

    name = "commit"
    options_type = CommitOptions

    def build_command(self, options: CommitOptions) -> CommandSpec:
        flags = [f"--message={options.message}"]
        if options.amend:
            flags.append("--amend")
        if options.allow_empty:
            flags.append("--allow-empty")
        if options.sign_off:
            flags.append("--signoff")
        if options.author:
            flags.append(f"--author={options.author}")
        return build_command("commit", flags, paths=options.paths)

    def parse_result(
        self, options: CommitOptions, result: CommandResult
    ) -> CommitResult:
        branch, commit_hash, summary = parse_commit_header(result.stdout)
        files_changed, insertions, deletions = parse_shortstat(result.stdout)
        return CommitResult(
            commit_hash=commit_hash,
            branch=branch,
            summary=summary,
            files_changed=files_changed,
            insertions=insertions,
            deletions=deletions,
        )


@register
class LogOperation(GitOperation[LogOptions, LogResult]):
    name = "log"
    options_type = LogOptions

    def build_command(self, options: LogOptions) -> CommandSpec:
        flags = [f"--format={LOG_FORMAT}"]
        if options.max_count is not None:
            flags.append(f"--max-count={options.max_count}")
        if options.skip:
            flags.append(f"--skip={options.skip}")
        if options.author:
            flags.append(f"--author={options.author}")
        if options.since:
            flags.append(f"--since={options.since}")
        if options.until:
            flags.append(f"--until={options.until}")
        if options.grep:
            flags.append(f"--grep={options.grep}")
        if options.first_parent:
            flags.append("--first-parent")
        refs = [options.ref] if options.ref else []
        return build_command("log", flags, refs, options.paths)

    def parse_result(self, options: LogOptions, result: CommandResult) -> LogResult:
        return LogResult(commits=parse_log_records(result.stdout))


@register
class ShowOperation(GitOperation[ShowOptions, ShowResult]):
    name = "show"
    options_type = ShowOptions

    def build_command(self, options: ShowOptions) -> CommandSpec:
        flags = []
        if options.stat:
            flags.append("--stat")
        if options.format:
            flags.append(f"--format={options.format}")
        return build_command("show", flags, [options.ref], options.paths)

    def parse_result(self, options: ShowOptions, result: CommandResult) -> ShowResult:
        return ShowResult(ref=options.ref, content=result.stdout)


@register
class BlameOperation(GitOperation[BlameOptions, BlameResult]):
    """Attribute each line of a file to the commit that last changed it."""

    name = "blame"
    options_type = BlameOptions

    def build_command(self, options: BlameOptions) -> CommandSpec:
        flags = ["--line-porcelain"]
        if options.start_line is not None:
            end = options.end_line if options.end_line is not None else ""
            flags.extend(["-L", f"{options.start_line},{end}"])
        refs = [options.ref] if options.ref else []
        return build_command("blame", flags, refs, [options.path])

    def parse_result(
        self, options: BlameOptions, result: CommandResult
    ) -> BlameResult:
        return BlameResult(
            path=options.path, lines=parse_blame_porcelain(result.stdout)
        )


@register
class ReflogOperation(GitOperation[ReflogOptions, ReflogResult]):
    name = "reflog"
    options_type = ReflogOptions

    def build_command(self, options: ReflogOptions) -> CommandSpec:
        flags = ["show", f"--format={REFLOG_FORMAT}"]
        if options.max_count is not None:
            flags.append(f"--max-count={options.max_count}")
        return build_command("reflog", flags, [options.ref])

    def parse_result(
        self, options: ReflogOptions, result: CommandResult
    ) -> ReflogResult:
        return ReflogResult(entries=parse_reflog_records(result.stdout))
