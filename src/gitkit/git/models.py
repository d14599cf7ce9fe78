"""Typed options and results for git operations.

Options are validated at construction (``__post_init__`` raises
``ValueError``); results are frozen dataclasses with ``to_dict()`` so a
transport layer can serialize them without knowing their shape.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Literal

ResetMode = Literal["soft", "mixed", "hard"]
BranchAction = Literal["list", "create", "delete", "rename"]
TagAction = Literal["list", "create", "delete"]
StashAction = Literal["list", "push", "pop", "apply", "drop", "clear"]
RemoteAction = Literal["list", "add", "remove", "set_url"]
WorktreeAction = Literal["list", "add", "remove", "prune"]
SequencerControl = Literal["abort", "continue", "skip"]


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise ValueError(message)


def _require_non_negative(value: int | None, name: str) -> None:
    if value is not None and value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


class _ResultMixin:
    __slots__ = ()

    def to_dict(self) -> dict[str, object]:
        return asdict(self)  # type: ignore[call-overload]


# =============================================================================
# Diff
# =============================================================================


@dataclass(frozen=True, slots=True)
class DiffOptions:
    """Options for the diff operation.

    Attributes:
        staged: Compare the index against HEAD instead of the working tree.
        name_only: Only list changed paths.
        unified: Context lines around each hunk (0 is valid and explicit).
        commit1: First revision; alone, it is compared to the working tree.
        commit2: Second revision, compared against ``commit1``.
        stat: Return the ``--stat`` summary instead of patch content.
        paths: Path filters, in order.
        include_untracked: Also report untracked (not ignored) files as new.
    """

    staged: bool = False
    name_only: bool = False
    unified: int | None = None
    commit1: str | None = None
    commit2: str | None = None
    stat: bool = False
    paths: tuple[str, ...] = ()
    include_untracked: bool = False

    def __post_init__(self) -> None:
        _require_non_negative(self.unified, "unified")


@dataclass(frozen=True, slots=True)
class FileChangeStat(_ResultMixin):
    """One per-file line of a ``--stat`` summary."""

    path: str
    additions: int = 0
    deletions: int = 0
    binary: bool = False


@dataclass(frozen=True, slots=True)
class DiffStatSummary(_ResultMixin):
    """Parsed ``--stat`` output.

    Attributes:
        files: Per-file records in output order.
        total_additions: Inserted lines across all files.
        total_deletions: Deleted lines across all files.
        binary: True if any binary-content marker was seen.
    """

    files: tuple[FileChangeStat, ...] = ()
    total_additions: int = 0
    total_deletions: int = 0
    binary: bool = False

    @property
    def files_changed(self) -> int:
        return len(self.files)


@dataclass(frozen=True, slots=True)
class DiffResult(_ResultMixin):
    """Result of the diff operation.

    Attributes:
        diff: Raw output; tracked and untracked sections concatenated.
        files_changed: Tracked plus untracked files in the result.
        insertions: Inserted lines, None in name-only mode.
        deletions: Deleted lines, None in name-only mode.
        binary: True if binary content was detected.
    """

    diff: str
    files_changed: int
    insertions: int | None = None
    deletions: int | None = None
    binary: bool = False


# =============================================================================
# Repository
# =============================================================================


@dataclass(frozen=True, slots=True)
class InitOptions:
    bare: bool = False
    initial_branch: str | None = None


@dataclass(frozen=True, slots=True)
class InitResult(_ResultMixin):
    success: bool = True
    bare: bool = False
    output: str = ""


@dataclass(frozen=True, slots=True)
class CloneOptions:
    """Options for cloning a remote into the working directory.

    Attributes:
        url: Repository URL or local path.
        directory: Target directory, relative to the working directory.
        branch: Branch to check out instead of the remote HEAD.
        depth: Create a shallow clone with this many commits.
        bare: Create a bare repository.
    """

    url: str
    directory: str | None = None
    branch: str | None = None
    depth: int | None = None
    bare: bool = False

    def __post_init__(self) -> None:
        _require(bool(self.url.strip()), "url cannot be empty")
        _require(self.depth is None or self.depth > 0, "depth must be positive")


@dataclass(frozen=True, slots=True)
class CloneResult(_ResultMixin):
    success: bool = True
    url: str = ""
    directory: str = ""


@dataclass(frozen=True, slots=True)
class StatusOptions:
    include_untracked: bool = True


@dataclass(frozen=True, slots=True)
class StatusResult(_ResultMixin):
    """Working tree status snapshot.

    Attributes:
        branch: Current branch, or None when HEAD is detached.
        upstream: Tracking branch, if configured.
        ahead: Commits ahead of upstream.
        behind: Commits behind upstream.
        staged: Paths with index changes.
        unstaged: Paths with working tree changes.
        untracked: Untracked paths.
        conflicted: Paths with unresolved conflicts.
    """

    branch: str | None = None
    upstream: str | None = None
    ahead: int = 0
    behind: int = 0
    staged: tuple[str, ...] = ()
    unstaged: tuple[str, ...] = ()
    untracked: tuple[str, ...] = ()
    conflicted: tuple[str, ...] = ()

    @property
    def is_clean(self) -> bool:
        return not (self.staged or self.unstaged or self.untracked or self.conflicted)

    def to_dict(self) -> dict[str, object]:
        data = asdict(self)
        data["is_clean"] = self.is_clean
        return data


@dataclass(frozen=True, slots=True)
class CleanOptions:
    """Options for removing untracked files.

    One of ``force`` or ``dry_run`` is required, mirroring git's own
    refusal to clean without ``-f``.
    """

    force: bool = False
    dry_run: bool = False
    directories: bool = False
    ignored: bool = False
    paths: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        _require(self.force or self.dry_run, "clean requires force or dry_run")


@dataclass(frozen=True, slots=True)
class CleanResult(_ResultMixin):
    removed: tuple[str, ...] = ()
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class WorktreeOptions:
    action: WorktreeAction = "list"
    path: str | None = None
    ref: str | None = None
    new_branch: str | None = None
    force: bool = False

    def __post_init__(self) -> None:
        if self.action in ("add", "remove"):
            _require(bool(self.path), f"worktree {self.action} requires path")


@dataclass(frozen=True, slots=True)
class WorktreeInfo(_ResultMixin):
    path: str
    head: str = ""
    branch: str | None = None
    bare: bool = False
    detached: bool = False
    locked: bool = False


@dataclass(frozen=True, slots=True)
class WorktreeResult(_ResultMixin):
    action: WorktreeAction = "list"
    worktrees: tuple[WorktreeInfo, ...] = ()
    path: str | None = None


# =============================================================================
# Staging
# =============================================================================


@dataclass(frozen=True, slots=True)
class AddOptions:
    paths: tuple[str, ...] = ()
    all: bool = False
    update: bool = False

    def __post_init__(self) -> None:
        _require(
            bool(self.paths) or self.all or self.update,
            "add requires paths, all or update",
        )


@dataclass(frozen=True, slots=True)
class AddResult(_ResultMixin):
    staged: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ResetOptions:
    mode: ResetMode | None = None
    ref: str | None = None
    paths: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        _require(
            not (self.mode and self.paths),
            "reset mode cannot be combined with paths",
        )


@dataclass(frozen=True, slots=True)
class ResetResult(_ResultMixin):
    mode: ResetMode | None = None
    ref: str | None = None
    output: str = ""


@dataclass(frozen=True, slots=True)
class StashOptions:
    action: StashAction = "list"
    message: str | None = None
    ref: str | None = None
    include_untracked: bool = False


@dataclass(frozen=True, slots=True)
class StashEntry(_ResultMixin):
    ref: str
    message: str


@dataclass(frozen=True, slots=True)
class StashResult(_ResultMixin):
    action: StashAction = "list"
    entries: tuple[StashEntry, ...] = ()
    output: str = ""


# =============================================================================
# Commits and history
# =============================================================================


@dataclass(frozen=True, slots=True)
class CommitOptions:
    message: str
    amend: bool = False
    allow_empty: bool = False
    sign_off: bool = False
    author: str | None = None
    paths: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        _require(bool(self.message.strip()), "commit message cannot be empty")


@dataclass(frozen=True, slots=True)
class CommitResult(_ResultMixin):
    """Result of creating a commit.

    Attributes:
        commit_hash: Abbreviated hash git printed for the new commit.
        branch: Branch the commit landed on.
        summary: Subject line of the commit.
        files_changed: Files touched by the commit.
        insertions: Inserted lines.
        deletions: Deleted lines.
    """

    commit_hash: str = ""
    branch: str = ""
    summary: str = ""
    files_changed: int = 0
    insertions: int = 0
    deletions: int = 0


@dataclass(frozen=True, slots=True)
class LogOptions:
    max_count: int | None = 20
    skip: int | None = None
    ref: str | None = None
    author: str | None = None
    since: str | None = None
    until: str | None = None
    grep: str | None = None
    first_parent: bool = False
    paths: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        _require_non_negative(self.max_count, "max_count")
        _require_non_negative(self.skip, "skip")


@dataclass(frozen=True, slots=True)
class CommitInfo(_ResultMixin):
    """Single commit metadata.

    Attributes:
        sha: Full 40-character SHA.
        short_sha: Abbreviated SHA.
        author: Author name.
        email: Author email.
        date: ISO 8601 author date.
        subject: First line of the commit message.
        body: Remainder of the commit message.
        parents: Parent SHAs.
    """

    sha: str
    short_sha: str
    author: str = ""
    email: str = ""
    date: str = ""
    subject: str = ""
    body: str = ""
    parents: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class LogResult(_ResultMixin):
    commits: tuple[CommitInfo, ...] = ()

    @property
    def total(self) -> int:
        return len(self.commits)


@dataclass(frozen=True, slots=True)
class ShowOptions:
    ref: str = "HEAD"
    stat: bool = False
    format: str | None = None
    paths: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ShowResult(_ResultMixin):
    ref: str = "HEAD"
    content: str = ""


@dataclass(frozen=True, slots=True)
class BlameOptions:
    path: str
    ref: str | None = None
    start_line: int | None = None
    end_line: int | None = None

    def __post_init__(self) -> None:
        _require(bool(self.path), "blame requires a path")
        _require(
            self.start_line is None or self.start_line >= 1,
            "start_line must be >= 1",
        )
        _require(
            self.end_line is None
            or (self.start_line is not None and self.end_line >= self.start_line),
            "end_line requires start_line and must not precede it",
        )


@dataclass(frozen=True, slots=True)
class BlameLine(_ResultMixin):
    line_number: int
    sha: str
    author: str
    content: str
    summary: str = ""


@dataclass(frozen=True, slots=True)
class BlameResult(_ResultMixin):
    path: str = ""
    lines: tuple[BlameLine, ...] = ()


@dataclass(frozen=True, slots=True)
class ReflogOptions:
    ref: str = "HEAD"
    max_count: int | None = 20

    def __post_init__(self) -> None:
        _require_non_negative(self.max_count, "max_count")


@dataclass(frozen=True, slots=True)
class ReflogEntry(_ResultMixin):
    sha: str
    selector: str
    message: str


@dataclass(frozen=True, slots=True)
class ReflogResult(_ResultMixin):
    entries: tuple[ReflogEntry, ...] = ()


# =============================================================================
# Branches, merging and tags
# =============================================================================


@dataclass(frozen=True, slots=True)
class BranchOptions:
    action: BranchAction = "list"
    name: str | None = None
    new_name: str | None = None
    start_point: str | None = None
    force: bool = False
    remotes: bool = False
    all: bool = False

    def __post_init__(self) -> None:
        if self.action != "list":
            _require(bool(self.name), f"branch {self.action} requires name")
        if self.action == "rename":
            _require(bool(self.new_name), "branch rename requires new_name")


@dataclass(frozen=True, slots=True)
class BranchInfo(_ResultMixin):
    name: str
    commit: str = ""
    upstream: str | None = None
    current: bool = False


@dataclass(frozen=True, slots=True)
class BranchResult(_ResultMixin):
    action: BranchAction = "list"
    branches: tuple[BranchInfo, ...] = ()
    name: str | None = None

    @property
    def current(self) -> str | None:
        return next((b.name for b in self.branches if b.current), None)


@dataclass(frozen=True, slots=True)
class CheckoutOptions:
    target: str
    create_branch: bool = False
    force: bool = False
    paths: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        _require(bool(self.target), "checkout requires a target")
        _require(
            not (self.create_branch and self.paths),
            "create_branch cannot be combined with paths",
        )


@dataclass(frozen=True, slots=True)
class CheckoutResult(_ResultMixin):
    target: str = ""
    created: bool = False
    output: str = ""


@dataclass(frozen=True, slots=True)
class MergeOptions:
    branch: str | None = None
    no_ff: bool = False
    ff_only: bool = False
    squash: bool = False
    message: str | None = None
    abort: bool = False

    def __post_init__(self) -> None:
        _require(self.abort or bool(self.branch), "merge requires branch or abort")
        _require(not (self.no_ff and self.ff_only), "no_ff and ff_only conflict")


@dataclass(frozen=True, slots=True)
class MergeResult(_ResultMixin):
    success: bool = True
    fast_forward: bool = False
    already_up_to_date: bool = False
    aborted: bool = False
    output: str = ""


@dataclass(frozen=True, slots=True)
class RebaseOptions:
    upstream: str | None = None
    onto: str | None = None
    control: SequencerControl | None = None

    def __post_init__(self) -> None:
        _require(
            self.control is not None or bool(self.upstream),
            "rebase requires upstream or a control action",
        )


@dataclass(frozen=True, slots=True)
class RebaseResult(_ResultMixin):
    success: bool = True
    up_to_date: bool = False
    output: str = ""


@dataclass(frozen=True, slots=True)
class CherryPickOptions:
    commits: tuple[str, ...] = ()
    no_commit: bool = False
    control: SequencerControl | None = None

    def __post_init__(self) -> None:
        _require(
            self.control is not None or bool(self.commits),
            "cherry_pick requires commits or a control action",
        )


@dataclass(frozen=True, slots=True)
class CherryPickResult(_ResultMixin):
    success: bool = True
    output: str = ""


@dataclass(frozen=True, slots=True)
class TagOptions:
    action: TagAction = "list"
    name: str | None = None
    ref: str | None = None
    message: str | None = None
    pattern: str | None = None

    def __post_init__(self) -> None:
        if self.action != "list":
            _require(bool(self.name), f"tag {self.action} requires name")


@dataclass(frozen=True, slots=True)
class TagInfo(_ResultMixin):
    name: str
    commit: str = ""
    subject: str = ""


@dataclass(frozen=True, slots=True)
class TagResult(_ResultMixin):
    action: TagAction = "list"
    tags: tuple[TagInfo, ...] = ()
    name: str | None = None


# =============================================================================
# Remotes
# =============================================================================


@dataclass(frozen=True, slots=True)
class FetchOptions:
    remote: str | None = None
    refspec: str | None = None
    all: bool = False
    prune: bool = False
    tags: bool = False

    def __post_init__(self) -> None:
        _require(not (self.all and self.remote), "all cannot be combined with remote")
        _require(self.refspec is None or bool(self.remote), "refspec requires remote")


@dataclass(frozen=True, slots=True)
class FetchResult(_ResultMixin):
    remote: str | None = None
    output: str = ""


@dataclass(frozen=True, slots=True)
class PullOptions:
    remote: str | None = None
    branch: str | None = None
    rebase: bool = False
    ff_only: bool = False

    def __post_init__(self) -> None:
        _require(self.branch is None or bool(self.remote), "branch requires remote")
        _require(not (self.rebase and self.ff_only), "rebase and ff_only conflict")


@dataclass(frozen=True, slots=True)
class PullResult(_ResultMixin):
    remote: str | None = None
    branch: str | None = None
    already_up_to_date: bool = False
    fast_forward: bool = False
    output: str = ""


@dataclass(frozen=True, slots=True)
class PushOptions:
    remote: str | None = None
    branch: str | None = None
    force_with_lease: bool = False
    set_upstream: bool = False
    tags: bool = False
    delete: bool = False

    def __post_init__(self) -> None:
        _require(self.branch is None or bool(self.remote), "branch requires remote")
        _require(not self.delete or bool(self.branch), "delete requires branch")


@dataclass(frozen=True, slots=True)
class PushResult(_ResultMixin):
    remote: str | None = None
    branch: str | None = None
    up_to_date: bool = False
    output: str = ""


@dataclass(frozen=True, slots=True)
class RemoteOptions:
    action: RemoteAction = "list"
    name: str | None = None
    url: str | None = None

    def __post_init__(self) -> None:
        if self.action != "list":
            _require(bool(self.name), f"remote {self.action} requires name")
        if self.action in ("add", "set_url"):
            _require(bool(self.url), f"remote {self.action} requires url")


@dataclass(frozen=True, slots=True)
class RemoteInfo(_ResultMixin):
    name: str
    fetch_url: str = ""
    push_url: str = ""


@dataclass(frozen=True, slots=True)
class RemoteResult(_ResultMixin):
    action: RemoteAction = "list"
    remotes: tuple[RemoteInfo, ...] = ()
    name: str | None = None
