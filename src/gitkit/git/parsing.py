"""Parsers that turn git's textual output into result models.

Every parser here is tolerant: unrecognized lines are skipped and empty
input yields an empty result. Nothing in this module raises on malformed
output, so a surprising line from git degrades a count rather than failing
the operation.
"""

from __future__ import annotations

import re

from gitkit.git.models import (
    BlameLine,
    BranchInfo,
    CommitInfo,
    DiffStatSummary,
    FileChangeStat,
    ReflogEntry,
    RemoteInfo,
    StashEntry,
    StatusResult,
    TagInfo,
    WorktreeInfo,
)

__all__ = [
    "FIELD_SEPARATOR",
    "RECORD_SEPARATOR",
    "count_nonblank_lines",
    "has_binary_marker",
    "is_already_up_to_date",
    "parse_add_output",
    "parse_blame_porcelain",
    "parse_branch_list",
    "parse_clean_output",
    "parse_commit_header",
    "parse_diff_stat",
    "parse_log_records",
    "parse_reflog_records",
    "parse_shortstat",
    "parse_remote_list",
    "parse_stash_list",
    "parse_status_porcelain",
    "parse_tag_list",
    "parse_worktree_porcelain",
    "split_lines",
    "split_path_list",
    "unquote_path",
]

#: ASCII unit separator between fields of one record
FIELD_SEPARATOR = "\x1f"
#: ASCII record separator between records
RECORD_SEPARATOR = "\x1e"

# =============================================================================
# Generic helpers
# =============================================================================


def split_lines(text: str) -> list[str]:
    """Split into lines, dropping blank ones and trailing whitespace."""
    return [line.rstrip() for line in text.splitlines() if line.strip()]


def count_nonblank_lines(text: str) -> int:
    return len(split_lines(text))


_OCTAL_ESCAPE_RE = re.compile(r"\\([0-7]{3}|.)")
_SIMPLE_ESCAPES = {
    "n": b"\n",
    "t": b"\t",
    '"': b'"',
    "\\": b"\\",
    "a": b"\a",
    "b": b"\b",
    "f": b"\f",
    "r": b"\r",
    "v": b"\v",
}


def unquote_path(path: str) -> str:
    """Undo git's C-style quoting of unusual path names.

    Git wraps paths containing special or non-ASCII bytes in double quotes
    and escapes them (``"caf\\303\\251.txt"``). Unquoted paths pass through.
    """
    if len(path) < 2 or not (path.startswith('"') and path.endswith('"')):
        return path

    out = bytearray()
    pos = 0
    body = path[1:-1]
    for match in _OCTAL_ESCAPE_RE.finditer(body):
        out.extend(body[pos : match.start()].encode("utf-8"))
        token = match.group(1)
        if len(token) == 3:
            out.append(int(token, 8))
        else:
            out.extend(_SIMPLE_ESCAPES.get(token, token.encode("utf-8")))
        pos = match.end()
    out.extend(body[pos:].encode("utf-8"))
    return out.decode("utf-8", errors="replace")


def split_path_list(text: str) -> list[str]:
    """Split a path listing that is either NUL- or newline-terminated."""
    if "\0" in text:
        return [p for p in text.split("\0") if p.strip()]
    return [unquote_path(p) for p in split_lines(text)]


# =============================================================================
# Diff --stat
# =============================================================================

#: ``path | 12 +++++-----``
_STAT_FILE_RE = re.compile(
    r"^\s*(?P<path>.+?)\s+\|\s+(?P<count>\d+)\s*(?P<bar>[+-]*)\s*$"
)

#: ``image.png | Bin 0 -> 1234 bytes`` or ``image.png | Binary files differ``
_STAT_BINARY_RE = re.compile(r"^\s*(?P<path>.+?)\s+\|\s+(?:Bin\b|Binary files\b)")

_STAT_SUMMARY_RE = re.compile(
    r"^\s*(?P<files>\d+)\s+files?\s+changed"
    r"(?:,\s+(?P<ins>\d+)\s+insertions?\(\+\))?"
    r"(?:,\s+(?P<dels>\d+)\s+deletions?\(-\))?",
)

_BINARY_SENTENCE_RE = re.compile(r"Binary files (?:.+ )?differ")


def has_binary_marker(text: str) -> bool:
    """True if *text* contains a "Binary files ... differ" sentence."""
    return _BINARY_SENTENCE_RE.search(text) is not None


def parse_shortstat(text: str) -> tuple[int, int, int]:
    """Return ``(files, insertions, deletions)`` from the first summary line.

    All zeros when no summary line is present.
    """
    for line in text.splitlines():
        match = _STAT_SUMMARY_RE.match(line)
        if match:
            return (
                int(match.group("files")),
                int(match.group("ins") or 0),
                int(match.group("dels") or 0),
            )
    return (0, 0, 0)


def _apportion(count: int, bar: str) -> tuple[int, int]:
    """Split a per-file change count using the +/- bar proportions.

    The bar is scaled down for wide changes, so only its ratio is trusted.
    """
    plus = bar.count("+")
    minus = bar.count("-")
    if plus + minus == 0:
        return (0, 0)
    if minus == 0:
        return (count, 0)
    if plus == 0:
        return (0, count)
    additions = round(count * plus / (plus + minus))
    return (additions, count - additions)


def parse_diff_stat(text: str) -> DiffStatSummary:
    """Parse ``git diff --stat`` output.

    Per-file lines become :class:`FileChangeStat` records. Totals come from
    the summary line when present (any of its clauses may be missing) and
    are otherwise summed from the per-file records. Several summary lines,
    as in concatenated outputs, are added together. Binary per-file lines
    contribute zero lines and set ``binary``.

    Args:
        text: Raw ``--stat`` output; may be empty or partial.

    Returns:
        DiffStatSummary; zero totals for empty or unrecognized input.
    """
    files: list[FileChangeStat] = []
    summary_additions: int | None = None
    summary_deletions: int | None = None
    binary = has_binary_marker(text)

    for line in text.splitlines():
        if not line.strip():
            continue

        summary = _STAT_SUMMARY_RE.match(line)
        if summary:
            summary_additions = (summary_additions or 0) + int(
                summary.group("ins") or 0
            )
            summary_deletions = (summary_deletions or 0) + int(
                summary.group("dels") or 0
            )
            continue

        binary_match = _STAT_BINARY_RE.match(line)
        if binary_match:
            files.append(FileChangeStat(path=binary_match.group("path"), binary=True))
            binary = True
            continue

        file_match = _STAT_FILE_RE.match(line)
        if file_match:
            additions, deletions = _apportion(
                int(file_match.group("count")), file_match.group("bar")
            )
            files.append(
                FileChangeStat(
                    path=file_match.group("path"),
                    additions=additions,
                    deletions=deletions,
                )
            )

    if summary_additions is None or summary_deletions is None:
        summary_additions = sum(f.additions for f in files)
        summary_deletions = sum(f.deletions for f in files)

    return DiffStatSummary(
        files=tuple(files),
        total_additions=summary_additions,
        total_deletions=summary_deletions,
        binary=binary,
    )


# =============================================================================
# Status
# =============================================================================

_BRANCH_HEADER_RE = re.compile(
    r"^## (?:(?:No commits yet|Initial commit) on (?P<initial>\S+)"
    r"|(?P<branch>[^.\s]\S*?)(?:\.\.\.(?P<upstream>\S+))?)"
    r"(?: \[(?P<tracking>[^\]]*)\])?$"
)
_AHEAD_RE = re.compile(r"ahead (\d+)")
_BEHIND_RE = re.compile(r"behind (\d+)")
_CONFLICT_CODES = frozenset({"DD", "AU", "UD", "UA", "DU", "AA", "UU"})


def parse_status_porcelain(text: str) -> StatusResult:
    """Parse ``git status --porcelain=v1 --branch`` output."""
    branch: str | None = None
    upstream: str | None = None
    ahead = behind = 0
    staged: list[str] = []
    unstaged: list[str] = []
    untracked: list[str] = []
    conflicted: list[str] = []

    for line in text.splitlines():
        if line.startswith("## "):
            if line.startswith("## HEAD (no branch)"):
                continue
            header = _BRANCH_HEADER_RE.match(line)
            if header:
                branch = header.group("initial") or header.group("branch")
                upstream = header.group("upstream")
                tracking = header.group("tracking") or ""
                if m := _AHEAD_RE.search(tracking):
                    ahead = int(m.group(1))
                if m := _BEHIND_RE.search(tracking):
                    behind = int(m.group(1))
            continue

        if len(line) < 4:
            continue
        code, raw_path = line[:2], line[3:]
        # Renames and copies are reported as "orig -> new"
        if " -> " in raw_path:
            raw_path = raw_path.split(" -> ", 1)[1]
        path = unquote_path(raw_path)

        if code == "??":
            untracked.append(path)
        elif code == "!!":
            continue
        elif code in _CONFLICT_CODES:
            conflicted.append(path)
        else:
            if code[0] not in (" ", "?"):
                staged.append(path)
            if code[1] not in (" ", "?"):
                unstaged.append(path)

    return StatusResult(
        branch=branch,
        upstream=upstream,
        ahead=ahead,
        behind=behind,
        staged=tuple(staged),
        unstaged=tuple(unstaged),
        untracked=tuple(untracked),
        conflicted=tuple(conflicted),
    )


# =============================================================================
# Log-style records
# =============================================================================


def _records(text: str) -> list[list[str]]:
    """Split RECORD_SEPARATOR-terminated, FIELD_SEPARATOR-joined output."""
    records = []
    for raw in text.split(RECORD_SEPARATOR):
        raw = raw.strip("\n")
        if raw.strip():
            records.append(raw.split(FIELD_SEPARATOR))
    return records


def _field(parts: list[str], index: int) -> str:
    return parts[index].strip() if len(parts) > index else ""


def parse_log_records(text: str) -> tuple[CommitInfo, ...]:
    """Parse ``git log`` output produced with the gitkit record format."""
    commits: list[CommitInfo] = []
    for parts in _records(text):
        sha = _field(parts, 0)
        if not sha:
            continue
        commits.append(
            CommitInfo(
                sha=sha,
                short_sha=_field(parts, 1),
                author=_field(parts, 2),
                email=_field(parts, 3),
                date=_field(parts, 4),
                parents=tuple(_field(parts, 5).split()),
                subject=_field(parts, 6),
                body=_field(parts, 7),
            )
        )
    return tuple(commits)


def parse_reflog_records(text: str) -> tuple[ReflogEntry, ...]:
    entries: list[ReflogEntry] = []
    for parts in _records(text):
        if len(parts) < 3:
            continue
        entries.append(
            ReflogEntry(
                sha=_field(parts, 0),
                selector=_field(parts, 1),
                message=_field(parts, 2),
            )
        )
    return tuple(entries)


def parse_stash_list(text: str) -> tuple[StashEntry, ...]:
    entries: list[StashEntry] = []
    for line in split_lines(text):
        parts = line.split(FIELD_SEPARATOR)
        if len(parts) < 2:
            continue
        entries.append(StashEntry(ref=_field(parts, 0), message=_field(parts, 1)))
    return tuple(entries)


def parse_branch_list(text: str) -> tuple[BranchInfo, ...]:
    """Parse ``git branch --format`` output (HEAD marker, name, sha, upstream)."""
    branches: list[BranchInfo] = []
    for line in split_lines(text):
        parts = line.split(FIELD_SEPARATOR)
        name = _field(parts, 1)
        if not name:
            continue
        upstream = _field(parts, 3)
        branches.append(
            BranchInfo(
                name=name,
                commit=_field(parts, 2),
                upstream=upstream or None,
                current=_field(parts, 0) == "*",
            )
        )
    return tuple(branches)


def parse_tag_list(text: str) -> tuple[TagInfo, ...]:
    tags: list[TagInfo] = []
    for line in split_lines(text):
        parts = line.split(FIELD_SEPARATOR)
        name = _field(parts, 0)
        if name:
            tags.append(
                TagInfo(name=name, commit=_field(parts, 1), subject=_field(parts, 2))
            )
    return tuple(tags)


# =============================================================================
# Line-oriented command output
# =============================================================================


def parse_remote_list(text: str) -> tuple[RemoteInfo, ...]:
    """Parse ``git remote -v`` into one record per remote."""
    fetch_urls: dict[str, str] = {}
    push_urls: dict[str, str] = {}
    for line in split_lines(text):
        parts = line.split()
        if len(parts) < 3:
            continue
        name, url, kind = parts[0], parts[1], parts[2]
        if kind == "(fetch)":
            fetch_urls[name] = url
        elif kind == "(push)":
            push_urls[name] = url

    names = list(dict.fromkeys([*fetch_urls, *push_urls]))
    return tuple(
        RemoteInfo(
            name=name,
            fetch_url=fetch_urls.get(name, ""),
            push_url=push_urls.get(name, fetch_urls.get(name, "")),
        )
        for name in names
    )


def parse_worktree_porcelain(text: str) -> tuple[WorktreeInfo, ...]:
    """Parse ``git worktree list --porcelain`` blocks."""
    worktrees: list[WorktreeInfo] = []
    for block in re.split(r"\n\s*\n", text.strip()):
        attrs: dict[str, str] = {}
        for line in block.splitlines():
            key, _, value = line.partition(" ")
            attrs[key] = value
        path = attrs.get("worktree")
        if not path:
            continue
        branch = attrs.get("branch")
        worktrees.append(
            WorktreeInfo(
                path=path,
                head=attrs.get("HEAD", ""),
                branch=branch.removeprefix("refs/heads/") if branch else None,
                bare="bare" in attrs,
                detached="detached" in attrs,
                locked="locked" in attrs,
            )
        )
    return tuple(worktrees)


_BLAME_HEADER_RE = re.compile(r"^(?P<sha>[0-9a-f]{40}) \d+ (?P<final>\d+)(?: \d+)?$")


def parse_blame_porcelain(text: str) -> tuple[BlameLine, ...]:
    """Parse ``git blame --line-porcelain`` output."""
    lines: list[BlameLine] = []
    sha = ""
    final_line = 0
    attrs: dict[str, str] = {}
    for line in text.splitlines():
        if line.startswith("\t"):
            if sha:
                lines.append(
                    BlameLine(
                        line_number=final_line,
                        sha=sha,
                        author=attrs.get("author", ""),
                        content=line[1:],
                        summary=attrs.get("summary", ""),
                    )
                )
            sha = ""
            attrs = {}
            continue
        header = _BLAME_HEADER_RE.match(line)
        if header:
            sha = header.group("sha")
            final_line = int(header.group("final"))
            continue
        key, _, value = line.partition(" ")
        attrs[key] = value
    return tuple(lines)


_COMMIT_HEADER_RE = re.compile(
    r"^\[(?P<branch>.+?)(?: \(root-commit\))? (?P<hash>[0-9a-f]{4,40})\] "
    r"(?P<summary>.*)$"
)


def parse_commit_header(text: str) -> tuple[str, str, str]:
    """Extract ``(branch, hash, summary)`` from ``git commit`` output.

    Returns empty strings when the header line is missing.
    """
    for line in text.splitlines():
        match = _COMMIT_HEADER_RE.match(line.strip())
        if match:
            return (match.group("branch"), match.group("hash"), match.group("summary"))
    return ("", "", "")


def parse_clean_output(text: str) -> tuple[str, ...]:
    removed: list[str] = []
    for line in split_lines(text):
        for prefix in ("Removing ", "Would remove "):
            if line.startswith(prefix):
                removed.append(unquote_path(line[len(prefix) :]))
                break
    return tuple(removed)


_ADD_LINE_RE = re.compile(r"^(?:add|remove) '(?P<path>.+)'$")


def parse_add_output(text: str) -> tuple[str, ...]:
    """Parse ``git add --verbose`` lines (``add 'path'``)."""
    return tuple(
        match.group("path")
        for line in split_lines(text)
        if (match := _ADD_LINE_RE.match(line))
    )


def is_already_up_to_date(output: str) -> bool:
    """True if merge or pull output reports nothing to integrate."""
    # Older git spells it "up-to-date"
    lowered = output.lower()
    return "already up to date" in lowered or "already up-to-date" in lowered
