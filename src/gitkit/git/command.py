"""Structural assembly of git argument vectors.

Git's grammar is ``git <subcommand> [flags...] [refs...] [-- paths...]``.
Everything here is pure: no validation of what a flag means, only where it
goes.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

__all__ = ["PATH_SEPARATOR", "CommandSpec", "build_command"]

#: Separator between revisions and pathspecs
PATH_SEPARATOR = "--"


@dataclass(frozen=True, slots=True)
class CommandSpec:
    """A git subcommand with its ordered arguments.

    Attributes:
        subcommand: Git subcommand (e.g. ``"diff"``, ``"ls-files"``).
        args: Arguments following the subcommand, already ordered.
    """

    subcommand: str
    args: tuple[str, ...] = ()

    @property
    def argv(self) -> list[str]:
        """Argument vector without the git binary."""
        return [self.subcommand, *self.args]

    def __str__(self) -> str:
        return " ".join(self.argv)


def build_command(
    subcommand: str,
    flags: Iterable[str] = (),
    refs: Iterable[str] = (),
    paths: Iterable[str] = (),
) -> CommandSpec:
    """Assemble a command as flags, then refs, then ``--`` and paths.

    Flags and refs keep the caller's order. ``--`` is emitted only when there
    is at least one path, and nothing but paths follows it.

    Args:
        subcommand: Git subcommand.
        flags: Option arguments.
        refs: Positional revision (or other non-path) arguments.
        paths: Path filters.

    Returns:
        CommandSpec for the assembled command.

    Example:
        >>> build_command("diff", ["--cached"], ["HEAD~1"], ["src/"]).argv
        ['diff', '--cached', 'HEAD~1', '--', 'src/']
    """
    args = [*flags, *refs]
    path_list = list(paths)
    if path_list:
        args.append(PATH_SEPARATOR)
        args.extend(path_list)
    return CommandSpec(subcommand=subcommand, args=tuple(args))
