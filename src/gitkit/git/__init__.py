"""Git CLI execution layer.

Commands are assembled by :mod:`gitkit.git.command`, run by
:class:`~gitkit.git.executor.GitExecutor`, parsed by :mod:`gitkit.git.parsing`
and classified on failure by :mod:`gitkit.git.errors`. Each supported git
operation lives in :mod:`gitkit.git.operations`.
"""

from __future__ import annotations

from gitkit.git.command import CommandSpec, build_command
from gitkit.git.context import OperationContext
from gitkit.git.errors import classify_error
from gitkit.git.executor import GitExecutor
from gitkit.git.parsing import parse_diff_stat

__all__ = [
    "CommandSpec",
    "GitExecutor",
    "OperationContext",
    "build_command",
    "classify_error",
    "parse_diff_stat",
]
