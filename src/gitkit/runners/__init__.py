"""Subprocess execution for gitkit."""

from __future__ import annotations

from gitkit.runners.command import CommandRunner
from gitkit.runners.models import CommandResult

__all__ = ["CommandResult", "CommandRunner"]
