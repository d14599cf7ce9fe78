"""gitkit - structured git operations for automated callers.

Turns typed operation requests into ``git`` invocations and normalizes the
textual output into result dataclasses or classified errors.

Example:
    ```python
    from pathlib import Path

    from gitkit import DiffOptions, GitService, OperationContext

    service = GitService()
    context = OperationContext(working_directory=Path("/repo"))
    result = await service.diff(DiffOptions(include_untracked=True), context)
    print(result.files_changed, result.insertions, result.deletions)
    ```
"""

from __future__ import annotations

from gitkit.git.context import OperationContext
from gitkit.git.models import DiffOptions, DiffResult
from gitkit.service import GitService

__version__ = "0.1.0"

__all__ = [
    "DiffOptions",
    "DiffResult",
    "GitService",
    "OperationContext",
    "__version__",
]
