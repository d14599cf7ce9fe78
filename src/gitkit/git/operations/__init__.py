"""Git operations and the default registry.

Importing this package registers every built-in operation with
:data:`~gitkit.git.operations.registry.registry`.
"""

from __future__ import annotations

from gitkit.git.operations.base import GitOperation
from gitkit.git.operations.branches import (
    BranchOperation,
    CheckoutOperation,
    CherryPickOperation,
    MergeOperation,
    RebaseOperation,
    TagOperation,
)
from gitkit.git.operations.commits import (
    BlameOperation,
    CommitOperation,
    LogOperation,
    ReflogOperation,
    ShowOperation,
)
from gitkit.git.operations.diff import DiffOperation
from gitkit.git.operations.registry import OperationRegistry, register, registry
from gitkit.git.operations.remotes import (
    FetchOperation,
    PullOperation,
    PushOperation,
    RemoteOperation,
)
from gitkit.git.operations.repository import (
    CleanOperation,
    CloneOperation,
    InitOperation,
    StatusOperation,
    WorktreeOperation,
)
from gitkit.git.operations.staging import AddOperation, ResetOperation, StashOperation

__all__ = [
    # Framework
    "GitOperation",
    "OperationRegistry",
    "register",
    "registry",
    # Repository
    "CleanOperation",
    "CloneOperation",
    "InitOperation",
    "StatusOperation",
    "WorktreeOperation",
    # Staging
    "AddOperation",
    "ResetOperation",
    "StashOperation",
    # Commits
    "BlameOperation",
    "CommitOperation",
    "DiffOperation",
    "LogOperation",
    "ReflogOperation",
    "ShowOperation",
    # Branches
    "BranchOperation",
    "CheckoutOperation",
    "CherryPickOperation",
    "MergeOperation",
    "RebaseOperation",
    "TagOperation",
    # Remotes
    "FetchOperation",
    "PullOperation",
    "PushOperation",
    "RemoteOperation",
]
