"""OperationRegistry for looking up git operations by name."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from gitkit.exceptions import DuplicateOperationError, UnknownOperationError

if TYPE_CHECKING:
    from gitkit.git.operations.base import GitOperation

# Type alias for any GitOperation class (with any options/result types)
GitOperationType = type["GitOperation[Any, Any]"]

__all__ = ["OperationRegistry", "register", "registry"]


class OperationRegistry:
    """Mapping of operation names to their implementation classes.

    Example:
        ```python
        registry = OperationRegistry()
        registry.register(StatusOperation)
        operation = registry.create("status")
        ```
    """

    def __init__(self) -> None:
        self._operations: dict[str, GitOperationType] = {}

    def register(self, cls: GitOperationType) -> GitOperationType:
        """Register an operation class under its ``name``.

        Usable as a class decorator.

        Raises:
            DuplicateOperationError: If the name is already taken.
        """
        if cls.name in self._operations:
            raise DuplicateOperationError(cls.name)
        self._operations[cls.name] = cls
        return cls

    def get(self, name: str) -> GitOperationType:
        """Look up an operation class by name.

        Raises:
            UnknownOperationError: If nothing is registered under *name*.
        """
        if name not in self._operations:
            raise UnknownOperationError(name)
        return self._operations[name]

    def create(self, name: str, **kwargs: Any) -> GitOperation[Any, Any]:
        """Instantiate the operation registered under *name*."""
        return self.get(name)(**kwargs)

    def list_operations(self) -> list[str]:
        """Sorted list of registered operation names."""
        return sorted(self._operations)

    def __contains__(self, name: object) -> bool:
        return name in self._operations


# =============================================================================
# Module-level default registry
# =============================================================================

#: Registry holding every built-in operation
registry = OperationRegistry()


def register(cls: GitOperationType) -> GitOperationType:
    """Class decorator registering an operation in the default registry."""
    return registry.register(cls)
