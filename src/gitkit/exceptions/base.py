from __future__ import annotations


class GitkitError(Exception):
    """Base exception class for all gitkit errors.

    Every exception raised deliberately by gitkit inherits from this class, so
    a caller can catch the whole family at its boundary while system
    exceptions still propagate untouched.

    Attributes:
        message: Human-readable error message describing what went wrong.

    Example:
        ```python
        try:
            result = await service.diff(DiffOptions(), context)
        except GitkitError as e:
            logger.error("git_operation_failed", error=e.message)
        ```
    """

    def __init__(self, message: str) -> None:
        """Initialize the GitkitError.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)
