"""Per-call operation context supplied by the caller."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

__all__ = ["OperationContext"]


@dataclass(frozen=True, slots=True)
class OperationContext:
    """Where and on whose behalf an operation runs.

    Attributes:
        working_directory: Absolute path git is run in.
        request_context: Opaque correlation metadata. Passed through
            unchanged; only ``request_id`` is read, for log correlation.
        tenant_id: Identifier of the tenant issuing the request.
    """

    working_directory: Path
    request_context: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({})
    )
    tenant_id: str = ""

    def __post_init__(self) -> None:
        if not self.working_directory.is_absolute():
            raise ValueError(
                f"working_directory must be absolute: {self.working_directory}"
            )

    @property
    def request_id(self) -> str | None:
        value = self.request_context.get("request_id")
        return str(value) if value is not None else None

    def log_fields(self) -> dict[str, str]:
        """Key/value pairs bound onto every log line for this call."""
        fields = {"tenant_id": self.tenant_id}
        if self.request_id is not None:
            fields["request_id"] = self.request_id
        return fields
