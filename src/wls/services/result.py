"""ServiceResult and ServiceError — the listing service contract.

INVARIANT: All service-layer methods return ServiceResult. Domain errors
are converted to a ServiceError with one of the :class:`ErrorCode` values;
the CLI maps a failed result to stderr and exit code 1.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    """Failure codes a listing can report."""

    NO_SUCH_DIRECTORY = "NO_SUCH_DIRECTORY"
    NOT_A_DIRECTORY = "NOT_A_DIRECTORY"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    READ_FAILED = "READ_FAILED"
    MANIFEST_PARSE_ERROR = "MANIFEST_PARSE_ERROR"


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Return type for listing operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (``"list"`` or ``"list_tree"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues, e.g. an unreadable manifest.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (counts, tree root).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        code: ErrorCode,
        message: str,
        **detail: Any,
    ) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))
