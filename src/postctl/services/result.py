"""ServiceResult and ServiceError: what every service method returns.

Services never raise for expected failures (missing document, bad
argument, lint errors under ``--strict``). They return a result with
``ok=False`` and a stable :class:`ErrorCode`; the CLI decides exit codes.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    """Stable machine-readable error codes, as emitted in ``--json`` output."""

    NOT_FOUND = "NOT_FOUND"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    INVALID_CONFIG = "INVALID_CONFIG"
    MALFORMED_FRONTMATTER = "MALFORMED_FRONTMATTER"
    UNREADABLE_FILE = "UNREADABLE_FILE"
    LINT_FAILED = "LINT_FAILED"


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name; selects the renderer (``"check"``, ``"get"``...).
        data: Operation payload. Failed lint runs still carry their issues.
        warnings: Documents skipped or left untouched, one line each.
        error: Set when ``ok`` is False.
        meta: Optional extra information shown in verbose output.
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
        *,
        data: dict[str, Any] | None = None,
        **detail: Any,
    ) -> ServiceResult:
        """Build a failed result; extra keyword arguments become ``error.detail``."""
        return cls(
            ok=False,
            op=op,
            data=data or {},
            error=ServiceError(code=str(code), message=message, detail=detail),
        )
