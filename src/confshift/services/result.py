"""ServiceResult and ServiceError: what every service operation returns.

Conversions never raise to the CLI: domain errors are mapped to a
structured ``ServiceError`` with a stable ``code`` so both the Rich and
the ``--json`` renderings can report them.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# Stable error codes.
UNSUPPORTED_FORMAT = "UNSUPPORTED_FORMAT"
UNSUPPORTED_PAIR = "UNSUPPORTED_PAIR"
KEY_COLLISION = "KEY_COLLISION"
INVALID_FORMAT = "INVALID_FORMAT"
STATE_WRITE_FAILED = "STATE_WRITE_FAILED"


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Uniform return type for conversion and preference operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"convert_env"``).
        data: Operation-specific payload on success. Conversions put the
            converted text under ``"output"``.
        warnings: Non-fatal issues, such as duplicate Compose services.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None


def failure(op: str, code: str, message: str, **detail: Any) -> ServiceResult:
    """Build a failed ServiceResult in one call."""
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=detail),
    )
