"""Transport-level error model.

Used only when a request never reaches the envelope: malformed input (400),
rate limiting (429) and unexpected gateway faults.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Standardized error response model.

    Attributes:
        error: The exception class name (e.g., "ValidationError").
        code: Machine-readable error code (e.g., "VAL_INVALID_INPUT").
        detail: Human-readable error message describing what went wrong.
        details: Optional additional context (field names, limits, etc.).

    Example Response (400 Bad Request):
        {
            "error": "ValidationError",
            "code": "VAL_INVALID_INPUT",
            "detail": "Invalid request: body.receiver: Field required",
            "details": {"errors": [{"loc": ["body", "receiver"], "msg": "Field required"}]}
        }
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": "ValidationError",
                "code": "VAL_INVALID_INPUT",
                "detail": "Invalid request: query.id: Input should be a valid integer",
            }
        }
    )

    error: str = Field(
        ...,
        description="Error type name",
        examples=["ValidationError", "RateLimitExceeded"],
    )
    code: str = Field(
        ...,
        description="Machine-readable error code",
        examples=["VAL_INVALID_INPUT", "RATE_LIMIT_EXCEEDED"],
    )
    detail: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] | None = Field(
        default=None,
        description="Additional error context",
    )
