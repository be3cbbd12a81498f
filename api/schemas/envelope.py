"""Response envelope shared by every JSON endpoint.

Every JSON endpoint answers HTTP 200 with ``{status, error, data}``; the
operation outcome lives in ``status``, not in the transport status code.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

T = TypeVar("T")

STATUS_OK = 0
STATUS_FAILED = 1


class ApiResponse(BaseModel, Generic[T]):
    """Result wrapper.

    Exactly one of ``error`` / ``data`` is populated: ``data`` when
    ``status`` is 0, ``error`` otherwise. Both keys are always serialized,
    the unused one as ``null``.

    Example:
        ```json
        {"status": 0, "error": null, "data": true}
        {"status": 1, "error": "Send text message failed: not logged in", "data": null}
        ```
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"status": 0, "error": None, "data": True}}
    )

    status: int = Field(
        default=STATUS_OK,
        description="0 on success, non-zero on failure",
        examples=[0, 1],
    )
    error: str | None = Field(
        default=None,
        description="Human-readable failure message, present iff status != 0",
    )
    data: T | None = Field(
        default=None,
        description="Operation result, present iff status == 0",
    )

    @model_validator(mode="after")
    def _exactly_one_of_error_or_data(self) -> ApiResponse[T]:
        if self.status == STATUS_OK:
            if self.error is not None or self.data is None:
                raise ValueError("successful response needs data and no error")
        elif self.error is None or self.data is not None:
            raise ValueError("failed response needs an error and no data")
        return self

    @classmethod
    def ok(cls, data: Any) -> ApiResponse[Any]:
        return cls(status=STATUS_OK, data=data)

    @classmethod
    def fail(cls, error: str, status: int = STATUS_FAILED) -> ApiResponse[Any]:
        return cls(status=status, error=error)
