"""Base error classes and error codes for the gateway.

Contains ErrorCode enum, GatewayError base class, and ConfigurationError.
All gateway-specific exceptions inherit from GatewayError.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standard error codes for gateway errors.

    These codes can be used to programmatically identify error types
    and are included in transport-level API error responses.
    """

    # Configuration errors (CFG_*)
    CFG_INVALID = "CFG_INVALID"
    CFG_MISSING = "CFG_MISSING"
    CFG_FACTORY_FAILED = "CFG_FACTORY_FAILED"

    # Backend errors (BKD_*)
    BKD_CALL_FAILED = "BKD_CALL_FAILED"
    BKD_UNAVAILABLE = "BKD_UNAVAILABLE"

    # Attachment errors (ATT_*)
    ATT_DOWNLOAD_REJECTED = "ATT_DOWNLOAD_REJECTED"
    ATT_TIMEOUT = "ATT_TIMEOUT"
    ATT_READ_FAILED = "ATT_READ_FAILED"

    # Outbound image staging errors (IMG_*)
    IMG_DECODE_FAILED = "IMG_DECODE_FAILED"
    IMG_FETCH_FAILED = "IMG_FETCH_FAILED"
    IMG_WRITE_FAILED = "IMG_WRITE_FAILED"

    # Validation errors (VAL_*)
    VAL_INVALID_INPUT = "VAL_INVALID_INPUT"
    VAL_MISSING_REQUIRED = "VAL_MISSING_REQUIRED"

    # Generic errors
    UNKNOWN = "UNKNOWN"


class GatewayError(Exception):
    """Base exception for all gateway errors.

    Attributes:
        message: Human-readable error message.
        code: Machine-readable error code from ErrorCode enum.
        details: Optional additional context about the error.
        cause: Optional original exception that caused this error.
    """

    default_message: str = "An error occurred"
    default_code: ErrorCode = ErrorCode.UNKNOWN

    def __init__(
        self,
        message: str | None = None,
        *,
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.code = code or self.default_code
        self.details = details or {}
        self.cause = cause

        super().__init__(self.message)

        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        parts = [f"{self.__class__.__name__}({self.message!r}"]
        if self.code != self.default_code:
            parts.append(f", code={self.code.value!r}")
        if self.details:
            parts.append(f", details={self.details!r}")
        if self.cause:
            parts.append(f", cause={self.cause!r}")
        parts.append(")")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for transport-level API responses."""
        result: dict[str, Any] = {
            "error": self.__class__.__name__,
            "code": self.code.value,
            "detail": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class ConfigurationError(GatewayError):
    """Raised for configuration and settings issues."""

    default_message = "Configuration error"
    default_code = ErrorCode.CFG_INVALID

    def __init__(
        self,
        message: str | None = None,
        *,
        config_key: str | None = None,
        config_path: str | None = None,
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        details = details or {}
        if config_key:
            details["config_key"] = config_key
        if config_path:
            details["config_path"] = config_path
        super().__init__(message, code=code, details=details, cause=cause)


class ValidationError(GatewayError):
    """Raised when request input fails validation before any backend call."""

    default_message = "Invalid input"
    default_code = ErrorCode.VAL_INVALID_INPUT

    def __init__(
        self,
        message: str | None = None,
        *,
        field: str | None = None,
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, code=code, details=details, cause=cause)
