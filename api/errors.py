"""FastAPI exception handlers for gateway errors.

Backend and pipeline failures normally travel inside the response envelope
with HTTP 200. The handlers here cover what never reaches the envelope:
malformed input, and gateway errors that escape a handler.

Response Format:
    {
        "error": "ErrorClassName",
        "code": "ERROR_CODE",
        "detail": "Human-readable error message",
        "details": {...}  # Optional additional context
    }

Usage:
    from api.errors import register_exception_handlers

    app = FastAPI()
    register_exception_handlers(app)
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from wcfgate.errors import (
    AttachmentError,
    BackendError,
    BackendUnavailableError,
    ConfigurationError,
    ErrorCode,
    GatewayError,
    ImageStagingError,
    ValidationError,
)

logger = logging.getLogger(__name__)


# HTTP status code mapping for error types, most specific first
ERROR_STATUS_CODES: dict[type[GatewayError], int] = {
    ValidationError: 400,
    ConfigurationError: 500,
    BackendUnavailableError: 503,
    BackendError: 502,
    AttachmentError: 500,
    ImageStagingError: 500,
    GatewayError: 500,
}

# Map specific error codes to HTTP status codes (overrides class-based mapping).
# Attachment and staging failures are answered inside their routers and never
# reach this table, so they take the class-based status.
ERROR_CODE_STATUS_CODES: dict[ErrorCode, int] = {
    ErrorCode.VAL_INVALID_INPUT: 400,
    ErrorCode.VAL_MISSING_REQUIRED: 400,
}


def get_status_code_for_error(error: GatewayError) -> int:
    """Determine the appropriate HTTP status code for an error.

    First checks if the error's code has a specific status mapping,
    then falls back to the error class hierarchy.

    Args:
        error: The gateway error instance.

    Returns:
        HTTP status code (400-599).
    """
    if error.code in ERROR_CODE_STATUS_CODES:
        return ERROR_CODE_STATUS_CODES[error.code]

    for error_class, status_code in ERROR_STATUS_CODES.items():
        if isinstance(error, error_class):
            return status_code

    return 500


def build_error_response(error: GatewayError) -> dict[str, Any]:
    """Build a standardized error response dictionary."""
    return error.to_dict()


def _describe_validation_errors(errors: list[dict[str, Any]]) -> str:
    parts = []
    for err in errors:
        location = ".".join(str(part) for part in err.get("loc", ()))
        parts.append(f"{location}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)


async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    """Handle GatewayError and subclasses that escaped an endpoint.

    Args:
        request: The FastAPI request object.
        exc: The gateway error that was raised.

    Returns:
        JSONResponse with appropriate status code and error body.
    """
    status_code = get_status_code_for_error(exc)
    response_body = build_error_response(exc)

    if status_code >= 500:
        logger.error(
            "Server error: %s (code=%s, status=%d)",
            exc.message,
            exc.code.value,
            status_code,
            exc_info=exc.cause if exc.cause else exc,
        )
    else:
        logger.warning(
            "Client error: %s (code=%s, status=%d)",
            exc.message,
            exc.code.value,
            status_code,
        )

    return JSONResponse(status_code=status_code, content=jsonable_encoder(response_body))


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Handle ValidationError raised by endpoints with a 400 response."""
    logger.debug(
        "Validation error on %s %s: %s",
        request.method,
        request.url.path,
        exc.message,
    )
    return JSONResponse(status_code=400, content=jsonable_encoder(build_error_response(exc)))


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle FastAPI request parsing failures.

    Malformed path, query or body input is rejected with 400 before the
    endpoint (and so the backend) runs.
    """
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
    logger.debug(
        "Rejected %s %s: %s",
        request.method,
        request.url.path,
        _describe_validation_errors(errors),
    )
    response_body = {
        "error": "ValidationError",
        "code": ErrorCode.VAL_INVALID_INPUT.value,
        "detail": f"Invalid request: {_describe_validation_errors(errors)}",
        "details": {"errors": errors},
    }
    return JSONResponse(status_code=400, content=jsonable_encoder(response_body))


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions with a generic error response.

    Logs the full exception and returns a safe error message.
    """
    logger.exception(
        "Unexpected error handling %s %s: %s",
        request.method,
        request.url.path,
        str(exc),
    )
    response_body = {
        "error": "InternalError",
        "code": "INTERNAL_ERROR",
        "detail": "An unexpected error occurred. Please try again later.",
    }
    return JSONResponse(status_code=500, content=response_body)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all gateway exception handlers with a FastAPI app.

    Args:
        app: The FastAPI application instance.
    """
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(ValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(GatewayError, gateway_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.debug("Registered gateway exception handlers")


__all__ = [
    "register_exception_handlers",
    "gateway_error_handler",
    "validation_error_handler",
    "request_validation_error_handler",
    "generic_exception_handler",
    "get_status_code_for_error",
    "build_error_response",
    "ERROR_STATUS_CODES",
    "ERROR_CODE_STATUS_CODES",
]
