"""Rate limiting for the gateway API.

Uses slowapi with one default limit applied to every route. A limiter is
built per application from ``RateLimitConfig`` so separate apps (tests, for
instance) never share counters.

Usage:
    from api.ratelimit import create_limiter

    app.state.limiter = create_limiter(config.rate_limit)
"""

from __future__ import annotations

import logging

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address as _get_remote_address

from wcfgate.config import RateLimitConfig

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER_SECONDS = 60


def get_remote_address(request: Request) -> str:
    """Get client identifier for rate limiting.

    Local clients share one address, so the user-agent is mixed in to tell
    them apart.

    Args:
        request: The FastAPI request object.

    Returns:
        String identifier for the client.
    """
    ip = _get_remote_address(request) or "unknown"

    if ip in ("127.0.0.1", "localhost", "::1", "testclient"):
        user_agent = request.headers.get("user-agent", "unknown")
        return f"{ip}:{hash(user_agent) % 10000}"

    return ip


def create_limiter(config: RateLimitConfig) -> Limiter:
    """Create a limiter applying ``config.default_limit`` to every route."""
    return Limiter(
        key_func=get_remote_address,
        default_limits=[config.default_limit],
        enabled=config.enabled,
    )


def _retry_after_seconds(exc: RateLimitExceeded) -> int:
    # Detail format: "10 per 1 minute"
    parts = str(exc.detail or "").split()
    if len(parts) >= 4 and parts[2].isdigit() and parts[3].startswith("second"):
        return int(parts[2])
    return DEFAULT_RETRY_AFTER_SECONDS


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """Handle rate limit exceeded errors with proper 429 response.

    Args:
        request: The FastAPI request object.
        exc: The rate limit exception.

    Returns:
        JSON response with 429 status and retry-after header.
    """
    retry_after = _retry_after_seconds(exc)

    logger.warning(
        "Rate limit exceeded for %s %s from %s",
        request.method,
        request.url.path,
        get_remote_address(request),
    )

    response_body = {
        "error": "RateLimitExceeded",
        "code": "RATE_LIMIT_EXCEEDED",
        "detail": "Too many requests. Please slow down.",
        "details": {"retry_after_seconds": retry_after},
    }

    return JSONResponse(
        status_code=429,
        content=response_body,
        headers={"Retry-After": str(retry_after)},
    )


__all__ = [
    "create_limiter",
    "get_remote_address",
    "rate_limit_exceeded_handler",
]
