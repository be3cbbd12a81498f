"""FastAPI application for the WeChat gateway.

Exposes one logged-in WeChat session, driven by an automation backend, as a
local REST API.

Usage:
    from api.main import create_app

    app = create_app(backend, config)
    uvicorn.run(app, host=config.server.host, port=config.server.port)

    # Or via the CLI
    wcfgate serve --backend mypkg.wcf:connect

Documentation:
    - Swagger UI: http://localhost:10010/swagger
    - OpenAPI JSON: http://localhost:10010/api-doc.json
"""

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from api.errors import register_exception_handlers
from api.ratelimit import create_limiter, rate_limit_exceeded_handler
from contracts.wechat import WeChatBackend
from wcfgate import __version__
from wcfgate.attachments import AttachmentPipeline
from wcfgate.backend import BackendGuard
from wcfgate.config import GatewayConfig, get_config
from wcfgate.images import ImageStager

logger = logging.getLogger(__name__)

# API metadata for OpenAPI documentation
API_TITLE = "WCF Gateway API"
API_VERSION = __version__
API_DESCRIPTION = """
# WCF Gateway

REST access to a logged-in WeChat session through its automation backend.

## Responses

Every JSON endpoint answers HTTP 200 with an envelope:
`{"status": 0, "error": null, "data": ...}` on success and
`{"status": 1, "error": "...", "data": null}` on failure.
Malformed input is rejected with HTTP 400 before the backend is called.

`/download-image` and `/download-file` stream raw bytes instead and report
failures as HTTP 500 with a plain-text body.

## Concurrency

The backend handles one call at a time; concurrent requests queue on it.

## Authentication

None. Bind to localhost only.
"""

API_TAGS_METADATA = [
    {"name": "account", "description": "Login state and the logged-in account."},
    {"name": "contacts", "description": "Contacts and friend requests."},
    {"name": "database", "description": "Backend databases and raw SQL."},
    {"name": "moments", "description": "Moments feed."},
    {"name": "messaging", "description": "Sending, forwarding and revoking messages."},
    {"name": "chatrooms", "description": "Chatroom membership."},
    {"name": "attachments", "description": "Saving and streaming message attachments."},
]


@asynccontextmanager
async def lifespan(app_instance: FastAPI) -> AsyncIterator[None]:
    """Lifecycle event handler for the FastAPI application."""
    logger.info("Gateway API started (version %s)", API_VERSION)
    yield
    logger.info("Gateway API stopped")


def _configure_middleware(app_instance: FastAPI, config: GatewayConfig) -> None:
    """Configure middleware for the FastAPI application."""
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app_instance.add_middleware(SlowAPIMiddleware)

    @app_instance.middleware("http")
    async def response_time_middleware(request: Request, call_next):  # type: ignore[no-untyped-def]
        start_time = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start_time
        response.headers["X-Response-Time"] = f"{duration:.4f}s"
        return response


def _register_routers(app_instance: FastAPI) -> None:
    """Register API routers."""
    from api.routers.attachments import router as attachments_router
    from api.routers.chatrooms import router as chatrooms_router
    from api.routers.database import router as database_router
    from api.routers.messaging import router as messaging_router
    from api.routers.wechat import router as wechat_router

    app_instance.include_router(wechat_router)
    app_instance.include_router(messaging_router)
    app_instance.include_router(database_router)
    app_instance.include_router(chatrooms_router)
    app_instance.include_router(attachments_router)


def create_app(backend: WeChatBackend, config: GatewayConfig | None = None) -> FastAPI:
    """Application factory.

    Args:
        backend: Connected backend capability. The app borrows it for its
            whole lifetime and never closes it.
        config: Gateway configuration; the global config when omitted.

    Returns:
        Configured FastAPI instance.
    """
    config = config or get_config()

    app_instance = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=API_VERSION,
        docs_url="/swagger",
        redoc_url=None,
        openapi_url="/api-doc.json",
        openapi_tags=API_TAGS_METADATA,
        lifespan=lifespan,
    )

    guard = BackendGuard(backend)
    app_instance.state.config = config
    app_instance.state.guard = guard
    app_instance.state.pipeline = AttachmentPipeline(
        guard, poll_interval=config.attachments.poll_interval_seconds
    )
    app_instance.state.image_stager = ImageStager(
        config.attachments.image_dir,
        fetch_timeout=config.attachments.download_timeout_seconds,
    )

    app_instance.state.limiter = create_limiter(config.rate_limit)
    app_instance.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)  # type: ignore[arg-type]
    _configure_middleware(app_instance, config)
    _register_routers(app_instance)
    register_exception_handlers(app_instance)

    return app_instance
