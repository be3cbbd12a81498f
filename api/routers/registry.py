"""Declarative route table for pass-through endpoints.

Most endpoints do the same thing: parse one input, make one backend call
under the guard and wrap the result in the envelope. Instead of writing a
handler per endpoint, each is described by a ``RouteSpec`` and
``build_router`` generates the FastAPI handler from it.

Usage:
    ROUTES = [
        RouteSpec("GET", "/islogin", "is_login", "Check login status",
                  response_model=ApiResponse[bool]),
        RouteSpec("POST", "/text", "send_text", "Send text message",
                  binding=json_body(TextMessageRequest)),
    ]
    router = build_router(ROUTES, tags=["wechat"])

Input validation happens in FastAPI before the handler runs, so a parse
failure never reaches the backend.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Path, Query

from api.dependencies import get_backend_guard
from api.schemas import ApiResponse, ErrorResponse
from wcfgate.backend import BackendGuard
from wcfgate.errors import BackendError

logger = logging.getLogger(__name__)

GUARD_PARAM = "guard"

# Shared OpenAPI entries for the transport-level failures every route can hit
ROUTE_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"description": "Malformed input; the backend is not called", "model": ErrorResponse},
    429: {"description": "Rate limit exceeded", "model": ErrorResponse},
}


def _identity(value: Any) -> Any:
    return value


def _to_contract(value: Any) -> Any:
    return value.to_contract()


@dataclass(frozen=True)
class Binding:
    """Where a route's single input comes from and how it reaches the backend.

    Attributes:
        name: Parameter name (the path segment or query key for those sources).
        annotation: ``Annotated`` type FastAPI parses and validates.
        convert: Maps the parsed value to the backend argument.
    """

    name: str
    annotation: Any
    convert: Callable[[Any], Any] = _identity

    def parameter(self) -> inspect.Parameter:
        return inspect.Parameter(
            self.name, inspect.Parameter.KEYWORD_ONLY, annotation=self.annotation
        )


def path_param(name: str, annotation: type, description: str | None = None) -> Binding:
    """Bind a typed path segment, e.g. ``/{db}/tables``."""
    return Binding(name, Annotated[annotation, Path(description=description)])


def query_param(
    name: str, annotation: type, description: str | None = None, **constraints: Any
) -> Binding:
    """Bind a required typed query parameter, e.g. ``/pyq?id=``."""
    return Binding(name, Annotated[annotation, Query(description=description, **constraints)])


def json_body(model: type) -> Binding:
    """Bind a JSON request body validated by ``model``.

    The parsed model is converted with ``model.to_contract()``.
    """
    return Binding("body", Annotated[model, Body()], _to_contract)


@dataclass(frozen=True)
class RouteSpec:
    """One pass-through endpoint.

    Attributes:
        method: HTTP method.
        path: URL path, FastAPI syntax.
        operation: Backend method name called with the bound input.
        description: Human-readable operation name; failure messages read
            ``"<description> failed: <reason>"``.
        binding: Input binding, or None for endpoints without input.
        response_model: Envelope type documented in OpenAPI.
    """

    method: str
    path: str
    operation: str
    description: str
    binding: Binding | None = None
    response_model: Any = ApiResponse[Any]
    tags: list[str] = field(default_factory=list)


def invoke_backend(
    guard: BackendGuard, operation: str, description: str, *args: Any
) -> ApiResponse[Any]:
    """Make one guarded backend call and wrap the outcome in the envelope.

    Backend failures become ``status=1`` envelopes; they are never raised
    to FastAPI.
    """
    try:
        result = guard.call(operation, *args)
    except BackendError as e:
        logger.warning("%s failed: %s", description, e)
        return ApiResponse.fail(f"{description} failed: {e}")
    if result is None:
        return ApiResponse.fail(f"{description} failed: backend returned no data")
    return ApiResponse.ok(result)


def make_endpoint(spec: RouteSpec) -> Callable[..., ApiResponse[Any]]:
    """Generate the handler for ``spec``.

    The handler's signature is synthesized so FastAPI sees the bound input
    and the guard dependency as ordinary parameters.
    """
    binding = spec.binding

    def endpoint(**kwargs: Any) -> ApiResponse[Any]:
        guard: BackendGuard = kwargs.pop(GUARD_PARAM)
        args = () if binding is None else (binding.convert(kwargs[binding.name]),)
        return invoke_backend(guard, spec.operation, spec.description, *args)

    parameters = [] if binding is None else [binding.parameter()]
    parameters.append(
        inspect.Parameter(
            GUARD_PARAM,
            inspect.Parameter.KEYWORD_ONLY,
            annotation=Annotated[BackendGuard, Depends(get_backend_guard)],
        )
    )
    endpoint.__signature__ = inspect.Signature(parameters)  # type: ignore[attr-defined]
    endpoint.__name__ = spec.operation
    endpoint.__doc__ = spec.description
    return endpoint


def build_router(routes: Sequence[RouteSpec], tags: list[str] | None = None) -> APIRouter:
    """Build an APIRouter with one generated handler per RouteSpec."""
    router = APIRouter(tags=tags)
    for spec in routes:
        router.add_api_route(
            spec.path,
            make_endpoint(spec),
            methods=[spec.method],
            response_model=spec.response_model,
            summary=spec.description,
            tags=spec.tags or None,
            responses=ROUTE_ERROR_RESPONSES,
        )
    return router
