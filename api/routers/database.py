"""Raw SQL endpoint.

Rows from the backend carry type-tagged raw bytes; they are marshaled into
plain JSON objects before leaving the gateway.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends

from api.dependencies import get_backend_guard
from api.routers.registry import ROUTE_ERROR_RESPONSES
from api.schemas import ApiResponse, DbQueryRequest
from wcfgate.backend import BackendGuard
from wcfgate.errors import BackendError
from wcfgate.marshal import marshal_rows

logger = logging.getLogger(__name__)

router = APIRouter(tags=["database"])


@router.post(
    "/sql",
    response_model=ApiResponse[list[dict[str, Any]]],
    summary="Execute SQL",
    responses={
        200: {
            "description": "Rows keyed by column name",
            "content": {
                "application/json": {
                    "example": {
                        "status": 0,
                        "error": None,
                        "data": [{"UserName": "wxid_abc123", "Type": 3, "Avatar": "AAEC"}],
                    }
                }
            },
        },
        **ROUTE_ERROR_RESPONSES,
    },
)
def execute_sql(
    body: DbQueryRequest,
    guard: BackendGuard = Depends(get_backend_guard),
) -> ApiResponse[list[dict[str, Any]]]:
    """Run a SQL statement against one backend database.

    Values that cannot be parsed according to their column type come back
    as ``null`` rather than failing the query.
    """
    try:
        rows = guard.call("query_sql", body.to_contract())
    except BackendError as e:
        logger.warning("SQL query on %s failed: %s", body.db, e)
        return ApiResponse.fail(f"Execute SQL failed: {e}")

    return ApiResponse.ok(marshal_rows(rows or []))
