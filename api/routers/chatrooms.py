"""Chatroom member lookup."""

import logging

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_backend_guard
from api.routers.registry import ROUTE_ERROR_RESPONSES
from api.schemas import ApiResponse, RoomMemberSchema
from contracts.wechat import RoomMember
from wcfgate.backend import BackendGuard
from wcfgate.errors import BackendError, ErrorCode, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chatrooms"])


def parse_wxid_filter(wxids: str | None) -> list[str]:
    """Split a comma-separated wxid filter, dropping blank items."""
    if not wxids:
        return []
    return [item.strip() for item in wxids.split(",") if item.strip()]


def filter_members(members: list[RoomMember] | None, wanted: list[str]) -> list[RoomMember]:
    """Keep members whose wxid is in ``wanted``, in backend order.

    An empty ``wanted`` keeps everyone; a missing member list is empty.
    """
    if not members:
        return []
    if not wanted:
        return list(members)
    keep = set(wanted)
    return [member for member in members if member.wxid in keep]


@router.get(
    "/query-room-member",
    response_model=ApiResponse[list[RoomMemberSchema]],
    summary="Query chatroom members",
    responses=ROUTE_ERROR_RESPONSES,
)
def query_room_member(
    roomid: str | None = Query(
        default=None,
        description="Chatroom id",
        examples=["123@chatroom"],
    ),
    room_id: str | None = Query(
        default=None,
        description="Legacy name for roomid",
    ),
    wxids: str | None = Query(
        default=None,
        description="Comma-separated wxids to keep; all members when empty",
        examples=["wxid_a,wxid_b"],
    ),
    guard: BackendGuard = Depends(get_backend_guard),
) -> ApiResponse[list[RoomMemberSchema]]:
    """List members of a chatroom, optionally filtered by wxid."""
    room = roomid if roomid is not None else room_id
    if room is None:
        raise ValidationError(
            "Missing required query parameter: roomid",
            field="roomid",
            code=ErrorCode.VAL_MISSING_REQUIRED,
        )

    try:
        members = guard.call("list_group_members", room)
    except BackendError as e:
        logger.warning("Member lookup for %s failed: %s", room, e)
        return ApiResponse.fail(f"Query chatroom members failed: {e}")

    return ApiResponse.ok(filter_members(members, parse_wxid_filter(wxids)))
