"""Pass-through WeChat endpoints.

Every route here makes exactly one backend call; see ``registry`` for how
the handlers are generated. Orchestrating endpoints (image send, SQL,
chatroom members, attachments) live in their own routers.
"""

from __future__ import annotations

from api.routers.registry import RouteSpec, build_router, json_body, path_param, query_param
from api.schemas import (
    U64_MAX,
    ApiResponse,
    AudioRequest,
    ContactSchema,
    DbTableSchema,
    ForwardRequest,
    MemberMgmtRequest,
    PathMessageRequest,
    PatRequest,
    RichTextRequest,
    TextMessageRequest,
    TransferRequest,
    UserInfoSchema,
    VerificationRequest,
)

ROUTES: list[RouteSpec] = [
    # Session and account
    RouteSpec(
        "GET", "/qrcode", "refresh_qrcode", "Get login QR code",
        response_model=ApiResponse[str], tags=["account"],
    ),
    RouteSpec(
        "GET", "/islogin", "is_login", "Check login status",
        response_model=ApiResponse[bool], tags=["account"],
    ),
    RouteSpec(
        "GET", "/selfwxid", "get_self_id", "Get own wxid",
        response_model=ApiResponse[str], tags=["account"],
    ),
    RouteSpec(
        "GET", "/userinfo", "get_user_info", "Get user info",
        response_model=ApiResponse[UserInfoSchema], tags=["account"],
    ),
    RouteSpec(
        "GET", "/contacts", "get_contacts", "Get contacts",
        response_model=ApiResponse[list[ContactSchema]], tags=["contacts"],
    ),
    # Databases
    RouteSpec(
        "GET", "/dbs", "list_databases", "List databases",
        response_model=ApiResponse[list[str]], tags=["database"],
    ),
    RouteSpec(
        "GET", "/{db}/tables", "list_tables", "List tables",
        binding=path_param("db", str, "Database name from GET /dbs"),
        response_model=ApiResponse[list[DbTableSchema]], tags=["database"],
    ),
    RouteSpec(
        "GET", "/msg-types", "get_msg_types", "Get message types",
        response_model=ApiResponse[dict[int, str]], tags=["database"],
    ),
    RouteSpec(
        "GET", "/pyq", "refresh_moments", "Refresh moments",
        binding=query_param("id", int, "Start id, 0 for latest", ge=0, le=U64_MAX),
        response_model=ApiResponse[bool], tags=["moments"],
    ),
    # Messaging
    RouteSpec(
        "POST", "/text", "send_text", "Send text message",
        binding=json_body(TextMessageRequest),
        response_model=ApiResponse[bool], tags=["messaging"],
    ),
    RouteSpec(
        "POST", "/file", "send_file", "Send file",
        binding=json_body(PathMessageRequest),
        response_model=ApiResponse[bool], tags=["messaging"],
    ),
    RouteSpec(
        "POST", "/rich-text", "send_rich_card", "Send rich text card",
        binding=json_body(RichTextRequest),
        response_model=ApiResponse[bool], tags=["messaging"],
    ),
    RouteSpec(
        "POST", "/pat", "send_pat", "Send pat",
        binding=json_body(PatRequest),
        response_model=ApiResponse[bool], tags=["messaging"],
    ),
    RouteSpec(
        "POST", "/forward-msg", "forward_message", "Forward message",
        binding=json_body(ForwardRequest),
        response_model=ApiResponse[bool], tags=["messaging"],
    ),
    RouteSpec(
        "POST", "/revoke-msg", "revoke_message", "Revoke message",
        binding=query_param("id", int, "Message id", ge=0, le=U64_MAX),
        response_model=ApiResponse[bool], tags=["messaging"],
    ),
    RouteSpec(
        "POST", "/audio", "save_voice", "Save voice message",
        binding=json_body(AudioRequest),
        response_model=ApiResponse[str], tags=["attachments"],
    ),
    RouteSpec(
        "POST", "/receive-transfer", "receive_transfer", "Receive transfer",
        binding=json_body(TransferRequest),
        response_model=ApiResponse[bool], tags=["messaging"],
    ),
    # Friends and chatrooms
    RouteSpec(
        "POST", "/accept-new-friend", "accept_friend_request", "Accept friend request",
        binding=json_body(VerificationRequest),
        response_model=ApiResponse[bool], tags=["contacts"],
    ),
    RouteSpec(
        "POST", "/add-chatroom-member", "add_group_members", "Add chatroom members",
        binding=json_body(MemberMgmtRequest),
        response_model=ApiResponse[bool], tags=["chatrooms"],
    ),
    RouteSpec(
        "POST", "/invite-chatroom-member", "invite_group_members", "Invite chatroom members",
        binding=json_body(MemberMgmtRequest),
        response_model=ApiResponse[bool], tags=["chatrooms"],
    ),
    RouteSpec(
        "POST", "/delete-chatroom-member", "remove_group_members", "Remove chatroom members",
        binding=json_body(MemberMgmtRequest),
        response_model=ApiResponse[bool], tags=["chatrooms"],
    ),
]


router = build_router(ROUTES)
