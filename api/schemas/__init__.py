"""Pydantic schemas for API requests and responses.

Request models convert to ``contracts.wechat`` payloads; record schemas
mirror the backend dataclasses for OpenAPI documentation. Everything is
re-exported here:
    from api.schemas import ApiResponse, TextMessageRequest
"""

from __future__ import annotations

from api.schemas.attachments import MAX_TIMEOUT, SaveFileRequest, SaveImageRequest
from api.schemas.contacts import (
    ContactSchema,
    MemberMgmtRequest,
    RoomMemberSchema,
    UserInfoSchema,
    VerificationRequest,
)
from api.schemas.database import DbQueryRequest, DbTableSchema
from api.schemas.envelope import STATUS_FAILED, STATUS_OK, ApiResponse
from api.schemas.messages import (
    U64_MAX,
    AudioRequest,
    ForwardRequest,
    MessageId,
    PathMessageRequest,
    PatRequest,
    RichTextRequest,
    TextMessageRequest,
    TransferRequest,
)
from api.schemas.system import ErrorResponse

__all__ = [
    # Envelope
    "ApiResponse",
    "STATUS_OK",
    "STATUS_FAILED",
    "ErrorResponse",
    # Messaging
    "U64_MAX",
    "MessageId",
    "TextMessageRequest",
    "PathMessageRequest",
    "RichTextRequest",
    "PatRequest",
    "ForwardRequest",
    "AudioRequest",
    "TransferRequest",
    # Contacts and chatrooms
    "UserInfoSchema",
    "ContactSchema",
    "RoomMemberSchema",
    "VerificationRequest",
    "MemberMgmtRequest",
    # Database
    "DbTableSchema",
    "DbQueryRequest",
    # Attachments
    "MAX_TIMEOUT",
    "SaveImageRequest",
    "SaveFileRequest",
]
