"""Contract interfaces for the gateway.

Exports the backend Protocol and the payload/record dataclasses it exchanges.
The gateway codes against these contracts, not a concrete automation client.
"""

from contracts.wechat import (
    AttachMsg,
    AudioMsg,
    Contact,
    DbField,
    DbQuery,
    DbRow,
    DbTable,
    DecPath,
    ForwardMsg,
    MemberMgmt,
    PatMsg,
    PathMsg,
    RichText,
    RoomMember,
    TextMsg,
    Transfer,
    UserInfo,
    Verification,
    WeChatBackend,
)

__all__ = [
    "AttachMsg",
    "AudioMsg",
    "Contact",
    "DbField",
    "DbQuery",
    "DbRow",
    "DbTable",
    "DecPath",
    "ForwardMsg",
    "MemberMgmt",
    "PatMsg",
    "PathMsg",
    "RichText",
    "RoomMember",
    "TextMsg",
    "Transfer",
    "UserInfo",
    "Verification",
    "WeChatBackend",
]
