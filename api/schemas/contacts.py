"""Account, contact and chatroom models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from contracts.wechat import MemberMgmt, Verification


class UserInfoSchema(BaseModel):
    """Logged-in account."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "wxid": "wxid_abc123",
                "name": "Alice",
                "mobile": "13800000000",
                "home": "C:/Users/alice/Documents/WeChat Files/",
            }
        },
    )

    wxid: str
    name: str
    mobile: str
    home: str = Field(..., description="WeChat data directory of this account")


class ContactSchema(BaseModel):
    """One contact entry (friend, chatroom, official account...)."""

    model_config = ConfigDict(from_attributes=True)

    wxid: str
    code: str = Field(default="", description="Custom WeChat id")
    remark: str = ""
    name: str = ""
    country: str = ""
    province: str = ""
    city: str = ""
    gender: int = Field(default=0, description="0 unknown, 1 male, 2 female")


class RoomMemberSchema(BaseModel):
    """Chatroom member.

    Example:
        ```json
        {"wxid": "wxid_abc123", "name": "Alice", "state": 0}
        ```
    """

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={"example": {"wxid": "wxid_abc123", "name": "Alice", "state": 0}},
    )

    wxid: str
    name: str = Field(..., description="Display name inside the chatroom")
    state: int = Field(default=0, description="Membership state flag")


class VerificationRequest(BaseModel):
    """Accept a friend request using the tokens from its notification."""

    v3: str = Field(..., description="Encrypted user name from the request")
    v4: str = Field(..., description="Ticket from the request")
    scene: int = Field(default=30, description="Request source scene")

    def to_contract(self) -> Verification:
        return Verification(v3=self.v3, v4=self.v4, scene=self.scene)


class MemberMgmtRequest(BaseModel):
    """Add, invite or remove chatroom members.

    Example:
        ```json
        {"roomid": "123@chatroom", "wxids": "wxid_a,wxid_b"}
        ```
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"roomid": "123@chatroom", "wxids": "wxid_a,wxid_b"}}
    )

    roomid: str = Field(..., description="Chatroom id")
    wxids: str = Field(..., description="Comma-separated wxids")

    def to_contract(self) -> MemberMgmt:
        return MemberMgmt(roomid=self.roomid, wxids=self.wxids)
