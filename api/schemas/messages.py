"""Outbound messaging request models.

Request bodies for the send/forward/voice/transfer endpoints. Each model
converts to the matching ``contracts.wechat`` payload via ``to_contract()``.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from contracts.wechat import AudioMsg, ForwardMsg, PatMsg, PathMsg, RichText, TextMsg, Transfer

U64_MAX = 2**64 - 1

# Message ids are unsigned 64-bit on the backend side
MessageId = Annotated[int, Field(ge=0, le=U64_MAX, description="Message id", examples=[1234567890])]


class TextMessageRequest(BaseModel):
    """Send a text message.

    Example:
        ```json
        {"msg": "hello @Alice", "receiver": "123@chatroom", "aters": "wxid_alice"}
        ```
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"msg": "hello @Alice", "receiver": "123@chatroom", "aters": "wxid_alice"}
        }
    )

    msg: str = Field(..., description="Message text", examples=["hello"])
    receiver: str = Field(
        ...,
        description="wxid or chatroom id",
        examples=["wxid_abc123", "123@chatroom"],
    )
    aters: str = Field(
        default="",
        description="Comma-separated wxids to mention; chatrooms only",
    )

    def to_contract(self) -> TextMsg:
        return TextMsg(msg=self.msg, receiver=self.receiver, aters=self.aters)


class PathMessageRequest(BaseModel):
    """Send an image or a file by local path.

    For images, ``path`` may also be an http(s) URL, or ``base64`` may carry
    the image bytes; the gateway stages either as a local file first.

    Example:
        ```json
        {"path": "C:/Users/me/Pictures/cat.png", "receiver": "wxid_abc123"}
        ```
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"path": "C:/Users/me/Pictures/cat.png", "receiver": "wxid_abc123"}
        }
    )

    path: str = Field(
        ...,
        description="Local path, or http(s) URL for images",
        examples=["C:/Users/me/Pictures/cat.png", "https://example.com/cat.jpg"],
    )
    receiver: str = Field(..., description="wxid or chatroom id")
    base64: str = Field(
        default="",
        description="Base64 image data; takes precedence over path for images",
    )

    def to_contract(self) -> PathMsg:
        return PathMsg(path=self.path, receiver=self.receiver)


class RichTextRequest(BaseModel):
    """Send a rich card (link with title, digest and thumbnail)."""

    name: str = Field(..., description="Card source name shown at the bottom")
    account: str = Field(..., description="Official account id the card links to")
    title: str = Field(..., description="Card title")
    digest: str = Field(..., description="Card summary text")
    url: str = Field(..., description="Link opened when the card is tapped")
    thumburl: str = Field(..., description="Thumbnail image URL")
    receiver: str = Field(..., description="wxid or chatroom id")

    def to_contract(self) -> RichText:
        return RichText(
            name=self.name,
            account=self.account,
            title=self.title,
            digest=self.digest,
            url=self.url,
            thumburl=self.thumburl,
            receiver=self.receiver,
        )


class PatRequest(BaseModel):
    """Pat a chatroom member."""

    roomid: str = Field(..., description="Chatroom id", examples=["123@chatroom"])
    wxid: str = Field(..., description="Member to pat")

    def to_contract(self) -> PatMsg:
        return PatMsg(roomid=self.roomid, wxid=self.wxid)


class ForwardRequest(BaseModel):
    """Forward an existing message to another receiver."""

    id: MessageId
    receiver: str = Field(..., description="wxid or chatroom id")

    def to_contract(self) -> ForwardMsg:
        return ForwardMsg(id=self.id, receiver=self.receiver)


class AudioRequest(BaseModel):
    """Save a voice message as a file in ``dir``."""

    id: MessageId
    dir: str = Field(..., description="Directory to write the audio file into")

    def to_contract(self) -> AudioMsg:
        return AudioMsg(id=self.id, dir=self.dir)


class TransferRequest(BaseModel):
    """Accept an incoming transfer."""

    wxid: str = Field(..., description="Sender wxid")
    tfid: str = Field(..., description="Transfer id")
    taid: str = Field(..., description="Transaction id")

    def to_contract(self) -> Transfer:
        return Transfer(wxid=self.wxid, tfid=self.tfid, taid=self.taid)
