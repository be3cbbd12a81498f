"""Attachment retrieval request models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from api.schemas.messages import MessageId
from wcfgate.attachments import AttachmentDescriptor

MAX_TIMEOUT = 255


class SaveImageRequest(BaseModel):
    """Download a chat image and decrypt it into ``dir``.

    ``timeout`` is the number of one-second decrypt polls to wait for.

    Example:
        ```json
        {"id": 1234567890, "extra": "C:/.../Image/2024-01/abc.dat", "dir": "C:/out", "timeout": 10}
        ```
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1234567890,
                "extra": "C:/Users/me/Documents/WeChat Files/wxid/FileStorage/Image/abc.dat",
                "dir": "C:/out",
                "timeout": 10,
            }
        }
    )

    id: MessageId
    extra: str = Field(..., description="Attachment locator from the message")
    dir: str = Field(..., description="Directory to decrypt the image into")
    timeout: int = Field(default=10, ge=0, le=MAX_TIMEOUT, description="Poll attempts")

    def descriptor(self) -> AttachmentDescriptor:
        return AttachmentDescriptor(message_id=self.id, locator=self.extra)


class SaveFileRequest(BaseModel):
    """Download a file attachment; ``extra`` is where it lands."""

    id: MessageId
    extra: str = Field(..., description="Attachment locator, also the local file path")
    thumb: str = Field(default="", description="Thumbnail reference from the message")

    def descriptor(self) -> AttachmentDescriptor:
        return AttachmentDescriptor(message_id=self.id, locator=self.extra, thumbnail=self.thumb)
