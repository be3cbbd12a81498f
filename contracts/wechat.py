"""WeChat automation backend interfaces.

The backend is one logged-in WeChat session driven by an external automation
layer. The gateway never creates or destroys it; it only borrows it under the
guard's lock. Every operation may raise ``wcfgate.errors.BackendError``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

# Request payloads


@dataclass
class TextMsg:
    """Text message.

    Attributes:
        msg: Message text; mentions need a matching ``@name`` in the text.
        receiver: wxid or chatroom id.
        aters: Comma-separated wxids to mention (chatrooms only).
    """

    msg: str
    receiver: str
    aters: str = ""


@dataclass
class PathMsg:
    """Image or file message referencing a local path."""

    path: str
    receiver: str


@dataclass
class RichText:
    """Rich card message."""

    name: str
    account: str
    title: str
    digest: str
    url: str
    thumburl: str
    receiver: str


@dataclass
class PatMsg:
    """Pat a chatroom member."""

    roomid: str
    wxid: str


@dataclass
class ForwardMsg:
    """Forward an existing message."""

    id: int
    receiver: str


@dataclass
class AudioMsg:
    """Save a voice message to ``dir``."""

    id: int
    dir: str


@dataclass
class AttachMsg:
    """Download request for a message attachment.

    Attributes:
        id: Message id.
        thumb: Thumbnail reference from the message (may be empty).
        extra: Opaque locator from the message; for files this is also the
            local path the download lands at.
    """

    id: int
    thumb: str
    extra: str


@dataclass
class DecPath:
    """Decrypt ``src`` into directory ``dst``."""

    src: str
    dst: str


@dataclass
class Transfer:
    """Incoming money transfer to accept."""

    wxid: str
    tfid: str
    taid: str


@dataclass
class DbQuery:
    """Raw SQL query against one backend database."""

    db: str
    sql: str


@dataclass
class Verification:
    """Friend request verification tokens."""

    v3: str
    v4: str
    scene: int = 30


@dataclass
class MemberMgmt:
    """Chatroom membership change.

    Attributes:
        roomid: Chatroom id.
        wxids: Comma-separated wxids.
    """

    roomid: str
    wxids: str


# Response records


@dataclass
class UserInfo:
    """Logged-in account information."""

    wxid: str
    name: str
    mobile: str
    home: str


@dataclass
class Contact:
    """One contact: friend, official account, chatroom, etc."""

    wxid: str
    code: str = ""
    remark: str = ""
    name: str = ""
    country: str = ""
    province: str = ""
    city: str = ""
    gender: int = 0


@dataclass
class DbTable:
    """Table name and its CREATE statement."""

    name: str
    sql: str


@dataclass
class DbField:
    """One raw column value from a backend SQL query.

    Attributes:
        type: Type tag (1 int, 2 float, 3 text, 4 blob; anything else is unknown).
        column: Column name.
        content: Raw bytes as produced by the backend.
    """

    type: int
    column: str
    content: bytes = b""


@dataclass
class DbRow:
    """Ordered fields of one result row."""

    fields: list[DbField] = field(default_factory=list)


@dataclass
class RoomMember:
    """Chatroom member."""

    wxid: str
    name: str
    state: int = 0


@runtime_checkable
class WeChatBackend(Protocol):
    """Operations offered by the automation backend.

    Implementations are not safe for concurrent invocation; callers go
    through ``wcfgate.backend.BackendGuard``.
    """

    def refresh_qrcode(self) -> str: ...

    def is_login(self) -> bool: ...

    def get_self_id(self) -> str: ...

    def get_user_info(self) -> UserInfo: ...

    def get_contacts(self) -> list[Contact]: ...

    def list_databases(self) -> list[str]: ...

    def list_tables(self, db: str) -> list[DbTable]: ...

    def get_msg_types(self) -> dict[int, str]: ...

    def refresh_moments(self, start_id: int) -> bool: ...

    def query_sql(self, query: DbQuery) -> list[DbRow]: ...

    def send_text(self, msg: TextMsg) -> bool: ...

    def send_image(self, msg: PathMsg) -> bool: ...

    def send_file(self, msg: PathMsg) -> bool: ...

    def send_rich_card(self, msg: RichText) -> bool: ...

    def send_pat(self, msg: PatMsg) -> bool: ...

    def forward_message(self, msg: ForwardMsg) -> bool: ...

    def save_voice(self, msg: AudioMsg) -> str: ...

    def download_attachment(self, msg: AttachMsg) -> bool: ...

    def resolve_decrypted_path(self, msg: DecPath) -> str: ...

    def receive_transfer(self, msg: Transfer) -> bool: ...

    def accept_friend_request(self, msg: Verification) -> bool: ...

    def add_group_members(self, msg: MemberMgmt) -> bool: ...

    def invite_group_members(self, msg: MemberMgmt) -> bool: ...

    def remove_group_members(self, msg: MemberMgmt) -> bool: ...

    def revoke_message(self, msg_id: int) -> bool: ...

    def list_group_members(self, roomid: str) -> list[RoomMember] | None: ...
