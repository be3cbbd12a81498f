"""Pytest configuration for gateway tests.

Provides a mocked backend with realistic return values and an app wired to
it. Pipeline sleeps are recorded instead of slept.
"""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from contracts.wechat import Contact, DbTable, RoomMember, UserInfo, WeChatBackend
from wcfgate.attachments import AttachmentPipeline
from wcfgate.config import AttachmentsConfig, GatewayConfig, RateLimitConfig, reset_config

BOOL_OPERATIONS = (
    "is_login",
    "refresh_moments",
    "send_text",
    "send_image",
    "send_file",
    "send_rich_card",
    "send_pat",
    "forward_message",
    "download_attachment",
    "receive_transfer",
    "accept_friend_request",
    "add_group_members",
    "invite_group_members",
    "remove_group_members",
    "revoke_message",
)


@pytest.fixture(autouse=True)
def _reset_global_config():
    """Keep the config singleton from leaking between tests."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def backend():
    """Mock backend answering every operation successfully."""
    mock = MagicMock(spec=WeChatBackend)
    for name in BOOL_OPERATIONS:
        getattr(mock, name).return_value = True
    mock.refresh_qrcode.return_value = "http://weixin.qq.com/x/abc123"
    mock.get_self_id.return_value = "wxid_self"
    mock.get_user_info.return_value = UserInfo(
        wxid="wxid_self", name="Me", mobile="13800000000", home="C:/WeChat Files/"
    )
    mock.get_contacts.return_value = [
        Contact(wxid="wxid_alice", name="Alice", gender=2),
        Contact(wxid="123@chatroom", name="Team"),
    ]
    mock.list_databases.return_value = ["MicroMsg.db", "MSG0.db"]
    mock.list_tables.return_value = [DbTable(name="Contact", sql="CREATE TABLE Contact(x)")]
    mock.get_msg_types.return_value = {1: "Text", 3: "Image"}
    mock.query_sql.return_value = []
    mock.save_voice.return_value = "C:/out/42.mp3"
    mock.resolve_decrypted_path.return_value = ""
    mock.list_group_members.return_value = [
        RoomMember(wxid="a", name="A", state=0),
        RoomMember(wxid="b", name="B", state=0),
        RoomMember(wxid="c", name="C", state=1),
    ]
    return mock


@pytest.fixture
def gateway_config(tmp_path):
    """Config with rate limiting off and a temporary image directory."""
    return GatewayConfig(
        rate_limit=RateLimitConfig(enabled=False),
        attachments=AttachmentsConfig(image_dir=str(tmp_path / "images")),
    )


@pytest.fixture
def sleeps():
    """Durations the pipeline asked to sleep for."""
    return []


@pytest.fixture
def app(backend, gateway_config, sleeps):
    """App over the mock backend with a non-sleeping pipeline."""
    app = create_app(backend, gateway_config)
    app.state.pipeline = AttachmentPipeline(app.state.guard, sleep=sleeps.append)
    return app


@pytest.fixture
def client(app):
    """Test client for the app."""
    return TestClient(app)
