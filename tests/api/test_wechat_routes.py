"""Tests for the table-driven pass-through endpoints.

Covers the envelope shape, backend argument binding, failure envelopes and
input validation for every route in api.routers.wechat.
"""

from __future__ import annotations

import pytest

from api.routers.wechat import ROUTES
from contracts.wechat import (
    AudioMsg,
    ForwardMsg,
    MemberMgmt,
    PatMsg,
    PathMsg,
    RichText,
    TextMsg,
    Transfer,
    Verification,
)
from wcfgate.errors import BackendError

# =============================================================================
# Read endpoints
# =============================================================================


class TestReadEndpoints:
    """GET endpoints without input."""

    def test_islogin(self, client, backend):
        response = client.get("/islogin")

        assert response.status_code == 200
        assert response.json() == {"status": 0, "error": None, "data": True}
        backend.is_login.assert_called_once_with()

    def test_qrcode(self, client):
        assert client.get("/qrcode").json()["data"] == "http://weixin.qq.com/x/abc123"

    def test_selfwxid(self, client):
        assert client.get("/selfwxid").json()["data"] == "wxid_self"

    def test_userinfo(self, client):
        assert client.get("/userinfo").json()["data"] == {
            "wxid": "wxid_self",
            "name": "Me",
            "mobile": "13800000000",
            "home": "C:/WeChat Files/",
        }

    def test_contacts(self, client):
        data = client.get("/contacts").json()["data"]
        assert [c["wxid"] for c in data] == ["wxid_alice", "123@chatroom"]
        assert data[0]["gender"] == 2
        assert data[1]["remark"] == ""

    def test_dbs(self, client):
        assert client.get("/dbs").json()["data"] == ["MicroMsg.db", "MSG0.db"]

    def test_tables_binds_path_segment(self, client, backend):
        response = client.get("/MicroMsg.db/tables")

        assert response.json()["data"] == [{"name": "Contact", "sql": "CREATE TABLE Contact(x)"}]
        backend.list_tables.assert_called_once_with("MicroMsg.db")

    def test_msg_types_keys_become_strings(self, client):
        assert client.get("/msg-types").json()["data"] == {"1": "Text", "3": "Image"}

    def test_pyq(self, client, backend):
        assert client.get("/pyq", params={"id": 0}).json()["data"] is True
        backend.refresh_moments.assert_called_once_with(0)

    def test_idempotent_reads(self, client, backend):
        first = client.get("/islogin").json()
        second = client.get("/islogin").json()
        assert first == second
        assert client.get("/contacts").json() == client.get("/contacts").json()
        assert backend.is_login.call_count == 2


# =============================================================================
# Write endpoints
# =============================================================================


@pytest.mark.parametrize(
    "path,body,operation,expected",
    [
        (
            "/text",
            {"msg": "hi", "receiver": "wxid_a"},
            "send_text",
            TextMsg(msg="hi", receiver="wxid_a", aters=""),
        ),
        (
            "/file",
            {"path": "C:/f.pdf", "receiver": "wxid_a"},
            "send_file",
            PathMsg(path="C:/f.pdf", receiver="wxid_a"),
        ),
        (
            "/rich-text",
            {
                "name": "n",
                "account": "gh_1",
                "title": "t",
                "digest": "d",
                "url": "https://example.com",
                "thumburl": "https://example.com/t.png",
                "receiver": "wxid_a",
            },
            "send_rich_card",
            RichText(
                "n", "gh_1", "t", "d", "https://example.com", "https://example.com/t.png", "wxid_a"
            ),
        ),
        (
            "/pat",
            {"roomid": "1@chatroom", "wxid": "wxid_a"},
            "send_pat",
            PatMsg("1@chatroom", "wxid_a"),
        ),
        (
            "/forward-msg",
            {"id": 99, "receiver": "wxid_b"},
            "forward_message",
            ForwardMsg(99, "wxid_b"),
        ),
        (
            "/receive-transfer",
            {"wxid": "wxid_a", "tfid": "tf", "taid": "ta"},
            "receive_transfer",
            Transfer("wxid_a", "tf", "ta"),
        ),
        (
            "/accept-new-friend",
            {"v3": "v3_x", "v4": "v4_y", "scene": 17},
            "accept_friend_request",
            Verification("v3_x", "v4_y", 17),
        ),
        (
            "/add-chatroom-member",
            {"roomid": "1@chatroom", "wxids": "a,b"},
            "add_group_members",
            MemberMgmt("1@chatroom", "a,b"),
        ),
        (
            "/invite-chatroom-member",
            {"roomid": "1@chatroom", "wxids": "a"},
            "invite_group_members",
            MemberMgmt("1@chatroom", "a"),
        ),
        (
            "/delete-chatroom-member",
            {"roomid": "1@chatroom", "wxids": "b"},
            "remove_group_members",
            MemberMgmt("1@chatroom", "b"),
        ),
    ],
)
def test_post_endpoints_convert_body(client, backend, path, body, operation, expected):
    """Each JSON body reaches the backend as its contract payload."""
    response = client.post(path, json=body)

    assert response.status_code == 200
    assert response.json() == {"status": 0, "error": None, "data": True}
    getattr(backend, operation).assert_called_once_with(expected)


def test_text_with_mentions(client, backend):
    client.post("/text", json={"msg": "@Alice hi", "receiver": "1@chatroom", "aters": "wxid_alice"})
    backend.send_text.assert_called_once_with(TextMsg("@Alice hi", "1@chatroom", "wxid_alice"))


def test_accept_friend_default_scene(client, backend):
    client.post("/accept-new-friend", json={"v3": "a", "v4": "b"})
    backend.accept_friend_request.assert_called_once_with(Verification("a", "b", 30))


def test_audio_returns_path(client, backend):
    response = client.post("/audio", json={"id": 42, "dir": "C:/out"})

    assert response.json()["data"] == "C:/out/42.mp3"
    backend.save_voice.assert_called_once_with(AudioMsg(42, "C:/out"))


def test_revoke_binds_query(client, backend):
    response = client.post("/revoke-msg", params={"id": 2**64 - 1})

    assert response.json()["data"] is True
    backend.revoke_message.assert_called_once_with(2**64 - 1)


# =============================================================================
# Failures
# =============================================================================


class TestBackendFailures:
    """Backend failures travel in the envelope with HTTP 200."""

    def test_backend_error_message(self, client, backend):
        backend.send_text.side_effect = BackendError("not logged in")

        response = client.post("/text", json={"msg": "hi", "receiver": "wxid_a"})

        assert response.status_code == 200
        assert response.json() == {
            "status": 1,
            "error": "Send text message failed: not logged in",
            "data": None,
        }

    def test_unexpected_backend_exception_is_wrapped(self, client, backend):
        backend.get_contacts.side_effect = ConnectionResetError("socket closed")

        body = client.get("/contacts").json()

        assert body["status"] == 1
        assert body["error"] == "Get contacts failed: socket closed"
        assert body["data"] is None

    def test_false_is_success_data(self, client, backend):
        backend.is_login.return_value = False
        assert client.get("/islogin").json() == {"status": 0, "error": None, "data": False}


class TestInputValidation:
    """Malformed input is a 400 and never reaches the backend."""

    def test_missing_body_field(self, client, backend):
        response = client.post("/text", json={"msg": "hi"})

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "VAL_INVALID_INPUT"
        assert "receiver" in body["detail"]
        backend.send_text.assert_not_called()

    def test_invalid_json(self, client, backend):
        response = client.post(
            "/text", content=b"{not json", headers={"content-type": "application/json"}
        )
        assert response.status_code == 400
        backend.send_text.assert_not_called()

    @pytest.mark.parametrize("value", ["abc", "-1", str(2**64)])
    def test_bad_query_id(self, client, backend, value):
        response = client.get("/pyq", params={"id": value})

        assert response.status_code == 400
        backend.refresh_moments.assert_not_called()

    def test_missing_query_id(self, client, backend):
        assert client.post("/revoke-msg").status_code == 400
        backend.revoke_message.assert_not_called()

    def test_negative_forward_id(self, client, backend):
        assert client.post("/forward-msg", json={"id": -5, "receiver": "x"}).status_code == 400
        backend.forward_message.assert_not_called()


def test_route_table_operations_exist_on_backend(backend):
    """Every table entry names a real backend operation."""
    for spec in ROUTES:
        assert hasattr(backend, spec.operation), spec.operation
