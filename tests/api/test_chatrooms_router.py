"""Tests for chatroom member lookup."""

from __future__ import annotations

import pytest

from api.routers.chatrooms import filter_members, parse_wxid_filter
from contracts.wechat import RoomMember
from wcfgate.errors import BackendError

MEMBERS = [RoomMember("a", "A"), RoomMember("b", "B"), RoomMember("c", "C", 1)]


class TestHelpers:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            (None, []),
            ("", []),
            ("a", ["a"]),
            ("a,c", ["a", "c"]),
            (" a , ,c,", ["a", "c"]),
        ],
    )
    def test_parse_wxid_filter(self, raw, expected):
        assert parse_wxid_filter(raw) == expected

    def test_filter_keeps_backend_order(self):
        assert [m.wxid for m in filter_members(MEMBERS, ["c", "a"])] == ["a", "c"]

    def test_empty_filter_keeps_all(self):
        assert filter_members(MEMBERS, []) == MEMBERS

    def test_none_members(self):
        assert filter_members(None, ["a"]) == []


class TestQueryRoomMember:
    def test_filtered(self, client, backend):
        response = client.get(
            "/query-room-member", params={"roomid": "1@chatroom", "wxids": "a,c"}
        )

        assert response.status_code == 200
        assert response.json() == {
            "status": 0,
            "error": None,
            "data": [
                {"wxid": "a", "name": "A", "state": 0},
                {"wxid": "c", "name": "C", "state": 1},
            ],
        }
        backend.list_group_members.assert_called_once_with("1@chatroom")

    def test_no_filter_returns_all(self, client):
        data = client.get("/query-room-member", params={"roomid": "1@chatroom"}).json()["data"]
        assert [m["wxid"] for m in data] == ["a", "b", "c"]

    def test_blank_filter_returns_all(self, client):
        params = {"roomid": "1@chatroom", "wxids": ""}
        data = client.get("/query-room-member", params=params).json()
        assert len(data["data"]) == 3

    def test_legacy_room_id(self, client, backend):
        client.get("/query-room-member", params={"room_id": "2@chatroom", "wxids": "b"})
        backend.list_group_members.assert_called_once_with("2@chatroom")

    def test_none_member_list(self, client, backend):
        backend.list_group_members.return_value = None

        body = client.get("/query-room-member", params={"roomid": "1@chatroom"}).json()

        assert body == {"status": 0, "error": None, "data": []}

    def test_empty_roomid_is_passed_through(self, client, backend):
        response = client.get("/query-room-member", params={"roomid": "", "room_id": "2@chatroom"})

        assert response.status_code == 200
        backend.list_group_members.assert_called_once_with("")

    def test_missing_room(self, client, backend):
        response = client.get("/query-room-member", params={"wxids": "a"})

        assert response.status_code == 400
        assert response.json()["code"] == "VAL_MISSING_REQUIRED"
        backend.list_group_members.assert_not_called()

    def test_backend_error(self, client, backend):
        backend.list_group_members.side_effect = BackendError("room not found")

        body = client.get("/query-room-member", params={"roomid": "x"}).json()

        assert body["status"] == 1
        assert body["error"] == "Query chatroom members failed: room not found"
