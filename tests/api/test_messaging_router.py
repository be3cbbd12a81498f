"""Tests for POST /image and its staging step."""

from __future__ import annotations

import base64
from pathlib import Path
from unittest.mock import MagicMock

import requests

from contracts.wechat import PathMsg
from wcfgate.errors import BackendError


def test_local_path_passes_through(client, backend):
    response = client.post("/image", json={"path": "C:/Pictures/cat.png", "receiver": "wxid_a"})

    assert response.json() == {"status": 0, "error": None, "data": True}
    backend.send_image.assert_called_once_with(
        PathMsg(path="C:/Pictures/cat.png", receiver="wxid_a")
    )


def test_base64_is_staged(client, backend, gateway_config):
    payload = base64.b64encode(b"\xff\xd8jpeg").decode()

    response = client.post(
        "/image", json={"path": "cat.jpg", "receiver": "wxid_a", "base64": payload}
    )

    assert response.json()["status"] == 0
    sent: PathMsg = backend.send_image.call_args.args[0]
    staged = Path(sent.path)
    assert staged.parent == Path(gateway_config.attachments.image_dir)
    assert staged.suffix == ".jpg"
    assert staged.read_bytes() == b"\xff\xd8jpeg"
    assert sent.receiver == "wxid_a"


def test_url_is_downloaded(client, app, backend):
    session = MagicMock(spec=requests.Session)
    session.get.return_value = MagicMock(
        ok=True, status_code=200, content=b"png", headers={"content-type": "image/png"}
    )
    app.state.image_stager._session = session

    client.post("/image", json={"path": "https://example.com/cat", "receiver": "wxid_a"})

    session.get.assert_called_once()
    assert backend.send_image.call_args.args[0].path.endswith(".png")


def test_staging_failure_skips_backend(client, backend):
    response = client.post(
        "/image", json={"path": "", "receiver": "wxid_a", "base64": "%%%not-base64%%%"}
    )

    assert response.status_code == 200
    assert response.json() == {"status": 1, "error": "base64 decode failed", "data": None}
    backend.send_image.assert_not_called()


def test_backend_failure(client, backend):
    backend.send_image.side_effect = BackendError("file too large")

    body = client.post("/image", json={"path": "C:/a.png", "receiver": "wxid_a"}).json()

    assert body["error"] == "Send image failed: file too large"
