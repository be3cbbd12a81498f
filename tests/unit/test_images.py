"""Tests for outbound image staging."""

import base64
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

from wcfgate.errors import ErrorCode, ImageStagingError
from wcfgate.images import ImageStager

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def stager(tmp_path, session):
    return ImageStager(tmp_path / "images", fetch_timeout=5.0, session=session)


def _response(status=200, content=PNG_BYTES, content_type="image/png"):
    response = MagicMock()
    response.ok = 200 <= status < 300
    response.status_code = status
    response.content = content
    response.headers = {"content-type": content_type}
    return response


class TestLocalPath:
    def test_plain_path_unchanged(self, stager, session):
        assert stager.stage("C:/Pictures/cat.png") == "C:/Pictures/cat.png"
        session.get.assert_not_called()


class TestBase64:
    def test_writes_png_by_default(self, stager, tmp_path):
        staged = Path(stager.stage("", base64.b64encode(PNG_BYTES).decode()))

        assert staged.parent == tmp_path / "images"
        assert staged.suffix == ".png"
        assert staged.read_bytes() == PNG_BYTES

    @pytest.mark.parametrize("hint", ["photo.jpg", "photo.jpeg"])
    def test_jpg_extension_from_path_hint(self, stager, hint):
        staged = stager.stage(hint, base64.b64encode(b"jpeg").decode())
        assert staged.endswith(".jpg")

    def test_base64_wins_over_url(self, stager, session):
        stager.stage("https://example.com/cat.png", base64.b64encode(PNG_BYTES).decode())
        session.get.assert_not_called()

    def test_unique_file_names(self, stager):
        data = base64.b64encode(PNG_BYTES).decode()
        assert stager.stage("", data) != stager.stage("", data)

    def test_invalid_base64(self, stager):
        with pytest.raises(ImageStagingError) as exc_info:
            stager.stage("", "***not base64***")
        assert exc_info.value.code == ErrorCode.IMG_DECODE_FAILED


class TestRemote:
    def test_downloads_url(self, stager, session):
        session.get.return_value = _response(content_type="image/jpeg; charset=binary")

        staged = Path(stager.stage("https://example.com/cat"))

        session.get.assert_called_once_with("https://example.com/cat", timeout=5.0)
        assert staged.suffix == ".jpg"
        assert staged.read_bytes() == PNG_BYTES

    def test_non_jpeg_content_type_is_png(self, stager, session):
        session.get.return_value = _response(content_type="image/gif")
        assert stager.stage("http://example.com/a.gif").endswith(".png")

    def test_http_error_status(self, stager, session):
        session.get.return_value = _response(status=404)

        with pytest.raises(ImageStagingError) as exc_info:
            stager.stage("https://example.com/missing.png")

        assert exc_info.value.code == ErrorCode.IMG_FETCH_FAILED
        assert exc_info.value.details["status_code"] == 404

    def test_connection_error(self, stager, session):
        session.get.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(ImageStagingError, match="image download failed"):
            stager.stage("https://example.com/cat.png")


class TestWriteFailures:
    def test_directory_cannot_be_created(self, tmp_path, session):
        blocker = tmp_path / "blocker"
        blocker.write_text("file, not a directory")
        stager = ImageStager(blocker / "images", session=session)

        with pytest.raises(ImageStagingError, match="failed to create image directory"):
            stager.stage("", base64.b64encode(PNG_BYTES).decode())
