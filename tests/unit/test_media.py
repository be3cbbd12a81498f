"""Tests for media type lookup and attachment reads."""

import pytest

from wcfgate.errors import AttachmentReadError
from wcfgate.media import (
    FILE_MEDIA_TYPES,
    IMAGE_MEDIA_TYPES,
    OCTET_STREAM,
    guess_media_type,
    read_media,
)


class TestGuessMediaType:
    @pytest.mark.parametrize(
        "path,expected",
        [
            ("a.jpg", "image/jpeg"),
            ("a.JPEG", "image/jpeg"),
            ("C:/out/a.png", "image/png"),
            ("a.gif", "image/gif"),
            ("a.bmp", "image/bmp"),
            ("a.webp", "image/webp"),
            ("a.pdf", OCTET_STREAM),
            ("noext", OCTET_STREAM),
        ],
    )
    def test_image_table(self, path, expected):
        assert guess_media_type(path, IMAGE_MEDIA_TYPES) == expected

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("report.pdf", "application/pdf"),
            ("report.DOCX", "application/msword"),
            ("sheet.xlsx", "application/vnd.ms-excel"),
            ("slides.pptx", "application/vnd.ms-powerpoint"),
            ("bundle.rar", "application/x-rar-compressed"),
            ("song.mp3", "audio/mpeg"),
            ("clip.mp4", "video/mp4"),
            ("page.htm", "text/html"),
            ("photo.webp", OCTET_STREAM),
            ("archive.tar.gz", OCTET_STREAM),
        ],
    )
    def test_file_table(self, path, expected):
        assert guess_media_type(path, FILE_MEDIA_TYPES) == expected


class TestReadMedia:
    def test_reads_bytes(self, tmp_path):
        path = tmp_path / "a.bin"
        path.write_bytes(b"\x00\x01payload")
        assert read_media(path) == b"\x00\x01payload"

    def test_missing_file(self, tmp_path):
        with pytest.raises(AttachmentReadError) as exc_info:
            read_media(tmp_path / "missing.jpg")

        assert str(exc_info.value).startswith("failed to read file: ")
        assert exc_info.value.details["path"].endswith("missing.jpg")

    def test_malformed_path(self):
        with pytest.raises(AttachmentReadError) as exc_info:
            read_media("C:/a\x00b.pdf")

        assert str(exc_info.value).startswith("failed to read file: ")
        assert isinstance(exc_info.value.cause, ValueError)
