"""Content types and file reads for streamed attachments."""

from __future__ import annotations

from pathlib import Path

from wcfgate.errors import AttachmentReadError

OCTET_STREAM = "application/octet-stream"

# Decrypted chat images
IMAGE_MEDIA_TYPES: dict[str, str] = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".bmp": "image/bmp",
    ".webp": "image/webp",
}

# Generic file attachments
FILE_MEDIA_TYPES: dict[str, str] = {
    ".pdf": "application/pdf",
    ".doc": "application/msword",
    ".docx": "application/msword",
    ".xls": "application/vnd.ms-excel",
    ".xlsx": "application/vnd.ms-excel",
    ".ppt": "application/vnd.ms-powerpoint",
    ".pptx": "application/vnd.ms-powerpoint",
    ".zip": "application/zip",
    ".rar": "application/x-rar-compressed",
    ".txt": "text/plain",
    ".json": "application/json",
    ".xml": "application/xml",
    ".html": "text/html",
    ".htm": "text/html",
    ".css": "text/css",
    ".js": "application/javascript",
    ".mp3": "audio/mpeg",
    ".mp4": "video/mp4",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
}


def guess_media_type(path: str | Path, table: dict[str, str]) -> str:
    """Look up the content type for ``path`` by lower-cased extension."""
    return table.get(Path(path).suffix.lower(), OCTET_STREAM)


def read_media(path: str | Path) -> bytes:
    """Read a resolved attachment fully into memory.

    Raises:
        AttachmentReadError: If the file is missing or unreadable, or the
            path itself is malformed (an embedded NUL, for instance).
    """
    try:
        return Path(path).read_bytes()
    except (OSError, ValueError) as e:
        raise AttachmentReadError(
            f"failed to read file: {e}", details={"path": str(path)}, cause=e
        ) from e
