"""Outbound image staging.

The backend can only send images that exist as local files. Requests to
``POST /image`` may instead carry base64 data or an http(s) URL; these are
written to the staging directory first and the backend receives that path.
"""

from __future__ import annotations

import base64
import binascii
import logging
import uuid
from pathlib import Path

import requests

from wcfgate.errors import ImageStagingError
from wcfgate.errors.base import ErrorCode

logger = logging.getLogger(__name__)

DEFAULT_FETCH_TIMEOUT_SECONDS = 30.0


def _extension_for_path(path: str) -> str:
    if path.endswith((".jpg", ".jpeg")):
        return "jpg"
    return "png"


def _extension_for_content_type(content_type: str) -> str:
    if content_type.split(";")[0].strip().lower() == "image/jpeg":
        return "jpg"
    return "png"


class ImageStager:
    """Materializes base64 or remote images as files in ``image_dir``."""

    def __init__(
        self,
        image_dir: str | Path,
        *,
        fetch_timeout: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self.image_dir = Path(image_dir)
        self.fetch_timeout = fetch_timeout
        self._session = session or requests.Session()

    def stage(self, path: str, base64_data: str = "") -> str:
        """Return a local path the backend can send.

        Base64 data wins over ``path``. An http(s) ``path`` is downloaded.
        Any other ``path`` is returned unchanged.

        Raises:
            ImageStagingError: If decoding, downloading or writing fails.
        """
        if base64_data:
            logger.debug("Staging base64 image data")
            try:
                content = base64.b64decode(base64_data, validate=True)
            except (binascii.Error, ValueError) as e:
                raise ImageStagingError(
                    "base64 decode failed", code=ErrorCode.IMG_DECODE_FAILED, cause=e
                ) from e
            return str(self._write(content, _extension_for_path(path)))

        if path.startswith("http"):
            content, content_type = self._fetch(path)
            return str(self._write(content, _extension_for_content_type(content_type)))

        return path

    def _fetch(self, url: str) -> tuple[bytes, str]:
        logger.debug("Downloading image from %s", url)
        try:
            response = self._session.get(url, timeout=self.fetch_timeout)
        except requests.exceptions.RequestException as e:
            raise ImageStagingError(
                f"image download failed: {e}", code=ErrorCode.IMG_FETCH_FAILED, cause=e
            ) from e
        if not response.ok:
            logger.error("Image download failed with status %s", response.status_code)
            raise ImageStagingError(
                "image download failed",
                code=ErrorCode.IMG_FETCH_FAILED,
                details={"status_code": response.status_code},
            )
        return response.content, response.headers.get("content-type", "image/png")

    def _write(self, content: bytes, extension: str) -> Path:
        target = self.image_dir / f"{uuid.uuid4()}.{extension}"
        try:
            self.image_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ImageStagingError(
                f"failed to create image directory: {e}", cause=e
            ) from e
        try:
            target.write_bytes(content)
        except OSError as e:
            raise ImageStagingError(f"failed to save image: {e}", cause=e) from e
        logger.debug("Staged image at %s", target)
        return target
