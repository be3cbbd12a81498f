"""Attachment retrieval endpoints.

Provides endpoints for saving message attachments to disk and streaming
them back to the client.

Features:
- Save a chat image (download, then wait for the decrypted copy)
- Save a file attachment
- Stream an image or file with a content type picked from its extension

The save endpoints answer with the envelope like every other JSON endpoint.
The download endpoints answer with raw bytes, so their failures are HTTP 500
with a plain-text body instead.
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse, Response

from api.dependencies import get_attachment_pipeline
from api.routers.registry import ROUTE_ERROR_RESPONSES
from api.schemas import MAX_TIMEOUT, U64_MAX, ApiResponse, SaveFileRequest, SaveImageRequest
from wcfgate.attachments import AttachmentDescriptor, AttachmentPipeline
from wcfgate.errors import AttachmentError, BackendError
from wcfgate.media import FILE_MEDIA_TYPES, IMAGE_MEDIA_TYPES, guess_media_type, read_media

logger = logging.getLogger(__name__)

router = APIRouter(tags=["attachments"])

STREAM_RESPONSES: dict[int | str, dict] = {
    200: {"description": "Attachment bytes", "content": {"application/octet-stream": {}}},
    500: {"description": "Retrieval or read failure", "content": {"text/plain": {}}},
    **ROUTE_ERROR_RESPONSES,
}


def stream_file(path: str | Path, media_types: dict[str, str]) -> Response:
    """Respond with the full contents of ``path``.

    Args:
        path: Resolved local path.
        media_types: Extension to content-type table.

    Raises:
        AttachmentReadError: If the file cannot be read.
    """
    content = read_media(path)
    return Response(content=content, media_type=guess_media_type(path, media_types))


def _plain_error(error: Exception) -> PlainTextResponse:
    return PlainTextResponse(str(error), status_code=500)


@router.post(
    "/save-image",
    response_model=ApiResponse[str],
    summary="Save image",
    responses=ROUTE_ERROR_RESPONSES,
)
def save_image(
    body: SaveImageRequest,
    pipeline: AttachmentPipeline = Depends(get_attachment_pipeline),
) -> ApiResponse[str]:
    """Download a chat image and decrypt it into ``dir``.

    Returns the path of the decrypted image. Fails with "download failed"
    when the backend refuses the download and "download timed out" when no
    decrypted copy appears within ``timeout`` polls.
    """
    try:
        path = pipeline.fetch_image(body.descriptor(), body.dir, body.timeout)
    except AttachmentError as e:
        return ApiResponse.fail(str(e))
    except BackendError as e:
        return ApiResponse.fail(f"Save image failed: {e}")
    return ApiResponse.ok(path)


@router.post(
    "/save-file",
    response_model=ApiResponse[str],
    summary="Save file",
    responses=ROUTE_ERROR_RESPONSES,
)
def save_file(
    body: SaveFileRequest,
    pipeline: AttachmentPipeline = Depends(get_attachment_pipeline),
) -> ApiResponse[str]:
    """Download a file attachment and return its local path."""
    try:
        path = pipeline.fetch_file(body.descriptor())
    except AttachmentError as e:
        return ApiResponse.fail(str(e))
    except BackendError as e:
        return ApiResponse.fail(f"Save file failed: {e}")
    return ApiResponse.ok(path)


@router.get(
    "/download-image",
    response_class=Response,
    summary="Download image",
    responses=STREAM_RESPONSES,
)
def download_image(
    id: int = Query(..., ge=0, le=U64_MAX, description="Message id"),
    extra: str = Query(..., description="Attachment locator from the message"),
    dir: str = Query(..., description="Directory to decrypt the image into"),
    timeout: int = Query(default=10, ge=0, le=MAX_TIMEOUT, description="Poll attempts"),
    pipeline: AttachmentPipeline = Depends(get_attachment_pipeline),
) -> Response:
    """Download, decrypt and stream a chat image.

    **Example Request:**
    - `GET /download-image?id=123&extra=C:/.../abc.dat&dir=C:/out&timeout=10`
    """
    descriptor = AttachmentDescriptor(message_id=id, locator=extra)
    try:
        path = pipeline.fetch_image(descriptor, dir, timeout)
        return stream_file(path, IMAGE_MEDIA_TYPES)
    except (AttachmentError, BackendError) as e:
        logger.warning("Image download for message %s failed: %s", id, e)
        return _plain_error(e)


@router.get(
    "/download-file",
    response_class=Response,
    summary="Download file",
    responses=STREAM_RESPONSES,
)
def download_file(
    id: int = Query(..., ge=0, le=U64_MAX, description="Message id"),
    extra: str = Query(..., description="Attachment locator, also the local file path"),
    thumb: str = Query(default="", description="Thumbnail reference from the message"),
    pipeline: AttachmentPipeline = Depends(get_attachment_pipeline),
) -> Response:
    """Download and stream a file attachment."""
    descriptor = AttachmentDescriptor(message_id=id, locator=extra, thumbnail=thumb)
    try:
        path = pipeline.fetch_file(descriptor)
        return stream_file(path, FILE_MEDIA_TYPES)
    except (AttachmentError, BackendError) as e:
        logger.warning("File download for message %s failed: %s", id, e)
        return _plain_error(e)
