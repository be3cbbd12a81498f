"""Image sending endpoint.

Unlike the other send endpoints, ``POST /image`` first stages base64 or
remote images as local files, since the backend only sends files from disk.
"""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_backend_guard, get_image_stager
from api.routers.registry import ROUTE_ERROR_RESPONSES, invoke_backend
from api.schemas import ApiResponse, PathMessageRequest
from contracts.wechat import PathMsg
from wcfgate.backend import BackendGuard
from wcfgate.errors import ImageStagingError
from wcfgate.images import ImageStager

logger = logging.getLogger(__name__)

router = APIRouter(tags=["messaging"])


@router.post(
    "/image",
    response_model=ApiResponse[bool],
    summary="Send image",
    responses=ROUTE_ERROR_RESPONSES,
)
def send_image(
    body: PathMessageRequest,
    guard: BackendGuard = Depends(get_backend_guard),
    stager: ImageStager = Depends(get_image_stager),
) -> ApiResponse[bool]:
    """Send an image from a local path, an http(s) URL or base64 data.

    Staging failures are reported in the envelope and the backend is not
    called.
    """
    try:
        path = stager.stage(body.path, body.base64)
    except ImageStagingError as e:
        logger.warning("Image staging failed: %s", e)
        return ApiResponse.fail(str(e))

    return invoke_backend(
        guard, "send_image", "Send image", PathMsg(path=path, receiver=body.receiver)
    )
