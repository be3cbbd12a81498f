"""Shared dependencies for API endpoints.

The backend guard, attachment pipeline and image stager are built once by
``api.main.create_app`` and kept on ``app.state``; endpoints receive them
through these providers, so tests can swap them with
``app.dependency_overrides``.
"""

from fastapi import Request

from wcfgate.attachments import AttachmentPipeline
from wcfgate.backend import BackendGuard
from wcfgate.images import ImageStager


def get_backend_guard(request: Request) -> BackendGuard:
    """Get the process-wide backend guard."""
    return request.app.state.guard


def get_attachment_pipeline(request: Request) -> AttachmentPipeline:
    """Get the attachment retrieval pipeline bound to the guard."""
    return request.app.state.pipeline


def get_image_stager(request: Request) -> ImageStager:
    """Get the outbound image stager."""
    return request.app.state.image_stager
