"""Unified exception hierarchy for the gateway.

Exception Hierarchy:
    GatewayError (base)
    +-- ConfigurationError - Configuration and settings issues
    +-- ValidationError - Input validation failures
    +-- BackendError - Backend operation failures
    |   +-- BackendUnavailableError - Backend could not be created
    +-- AttachmentError - Attachment retrieval pipeline failures
    |   +-- DownloadRejectedError - Backend refused the download
    |   +-- DownloadTimeoutError - Attachment not ready within the attempt budget
    |   +-- AttachmentReadError - Resolved file could not be read
    +-- ImageStagingError - Outbound image could not be written locally

Usage:
    from wcfgate.errors import BackendError

    try:
        guard.call("is_login")
    except BackendError as e:
        logger.error("Backend error: %s (code: %s)", e.message, e.code)
"""

from wcfgate.errors.base import (
    ConfigurationError,
    ErrorCode,
    GatewayError,
    ValidationError,
)
from wcfgate.errors.domain import (
    AttachmentError,
    AttachmentReadError,
    BackendError,
    BackendUnavailableError,
    DownloadRejectedError,
    DownloadTimeoutError,
    ImageStagingError,
)

__all__ = [
    "AttachmentError",
    "AttachmentReadError",
    "BackendError",
    "BackendUnavailableError",
    "ConfigurationError",
    "DownloadRejectedError",
    "DownloadTimeoutError",
    "ErrorCode",
    "GatewayError",
    "ImageStagingError",
    "ValidationError",
]
