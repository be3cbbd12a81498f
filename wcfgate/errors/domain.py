"""Backend, attachment and image staging errors."""

from __future__ import annotations

from typing import Any

from wcfgate.errors.base import ErrorCode, GatewayError


class BackendError(GatewayError):
    """A backend operation failed (transport or automation-layer fault)."""

    default_message = "Backend operation failed"
    default_code = ErrorCode.BKD_CALL_FAILED

    def __init__(
        self,
        message: str | None = None,
        *,
        operation: str | None = None,
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, code=code, details=details, cause=cause)


class BackendUnavailableError(BackendError):
    """The backend capability could not be created at startup."""

    default_message = "Backend is not available"
    default_code = ErrorCode.BKD_UNAVAILABLE


class AttachmentError(GatewayError):
    """Base class for attachment retrieval pipeline failures."""

    default_message = "Attachment retrieval failed"
    default_code = ErrorCode.ATT_DOWNLOAD_REJECTED

    def __init__(
        self,
        message: str | None = None,
        *,
        message_id: int | None = None,
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        details = details or {}
        if message_id is not None:
            details["message_id"] = message_id
        super().__init__(message, code=code, details=details, cause=cause)


class DownloadRejectedError(AttachmentError):
    """The backend did not accept the download job."""

    default_message = "download failed"
    default_code = ErrorCode.ATT_DOWNLOAD_REJECTED


class DownloadTimeoutError(AttachmentError):
    """The attachment never became available within the attempt budget."""

    default_message = "download timed out"
    default_code = ErrorCode.ATT_TIMEOUT


class AttachmentReadError(AttachmentError):
    """A resolved attachment file could not be read."""

    default_message = "failed to read file"
    default_code = ErrorCode.ATT_READ_FAILED


class ImageStagingError(GatewayError):
    """An outbound image could not be materialized as a local file."""

    default_message = "failed to stage image"
    default_code = ErrorCode.IMG_WRITE_FAILED
