"""Attachment retrieval pipeline.

Retrieving a message attachment is a two-phase backend interaction:

1. Download: one ``download_attachment`` call. The backend either accepts the
   job (True) or not (False); there is no retry.
2. Poll: images arrive encrypted, so ``resolve_decrypted_path`` is called
   repeatedly until it returns a non-empty path. An empty path means "not
   ready yet"; the pipeline sleeps one interval and tries again until the
   attempt budget is spent.

Each backend call takes the guard's lock on its own. The lock is never held
during the sleeps, so other requests interleave with a long poll.

The caller-supplied timeout is a number of poll attempts with a fixed one
second interval. It only equals wall-clock seconds when backend calls are
instantaneous; see DESIGN.md before changing it to a real deadline.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from contracts.wechat import AttachMsg, DecPath
from wcfgate.backend import BackendGuard
from wcfgate.errors import DownloadRejectedError, DownloadTimeoutError
from wcfgate.observability.logging import log_event, timed_operation
from wcfgate.utils.polling import PollingState, poll_attempts

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_SECONDS = 1.0


@dataclass(frozen=True)
class AttachmentDescriptor:
    """Identifies one message-borne attachment.

    Attributes:
        message_id: Message id (``id`` on the wire).
        thumbnail: Thumbnail reference (``thumb``), empty for images.
        locator: Opaque locator (``extra``); the local file path for files.
    """

    message_id: int
    locator: str
    thumbnail: str = ""

    def to_attach_msg(self) -> AttachMsg:
        return AttachMsg(id=self.message_id, thumb=self.thumbnail, extra=self.locator)


class AttachmentPipeline:
    """Download-then-resolve state machine over the guarded backend."""

    def __init__(
        self,
        guard: BackendGuard,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the pipeline.

        Args:
            guard: Guard around the backend capability.
            poll_interval: Seconds between poll attempts.
            sleep: Sleep function (injectable for tests).
        """
        self._guard = guard
        self._poll_interval = poll_interval
        self._sleep = sleep

    def download(self, descriptor: AttachmentDescriptor) -> None:
        """Phase D: ask the backend to download the attachment.

        Raises:
            BackendError: If the backend call failed.
            DownloadRejectedError: If the backend refused the job.
        """
        accepted = self._guard.call("download_attachment", descriptor.to_attach_msg())
        if not accepted:
            raise DownloadRejectedError(message_id=descriptor.message_id)

    def resolve_decrypted(
        self, descriptor: AttachmentDescriptor, destination: str, max_attempts: int
    ) -> str:
        """Phase P: poll until the decrypted file has a local path.

        Args:
            descriptor: Attachment already accepted for download.
            destination: Directory the backend decrypts into.
            max_attempts: Number of empty polls tolerated.

        Returns:
            Non-empty local path of the decrypted file.

        Raises:
            BackendError: If any poll call failed.
            DownloadTimeoutError: If every allowed poll came back empty.
        """
        request = DecPath(src=descriptor.locator, dst=destination)
        state = PollingState(max_attempts=max_attempts, poll_interval=self._poll_interval)

        def probe() -> str:
            path = self._guard.call("resolve_decrypted_path", request)
            if not path:
                log_event(
                    logger,
                    "attachments.poll.pending",
                    level=logging.DEBUG,
                    message_id=descriptor.message_id,
                    attempt=state.elapsed_attempts + 1,
                )
            return path

        path = poll_attempts(probe, state, sleep=self._sleep, name="resolve_decrypted_path")
        if path is None:
            raise DownloadTimeoutError(
                message_id=descriptor.message_id,
                details={"attempts": state.elapsed_attempts},
            )
        return path

    def fetch_image(self, descriptor: AttachmentDescriptor, destination: str, timeout: int) -> str:
        """Download an image and wait for its decrypted copy.

        Returns:
            Local path of the decrypted image.
        """
        with timed_operation(
            logger, "attachments.fetch_image", level=logging.INFO, message_id=descriptor.message_id
        ) as ctx:
            self.download(descriptor)
            path = self.resolve_decrypted(descriptor, destination, timeout)
            ctx["path"] = path
        return path

    def fetch_file(self, descriptor: AttachmentDescriptor) -> str:
        """Download a file attachment.

        Files are stored unencrypted, so no poll phase runs; the locator is
        the local path once the backend accepts the download.

        Returns:
            Local path of the file.
        """
        with timed_operation(
            logger, "attachments.fetch_file", level=logging.INFO, message_id=descriptor.message_id
        ):
            self.download(descriptor)
        return descriptor.locator
