"""
Publisher

Drives one file through the three-phase publish protocol:

    1. create   - placeholder resource (UploadTicket)
    2. upload   - attach the bytes to the ticket, blocking until sent
    3. poll     - fetch status every POLL_INTERVAL until complete/error

Progress is reported to a caller-supplied sink in this order of kinds:
CREATING, UPLOADING, ENCODING (zero or more), COMPLETE.
"""

import logging
import time
from typing import BinaryIO, Callable, Optional

from config.settings import MAX_PENDING_POLLS, POLL_INTERVAL, SKIP_DUPLICATE_CHECK
from publish.constants import (
    MESSAGE_COMPLETE,
    MESSAGE_CREATING,
    MESSAGE_ENCODING,
    MESSAGE_UPLOADING,
    ProgressKind,
    PublishPhase,
)
from publish.interfaces.progress_interface import ProgressEvent, ProgressSink
from publish.interfaces.remote_api_interface import (
    CreateRequest,
    ProcessingStatus,
    ProtocolError,
    PublishCancelled,
    PublishTimeoutError,
    RemoteAPIInterface,
    UploadTicket,
)
from publish.utils.cancellation import CancelToken

_UNSET = object()


class Publisher:
    """
    Publish protocol driver.

    One Publisher can run any number of publish() calls one after the
    other; each call owns its own ticket and stream and shares nothing
    with other calls except the API client.

    Usage:
        publisher = Publisher(api=GfycatAPI())

        with open("clip.mp4", "rb") as f:
            name = publisher.publish(f, print)
    """

    def __init__(
        self,
        api: RemoteAPIInterface,
        poll_interval: float = POLL_INTERVAL,
        max_pending_polls=_UNSET,
        skip_duplicate_check: bool = SKIP_DUPLICATE_CHECK,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize publisher.

        Args:
            api: Remote API implementation
            poll_interval: Seconds between two status polls
            max_pending_polls: How many "not found yet" answers to tolerate
                before raising PublishTimeoutError. None (or 0) polls
                forever. Defaults to MAX_PENDING_POLLS from settings.
            skip_duplicate_check: Sent with the create request
            sleep: Delay function used between polls when no cancel
                token is given (tests inject a recorder)

        Raises:
            ValueError: If max_pending_polls is negative
        """
        self.logger = logging.getLogger(__name__)
        self.api = api
        self.poll_interval = poll_interval
        if max_pending_polls is _UNSET:
            max_pending_polls = MAX_PENDING_POLLS
        if max_pending_polls is not None and max_pending_polls < 0:
            raise ValueError(f"max_pending_polls must be >= 0, got {max_pending_polls}")
        self.max_pending_polls: Optional[int] = max_pending_polls or None
        self.skip_duplicate_check = skip_duplicate_check
        self._sleep = sleep

    def publish(
        self,
        file_stream: BinaryIO,
        progress_sink: ProgressSink,
        cancel_token: Optional[CancelToken] = None,
    ) -> str:
        """
        Publish a file and wait until the service has processed it.

        Args:
            file_stream: Readable binary stream positioned at the start
                of the file. Read once, during the upload phase.
            progress_sink: Callable receiving ProgressEvent values
            cancel_token: Optional token to abort from another thread

        Returns:
            Identifier assigned by the service

        Raises:
            TransportError: HTTP-layer failure in any phase
            ProtocolError: Create rejected, or the service reported an error
            PublishTimeoutError: Ticket stayed "not found" too long
            PublishCancelled: cancel_token was triggered
        """
        self._check_cancelled(cancel_token)
        self._emit(progress_sink, ProgressKind.CREATING, MESSAGE_CREATING)
        ticket = self.api.create(
            CreateRequest(skip_duplicate_check=self.skip_duplicate_check),
        )
        if not ticket.ok:
            raise ProtocolError("create rejected")

        self.logger.info(f"Ticket created: {ticket.id}")

        self._check_cancelled(cancel_token)
        self._emit(progress_sink, ProgressKind.UPLOADING, MESSAGE_UPLOADING)
        self.api.upload(ticket.id, file_stream)

        self.logger.info(f"Upload finished for {ticket.id}, waiting for encoding")

        return self._poll_until_complete(ticket, progress_sink, cancel_token)

    def _poll_until_complete(
        self,
        ticket: UploadTicket,
        progress_sink: ProgressSink,
        cancel_token: Optional[CancelToken],
    ) -> str:
        pending_polls = 0

        while True:
            self._check_cancelled(cancel_token)
            status = self.api.fetch_status(ticket.id)

            if status.phase == PublishPhase.PENDING:
                # Expected at least once: the upload takes a moment to
                # become visible to the status endpoint
                pending_polls += 1
                if (
                    self.max_pending_polls is not None
                    and pending_polls > self.max_pending_polls
                ):
                    raise PublishTimeoutError(
                        f"{ticket.id} still not found after "
                        f"{pending_polls} status polls",
                        attempts=pending_polls,
                    )
                self.logger.debug(f"{ticket.id} not visible yet ({pending_polls})")
                self._wait(cancel_token)

            elif status.phase == PublishPhase.ENCODING:
                self._emit(
                    progress_sink,
                    ProgressKind.ENCODING,
                    MESSAGE_ENCODING,
                    status.progress,
                )
                self._wait(cancel_token)

            elif status.phase == PublishPhase.COMPLETE:
                identifier = self._identifier(ticket, status)
                self._emit(progress_sink, ProgressKind.COMPLETE, MESSAGE_COMPLETE)
                self.logger.info(f"✅ Publish complete: {identifier}")
                return identifier

            else:
                raise ProtocolError(
                    f"remote reported failure (phase: {status.raw_phase!r})",
                )

    def _identifier(self, ticket: UploadTicket, status: ProcessingStatus) -> str:
        if status.id and status.id != ticket.id:
            self.logger.warning(
                f"Status reports identifier {status.id} for ticket {ticket.id}",
            )
        return status.id or ticket.id

    def _emit(
        self,
        progress_sink: ProgressSink,
        kind: ProgressKind,
        message: str,
        progress: Optional[float] = None,
    ) -> None:
        event = ProgressEvent(kind=kind, message=message, progress=progress)
        self.logger.debug(f"Progress: {event}")
        progress_sink(event)

    def _wait(self, cancel_token: Optional[CancelToken]) -> None:
        if cancel_token is None:
            self._sleep(self.poll_interval)
        elif cancel_token.wait(self.poll_interval):
            raise PublishCancelled()

    def _check_cancelled(self, cancel_token: Optional[CancelToken]) -> None:
        if cancel_token is not None and cancel_token.is_cancelled:
            raise PublishCancelled()
