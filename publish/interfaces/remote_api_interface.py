"""
Remote API Interface

Abstract interface for the hosting service's public HTTP API.
The Publisher depends on this abstraction, not on the HTTP client,
so it can be driven by the real adapter or by a scripted mock.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import BinaryIO, Optional

from publish.constants import PublishPhase, PublishStatus


@dataclass(frozen=True)
class CreateRequest:
    """
    Payload of the create call.

    Attributes:
        skip_duplicate_check: Ask the service not to run its duplicate
            detection. A detected duplicate makes the status call describe
            the existing resource, which is not handled here.
    """

    skip_duplicate_check: bool = True


@dataclass(frozen=True)
class UploadTicket:
    """
    Placeholder resource returned by the create call.

    Attributes:
        id: Server-assigned name, used by upload and status calls
        ok: False if the service rejected the request
        upload_secret: Secret issued with the ticket (unused by the upload)
        upload_type: Upload host advertised by the service
    """

    id: str
    ok: bool
    upload_secret: str = ""
    upload_type: str = ""


@dataclass(frozen=True)
class ProcessingStatus:
    """
    One status poll result.

    Attributes:
        phase: Parsed lifecycle stage
        id: Identifier reported by the service (may be empty)
        progress: Completion fraction, meaningful while ENCODING
        raw_phase: Phase string exactly as received
    """

    phase: PublishPhase
    id: str = ""
    progress: float = 0.0
    raw_phase: str = ""


class RemoteAPIInterface(ABC):
    """
    Abstract base class for the remote hosting API.

    Every call either returns a parsed record or raises TransportError.
    Semantic checks (ok flag, phase) belong to the caller.
    """

    @abstractmethod
    def create(self, request: CreateRequest) -> UploadTicket:
        """
        Create the placeholder resource the bytes will be attached to.

        Args:
            request: Create payload

        Returns:
            UploadTicket

        Raises:
            TransportError: Non-2xx status, network failure or malformed body
        """

    @abstractmethod
    def upload(self, ticket_id: str, file_stream: BinaryIO) -> None:
        """
        Send the file bytes for a ticket.

        Must not return before every byte has been sent and the
        service has answered.

        Args:
            ticket_id: UploadTicket.id
            file_stream: Readable binary stream, read once

        Raises:
            TransportError: Non-2xx status or network failure
        """

    @abstractmethod
    def fetch_status(self, ticket_id: str) -> ProcessingStatus:
        """
        Fetch the processing status of a ticket.

        Raises:
            TransportError: Non-2xx status, network failure or malformed body
        """

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if the API client is ready for use.

        Returns:
            True if the client can issue requests
        """

    def close(self) -> None:
        """Release network resources (no-op by default)"""


# =============================================================================
# ERRORS
# =============================================================================


class PublishError(Exception):
    """
    Base exception for publish failures.

    Carries a PublishStatus so callers can report a status code
    without inspecting the exception type.
    """

    def __init__(self, message: str, status: PublishStatus = PublishStatus.FAILED):
        super().__init__(message)
        self.status = status


class TransportError(PublishError):
    """
    HTTP-layer failure during create, upload or a status poll.

    Examples:
    - Non-2xx response
    - Connection refused / timeout
    - Response body is not the expected JSON
    """

    def __init__(
        self,
        message: str,
        endpoint: str,
        status_code: Optional[int] = None,
    ):
        super().__init__(
            f"[{endpoint}] {message}",
            status=PublishStatus.TRANSPORT_ERROR,
        )
        self.endpoint = endpoint
        self.status_code = status_code


class ProtocolError(PublishError):
    """Well-formed but negative answer: create rejected, or phase error"""

    def __init__(self, message: str):
        super().__init__(message, status=PublishStatus.PROTOCOL_ERROR)


class PublishTimeoutError(PublishError):
    """The resource never left the "not found yet" state"""

    def __init__(self, message: str, attempts: int):
        super().__init__(message, status=PublishStatus.TIMEOUT)
        self.attempts = attempts


class PublishCancelled(PublishError):
    """Publish aborted by the caller through a cancel token"""

    def __init__(self, message: str = "Publish cancelled"):
        super().__init__(message, status=PublishStatus.CANCELLED)
