"""
Mock Remote API Implementation

Scripted in-memory API for testing without network access.
Plays back a configured sequence of status answers and records
every call so tests can assert on what the Publisher did.
"""

import logging
import time
from typing import BinaryIO, List, Optional, Sequence
from uuid import uuid4

from publish.constants import (
    ENDPOINT_CREATE,
    ENDPOINT_STATUS,
    ENDPOINT_UPLOAD,
    PublishPhase,
)
from publish.interfaces.remote_api_interface import (
    CreateRequest,
    ProcessingStatus,
    RemoteAPIInterface,
    TransportError,
    UploadTicket,
)

DEFAULT_STATUS_SCRIPT = (
    ProcessingStatus(PublishPhase.PENDING, raw_phase=PublishPhase.PENDING.value),
    ProcessingStatus(PublishPhase.ENCODING, progress=0.5, raw_phase="encoding"),
    ProcessingStatus(PublishPhase.COMPLETE, raw_phase="complete"),
)


class MockRemoteAPI(RemoteAPIInterface):
    """
    Mock remote API for testing.

    Useful for:
    - Unit tests of the Publisher state machine
    - Development without network access
    - Simulating failures at a chosen endpoint
    """

    def __init__(
        self,
        statuses: Optional[Sequence[ProcessingStatus]] = None,
        create_ok: bool = True,
        ticket_id: Optional[str] = None,
        fail_endpoint: Optional[str] = None,
        fail_status_code: int = 500,
        simulate_timing: bool = False,
    ):
        """
        Initialize mock API.

        Args:
            statuses: Status answers returned by successive fetch_status
                calls. The last one repeats once the script runs out.
            create_ok: Value of the ok flag returned by create
            ticket_id: Fixed ticket id (random "mock_..." id if None)
            fail_endpoint: "create", "upload" or "status" to raise a
                TransportError from that endpoint
            fail_status_code: HTTP status reported by the simulated failure
            simulate_timing: If True, sleep briefly in each call

        Example:
            # Two encoding updates then success
            api = MockRemoteAPI(statuses=[
                encoding_status(0.1),
                encoding_status(0.6),
                complete_status(),
            ])

            # Status endpoint down
            api = MockRemoteAPI(fail_endpoint="status")
        """
        self.logger = logging.getLogger(__name__)
        self.statuses: List[ProcessingStatus] = list(statuses or DEFAULT_STATUS_SCRIPT)
        self.create_ok = create_ok
        self.ticket_id = ticket_id or f"mock_{uuid4().hex[:11]}"
        self.fail_endpoint = fail_endpoint
        self.fail_status_code = fail_status_code
        self.simulate_timing = simulate_timing

        # Track calls for testing
        self.calls: List[tuple] = []
        self.uploaded_bytes: Optional[bytes] = None
        self.closed = False
        self._status_index = 0

        self.logger.info(
            f"Mock Remote API initialized "
            f"({len(self.statuses)} scripted statuses, create_ok: {create_ok})",
        )

    def create(self, request: CreateRequest) -> UploadTicket:
        self._record(ENDPOINT_CREATE, request)
        self._maybe_fail(ENDPOINT_CREATE)

        self.logger.info(f"[MOCK] Created ticket {self.ticket_id}")
        return UploadTicket(
            id=self.ticket_id,
            ok=self.create_ok,
            upload_secret="mock_secret",
            upload_type="mock.filedrop",
        )

    def upload(self, ticket_id: str, file_stream: BinaryIO) -> None:
        self._record(ENDPOINT_UPLOAD, ticket_id)
        self._maybe_fail(ENDPOINT_UPLOAD)

        # Consume the stream like a real upload would
        self.uploaded_bytes = file_stream.read()
        self.logger.info(
            f"[MOCK] Uploaded {len(self.uploaded_bytes)} bytes for {ticket_id}",
        )

    def fetch_status(self, ticket_id: str) -> ProcessingStatus:
        self._record(ENDPOINT_STATUS, ticket_id)
        self._maybe_fail(ENDPOINT_STATUS)

        index = min(self._status_index, len(self.statuses) - 1)
        self._status_index += 1
        status = self.statuses[index]

        # Complete answers carry the ticket id unless scripted otherwise
        if status.phase == PublishPhase.COMPLETE and not status.id:
            status = ProcessingStatus(
                phase=status.phase,
                id=ticket_id,
                progress=status.progress,
                raw_phase=status.raw_phase,
            )

        self.logger.debug(f"[MOCK] Status for {ticket_id}: {status.raw_phase}")
        return status

    def is_available(self) -> bool:
        """Mock API is available until closed"""
        return not self.closed

    def close(self) -> None:
        self.closed = True

    # =========================================================================
    # TESTING HELPER METHODS
    # =========================================================================

    def calls_to(self, endpoint: str) -> int:
        """
        Count calls made to an endpoint.

        Args:
            endpoint: "create", "upload" or "status"

        Returns:
            Number of calls
        """
        return sum(1 for name, _ in self.calls if name == endpoint)

    def endpoint_sequence(self) -> List[str]:
        """Endpoint names in call order"""
        return [name for name, _ in self.calls]

    def reset(self) -> None:
        """Clear call history and rewind the status script"""
        self.calls.clear()
        self.uploaded_bytes = None
        self._status_index = 0
        self.logger.debug("[MOCK] History cleared")

    def _record(self, endpoint: str, argument) -> None:
        self.calls.append((endpoint, argument))
        if self.simulate_timing:
            time.sleep(0.05)

    def _maybe_fail(self, endpoint: str) -> None:
        if self.fail_endpoint == endpoint:
            self.logger.warning(f"[MOCK] Simulated {endpoint} failure")
            raise TransportError(
                f"Simulated HTTP {self.fail_status_code}",
                endpoint,
                status_code=self.fail_status_code,
            )


# =============================================================================
# STATUS BUILDERS
# =============================================================================


def pending_status() -> ProcessingStatus:
    """Status answer for a ticket the API cannot see yet"""
    return ProcessingStatus(PublishPhase.PENDING, raw_phase=PublishPhase.PENDING.value)


def encoding_status(progress: float) -> ProcessingStatus:
    """Status answer while the service is transcoding"""
    return ProcessingStatus(
        PublishPhase.ENCODING,
        progress=progress,
        raw_phase=PublishPhase.ENCODING.value,
    )


def complete_status(identifier: str = "") -> ProcessingStatus:
    """Terminal success answer"""
    return ProcessingStatus(
        PublishPhase.COMPLETE,
        id=identifier,
        raw_phase=PublishPhase.COMPLETE.value,
    )


def error_status(raw_phase: str = "error") -> ProcessingStatus:
    """Terminal failure answer (raw_phase may be any unrecognized string)"""
    return ProcessingStatus(PublishPhase.from_wire(raw_phase), raw_phase=raw_phase)
