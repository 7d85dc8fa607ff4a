"""
Gfycat API Implementation

Concrete implementation of RemoteAPIInterface over HTTP (httpx).
Each call maps one-to-one onto an endpoint of the public API:

    create        POST {API_BASE_URL}/gfycats
    upload        POST {UPLOAD_URL}            (multipart: key, file)
    fetch_status  GET  {API_BASE_URL}/gfycats/fetch/status/{id}
"""

import logging
from typing import Any, BinaryIO, Dict, Optional

import httpx

from config.settings import API_BASE_URL, HTTP_TIMEOUT, UPLOAD_URL
from publish.constants import (
    CREATE_PATH,
    ENDPOINT_CREATE,
    ENDPOINT_STATUS,
    ENDPOINT_UPLOAD,
    STATUS_PATH,
    UPLOAD_FILE_FIELD,
    UPLOAD_KEY_FIELD,
    PublishPhase,
)
from publish.interfaces.remote_api_interface import (
    CreateRequest,
    ProcessingStatus,
    RemoteAPIInterface,
    TransportError,
    UploadTicket,
)


class GfycatAPI(RemoteAPIInterface):
    """
    HTTP client for the Gfycat public API.

    Features:
    - One shared httpx.Client (connection reuse across polls)
    - Every failure surfaces as TransportError naming the endpoint
    - Field lookup is case-insensitive ("isOk", "IsOk", "isok" all match)
    """

    def __init__(
        self,
        api_base_url: str = API_BASE_URL,
        upload_url: str = UPLOAD_URL,
        timeout: float = HTTP_TIMEOUT,
        client: Optional[httpx.Client] = None,
    ):
        """
        Initialize API client.

        Args:
            api_base_url: Base URL of the create/status endpoints
            upload_url: URL of the byte upload endpoint
            timeout: Per-request timeout in seconds
            client: Pre-built httpx.Client (tests pass one with a MockTransport)

        Example:
            api = GfycatAPI()
            ticket = api.create(CreateRequest())
        """
        self.logger = logging.getLogger(__name__)

        self.api_base_url = api_base_url.rstrip("/")
        self.upload_url = upload_url
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=timeout)

        self.logger.info(f"Gfycat API initialized ({self.api_base_url})")

    def create(self, request: CreateRequest) -> UploadTicket:
        """Create the placeholder gfycat"""
        url = f"{self.api_base_url}{CREATE_PATH}"
        payload = {"noMd5": request.skip_duplicate_check}

        response = self._send(ENDPOINT_CREATE, "POST", url, json=payload)
        body = self._parse_body(ENDPOINT_CREATE, response)

        ok = _field(body, "isOk")
        if not isinstance(ok, bool):
            raise TransportError(f"Invalid isOk value: {ok!r}", ENDPOINT_CREATE)

        name = _field(body, "gfyname", "")
        if ok and (not isinstance(name, str) or not name):
            raise TransportError("Response has no gfyname", ENDPOINT_CREATE)

        ticket = UploadTicket(
            id=name if isinstance(name, str) else "",
            ok=ok,
            upload_secret=str(_field(body, "secret", "") or ""),
            upload_type=str(_field(body, "uploadType", "") or ""),
        )

        self.logger.debug(f"Created ticket {ticket.id} (ok: {ticket.ok})")
        return ticket

    def upload(self, ticket_id: str, file_stream: BinaryIO) -> None:
        """Send the file bytes, blocking until the service has answered"""
        self.logger.debug(f"Uploading bytes for {ticket_id} to {self.upload_url}")

        self._send(
            ENDPOINT_UPLOAD,
            "POST",
            self.upload_url,
            data={UPLOAD_KEY_FIELD: ticket_id},
            files={UPLOAD_FILE_FIELD: (ticket_id, file_stream)},
        )

    def fetch_status(self, ticket_id: str) -> ProcessingStatus:
        """Fetch the processing status of a ticket"""
        url = f"{self.api_base_url}{STATUS_PATH.format(id=ticket_id)}"

        response = self._send(ENDPOINT_STATUS, "GET", url)
        body = self._parse_body(ENDPOINT_STATUS, response)

        raw_phase = _field(body, "task", "")
        raw_phase = raw_phase if isinstance(raw_phase, str) else str(raw_phase)

        raw_progress = _field(body, "progress", 0.0)
        try:
            progress = float(raw_progress) if raw_progress is not None else 0.0
        except (TypeError, ValueError) as e:
            raise TransportError(
                f"Invalid progress value: {raw_progress!r}",
                ENDPOINT_STATUS,
            ) from e

        name = _field(body, "gfyname", "")

        return ProcessingStatus(
            phase=PublishPhase.from_wire(raw_phase),
            id=name if isinstance(name, str) else "",
            progress=progress,
            raw_phase=raw_phase,
        )

    def is_available(self) -> bool:
        """Client is usable until closed"""
        return not self.client.is_closed

    def close(self) -> None:
        """Close the HTTP client if this instance created it"""
        if self._owns_client and not self.client.is_closed:
            self.client.close()
            self.logger.debug("HTTP client closed")

    # =========================================================================
    # HTTP HELPERS
    # =========================================================================

    def _send(self, endpoint: str, method: str, url: str, **kwargs) -> httpx.Response:
        """
        Issue a request and enforce a 2xx status.

        Raises:
            TransportError: On any httpx error or non-2xx status
        """
        try:
            response = self.client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            self.logger.error(f"{endpoint} failed: HTTP {status_code} ({url})")
            raise TransportError(
                f"HTTP {status_code} from {url}",
                endpoint,
                status_code=status_code,
            ) from e
        except httpx.HTTPError as e:
            self.logger.error(f"{endpoint} failed: {e}")
            raise TransportError(f"Request failed: {e}", endpoint) from e

        return response

    def _parse_body(self, endpoint: str, response: httpx.Response) -> Dict[str, Any]:
        """
        Decode a JSON object body.

        Raises:
            TransportError: If the body is not a JSON object
        """
        try:
            body = response.json()
        except ValueError as e:
            raise TransportError(f"Malformed JSON body: {e}", endpoint) from e

        if not isinstance(body, dict):
            raise TransportError(
                f"Expected a JSON object, got {type(body).__name__}",
                endpoint,
            )

        return body


def _field(body: Dict[str, Any], name: str, default: Any = None) -> Any:
    if name in body:
        return body[name]
    lowered = name.lower()
    for key, value in body.items():
        if key.lower() == lowered:
            return value
    return default
