"""
Gfycat API Tests

HTTP adapter tested against httpx.MockTransport (no network).

Tests cover:
1. Request shape of create, upload and status calls
2. Response parsing (case-insensitive fields, string progress, phases)
3. Non-2xx, connection errors and malformed bodies -> TransportError
"""

import io
import json

import httpx
import pytest

from publish.constants import PublishPhase
from publish.implementations.gfycat_api import GfycatAPI
from publish.interfaces.remote_api_interface import CreateRequest, TransportError

API_BASE = "https://api.test/v1"
UPLOAD_URL = "https://filedrop.test/"


def make_api(handler):
    """GfycatAPI whose HTTP traffic goes to handler"""
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return GfycatAPI(api_base_url=API_BASE, upload_url=UPLOAD_URL, client=client)


# =============================================================================
# CREATE
# =============================================================================


class TestCreate:
    """POST /gfycats"""

    def test_create_request_and_ticket(self):
        """Sends noMd5 and parses the ticket"""
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.read())
            return httpx.Response(
                200,
                json={
                    "isOk": True,
                    "gfyname": "abc",
                    "secret": "s3cret",
                    "uploadType": "filedrop.gfycat.com",
                },
            )

        ticket = make_api(handler).create(CreateRequest(skip_duplicate_check=True))

        assert seen == {
            "method": "POST",
            "url": "https://api.test/v1/gfycats",
            "body": {"noMd5": True},
        }
        assert ticket.id == "abc"
        assert ticket.ok is True
        assert ticket.upload_secret == "s3cret"
        assert ticket.upload_type == "filedrop.gfycat.com"

    def test_create_fields_case_insensitive(self):
        """Field names match regardless of case"""
        api = make_api(
            lambda request: httpx.Response(200, json={"IsOk": True, "GfyName": "abc"}),
        )

        ticket = api.create(CreateRequest())

        assert ticket.ok is True
        assert ticket.id == "abc"

    def test_create_not_ok(self):
        """isOk=false is returned, not raised"""
        api = make_api(lambda request: httpx.Response(200, json={"isOk": False}))

        ticket = api.create(CreateRequest())

        assert ticket.ok is False

    @pytest.mark.parametrize("is_ok", ["false", 1, None])
    def test_create_non_boolean_ok(self, is_ok):
        """A non-boolean isOk is a malformed body, never a truthy ok"""
        api = make_api(
            lambda request: httpx.Response(200, json={"isOk": is_ok, "gfyname": "abc"}),
        )

        with pytest.raises(TransportError) as exc_info:
            api.create(CreateRequest())

        assert exc_info.value.endpoint == "create"
        assert "isOk" in str(exc_info.value)

    def test_create_missing_ok(self):
        """A body without isOk is malformed"""
        api = make_api(lambda request: httpx.Response(200, json={"gfyname": "abc"}))

        with pytest.raises(TransportError):
            api.create(CreateRequest())

    def test_create_ok_without_name(self):
        """ok without a gfyname is a malformed body"""
        api = make_api(lambda request: httpx.Response(200, json={"isOk": True}))

        with pytest.raises(TransportError) as exc_info:
            api.create(CreateRequest())

        assert exc_info.value.endpoint == "create"

    def test_create_http_error(self):
        """Non-2xx surfaces as TransportError with status code"""
        api = make_api(lambda request: httpx.Response(500, text="oops"))

        with pytest.raises(TransportError) as exc_info:
            api.create(CreateRequest())

        assert exc_info.value.endpoint == "create"
        assert exc_info.value.status_code == 500
        assert "[create]" in str(exc_info.value)


# =============================================================================
# UPLOAD
# =============================================================================


class TestUpload:
    """Multipart POST to the upload host"""

    def test_upload_multipart_fields(self):
        """key field carries the id, file field is named after the id"""
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["content_type"] = request.headers["content-type"]
            seen["body"] = request.read()
            return httpx.Response(200)

        make_api(handler).upload("abc", io.BytesIO(b"MEDIA-BYTES"))

        assert seen["url"] == UPLOAD_URL
        assert seen["content_type"].startswith("multipart/form-data")
        assert b'name="key"' in seen["body"]
        assert b'name="file"; filename="abc"' in seen["body"]
        assert b"MEDIA-BYTES" in seen["body"]

    def test_upload_http_error(self):
        """Non-2xx from the upload host names the upload endpoint"""
        api = make_api(lambda request: httpx.Response(403))

        with pytest.raises(TransportError) as exc_info:
            api.upload("abc", io.BytesIO(b"x"))

        assert exc_info.value.endpoint == "upload"
        assert exc_info.value.status_code == 403

    def test_upload_connection_error(self):
        """Network failures become TransportError"""

        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError) as exc_info:
            make_api(handler).upload("abc", io.BytesIO(b"x"))

        assert exc_info.value.endpoint == "upload"
        assert exc_info.value.status_code is None


# =============================================================================
# STATUS
# =============================================================================


class TestFetchStatus:
    """GET /gfycats/fetch/status/{id}"""

    def test_status_url_and_encoding(self):
        """Encoding status with progress"""
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["url"] = str(request.url)
            return httpx.Response(
                200,
                json={"task": "encoding", "gfyname": "abc", "progress": 0.42},
            )

        status = make_api(handler).fetch_status("abc")

        assert seen == {
            "method": "GET",
            "url": "https://api.test/v1/gfycats/fetch/status/abc",
        }
        assert status.phase == PublishPhase.ENCODING
        assert status.progress == 0.42
        assert status.id == "abc"

    @pytest.mark.parametrize(
        "task, phase",
        [
            ("NotFoundo", PublishPhase.PENDING),
            ("encoding", PublishPhase.ENCODING),
            ("complete", PublishPhase.COMPLETE),
            ("error", PublishPhase.ERROR),
            ("something_else", PublishPhase.ERROR),
        ],
    )
    def test_phase_mapping(self, task, phase):
        """Wire strings map to phases, unknown ones to ERROR"""
        api = make_api(lambda request: httpx.Response(200, json={"task": task}))

        status = api.fetch_status("abc")

        assert status.phase == phase
        assert status.raw_phase == task

    def test_string_progress(self):
        """Progress sent as a string is parsed"""
        api = make_api(
            lambda request: httpx.Response(
                200, json={"task": "encoding", "progress": "0.75"}
            ),
        )

        assert api.fetch_status("abc").progress == 0.75

    def test_invalid_progress(self):
        """Unparseable progress is a malformed body"""
        api = make_api(
            lambda request: httpx.Response(
                200, json={"task": "encoding", "progress": "lots"}
            ),
        )

        with pytest.raises(TransportError) as exc_info:
            api.fetch_status("abc")

        assert exc_info.value.endpoint == "status"

    def test_malformed_json(self):
        """Non-JSON body is a TransportError"""
        api = make_api(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(TransportError) as exc_info:
            api.fetch_status("abc")

        assert exc_info.value.endpoint == "status"

    def test_non_object_json(self):
        """JSON that is not an object is a TransportError"""
        api = make_api(lambda request: httpx.Response(200, json=["encoding"]))

        with pytest.raises(TransportError):
            api.fetch_status("abc")

    def test_status_http_error(self):
        """Non-2xx from the status endpoint names it"""
        api = make_api(lambda request: httpx.Response(404))

        with pytest.raises(TransportError) as exc_info:
            api.fetch_status("abc")

        assert exc_info.value.endpoint == "status"
        assert exc_info.value.status_code == 404


# =============================================================================
# LIFECYCLE
# =============================================================================


class TestLifecycle:
    """Availability and cleanup"""

    def test_owned_client_closes(self):
        """close() releases a client the adapter created"""
        api = GfycatAPI(api_base_url=API_BASE, upload_url=UPLOAD_URL)
        assert api.is_available() is True

        api.close()

        assert api.is_available() is False

    def test_injected_client_left_open(self):
        """close() does not close a caller-provided client"""
        client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        api = GfycatAPI(api_base_url=API_BASE, upload_url=UPLOAD_URL, client=client)

        api.close()

        assert client.is_closed is False
        client.close()
