"""
Publish Test Configuration and Fixtures

Shared fixtures for publish module tests.

To use pytest:
    pip install -e .[test]
    pytest tests/publish/
"""

import io
import os
import tempfile

import pytest

from publish.controllers.publisher import Publisher
from publish.implementations.mock_api import MockRemoteAPI

# =============================================================================
# PROGRESS / TIMING FIXTURES
# =============================================================================


@pytest.fixture
def events():
    """
    Provide a list that doubles as a progress sink.

    Usage:
        def test_something(events):
            publisher.publish(stream, events.append)
            assert events[0].kind == ProgressKind.CREATING
    """
    return []


@pytest.fixture
def sleep_calls():
    """
    Provide a list of every delay the publisher asked for.

    Pass its append method as Publisher(sleep=...) so no test really waits.
    """
    return []


# =============================================================================
# PUBLISHER FIXTURES
# =============================================================================


@pytest.fixture
def make_publisher(sleep_calls):
    """
    Build a Publisher around a given API with a recording sleep.

    Usage:
        def test_publish(make_publisher):
            publisher = make_publisher(MockRemoteAPI(), max_pending_polls=3)
    """

    def _make(api, **kwargs):
        kwargs.setdefault("poll_interval", 1.0)
        kwargs.setdefault("max_pending_polls", None)
        return Publisher(api=api, sleep=sleep_calls.append, **kwargs)

    return _make


@pytest.fixture
def mock_api():
    """Provide a MockRemoteAPI with the default status script"""
    api = MockRemoteAPI(ticket_id="abc")
    yield api
    api.close()


@pytest.fixture
def file_stream():
    """In-memory stream standing in for an opened file"""
    return io.BytesIO(b"file")


# =============================================================================
# FILE FIXTURES
# =============================================================================


@pytest.fixture
def temp_media_file():
    """Create a temporary media file for testing"""
    with tempfile.NamedTemporaryFile(suffix=".mp4", delete=False, mode="wb") as f:
        f.write(b"0" * 4096)
        temp_path = f.name

    yield temp_path

    # Cleanup
    if os.path.exists(temp_path):
        os.unlink(temp_path)
