"""
Publish Module

Publishes a media file to Gfycat: create, upload, then poll until the
service has finished encoding.

Public API:
    - PublishController: High-level publish coordinator
    - Publisher: Three-phase protocol driver
    - PublishResult: Publish operation result
    - PublishStatus: Status codes
    - ProgressEvent: Progress notification
    - CancelToken: Caller-side cancellation
    - create_remote_api: Factory function

Usage:
    from publish import PublishController

    controller = PublishController()
    result = controller.publish_file("/path/to/clip.mp4")
    print(result.url)
"""

from publish.constants import ProgressKind, PublishPhase, PublishStatus
from publish.controllers.publish_controller import PublishController, PublishResult
from publish.controllers.publisher import Publisher
from publish.factory import create_remote_api
from publish.interfaces.progress_interface import ProgressEvent
from publish.interfaces.remote_api_interface import (
    ProtocolError,
    PublishCancelled,
    PublishError,
    PublishTimeoutError,
    TransportError,
)
from publish.utils.cancellation import CancelToken

# Public API
__all__ = [
    "CancelToken",
    "ProgressEvent",
    "ProgressKind",
    "ProtocolError",
    "PublishCancelled",
    "PublishController",
    "PublishError",
    "PublishPhase",
    "PublishResult",
    "PublishStatus",
    "PublishTimeoutError",
    "Publisher",
    "TransportError",
    "create_remote_api",
]
