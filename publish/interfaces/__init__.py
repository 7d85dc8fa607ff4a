"""
Interfaces Package

Abstract remote API, its records and errors, and progress event types.
"""

from publish.interfaces.progress_interface import ProgressEvent, ProgressSink
from publish.interfaces.remote_api_interface import (
    CreateRequest,
    ProcessingStatus,
    ProtocolError,
    PublishCancelled,
    PublishError,
    PublishTimeoutError,
    RemoteAPIInterface,
    TransportError,
    UploadTicket,
)

__all__ = [
    "CreateRequest",
    "ProcessingStatus",
    "ProgressEvent",
    "ProgressSink",
    "ProtocolError",
    "PublishCancelled",
    "PublishError",
    "PublishTimeoutError",
    "RemoteAPIInterface",
    "TransportError",
    "UploadTicket",
]
