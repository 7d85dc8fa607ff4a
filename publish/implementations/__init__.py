"""
Implementations Package

Concrete remote API and progress sink implementations.
"""

from publish.implementations.gfycat_api import GfycatAPI
from publish.implementations.log_progress import LogProgressSink
from publish.implementations.mock_api import MockRemoteAPI

__all__ = [
    "GfycatAPI",
    "LogProgressSink",
    "MockRemoteAPI",
]
