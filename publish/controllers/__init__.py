"""
Controllers Package

Publish protocol driver and high-level coordinator.
"""

from publish.controllers.publish_controller import PublishController, PublishResult
from publish.controllers.publisher import Publisher

__all__ = [
    "PublishController",
    "PublishResult",
    "Publisher",
]
