"""
Publish Utilities Package

Exposes shared helpers for publish operations.
"""

from publish.utils.cancellation import CancelToken

# Public API
__all__ = [
    "CancelToken",
]
