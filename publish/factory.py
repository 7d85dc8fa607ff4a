"""
Remote API Factory

Factory pattern for creating remote API implementations.
Configured from config/settings.py (and so from the environment).
"""

import logging
from typing import Literal, Optional

from config.settings import API_BASE_URL, HTTP_TIMEOUT, PUBLISHER_MODE, UPLOAD_URL
from publish.implementations.gfycat_api import GfycatAPI
from publish.implementations.mock_api import MockRemoteAPI
from publish.interfaces.remote_api_interface import RemoteAPIInterface

# Type alias
RemoteAPIMode = Literal["auto", "gfycat", "mock"]

VALID_MODES = ("auto", "gfycat", "mock")


class RemoteAPIFactory:
    """
    Factory for creating remote API implementations.

    Reads configuration from settings:
    - PUBLISHER_MODE: default mode
    - GFYCAT_API_BASE_URL / GFYCAT_UPLOAD_URL: endpoints
    - HTTP_TIMEOUT: per-request timeout

    Usage:
        # Mode from environment
        api = RemoteAPIFactory.create_api()

        # Force mock for testing
        api = RemoteAPIFactory.create_api(mode="mock")
    """

    _logger = logging.getLogger(__name__)

    @classmethod
    def create_api(cls, mode: Optional[RemoteAPIMode] = None) -> RemoteAPIInterface:
        """
        Create a remote API instance.

        The mock is only ever returned when asked for explicitly; a
        misconfigured real client raises instead of silently publishing
        nowhere.

        Args:
            mode: "gfycat" (real client), "auto" (same as "gfycat"),
                "mock" (scripted). None reads PUBLISHER_MODE.

        Returns:
            RemoteAPIInterface implementation

        Raises:
            ValueError: Unknown mode
            RuntimeError: If the real client cannot be built
        """
        mode = mode or PUBLISHER_MODE
        if mode not in VALID_MODES:
            raise ValueError(
                f"Unknown remote API mode: {mode!r} (valid: {VALID_MODES})",
            )

        if mode == "mock":
            cls._logger.info("Creating Mock Remote API (forced)")
            return MockRemoteAPI()

        try:
            api = cls._create_gfycat_api()
        except Exception as e:
            raise RuntimeError(f"Gfycat API not available: {e}") from e

        cls._logger.info(f"Creating Gfycat API (mode: {mode})")
        return api

    @classmethod
    def _create_gfycat_api(cls) -> GfycatAPI:
        if not API_BASE_URL or not UPLOAD_URL:
            raise ValueError(
                "GFYCAT_API_BASE_URL and GFYCAT_UPLOAD_URL must not be empty",
            )

        return GfycatAPI(
            api_base_url=API_BASE_URL,
            upload_url=UPLOAD_URL,
            timeout=HTTP_TIMEOUT,
        )


# Convenience function for quick creation
def create_remote_api(force_mock: bool = False) -> RemoteAPIInterface:
    """
    Quick API creation with simple mock override.

    Example:
        api = create_remote_api()
        api = create_remote_api(force_mock=True)
    """
    return RemoteAPIFactory.create_api(mode="mock" if force_mock else None)
