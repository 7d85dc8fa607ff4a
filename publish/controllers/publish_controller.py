"""
Publish Controller

High-level coordinator for publishing a file.
Simplifies publish operations for scripts and services:
- Clean, simple API (path in, PublishResult out)
- Handles file validation and the file handle lifetime
- Turns publish errors into a result object and logs them
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from config.settings import MAX_FILE_SIZE, SITE_URL
from publish.constants import DETAIL_PATH, PublishStatus
from publish.controllers.publisher import Publisher
from publish.factory import create_remote_api
from publish.implementations.log_progress import LogProgressSink
from publish.interfaces.progress_interface import ProgressSink
from publish.interfaces.remote_api_interface import PublishError, RemoteAPIInterface
from publish.utils.cancellation import CancelToken


@dataclass
class PublishResult:
    """
    Result of a publish operation.

    Attributes:
        success: True if the service finished processing the file
        identifier: Identifier assigned by the service (if successful)
        url: Public detail page URL (if successful)
        status: Publish status code
        error_message: Error description (if failed)
        duration: Time taken in seconds
        file_size: Size of the published file in bytes
    """

    success: bool
    identifier: Optional[str] = None
    url: Optional[str] = None
    status: PublishStatus = PublishStatus.SUCCESS
    error_message: Optional[str] = None
    duration: float = 0.0
    file_size: int = 0


class PublishController:
    """
    High-level publish controller.

    Usage:
        controller = PublishController()

        result = controller.publish_file("/path/to/clip.mp4")
        if result.success:
            print(f"Published: {result.url}")
    """

    def __init__(
        self,
        api: Optional[RemoteAPIInterface] = None,
        publisher: Optional[Publisher] = None,
        site_url: str = SITE_URL,
        max_file_size: int = MAX_FILE_SIZE,
    ):
        """
        Initialize publish controller.

        Args:
            api: RemoteAPIInterface implementation, or None to auto-create
            publisher: Pre-configured Publisher (overrides api)
            site_url: Public site used for detail URLs
            max_file_size: Largest accepted file, in bytes

        Example:
            # Normal usage - configured from .env
            controller = PublishController()

            # Scripted API (testing)
            controller = PublishController(api=MockRemoteAPI())
        """
        self.logger = logging.getLogger(__name__)

        if publisher is None:
            publisher = Publisher(api=api or create_remote_api())
        self.publisher = publisher
        self.api = publisher.api
        self.site_url = site_url.rstrip("/")
        self.max_file_size = max_file_size

        if not self.api.is_available():
            self.logger.warning("Remote API initialized but not available")

        self.logger.info("Publish Controller initialized")

    def publish_file(
        self,
        file_path: Union[str, Path],
        progress_sink: Optional[ProgressSink] = None,
        cancel_token: Optional[CancelToken] = None,
    ) -> PublishResult:
        """
        Publish a file and wait for the service to process it.

        Args:
            file_path: Path of the file to publish
            progress_sink: Receives progress events (logged if None)
            cancel_token: Optional token to abort from another thread

        Returns:
            PublishResult with success status and details

        Example:
            result = controller.publish_file("clip.mp4")
            if not result.success:
                logger.error(f"Publish failed: {result.error_message}")
        """
        path = Path(file_path)
        sink = progress_sink or LogProgressSink()
        start_time = time.time()
        file_size = 0

        try:
            file_size = self._validate_file(path)

            self.logger.info(f"Publishing file: {path} ({file_size} bytes)")

            with path.open("rb") as file_stream:
                identifier = self.publisher.publish(file_stream, sink, cancel_token)

            duration = time.time() - start_time
            url = self.build_detail_url(identifier)

            self.logger.info(f"✅ Published {path.name}: {url} ({duration:.1f}s)")

            return PublishResult(
                success=True,
                identifier=identifier,
                url=url,
                status=PublishStatus.SUCCESS,
                duration=duration,
                file_size=file_size,
            )

        except PublishError as e:
            duration = time.time() - start_time
            self.logger.error(f"❌ Publish failed: {e} (status: {e.status.value})")

            return PublishResult(
                success=False,
                status=e.status,
                error_message=str(e),
                duration=duration,
                file_size=file_size,
            )

        except OSError as e:
            duration = time.time() - start_time
            error_msg = f"Cannot read {path}: {e}"
            self.logger.error(f"❌ {error_msg}")

            return PublishResult(
                success=False,
                status=PublishStatus.INVALID_FILE,
                error_message=error_msg,
                duration=duration,
                file_size=file_size,
            )

    def build_detail_url(self, identifier: str) -> str:
        """
        Build the public detail page URL for an identifier.

        Example:
            build_detail_url("abc")
            # Returns: "https://gfycat.com/gifs/detail/abc"
        """
        return f"{self.site_url}{DETAIL_PATH.format(id=identifier)}"

    def _validate_file(self, path: Path) -> int:
        """
        Validate file before publishing.

        Returns:
            File size in bytes

        Raises:
            PublishError: If file is missing, empty or too large
        """
        if not path.exists():
            raise PublishError(f"File not found: {path}", PublishStatus.INVALID_FILE)

        if not path.is_file():
            raise PublishError(f"Not a regular file: {path}", PublishStatus.INVALID_FILE)

        file_size = path.stat().st_size

        if file_size == 0:
            raise PublishError(f"File is empty: {path}", PublishStatus.INVALID_FILE)

        if file_size > self.max_file_size:
            raise PublishError(
                f"File too large ({file_size} bytes). "
                f"Maximum: {self.max_file_size} bytes",
                PublishStatus.INVALID_FILE,
            )

        return file_size

    def is_ready(self) -> bool:
        """
        Check if the remote API is ready.

        Returns:
            True if requests can be issued
        """
        return self.api.is_available()

    def get_status(self) -> Dict[str, Any]:
        """
        Get current controller status.

        Returns:
            Dictionary with status information
        """
        return {
            "ready": self.is_ready(),
            "api_type": type(self.api).__name__,
            "site_url": self.site_url,
            "poll_interval": self.publisher.poll_interval,
            "max_pending_polls": self.publisher.max_pending_polls,
        }

    def cleanup(self) -> None:
        """Release the API client's network resources"""
        self.api.close()
        self.logger.info("Publish Controller cleanup")
