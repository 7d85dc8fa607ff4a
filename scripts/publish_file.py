#!/usr/bin/env python3
"""
Publish File - Command-line Entry Point

Publishes one media file to Gfycat, prints progress while the service
encodes it, and prints (or opens) the resulting detail page.

Usage:
    python scripts/publish_file.py clip.mp4             # Publish and print URL
    python scripts/publish_file.py clip.mp4 --open      # Also open in browser
    python scripts/publish_file.py clip.mp4 --mock      # Scripted API, no network
    python scripts/publish_file.py clip.mp4 --max-pending 0   # Never give up polling

Exit code is 0 on success, 1 on any failure.
"""

import argparse
import logging
import sys
import webbrowser
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.logging_setup import setup_logging
from config.settings import MAX_PENDING_POLLS, POLL_INTERVAL
from publish import PublishController, Publisher, create_remote_api
from publish.interfaces.progress_interface import ProgressEvent

logger = logging.getLogger(__name__)


def print_progress(event: ProgressEvent) -> None:
    """Console progress sink"""
    print(str(event), flush=True)


def non_negative_int(value: str) -> int:
    """argparse type for counts where 0 means unlimited"""
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Publish a media file to Gfycat and wait for encoding.",
    )
    parser.add_argument("path", type=Path, help="Path to the file to publish")
    parser.add_argument(
        "--open",
        action="store_true",
        help="Open the detail page in the default browser on success",
    )
    parser.add_argument(
        "--mock",
        action="store_true",
        help="Use the scripted mock API instead of the real service",
    )
    parser.add_argument(
        "--max-pending",
        type=non_negative_int,
        default=MAX_PENDING_POLLS,
        help=f"Status polls tolerated before the upload shows up "
        f"(0 = unlimited, default: {MAX_PENDING_POLLS})",
    )
    parser.add_argument(
        "--poll-interval",
        type=float,
        default=POLL_INTERVAL,
        help=f"Seconds between status polls (default: {POLL_INTERVAL})",
    )
    parser.add_argument(
        "--no-log-file",
        action="store_true",
        help="Log to the console only",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_to_file=not args.no_log_file,
    )

    logger.info(f"Selected file: {args.path}")

    try:
        api = create_remote_api(force_mock=args.mock)
    except RuntimeError as e:
        logger.error(f"Cannot create remote API: {e}")
        print(f"❌ Publish failed: {e}", file=sys.stderr)
        return 1

    publisher = Publisher(
        api=api,
        poll_interval=args.poll_interval,
        max_pending_polls=args.max_pending,
    )
    controller = PublishController(publisher=publisher)

    try:
        result = controller.publish_file(args.path, progress_sink=print_progress)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 1
    finally:
        controller.cleanup()

    if not result.success:
        print(f"❌ Publish failed: {result.error_message}", file=sys.stderr)
        return 1

    print(f"✅ Published: {result.url}")

    if args.open:
        logger.info(f"Opening '{result.url}' in default browser...")
        webbrowser.open(result.url)

    return 0


if __name__ == "__main__":
    sys.exit(main())
