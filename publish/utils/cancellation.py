"""
Cancellation Token

Thread-safe flag a caller can set from another thread to stop a
running publish. Waiting on the token doubles as the poll delay, so a
cancel wakes the poll loop immediately instead of after the interval.
"""

import threading


class CancelToken:
    """
    Caller-owned cancellation flag.

    Usage:
        token = CancelToken()
        worker = threading.Thread(
            target=publisher.publish, args=(stream, sink, token)
        )
        worker.start()
        ...
        token.cancel()
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation. Idempotent."""
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float) -> bool:
        """
        Sleep up to timeout seconds, returning early on cancel.

        Returns:
            True if cancelled (before or during the wait)
        """
        return self._event.wait(timeout)
