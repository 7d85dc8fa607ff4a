"""
Progress Interface

Progress events emitted by the Publisher and the sink type that
receives them. A sink is any callable taking a ProgressEvent; delivery
is synchronous and in order.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from publish.constants import ProgressKind


@dataclass(frozen=True)
class ProgressEvent:
    """
    Caller-visible progress notification.

    Attributes:
        kind: Step of the publish protocol
        message: Human-readable description
        progress: Completion fraction, or None for a step change
    """

    kind: ProgressKind
    message: str
    progress: Optional[float] = None

    @property
    def is_indeterminate(self) -> bool:
        return self.progress is None

    def __str__(self) -> str:
        if self.is_indeterminate:
            return f"{self.message} ..."
        return f"{self.message} {self.progress}"


ProgressSink = Callable[[ProgressEvent], None]
