"""LogProgressSink: reports publish progress through logging."""

import logging

from publish.interfaces.progress_interface import ProgressEvent


class LogProgressSink:
    """
    Progress sink that logs each event.

    Indeterminate events log as "Creating gfycat ...",
    encoding updates as "Encoding 0.42".
    """

    def __init__(self, level: int = logging.INFO):
        self.logger = logging.getLogger(__name__)
        self.level = level

    def __call__(self, event: ProgressEvent) -> None:
        self.logger.log(self.level, str(event))
