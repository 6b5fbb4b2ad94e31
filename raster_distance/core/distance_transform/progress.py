"""Progress reporting for the distance transform passes."""

import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)

# Called with (pass name, integer percent complete)
ProgressCallback = Callable[[str, int], None]

PASS_INITIALIZE = "initializing"
PASS_FORWARD = "pass 1 of 3"
PASS_BACKWARD = "pass 2 of 3"
PASS_FINALIZE = "pass 3 of 3"


def log_progress(pass_name: str, percent: int) -> None:
    """Default progress sink that writes to the module logger."""
    logger.info(f"{pass_name}: {percent}%")


class RowProgress:
    """
    Per-row progress tracker for a single pass.

    Converts completed row counts into integer percentages and forwards them
    to the callback only when the percentage changes.
    """

    def __init__(self, pass_name: str, rows: int, callback: Optional[ProgressCallback] = None):
        self.pass_name = pass_name
        self.rows = rows
        self.callback = callback
        self._last = -1

    def update(self, rows_done: int) -> None:
        """
        Report that ``rows_done`` rows of the pass have been processed.

        Args:
            rows_done: Number of completed rows, between 1 and ``rows``
        """
        if self.callback is None:
            return

        if self.rows <= 1:
            percent = 100
        else:
            percent = int(100.0 * (rows_done - 1) / (self.rows - 1))

        if percent != self._last:
            self._last = percent
            self.callback(self.pass_name, percent)
