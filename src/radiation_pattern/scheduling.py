"""
Redraw coalescing.

Parameter changes can arrive much faster than the display refreshes. A
RedrawScheduler lets any number of requests between two refresh ticks
collapse into a single recomputation.
"""
import logging
from typing import Callable

# Configure logging
logger = logging.getLogger(__name__)


class RedrawScheduler:
    """
    Single-flight scheduler for redraw passes.

    Args:
        callback: The recomputation to run
        defer: Hands a zero-argument function to the event loop to run at the
            next refresh opportunity (in Qt, ``lambda fn: QTimer.singleShot(0, fn)``)

    Example:
        ```python
        pending = []
        scheduler = RedrawScheduler(redraw, pending.append)
        scheduler.request()   # True, pass scheduled
        scheduler.request()   # False, coalesced into the pending pass
        pending.pop()()       # runs redraw once
        ```
    """

    def __init__(self, callback: Callable[[], None], defer: Callable[[Callable[[], None]], None]):
        self._callback = callback
        self._defer = defer
        self._pending = False
        self.runs = 0
        self.coalesced = 0

    @property
    def pending(self) -> bool:
        """True while a pass is scheduled but has not finished."""
        return self._pending

    def request(self) -> bool:
        """
        Ask for a redraw.

        Returns:
            bool: True if a new pass was scheduled, False if the request was
                merged into one that is already pending
        """
        if self._pending:
            self.coalesced += 1
            return False

        self._pending = True
        self._defer(self._run)
        return True

    def _run(self) -> None:
        try:
            self._callback()
            self.runs += 1
        finally:
            self._pending = False
