"""
timer.py — Single-Shot Auto-Play Timer
========================================
Holds AT MOST ONE pending callback, due a given number of milliseconds
after it was scheduled.

    timer = AutoPlayTimer()
    timer.schedule(500, advance)    # replaces anything already pending
    timer.cancel()                  # pending callback will never fire
    timer.tick()                    # fire the callback if it is due

Nothing runs in the background: the host calls tick() from its own
event loop / poll handler, exactly like the playback engine's old
`tick()` contract.  That keeps everything on one thread, so a cancel is
immediate and total.

The clock (seconds, monotonic) is injectable so tests can drive time by
hand.  Elapsed time is compared in whole milliseconds.
"""

import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class AutoPlayTimer:
    """
    Attributes:
        clock : Zero-arg callable returning seconds (time.monotonic by default).
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._started_at: float                        = 0.0
        self._delay_ms:   int                          = 0
        self._callback:   Optional[Callable[[], None]] = None

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------
    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> None:
        """Arm the timer; any callback already pending is cancelled first."""
        self.cancel()
        self._started_at = self.clock()
        self._delay_ms = delay_ms
        self._callback = callback
        logger.debug("auto-play tick scheduled in %d ms", delay_ms)

    def cancel(self) -> bool:
        """Drop the pending callback.  Returns True if one was pending."""
        if self._callback is None:
            return False
        self._callback = None
        logger.debug("auto-play tick cancelled")
        return True

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / request handler)
    # ------------------------------------------------------------------
    def tick(self) -> bool:
        """Fire the pending callback if its delay has elapsed.  Returns True if fired."""
        if self._callback is None or self._elapsed_ms() < self._delay_ms:
            return False
        callback = self._callback
        # disarm before firing so the callback may schedule the next tick
        self._callback = None
        logger.debug("auto-play tick fired")
        callback()
        return True

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def is_pending(self) -> bool:
        return self._callback is not None

    @property
    def remaining_ms(self) -> Optional[int]:
        if self._callback is None:
            return None
        return max(0, self._delay_ms - self._elapsed_ms())

    def _elapsed_ms(self) -> int:
        return int(round((self.clock() - self._started_at) * 1000))
