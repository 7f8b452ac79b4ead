"""
playback.py — Step-by-Step Playback Controller
================================================
The PlaybackController is the ONLY object the UI interacts with during
a run.  It owns the active Trace, the current position in it and the
auto-play timer, and exposes a clean next/prev/goto/play/pause/speed API.

State machine:
    EMPTY    →  load()            →  READY (index -1)
    READY    →  step_forward()    →  STEPPING
    any      →  start_auto_play() →  PLAYING
    PLAYING  →  (last step shown) →  FINISHED
    PLAYING  →  stop / any manual navigation  →  STEPPING
    any      →  reset() / load()  →  READY

Timer discipline:
  At most one auto-advance is ever pending.  Every call that moves the
  index (step_forward, step_backward, goto, reset, load) cancels the
  pending advance FIRST, so manual and automatic stepping never race.

Thread safety:
  This class is NOT thread-safe.  The host must call it (and tick())
  from a single thread, or serialise access itself.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from algorithms import Step, Trace
from engine.timer import AutoPlayTimer

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Delay bounds & speed presets (milliseconds per step)
# ---------------------------------------------------------------------------
MIN_DELAY_MS:     int = 100
MAX_DELAY_MS:     int = 2000
DEFAULT_DELAY_MS: int = 500

SPEED_PRESETS: Dict[str, int] = {
    "slow":   1000,   # teaching mode
    "medium": 500,
    "fast":   200,    # demo mode
    "turbo":  100,
}


def clamp_delay(ms: int) -> int:
    return max(MIN_DELAY_MS, min(MAX_DELAY_MS, int(ms)))


# ---------------------------------------------------------------------------
# PlaybackState — read-only snapshot for the renderer
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class PlaybackState:
    current_index:   int           = -1
    total_steps:     int           = 0
    is_auto_playing: bool          = False
    delay_ms:        int           = DEFAULT_DELAY_MS
    current_step:    Optional[Step] = None

    def to_dict(self) -> dict:
        return {
            "current_index":   self.current_index,
            "total_steps":     self.total_steps,
            "is_auto_playing": self.is_auto_playing,
            "delay_ms":        self.delay_ms,
            "current_step":    self.current_step.to_dict() if self.current_step else None,
        }


# ---------------------------------------------------------------------------
# PlaybackController
# ---------------------------------------------------------------------------
class PlaybackController:
    """
    Attributes:
        on_step : Optional callback(Step | None) fired every time the
                  displayed step changes.  None means "nothing shown".
                  The UI hooks its re-render here.
    """

    def __init__(
        self,
        on_step: Optional[Callable[[Optional[Step]], None]] = None,
        clock: Callable[[], float] = time.monotonic,
        delay_ms: int = DEFAULT_DELAY_MS,
    ):
        self._trace:         Optional[Trace] = None
        self._index:         int             = -1
        self._auto_playing:  bool            = False
        self._delay_ms:      int             = clamp_delay(delay_ms)
        self._timer:         AutoPlayTimer   = AutoPlayTimer(clock)
        self.on_step:        Optional[Callable[[Optional[Step]], None]] = on_step

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self, trace: Optional[Trace]) -> None:
        """Install a new trace (or None) and rewind to 'not started'."""
        self._halt()
        self._trace = trace
        self._goto(-1)
        if trace is not None:
            logger.debug("trace loaded: %d steps from %s", len(trace), trace.start_node)

    def reset(self) -> None:
        """Back to index -1 on the same trace; stops auto-play."""
        self.load(self._trace)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def step_forward(self) -> Optional[Step]:
        """Advance one step.  Returns the new Step, or None if already at the end."""
        self._halt()
        return self._advance()

    def step_backward(self) -> Optional[Step]:
        """Rewind one step.  Returns the new Step, or None at index <= 0."""
        self._halt()
        if self._index <= 0:
            return None
        self._goto(self._index - 1)
        return self.current_step

    def goto(self, index: int) -> Optional[Step]:
        """Jump to an arbitrary index in [-1, last].  Out of range is a no-op."""
        self._halt()
        if self._trace is None or not (-1 <= index < len(self._trace)):
            return None
        self._goto(index)
        return self.current_step

    # ------------------------------------------------------------------
    # Auto-play
    # ------------------------------------------------------------------
    def start_auto_play(self) -> None:
        if self._trace is None:
            return
        if self._index >= self.last_index:
            # replay from the start
            self._goto(-1)
        self._auto_playing = True
        self._timer.schedule(self._delay_ms, self._auto_advance)

    def stop_auto_play(self) -> None:
        self._auto_playing = False
        self._timer.cancel()

    def toggle_auto_play(self) -> None:
        if self._auto_playing:
            self.stop_auto_play()
        else:
            self.start_auto_play()

    def tick(self) -> bool:
        """Call periodically from the host loop.  Returns True if a step was taken."""
        return self._timer.tick()

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_delay(self, ms: int) -> int:
        """Clamp to [100, 2000] ms.  An advance already pending keeps its old due time."""
        self._delay_ms = clamp_delay(ms)
        return self._delay_ms

    def set_speed(self, preset: str) -> int:
        if preset not in SPEED_PRESETS:
            raise KeyError(f"Unknown speed preset: {preset}")
        return self.set_delay(SPEED_PRESETS[preset])

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def trace(self) -> Optional[Trace]:
        return self._trace

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def current_step(self) -> Optional[Step]:
        if self._trace is not None and self._index >= 0:
            return self._trace[self._index]
        return None

    @property
    def last_index(self) -> int:
        return len(self._trace) - 1 if self._trace is not None else -1

    @property
    def total_steps(self) -> int:
        return len(self._trace) if self._trace is not None else 0

    @property
    def is_auto_playing(self) -> bool:
        return self._auto_playing

    @property
    def delay_ms(self) -> int:
        return self._delay_ms

    @property
    def is_finished(self) -> bool:
        return self._trace is not None and self._index == self.last_index

    @property
    def has_pending_tick(self) -> bool:
        return self._timer.is_pending

    @property
    def state(self) -> PlaybackState:
        return PlaybackState(
            current_index=self._index,
            total_steps=self.total_steps,
            is_auto_playing=self._auto_playing,
            delay_ms=self._delay_ms,
            current_step=self.current_step,
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _halt(self) -> None:
        """Cancel-before-mutate: no pending advance survives manual navigation."""
        self._timer.cancel()
        self._auto_playing = False

    def _advance(self) -> Optional[Step]:
        if self._trace is None or self._index >= self.last_index:
            return None
        self._goto(self._index + 1)
        return self.current_step

    def _auto_advance(self) -> None:
        if not self._auto_playing:
            return
        self._advance()
        if self._index >= self.last_index:
            self._auto_playing = False
            logger.debug("auto-play reached the last step; stopping")
        else:
            self._timer.schedule(self._delay_ms, self._auto_advance)

    def _goto(self, idx: int) -> None:
        self._index = idx
        self._notify(self.current_step)

    def _notify(self, step: Optional[Step]) -> None:
        if self.on_step:
            self.on_step(step)
