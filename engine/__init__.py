"""
engine/
-------
Playback layer.

    from engine import PlaybackController, PlaybackState, SPEED_PRESETS
"""

from engine.timer    import AutoPlayTimer
from engine.playback import (
    PlaybackController,
    PlaybackState,
    SPEED_PRESETS,
    MIN_DELAY_MS,
    MAX_DELAY_MS,
    DEFAULT_DELAY_MS,
    clamp_delay,
)

__all__ = [
    "AutoPlayTimer",
    "PlaybackController",
    "PlaybackState",
    "SPEED_PRESETS",
    "MIN_DELAY_MS",
    "MAX_DELAY_MS",
    "DEFAULT_DELAY_MS",
    "clamp_delay",
]
