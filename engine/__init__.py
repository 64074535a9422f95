"""
engine/
-------
Recording & playback layer.

    from engine import PlaybackController, PlaybackConfig, run_search
"""

from engine.config    import (
    PlaybackConfig,
    SPEED_PRESETS,
    DEFAULT_SPEED,
    resolve_speed,
    speed_to_delay,
)
from engine.scheduler import TickScheduler
from engine.recorder  import RunMetrics, run_search
from engine.playback  import Highlight, PlaybackController, PlaybackState

__all__ = [
    "PlaybackConfig",
    "SPEED_PRESETS",
    "DEFAULT_SPEED",
    "resolve_speed",
    "speed_to_delay",
    "TickScheduler",
    "RunMetrics",
    "run_search",
    "Highlight",
    "PlaybackController",
    "PlaybackState",
]
