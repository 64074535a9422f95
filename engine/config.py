"""
config.py — Playback Configuration
===================================
The four options a run is configured with:

    algorithm  : "bfs" | "dijkstra" | "astar"
    directed   : bool
    step_mode  : bool  (False = automatic playback, True = manual stepping)
    speed      : number, higher = shorter delay between steps

Speed follows the slider semantics of the editor: a value in
[MIN_SPEED, MAX_SPEED] mapped to an inter-step delay of
(1000 - speed) ms, floored at MIN_DELAY seconds.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Union

from errors import ConfigError
from algorithms import Algorithm


MIN_SPEED:     float = 0.0
MAX_SPEED:     float = 950.0
DEFAULT_SPEED: float = 400.0
MIN_DELAY:     float = 0.02       # seconds

# named speeds for the playback dropdown
SPEED_PRESETS: Dict[str, float] = {
    "slow":   0.0,      # 1.0 s per step, teaching mode
    "medium": 600.0,    # 0.4 s
    "fast":   850.0,    # 0.15 s, demo mode
    "turbo":  950.0,    # 0.05 s
}


def clamp_speed(speed: float) -> float:
    return max(MIN_SPEED, min(MAX_SPEED, float(speed)))


def speed_to_delay(speed: float) -> float:
    """Seconds between automatic advancements for a speed value."""
    return max(MIN_DELAY, (1000.0 - clamp_speed(speed)) / 1000.0)


def resolve_speed(value: Union[str, float, int, None]) -> float:
    """Accept a preset name or a number; return a clamped speed value."""
    if value is None:
        return DEFAULT_SPEED
    if isinstance(value, str) and value in SPEED_PRESETS:
        return SPEED_PRESETS[value]
    try:
        return clamp_speed(float(value))
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid speed: {value!r}") from None


def _as_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "1", "yes", "on"):
        return True
    if isinstance(value, str) and value.lower() in ("false", "0", "no", "off", ""):
        return False
    if isinstance(value, int):
        return bool(value)
    raise ConfigError(f"Invalid value for {name}: {value!r}")


@dataclass(frozen=True)
class PlaybackConfig:
    algorithm: Algorithm = Algorithm.DIJKSTRA
    directed:  bool      = False
    step_mode: bool      = False
    speed:     float     = DEFAULT_SPEED

    @property
    def delay(self) -> float:
        return speed_to_delay(self.speed)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PlaybackConfig":
        """Validate raw request / settings data.  Unknown algorithm tags raise."""
        return cls(
            algorithm=Algorithm.parse(data.get("algorithm", cls.algorithm.value)),
            directed=_as_bool(data.get("directed", False), "directed"),
            step_mode=_as_bool(data.get("step_mode", False), "step_mode"),
            speed=resolve_speed(data.get("speed")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "algorithm": self.algorithm.value,
            "directed":  self.directed,
            "step_mode": self.step_mode,
            "speed":     self.speed,
            "delay":     self.delay,
        }
