"""Tests for algorithm dispatch and playback configuration."""

import pytest

from errors import ConfigError, UnknownAlgorithmError
from algorithms import Algorithm, REGISTRY, get_algorithm, list_algorithms, run_algorithm
from engine.config import (
    DEFAULT_SPEED,
    MIN_DELAY,
    SPEED_PRESETS,
    PlaybackConfig,
    resolve_speed,
    speed_to_delay,
)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("name, expected", [
    ("bfs", Algorithm.BFS),
    ("dijkstra", Algorithm.DIJKSTRA),
    ("astar", Algorithm.ASTAR),
    (" AStar ", Algorithm.ASTAR),
    (Algorithm.BFS, Algorithm.BFS),
])
def test_parse_known_tags(name, expected):
    assert Algorithm.parse(name) is expected


@pytest.mark.parametrize("name", ["dfs", "", None, "a*"])
def test_parse_rejects_unknown_tags(name):
    with pytest.raises(UnknownAlgorithmError):
        Algorithm.parse(name)


def test_unknown_algorithm_is_a_value_error():
    with pytest.raises(ValueError, match="Unknown algorithm"):
        get_algorithm("bellman_ford")


def test_registry_covers_every_tag():
    assert set(REGISTRY) == set(Algorithm)
    assert [info.key for info in list_algorithms()] == [Algorithm.BFS, Algorithm.DIJKSTRA, Algorithm.ASTAR]
    assert get_algorithm("astar").uses_coordinates
    assert not get_algorithm("bfs").weighted


def test_algo_info_to_dict_is_json_ready():
    card = get_algorithm("dijkstra").to_dict()
    assert card["key"] == "dijkstra"
    assert card["label"] == "Dijkstra's Algorithm"
    assert card["pseudocode"]


def test_run_algorithm_dispatches(triangle, triangle_nodes):
    assert run_algorithm("bfs", triangle, 1, 3).path == [1, 3]
    assert run_algorithm("dijkstra", triangle, 1, 3).path == [1, 2, 3]
    assert run_algorithm(Algorithm.ASTAR, triangle, 1, 3, triangle_nodes).distance == 5


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------
def test_speed_to_delay():
    assert speed_to_delay(400) == pytest.approx(0.6)
    assert speed_to_delay(0) == pytest.approx(1.0)
    assert speed_to_delay(950) == pytest.approx(0.05)
    # clamped to MAX_SPEED
    assert speed_to_delay(5000) == pytest.approx(0.05)
    assert speed_to_delay(-50) == pytest.approx(1.0)
    assert speed_to_delay(950) >= MIN_DELAY


def test_higher_speed_means_shorter_delay():
    delays = [speed_to_delay(s) for s in (50, 200, 400, 800)]
    assert delays == sorted(delays, reverse=True)


def test_resolve_speed():
    assert resolve_speed(None) == DEFAULT_SPEED
    assert resolve_speed("fast") == SPEED_PRESETS["fast"]
    assert resolve_speed("300") == 300.0
    with pytest.raises(ConfigError):
        resolve_speed("warp")


def test_playback_config_defaults():
    cfg = PlaybackConfig.from_dict({})
    assert cfg.algorithm is Algorithm.DIJKSTRA
    assert cfg.directed is False
    assert cfg.step_mode is False
    assert cfg.speed == DEFAULT_SPEED
    assert cfg.delay == pytest.approx(0.6)


def test_playback_config_from_request_data():
    cfg = PlaybackConfig.from_dict(
        {"algorithm": "bfs", "directed": "true", "step_mode": 1, "speed": "turbo"}
    )
    assert cfg == PlaybackConfig(Algorithm.BFS, True, True, SPEED_PRESETS["turbo"])
    assert cfg.to_dict()["algorithm"] == "bfs"


def test_playback_config_rejects_bad_values():
    with pytest.raises(UnknownAlgorithmError):
        PlaybackConfig.from_dict({"algorithm": "greedy"})
    with pytest.raises(ConfigError):
        PlaybackConfig.from_dict({"directed": "sometimes"})
