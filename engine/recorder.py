"""
recorder.py — Run Recorder & Metrics
======================================
Runs one search to completion and summarises it for the analytics card.

Usage:
    result, metrics = run_search("dijkstra", graph, source=1, target=3)
    metrics.path_cost      # 5.0
    metrics.total_steps    # len(result.steps)

The trace is materialised eagerly: by the time this returns, every Step
exists in memory and playback never has to re-run the algorithm.
"""

import logging
import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, Tuple, Union

from graph import Graph, Node
from algorithms import Algorithm, SearchResult, get_algorithm, run_algorithm

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass rendered by the analytics card
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:      str   = ""
    algo_label:    str   = ""
    source:        int   = 0
    target:        int   = 0
    nodes_visited: int   = 0          # one per recorded step
    relaxations:   int   = 0
    path_length:   int   = 0          # number of edges on the final path
    path_cost:     float = 0.0
    total_steps:   int   = 0
    wall_time_ms:  float = 0.0
    path_found:    bool  = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def run_search(
    algorithm: Union[str, Algorithm],
    graph: Graph,
    source: int,
    target: int,
    nodes: Iterable[Node] = (),
) -> Tuple[SearchResult, RunMetrics]:
    """Run the algorithm once and time it.  Raises UnknownAlgorithmError."""
    info = get_algorithm(algorithm)

    start = time.perf_counter()
    result = run_algorithm(info.key, graph, source, target, nodes)
    wall_ms = (time.perf_counter() - start) * 1000

    metrics = RunMetrics(
        algo_key=info.key.value,
        algo_label=info.label,
        source=source,
        target=target,
        nodes_visited=len(result.steps),
        relaxations=result.relaxations,
        path_length=len(result.path) - 1 if result.path else 0,
        path_cost=result.distance or 0.0,
        total_steps=len(result.steps),
        wall_time_ms=round(wall_ms, 3),
        path_found=result.found,
    )
    logger.info(
        "%s %s→%s: %d steps, path=%s, distance=%s (%.2f ms)",
        info.key.value, source, target, metrics.total_steps,
        result.path, result.distance, wall_ms,
    )
    return result, metrics
