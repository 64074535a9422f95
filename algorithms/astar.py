"""
astar.py — A* Search
=====================
Dijkstra's structure with a heuristic-ordered heap:

    score(n) = g(n) + h(n, target)

  • g – accumulated path cost, tracked on its own; relaxation compares g,
        never the heuristic-inflated score.
  • h – straight-line (Euclidean) distance between node coordinates.
        0 if either node has no coordinates, which degrades that entry to
        plain Dijkstra ordering.

Records one Step per non-stale extraction, BEFORE the node's edges are
relaxed, and stops as soon as the target is extracted.

Precondition: h is admissible only if every edge weight is at least the
straight-line distance between its endpoints.  The search does not
enforce this; it logs a warning and carries on, and the returned path
may then be sub-optimal.
"""

import logging
import math
from typing import Dict, Iterable, List, Optional

from graph import Graph, Node, find_inadmissible_edges
from algorithms.heap import MinHeap
from algorithms.step import SearchResult, Step, TableRow, reconstruct_path

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Heuristic
# ---------------------------------------------------------------------------
def euclidean(a: int, b: int, coords: Dict[int, Node]) -> float:
    if a not in coords or b not in coords:
        return 0.0
    return coords[a].distance_to(coords[b])


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def AStar(graph, source, target, h):",
    "    g[source] ← 0",
    "    open_set ← [(source, h(source))]",
    "    while open_set:",
    "        node ← open_set.extract_min()",
    "        if node in closed: continue",
    "        closed.add(node)",
    "        if node == target: break",
    "        for (nbr, w) in adj(node):",
    "            tentative_g ← g[node] + w",
    "            if tentative_g < g[nbr]:",
    "                came_from[nbr] ← node",
    "                g[nbr] ← tentative_g",
    "                open_set.insert((nbr, g[nbr] + h(nbr)))",
    "    return walk came_from from target",
]


def astar(
    graph: Graph,
    source: int,
    target: int,
    nodes: Iterable[Node] = (),
) -> SearchResult:
    """
    Args:
        graph  : Adjacency mapping from build_graph().
        source : Start node id.
        target : Goal node id.
        nodes  : Node records carrying the coordinates for h.
    """

    coords: Dict[int, Node] = {n.id: n for n in nodes}
    bad = find_inadmissible_edges(graph, coords.values())
    if bad:
        logger.warning(
            "A* heuristic is not admissible for %d edge(s) (e.g. %r); "
            "the path found may not be optimal", len(bad), bad[0],
        )

    INF = math.inf

    g_score: Dict[int, float]            = {nid: INF for nid in graph}
    came_from: Dict[int, Optional[int]]  = {}
    g_score[source] = 0.0

    open_set = MinHeap()
    open_set.insert((source, euclidean(source, target, coords)))
    closed: Dict[int, None] = {}           # ordered set, keeps visit order for the table
    steps: List[Step] = []
    relaxations = 0

    while not open_set.is_empty():
        current, _ = open_set.extract_min()
        if current in closed:
            continue
        closed[current] = None

        adjacent = graph.get(current, [])
        steps.append(Step(
            step_number=len(steps),
            queue=open_set.snapshot(),
            table=_table(graph, closed, g_score, came_from),
            current_node=current,
            prev_node=came_from.get(current),
            neighbors=[n.node for n in adjacent],
            log=f"Visiting {current}",
        ))

        if current == target:
            break

        for nbr in adjacent:
            tentative_g = g_score[current] + nbr.weight
            if tentative_g < g_score.get(nbr.node, INF):
                came_from[nbr.node] = current
                g_score[nbr.node] = tentative_g
                open_set.insert((nbr.node, tentative_g + euclidean(nbr.node, target, coords)))
                relaxations += 1

    if target not in closed:
        return SearchResult(steps=steps, relaxations=relaxations)

    return SearchResult(
        steps=steps,
        path=reconstruct_path(came_from, target),
        distance=g_score[target],
        relaxations=relaxations,
    )


def _table(
    graph: Graph,
    closed: Dict[int, None],
    g_score: Dict[int, float],
    came_from: Dict[int, Optional[int]],
) -> List[TableRow]:
    return [
        TableRow(
            node=nid,
            distance=g_score.get(nid, math.inf),
            parent=came_from.get(nid),
            neighbors=[n.node for n in graph.get(nid, [])],
        )
        for nid in closed
    ]
