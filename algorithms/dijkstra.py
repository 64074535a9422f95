"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Classic min-heap relaxation with lazy deletion.

Records one Step per NON-STALE extraction, after the node's outgoing
edges have been relaxed:
  • queue  – heap snapshot "<id>(<dist>)", ascending
  • table  – every node's current distance / parent / neighbour ids
  • log    – "Visiting <id>"

The heap and the visited set are both owned here.  Membership is
checked immediately after each extraction; an entry for an already
visited node is stale and is dropped without recording a step.

Runs until the heap is empty (the full shortest-path tree is built),
then walks `prev` back from the target.  This holds even when
source == target: every reachable node is still visited and relaxed,
so `relaxations` is zero only when the source has no out-edges.  A*
stops at the first extraction instead and always reports zero there.

Correctness note: requires non-negative weights.
"""

import math
from typing import Dict, List, Optional, Set

from graph import Graph
from algorithms.heap import MinHeap
from algorithms.step import SearchResult, Step, TableRow, reconstruct_path


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Dijkstra(graph, source, target):",
    "    dist ← {v: ∞ for v in V}",
    "    dist[source] ← 0",
    "    pq ← [(source, 0)]",
    "    while pq is not empty:",
    "        (node, d) ← pq.extract_min()",
    "        if node in visited: continue",
    "        visited.add(node)",
    "        for (neighbour, w) in adj(node):",
    "            if dist[node] + w < dist[neighbour]:",
    "                dist[neighbour] ← dist[node] + w",
    "                prev[neighbour] ← node",
    "                pq.insert((neighbour, dist[neighbour]))",
    "    return walk prev from target",
]


def dijkstra(graph: Graph, source: int, target: int) -> SearchResult:

    INF = math.inf

    dist: Dict[int, float]          = {nid: INF for nid in graph}
    prev: Dict[int, Optional[int]]  = {nid: None for nid in graph}
    dist[source] = 0.0
    prev[source] = None

    pq = MinHeap()
    pq.insert((source, 0.0))
    visited: Set[int] = set()
    steps: List[Step] = []
    relaxations = 0

    while not pq.is_empty():
        node, _ = pq.extract_min()
        if node in visited:
            continue                                # stale entry
        visited.add(node)

        adjacent = graph.get(node, [])
        for nbr in adjacent:
            new_dist = dist[node] + nbr.weight
            if new_dist < dist.get(nbr.node, INF):
                dist[nbr.node] = new_dist
                prev[nbr.node] = node
                pq.insert((nbr.node, new_dist))
                relaxations += 1

        steps.append(Step(
            step_number=len(steps),
            queue=pq.snapshot(),
            table=_table(graph, dist, prev),
            current_node=node,
            prev_node=prev.get(node),
            neighbors=[n.node for n in adjacent],
            log=f"Visiting {node}",
        ))

    if math.isinf(dist.get(target, INF)):
        return SearchResult(steps=steps, relaxations=relaxations)

    return SearchResult(
        steps=steps,
        path=reconstruct_path(prev, target),
        distance=dist[target],
        relaxations=relaxations,
    )


def _table(
    graph: Graph,
    dist: Dict[int, float],
    prev: Dict[int, Optional[int]],
) -> List[TableRow]:
    return [
        TableRow(
            node=nid,
            distance=dist[nid],
            parent=prev.get(nid),
            neighbors=[n.node for n in graph.get(nid, [])],
        )
        for nid in dist
    ]
