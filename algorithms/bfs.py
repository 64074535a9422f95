"""
bfs.py — Breadth-First Search
==============================
BFS over a frontier of FULL PATHS (not just nodes), so the path that
reaches the target is available the moment it is dequeued.

Records one Step per dequeue:
  • queue   – the remaining frontier, each path rendered "1→4→7"
  • table   – every node discovered so far with its BFS parent
  • log     – "Visiting <id>"

Stops as soon as the target is DEQUEUED (not merely discovered), so the
reported path is the first-dequeued one and has the minimum hop count.

Weights are ignored while searching.  `distance` is summed afterwards
along the hop-minimal path, so it is not necessarily the cheapest path
by weight.
"""

from collections import deque
from typing import Deque, Dict, List, Optional

from graph import Graph, edge_weight
from algorithms.step import QueueItem, SearchResult, Step, TableRow


# ---------------------------------------------------------------------------
# Pseudocode shown in the side panel
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BFS(graph, source, target):",
    "    queue ← [[source]]",
    "    visited ← {source}",
    "    while queue is not empty:",
    "        path ← queue.dequeue()",
    "        node ← path[-1]",
    "        if node == target: return path",
    "        for neighbour in adj(node):",
    "            if neighbour not visited:",
    "                visited.add(neighbour)",
    "                queue.enqueue(path + [neighbour])",
    "    return NOT FOUND",
]


def bfs_shortest_path(graph: Graph, source: int, target: int) -> SearchResult:
    """
    Args:
        graph  : Adjacency mapping from build_graph().
        source : Starting node id.
        target : Goal node id.

    Returns:
        SearchResult – path is None (and distance None) if target is
        unreachable.  The steps list is returned either way.
    """

    queue: Deque[List[int]]          = deque([[source]])
    parent: Dict[int, Optional[int]] = {source: None}    # doubles as the visited set
    steps: List[Step]                = []
    found: Optional[List[int]]       = None

    while queue:
        path = queue.popleft()
        node = path[-1]
        adjacent = graph.get(node, [])

        steps.append(Step(
            step_number=len(steps),
            queue=[QueueItem(p[-1], "→".join(str(n) for n in p)) for p in queue],
            table=_table(graph, parent),
            current_node=node,
            prev_node=path[-2] if len(path) > 1 else None,
            neighbors=[n.node for n in adjacent],
            log=f"Visiting {node}",
        ))

        if node == target:
            found = path
            break

        for nbr in adjacent:
            if nbr.node not in parent:
                parent[nbr.node] = node
                queue.append(path + [nbr.node])

    if found is None:
        return SearchResult(steps=steps)

    distance = sum(edge_weight(graph, a, b) for a, b in zip(found, found[1:]))
    return SearchResult(steps=steps, path=found, distance=distance)


def _table(graph: Graph, parent: Dict[int, Optional[int]]) -> List[TableRow]:
    return [
        TableRow(node=n, distance=None, parent=p, neighbors=[x.node for x in graph.get(n, [])])
        for n, p in parent.items()
    ]
