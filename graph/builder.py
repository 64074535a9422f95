"""
builder.py — Graph Builder
==========================
Turns the editor's node list + edge list into the adjacency mapping
every search algorithm consumes:

    graph = build_graph(nodes, edges, directed=False)
    graph[1]  →  [Neighbor(node=2, weight=4.0), Neighbor(node=3, weight=10.0)]

Design decisions:
  - Built once per run and never touched again; algorithms only read it.
  - Every node id is a key, even isolated ones (empty list).
  - Adjacency lists keep edge insertion order, so the same input always
    yields the same neighbour order (and therefore the same step trace).
  - Undirected edges are registered symmetrically.  An undirected
    self-loop therefore shows up twice in its node's list; that is kept
    as-is rather than special-cased.
  - Edges that point at unknown node ids are dropped, not raised on.
    The editor is responsible for handing over a consistent graph.
"""

import logging
from typing import Any, Dict, Iterable, List, NamedTuple

from graph.node import Node
from graph.edge import Edge

logger = logging.getLogger(__name__)


class Neighbor(NamedTuple):
    node:   int
    weight: float


Graph = Dict[int, List[Neighbor]]


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------
def build_graph(
    nodes: Iterable[Node],
    edges: Iterable[Edge],
    directed: bool = False,
) -> Graph:
    graph: Graph = {}
    for node in nodes:
        graph.setdefault(node.id, [])

    for edge in edges:
        if edge.source not in graph or edge.target not in graph:
            logger.debug("Dropping %r: endpoint not in node list", edge)
            continue
        graph[edge.source].append(Neighbor(edge.target, edge.weight))
        if not directed:
            graph[edge.target].append(Neighbor(edge.source, edge.weight))

    return graph


def build_adjacency_list(graph: Graph) -> List[Dict[str, Any]]:
    """Rows for the adjacency-list panel: {"node": 1, "neighbors": ["2(4)", …]}."""
    return [
        {
            "node": node,
            "neighbors": [f"{n.node}({_fmt_weight(n.weight)})" for n in neighbours],
        }
        for node, neighbours in graph.items()
    ]


def edge_weight(graph: Graph, a: int, b: int, default: float = 1.0) -> float:
    """Weight of the first a→b entry in a's adjacency list."""
    for n in graph.get(a, []):
        if n.node == b:
            return n.weight
    return default


# ---------------------------------------------------------------------------
# A* precondition
# ---------------------------------------------------------------------------
def find_inadmissible_edges(graph: Graph, nodes: Iterable[Node]) -> List[Edge]:
    """
    Edges shorter (by weight) than the straight line between their ends.

    The Euclidean heuristic only guarantees an optimal A* result when no
    such edge exists.  Edges touching a node without coordinates are
    ignored, since the heuristic falls back to 0 there.
    """
    coords = {n.id: n for n in nodes}
    bad: List[Edge] = []
    for src, neighbours in graph.items():
        for n in neighbours:
            a, b = coords.get(src), coords.get(n.node)
            if a is None or b is None:
                continue
            if n.weight < a.distance_to(b):
                bad.append(Edge(src, n.node, n.weight))
    return bad


def _fmt_weight(weight: float) -> str:
    return str(int(weight)) if float(weight).is_integer() else str(weight)
