"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for the searches the visualizer can run.

    from algorithms import Algorithm, REGISTRY, run_algorithm

The set of algorithms is CLOSED: Algorithm is an enum, and
Algorithm.parse() rejects any other tag with UnknownAlgorithmError
instead of quietly falling back to a default.  The tag is resolved
once, when a run is configured; everything downstream works with the
enum member.

REGISTRY maps each member to an AlgoInfo card that the HTTP driver
lists for the algorithm picker.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterable, List, Union

from errors import UnknownAlgorithmError
from graph import Graph, Node
from algorithms.step  import QueueItem, SearchResult, Step, TableRow
from algorithms.heap  import MinHeap
from algorithms.bfs      import bfs_shortest_path, PSEUDOCODE as _bfs_pc
from algorithms.dijkstra import dijkstra,          PSEUDOCODE as _dij_pc
from algorithms.astar    import astar,             PSEUDOCODE as _ast_pc


# ---------------------------------------------------------------------------
# Closed set of tags
# ---------------------------------------------------------------------------
class Algorithm(Enum):
    BFS      = "bfs"
    DIJKSTRA = "dijkstra"
    ASTAR    = "astar"

    @classmethod
    def parse(cls, name: Union[str, "Algorithm"]) -> "Algorithm":
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            raise UnknownAlgorithmError(name) from None


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              Algorithm
    label:            str                       # human label, e.g. "Breadth-First Search"
    fn:               Callable[..., SearchResult]
    pseudocode:       List[str]
    uses_coordinates: bool      = False         # A* needs node positions for h
    weighted:         bool      = True          # does the search minimise weight?
    tags:             List[str] = field(default_factory=list)
    complexity_time:  str       = ""
    complexity_space: str       = ""
    description:      str       = ""

    def to_dict(self) -> dict:
        return {
            "key":              self.key.value,
            "label":            self.label,
            "uses_coordinates": self.uses_coordinates,
            "weighted":         self.weighted,
            "tags":             list(self.tags),
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "description":      self.description,
            "pseudocode":       list(self.pseudocode),
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[Algorithm, AlgoInfo] = {

    Algorithm.BFS: AlgoInfo(
        key=Algorithm.BFS, label="Breadth-First Search", fn=bfs_shortest_path,
        pseudocode=_bfs_pc, weighted=False,
        tags=["unweighted", "shortest-path", "traversal"],
        complexity_time="O(V + E)", complexity_space="O(V²)",
        description="Explores layer by layer. Finds the path with the fewest edges.",
    ),

    Algorithm.DIJKSTRA: AlgoInfo(
        key=Algorithm.DIJKSTRA, label="Dijkstra's Algorithm", fn=dijkstra,
        pseudocode=_dij_pc,
        tags=["weighted", "shortest-path"],
        complexity_time="O((V + E) log V)", complexity_space="O(V + E)",
        description="Greedily finalises the closest node. Optimal for positive weights.",
    ),

    Algorithm.ASTAR: AlgoInfo(
        key=Algorithm.ASTAR, label="A* Search", fn=astar,
        pseudocode=_ast_pc, uses_coordinates=True,
        tags=["weighted", "shortest-path", "heuristic"],
        complexity_time="O((V + E) log V)", complexity_space="O(V + E)",
        description="Dijkstra guided by straight-line distance. Optimal when h is admissible.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: Union[str, Algorithm]) -> AlgoInfo:
    """Return AlgoInfo for a tag; raises UnknownAlgorithmError."""
    return REGISTRY[Algorithm.parse(key)]


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in declaration order."""
    return list(REGISTRY.values())


def run_algorithm(
    key: Union[str, Algorithm],
    graph: Graph,
    source: int,
    target: int,
    nodes: Iterable[Node] = (),
) -> SearchResult:
    """Resolve the tag once and invoke its search."""
    info = get_algorithm(key)
    if info.uses_coordinates:
        return info.fn(graph, source, target, nodes)
    return info.fn(graph, source, target)


__all__ = [
    "Algorithm",
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "run_algorithm",
    "bfs_shortest_path",
    "dijkstra",
    "astar",
    "MinHeap",
    "QueueItem",
    "SearchResult",
    "Step",
    "TableRow",
]
