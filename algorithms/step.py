"""
step.py — Algorithm Step Snapshot
==================================
Every algorithm records a list of Step objects.  A Step is a frozen
picture of one instant of the search:

    • the frontier / priority-queue contents, sorted for display
    • the per-node bookkeeping table (distance, parent, neighbours)
    • the node just visited, and the node it was reached from
    • the visited node's neighbour ids (for the highlight)
    • a one-line log message ("Visiting 7")

Design decisions:
  - Steps are SNAPSHOTS.  The algorithm is the only writer; the
    playback controller and the presentation layer are pure readers.
  - Queue entries keep their node id next to the display label, so
    the controller can de-duplicate "every queue item ever seen" by id
    without parsing strings.
  - Infinity stays a float in TableRow; to_dict() renders "∞" and "-"
    for the table panel, because JSON has no infinity.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


# ---------------------------------------------------------------------------
# Pieces of a step
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class QueueItem:
    """One frontier entry.  `node` is the id it is keyed by."""

    node:  int
    label: str

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class TableRow:
    """
    Attributes:
        node      : Node id.
        distance  : Best known distance (math.inf if unknown, None if
                    the algorithm does not track distance, i.e. BFS).
        parent    : Predecessor on the best known path, or None.
        neighbors : Adjacent node ids.
    """

    node:      int
    distance:  Optional[float]  = None
    parent:    Optional[int]    = None
    neighbors: List[int]        = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        if self.distance is None:
            distance: Any = "-"
        elif math.isinf(self.distance):
            distance = "∞"
        else:
            distance = self.distance
        return {
            "node":      self.node,
            "distance":  distance,
            "parent":    "-" if self.parent is None else self.parent,
            "neighbors": list(self.neighbors),
        }


# ---------------------------------------------------------------------------
# Step
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number  : 0-based index of this step in the run.
        queue        : Not-yet-extracted frontier entries, ascending score.
        table        : Bookkeeping rows for every node seen so far.
        current_node : Node just visited / finalised.
        prev_node    : Node it was reached from (None for the source).
        neighbors    : Ids adjacent to current_node.
        log          : Human-readable description of the event.
    """

    step_number:  int                = 0
    queue:        List[QueueItem]    = field(default_factory=list)
    table:        List[TableRow]     = field(default_factory=list)
    current_node: Optional[int]      = None
    prev_node:    Optional[int]      = None
    neighbors:    List[int]          = field(default_factory=list)
    log:          str                = ""

    @property
    def queue_labels(self) -> List[str]:
        return [item.label for item in self.queue]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step_number":  self.step_number,
            "queue":        self.queue_labels,
            "table":        [row.to_dict() for row in self.table],
            "current_node": self.current_node,
            "prev_node":    self.prev_node,
            "neighbors":    list(self.neighbors),
            "log":          self.log,
        }


# ---------------------------------------------------------------------------
# Result of one search
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class SearchResult:
    """
    Attributes:
        steps       : Full ordered trace.  Always present, even on failure.
        path        : Source → target node ids, or None if unreachable.
        distance    : Total cost of `path`, or None if unreachable.
        relaxations : How many times a better distance was recorded.
    """

    steps:       List[Step]            = field(default_factory=list)
    path:        Optional[List[int]]   = None
    distance:    Optional[float]       = None
    relaxations: int                   = 0

    @property
    def found(self) -> bool:
        return self.path is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "steps":    [s.to_dict() for s in self.steps],
            "path":     None if self.path is None else list(self.path),
            "distance": self.distance,
        }


def reconstruct_path(parent: Dict[int, Optional[int]], target: int) -> List[int]:
    """Walk parent pointers back from target.  Stops at a None parent."""
    path: List[int] = []
    cur: Optional[int] = target
    while cur is not None:
        path.append(cur)
        cur = parent.get(cur)
    path.reverse()
    return path
