"""
node.py — Graph Node
====================
A point the user dropped on the canvas.

Design decisions:
  - `id` is an integer handed out by the editor; it is the only thing
    the search core keys on.
  - `x` / `y` are canvas coordinates.  The search core treats them as
    opaque, except A*, which uses them for the straight-line heuristic.
  - Frozen: the editor owns the node list, the core only reads it.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Node:
    """
    Attributes:
        id : Unique integer id within one graph.
        x  : Canvas x coordinate.
        y  : Canvas y coordinate.
    """

    id: int
    x:  float = 0.0
    y:  float = 0.0

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    def distance_to(self, other: "Node") -> float:
        """Euclidean distance, used as the A* heuristic."""
        return math.hypot(self.x - other.x, self.y - other.y)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Node":
        return cls(
            id=int(data["id"]),
            x=float(data.get("x", 0.0)),
            y=float(data.get("y", 0.0)),
        )

    def __repr__(self) -> str:
        return f"Node(id={self.id}, pos=({self.x:.2f},{self.y:.2f}))"
