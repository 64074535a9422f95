"""
edge.py — Graph Edge
====================
Connects two node ids with a positive weight.

Design decisions:
  - `source` and `target` are node ids, NOT Node references, so edges
    stay serialisable and the builder can drop dangling ones cheaply.
  - Directedness is NOT stored per edge.  The graph-level flag passed
    to build_graph() decides whether an edge is registered once or twice.
  - The editor's JSON uses "from" / "to"; both spellings are accepted.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Edge:
    """
    Attributes:
        source : Tail node id.
        target : Head node id.
        weight : Positive, finite traversal cost.
    """

    source: int
    target: int
    weight: float = 1.0

    @property
    def has_valid_weight(self) -> bool:
        return math.isfinite(self.weight) and self.weight > 0

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {"from": self.source, "to": self.target, "weight": self.weight}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Edge":
        source = data["from"] if "from" in data else data["source"]
        target = data["to"] if "to" in data else data["target"]
        return cls(
            source=int(source),
            target=int(target),
            weight=float(data.get("weight", 1.0)),
        )

    def __repr__(self) -> str:
        return f"Edge({self.source} → {self.target}, w={self.weight})"
