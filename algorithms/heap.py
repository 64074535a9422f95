"""
heap.py — Min-Heap Priority Queue
==================================
Binary min-heap over (key, score) pairs, built on heapq.

    pq = MinHeap()
    pq.insert((3, 10.0))
    pq.insert((2, 4.0))
    pq.extract_min()   →  (2, 4.0)

There is no decrease-key.  A cheaper path to a queued node is handled by
inserting a second entry; the caller keeps a visited set and discards
the stale one when it is eventually extracted.

Ties on score are broken by the lower key, then by insertion order,
so two runs on the same graph always produce the same step trace.
"""

import heapq
import itertools
from typing import List, Optional, Tuple

from algorithms.step import QueueItem

HeapEntry = Tuple[int, float]


class MinHeap:

    def __init__(self):
        self._heap: List[Tuple[float, int, int]] = []      # (score, key, seq)
        self._seq = itertools.count()

    def insert(self, entry: HeapEntry) -> None:
        key, score = entry
        heapq.heappush(self._heap, (score, key, next(self._seq)))

    def extract_min(self) -> Optional[HeapEntry]:
        """Remove and return the lowest-score entry, or None if empty."""
        if not self._heap:
            return None
        score, key, _ = heapq.heappop(self._heap)
        return key, score

    def is_empty(self) -> bool:
        return not self._heap

    def snapshot(self) -> List[QueueItem]:
        """Sorted copy of the contents as display items.  Does not mutate."""
        return [
            QueueItem(node=key, label=f"{key}({score:.2f})")
            for score, key, _ in sorted(self._heap)
        ]

    def __len__(self) -> int:
        return len(self._heap)
