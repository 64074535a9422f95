"""
playback.py — Step-by-Step Playback Controller
================================================
Owns a cursor into a recorded step trace and the scheduling loop that
moves it.  It is the only object the driver talks to during a run.

State machine:
    IDLE       →  start() / load()          →  RUNNING
    RUNNING    →  pause()                   →  PAUSED
    PAUSED     →  resume()                  →  RUNNING
    RUNNING    →  (cursor hits the end)     →  COMPLETED
    COMPLETED  →  start() / load()          →  RUNNING
    any        →  reset()                   →  IDLE

Each advancement publishes, for the presentation layer:
    • highlight   – current node, the edge it was reached by, its
                    neighbours, and a blink flag that flips every step
    • table/queue – the step's bookkeeping snapshot
    • log         – cumulative list of log lines
    • seen_queue  – every queue item ever shown, keyed by node id,
                    first-seen entry wins

Two drivers, never both at once:
    automatic – the scheduler fires advance_one_step() every
                speed_to_delay(speed) seconds
    manual    – step_mode=True; the user calls step()

Every public method holds the controller's re-entrant lock, so a tick
running on one request thread and a reset on another are serialised.
pause() and reset() cancel the scheduled job before returning, so
nothing can advance afterwards.
"""

import functools
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from errors import MalformedStepError, SelectionError
from graph import Graph, Node, build_adjacency_list
from algorithms import Algorithm, QueueItem, SearchResult, Step, TableRow
from engine.config import DEFAULT_SPEED, resolve_speed, speed_to_delay
from engine.recorder import RunMetrics, run_search
from engine.scheduler import TickScheduler

logger = logging.getLogger(__name__)

_STEP_FIELDS = ("queue", "table", "current_node", "prev_node", "neighbors", "log")


def _synchronized(method):
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self.lock:
            return method(self, *args, **kwargs)
    return wrapper


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class PlaybackState(Enum):
    IDLE      = "idle"
    RUNNING   = "running"
    PAUSED    = "paused"
    COMPLETED = "completed"


# ---------------------------------------------------------------------------
# Highlight descriptor
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Highlight:
    node:      Optional[int]              = None
    edge:      Optional[Tuple[int, int]]  = None     # (from, to)
    neighbors: Tuple[int, ...]            = ()
    blink:     bool                       = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "node":      self.node,
            "edge":      None if self.edge is None else {"from": self.edge[0], "to": self.edge[1]},
            "neighbors": list(self.neighbors),
            "blink":     self.blink,
        }


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------
class PlaybackController:
    """
    Attributes:
        state      : Current PlaybackState.
        steps      : The loaded trace (never modified).
        cursor     : Index of the next step to apply.
        speed      : Speed value; mapped to a delay on every (re)schedule.
        scheduler  : Drives automatic advancement.
        on_step    : Optional callback(Step) fired after each applied step,
                     with the lock held.
        lock       : RLock guarding every state transition.
    """

    def __init__(
        self,
        scheduler: Optional[TickScheduler] = None,
        speed: float = DEFAULT_SPEED,
        on_step: Optional[Callable[[Step], None]] = None,
    ):
        self.scheduler = scheduler or TickScheduler()
        self.speed     = resolve_speed(speed)
        self.on_step   = on_step
        self.lock      = threading.RLock()
        self._clear()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    @_synchronized
    def start(
        self,
        graph: Graph,
        source: Optional[int],
        target: Optional[int],
        algorithm: Union[str, Algorithm],
        step_mode: bool = False,
        nodes: Iterable[Node] = (),
    ) -> SearchResult:
        """
        Run the search once, then play its trace from the beginning.

        Raises SelectionError / UnknownAlgorithmError without touching
        the current playback.
        """
        if source is None or target is None:
            raise SelectionError("Please select both source and destination nodes")
        if source == target:
            raise SelectionError("Source and destination must be different nodes")
        algo = Algorithm.parse(algorithm)

        self._halt()
        result, metrics = run_search(algo, graph, source, target, nodes)

        self.algorithm = algo
        self.source    = source
        self.target    = target
        self.metrics   = metrics
        self.adjacency = build_adjacency_list(graph)
        self.load(result, step_mode=step_mode)
        return result

    @_synchronized
    def load(self, result: SearchResult, step_mode: bool = False) -> None:
        """Play an already computed result from step 0."""
        self._halt()
        self._rewind()
        self.steps     = list(result.steps)
        self.path      = None if result.path is None else list(result.path)
        self.distance  = result.distance
        self.step_mode = step_mode
        self.state     = PlaybackState.RUNNING
        logger.info(
            "Playback started: %d steps, %s mode",
            len(self.steps), "manual" if step_mode else "automatic",
        )

        if step_mode:
            self.advance_one_step()
        else:
            self._schedule()

    @_synchronized
    def reset(self) -> None:
        """Back to IDLE from anywhere.  Discards the trace and all results."""
        self._halt()
        self._clear()
        logger.info("Playback reset")

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    @_synchronized
    def pause(self) -> bool:
        if self.state is not PlaybackState.RUNNING or not self.scheduler.active:
            return False
        self._halt()
        self.state = PlaybackState.PAUSED
        logger.info("Playback paused at step %d/%d", self.cursor, len(self.steps))
        return True

    @_synchronized
    def resume(self) -> bool:
        if self.state is not PlaybackState.PAUSED or not self.steps:
            return False
        self.state = PlaybackState.RUNNING
        self._schedule()
        logger.info("Playback resumed at step %d/%d", self.cursor, len(self.steps))
        return True

    @_synchronized
    def toggle_play(self) -> bool:
        if self.state is PlaybackState.RUNNING:
            return self.pause()
        return self.resume()

    # ------------------------------------------------------------------
    # Advancing
    # ------------------------------------------------------------------
    @_synchronized
    def step(self) -> bool:
        """Manual trigger.  Ignored while the automatic loop is active."""
        if self.scheduler.active or self.state is PlaybackState.IDLE:
            return False
        return self.advance_one_step()

    @_synchronized
    def tick(self) -> bool:
        """Give the scheduler a chance to fire.  Returns True if a step was taken."""
        before = self.cursor
        self.scheduler.tick()
        return self.cursor != before

    @_synchronized
    def advance_one_step(self) -> bool:
        """Apply the step under the cursor.  Returns False if nothing was applied."""
        if self.state is PlaybackState.IDLE:
            return False

        if self.cursor >= len(self.steps):
            self._finish(clear_highlight=True)
            return False

        step = self.steps[self.cursor]
        try:
            _validate(step, self.cursor)
        except MalformedStepError as exc:
            logger.error("%s; stopping playback", exc)
            self.error = str(exc)
            self._halt()
            self.state = PlaybackState.COMPLETED
            return False

        self.table = list(step.table or [])
        self.queue = list(step.queue or [])
        for item in self.queue:
            self.seen_queue.setdefault(item.node, item)

        current, prev = step.current_node, step.prev_node
        self.highlight = Highlight(
            node=current,
            edge=(prev, current) if current is not None and prev is not None else None,
            neighbors=tuple(step.neighbors or ()),
            blink=not self.highlight.blink,
        )
        self.log.append(step.log or f"Step {self.cursor + 1}: No log message")
        self.cursor += 1
        logger.debug("Applied step %d/%d: %s", self.cursor, len(self.steps), step.log)

        if self.on_step is not None:
            self.on_step(step)

        if self.cursor >= len(self.steps):
            self._finish(clear_highlight=False)
        return True

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    @_synchronized
    def set_speed(self, value: Union[str, float]) -> None:
        """Takes effect the next time the loop is (re)scheduled."""
        self.speed = resolve_speed(value)

    @property
    def delay(self) -> float:
        return speed_to_delay(self.speed)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_step(self) -> Optional[Step]:
        if 0 < self.cursor <= len(self.steps):
            return self.steps[self.cursor - 1]
        return None

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    @property
    def is_running(self) -> bool:
        return self.state is PlaybackState.RUNNING

    @property
    def is_completed(self) -> bool:
        return self.state is PlaybackState.COMPLETED

    @_synchronized
    def view(self) -> Dict[str, Any]:
        """JSON-ready snapshot of everything the presentation layer renders."""
        return {
            "state":       self.state.value,
            "algorithm":   None if self.algorithm is None else self.algorithm.value,
            "source":      self.source,
            "target":      self.target,
            "step_mode":   self.step_mode,
            "speed":       self.speed,
            "delay":       self.delay,
            "cursor":      self.cursor,
            "total_steps": len(self.steps),
            "highlight":   self.highlight.to_dict(),
            "table":       [row.to_dict() for row in self.table],
            "queue":       [item.label for item in self.queue],
            "seen_queue":  [item.label for item in self.seen_queue.values()],
            "log":         list(self.log),
            "path":        self.path,
            "distance":    self.distance,
            "adjacency":   self.adjacency,
            "metrics":     None if self.metrics is None else self.metrics.to_dict(),
            "error":       self.error,
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _schedule(self) -> None:
        self.scheduler.schedule(self.delay, self.advance_one_step)

    def _halt(self) -> None:
        self.scheduler.cancel()

    def _finish(self, clear_highlight: bool) -> None:
        self._halt()
        if self.state is not PlaybackState.COMPLETED:
            logger.info("Playback completed after %d steps", self.cursor)
        self.state = PlaybackState.COMPLETED
        if clear_highlight:
            self.highlight = Highlight()

    def _rewind(self) -> None:
        self.cursor     = 0
        self.table:      List[TableRow]       = []
        self.queue:      List[QueueItem]      = []
        self.seen_queue: Dict[int, QueueItem] = {}
        self.log:        List[str]            = []
        self.highlight  = Highlight()
        self.error:      Optional[str]        = None

    def _clear(self) -> None:
        self.state      = PlaybackState.IDLE
        self.steps:      List[Step]           = []
        self.step_mode  = False
        self.algorithm:  Optional[Algorithm]  = None
        self.source:     Optional[int]        = None
        self.target:     Optional[int]        = None
        self.path:       Optional[List[int]]  = None
        self.distance:   Optional[float]      = None
        self.metrics:    Optional[RunMetrics] = None
        self.adjacency:  List[Dict[str, Any]] = []
        self._rewind()


def _validate(step: Any, index: int) -> None:
    if step is None:
        raise MalformedStepError(index, "step is missing")
    missing = [name for name in _STEP_FIELDS if not hasattr(step, name)]
    if missing:
        raise MalformedStepError(index, f"missing {', '.join(missing)}")
    if any(not hasattr(item, "node") for item in step.queue or ()):
        raise MalformedStepError(index, "queue entry without a node id")
