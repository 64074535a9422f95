"""
main.py — SmartRoute Flask Driver
===================================
JSON API between the browser editor and the search / playback core.
The browser owns the canvas and the node/edge lists; the server owns
one PlaybackController per browser session.

Routes:
  GET  /api/algorithms          – algorithm picker data
  POST /api/graph/adjacency     – adjacency-list rows for a node/edge list
  POST /api/run                 – build graph, run search, start playback
  POST /api/playback/pause      – halt automatic playback
  POST /api/playback/resume     – restart automatic playback
  POST /api/playback/toggle     – play/pause button: pause, resume or start
  POST /api/playback/step       – manual single step
  POST /api/playback/reset      – discard the run
  POST /api/config/speed        – change animation speed
  GET  /api/state               – tick the scheduler, return current view

Configuration:
  DEFAULT_SETTINGS below, then the mapping passed to create_app(), then
  SMARTROUTE_* environment variables (e.g. SMARTROUTE_DEFAULT_SPEED=600).

State management:
  Controllers live in a PlaybackSessions store on app.extensions,
  keyed by a uuid kept in the Flask session cookie.  Automatic playback
  is advanced cooperatively: every GET /api/state poll ticks the
  session's scheduler.
"""

import logging
import secrets
import threading
import uuid
from collections import OrderedDict
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from flask import Flask, current_app, jsonify, request, session

from errors import ConfigError, SmartRouteError
from graph import Edge, Node, build_adjacency_list, build_graph
from algorithms import list_algorithms
from engine import PlaybackConfig, PlaybackController, TickScheduler

logger = logging.getLogger(__name__)


DEFAULT_SETTINGS: Dict[str, Any] = {
    "DEFAULT_SPEED": 400,
    "MAX_SESSIONS":  256,
    "LOG_LEVEL":     "INFO",
}


# ---------------------------------------------------------------------------
# Per-session controllers
# ---------------------------------------------------------------------------
class PlaybackSessions:
    """Bounded map of session id → PlaybackController, oldest evicted first."""

    def __init__(
        self,
        max_sessions: int = 256,
        default_speed: float = 400,
        scheduler_factory: Callable[[], TickScheduler] = TickScheduler,
    ):
        self.max_sessions      = max_sessions
        self.default_speed     = default_speed
        self.scheduler_factory = scheduler_factory
        self._controllers: "OrderedDict[str, PlaybackController]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, sid: str) -> PlaybackController:
        with self._lock:
            ctrl = self._controllers.get(sid)
            if ctrl is None:
                ctrl = PlaybackController(
                    scheduler=self.scheduler_factory(),
                    speed=self.default_speed,
                )
                self._controllers[sid] = ctrl
                while len(self._controllers) > self.max_sessions:
                    old_sid, old = self._controllers.popitem(last=False)
                    old.reset()
                    logger.debug("Evicted playback session %s", old_sid)
            else:
                self._controllers.move_to_end(sid)
            return ctrl

    def __len__(self) -> int:
        with self._lock:
            return len(self._controllers)


def get_controller() -> PlaybackController:
    if "sid" not in session:
        session["sid"] = uuid.uuid4().hex
    return current_app.extensions["smartroute"].get(session["sid"])


# ---------------------------------------------------------------------------
# Request parsing
# ---------------------------------------------------------------------------
def _payload() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _optional_int(value: Any, name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid {name}: {value!r}") from None


def parse_graph_payload(data: Mapping[str, Any]) -> Tuple[List[Node], List[Edge]]:
    try:
        nodes = [Node.from_dict(n) for n in data.get("nodes", [])]
        edges = [Edge.from_dict(e) for e in data.get("edges", [])]
    except (KeyError, TypeError, ValueError) as exc:
        raise ConfigError(f"Malformed graph payload: {exc}") from exc
    for edge in edges:
        if not edge.has_valid_weight:
            raise ConfigError(
                f"Invalid weight {edge.weight!r} on edge {edge.source}-{edge.target}: "
                "weights must be positive and finite"
            )
    return nodes, edges


def start_run(ctrl: PlaybackController, data: Mapping[str, Any]) -> None:
    """Build the posted graph and start a run on `ctrl`.  Caller holds ctrl.lock."""
    cfg = PlaybackConfig.from_dict({"speed": ctrl.speed, **data})
    nodes, edges = parse_graph_payload(data)
    source = _optional_int(data.get("source"), "source")
    target = _optional_int(data.get("target"), "target")

    graph = build_graph(nodes, edges, directed=cfg.directed)
    ctrl.set_speed(cfg.speed)
    ctrl.start(graph, source, target, cfg.algorithm, step_mode=cfg.step_mode, nodes=nodes)


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(
    config: Optional[Mapping[str, Any]] = None,
    scheduler_factory: Callable[[], TickScheduler] = TickScheduler,
) -> Flask:
    app = Flask(__name__)
    app.config.from_mapping(DEFAULT_SETTINGS)
    app.config["SECRET_KEY"] = secrets.token_hex(32)
    if config:
        app.config.from_mapping(config)
    app.config.from_prefixed_env("SMARTROUTE")

    app.extensions["smartroute"] = PlaybackSessions(
        max_sessions=int(app.config["MAX_SESSIONS"]),
        default_speed=float(app.config["DEFAULT_SPEED"]),
        scheduler_factory=scheduler_factory,
    )

    @app.errorhandler(SmartRouteError)
    def handle_core_error(exc: SmartRouteError):
        logger.info("Rejected request to %s: %s", request.path, exc)
        return jsonify({"error": str(exc)}), 400

    # -----------------------------------------------------------------
    # Algorithms & graph
    # -----------------------------------------------------------------
    @app.route("/api/algorithms")
    def api_algorithms():
        return jsonify({"algorithms": [info.to_dict() for info in list_algorithms()]})

    @app.route("/api/graph/adjacency", methods=["POST"])
    def api_graph_adjacency():
        data = _payload()
        nodes, edges = parse_graph_payload(data)
        cfg = PlaybackConfig.from_dict({"directed": data.get("directed", False)})
        graph = build_graph(nodes, edges, directed=cfg.directed)
        return jsonify({"adjacency": build_adjacency_list(graph)})

    # -----------------------------------------------------------------
    # Run
    # -----------------------------------------------------------------
    @app.route("/api/run", methods=["POST"])
    def api_run():
        data = _payload()
        ctrl = get_controller()
        with ctrl.lock:
            start_run(ctrl, data)
            return jsonify(ctrl.view())

    # -----------------------------------------------------------------
    # Playback
    # -----------------------------------------------------------------
    @app.route("/api/playback/pause", methods=["POST"])
    def api_playback_pause():
        ctrl = get_controller()
        with ctrl.lock:
            return jsonify({"changed": ctrl.pause(), **ctrl.view()})

    @app.route("/api/playback/resume", methods=["POST"])
    def api_playback_resume():
        ctrl = get_controller()
        with ctrl.lock:
            return jsonify({"changed": ctrl.resume(), **ctrl.view()})

    @app.route("/api/playback/toggle", methods=["POST"])
    def api_playback_toggle():
        """Pause a running loop, resume a paused one, otherwise start a run."""
        data = _payload()
        ctrl = get_controller()
        with ctrl.lock:
            if not ctrl.toggle_play():
                start_run(ctrl, data)
            return jsonify(ctrl.view())

    @app.route("/api/playback/step", methods=["POST"])
    def api_playback_step():
        ctrl = get_controller()
        with ctrl.lock:
            return jsonify({"changed": ctrl.step(), **ctrl.view()})

    @app.route("/api/playback/reset", methods=["POST"])
    def api_playback_reset():
        ctrl = get_controller()
        with ctrl.lock:
            ctrl.reset()
            return jsonify(ctrl.view())

    @app.route("/api/config/speed", methods=["POST"])
    def api_config_speed():
        data = _payload()
        ctrl = get_controller()
        with ctrl.lock:
            ctrl.set_speed(data.get("preset", data.get("speed")))
            return jsonify({"speed": ctrl.speed, "delay": ctrl.delay})

    @app.route("/api/state")
    def api_state():
        ctrl = get_controller()
        with ctrl.lock:
            ctrl.tick()
            return jsonify(ctrl.view())

    return app


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app = create_app()
    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("SmartRoute listening on http://localhost:5000")
    app.run(debug=False, port=5000)
