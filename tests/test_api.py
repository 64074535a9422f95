"""Tests for the Flask JSON driver."""

import json
import threading

import pytest

from engine import TickScheduler
from main import PlaybackSessions, create_app


@pytest.fixture
def app(clock):
    return create_app({"TESTING": True}, scheduler_factory=lambda: TickScheduler(clock=clock))


@pytest.fixture
def client(app):
    return app.test_client()


def _run(client, payload, **overrides):
    return client.post("/api/run", json={**payload, **overrides})


def test_list_algorithms(client):
    resp = client.get("/api/algorithms")
    assert resp.status_code == 200
    assert [a["key"] for a in resp.get_json()["algorithms"]] == ["bfs", "dijkstra", "astar"]


def test_adjacency_rows(client, triangle_payload):
    resp = client.post("/api/graph/adjacency", json=triangle_payload)
    rows = {r["node"]: r["neighbors"] for r in resp.get_json()["adjacency"]}
    assert rows[1] == ["2(4)", "3(10)"]


def test_adjacency_rows_directed(client, triangle_payload):
    resp = client.post("/api/graph/adjacency", json={**triangle_payload, "directed": True})
    rows = {r["node"]: r["neighbors"] for r in resp.get_json()["adjacency"]}
    assert rows[3] == []


def test_manual_run_and_steps(client, triangle_payload):
    resp = _run(client, triangle_payload, source=1, target=3, algorithm="dijkstra", step_mode=True)
    assert resp.status_code == 200
    view = resp.get_json()
    assert view["state"] == "running"
    assert view["cursor"] == 1
    assert view["total_steps"] == 3
    assert view["path"] == [1, 2, 3]
    assert view["distance"] == 5
    assert view["log"] == ["Visiting 1"]
    assert view["metrics"]["path_found"] is True

    client.post("/api/playback/step")
    view = client.post("/api/playback/step").get_json()
    assert view["changed"] is True
    assert view["cursor"] == 3
    assert view["state"] == "completed"

    view = client.post("/api/playback/step").get_json()
    assert view["changed"] is False
    assert view["cursor"] == 3


def test_automatic_run_advances_on_poll(client, clock, triangle_payload):
    _run(client, triangle_payload, source=1, target=3, algorithm="bfs", speed=400)

    assert client.get("/api/state").get_json()["cursor"] == 0
    clock.advance(0.7)
    assert client.get("/api/state").get_json()["cursor"] == 1

    view = client.post("/api/playback/pause").get_json()
    assert view["changed"] is True and view["state"] == "paused"
    clock.advance(5)
    assert client.get("/api/state").get_json()["cursor"] == 1

    view = client.post("/api/playback/resume").get_json()
    assert view["state"] == "running"

    view = client.post("/api/playback/reset").get_json()
    assert view["state"] == "idle"
    assert view["cursor"] == 0 and view["log"] == []


def test_astar_run_uses_coordinates(client, triangle_payload):
    view = _run(client, triangle_payload, source=1, target=3, algorithm="astar", step_mode=True).get_json()
    assert view["path"] == [1, 2, 3]
    assert view["algorithm"] == "astar"


def test_unreachable_target_is_not_an_error(client):
    payload = {"nodes": [{"id": 1, "x": 0, "y": 0}, {"id": 2, "x": 1, "y": 1}], "edges": []}
    resp = _run(client, payload, source=1, target=2, step_mode=True)
    assert resp.status_code == 200
    assert resp.get_json()["path"] is None
    assert resp.get_json()["distance"] is None


@pytest.mark.parametrize("overrides, message", [
    ({"source": 1}, "select both"),
    ({"source": 2, "target": 2}, "different"),
    ({"source": 1, "target": 3, "algorithm": "dfs"}, "Unknown algorithm"),
    ({"source": "one", "target": 3}, "Invalid source"),
    ({"source": 1, "target": 3, "speed": "warp"}, "Invalid speed"),
])
def test_bad_run_requests_are_rejected(client, triangle_payload, overrides, message):
    resp = _run(client, triangle_payload, **overrides)
    assert resp.status_code == 400
    assert message in resp.get_json()["error"]


def test_malformed_graph_payload(client):
    resp = client.post("/api/run", json={"nodes": [{"id": 1}], "edges": [{"from": 1}], "source": 1, "target": 2})
    assert resp.status_code == 400
    assert "Malformed graph payload" in resp.get_json()["error"]


@pytest.mark.parametrize("weight", [0, -1, "NaN", "Infinity"])
def test_non_positive_or_non_finite_weights_are_rejected(client, triangle_payload, weight):
    body = {**triangle_payload, "directed": True, "source": 1, "target": 3}
    body["edges"] = [{"from": 1, "to": 2, "weight": 5}, {"from": 2, "to": 3, "weight": "__W__"}]
    raw = json.dumps(body).replace('"__W__"', str(weight))

    resp = client.post("/api/run", data=raw, content_type="application/json")
    assert resp.status_code == 400
    assert "Invalid weight" in resp.get_json()["error"]

    resp = client.post("/api/graph/adjacency", data=raw, content_type="application/json")
    assert resp.status_code == 400

    assert client.get("/api/state").get_json()["state"] == "idle"


def test_toggle_starts_pauses_and_resumes(client, triangle_payload):
    body = {**triangle_payload, "source": 1, "target": 3, "algorithm": "bfs"}
    view = client.post("/api/playback/toggle", json=body).get_json()
    assert view["state"] == "running"
    assert view["algorithm"] == "bfs"

    assert client.post("/api/playback/toggle").get_json()["state"] == "paused"
    assert client.post("/api/playback/toggle").get_json()["state"] == "running"


def test_toggle_restarts_after_completion(client, triangle_payload):
    body = {**triangle_payload, "source": 1, "target": 3, "algorithm": "dijkstra", "step_mode": True}
    _run(client, body)
    while client.post("/api/playback/step").get_json()["changed"]:
        pass

    view = client.post("/api/playback/toggle", json=body).get_json()
    assert view["state"] == "running"
    assert view["cursor"] == 1


def test_toggle_without_selection_is_rejected(client, triangle_payload):
    resp = client.post("/api/playback/toggle", json=triangle_payload)
    assert resp.status_code == 400
    assert "select both" in resp.get_json()["error"]


def test_speed_config(client):
    data = client.post("/api/config/speed", json={"preset": "fast"}).get_json()
    assert data["speed"] == 850
    assert data["delay"] == pytest.approx(0.15)

    data = client.post("/api/config/speed", json={"speed": 700}).get_json()
    assert data["delay"] == pytest.approx(0.3)


def test_sessions_are_isolated(app, triangle_payload):
    first, second = app.test_client(), app.test_client()
    _run(first, triangle_payload, source=1, target=3, step_mode=True)
    assert first.get("/api/state").get_json()["cursor"] == 1
    assert second.get("/api/state").get_json()["state"] == "idle"


def test_settings_from_mapping_and_environment(monkeypatch):
    monkeypatch.setenv("SMARTROUTE_DEFAULT_SPEED", "900")
    app = create_app({"MAX_SESSIONS": 3})
    sessions = app.extensions["smartroute"]
    assert sessions.max_sessions == 3
    assert sessions.default_speed == 900


def test_session_store_evicts_oldest():
    sessions = PlaybackSessions(max_sessions=2)
    a = sessions.get("a")
    sessions.get("b")
    sessions.get("c")
    assert len(sessions) == 2
    assert sessions.get("a") is not a


def test_session_store_is_consistent_under_concurrent_access():
    sessions = PlaybackSessions(max_sessions=4)

    def worker(n):
        for i in range(200):
            sessions.get(f"{n}-{i % 8}")

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(sessions) == 4
