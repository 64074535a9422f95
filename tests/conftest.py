"""Shared fixtures: small graphs and a hand-driven clock."""

import pytest

from graph import Edge, Node, build_graph


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def triangle_nodes():
    # coordinates chosen so every weight >= straight-line distance
    return [Node(1, 0.0, 0.0), Node(2, 3.0, 0.0), Node(3, 4.0, 0.0)]


@pytest.fixture
def triangle_edges():
    return [Edge(1, 2, 4.0), Edge(2, 3, 1.0), Edge(1, 3, 10.0)]


@pytest.fixture
def triangle(triangle_nodes, triangle_edges):
    return build_graph(triangle_nodes, triangle_edges, directed=False)


@pytest.fixture
def triangle_payload():
    return {
        "nodes": [{"id": 1, "x": 0, "y": 0}, {"id": 2, "x": 3, "y": 0}, {"id": 3, "x": 4, "y": 0}],
        "edges": [
            {"from": 1, "to": 2, "weight": 4},
            {"from": 2, "to": 3, "weight": 1},
            {"from": 1, "to": 3, "weight": 10},
        ],
        "directed": False,
    }
