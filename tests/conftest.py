"""Shared test fixtures for the trace visualizer tests."""

import pytest

from graph import parse_graph
from algorithms import generate_trace
from main import create_app


class FakeClock:
    """Monotonic clock the tests advance by hand, in whole milliseconds."""

    def __init__(self, start_ms: int = 1_000_000):
        self.now_ms = start_ms

    def __call__(self) -> float:
        return self.now_ms / 1000.0

    def advance_ms(self, ms: int) -> None:
        self.now_ms += ms


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def scenario_a():
    """A→B→C is cheaper than the direct A→C edge."""
    return parse_graph("A, B, C", "A-B:1, B-C:2, A-C:10")


@pytest.fixture()
def trace_a(scenario_a):
    return generate_trace(scenario_a, "A")


@pytest.fixture()
def diamond():
    """Two equal-cost routes to D plus an isolated node E."""
    return parse_graph("A, B, C, D, E", "A-B:2, A-C:2, B-D:3, C-D:3, D-A:1")


@pytest.fixture()
def app(clock):
    app = create_app({"TESTING": True, "SECRET_KEY": "test", "PLAYBACK_CLOCK": clock})
    return app


@pytest.fixture()
def client(app):
    return app.test_client()
