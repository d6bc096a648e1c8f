from __future__ import annotations

import pytest

from opstimer.harness import BenchmarkConfig, BenchmarkRunner, ConsoleReporter
from opstimer.instrumentation.traces import Tracer, TracingConfig


class FakeClock:
    """Clock that only moves when a candidate says it spent time."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def costing(clock: FakeClock, seconds: float, name: str = "candidate"):
    """Candidate that advances ``clock`` by ``seconds`` per call."""
    calls = []

    def candidate(*args):
        calls.append(args)
        clock.advance(seconds)
        return args[0] if args else None

    candidate.__name__ = name
    candidate.calls = calls
    return candidate


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def quiet_config():
    return BenchmarkConfig(verbose=False)


@pytest.fixture
def fast_config():
    """Real-clock config short enough for the test suite."""
    return BenchmarkConfig(target_ms=50, min_sample_ms=5, verbose=False)


@pytest.fixture
def fake_runner(fake_clock, quiet_config):
    return BenchmarkRunner(
        config=quiet_config,
        reporter=ConsoleReporter(use_color=False),
        tracer=Tracer(TracingConfig(enabled=False)),
        clock=fake_clock,
    )


@pytest.fixture
def costly(fake_clock):
    """Factory for candidates that cost a fixed fake-clock time per call."""
    def factory(seconds: float, name: str = "candidate"):
        return costing(fake_clock, seconds, name)
    return factory
