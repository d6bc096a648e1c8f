"""
Baseline scenario definitions for throughput benchmarking.

Each scenario measures something about the harness itself, so the numbers
it reports for real candidates can be put in context:
1. Overhead of calling a no-op with a single argument
2. Overhead of the spread (multi-argument) call path
3. Cost of reading the clock once
"""

import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from ..harness.arguments import ArgumentSet, Multi, Single
from ..harness.runner import OVERHEAD_ARGUMENT, BenchmarkRunner, blank_function


def clock_read(s):
    """Reads the clock once; shows why the loop only samples at checkpoints."""
    return time.perf_counter()


@dataclass
class Scenario:
    """Definition of a benchmark scenario."""

    name: str
    description: str
    category: str
    candidates: list[Callable]
    arguments: ArgumentSet
    metadata: dict = field(default_factory=dict)

    def run(self, runner: BenchmarkRunner, **overrides):
        """Measure this scenario's candidates with the given runner."""
        return runner.run(self.candidates, self.arguments, **overrides)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "candidates": [getattr(c, "__name__", repr(c)) for c in self.candidates],
            "arguments": self.arguments.describe(),
            "metadata": self.metadata,
        }


OVERHEAD_SCENARIOS = [
    Scenario(
        name="blank_single",
        description="No-op candidate, single-value call",
        category="overhead",
        candidates=[blank_function],
        arguments=Single(OVERHEAD_ARGUMENT),
        metadata={"call_shape": "single"},
    ),
    Scenario(
        name="blank_spread",
        description="No-op candidate, spread call",
        category="overhead",
        candidates=[blank_function],
        arguments=Multi((OVERHEAD_ARGUMENT,)),
        metadata={"call_shape": "spread"},
    ),
]

CLOCK_SCENARIOS = [
    Scenario(
        name="clock_read",
        description="One perf_counter read per call",
        category="clock",
        candidates=[clock_read],
        arguments=Single(OVERHEAD_ARGUMENT),
        metadata={"call_shape": "single", "clock": "time.perf_counter"},
    ),
]


# ============================================================================
# Scenario Registry
# ============================================================================

ALL_SCENARIOS = {
    "overhead": OVERHEAD_SCENARIOS,
    "clock": CLOCK_SCENARIOS,
}


def get_scenario(name: str) -> Optional[Scenario]:
    """Get a scenario by name, or None if it is not registered."""
    return next((s for s in get_baseline_scenarios() if s.name == name), None)


def get_scenarios_by_category(category: str) -> list[Scenario]:
    """Scenarios in one category; empty for an unknown category."""
    return list(ALL_SCENARIOS.get(category, []))


def list_scenarios() -> dict[str, list[str]]:
    """Scenario names grouped by category, in registry order."""
    return {category: [s.name for s in group] for category, group in ALL_SCENARIOS.items()}


def get_baseline_scenarios() -> list[Scenario]:
    """Every scenario, in registry order."""
    return [s for group in ALL_SCENARIOS.values() for s in group]
