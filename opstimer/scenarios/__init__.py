"""
Scenario definitions for throughput benchmarking.
"""

from .definitions import (
    Scenario,
    ALL_SCENARIOS,
    OVERHEAD_SCENARIOS,
    CLOCK_SCENARIOS,
    clock_read,
    get_scenario,
    get_scenarios_by_category,
    list_scenarios,
    get_baseline_scenarios,
)

__all__ = [
    "Scenario",
    "ALL_SCENARIOS",
    "OVERHEAD_SCENARIOS",
    "CLOCK_SCENARIOS",
    "clock_read",
    "get_scenario",
    "get_scenarios_by_category",
    "list_scenarios",
    "get_baseline_scenarios",
]
