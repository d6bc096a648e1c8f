"""
Ops Timer Lab - adaptive throughput comparisons for Python functions.

Give it candidate functions and a shared argument set; it calibrates a run
length for each candidate, measures operations per second and prints a
ranked comparison.

Key modules:
- harness: Calibration, orchestration and reporting
- instrumentation: Clock, timing utilities and tracing integration
- scenarios: Overhead baselines for the harness itself
- benchmarks: Bundled example comparisons
"""

__version__ = "0.1.0"

from .harness import (
    BenchmarkConfig,
    BenchmarkRunner,
    Multi,
    Single,
    measure,
    overhead,
    overhead_arg_array,
)

from . import benchmarks
from . import instrumentation
from . import harness
from . import scenarios

__all__ = [
    "BenchmarkConfig",
    "BenchmarkRunner",
    "Multi",
    "Single",
    "measure",
    "overhead",
    "overhead_arg_array",
    "benchmarks",
    "instrumentation",
    "harness",
    "scenarios",
]
