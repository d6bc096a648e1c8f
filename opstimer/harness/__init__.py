"""
Benchmark harness for throughput comparisons.

Provides calibration, orchestration and reporting capabilities.
"""

from .arguments import (
    NO_ARGS,
    ArgumentSet,
    Candidate,
    Multi,
    Single,
    as_argument_set,
    as_candidates,
    invoke,
)

from .config import (
    BenchmarkConfig,
    CalibrationStrategy,
    FaultMode,
)

from .errors import (
    CalibrationNonConvergence,
    ConfigError,
    InvocationFault,
    OpsTimerError,
)

from .calibration import (
    CalibrationState,
    InlineCalibration,
    Measurement,
    SeparateCalibration,
    get_strategy,
)

from .results import (
    Failure,
    RankedResult,
    RunResult,
    Success,
)

from .reporter import (
    ChartReporter,
    ComparisonReport,
    ConsoleReporter,
    rank,
)

from .runner import (
    BenchmarkRunner,
    blank_function,
    measure,
    overhead,
    overhead_arg_array,
)

__all__ = [
    # Arguments
    "NO_ARGS",
    "ArgumentSet",
    "Candidate",
    "Multi",
    "Single",
    "as_argument_set",
    "as_candidates",
    "invoke",
    # Config
    "BenchmarkConfig",
    "CalibrationStrategy",
    "FaultMode",
    # Errors
    "CalibrationNonConvergence",
    "ConfigError",
    "InvocationFault",
    "OpsTimerError",
    # Calibration
    "CalibrationState",
    "InlineCalibration",
    "Measurement",
    "SeparateCalibration",
    "get_strategy",
    # Results
    "Failure",
    "RankedResult",
    "RunResult",
    "Success",
    # Reporter
    "ChartReporter",
    "ComparisonReport",
    "ConsoleReporter",
    "rank",
    # Runner
    "BenchmarkRunner",
    "blank_function",
    "measure",
    "overhead",
    "overhead_arg_array",
]
