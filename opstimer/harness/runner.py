"""
Benchmark orchestrator for comparing candidate functions.

Measures each candidate in input order against the same argument set,
ranks the results and prints a comparison table.
"""

import logging
from typing import Optional

from ..instrumentation.timing import Clock, format_duration, timed
from ..instrumentation.traces import Tracer
from .arguments import (
    NO_ARGS,
    ArgumentSet,
    Candidate,
    Multi,
    Single,
    as_argument_set,
    as_candidates,
    preview,
)
from .calibration import get_strategy
from .config import BenchmarkConfig
from .errors import CalibrationNonConvergence, ConfigError, InvocationFault, OpsTimerError
from .reporter import ComparisonReport, ConsoleReporter
from .results import Failure, Outcome, RankedResult, RunResult, Success

logger = logging.getLogger(__name__)

OVERHEAD_ARGUMENT = "abcdefg"


def blank_function(s):
    """No-op candidate used to measure harness overhead."""
    return s


class BenchmarkRunner:
    """Orchestrates benchmark execution."""

    def __init__(
        self,
        config: Optional[BenchmarkConfig] = None,
        reporter: Optional[ConsoleReporter] = None,
        tracer: Optional[Tracer] = None,
        clock: Optional[Clock] = None,
    ):
        self.config = config or BenchmarkConfig()
        self.reporter = reporter or ConsoleReporter()
        self._owns_tracer = tracer is None
        self.tracer = tracer or Tracer()
        self.clock = clock

    def close(self) -> None:
        """Shut down the tracer if this runner created it.

        A tracer passed in by the caller is left for the caller to shut down.
        """
        if self._owns_tracer:
            self.tracer.shutdown()

    def run(self, candidates, arguments=NO_ARGS, **overrides) -> ComparisonReport:
        """Measure every candidate and return the full comparison report.

        Args:
            candidates: A callable, a ``(name, callable)`` pair, or a sequence of them
            arguments: ``Single``/``Multi``; any other value is treated as ``Single``
            **overrides: Per-call ``BenchmarkConfig`` fields
        """
        config = self.config.replace(**overrides) if overrides else self.config
        items = as_candidates(candidates)
        if not items:
            raise ConfigError("No candidates to measure")
        arguments = as_argument_set(arguments)
        arguments_preview = preview(arguments.describe(), config.preview_length)

        outcomes: list[Outcome] = []
        with timed("run", self.clock) as run_timer:
            for position, candidate in enumerate(items, start=1):
                try:
                    result = self._measure_candidate(
                        position, candidate, arguments, arguments_preview, config
                    )
                except OpsTimerError as error:
                    if not config.isolate_faults:
                        raise
                    logger.warning("Skipping %s: %s", candidate.name, error)
                    outcomes.append(Failure(candidate, error))
                else:
                    outcomes.append(Success(result))

        logger.info(
            "Measured %d candidate(s) in %s",
            len(items), format_duration(run_timer.elapsed_ms),
        )

        report = ComparisonReport.from_results(
            [o.result for o in outcomes if isinstance(o, Success)],
            [o for o in outcomes if isinstance(o, Failure)],
            arguments=arguments_preview,
        )
        report.table, _ = self.reporter.report(report.results)

        if config.verbose:
            print(self.reporter.render(report.table))
            if report.failures:
                print(self.reporter.failures(report.failures))
            print(f"arguments: {arguments_preview}")

        return report

    def measure(self, candidates, arguments=NO_ARGS, **overrides) -> list[RankedResult]:
        """Measure candidates and return the ranked results in input order."""
        return self.run(candidates, arguments, **overrides).results

    def _measure_candidate(
        self,
        position: int,
        candidate: Candidate,
        arguments: ArgumentSet,
        arguments_preview: str,
        config: BenchmarkConfig,
    ) -> RunResult:
        # One untimed call shows the result and surfaces faults before timing
        try:
            shown = preview(arguments.invoke(candidate.fn), config.preview_length)
        except Exception as exc:
            raise InvocationFault(candidate.name, arguments_preview, phase="preview") from exc

        if config.verbose:
            print(f"{position}. {candidate.name} begun:       {shown}")

        strategy = get_strategy(config.strategy)
        attributes = {
            "candidate": candidate.name,
            "strategy": config.strategy.value,
            "target_ms": config.target_ms,
        }
        with self.tracer.span("opstimer.measure", attributes) as span:
            try:
                measurement = strategy.measure(candidate, arguments, config, self.clock)
            except CalibrationNonConvergence:
                raise
            except Exception as exc:
                raise InvocationFault(candidate.name, arguments_preview) from exc

            result = RunResult(
                name=candidate.name,
                iterations=measurement.iterations,
                elapsed_seconds=measurement.elapsed_seconds,
                scaling_steps=measurement.scaling_steps,
            )
            if span:
                span.set_attribute("iterations", result.iterations)
                span.set_attribute("ops_per_sec", result.ops_per_sec)

        logger.debug(
            "%s: %d iterations in %s (%d scaling steps)",
            result.name, result.iterations,
            format_duration(result.elapsed_seconds * 1000), result.scaling_steps,
        )
        return result


def measure(
    candidates,
    arguments=NO_ARGS,
    config: Optional[BenchmarkConfig] = None,
    runner: Optional[BenchmarkRunner] = None,
    **overrides,
) -> list[RankedResult]:
    """Measure one or more candidates against a shared argument set.

    Without a ``runner`` a temporary one is built from ``config`` and closed
    afterwards.

    Usage:
        measure([reverse_slice, reverse_join], Single("abcdefg"))
        measure(str.join, Multi(("-", ["a", "b"])), target_ms=250)
    """
    if runner is not None:
        if config is not None:
            overrides = {**config.to_dict(), **overrides}
        return runner.measure(candidates, arguments, **overrides)

    runner = BenchmarkRunner(config)
    try:
        return runner.measure(candidates, arguments, **overrides)
    finally:
        runner.close()


def overhead(
    config: Optional[BenchmarkConfig] = None,
    runner: Optional[BenchmarkRunner] = None,
    **overrides,
) -> list[RankedResult]:
    """Throughput of a no-op candidate called with a single value."""
    return measure(blank_function, Single(OVERHEAD_ARGUMENT), config, runner, **overrides)


def overhead_arg_array(
    config: Optional[BenchmarkConfig] = None,
    runner: Optional[BenchmarkRunner] = None,
    **overrides,
) -> list[RankedResult]:
    """Throughput of a no-op candidate called through the spread path."""
    return measure(blank_function, Multi((OVERHEAD_ARGUMENT,)), config, runner, **overrides)
