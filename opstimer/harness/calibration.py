"""
Iteration-count calibration.

Without knowing what a candidate costs, find an iteration count whose run
takes roughly ``target_ms``. The inline strategy does this inside the timed
window: elapsed time is sampled at a checkpoint (10, 100, 1000, ... calls)
until a sample is long enough to extrapolate from, then the same loop keeps
going to the projected total. Calibration overhead is therefore part of the
measurement. The separate strategy samples untimed only until a projection
exists, then times a plain loop of the projected length.
"""

import logging
import math
from dataclasses import dataclass
from itertools import repeat
from typing import Optional

from ..instrumentation.timing import Clock, Timer, format_duration
from .arguments import ArgumentSet, Candidate
from .config import BenchmarkConfig, CalibrationStrategy
from .errors import CalibrationNonConvergence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Measurement:
    """Raw output of one candidate's timed run."""

    iterations: int
    elapsed_seconds: float
    scaling_steps: int = 0


class CalibrationState:
    """Per-candidate checkpoint bookkeeping; discarded after the run."""

    def __init__(self, candidate: str, config: BenchmarkConfig):
        self.candidate = candidate
        self.target_ms = config.target_ms
        self.min_sample_ms = config.min_sample_ms
        self.max_scaling_steps = config.max_scaling_steps
        self.checkpoint: int = config.initial_checkpoint
        self.limit: float = config.initial_iterations
        self.steps = 0
        self.projected = False
        self.last_sample_ms: Optional[float] = None

    def sample(self, index: int, elapsed_ms: float) -> tuple[int, float]:
        """Record the elapsed time at a checkpoint.

        Returns the next ``(checkpoint, limit)`` pair for the loop.
        """
        self.last_sample_ms = elapsed_ms
        if elapsed_ms < self.min_sample_ms:
            self.steps += 1
            if self.steps > self.max_scaling_steps:
                raise CalibrationNonConvergence(
                    self.candidate, self.steps - 1, self.checkpoint, elapsed_ms
                )
            self.checkpoint *= 10
            if self.checkpoint >= self.limit:
                self.limit *= 10
            logger.debug(
                "%s: %s after %d calls is too short, next checkpoint %d",
                self.candidate, format_duration(elapsed_ms), index + 1, self.checkpoint,
            )
        else:
            self.limit = index * self.target_ms / elapsed_ms
            self.projected = True
            logger.debug(
                "%s: %s after %d calls, projecting %.0f iterations",
                self.candidate, format_duration(elapsed_ms), index + 1, self.limit,
            )
        return self.checkpoint, self.limit


def calibrating_loop(fn, arguments: ArgumentSet, state: CalibrationState, timer: Timer) -> int:
    """Call ``fn`` until the (moving) limit is reached; return the call count.

    The two shapes get their own loop so the single-value path pays no
    spreading cost.
    """
    checkpoint = state.checkpoint
    limit = state.limit
    i = 0
    if arguments.spread:
        values = arguments.values
        while i < limit:
            fn(*values)
            if i == checkpoint:
                checkpoint, limit = state.sample(i, timer.elapsed_ms)
            i += 1
    else:
        value = arguments.value
        while i < limit:
            fn(value)
            if i == checkpoint:
                checkpoint, limit = state.sample(i, timer.elapsed_ms)
            i += 1
    return i


def discovery_loop(fn, arguments: ArgumentSet, state: CalibrationState, timer: Timer) -> int:
    """Call ``fn`` only until a checkpoint sample yields a projection.

    Returns the iteration count the calibrating loop would have reached.
    """
    checkpoint = state.checkpoint
    i = 0
    if arguments.spread:
        values = arguments.values
        while not state.projected:
            fn(*values)
            if i == checkpoint:
                checkpoint, _ = state.sample(i, timer.elapsed_ms)
            i += 1
    else:
        value = arguments.value
        while not state.projected:
            fn(value)
            if i == checkpoint:
                checkpoint, _ = state.sample(i, timer.elapsed_ms)
            i += 1
    return max(i, math.ceil(state.limit))


def fixed_loop(fn, arguments: ArgumentSet, iterations: int) -> None:
    """Call ``fn`` exactly ``iterations`` times."""
    if arguments.spread:
        values = arguments.values
        for _ in repeat(None, iterations):
            fn(*values)
    else:
        value = arguments.value
        for _ in repeat(None, iterations):
            fn(value)


class InlineCalibration:
    """Calibrate and measure in one continuous timed loop."""

    strategy = CalibrationStrategy.INLINE

    def measure(
        self,
        candidate: Candidate,
        arguments: ArgumentSet,
        config: BenchmarkConfig,
        clock: Optional[Clock] = None,
    ) -> Measurement:
        state = CalibrationState(candidate.name, config)
        timer = Timer(candidate.name, clock).start()
        iterations = calibrating_loop(candidate.fn, arguments, state, timer)
        timer.stop()
        return Measurement(iterations, timer.elapsed_seconds, state.steps)


class SeparateCalibration:
    """Discover the iteration count untimed, then time a fixed loop."""

    strategy = CalibrationStrategy.SEPARATE

    def measure(
        self,
        candidate: Candidate,
        arguments: ArgumentSet,
        config: BenchmarkConfig,
        clock: Optional[Clock] = None,
    ) -> Measurement:
        state = CalibrationState(candidate.name, config)
        discovery = Timer(candidate.name, clock).start()
        iterations = discovery_loop(candidate.fn, arguments, state, discovery)
        discovery.stop()
        logger.debug(
            "%s: calibration discarded after %s, timing %d iterations",
            candidate.name, format_duration(discovery.elapsed_ms), iterations,
        )

        timer = Timer(candidate.name, clock).start()
        fixed_loop(candidate.fn, arguments, iterations)
        timer.stop()
        return Measurement(iterations, timer.elapsed_seconds, state.steps)


_STRATEGIES = {
    CalibrationStrategy.INLINE: InlineCalibration,
    CalibrationStrategy.SEPARATE: SeparateCalibration,
}


def get_strategy(strategy: CalibrationStrategy):
    """Return a calibration strategy instance for the configured name."""
    return _STRATEGIES[CalibrationStrategy(strategy)]()
