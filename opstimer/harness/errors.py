"""
Error types raised by the benchmark harness.
"""

from typing import Optional


class OpsTimerError(Exception):
    """Base class for all harness errors."""


class ConfigError(OpsTimerError, ValueError):
    """Invalid benchmark configuration value."""


class InvocationFault(OpsTimerError):
    """A candidate raised while being previewed or measured.

    The original exception is chained as ``__cause__``. A call with the
    wrong number of arguments surfaces here too, as the ``TypeError`` the
    call itself raised.
    """

    def __init__(self, candidate: str, arguments: str, phase: str = "measure"):
        self.candidate = candidate
        self.arguments = arguments
        self.phase = phase
        super().__init__(
            f"Candidate {candidate!r} failed during {phase} with arguments {arguments}"
        )


class CalibrationNonConvergence(OpsTimerError):
    """The checkpoint kept growing without reaching a usable sample.

    Happens when a candidate's cost sits at or below the clock's resolution,
    so the elapsed time at every checkpoint stays under the minimum sample
    duration.
    """

    def __init__(
        self,
        candidate: str,
        steps: int,
        checkpoint: int,
        elapsed_ms: Optional[float] = None,
    ):
        self.candidate = candidate
        self.steps = steps
        self.checkpoint = checkpoint
        self.elapsed_ms = elapsed_ms
        detail = f"{elapsed_ms:.3f}ms" if elapsed_ms is not None else "n/a"
        super().__init__(
            f"Calibration for {candidate!r} did not converge after {steps} "
            f"scaling steps (checkpoint {checkpoint}, last sample {detail})"
        )
