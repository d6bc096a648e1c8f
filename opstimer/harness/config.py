"""
Configuration for a benchmark run.

All values have defaults and can be overridden per call, or read from
OPSTIMER_* environment variables.
"""

import dataclasses
import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .errors import ConfigError


class CalibrationStrategy(Enum):
    """How the iteration count is discovered."""

    # Calibrate inside the timed window; the sampling overhead is kept.
    INLINE = "inline"
    # Calibrate untimed, discard, then time a fixed-count loop.
    SEPARATE = "separate"


class FaultMode(Enum):
    """What happens when a candidate raises."""

    ABORT = "abort"
    ISOLATE = "isolate"


_ENV_FIELDS = {
    "target_ms": ("OPSTIMER_TARGET_MS", float),
    "initial_checkpoint": ("OPSTIMER_INITIAL_CHECKPOINT", int),
    "min_sample_ms": ("OPSTIMER_MIN_SAMPLE_MS", float),
    "initial_iterations": ("OPSTIMER_INITIAL_ITERATIONS", int),
    "max_scaling_steps": ("OPSTIMER_MAX_SCALING_STEPS", int),
    "strategy": ("OPSTIMER_STRATEGY", CalibrationStrategy),
    "fault_mode": ("OPSTIMER_FAULT_MODE", FaultMode),
}


@dataclass(frozen=True)
class BenchmarkConfig:
    """Configuration for a benchmark run."""

    target_ms: float = 1000.0
    initial_checkpoint: int = 10
    min_sample_ms: float = 35.0
    initial_iterations: int = 1_000_000
    max_scaling_steps: int = 9
    strategy: CalibrationStrategy = CalibrationStrategy.INLINE
    fault_mode: FaultMode = FaultMode.ABORT
    verbose: bool = True
    preview_length: int = 200

    def __post_init__(self):
        # Accept plain strings for the enum fields
        if not isinstance(self.strategy, CalibrationStrategy):
            object.__setattr__(self, "strategy", _parse_enum(CalibrationStrategy, self.strategy))
        if not isinstance(self.fault_mode, FaultMode):
            object.__setattr__(self, "fault_mode", _parse_enum(FaultMode, self.fault_mode))
        self.validate()

    def validate(self) -> None:
        """Raise ConfigError on values the calibration loop cannot use."""
        if self.target_ms <= 0:
            raise ConfigError(f"target_ms must be positive, got {self.target_ms}")
        if self.min_sample_ms <= 0:
            raise ConfigError(f"min_sample_ms must be positive, got {self.min_sample_ms}")
        if self.initial_checkpoint < 1:
            raise ConfigError(
                f"initial_checkpoint must be at least 1, got {self.initial_checkpoint}"
            )
        if self.initial_iterations <= self.initial_checkpoint:
            raise ConfigError(
                "initial_iterations must exceed initial_checkpoint "
                f"({self.initial_iterations} <= {self.initial_checkpoint})"
            )
        if self.max_scaling_steps < 0:
            raise ConfigError(
                f"max_scaling_steps cannot be negative, got {self.max_scaling_steps}"
            )
        if self.preview_length < 0:
            raise ConfigError(f"preview_length cannot be negative, got {self.preview_length}")

    @property
    def isolate_faults(self) -> bool:
        return self.fault_mode is FaultMode.ISOLATE

    def replace(self, **overrides) -> "BenchmarkConfig":
        """Return a copy with the given fields overridden."""
        unknown = set(overrides) - {f.name for f in dataclasses.fields(self)}
        if unknown:
            raise ConfigError(f"Unknown config option(s): {', '.join(sorted(unknown))}")
        return dataclasses.replace(self, **overrides)

    @classmethod
    def from_env(cls, environ: Optional[dict] = None, **overrides) -> "BenchmarkConfig":
        """Build a config from OPSTIMER_* variables, then apply overrides."""
        environ = os.environ if environ is None else environ
        values = {}
        for field_name, (var, cast) in _ENV_FIELDS.items():
            raw = environ.get(var)
            if raw is None or raw == "":
                continue
            try:
                values[field_name] = cast(raw)
            except ValueError as e:
                raise ConfigError(f"Invalid value for {var}: {raw!r}") from e
        values.update(overrides)
        return cls(**values)

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "target_ms": self.target_ms,
            "initial_checkpoint": self.initial_checkpoint,
            "min_sample_ms": self.min_sample_ms,
            "initial_iterations": self.initial_iterations,
            "max_scaling_steps": self.max_scaling_steps,
            "strategy": self.strategy.value,
            "fault_mode": self.fault_mode.value,
            "verbose": self.verbose,
            "preview_length": self.preview_length,
        }


def _parse_enum(enum_cls, value):
    try:
        return enum_cls(value)
    except ValueError as e:
        choices = ", ".join(m.value for m in enum_cls)
        raise ConfigError(f"Invalid {enum_cls.__name__} {value!r} (expected one of: {choices})") from e
