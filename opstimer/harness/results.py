"""
Result containers: raw per-candidate runs and their ranked form.
"""

from dataclasses import dataclass
from typing import Optional, Union

from .arguments import Candidate


@dataclass(frozen=True)
class RunResult:
    """One candidate's measured iterations and duration."""

    name: str
    iterations: int
    elapsed_seconds: float
    scaling_steps: int = 0

    @property
    def ops_per_sec(self) -> float:
        """Throughput (iterations per second)."""
        if self.elapsed_seconds <= 0:
            return 0.0
        return self.iterations / self.elapsed_seconds

    def to_dict(self) -> dict:
        """Convert result to dictionary for serialization."""
        return {
            "name": self.name,
            "iterations": self.iterations,
            "elapsed_seconds": self.elapsed_seconds,
            "ops_per_sec": self.ops_per_sec,
            "scaling_steps": self.scaling_steps,
        }


@dataclass(frozen=True)
class RankedResult:
    """A run annotated with its standing against the rest of the run.

    The two percentages are None when only one candidate was measured.
    """

    name: str
    iterations: int
    elapsed_seconds: float
    ops_per_sec: float
    slower_than_fastest_pct: Optional[float] = None
    faster_than_slowest_pct: Optional[float] = None

    @property
    def compared(self) -> bool:
        return self.slower_than_fastest_pct is not None

    @property
    def is_fastest(self) -> bool:
        return self.compared and self.slower_than_fastest_pct == 0

    @property
    def is_slowest(self) -> bool:
        return self.compared and self.faster_than_slowest_pct == 0

    @property
    def speed(self) -> str:
        return f"{self.ops_per_sec:,.1f} ops/sec"

    @property
    def test_length(self) -> str:
        return f"{self.elapsed_seconds:#.3g} sec"

    @property
    def compare_to_fastest(self) -> Optional[str]:
        if not self.compared:
            return None
        if self.is_fastest:
            return "Fastest"
        return f"{self.slower_than_fastest_pct:.1f}% slower"

    @property
    def compare_to_slowest(self) -> Optional[str]:
        if not self.compared:
            return None
        if self.is_slowest:
            return "Slowest"
        return f"{self.faster_than_slowest_pct:.0f}% faster"

    def to_row(self) -> list[str]:
        """Display cells in header order."""
        row = [self.name, self.speed, self.test_length]
        if self.compared:
            row.extend([self.compare_to_fastest, self.compare_to_slowest])
        return row

    def to_dict(self) -> dict:
        """Convert result to dictionary for serialization."""
        return {
            "name": self.name,
            "iterations": self.iterations,
            "elapsed_seconds": self.elapsed_seconds,
            "ops_per_sec": self.ops_per_sec,
            "slower_than_fastest_pct": self.slower_than_fastest_pct,
            "faster_than_slowest_pct": self.faster_than_slowest_pct,
        }


@dataclass(frozen=True)
class Success:
    """A candidate that was measured."""

    result: RunResult


@dataclass(frozen=True)
class Failure:
    """A candidate whose measurement raised."""

    candidate: Candidate
    error: Exception

    def to_dict(self) -> dict:
        return {
            "name": self.candidate.name,
            "error": str(self.error),
            "error_type": type(self.error).__name__,
        }


Outcome = Union[Success, Failure]
