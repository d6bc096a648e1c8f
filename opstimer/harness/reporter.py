"""
Results aggregation and visualization for benchmark results.

Provides the ranked comparison, the console table and throughput charts.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from .results import Failure, RankedResult, RunResult

HEADER = ["FUNCTION", "SPEED", "TEST LENGTH"]
COMPARISON_HEADER = ["COMPARE TO FASTEST", "COMPARE TO SLOWEST"]


def rank(results: Sequence[RunResult]) -> list[RankedResult]:
    """Annotate runs with their distance from the fastest and slowest.

    Order is preserved; ranking is expressed only through the annotations.
    """
    speeds = [r.ops_per_sec for r in results]
    compared = len(results) > 1
    fastest = max(speeds) if speeds else 0.0
    slowest = min(speeds) if speeds else 0.0

    ranked = []
    for result, ops in zip(results, speeds):
        slower = faster = None
        if compared:
            slower = (fastest - ops) / fastest * 100 if fastest > 0 else 0.0
            faster = (ops - slowest) / slowest * 100 if slowest > 0 else 0.0
        ranked.append(RankedResult(
            name=result.name,
            iterations=result.iterations,
            elapsed_seconds=result.elapsed_seconds,
            ops_per_sec=ops,
            slower_than_fastest_pct=slower,
            faster_than_slowest_pct=faster,
        ))
    return ranked


@dataclass
class ComparisonReport:
    """Report comparing every candidate measured in one run."""

    results: list[RankedResult]
    failures: list[Failure] = field(default_factory=list)
    arguments: str = ""
    table: list[list[str]] = field(default_factory=list)

    @classmethod
    def from_results(
        cls,
        results: Sequence[RunResult],
        failures: Optional[Sequence[Failure]] = None,
        arguments: str = "",
    ) -> "ComparisonReport":
        return cls(
            results=rank(results),
            failures=list(failures or []),
            arguments=arguments,
        )

    @property
    def fastest(self) -> Optional[RankedResult]:
        if not self.results:
            return None
        return max(self.results, key=lambda r: r.ops_per_sec)

    @property
    def slowest(self) -> Optional[RankedResult]:
        if not self.results:
            return None
        return min(self.results, key=lambda r: r.ops_per_sec)

    def get(self, name: str) -> Optional[RankedResult]:
        """Look up a result by candidate name."""
        for result in self.results:
            if result.name == name:
                return result
        return None

    def to_dict(self) -> dict:
        return {
            "arguments": self.arguments,
            "results": [r.to_dict() for r in self.results],
            "failures": [f.to_dict() for f in self.failures],
        }


class ConsoleReporter:
    """Generates console/CLI reports."""

    def __init__(self, use_color: bool = True):
        self.use_color = use_color

    def _color(self, text: str, color: str) -> str:
        """Apply ANSI color if enabled."""
        if not self.use_color:
            return text

        colors = {
            "green": "\033[92m",
            "red": "\033[91m",
            "blue": "\033[94m",
            "bold": "\033[1m",
            "reset": "\033[0m",
        }

        return f"{colors.get(color, '')}{text}{colors['reset']}"

    def report(self, results: Sequence[RankedResult]) -> tuple[list[list[str]], list[RankedResult]]:
        """Build the display table and return it with the structured results."""
        header = list(HEADER)
        if len(results) > 1:
            header.extend(COMPARISON_HEADER)
        table = [header] + [r.to_row() for r in results]
        return table, list(results)

    def render(self, table: list[list[str]]) -> str:
        """Render a table from ``report`` as fixed-width text."""
        if len(table) <= 1:
            return "No results to display"

        widths = [
            max(len(row[col]) for row in table) + 2
            for col in range(len(table[0]))
        ]
        total = sum(widths)

        lines = []
        lines.append(self._color("=" * total, "blue"))
        header = "".join(f"{cell:<{widths[i]}}" for i, cell in enumerate(table[0]))
        lines.append(self._color(header, "bold"))
        lines.append("-" * total)

        for row in table[1:]:
            cells = []
            for i, cell in enumerate(row):
                text = f"{cell:<{widths[i]}}"
                if cell == "Fastest":
                    text = self._color(text, "green")
                elif cell == "Slowest":
                    text = self._color(text, "red")
                cells.append(text)
            lines.append("".join(cells))

        return "\n".join(lines)

    def failures(self, failures: Sequence[Failure]) -> str:
        """Summarize isolated failures."""
        if not failures:
            return ""
        lines = [self._color("Failed candidates:", "red")]
        for failure in failures[:5]:
            lines.append(f"  - {failure.candidate.name}: {failure.error}")
        if len(failures) > 5:
            lines.append(f"  ... and {len(failures) - 5} more")
        return "\n".join(lines)


class ChartReporter:
    """Generates visual charts using matplotlib."""

    def __init__(self, output_dir: Optional[Path] = None):
        self.output_dir = output_dir or Path("results/charts")
        self._matplotlib_available = False
        self._check_matplotlib()

    def _check_matplotlib(self):
        """Check if matplotlib is available."""
        try:
            import matplotlib
            matplotlib.use("Agg")  # Non-interactive backend
            self._matplotlib_available = True
        except ImportError:
            self._matplotlib_available = False

    def throughput_bar_chart(
        self,
        results: Sequence[RankedResult],
        filename: Optional[str] = None,
    ) -> Optional[Path]:
        """Generate a bar chart of ops/sec per candidate."""
        if not self._matplotlib_available:
            print("Warning: matplotlib not available for charts")
            return None

        import matplotlib.pyplot as plt
        import numpy as np

        if not results:
            return None

        names = [r.name for r in results]
        speeds = [r.ops_per_sec for r in results]
        colors = [
            "seagreen" if r.is_fastest else "indianred" if r.is_slowest else "steelblue"
            for r in results
        ]

        x = np.arange(len(names))

        fig, ax = plt.subplots(figsize=(max(6, len(names) * 1.5), 6))
        ax.bar(x, speeds, color=colors, edgecolor="black")

        ax.set_xlabel("Function")
        ax.set_ylabel("Operations / second")
        ax.set_title("Throughput Comparison")
        ax.set_xticks(x)
        ax.set_xticklabels(names, rotation=45, ha="right")

        fig.tight_layout()

        self.output_dir.mkdir(parents=True, exist_ok=True)
        filename = filename or "throughput_comparison.png"
        filepath = self.output_dir / filename
        fig.savefig(filepath, dpi=150, bbox_inches="tight")
        plt.close(fig)

        return filepath
