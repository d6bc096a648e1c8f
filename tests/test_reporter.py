from __future__ import annotations

import pytest

from opstimer.harness import (
    Candidate,
    ChartReporter,
    ComparisonReport,
    ConsoleReporter,
    Failure,
    RunResult,
    rank,
)


def _runs(*speeds):
    return [RunResult(f"f{i}", iterations=ops, elapsed_seconds=1.0) for i, ops in enumerate(speeds)]


class TestRank:

    def test_percentages(self):
        fast, mid, slow = rank(_runs(1000, 500, 250))
        assert fast.slower_than_fastest_pct == 0
        assert mid.slower_than_fastest_pct == pytest.approx(50.0)
        assert slow.slower_than_fastest_pct == pytest.approx(75.0)
        assert fast.faster_than_slowest_pct == pytest.approx(300.0)
        assert mid.faster_than_slowest_pct == pytest.approx(100.0)
        assert slow.faster_than_slowest_pct == 0

    def test_labels(self):
        fast, mid, slow = rank(_runs(1000, 500, 250))
        assert [r.compare_to_fastest for r in (fast, mid, slow)] == [
            "Fastest", "50.0% slower", "75.0% slower",
        ]
        assert [r.compare_to_slowest for r in (fast, mid, slow)] == [
            "300% faster", "100% faster", "Slowest",
        ]

    def test_exactly_one_fastest_and_slowest(self):
        ranked = rank(_runs(300, 900, 100, 450))
        assert sum(r.is_fastest for r in ranked) == 1
        assert sum(r.is_slowest for r in ranked) == 1
        assert ranked[1].is_fastest
        assert ranked[2].is_slowest

    def test_tie_marks_both(self):
        a, b = rank(_runs(700, 700))
        assert a.is_fastest and a.is_slowest
        assert b.is_fastest and b.is_slowest

    def test_order_is_preserved(self):
        ranked = rank(_runs(1, 3, 2))
        assert [r.name for r in ranked] == ["f0", "f1", "f2"]

    def test_single_result_has_no_annotations(self):
        (only,) = rank(_runs(1234))
        assert only.slower_than_fastest_pct is None
        assert only.faster_than_slowest_pct is None
        assert not only.is_fastest and not only.is_slowest
        assert only.to_row() == ["f0", "1,234.0 ops/sec", "1.00 sec"]

    def test_zero_elapsed_reports_zero_throughput(self):
        (result,) = rank([RunResult("f", iterations=10, elapsed_seconds=0.0)])
        assert result.ops_per_sec == 0.0

    def test_empty(self):
        assert rank([]) == []


class TestComparisonReport:

    def test_from_results(self):
        failure = Failure(Candidate("bad", print), RuntimeError("nope"))
        report = ComparisonReport.from_results(_runs(10, 40), [failure], arguments="'x'")
        assert report.fastest.name == "f1"
        assert report.slowest.name == "f0"
        assert report.get("f0").iterations == 10
        assert report.get("missing") is None

        data = report.to_dict()
        assert data["arguments"] == "'x'"
        assert [r["name"] for r in data["results"]] == ["f0", "f1"]
        assert data["failures"] == [
            {"name": "bad", "error": "nope", "error_type": "RuntimeError"},
        ]

    def test_empty_report(self):
        report = ComparisonReport.from_results([])
        assert report.fastest is None
        assert report.slowest is None


class TestConsoleReporter:

    def test_report_with_comparison(self):
        reporter = ConsoleReporter(use_color=False)
        ranked = rank(_runs(2000, 1000))
        table, raw = reporter.report(ranked)
        assert table[0] == [
            "FUNCTION", "SPEED", "TEST LENGTH", "COMPARE TO FASTEST", "COMPARE TO SLOWEST",
        ]
        assert table[1] == ["f0", "2,000.0 ops/sec", "1.00 sec", "Fastest", "100% faster"]
        assert table[2] == ["f1", "1,000.0 ops/sec", "1.00 sec", "50.0% slower", "Slowest"]
        assert raw == ranked

    def test_report_single(self):
        table, raw = ConsoleReporter().report(rank(_runs(5)))
        assert table[0] == ["FUNCTION", "SPEED", "TEST LENGTH"]
        assert len(table) == 2
        assert len(raw) == 1

    def test_render_plain(self):
        reporter = ConsoleReporter(use_color=False)
        table, _ = reporter.report(rank(_runs(2000, 1000)))
        text = reporter.render(table)
        assert "\033[" not in text
        lines = text.splitlines()
        assert lines[1].startswith("FUNCTION")
        assert lines[3].startswith("f0")
        assert "Fastest" in lines[3]
        assert "Slowest" in lines[4]

    def test_render_colored(self):
        reporter = ConsoleReporter(use_color=True)
        table, _ = reporter.report(rank(_runs(2000, 1000)))
        assert "\033[92m" in reporter.render(table)

    def test_render_empty(self):
        reporter = ConsoleReporter()
        table, _ = reporter.report([])
        assert reporter.render(table) == "No results to display"

    def test_failures_summary(self):
        reporter = ConsoleReporter(use_color=False)
        failures = [Failure(Candidate(f"c{i}", print), ValueError("x")) for i in range(7)]
        text = reporter.failures(failures)
        assert text.startswith("Failed candidates:")
        assert "c0: x" in text
        assert "... and 2 more" in text
        assert reporter.failures([]) == ""


class TestChartReporter:

    def test_throughput_bar_chart(self, tmp_path):
        pytest.importorskip("matplotlib")
        reporter = ChartReporter(tmp_path)
        path = reporter.throughput_bar_chart(rank(_runs(100, 300)), filename="chart.png")
        assert path == tmp_path / "chart.png"
        assert path.exists()

    def test_no_results(self, tmp_path):
        pytest.importorskip("matplotlib")
        assert ChartReporter(tmp_path).throughput_bar_chart([]) is None
