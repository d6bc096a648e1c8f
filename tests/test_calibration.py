from __future__ import annotations

import pytest

from opstimer.harness import (
    BenchmarkConfig,
    CalibrationNonConvergence,
    CalibrationState,
    CalibrationStrategy,
    Candidate,
    InlineCalibration,
    Multi,
    SeparateCalibration,
    Single,
    get_strategy,
)


def _measure(strategy, fn, clock, arguments=Single("x"), **config):
    return strategy.measure(Candidate(fn.__name__, fn), arguments, BenchmarkConfig(**config), clock)


class TestCalibrationState:
    """Checkpoint arithmetic, independent of any loop."""

    def test_short_sample_scales_checkpoint(self):
        state = CalibrationState("f", BenchmarkConfig())
        checkpoint, limit = state.sample(10, 5.0)
        assert checkpoint == 100
        assert limit == 1_000_000
        assert state.steps == 1

    def test_short_sample_raises_limit_when_checkpoint_reaches_it(self):
        state = CalibrationState("f", BenchmarkConfig(initial_iterations=50))
        checkpoint, limit = state.sample(10, 1.0)
        assert checkpoint == 100
        assert limit == 500

    def test_long_sample_extrapolates_to_target(self):
        state = CalibrationState("f", BenchmarkConfig(target_ms=1000))
        checkpoint, limit = state.sample(100, 50.0)
        assert checkpoint == 10
        assert limit == pytest.approx(2000)
        assert state.last_sample_ms == 50.0

    def test_checkpoint_strictly_increases(self):
        state = CalibrationState("f", BenchmarkConfig(max_scaling_steps=6))
        seen = [state.checkpoint]
        for _ in range(6):
            checkpoint, _ = state.sample(seen[-1], 0.0)
            seen.append(checkpoint)
        assert seen == sorted(set(seen))

    def test_exceeding_step_cap_raises(self):
        state = CalibrationState("f", BenchmarkConfig(max_scaling_steps=1))
        state.sample(10, 0.0)
        with pytest.raises(CalibrationNonConvergence) as exc_info:
            state.sample(100, 0.0)
        assert exc_info.value.candidate == "f"
        assert exc_info.value.steps == 1
        assert exc_info.value.checkpoint == 100


class TestInlineCalibration:
    """The timed loop driven by a clock that advances per call."""

    def test_one_millisecond_candidate(self, fake_clock, costly):
        fn = costly(0.001)
        m = _measure(InlineCalibration(), fn, fake_clock)
        # 11 calls (11ms) is under 35ms, 101 calls (101ms) projects 990.1
        assert m.iterations == 991
        assert m.elapsed_seconds == pytest.approx(0.991)
        assert m.scaling_steps == 1
        assert len(fn.calls) == 991

    def test_first_sample_long_enough(self, fake_clock, costly):
        fn = costly(0.010)
        m = _measure(InlineCalibration(), fn, fake_clock)
        assert m.iterations == 91
        assert m.elapsed_seconds == pytest.approx(0.91)
        assert m.scaling_steps == 0

    def test_fast_candidate_needs_several_steps(self, fake_clock, costly):
        fn = costly(0.00001)
        m = _measure(InlineCalibration(), fn, fake_clock)
        assert m.iterations == 99991
        assert m.elapsed_seconds == pytest.approx(0.99991)
        assert m.scaling_steps == 3

    def test_small_initial_cap_is_raised(self, fake_clock, costly):
        fn = costly(0.00001)
        m = _measure(InlineCalibration(), fn, fake_clock, initial_iterations=50)
        assert m.iterations == 99991

    def test_slow_candidate_overshoots(self, fake_clock, costly):
        fn = costly(0.2)
        m = _measure(InlineCalibration(), fn, fake_clock)
        # The first checkpoint alone is 11 calls
        assert m.iterations == 11
        assert m.elapsed_seconds == pytest.approx(2.2)

    def test_elapsed_near_target(self, fake_clock, costly):
        target_ms = 250
        for cost in (0.00002, 0.0003, 0.004):
            fn = costly(cost)
            m = _measure(InlineCalibration(), fn, fake_clock, target_ms=target_ms)
            assert 0.5 * target_ms <= m.elapsed_seconds * 1000 <= 3 * target_ms

    def test_spread_arguments(self, fake_clock, costly):
        fn = costly(0.010)
        _measure(InlineCalibration(), fn, fake_clock, arguments=Multi(("a", 2)))
        assert set(fn.calls) == {("a", 2)}

    def test_single_argument_is_not_spread(self, fake_clock, costly):
        fn = costly(0.010)
        _measure(InlineCalibration(), fn, fake_clock, arguments=Single(("a", 2)))
        assert set(fn.calls) == {(("a", 2),)}

    def test_unresolvable_cost_fails_fast(self, fake_clock, costly):
        fn = costly(0.0)
        with pytest.raises(CalibrationNonConvergence) as exc_info:
            _measure(InlineCalibration(), fn, fake_clock, max_scaling_steps=3)
        assert exc_info.value.steps == 3
        assert exc_info.value.checkpoint == 10000
        assert len(fn.calls) == 10001

    def test_errors_propagate_unchanged(self, fake_clock, costly):
        def boom(v):
            raise KeyError(v)

        with pytest.raises(KeyError):
            _measure(InlineCalibration(), boom, fake_clock)


class TestSeparateCalibration:

    def test_times_only_the_fixed_loop(self, fake_clock, costly):
        fn = costly(0.001)
        m = _measure(SeparateCalibration(), fn, fake_clock)
        assert m.iterations == 991
        assert m.elapsed_seconds == pytest.approx(0.991)
        # Discovery stops at the first usable sample (101 calls) and is not counted
        assert len(fn.calls) == 101 + 991

    def test_spread_arguments(self, fake_clock, costly):
        fn = costly(0.010)
        m = _measure(SeparateCalibration(), fn, fake_clock, arguments=Multi(("a", "b")))
        assert m.iterations == 91
        assert len(fn.calls) == 11 + 91
        assert set(fn.calls) == {("a", "b")}

    @pytest.mark.parametrize("cost", [0.00001, 0.001, 0.010, 0.2])
    def test_matches_inline_iteration_count(self, fake_clock, costly, cost):
        inline = _measure(InlineCalibration(), costly(cost), fake_clock)
        separate = _measure(SeparateCalibration(), costly(cost), fake_clock)
        assert separate.iterations == inline.iterations
        assert separate.scaling_steps == inline.scaling_steps

    def test_non_convergence(self, fake_clock, costly):
        with pytest.raises(CalibrationNonConvergence):
            _measure(SeparateCalibration(), costly(0.0), fake_clock, max_scaling_steps=3)


def test_get_strategy():
    assert isinstance(get_strategy(CalibrationStrategy.INLINE), InlineCalibration)
    assert isinstance(get_strategy(CalibrationStrategy.SEPARATE), SeparateCalibration)
    assert isinstance(get_strategy("separate"), SeparateCalibration)
