from __future__ import annotations

import pytest

from opstimer.harness import BenchmarkConfig, CalibrationStrategy, ConfigError, FaultMode


def test_defaults():
    config = BenchmarkConfig()
    assert config.target_ms == 1000
    assert config.initial_checkpoint == 10
    assert config.min_sample_ms == 35
    assert config.initial_iterations == 1_000_000
    assert config.strategy is CalibrationStrategy.INLINE
    assert config.fault_mode is FaultMode.ABORT
    assert config.isolate_faults is False


def test_enum_fields_accept_strings():
    config = BenchmarkConfig(strategy="separate", fault_mode="isolate")
    assert config.strategy is CalibrationStrategy.SEPARATE
    assert config.isolate_faults is True


@pytest.mark.parametrize(
    "overrides",
    [
        {"target_ms": 0},
        {"min_sample_ms": -1},
        {"initial_checkpoint": 0},
        {"initial_checkpoint": 100, "initial_iterations": 100},
        {"max_scaling_steps": -1},
        {"preview_length": -5},
        {"strategy": "warmup"},
        {"fault_mode": "retry"},
    ],
)
def test_invalid_values(overrides):
    with pytest.raises(ConfigError):
        BenchmarkConfig(**overrides)


def test_replace_returns_new_config():
    config = BenchmarkConfig()
    changed = config.replace(target_ms=250, strategy="separate")
    assert changed.target_ms == 250
    assert changed.strategy is CalibrationStrategy.SEPARATE
    assert config.target_ms == 1000


def test_replace_rejects_unknown_fields():
    with pytest.raises(ConfigError, match="target_seconds"):
        BenchmarkConfig().replace(target_seconds=1)


def test_config_error_is_value_error():
    with pytest.raises(ValueError):
        BenchmarkConfig(target_ms=-1)


def test_from_env():
    config = BenchmarkConfig.from_env(
        {
            "OPSTIMER_TARGET_MS": "250",
            "OPSTIMER_INITIAL_CHECKPOINT": "5",
            "OPSTIMER_MIN_SAMPLE_MS": "20.5",
            "OPSTIMER_STRATEGY": "separate",
            "OPSTIMER_FAULT_MODE": "isolate",
            "OPSTIMER_MAX_SCALING_STEPS": "",
        }
    )
    assert config.target_ms == 250
    assert config.initial_checkpoint == 5
    assert config.min_sample_ms == 20.5
    assert config.strategy is CalibrationStrategy.SEPARATE
    assert config.fault_mode is FaultMode.ISOLATE
    assert config.max_scaling_steps == 9


def test_from_env_overrides_win():
    config = BenchmarkConfig.from_env({"OPSTIMER_TARGET_MS": "250"}, target_ms=75, verbose=False)
    assert config.target_ms == 75
    assert config.verbose is False


def test_from_env_rejects_garbage():
    with pytest.raises(ConfigError, match="OPSTIMER_TARGET_MS"):
        BenchmarkConfig.from_env({"OPSTIMER_TARGET_MS": "fast"})
    with pytest.raises(ConfigError, match="OPSTIMER_STRATEGY"):
        BenchmarkConfig.from_env({"OPSTIMER_STRATEGY": "warmup"})


def test_to_dict():
    data = BenchmarkConfig(strategy="separate").to_dict()
    assert data["strategy"] == "separate"
    assert data["fault_mode"] == "abort"
    assert data["target_ms"] == 1000
