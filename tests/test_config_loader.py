from pathlib import Path

import pytest

yaml = pytest.importorskip("yaml")

from strategy_lab.config import freeze_config, load_config, serialize_config, verify_config_lock

SAMPLE = Path(__file__).resolve().parents[1] / "configs" / "backtest_v1.yaml"


def test_load_config_sample():
    config = load_config(SAMPLE)

    assert config.strategy.name == "ema-crossover"
    assert config.strategy.parameters["shortPeriod"] == 12
    assert config.simulation.stop_loss_percent == 2.0
    assert config.data.interval_minutes == 60


def test_freeze_and_verify(tmp_path):
    target = tmp_path / "backtest_v1.yaml"
    target.write_text(SAMPLE.read_text(encoding="utf-8"), encoding="utf-8")

    lock_path = freeze_config(target)
    assert verify_config_lock(target, lock_path)

    target.write_text(target.read_text(encoding="utf-8") + "\n# edited\n", encoding="utf-8")
    assert not verify_config_lock(target, lock_path)


def test_missing_lock_fails_verification(tmp_path):
    target = tmp_path / "config.yaml"
    target.write_text("name: x\n", encoding="utf-8")

    assert verify_config_lock(target) is False


def test_missing_strategy_raises(tmp_path):
    target = tmp_path / "config.yaml"
    target.write_text("name: x\nversion: 1\n", encoding="utf-8")

    with pytest.raises(ValueError, match="strategy"):
        load_config(target)


def test_points_data_requires_interval(tmp_path):
    target = tmp_path / "config.yaml"
    target.write_text(
        "name: x\nversion: 1\nstrategy:\n  name: sma-crossover\ndata:\n  kind: points\n",
        encoding="utf-8",
    )

    with pytest.raises(ValueError, match="interval_minutes"):
        load_config(target)


def test_defaults_and_serialization(tmp_path):
    target = tmp_path / "config.yaml"
    target.write_text("name: minimal\nversion: 2\nstrategy:\n  name: rsi-divergence\n", encoding="utf-8")

    config = load_config(target)
    payload = serialize_config(config)

    assert config.run_id_prefix == "minimal"
    assert config.simulation.initial_capital == 1000.0
    assert payload["strategy"] == {"name": "rsi-divergence", "parameters": {}}
    assert payload["data"]["kind"] == "bars"
