"""Load and freeze configuration files."""

from __future__ import annotations

import hashlib
import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import yaml

from strategy_lab.config.models import (
    BacktestConfig,
    DataConfig,
    MonitoringConfig,
    SimulationSettings,
    StrategyConfig,
)

DATA_KINDS = ("bars", "points")


def load_config(path: str | Path) -> BacktestConfig:
    path = Path(path)
    data = _load_yaml(path)

    name = str(_require(data, "name"))
    version = str(_require(data, "version"))
    run_id_prefix = str(data.get("run_id_prefix", name))

    return BacktestConfig(
        name=name,
        version=version,
        run_id_prefix=run_id_prefix,
        strategy=_parse_strategy(_require(data, "strategy")),
        simulation=_parse_simulation(data.get("simulation") or {}),
        data=_parse_data(data.get("data") or {}),
        monitoring=_parse_monitoring(data.get("monitoring") or {}),
    )


def compute_config_hash(path: str | Path) -> str:
    path = Path(path)
    content = path.read_bytes()
    return hashlib.sha256(content).hexdigest()


def _default_lock_path(path: Path) -> Path:
    return path.with_suffix(path.suffix + ".lock.json")


def freeze_config(path: str | Path, lock_path: Optional[str | Path] = None) -> Path:
    path = Path(path)
    config_hash = compute_config_hash(path)
    lock_path = Path(lock_path) if lock_path is not None else _default_lock_path(path)

    payload = {
        "config_path": str(path),
        "config_hash": config_hash,
        "frozen_at_utc": datetime.now(timezone.utc).isoformat(),
    }
    lock_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return lock_path


def verify_config_lock(path: str | Path, lock_path: Optional[str | Path] = None) -> bool:
    path = Path(path)
    lock_path = Path(lock_path) if lock_path is not None else _default_lock_path(path)
    if not lock_path.exists():
        return False
    payload = json.loads(lock_path.read_text(encoding="utf-8"))
    return payload.get("config_hash") == compute_config_hash(path)


def serialize_config(config: BacktestConfig) -> dict[str, Any]:
    return asdict(config)


def _load_yaml(path: Path) -> dict[str, Any]:
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Config must be a mapping")
    return data


def _require(data: dict[str, Any], key: str) -> Any:
    if key not in data:
        raise ValueError(f"Missing required config key: {key}")
    return data[key]


def _number(data: dict[str, Any], key: str, default: float) -> float:
    value = data.get(key, default)
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid {key}: {value}") from exc


def _parse_strategy(data: Any) -> StrategyConfig:
    if not isinstance(data, dict):
        raise ValueError("strategy must be a mapping")
    parameters = data.get("parameters") or {}
    if not isinstance(parameters, dict):
        raise ValueError("strategy.parameters must be a mapping")
    return StrategyConfig(name=str(_require(data, "name")), parameters=dict(parameters))


def _parse_simulation(data: dict[str, Any]) -> SimulationSettings:
    settings = SimulationSettings(
        take_profit_percent=_number(data, "take_profit_percent", 5.0),
        stop_loss_percent=_number(data, "stop_loss_percent", 2.0),
        initial_capital=_number(data, "initial_capital", 1000.0),
    )
    if settings.take_profit_percent < 0 or settings.stop_loss_percent < 0:
        raise ValueError("take_profit_percent and stop_loss_percent must be non-negative")
    return settings


def _parse_data(data: dict[str, Any]) -> DataConfig:
    kind = str(data.get("kind", "bars"))
    if kind not in DATA_KINDS:
        raise ValueError(f"Invalid data.kind: {kind}")
    interval = data.get("interval_minutes")
    if interval is not None:
        interval = int(_number(data, "interval_minutes", 0))
        if interval <= 0:
            raise ValueError("data.interval_minutes must be positive")
    if kind == "points" and interval is None:
        raise ValueError("data.interval_minutes is required when data.kind is 'points'")
    path = data.get("path")
    return DataConfig(path=str(path) if path is not None else None, kind=kind, interval_minutes=interval)


def _parse_monitoring(data: dict[str, Any]) -> MonitoringConfig:
    return MonitoringConfig(
        audit_log_path=str(data.get("audit_log_path", "runtime/audit.log")),
    )
