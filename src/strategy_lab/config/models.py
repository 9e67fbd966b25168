"""Configuration models for reproducible backtests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from strategy_lab.simulator.models import SimulationConfig


@dataclass(frozen=True)
class StrategyConfig:
    name: str
    parameters: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SimulationSettings:
    take_profit_percent: float = 5.0
    stop_loss_percent: float = 2.0
    initial_capital: float = 1000.0

    def to_simulation_config(self) -> SimulationConfig:
        return SimulationConfig(
            take_profit_percent=self.take_profit_percent,
            stop_loss_percent=self.stop_loss_percent,
        )


@dataclass(frozen=True)
class DataConfig:
    path: Optional[str] = None
    kind: str = "bars"  # "bars" or "points"
    interval_minutes: Optional[int] = None


@dataclass(frozen=True)
class MonitoringConfig:
    audit_log_path: str = "runtime/audit.log"


@dataclass(frozen=True)
class BacktestConfig:
    name: str
    version: str
    run_id_prefix: str
    strategy: StrategyConfig
    simulation: SimulationSettings = SimulationSettings()
    data: DataConfig = DataConfig()
    monitoring: MonitoringConfig = MonitoringConfig()
