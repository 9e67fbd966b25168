"""Config loading and freezing."""

from strategy_lab.config.loader import (
    compute_config_hash,
    freeze_config,
    load_config,
    serialize_config,
    verify_config_lock,
)
from strategy_lab.config.models import (
    BacktestConfig,
    DataConfig,
    MonitoringConfig,
    SimulationSettings,
    StrategyConfig,
)

__all__ = [
    "BacktestConfig",
    "DataConfig",
    "MonitoringConfig",
    "SimulationSettings",
    "StrategyConfig",
    "compute_config_hash",
    "freeze_config",
    "load_config",
    "serialize_config",
    "verify_config_lock",
]
