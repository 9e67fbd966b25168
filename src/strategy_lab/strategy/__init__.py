"""Strategies: parameter handling, signal rules, the catalog and the registry."""

from strategy_lab.strategy.base import IndicatorStrategy, PriceColumns, Strategy, StrategyInfo
from strategy_lab.strategy.catalog import BUILTIN_STRATEGIES
from strategy_lab.strategy.consensus import CONSENSUS_ID, ConsensusParams, ConsensusStrategy
from strategy_lab.strategy.params import StrategyParams, merge_params, params_to_dict
from strategy_lab.strategy.registry import StrategyRegistry, default_registry
from strategy_lab.strategy.rules import Rule, scan

__all__ = [
    "BUILTIN_STRATEGIES",
    "CONSENSUS_ID",
    "ConsensusParams",
    "ConsensusStrategy",
    "IndicatorStrategy",
    "PriceColumns",
    "Rule",
    "Strategy",
    "StrategyInfo",
    "StrategyParams",
    "StrategyRegistry",
    "default_registry",
    "merge_params",
    "params_to_dict",
    "scan",
]
