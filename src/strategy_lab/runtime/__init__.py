"""Backtest runtime: run context and the pipeline runner."""

from strategy_lab.runtime.context import RunContext, create_run_context
from strategy_lab.runtime.runner import BacktestReport, BacktestRunner, load_config_data

__all__ = [
    "BacktestReport",
    "BacktestRunner",
    "RunContext",
    "create_run_context",
    "load_config_data",
]
