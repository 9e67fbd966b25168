"""Trade simulation and performance aggregation."""

from strategy_lab.simulator.engine import TradeSimulator, simulate_trades
from strategy_lab.simulator.models import BacktestSummary, CloseReason, SimulationConfig, Trade
from strategy_lab.simulator.summary import summarize

__all__ = [
    "BacktestSummary",
    "CloseReason",
    "SimulationConfig",
    "Trade",
    "TradeSimulator",
    "simulate_trades",
    "summarize",
]
