"""Simulation data structures."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CloseReason(str, Enum):
    STOP_LOSS = "stop-loss"
    TAKE_PROFIT = "take-profit"
    SIGNAL = "signal"


@dataclass(frozen=True)
class SimulationConfig:
    take_profit_percent: float = 5.0
    stop_loss_percent: float = 2.0


@dataclass(frozen=True)
class Trade:
    entry_time: int
    entry_price: float
    exit_time: int
    exit_price: float
    pnl: float
    pnl_percent: float
    close_reason: CloseReason
    stop_loss_price: float
    take_profit_price: float
    liquidated: bool = False  # closed because the data ran out

    def to_dict(self) -> dict:
        return {
            "entry_time": self.entry_time,
            "entry_price": self.entry_price,
            "exit_time": self.exit_time,
            "exit_price": self.exit_price,
            "pnl": self.pnl,
            "pnl_percent": self.pnl_percent,
            "close_reason": self.close_reason.value,
            "stop_loss_price": self.stop_loss_price,
            "take_profit_price": self.take_profit_price,
            "liquidated": self.liquidated,
        }


@dataclass(frozen=True)
class BacktestSummary:
    total_trades: int
    winning_trades: int
    losing_trades: int
    win_rate: float
    total_pnl: float
    average_win: float
    average_loss: float
    profit_factor: float
    initial_capital: float
    ending_balance: float
    total_return_percent: float

    def to_dict(self) -> dict:
        return {
            "total_trades": self.total_trades,
            "winning_trades": self.winning_trades,
            "losing_trades": self.losing_trades,
            "win_rate": self.win_rate,
            "total_pnl": self.total_pnl,
            "average_win": self.average_win,
            "average_loss": self.average_loss,
            "profit_factor": self.profit_factor,
            "initial_capital": self.initial_capital,
            "ending_balance": self.ending_balance,
            "total_return_percent": self.total_return_percent,
        }
