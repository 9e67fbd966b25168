"""Reduce a trade list into headline statistics."""

from __future__ import annotations

from typing import Iterable

from strategy_lab.simulator.models import BacktestSummary


def summarize(trades: Iterable, initial_capital: float) -> BacktestSummary:
    """Aggregate completed trades.

    Trades with ``pnl > 0`` are wins and everything else is a loss.
    ``profit_factor`` is ``inf`` when there are trades but no losing PnL.
    The return percentage divides by ``initial_capital or 1``, so a zero
    capital yields the raw PnL times 100 rather than an error.
    """
    pnls = [trade.pnl for trade in trades]
    total = len(pnls)
    if total == 0:
        return BacktestSummary(
            total_trades=0,
            winning_trades=0,
            losing_trades=0,
            win_rate=0.0,
            total_pnl=0.0,
            average_win=0.0,
            average_loss=0.0,
            profit_factor=0.0,
            initial_capital=initial_capital,
            ending_balance=initial_capital,
            total_return_percent=0.0,
        )

    wins = [pnl for pnl in pnls if pnl > 0]
    losses = [pnl for pnl in pnls if pnl <= 0]
    total_wins = sum(wins)
    total_losses = sum(losses)
    total_pnl = sum(pnls)

    if total_losses == 0:
        profit_factor = float("inf")
    else:
        profit_factor = abs(total_wins / total_losses)

    return BacktestSummary(
        total_trades=total,
        winning_trades=len(wins),
        losing_trades=len(losses),
        win_rate=len(wins) / total * 100,
        total_pnl=total_pnl,
        average_win=total_wins / len(wins) if wins else 0.0,
        average_loss=abs(total_losses / len(losses)) if losses else 0.0,
        profit_factor=profit_factor,
        initial_capital=initial_capital,
        ending_balance=initial_capital + total_pnl,
        total_return_percent=total_pnl / (initial_capital or 1) * 100,
    )
