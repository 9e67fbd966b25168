import math
from types import SimpleNamespace

import pytest

from strategy_lab.simulator import summarize


def _trades(*pnls):
    return [SimpleNamespace(pnl=pnl) for pnl in pnls]


def test_summary_of_mixed_trades():
    summary = summarize(_trades(10.0, -5.0, 20.0), 1000.0)

    assert summary.total_trades == 3
    assert summary.winning_trades == 2
    assert summary.losing_trades == 1
    assert summary.win_rate == pytest.approx(66.67, abs=0.01)
    assert summary.total_pnl == 25.0
    assert summary.average_win == 15.0
    assert summary.average_loss == 5.0
    assert summary.profit_factor == 6.0
    assert summary.ending_balance == 1025.0
    assert summary.total_return_percent == pytest.approx(2.5)


def test_no_trades():
    summary = summarize([], 500.0)

    assert summary.total_trades == 0
    assert summary.win_rate == 0.0
    assert summary.profit_factor == 0.0
    assert summary.ending_balance == 500.0
    assert summary.total_return_percent == 0.0


def test_no_losses_gives_infinite_profit_factor():
    summary = summarize(_trades(1.0, 2.0), 100.0)

    assert math.isinf(summary.profit_factor)
    assert summary.average_loss == 0.0


def test_breakeven_trade_counts_as_loss():
    summary = summarize(_trades(0.0, 4.0), 100.0)

    assert summary.losing_trades == 1
    assert math.isinf(summary.profit_factor)


def test_zero_capital_divides_by_one():
    summary = summarize(_trades(3.0), 0.0)

    assert summary.total_return_percent == 300.0
    assert summary.ending_balance == 3.0
