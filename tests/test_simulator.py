import pytest

from strategy_lab.market import AnnotatedBar, Side, Signal
from strategy_lab.simulator import CloseReason, SimulationConfig, TradeSimulator, simulate_trades


def _bar(time, low, high, close=None, side=None):
    close = close if close is not None else (low + high) / 2
    signal = None
    if side is Side.BUY:
        signal = Signal(Side.BUY, low)
    elif side is Side.SELL:
        signal = Signal(Side.SELL, high)
    return AnnotatedBar(time=time, open=close, high=high, low=low, close=close, signal=signal)


def test_stop_loss_wins_when_bar_spans_both_levels():
    bars = [
        _bar(0, 100.0, 101.0, side=Side.BUY),
        _bar(1, 95.0, 110.0),
    ]

    (trade,) = simulate_trades(bars, take_profit_percent=5.0, stop_loss_percent=2.0)

    assert trade.entry_price == 100.0
    assert trade.stop_loss_price == pytest.approx(98.0)
    assert trade.take_profit_price == pytest.approx(105.0)
    assert trade.exit_price == pytest.approx(98.0)
    assert trade.close_reason is CloseReason.STOP_LOSS
    assert trade.pnl == pytest.approx(-2.0)
    assert trade.pnl_percent == pytest.approx(-2.0)
    assert trade.liquidated is False


def test_take_profit_exit():
    bars = [
        _bar(0, 100.0, 101.0, side=Side.BUY),
        _bar(1, 99.0, 106.0),
    ]

    (trade,) = simulate_trades(bars, 5.0, 2.0)

    assert trade.exit_price == pytest.approx(105.0)
    assert trade.exit_time == 1
    assert trade.close_reason is CloseReason.TAKE_PROFIT


def test_sell_signal_exit_uses_bar_high():
    bars = [
        _bar(0, 100.0, 101.0, side=Side.BUY),
        _bar(1, 99.5, 101.5, side=Side.SELL),
        _bar(2, 99.5, 100.5),
    ]

    trades = simulate_trades(bars, 5.0, 2.0)

    assert len(trades) == 1
    assert trades[0].exit_price == 101.5
    assert trades[0].close_reason is CloseReason.SIGNAL
    assert trades[0].liquidated is False


def test_end_of_data_liquidates_at_last_close():
    bars = [
        _bar(0, 100.0, 101.0, side=Side.BUY),
        _bar(1, 100.5, 101.5, close=101.0),
        _bar(2, 100.5, 102.0, close=101.25),
    ]

    (trade,) = simulate_trades(bars, 5.0, 2.0)

    assert trade.exit_price == 101.25
    assert trade.exit_time == 2
    assert trade.close_reason is CloseReason.SIGNAL
    assert trade.liquidated is True


def test_reentry_on_the_exit_bar():
    bars = [
        _bar(0, 100.0, 101.0, side=Side.BUY),
        _bar(1, 95.0, 97.0, close=96.0, side=Side.BUY),
    ]

    first, second = simulate_trades(bars, 5.0, 2.0)

    assert first.close_reason is CloseReason.STOP_LOSS
    assert second.entry_price == 95.0
    assert second.entry_time == second.exit_time == 1
    assert second.exit_price == 96.0
    assert second.liquidated is True


def test_positions_never_overlap():
    bars = [_bar(index, 100.0, 100.5, side=Side.BUY) for index in range(5)]
    bars.append(_bar(5, 100.0, 101.0, side=Side.SELL))
    bars.append(_bar(6, 100.0, 100.5, side=Side.BUY))
    bars.append(_bar(7, 100.0, 106.0))

    trades = TradeSimulator(SimulationConfig(take_profit_percent=5.0, stop_loss_percent=2.0)).run(bars)

    assert [(trade.entry_time, trade.exit_time) for trade in trades] == [(0, 5), (6, 7)]
    for earlier, later in zip(trades, trades[1:]):
        assert later.entry_time >= earlier.exit_time
    assert all(trade.exit_time >= trade.entry_time for trade in trades)


def test_sell_signal_while_flat_is_ignored():
    bars = [_bar(0, 100.0, 101.0, side=Side.SELL), _bar(1, 100.0, 101.0)]

    assert simulate_trades(bars, 5.0, 2.0) == []
    assert simulate_trades([], 5.0, 2.0) == []
