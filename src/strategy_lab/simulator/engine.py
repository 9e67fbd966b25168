"""Long-only trade simulator over signal-annotated bars."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from strategy_lab.market.models import AnnotatedBar
from strategy_lab.simulator.models import CloseReason, SimulationConfig, Trade

logger = logging.getLogger(__name__)


class TradeSimulator:
    """Walks the bars once, holding at most one long position.

    While a position is open each bar checks stop-loss, then take-profit,
    then a sell signal; only the first match closes it. A flat book (even
    one flattened earlier on the same bar) opens on a buy signal at the
    bar's low. A position still open after the last bar is closed at that
    bar's close.
    """

    def __init__(self, config: SimulationConfig) -> None:
        self.config = config

    @dataclass
    class _OpenPosition:
        entry_time: int
        entry_price: float
        stop_loss_price: float
        take_profit_price: float

    def _open(self, bar: AnnotatedBar, price: float) -> "TradeSimulator._OpenPosition":
        return TradeSimulator._OpenPosition(
            entry_time=bar.time,
            entry_price=price,
            stop_loss_price=price * (1 - self.config.stop_loss_percent / 100),
            take_profit_price=price * (1 + self.config.take_profit_percent / 100),
        )

    @staticmethod
    def _close(
        position: "TradeSimulator._OpenPosition",
        exit_time: int,
        exit_price: float,
        reason: CloseReason,
        liquidated: bool = False,
    ) -> Trade:
        pnl = exit_price - position.entry_price
        pnl_percent = pnl / position.entry_price * 100 if position.entry_price else 0.0
        return Trade(
            entry_time=position.entry_time,
            entry_price=position.entry_price,
            exit_time=exit_time,
            exit_price=exit_price,
            pnl=pnl,
            pnl_percent=pnl_percent,
            close_reason=reason,
            stop_loss_price=position.stop_loss_price,
            take_profit_price=position.take_profit_price,
            liquidated=liquidated,
        )

    def _check_exit(self, position: "TradeSimulator._OpenPosition", bar: AnnotatedBar) -> Optional[Trade]:
        if bar.low <= position.stop_loss_price:
            return self._close(position, bar.time, position.stop_loss_price, CloseReason.STOP_LOSS)
        if bar.high >= position.take_profit_price:
            return self._close(position, bar.time, position.take_profit_price, CloseReason.TAKE_PROFIT)
        if bar.sell_signal is not None:
            return self._close(position, bar.time, bar.sell_signal, CloseReason.SIGNAL)
        return None

    def run(self, bars: Sequence[AnnotatedBar]) -> list[Trade]:
        trades: list[Trade] = []
        position: Optional[TradeSimulator._OpenPosition] = None
        for bar in bars:
            if position is not None:
                trade = self._check_exit(position, bar)
                if trade is not None:
                    trades.append(trade)
                    position = None
            if position is None and bar.buy_signal is not None:
                position = self._open(bar, bar.buy_signal)

        if position is not None and bars:
            last = bars[-1]
            logger.debug("Closing open position at end of data (time=%s)", last.time)
            trades.append(self._close(position, last.time, last.close, CloseReason.SIGNAL, liquidated=True))
        return trades


def simulate_trades(
    bars: Sequence[AnnotatedBar],
    take_profit_percent: float,
    stop_loss_percent: float,
) -> list[Trade]:
    config = SimulationConfig(take_profit_percent=take_profit_percent, stop_loss_percent=stop_loss_percent)
    return TradeSimulator(config).run(bars)
