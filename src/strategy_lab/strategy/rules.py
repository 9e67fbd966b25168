"""Bar-to-bar signal rules and the scan that applies them.

A rule looks at bars ``i-1`` and ``i`` of named series and answers BUY, SELL
or nothing. The scan only calls a rule when every series it names is defined
on both bars, so rules never see ``None``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, Union

from strategy_lab.market.models import Side

Columns = Mapping[str, Sequence[Optional[float]]]

PRICE_KEYS = ("open", "high", "low", "close", "volume")


def pick(buy: bool, sell: bool) -> Optional[Side]:
    """Resolve two conditions into one side; both or neither gives no signal."""
    if buy == sell:
        return None
    return Side.BUY if buy else Side.SELL


class Rule(ABC):
    @abstractmethod
    def keys(self) -> tuple[str, ...]:
        """Series the rule reads; all must be defined at ``i-1`` and ``i``."""

    @abstractmethod
    def evaluate(self, columns: Columns, index: int) -> Optional[Side]:
        raise NotImplementedError


@dataclass(frozen=True)
class Crossover(Rule):
    """``fast`` crossing ``slow``; ``slow`` may be a series name or a constant level."""

    fast: str
    slow: Union[str, float]

    def keys(self) -> tuple[str, ...]:
        if isinstance(self.slow, str):
            return (self.fast, self.slow)
        return (self.fast,)

    def _slow(self, columns: Columns, index: int) -> float:
        if isinstance(self.slow, str):
            return columns[self.slow][index]
        return float(self.slow)

    def evaluate(self, columns: Columns, index: int) -> Optional[Side]:
        prev_fast, fast = columns[self.fast][index - 1], columns[self.fast][index]
        prev_slow, slow = self._slow(columns, index - 1), self._slow(columns, index)
        crossed_up = prev_fast <= prev_slow and fast > slow
        crossed_down = prev_fast >= prev_slow and fast < slow
        return pick(crossed_up, crossed_down)


@dataclass(frozen=True)
class ChannelBreakout(Rule):
    """``price`` closing above ``upper`` buys, closing below ``lower`` sells."""

    upper: str
    lower: str
    price: str = "close"

    def keys(self) -> tuple[str, ...]:
        return (self.price, self.upper, self.lower)

    def evaluate(self, columns: Columns, index: int) -> Optional[Side]:
        price = columns[self.price]
        upper = columns[self.upper]
        lower = columns[self.lower]
        buy = price[index - 1] <= upper[index - 1] and price[index] > upper[index]
        sell = price[index - 1] >= lower[index - 1] and price[index] < lower[index]
        return pick(buy, sell)


@dataclass(frozen=True)
class LevelReentry(Rule):
    """Oscillator leaving an extreme zone: up through ``lower`` buys, down through ``upper`` sells."""

    series: str
    lower: float
    upper: float

    def keys(self) -> tuple[str, ...]:
        return (self.series,)

    def evaluate(self, columns: Columns, index: int) -> Optional[Side]:
        prev, curr = columns[self.series][index - 1], columns[self.series][index]
        buy = prev <= self.lower and curr > self.lower
        sell = prev >= self.upper and curr < self.upper
        return pick(buy, sell)


@dataclass(frozen=True)
class DirectionFlip(Rule):
    """Trend direction series turning from -1 to 1 buys, from 1 to -1 sells."""

    series: str

    def keys(self) -> tuple[str, ...]:
        return (self.series,)

    def evaluate(self, columns: Columns, index: int) -> Optional[Side]:
        prev, curr = columns[self.series][index - 1], columns[self.series][index]
        return pick(prev < 0 < curr, prev > 0 > curr)


@dataclass(frozen=True)
class BandReversal(Rule):
    """Price pierces a band on the previous bar and closes back inside on this one."""

    upper: str
    lower: str

    def keys(self) -> tuple[str, ...]:
        return ("low", "high", "close", self.upper, self.lower)

    def evaluate(self, columns: Columns, index: int) -> Optional[Side]:
        upper, lower = columns[self.upper], columns[self.lower]
        close = columns["close"][index]
        buy = columns["low"][index - 1] <= lower[index - 1] and close > lower[index]
        sell = columns["high"][index - 1] >= upper[index - 1] and close < upper[index]
        return pick(buy, sell)


@dataclass(frozen=True)
class PivotRejection(Rule):
    """Wick through a support level that closes back above it, or the mirror at resistance."""

    supports: tuple[str, ...] = ("pivot_s1", "pivot_s2", "pivot_s3")
    resistances: tuple[str, ...] = ("pivot_r1", "pivot_r2", "pivot_r3")

    def keys(self) -> tuple[str, ...]:
        return ("low", "high", "close") + self.supports + self.resistances

    def evaluate(self, columns: Columns, index: int) -> Optional[Side]:
        prev_low, low = columns["low"][index - 1], columns["low"][index]
        prev_high, high = columns["high"][index - 1], columns["high"][index]
        close = columns["close"][index]
        buy = any(
            low <= columns[key][index] < close and prev_low > columns[key][index]
            for key in self.supports
        )
        sell = any(
            high >= columns[key][index] > close and prev_high < columns[key][index]
            for key in self.resistances
        )
        return pick(buy, sell)


@dataclass(frozen=True)
class CloudCross(Rule):
    """Tenkan/kijun cross confirmed by price sitting outside the cloud."""

    fast: str = "tenkan"
    slow: str = "kijun"
    span_a: str = "senkou_a"
    span_b: str = "senkou_b"

    def keys(self) -> tuple[str, ...]:
        return ("close", self.fast, self.slow, self.span_a, self.span_b)

    def evaluate(self, columns: Columns, index: int) -> Optional[Side]:
        cross = Crossover(self.fast, self.slow).evaluate(columns, index)
        if cross is None:
            return None
        close = columns["close"][index]
        top = max(columns[self.span_a][index], columns[self.span_b][index])
        bottom = min(columns[self.span_a][index], columns[self.span_b][index])
        if cross is Side.BUY and close > top:
            return Side.BUY
        if cross is Side.SELL and close < bottom:
            return Side.SELL
        return None


@dataclass(frozen=True)
class PowerCross(Rule):
    """Elder-Ray: bear power turning positive in an uptrend, bull power turning negative in a downtrend."""

    trend: str = "elder_ema"
    bull: str = "bull_power"
    bear: str = "bear_power"

    def keys(self) -> tuple[str, ...]:
        return (self.trend, self.bull, self.bear)

    def evaluate(self, columns: Columns, index: int) -> Optional[Side]:
        trend = columns[self.trend]
        bull, bear = columns[self.bull], columns[self.bear]
        rising = trend[index] > trend[index - 1]
        falling = trend[index] < trend[index - 1]
        buy = rising and bear[index - 1] <= 0 < bear[index]
        sell = falling and bull[index - 1] >= 0 > bull[index]
        return pick(buy, sell)


@dataclass(frozen=True)
class TripleConfirmation(Rule):
    """CCI leaving an extreme, confirmed by price against the EMA and the MACD histogram sign."""

    level: float
    trend: str = "ema"
    oscillator: str = "cci"
    histogram: str = "macd_hist"

    def keys(self) -> tuple[str, ...]:
        return ("close", self.trend, self.oscillator, self.histogram)

    def evaluate(self, columns: Columns, index: int) -> Optional[Side]:
        reentry = LevelReentry(self.oscillator, -self.level, self.level).evaluate(columns, index)
        close = columns["close"][index]
        trend = columns[self.trend][index]
        histogram = columns[self.histogram][index]
        if reentry is Side.BUY and close > trend and histogram > 0:
            return Side.BUY
        if reentry is Side.SELL and close < trend and histogram < 0:
            return Side.SELL
        return None


@dataclass(frozen=True)
class CandleColorFlip(Rule):
    """Synthetic candle turning from bearish to bullish buys, the reverse sells."""

    open: str = "ha_open"
    close: str = "ha_close"

    def keys(self) -> tuple[str, ...]:
        return (self.open, self.close)

    def evaluate(self, columns: Columns, index: int) -> Optional[Side]:
        opens, closes = columns[self.open], columns[self.close]
        prev_bullish = closes[index - 1] > opens[index - 1]
        prev_bearish = closes[index - 1] < opens[index - 1]
        bullish = closes[index] > opens[index]
        bearish = closes[index] < opens[index]
        return pick(prev_bearish and bullish, prev_bullish and bearish)


def scan(rule: Rule, columns: Columns, length: int, reverse: bool = False) -> list[Optional[Side]]:
    """Apply ``rule`` to every bar from index 1; index 0 never signals."""
    sides: list[Optional[Side]] = [None] * length
    keys = rule.keys()
    for index in range(1, length):
        if any(columns[key][index - 1] is None or columns[key][index] is None for key in keys):
            continue
        side = rule.evaluate(columns, index)
        if side is not None and reverse:
            side = side.opposite
        sides[index] = side
    return sides
