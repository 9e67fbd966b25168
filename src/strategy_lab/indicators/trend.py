"""Trend structure indicators: Ichimoku, pivots, Elder-Ray, Heikin-Ashi."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from strategy_lab.indicators.moving import Series, combine, ema, nulls, rolling_max, rolling_min


@dataclass(frozen=True)
class IchimokuSeries:
    tenkan: Series
    kijun: Series
    senkou_a: Series
    senkou_b: Series
    chikou: Series


@dataclass(frozen=True)
class PivotLevels:
    pp: Series
    s1: Series
    s2: Series
    s3: Series
    r1: Series
    r2: Series
    r3: Series


@dataclass(frozen=True)
class ElderRaySeries:
    bull_power: Series
    bear_power: Series


@dataclass(frozen=True)
class HeikinAshiCandles:
    open: list[float]
    high: list[float]
    low: list[float]
    close: list[float]


def _midpoint(highs: Sequence[float], lows: Sequence[float], period: int) -> Series:
    return combine(rolling_max(highs, period), rolling_min(lows, period), lambda high, low: (high + low) / 2.0)


def ichimoku(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    tenkan_period: int = 9,
    kijun_period: int = 26,
    senkou_b_period: int = 52,
    displacement: int = 26,
) -> IchimokuSeries:
    """Ichimoku components with the leading spans shifted forward.

    ``senkou_a[i]`` and ``senkou_b[i]`` hold the cloud computed
    ``displacement`` bars earlier; ``chikou[i]`` holds the close
    ``displacement`` bars later. Projections past the series end are dropped.
    """
    length = len(closes)
    if displacement < 0:
        return IchimokuSeries(*(nulls(length) for _ in range(5)))
    tenkan = _midpoint(highs, lows, tenkan_period)
    kijun = _midpoint(highs, lows, kijun_period)
    span_b = _midpoint(highs, lows, senkou_b_period)
    span_a = combine(tenkan, kijun, lambda fast, slow: (fast + slow) / 2.0)

    senkou_a = nulls(length)
    senkou_b = nulls(length)
    chikou = nulls(length)
    for index in range(length):
        target = index + displacement
        if target < length:
            senkou_a[target] = span_a[index]
            senkou_b[target] = span_b[index]
        if index - displacement >= 0:
            chikou[index - displacement] = closes[index]
    return IchimokuSeries(tenkan=tenkan, kijun=kijun, senkou_a=senkou_a, senkou_b=senkou_b, chikou=chikou)


def pivot_points(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    period: int = 24,
) -> PivotLevels:
    """Classic floor pivots from the previous ``period`` bars.

    Bar ``i`` uses the high, low and last close of bars ``i-period .. i-1`` so
    the levels never include the bar they are compared against.
    """
    length = len(closes)
    levels = {name: nulls(length) for name in ("pp", "s1", "s2", "s3", "r1", "r2", "r3")}
    if period <= 0:
        return PivotLevels(**levels)
    for index in range(period, length):
        high = max(highs[index - period : index])
        low = min(lows[index - period : index])
        close = closes[index - 1]
        pivot = (high + low + close) / 3.0
        levels["pp"][index] = pivot
        levels["r1"][index] = 2.0 * pivot - low
        levels["s1"][index] = 2.0 * pivot - high
        levels["r2"][index] = pivot + (high - low)
        levels["s2"][index] = pivot - (high - low)
        levels["r3"][index] = high + 2.0 * (pivot - low)
        levels["s3"][index] = low - 2.0 * (high - pivot)
    return PivotLevels(**levels)


def elder_ray(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    period: int = 13,
) -> ElderRaySeries:
    trend = ema(closes, period)
    bull = [high - value if value is not None else None for high, value in zip(highs, trend)]
    bear = [low - value if value is not None else None for low, value in zip(lows, trend)]
    return ElderRaySeries(bull_power=bull, bear_power=bear)


def heikin_ashi(
    opens: Sequence[float],
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
) -> HeikinAshiCandles:
    ha_open: list[float] = []
    ha_high: list[float] = []
    ha_low: list[float] = []
    ha_close: list[float] = []
    for index, (open_, high, low, close) in enumerate(zip(opens, highs, lows, closes)):
        candle_close = (open_ + high + low + close) / 4.0
        if index == 0:
            candle_open = (open_ + close) / 2.0
        else:
            candle_open = (ha_open[-1] + ha_close[-1]) / 2.0
        ha_open.append(candle_open)
        ha_close.append(candle_close)
        ha_high.append(max(high, candle_open, candle_close))
        ha_low.append(min(low, candle_open, candle_close))
    return HeikinAshiCandles(open=ha_open, high=ha_high, low=ha_low, close=ha_close)
