"""Volatility bands, channels and trailing-stop indicators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from strategy_lab.indicators.moving import Series, combine, ema, nulls, rolling_max, rolling_min, sma, stddev


@dataclass(frozen=True)
class Bands:
    upper: Series
    middle: Series
    lower: Series


@dataclass(frozen=True)
class TrendSeries:
    """Indicator value plus a trend direction of 1 (up) or -1 (down)."""

    value: Series
    direction: list[Optional[int]]


def true_range(highs: Sequence[float], lows: Sequence[float], closes: Sequence[float]) -> list[float]:
    ranges: list[float] = []
    for index, (high, low) in enumerate(zip(highs, lows)):
        if index == 0:
            ranges.append(high - low)
            continue
        prev_close = closes[index - 1]
        ranges.append(max(high - low, abs(high - prev_close), abs(low - prev_close)))
    return ranges


def atr(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    period: int = 14,
) -> Series:
    """Wilder ATR. The first value sits at index ``period`` (needs ``period + 1`` bars)."""
    length = len(closes)
    result = nulls(length)
    if period <= 0 or length <= period:
        return result
    ranges = true_range(highs, lows, closes)
    previous = sum(ranges[1 : period + 1]) / period
    result[period] = previous
    for index in range(period + 1, length):
        previous = (previous * (period - 1) + ranges[index]) / period
        result[index] = previous
    return result


def bollinger_bands(values: Sequence[float], period: int = 20, multiplier: float = 2.0) -> Bands:
    middle = sma(values, period)
    deviation = stddev(values, period)
    upper = combine(middle, deviation, lambda mid, dev: mid + dev * multiplier)
    lower = combine(middle, deviation, lambda mid, dev: mid - dev * multiplier)
    return Bands(upper=upper, middle=middle, lower=lower)


def donchian_channels(highs: Sequence[float], lows: Sequence[float], period: int = 20) -> Bands:
    upper = rolling_max(highs, period)
    lower = rolling_min(lows, period)
    middle = combine(upper, lower, lambda high, low: (high + low) / 2.0)
    return Bands(upper=upper, middle=middle, lower=lower)


def keltner_channels(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    period: int = 20,
    multiplier: float = 2.0,
    atr_period: Optional[int] = None,
) -> Bands:
    middle = ema(closes, period)
    ranges = atr(highs, lows, closes, atr_period or period)
    upper = combine(middle, ranges, lambda mid, width: mid + multiplier * width)
    lower = combine(middle, ranges, lambda mid, width: mid - multiplier * width)
    middle = combine(middle, ranges, lambda mid, _: mid)
    return Bands(upper=upper, middle=middle, lower=lower)


def supertrend(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    period: int = 10,
    multiplier: float = 3.0,
) -> TrendSeries:
    ranges = atr(highs, lows, closes, period)
    length = len(closes)
    values = nulls(length)
    direction: list[Optional[int]] = [None] * length

    trend = 1
    final_upper: Optional[float] = None
    final_lower: Optional[float] = None
    for index in range(length):
        width = ranges[index]
        if width is None:
            continue
        hl2 = (highs[index] + lows[index]) / 2.0
        basic_upper = hl2 + multiplier * width
        basic_lower = hl2 - multiplier * width

        if final_upper is None or final_lower is None:
            final_upper = basic_upper
            final_lower = basic_lower
        else:
            prev_close = closes[index - 1]
            if basic_upper < final_upper or prev_close > final_upper:
                final_upper = basic_upper
            if basic_lower > final_lower or prev_close < final_lower:
                final_lower = basic_lower
            if closes[index] > final_upper:
                trend = 1
            elif closes[index] < final_lower:
                trend = -1

        values[index] = final_lower if trend == 1 else final_upper
        direction[index] = trend
    return TrendSeries(value=values, direction=direction)


def parabolic_sar(
    highs: Sequence[float],
    lows: Sequence[float],
    af_start: float = 0.02,
    af_increment: float = 0.02,
    af_max: float = 0.2,
) -> TrendSeries:
    length = len(highs)
    values = nulls(length)
    direction: list[Optional[int]] = [None] * length
    if length < 2:
        return TrendSeries(value=values, direction=direction)

    rising = True
    sar = lows[0]
    extreme = highs[0]
    factor = af_start
    for index in range(1, length):
        sar = sar + factor * (extreme - sar)
        if rising:
            sar = min(sar, lows[index - 1], lows[index - 2] if index >= 2 else lows[index - 1])
            if lows[index] < sar:
                rising = False
                sar = extreme
                extreme = lows[index]
                factor = af_start
            elif highs[index] > extreme:
                extreme = highs[index]
                factor = min(factor + af_increment, af_max)
        else:
            sar = max(sar, highs[index - 1], highs[index - 2] if index >= 2 else highs[index - 1])
            if highs[index] > sar:
                rising = True
                sar = extreme
                extreme = highs[index]
                factor = af_start
            elif lows[index] < extreme:
                extreme = lows[index]
                factor = min(factor + af_increment, af_max)
        values[index] = sar
        direction[index] = 1 if rising else -1
    return TrendSeries(value=values, direction=direction)
