"""Momentum oscillators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from strategy_lab.indicators.moving import Series, combine, ema, nulls, on_valid, sma, wma


@dataclass(frozen=True)
class MacdSeries:
    macd: Series
    signal: Series
    histogram: Series


@dataclass(frozen=True)
class StochasticSeries:
    k: Series
    d: Series


def _rsi_value(avg_gain: float, avg_loss: float) -> float:
    if avg_loss == 0:
        return 50.0 if avg_gain == 0 else 100.0
    rs = avg_gain / avg_loss
    return 100.0 - (100.0 / (1.0 + rs))


def rsi(values: Sequence[float], period: int = 14) -> Series:
    """Wilder RSI. The first value sits at index ``period`` (needs ``period + 1`` closes)."""
    length = len(values)
    result = nulls(length)
    if period <= 0 or length <= period:
        return result

    gains = 0.0
    losses = 0.0
    for index in range(1, period + 1):
        change = values[index] - values[index - 1]
        if change > 0:
            gains += change
        else:
            losses -= change
    avg_gain = gains / period
    avg_loss = losses / period
    result[period] = _rsi_value(avg_gain, avg_loss)

    for index in range(period + 1, length):
        change = values[index] - values[index - 1]
        gain = change if change > 0 else 0.0
        loss = -change if change < 0 else 0.0
        avg_gain = (avg_gain * (period - 1) + gain) / period
        avg_loss = (avg_loss * (period - 1) + loss) / period
        result[index] = _rsi_value(avg_gain, avg_loss)
    return result


def macd(
    values: Sequence[float],
    short_period: int = 12,
    long_period: int = 26,
    signal_period: int = 9,
) -> MacdSeries:
    line = combine(ema(values, short_period), ema(values, long_period), lambda short, long: short - long)
    signal = on_valid(line, lambda valid: ema(valid, signal_period))
    histogram = combine(line, signal, lambda macd_value, signal_value: macd_value - signal_value)
    return MacdSeries(macd=line, signal=signal, histogram=histogram)


def stochastic(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    period: int = 14,
    smooth_k: int = 3,
    smooth_d: int = 3,
) -> StochasticSeries:
    length = len(closes)
    raw_k = nulls(length)
    if period <= 0:
        return StochasticSeries(k=nulls(length), d=nulls(length))
    for index in range(period - 1, length):
        highest = max(highs[index - period + 1 : index + 1])
        lowest = min(lows[index - period + 1 : index + 1])
        if highest == lowest:
            raw_k[index] = 50.0
        else:
            raw_k[index] = 100.0 * (closes[index] - lowest) / (highest - lowest)
    k = on_valid(raw_k, lambda valid: sma(valid, smooth_k))
    d = on_valid(k, lambda valid: sma(valid, smooth_d))
    return StochasticSeries(k=k, d=d)


def cci(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    period: int = 20,
) -> Series:
    length = len(closes)
    result = nulls(length)
    if period <= 0:
        return result
    typical = [(high + low + close) / 3.0 for high, low, close in zip(highs, lows, closes)]
    for index in range(period - 1, length):
        window = typical[index - period + 1 : index + 1]
        mean = sum(window) / period
        mean_deviation = sum(abs(value - mean) for value in window) / period
        if mean_deviation == 0:
            result[index] = 0.0
        else:
            result[index] = (typical[index] - mean) / (0.015 * mean_deviation)
    return result


def williams_r(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    period: int = 14,
) -> Series:
    length = len(closes)
    result = nulls(length)
    if period <= 0:
        return result
    for index in range(period - 1, length):
        highest = max(highs[index - period + 1 : index + 1])
        lowest = min(lows[index - period + 1 : index + 1])
        if highest == lowest:
            result[index] = -50.0
        else:
            result[index] = -100.0 * (highest - closes[index]) / (highest - lowest)
    return result


def momentum(values: Sequence[float], period: int = 14) -> Series:
    length = len(values)
    result = nulls(length)
    if period <= 0:
        return result
    for index in range(period, length):
        result[index] = values[index] - values[index - period]
    return result


def roc(values: Sequence[float], period: int) -> Series:
    """Rate of change in percent."""
    length = len(values)
    result = nulls(length)
    if period <= 0:
        return result
    for index in range(period, length):
        previous = values[index - period]
        result[index] = 0.0 if previous == 0 else 100.0 * (values[index] - previous) / previous
    return result


def awesome_oscillator(
    highs: Sequence[float],
    lows: Sequence[float],
    short_period: int = 5,
    long_period: int = 34,
) -> Series:
    median = [(high + low) / 2.0 for high, low in zip(highs, lows)]
    return combine(sma(median, short_period), sma(median, long_period), lambda short, long: short - long)


def coppock_curve(
    values: Sequence[float],
    long_roc: int = 14,
    short_roc: int = 11,
    wma_period: int = 10,
) -> Series:
    summed = combine(roc(values, long_roc), roc(values, short_roc), lambda long, short: long + short)
    return on_valid(summed, lambda valid: wma(valid, wma_period))
