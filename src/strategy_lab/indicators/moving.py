"""Moving averages and rolling-window helpers.

Every function returns a list aligned 1:1 with its input, with ``None`` for
the warm-up prefix. Inputs are never mutated.
"""

from __future__ import annotations

import math
from typing import Callable, Optional, Sequence

Series = list[Optional[float]]


def nulls(length: int) -> Series:
    return [None] * length


def sma(values: Sequence[float], period: int) -> Series:
    length = len(values)
    if period <= 0 or length < period:
        return nulls(length)
    result = nulls(period - 1)
    for index in range(period - 1, length):
        window = values[index - period + 1 : index + 1]
        result.append(sum(window) / period)
    return result


def ema(values: Sequence[float], period: int) -> Series:
    """Exponential moving average seeded with the SMA of the first ``period`` values."""
    length = len(values)
    if period <= 0 or length < period:
        return nulls(length)
    multiplier = 2.0 / (period + 1.0)
    result = nulls(period - 1)
    previous = sum(values[:period]) / period
    result.append(previous)
    for index in range(period, length):
        previous = (values[index] - previous) * multiplier + previous
        result.append(previous)
    return result


def wma(values: Sequence[float], period: int) -> Series:
    length = len(values)
    if period <= 0 or length < period:
        return nulls(length)
    weights = range(1, period + 1)
    denominator = period * (period + 1) / 2.0
    result = nulls(period - 1)
    for index in range(period - 1, length):
        window = values[index - period + 1 : index + 1]
        result.append(sum(weight * value for weight, value in zip(weights, window)) / denominator)
    return result


def stddev(values: Sequence[float], period: int) -> Series:
    """Rolling population standard deviation."""
    length = len(values)
    if period <= 0 or length < period:
        return nulls(length)
    result = nulls(period - 1)
    for index in range(period - 1, length):
        window = values[index - period + 1 : index + 1]
        mean = sum(window) / period
        variance = sum((value - mean) ** 2 for value in window) / period
        result.append(math.sqrt(variance))
    return result


def rolling_max(values: Sequence[float], period: int) -> Series:
    length = len(values)
    if period <= 0 or length < period:
        return nulls(length)
    return nulls(period - 1) + [
        max(values[index - period + 1 : index + 1]) for index in range(period - 1, length)
    ]


def rolling_min(values: Sequence[float], period: int) -> Series:
    length = len(values)
    if period <= 0 or length < period:
        return nulls(length)
    return nulls(period - 1) + [
        min(values[index - period + 1 : index + 1]) for index in range(period - 1, length)
    ]


def on_valid(series: Sequence[Optional[float]], func: Callable[[list[float]], Series]) -> Series:
    """Apply ``func`` to the non-null values of ``series`` and re-pad to full length.

    Used to chain indicators, e.g. a signal line computed over a MACD line
    that itself has a warm-up prefix.
    """
    valid = [value for value in series if value is not None]
    padding = len(series) - len(valid)
    return nulls(padding) + func(valid)


def combine(
    left: Sequence[Optional[float]],
    right: Sequence[Optional[float]],
    func: Callable[[float, float], float],
) -> Series:
    return [
        func(a, b) if a is not None and b is not None else None
        for a, b in zip(left, right)
    ]
