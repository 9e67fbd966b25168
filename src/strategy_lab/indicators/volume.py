"""Volume-weighted indicators."""

from __future__ import annotations

from typing import Sequence

from strategy_lab.indicators.moving import Series, nulls


def obv(closes: Sequence[float], volumes: Sequence[float]) -> Series:
    """On-balance volume. Defined from the first bar, so it has no warm-up."""
    result: Series = []
    running = 0.0
    for index, close in enumerate(closes):
        if index > 0:
            if close > closes[index - 1]:
                running += volumes[index]
            elif close < closes[index - 1]:
                running -= volumes[index]
        result.append(running)
    return result


def cmf(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    volumes: Sequence[float],
    period: int = 20,
) -> Series:
    """Chaikin money flow."""
    length = len(closes)
    result = nulls(length)
    if period <= 0:
        return result
    flow_volume: list[float] = []
    for high, low, close, volume in zip(highs, lows, closes, volumes):
        spread = high - low
        multiplier = 0.0 if spread == 0 else ((close - low) - (high - close)) / spread
        flow_volume.append(multiplier * volume)
    for index in range(period - 1, length):
        volume_sum = sum(volumes[index - period + 1 : index + 1])
        if volume_sum == 0:
            result[index] = 0.0
        else:
            result[index] = sum(flow_volume[index - period + 1 : index + 1]) / volume_sum
    return result


def vwap(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    volumes: Sequence[float],
    period: int = 20,
) -> Series:
    """Rolling volume-weighted average price over ``period`` bars.

    A window without volume falls back to the plain mean of typical prices.
    """
    length = len(closes)
    result = nulls(length)
    if period <= 0:
        return result
    typical = [(high + low + close) / 3.0 for high, low, close in zip(highs, lows, closes)]
    for index in range(period - 1, length):
        prices = typical[index - period + 1 : index + 1]
        weights = volumes[index - period + 1 : index + 1]
        volume_sum = sum(weights)
        if volume_sum == 0:
            result[index] = sum(prices) / period
        else:
            result[index] = sum(price * weight for price, weight in zip(prices, weights)) / volume_sum
    return result
