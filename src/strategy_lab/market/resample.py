"""Fixed-interval OHLCV aggregation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from strategy_lab.market.models import AnnotatedBar, Bar, PricePoint


def interval_millis(interval_minutes: int) -> int:
    if interval_minutes <= 0:
        raise ValueError(f"interval_minutes must be positive: {interval_minutes}")
    return int(interval_minutes) * 60_000


def bucket_start(time_ms: int, interval_ms: int) -> int:
    return (time_ms // interval_ms) * interval_ms


@dataclass
class _Bucket:
    open: float
    high: float
    low: float
    close: float
    volume: float

    def to_bar(self, time_ms: int) -> Bar:
        return Bar(
            time=time_ms,
            open=self.open,
            high=self.high,
            low=self.low,
            close=self.close,
            volume=round(self.volume, 2),
        )


def resample(points: Sequence[PricePoint], interval_minutes: int) -> list[Bar]:
    """Aggregate price points into bars of ``interval_minutes``.

    Open and close follow the input order inside each bucket, so callers
    must pass points sorted by time. The output is sorted by bucket start.
    """
    if not points or interval_minutes <= 0:
        return []
    interval_ms = interval_millis(interval_minutes)

    buckets: dict[int, _Bucket] = {}
    for point in points:
        key = bucket_start(point.time, interval_ms)
        bucket = buckets.get(key)
        if bucket is None:
            buckets[key] = _Bucket(point.price, point.price, point.price, point.price, point.volume)
            continue
        bucket.high = max(bucket.high, point.price)
        bucket.low = min(bucket.low, point.price)
        bucket.close = point.price
        bucket.volume += point.volume

    return [buckets[key].to_bar(key) for key in sorted(buckets)]


def resample_bars(bars: Iterable[Bar | AnnotatedBar], interval_minutes: int) -> list[Bar]:
    """Aggregate finer bars into coarser bars with the same bucketing rules."""
    if interval_minutes <= 0:
        return []
    interval_ms = interval_millis(interval_minutes)

    buckets: dict[int, _Bucket] = {}
    for bar in bars:
        key = bucket_start(bar.time, interval_ms)
        bucket = buckets.get(key)
        if bucket is None:
            buckets[key] = _Bucket(bar.open, bar.high, bar.low, bar.close, bar.volume)
            continue
        bucket.high = max(bucket.high, bar.high)
        bucket.low = min(bucket.low, bar.low)
        bucket.close = bar.close
        bucket.volume += bar.volume

    return [buckets[key].to_bar(key) for key in sorted(buckets)]
