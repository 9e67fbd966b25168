"""Bars, price points and resampling."""

from strategy_lab.market.loader import load_bars, load_points
from strategy_lab.market.models import AnnotatedBar, Bar, PricePoint, Side, Signal
from strategy_lab.market.resample import bucket_start, interval_millis, resample, resample_bars

__all__ = [
    "AnnotatedBar",
    "Bar",
    "PricePoint",
    "Side",
    "Signal",
    "bucket_start",
    "interval_millis",
    "load_bars",
    "load_points",
    "resample",
    "resample_bars",
]
