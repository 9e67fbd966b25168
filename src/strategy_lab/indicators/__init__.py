"""Pure indicator functions over aligned numeric series."""

from strategy_lab.indicators.moving import (
    Series,
    combine,
    ema,
    nulls,
    on_valid,
    rolling_max,
    rolling_min,
    sma,
    stddev,
    wma,
)
from strategy_lab.indicators.oscillators import (
    MacdSeries,
    StochasticSeries,
    awesome_oscillator,
    cci,
    coppock_curve,
    macd,
    momentum,
    roc,
    rsi,
    stochastic,
    williams_r,
)
from strategy_lab.indicators.trend import (
    ElderRaySeries,
    HeikinAshiCandles,
    IchimokuSeries,
    PivotLevels,
    elder_ray,
    heikin_ashi,
    ichimoku,
    pivot_points,
)
from strategy_lab.indicators.volatility import (
    Bands,
    TrendSeries,
    atr,
    bollinger_bands,
    donchian_channels,
    keltner_channels,
    parabolic_sar,
    supertrend,
    true_range,
)
from strategy_lab.indicators.volume import cmf, obv, vwap

__all__ = [
    "Bands",
    "ElderRaySeries",
    "HeikinAshiCandles",
    "IchimokuSeries",
    "MacdSeries",
    "PivotLevels",
    "Series",
    "StochasticSeries",
    "TrendSeries",
    "atr",
    "awesome_oscillator",
    "bollinger_bands",
    "cci",
    "cmf",
    "combine",
    "coppock_curve",
    "donchian_channels",
    "elder_ray",
    "ema",
    "heikin_ashi",
    "ichimoku",
    "keltner_channels",
    "macd",
    "momentum",
    "nulls",
    "obv",
    "on_valid",
    "parabolic_sar",
    "pivot_points",
    "roc",
    "rolling_max",
    "rolling_min",
    "rsi",
    "sma",
    "stddev",
    "stochastic",
    "supertrend",
    "true_range",
    "vwap",
    "williams_r",
    "wma",
]
