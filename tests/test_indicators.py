import pytest

from strategy_lab import indicators as ind


def _ramp(length, start=100.0, step=1.0):
    return [start + step * index for index in range(length)]


def _first_defined(series):
    return next(index for index, value in enumerate(series) if value is not None)


def test_sma_and_ema_seed():
    values = [1.0, 2.0, 3.0, 4.0, 5.0]

    assert ind.sma(values, 3) == [None, None, 2.0, 3.0, 4.0]
    assert ind.ema(values, 3) == [None, None, 2.0, 3.0, 4.0]


def test_short_input_is_all_null():
    assert ind.sma([1.0, 2.0], 3) == [None, None]
    assert ind.ema([], 3) == []


def test_indicators_do_not_mutate_input():
    values = _ramp(40)
    snapshot = list(values)

    ind.macd(values)
    ind.bollinger_bands(values)
    ind.rsi(values)

    assert values == snapshot


def test_warm_up_lengths():
    closes = _ramp(60)
    highs = [value + 1 for value in closes]
    lows = [value - 1 for value in closes]

    assert _first_defined(ind.sma(closes, 20)) == 19
    assert _first_defined(ind.rsi(closes, 14)) == 14
    assert _first_defined(ind.atr(highs, lows, closes, 14)) == 14
    assert _first_defined(ind.cci(highs, lows, closes, 20)) == 19
    assert _first_defined(ind.momentum(closes, 10)) == 10
    series = ind.macd(closes, 12, 26, 9)
    assert _first_defined(series.macd) == 25
    assert _first_defined(series.signal) == 33
    assert _first_defined(series.histogram) == 33


def test_rsi_extremes():
    assert ind.rsi(_ramp(20), 14)[-1] == 100.0
    assert ind.rsi([5.0] * 20, 14)[-1] == 50.0


def test_flat_series_degenerate_values():
    flat = [10.0] * 30

    bands = ind.bollinger_bands(flat, 20, 2.0)
    assert bands.upper[-1] == bands.middle[-1] == bands.lower[-1] == 10.0
    assert ind.stochastic(flat, flat, flat).k[-1] == 50.0
    assert ind.williams_r(flat, flat, flat)[-1] == -50.0
    assert ind.cci(flat, flat, flat)[-1] == 0.0


def test_obv_accumulates_signed_volume():
    assert ind.obv([1.0, 2.0, 2.0, 1.0], [10.0, 20.0, 30.0, 40.0]) == [0.0, 20.0, 20.0, -20.0]


def test_vwap_falls_back_to_typical_mean_without_volume():
    highs = [3.0, 6.0]
    lows = [1.0, 2.0]
    closes = [2.0, 4.0]

    assert ind.vwap(highs, lows, closes, [0.0, 0.0], 2) == [None, 3.0]
    assert ind.vwap(highs, lows, closes, [1.0, 3.0], 2)[1] == pytest.approx(3.5)


def test_pivot_levels_use_previous_bars():
    highs = [10.0, 12.0, 50.0]
    lows = [8.0, 9.0, 1.0]
    closes = [9.0, 11.0, 20.0]

    levels = ind.pivot_points(highs, lows, closes, 2)

    assert levels.pp[:2] == [None, None]
    pivot = (12.0 + 8.0 + 11.0) / 3
    assert levels.pp[2] == pytest.approx(pivot)
    assert levels.r1[2] == pytest.approx(2 * pivot - 8.0)
    assert levels.s1[2] == pytest.approx(2 * pivot - 12.0)
    assert levels.r2[2] == pytest.approx(pivot + 4.0)
    assert levels.s2[2] == pytest.approx(pivot - 4.0)


def test_donchian_channel_bounds():
    bands = ind.donchian_channels([1.0, 3.0, 2.0, 5.0], [0.5, 1.0, 0.2, 4.0], 3)

    assert bands.upper == [None, None, 3.0, 5.0]
    assert bands.lower == [None, None, 0.2, 0.2]


def test_trend_direction_series():
    closes = _ramp(30) + _ramp(30, start=129.0, step=-2.0)
    highs = [value + 0.5 for value in closes]
    lows = [value - 0.5 for value in closes]

    trend = ind.supertrend(highs, lows, closes, 10, 3.0)
    sar = ind.parabolic_sar(highs, lows)

    assert set(trend.direction) <= {None, 1, -1}
    assert trend.direction[-1] == -1
    assert sar.value[0] is None
    assert sar.direction[25] == 1
    assert sar.direction[-1] == -1


def test_heikin_ashi_first_candle():
    candles = ind.heikin_ashi([10.0, 11.0], [12.0, 13.0], [9.0, 10.0], [11.0, 12.0])

    assert candles.open[0] == pytest.approx(10.5)
    assert candles.close[0] == pytest.approx(10.5)
    assert candles.open[1] == pytest.approx(10.5)
    assert candles.close[1] == pytest.approx(11.5)


def test_ichimoku_spans_are_displaced():
    closes = _ramp(80)
    highs = [value + 1 for value in closes]
    lows = [value - 1 for value in closes]

    series = ind.ichimoku(highs, lows, closes, 9, 26, 52, 26)

    assert _first_defined(series.tenkan) == 8
    assert _first_defined(series.senkou_a) == 25 + 26
    assert _first_defined(series.senkou_b) == 51 + 26
    assert series.chikou[0] == closes[26]
    assert series.chikou[-1] is None


def test_non_positive_windows_give_null_series():
    closes = _ramp(40)
    highs = [value + 1 for value in closes]
    lows = [value - 1 for value in closes]

    series = ind.stochastic(highs, lows, closes, period=0)
    assert series.k == [None] * 40
    assert series.d == [None] * 40

    cloud = ind.ichimoku(highs, lows, closes, displacement=-1)
    assert cloud.senkou_a == [None] * 40
    assert cloud.chikou == [None] * 40
