import json

import pytest

from strategy_lab.market import AnnotatedBar, Bar, Side, Signal, load_bars, load_points


def test_load_bars_from_csv(tmp_path):
    path = tmp_path / "bars.csv"
    path.write_text(
        "time,open,high,low,close,volume\n"
        "0,1,2,0.5,1.5,10\n"
        "60000,1.5,2.5,1,2,\n",
        encoding="utf-8",
    )

    bars = load_bars(path)

    assert bars == [
        Bar(time=0, open=1.0, high=2.0, low=0.5, close=1.5, volume=10.0),
        Bar(time=60_000, open=1.5, high=2.5, low=1.0, close=2.0, volume=0.0),
    ]


def test_load_points_from_json(tmp_path):
    path = tmp_path / "points.json"
    path.write_text(json.dumps([{"time": 1000, "price": 3.5, "volume": 2}, {"time": 2000, "price": 4}]))

    points = load_points(path)

    assert [(point.time, point.price, point.volume) for point in points] == [(1000, 3.5, 2.0), (2000, 4.0, 0.0)]


def test_missing_column_raises(tmp_path):
    path = tmp_path / "bars.csv"
    path.write_text("time,open,high,close\n0,1,2,1\n", encoding="utf-8")

    with pytest.raises(ValueError, match="low"):
        load_bars(path)


def test_json_must_be_a_list(tmp_path):
    path = tmp_path / "bars.json"
    path.write_text(json.dumps({"time": 0}))

    with pytest.raises(ValueError):
        load_bars(path)


def test_signal_prices_follow_side():
    bar = Bar(time=0, open=10.0, high=12.0, low=9.0, close=11.0)

    assert Signal.for_bar(Side.BUY, bar).price == 9.0
    assert Signal.for_bar(Side.SELL, bar).price == 12.0


def test_annotated_bar_views():
    bar = AnnotatedBar(
        time=0,
        open=10.0,
        high=12.0,
        low=9.0,
        close=11.0,
        indicators={"sma": 10.5},
        signal=Signal(Side.SELL, 12.0),
    )

    assert bar.buy_signal is None
    assert bar.sell_signal == 12.0
    assert bar.to_bar() == Bar(time=0, open=10.0, high=12.0, low=9.0, close=11.0)
    payload = bar.to_dict()
    assert payload["sma"] == 10.5
    assert payload["signal"] == {"side": "sell", "price": 12.0}
