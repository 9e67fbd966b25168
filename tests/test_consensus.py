import logging
from dataclasses import replace

from strategy_lab.market import AnnotatedBar, Bar, Side, Signal
from strategy_lab.strategy import ConsensusParams, ConsensusStrategy, Strategy, StrategyRegistry


class FixedStrategy(Strategy):
    description = "Emits signals at fixed bar indices."

    def __init__(self, strategy_id, signals):
        self.strategy_id = strategy_id
        self.name = strategy_id
        self.signals = signals

    def required_lookback(self, params):
        return 1

    def calculate(self, data, params=None):
        bars = [AnnotatedBar.from_bar(bar) for bar in data]
        return [
            replace(bar, signal=Signal.for_bar(self.signals[index], bar)) if index in self.signals else bar
            for index, bar in enumerate(bars)
        ]


class BrokenStrategy(FixedStrategy):
    def calculate(self, data, params=None):
        raise RuntimeError("indicator blew up")


def _bars(count=3):
    return [Bar(time=index, open=10.0, high=11.0, low=9.0, close=10.0) for index in range(count)]


def _consensus(*strategies):
    registry = StrategyRegistry(strategies)
    consensus = ConsensusStrategy(registry)
    registry.register(consensus)
    return consensus


def test_tie_gives_no_signal():
    consensus = _consensus(FixedStrategy("up", {1: Side.BUY}), FixedStrategy("down", {1: Side.SELL}))

    result = consensus.calculate(_bars(), {"strategy_ids": ["up", "down"]})

    assert result[1].signal is None
    assert result[1].indicators == {"buy_votes": 1.0, "sell_votes": 1.0}


def test_majority_sets_signal_price_from_bar():
    consensus = _consensus(
        FixedStrategy("a", {1: Side.BUY, 2: Side.SELL}),
        FixedStrategy("b", {1: Side.BUY}),
        FixedStrategy("c", {2: Side.SELL}),
    )

    result = consensus.calculate(_bars(), {"strategyIds": ["a", "b", "c"]})

    assert result[0].signal is None
    assert result[1].buy_signal == 9.0
    assert result[2].sell_signal == 11.0


def test_reverse_flips_majority():
    consensus = _consensus(FixedStrategy("a", {1: Side.BUY}), FixedStrategy("b", {1: Side.BUY}))

    result = consensus.calculate(_bars(), {"strategy_ids": ["a", "b"], "reverse": True})

    assert result[1].sell_signal == 11.0


def test_failing_voter_counts_as_no_vote(caplog):
    consensus = _consensus(
        BrokenStrategy("broken", {}),
        FixedStrategy("a", {1: Side.SELL}),
        FixedStrategy("b", {1: Side.BUY}),
        FixedStrategy("c", {1: Side.BUY}),
    )

    with caplog.at_level(logging.ERROR):
        result = consensus.calculate(_bars(), {"strategy_ids": ["broken", "a", "b", "c"]})

    assert result[1].buy_signal == 9.0
    assert result[1].indicators == {"buy_votes": 2.0, "sell_votes": 1.0}
    assert any("broken" in record.getMessage() for record in caplog.records)


def test_thread_pool_matches_sequential_result():
    consensus = _consensus(
        FixedStrategy("a", {0: Side.BUY, 2: Side.SELL}),
        FixedStrategy("b", {0: Side.BUY}),
        FixedStrategy("c", {2: Side.SELL}),
        BrokenStrategy("broken", {}),
    )
    ids = ["a", "b", "c", "broken"]

    sequential = consensus.calculate(_bars(), {"strategy_ids": ids})
    pooled = consensus.calculate(_bars(), {"strategy_ids": ids, "max_workers": 4})

    assert pooled == sequential


def test_unknown_ids_are_skipped():
    consensus = _consensus(FixedStrategy("a", {1: Side.BUY}))

    result = consensus.calculate(_bars(), {"strategy_ids": ["a", "nope"]})

    assert result[1].buy_signal == 9.0


def test_invalid_id_list_falls_back_to_defaults():
    consensus = _consensus(FixedStrategy("a", {1: Side.BUY}))

    assert consensus.resolve_params({"strategyIds": "a", "max_workers": 3}) == ConsensusParams()


def test_no_voters_returns_clean_bars():
    consensus = _consensus(FixedStrategy("a", {1: Side.BUY}))

    result = consensus.calculate(_bars(), {"strategy_ids": []})

    assert all(bar.signal is None and bar.indicators == {} for bar in result)
