"""Majority-vote strategy over other registered strategies."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Mapping, Optional, Sequence

from strategy_lab.market.models import AnnotatedBar, Bar, Side, Signal
from strategy_lab.strategy.base import Strategy
from strategy_lab.strategy.params import StrategyParams, merge_params

if TYPE_CHECKING:
    from strategy_lab.strategy.registry import StrategyRegistry

logger = logging.getLogger(__name__)

CONSENSUS_ID = "code-based-consensus"


@dataclass(frozen=True)
class ConsensusParams(StrategyParams):
    strategy_ids: tuple[str, ...] = ("ema-crossover", "rsi-divergence", "macd-crossover")
    max_workers: int = 1


def _valid_ids(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value)


class ConsensusStrategy(Strategy):
    """Signals when a strict majority of the voting strategies agree on a bar.

    Each sub-strategy runs on the same bars with its own defaults. A
    sub-strategy that raises is logged and casts no votes; unknown ids are
    skipped. A tie between buy and sell votes gives no signal.
    """

    strategy_id = CONSENSUS_ID
    name = "Code-Based Consensus"
    description = "Combines several strategies and signals only when most of them agree."
    params_type = ConsensusParams

    def __init__(self, registry: "StrategyRegistry") -> None:
        self.registry = registry

    def resolve_params(self, params: Any = None) -> ConsensusParams:
        if isinstance(params, Mapping):
            for key, value in params.items():
                if str(key).replace("_", "").lower() == "strategyids" and not _valid_ids(value):
                    logger.warning("Invalid strategy id list %r; using default consensus parameters", value)
                    return self.default_params()
        return merge_params(self.default_params(), params)

    def required_lookback(self, params: ConsensusParams) -> int:
        return 1

    def _voters(self, params: ConsensusParams) -> list[Strategy]:
        voters: list[Strategy] = []
        for strategy_id in params.strategy_ids:
            if strategy_id == self.strategy_id:
                logger.warning("Consensus cannot vote with itself; skipping")
                continue
            strategy = self.registry.get_by_id(strategy_id)
            if strategy is None:
                logger.warning("Unknown strategy id %s in consensus; skipping", strategy_id)
                continue
            voters.append(strategy)
        return voters

    @staticmethod
    def _run_voter(strategy: Strategy, bars: Sequence[Bar | AnnotatedBar]) -> Optional[list[AnnotatedBar]]:
        try:
            return strategy.calculate(bars)
        except Exception:
            logger.exception("Strategy %s failed inside consensus; counting no votes", strategy.strategy_id)
            return None

    def _collect(self, voters: list[Strategy], bars: Sequence[Bar | AnnotatedBar], max_workers: int) -> list:
        if max_workers <= 1 or len(voters) <= 1:
            return [self._run_voter(strategy, bars) for strategy in voters]
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            return list(pool.map(lambda strategy: self._run_voter(strategy, bars), voters))

    def calculate(self, data: Sequence[Bar | AnnotatedBar], params: Any = None) -> list[AnnotatedBar]:
        resolved = self.resolve_params(params)
        bars = [AnnotatedBar.from_bar(bar) for bar in data]
        voters = self._voters(resolved)
        if not bars or not voters:
            return bars

        results = [result for result in self._collect(voters, data, resolved.max_workers) if result is not None]

        annotated: list[AnnotatedBar] = []
        for index, bar in enumerate(bars):
            buy_votes = sum(1 for result in results if result[index].buy_signal is not None)
            sell_votes = sum(1 for result in results if result[index].sell_signal is not None)
            side: Optional[Side] = None
            if buy_votes > sell_votes:
                side = Side.BUY
            elif sell_votes > buy_votes:
                side = Side.SELL
            if side is not None and resolved.reverse:
                side = side.opposite
            annotated.append(
                replace(
                    bar,
                    indicators={"buy_votes": float(buy_votes), "sell_votes": float(sell_votes)},
                    signal=Signal.for_bar(side, bar) if side is not None else None,
                )
            )
        return annotated
