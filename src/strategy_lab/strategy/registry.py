"""Strategy lookup by id."""

from __future__ import annotations

from typing import Iterable, Iterator, Optional

from strategy_lab.strategy.base import Strategy, StrategyInfo
from strategy_lab.strategy.catalog import BUILTIN_STRATEGIES
from strategy_lab.strategy.consensus import ConsensusStrategy


class StrategyRegistry:
    def __init__(self, strategies: Iterable[Strategy] = ()) -> None:
        self._strategies: dict[str, Strategy] = {}
        for strategy in strategies:
            self.register(strategy)

    def register(self, strategy: Strategy) -> None:
        if strategy.strategy_id in self._strategies:
            raise ValueError(f"Strategy id already registered: {strategy.strategy_id}")
        self._strategies[strategy.strategy_id] = strategy

    def list(self) -> list[StrategyInfo]:
        """Strategy descriptors ordered by display name."""
        infos = [strategy.info() for strategy in self._strategies.values()]
        return sorted(infos, key=lambda info: info.name)

    def get_by_id(self, strategy_id: str) -> Optional[Strategy]:
        return self._strategies.get(strategy_id)

    def __contains__(self, strategy_id: object) -> bool:
        return strategy_id in self._strategies

    def __iter__(self) -> Iterator[Strategy]:
        return iter(self._strategies.values())

    def __len__(self) -> int:
        return len(self._strategies)


def default_registry() -> StrategyRegistry:
    """Registry holding every built-in strategy plus the consensus strategy."""
    registry = StrategyRegistry(strategy_type() for strategy_type in BUILTIN_STRATEGIES)
    registry.register(ConsensusStrategy(registry))
    return registry
