"""Strategy interfaces and the shared indicator-then-rule engine."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Any, Optional, Sequence

from strategy_lab.indicators.moving import Series
from strategy_lab.market.models import AnnotatedBar, Bar, Signal
from strategy_lab.strategy.params import StrategyParams, merge_params
from strategy_lab.strategy.rules import Rule, scan


@dataclass(frozen=True)
class StrategyInfo:
    id: str
    name: str
    description: str


@dataclass(frozen=True)
class PriceColumns:
    open: list[float]
    high: list[float]
    low: list[float]
    close: list[float]
    volume: list[float]

    @staticmethod
    def from_bars(bars: Sequence[Bar | AnnotatedBar]) -> "PriceColumns":
        return PriceColumns(
            open=[bar.open for bar in bars],
            high=[bar.high for bar in bars],
            low=[bar.low for bar in bars],
            close=[bar.close for bar in bars],
            volume=[bar.volume for bar in bars],
        )

    def as_dict(self) -> dict[str, list[float]]:
        return {
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "volume": self.volume,
        }


class Strategy(ABC):
    """A named, parameterized transform from bars to annotated bars.

    ``calculate`` is pure: the same bars and parameters always give the same
    output, and the input bars are never modified.
    """

    strategy_id: str
    name: str
    description: str
    params_type: type = StrategyParams

    def info(self) -> StrategyInfo:
        return StrategyInfo(id=self.strategy_id, name=self.name, description=self.description)

    def default_params(self) -> Any:
        return self.params_type()

    def resolve_params(self, params: Any = None) -> Any:
        return merge_params(self.default_params(), params)

    @abstractmethod
    def required_lookback(self, params: Any) -> int:
        raise NotImplementedError

    @abstractmethod
    def calculate(self, data: Sequence[Bar | AnnotatedBar], params: Any = None) -> list[AnnotatedBar]:
        raise NotImplementedError


class IndicatorStrategy(Strategy):
    """Compute named indicator series, then scan them with a rule.

    Subclasses supply ``compute`` and ``build_rule``; indicator values land in
    each bar's ``indicators`` under the names ``compute`` returns.
    """

    @abstractmethod
    def compute(self, prices: PriceColumns, params: Any) -> dict[str, Series]:
        raise NotImplementedError

    @abstractmethod
    def build_rule(self, params: Any) -> Rule:
        raise NotImplementedError

    def calculate(self, data: Sequence[Bar | AnnotatedBar], params: Any = None) -> list[AnnotatedBar]:
        resolved = self.resolve_params(params)
        bars = [AnnotatedBar.from_bar(bar) for bar in data]
        if len(bars) < self.required_lookback(resolved):
            return bars

        prices = PriceColumns.from_bars(bars)
        series = self.compute(prices, resolved)
        columns: dict[str, Sequence[Optional[float]]] = dict(prices.as_dict())
        columns.update(series)
        sides = scan(self.build_rule(resolved), columns, len(bars), reverse=resolved.reverse)

        annotated: list[AnnotatedBar] = []
        for index, bar in enumerate(bars):
            side = sides[index]
            annotated.append(
                replace(
                    bar,
                    indicators={key: values[index] for key, values in series.items()},
                    signal=Signal.for_bar(side, bar) if side is not None else None,
                )
            )
        return annotated
