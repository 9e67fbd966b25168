"""Market data structures shared by strategies and the simulator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Side(str, Enum):
    BUY = "buy"
    SELL = "sell"

    @property
    def opposite(self) -> "Side":
        return Side.SELL if self is Side.BUY else Side.BUY


@dataclass(frozen=True)
class PricePoint:
    time: int  # epoch-ms
    price: float
    volume: float = 0.0


@dataclass(frozen=True)
class Bar:
    time: int  # epoch-ms, bucket start
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0


@dataclass(frozen=True)
class Signal:
    side: Side
    price: float

    @staticmethod
    def for_bar(side: Side, bar: "Bar | AnnotatedBar") -> "Signal":
        price = bar.low if side is Side.BUY else bar.high
        return Signal(side=side, price=price)


@dataclass(frozen=True)
class AnnotatedBar:
    time: int
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0
    indicators: dict[str, Optional[float]] = field(default_factory=dict)
    signal: Optional[Signal] = None

    @staticmethod
    def from_bar(bar: "Bar | AnnotatedBar") -> "AnnotatedBar":
        return AnnotatedBar(
            time=bar.time,
            open=bar.open,
            high=bar.high,
            low=bar.low,
            close=bar.close,
            volume=bar.volume,
        )

    @property
    def buy_signal(self) -> Optional[float]:
        if self.signal is not None and self.signal.side is Side.BUY:
            return self.signal.price
        return None

    @property
    def sell_signal(self) -> Optional[float]:
        if self.signal is not None and self.signal.side is Side.SELL:
            return self.signal.price
        return None

    def to_bar(self) -> Bar:
        return Bar(
            time=self.time,
            open=self.open,
            high=self.high,
            low=self.low,
            close=self.close,
            volume=self.volume,
        )

    def to_dict(self) -> dict:
        payload = {
            "time": self.time,
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "volume": self.volume,
        }
        payload.update(self.indicators)
        payload["signal"] = None
        if self.signal is not None:
            payload["signal"] = {"side": self.signal.side.value, "price": self.signal.price}
        return payload
