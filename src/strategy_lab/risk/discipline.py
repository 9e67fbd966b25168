"""Trading-discipline guard: consecutive-loss cooldowns and drawdown stops.

The trade simulator never consults this guard. Runners and reports use it
to judge a finished trade list, or to gate entries in an outer loop.
Cooldowns are measured in bar time passed by the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

logger = logging.getLogger(__name__)


class OnFailure(str, Enum):
    COOLDOWN = "cooldown"
    ADAPT = "adapt"


class DisciplineMode(str, Enum):
    NONE = "none"
    COOLDOWN = "cooldown"
    ADAPT = "adapt"


@dataclass(frozen=True)
class DisciplineParams:
    enable_discipline: bool = True
    max_consecutive_losses: int = 4
    cooldown_period_minutes: int = 15
    daily_drawdown_limit: float = 10.0  # percent of initial balance
    on_failure: OnFailure = OnFailure.COOLDOWN


@dataclass(frozen=True)
class DisciplineDecision:
    allow: bool
    reason: str
    mode: DisciplineMode = DisciplineMode.NONE


class DisciplineGuard:
    def __init__(self, params: DisciplineParams, initial_balance: float = 1000.0) -> None:
        self.params = params
        self.initial_balance = initial_balance
        self._consecutive_losses = 0
        self._session_pnl = 0.0
        self._cooldown_until: Optional[int] = None

    @property
    def consecutive_losses(self) -> int:
        return self._consecutive_losses

    @property
    def session_pnl(self) -> float:
        return self._session_pnl

    @property
    def cooldown_until(self) -> Optional[int]:
        return self._cooldown_until

    def register_trade(self, pnl: float) -> None:
        self._session_pnl += pnl
        if pnl <= 0:
            self._consecutive_losses += 1
            logger.debug("Loss registered; consecutive losses=%d", self._consecutive_losses)
        else:
            self._consecutive_losses = 0

    def can_trade(self, now_ms: int) -> DisciplineDecision:
        params = self.params
        if not params.enable_discipline:
            return DisciplineDecision(True, "Discipline is disabled")

        if self.initial_balance > 0 and self._session_pnl < 0:
            drawdown_pct = abs(self._session_pnl / self.initial_balance) * 100.0
            if drawdown_pct >= params.daily_drawdown_limit:
                return DisciplineDecision(
                    False,
                    f"Daily drawdown limit of {params.daily_drawdown_limit}% reached",
                    DisciplineMode.COOLDOWN,
                )

        if self._consecutive_losses >= params.max_consecutive_losses:
            if params.on_failure == OnFailure.ADAPT:
                return DisciplineDecision(
                    False,
                    f"Max consecutive losses ({self._consecutive_losses}) reached; adaptation recommended",
                    DisciplineMode.ADAPT,
                )
            if self._cooldown_until is None:
                self._cooldown_until = now_ms + params.cooldown_period_minutes * 60_000

        if self._cooldown_until is not None:
            if now_ms < self._cooldown_until:
                minutes = (self._cooldown_until - now_ms) / 60_000
                return DisciplineDecision(
                    False,
                    f"Cooldown active for another {minutes:.1f} minutes",
                    DisciplineMode.COOLDOWN,
                )
            self.reset_cooldown()

        return DisciplineDecision(True, "Ready to trade")

    def reset_cooldown(self) -> None:
        self._cooldown_until = None
        self._consecutive_losses = 0

    def reset(self) -> None:
        self._consecutive_losses = 0
        self._session_pnl = 0.0
        self._cooldown_until = None


def review_trades(
    trades: Iterable,
    params: DisciplineParams,
    initial_capital: float,
) -> list[DisciplineDecision]:
    """Replay completed trades and report whether each entry would have been allowed.

    Every trade is registered whether or not it was allowed, because the
    simulator already took it.
    """
    guard = DisciplineGuard(params, initial_capital)
    decisions: list[DisciplineDecision] = []
    for trade in trades:
        decisions.append(guard.can_trade(trade.entry_time))
        guard.register_trade(trade.pnl)
    return decisions
