"""Risk-governance helpers."""

from strategy_lab.risk.discipline import (
    DisciplineDecision,
    DisciplineGuard,
    DisciplineMode,
    DisciplineParams,
    OnFailure,
    review_trades,
)

__all__ = [
    "DisciplineDecision",
    "DisciplineGuard",
    "DisciplineMode",
    "DisciplineParams",
    "OnFailure",
    "review_trades",
]
