"""Backtest pipeline: strategy, simulator, aggregator and discipline review."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence

from strategy_lab.config.models import BacktestConfig
from strategy_lab.market.loader import load_bars, load_points
from strategy_lab.market.models import AnnotatedBar, Bar
from strategy_lab.market.resample import resample, resample_bars
from strategy_lab.monitoring.audit import AuditLog
from strategy_lab.risk.discipline import DisciplineDecision, review_trades
from strategy_lab.simulator.engine import TradeSimulator
from strategy_lab.simulator.models import BacktestSummary, SimulationConfig, Trade
from strategy_lab.simulator.summary import summarize
from strategy_lab.strategy.params import params_to_dict
from strategy_lab.strategy.registry import StrategyRegistry, default_registry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BacktestReport:
    strategy_id: str
    params: Any
    bars: list[AnnotatedBar]
    trades: list[Trade]
    summary: BacktestSummary
    discipline: list[DisciplineDecision]

    @property
    def blocked_entries(self) -> int:
        return sum(1 for decision in self.discipline if not decision.allow)

    def to_dict(self, include_bars: bool = True) -> dict:
        payload = {
            "strategy_id": self.strategy_id,
            "params": params_to_dict(self.params),
            "summary": self.summary.to_dict(),
            "trades": [trade.to_dict() for trade in self.trades],
            "discipline": [
                {"allow": decision.allow, "reason": decision.reason, "mode": decision.mode.value}
                for decision in self.discipline
            ],
            "blocked_entries": self.blocked_entries,
        }
        if include_bars:
            payload["bars"] = [bar.to_dict() for bar in self.bars]
        return payload


class BacktestRunner:
    def __init__(self, registry: Optional[StrategyRegistry] = None, audit_log: Optional[AuditLog] = None) -> None:
        self.registry = registry if registry is not None else default_registry()
        self.audit_log = audit_log

    def _audit(self, event: str, payload: dict) -> None:
        if self.audit_log is not None:
            self.audit_log.log(event, payload)

    def run(
        self,
        bars: Sequence[Bar | AnnotatedBar],
        strategy_id: str,
        params: Any = None,
        simulation: Optional[SimulationConfig] = None,
        initial_capital: float = 1000.0,
    ) -> BacktestReport:
        strategy = self.registry.get_by_id(strategy_id)
        if strategy is None:
            raise ValueError(f"Unknown strategy id: {strategy_id}")
        simulation = simulation or SimulationConfig()
        resolved = strategy.resolve_params(params)

        self._audit(
            "backtest_started",
            {
                "strategy_id": strategy_id,
                "bars": len(bars),
                "take_profit_percent": simulation.take_profit_percent,
                "stop_loss_percent": simulation.stop_loss_percent,
                "initial_capital": initial_capital,
            },
        )
        logger.info("Running %s over %d bars", strategy_id, len(bars))

        annotated = strategy.calculate(bars, resolved)
        trades = TradeSimulator(simulation).run(annotated)
        summary = summarize(trades, initial_capital)
        discipline = review_trades(trades, resolved.discipline, initial_capital)

        report = BacktestReport(
            strategy_id=strategy_id,
            params=resolved,
            bars=annotated,
            trades=trades,
            summary=summary,
            discipline=discipline,
        )
        self._audit(
            "backtest_finished",
            {
                "strategy_id": strategy_id,
                "total_trades": summary.total_trades,
                "total_pnl": summary.total_pnl,
                "win_rate": summary.win_rate,
                "blocked_entries": report.blocked_entries,
            },
        )
        logger.info(
            "Finished %s: %d trades, total pnl %.4f", strategy_id, summary.total_trades, summary.total_pnl
        )
        return report

    def run_from_config(
        self,
        config: BacktestConfig,
        bars: Optional[Sequence[Bar]] = None,
    ) -> BacktestReport:
        if bars is None:
            bars = load_config_data(config)
        elif config.data.interval_minutes is not None:
            bars = resample_bars(bars, config.data.interval_minutes)
        return self.run(
            bars,
            config.strategy.name,
            config.strategy.parameters,
            config.simulation.to_simulation_config(),
            config.simulation.initial_capital,
        )


def load_config_data(config: BacktestConfig, path: Optional[str | Path] = None) -> list[Bar]:
    """Load and, when an interval is configured, resample the config's data.

    ``path`` overrides ``data.path``; the kind and interval still come from
    the config.
    """
    data = config.data
    source = path if path is not None else data.path
    if source is None:
        raise ValueError("No data path configured")
    if data.kind == "points":
        return resample(load_points(source), data.interval_minutes or 0)
    bars = load_bars(source)
    if data.interval_minutes is not None:
        bars = resample_bars(bars, data.interval_minutes)
    return bars
