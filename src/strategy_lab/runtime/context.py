"""Run context: what a backtest ran on, stamped into its id and audit trail."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from strategy_lab.config.loader import compute_config_hash
from strategy_lab.config.models import BacktestConfig


@dataclass(frozen=True)
class RunContext:
    run_id: str
    strategy_id: str
    config_path: Path
    config_hash: str
    data_path: Optional[Path]
    data_hash: Optional[str]
    started_at: datetime

    def to_dict(self) -> dict:
        return {
            "run_id": self.run_id,
            "strategy_id": self.strategy_id,
            "config_path": str(self.config_path),
            "config_hash": self.config_hash,
            "data_path": str(self.data_path) if self.data_path is not None else None,
            "data_hash": self.data_hash,
            "started_at": self.started_at.isoformat(),
        }


def _data_hash(path: Path) -> Optional[str]:
    if not path.exists():
        return None
    return hashlib.sha256(path.read_bytes()).hexdigest()


def create_run_context(
    config: BacktestConfig,
    config_path: str | Path,
    data_path: Optional[str | Path] = None,
    run_id: Optional[str] = None,
) -> RunContext:
    """Build the context for one backtest.

    The run id is ``<prefix>-<strategy>-<utc stamp>-<config hash>[-<data hash>]``
    (hashes shortened to 8 characters), so two runs over the same config but
    different data files never share an id. ``data_path`` defaults to the
    config's ``data.path``.
    """
    path = Path(config_path)
    config_hash = compute_config_hash(path)
    if data_path is None and config.data.path is not None:
        data_path = config.data.path
    data = Path(data_path) if data_path is not None else None
    data_hash = _data_hash(data) if data is not None else None

    started_at = datetime.now(timezone.utc)
    if run_id is None:
        stamp = started_at.strftime("%Y%m%dT%H%M%SZ")
        run_id = f"{config.run_id_prefix}-{config.strategy.name}-{stamp}-{config_hash[:8]}"
        if data_hash is not None:
            run_id = f"{run_id}-{data_hash[:8]}"
    return RunContext(
        run_id=run_id,
        strategy_id=config.strategy.name,
        config_path=path,
        config_hash=config_hash,
        data_path=data,
        data_hash=data_hash,
        started_at=started_at,
    )
