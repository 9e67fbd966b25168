from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from strategy_lab.config import load_config, verify_config_lock
from strategy_lab.monitoring import AuditLog
from strategy_lab.runtime import BacktestRunner, create_run_context, load_config_data


def main() -> None:
    parser = argparse.ArgumentParser(description="Backtest one strategy from a YAML config.")
    parser.add_argument("--config", required=True)
    parser.add_argument("--data", help="bars or points file; overrides data.path in the config")
    parser.add_argument("--output", required=True)
    parser.add_argument("--no-bars", action="store_true", help="omit annotated bars from the report")
    parser.add_argument("--require-lock", action="store_true")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config_path = Path(args.config)
    config = load_config(config_path)
    if args.require_lock and not verify_config_lock(config_path):
        raise SystemExit(f"Config lock missing or stale for {config_path}")

    bars = load_config_data(config, args.data)

    context = create_run_context(config, config_path, data_path=args.data)
    audit = AuditLog(
        Path(config.monitoring.audit_log_path),
        run_id=context.run_id,
        config_hash=context.config_hash,
    )
    audit.log("run_start", context.to_dict())
    runner = BacktestRunner(audit_log=audit)
    report = runner.run(
        bars,
        config.strategy.name,
        config.strategy.parameters,
        config.simulation.to_simulation_config(),
        config.simulation.initial_capital,
    )

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = context.to_dict()
    payload.update(report.to_dict(include_bars=not args.no_bars))
    output_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    summary = report.summary
    print(
        f"{report.strategy_id}: {summary.total_trades} trades, "
        f"win rate {summary.win_rate:.1f}%, total pnl {summary.total_pnl:.4f}, "
        f"return {summary.total_return_percent:.2f}%"
    )
    print(f"Report written to {output_path}")


if __name__ == "__main__":
    main()
