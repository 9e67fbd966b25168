from pathlib import Path

from strategy_lab.config import freeze_config, load_config, verify_config_lock
from strategy_lab.monitoring import AuditLog
from strategy_lab.runtime import BacktestRunner, create_run_context


config_path = Path("configs") / "backtest_v1.yaml"
config = load_config(config_path)
lock_path = freeze_config(config_path)
assert verify_config_lock(config_path, lock_path)

context = create_run_context(config, config_path)
audit = AuditLog(
    Path(config.monitoring.audit_log_path),
    run_id=context.run_id,
    config_hash=context.config_hash,
)
audit.log("run_start", {**context.to_dict(), "lock": str(lock_path)})

runner = BacktestRunner(audit_log=audit)
report = runner.run_from_config(config)

for trade in report.trades:
    print(
        trade.entry_time,
        f"{trade.entry_price:.2f}",
        "->",
        trade.exit_time,
        f"{trade.exit_price:.2f}",
        trade.close_reason.value,
        f"{trade.pnl_percent:+.2f}%",
    )
print("Run:", context.run_id)
print("Summary:", report.summary.to_dict())
