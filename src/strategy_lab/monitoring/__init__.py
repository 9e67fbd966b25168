"""Run auditing."""

from strategy_lab.monitoring.audit import AuditLog

__all__ = ["AuditLog"]
