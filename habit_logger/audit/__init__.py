"""Audit logging package."""

from habit_logger.audit.logger import AuditLogger, configure_logging

__all__ = ["AuditLogger", "configure_logging"]
