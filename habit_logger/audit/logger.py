"""
Audit Logger

DESIGN DECISION: Every change to the habit table is logged.
This provides:
1. Traceability of what the user did
2. Debugging capability when the store fails

The audit logger:
- Writes through structlog on top of the stdlib logging module
- Stays off stdout so the console menu is not interleaved with log lines
- Gracefully handles failures (never crashes the app if logging fails)
"""

import logging
import sys
from typing import Optional

import structlog

from habit_logger.models.audit import AuditEvent, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "WARNING", log_file: Optional[str] = None) -> None:
    """
    Route stdlib logging (and therefore structlog) to stderr or a file.

    structlog renders the JSON line; the handler only writes the message.
    """
    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level.upper())


class AuditLogger:
    """Central audit logging service."""

    def __init__(self, logger_name: str = "habit_logger.audit"):
        self._logger = structlog.get_logger(logger_name)

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event at the level implied by its severity.

        Returns False if the log write itself failed.
        """
        log_dict = event.to_log_dict()

        try:
            if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception as e:
            # Logging must never take down a menu operation
            print(f"WARNING: Failed to write audit event: {e}", file=sys.stderr)
            return False

        return True
