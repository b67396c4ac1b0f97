"""
Audit Models for Habit Logger

Every change to the habit table is logged for audit purposes.
This provides:
1. Traceability of inserts, updates and deletes
2. Debugging information when the store fails
3. A record of when sample data was generated

DESIGN DECISION: Audit events go to the structured log only. The habit
table is the single table in the database.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Schema lifecycle
    SCHEMA_ENSURED = "schema_ensured"
    DATABASE_SEEDED = "database_seeded"

    # Persistence
    HABIT_INSERTED = "habit_inserted"
    HABIT_UPDATED = "habit_updated"
    HABIT_DELETED = "habit_deleted"
    HABIT_NOT_FOUND = "habit_not_found"

    # Failures
    STORAGE_ERROR = "storage_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred (local time)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Which habit is this about?
    habit_id: Optional[int] = Field(
        default=None,
        description="Id of the habit this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "habit_id": self.habit_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.habit_inserted(habit_id, "Running")
        event = AuditEventBuilder.storage_error("delete", str(exc))
    """

    @staticmethod
    def schema_ensured(table: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SCHEMA_ENSURED,
            severity=AuditSeverity.DEBUG,
            description=f"Schema ready for table {table}",
            details={"table": table},
        )

    @staticmethod
    def database_seeded(count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATABASE_SEEDED,
            description=f"Empty database seeded with {count} sample habits",
            details={"count": count},
        )

    @staticmethod
    def habit_inserted(habit_id: Optional[int], name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.HABIT_INSERTED,
            habit_id=habit_id,
            description=f"Habit inserted: {name}",
            details={"name": name},
        )

    @staticmethod
    def habit_updated(habit_id: int, column: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.HABIT_UPDATED,
            habit_id=habit_id,
            description=f"Habit {habit_id} updated: {column}",
            details={"column": column},
        )

    @staticmethod
    def habit_deleted(habit_id: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.HABIT_DELETED,
            habit_id=habit_id,
            description=f"Habit {habit_id} deleted",
        )

    @staticmethod
    def habit_not_found(habit_id: int, operation: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.HABIT_NOT_FOUND,
            severity=AuditSeverity.WARNING,
            habit_id=habit_id,
            description=f"No habit with id {habit_id} for {operation}",
            details={"operation": operation},
        )

    @staticmethod
    def storage_error(
        operation: str,
        error_message: str,
        habit_id: Optional[int] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            habit_id=habit_id,
            description=f"Storage error during {operation}",
            error_message=error_message,
            details={"operation": operation},
        )
