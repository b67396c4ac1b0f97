"""
Data Models Package

This package contains all Pydantic models used in the Habit Logger.
All data flowing between the console and the store conforms to these schemas.
"""

from habit_logger.models.habit import (
    Habit,
    HabitColumn,
    HabitListResult,
    MenuAction,
    MutationResult,
    NewHabit,
    ValidationIssue,
    ValidationResult,
    format_quantity,
)
from habit_logger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Habit models
    "Habit",
    "HabitColumn",
    "HabitListResult",
    "MenuAction",
    "MutationResult",
    "NewHabit",
    "ValidationIssue",
    "ValidationResult",
    "format_quantity",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
