"""
Core Data Models for Habit Logger

These models define the schemas for everything that flows between the
console, the validators and the store. They are designed to:
1. Reject records that could never have passed input validation
2. Carry store outcomes back to the caller as values, not exceptions
3. Give the menu and the updatable columns a closed set of names

DESIGN DECISION: Storage outcomes (success, rows affected, error text)
are plain models. The console decides what to print; the store decides
nothing about presentation beyond one display line per habit.
"""

import math
from datetime import date as Date, datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class HabitColumn(str, Enum):
    """
    Fields a user may change on an existing habit.

    DESIGN DECISION: The id is not in this set. Each member maps to one
    fixed UPDATE statement in the storage layer.
    """
    NAME = "name"
    MEASUREMENT = "measurement"
    QUANTITY = "quantity"
    DATE = "date"


class MenuAction(str, Enum):
    """Main menu options, keyed by the digit the user types."""
    EXIT = "0"
    LIST = "1"
    INSERT = "2"
    DELETE = "3"
    UPDATE = "4"


# =============================================================================
# HABIT MODELS
# =============================================================================

class NewHabit(BaseModel):
    """
    A habit occurrence that has not been stored yet.

    Text fields are kept verbatim; only blank text is refused.
    """

    name: str = Field(
        ...,
        description="Habit name (e.g., Running)"
    )
    measurement: str = Field(
        ...,
        description="Unit label (e.g., km)"
    )
    quantity: float = Field(
        ...,
        description="Amount logged, in the unit above"
    )
    date: Date = Field(
        ...,
        description="Day the habit was performed"
    )

    @field_validator('name', 'measurement')
    @classmethod
    def reject_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Value cannot be empty")
        return v

    @field_validator('quantity')
    @classmethod
    def reject_non_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("Quantity must be a finite number")
        return v


class Habit(NewHabit):
    """A stored habit; the id is assigned by the database."""

    id: int = Field(
        ...,
        gt=0,
        description="Primary key assigned by the store"
    )

    def to_display_line(self) -> str:
        """One line for the record listing."""
        return (
            f"Id: {self.id} | Habit: {self.name} | "
            f"Quantity: {format_quantity(self.quantity)} {self.measurement} | "
            f"Date: {self.date.isoformat()}"
        )


def format_quantity(quantity: float) -> str:
    """Show whole quantities without a trailing '.0'."""
    if quantity.is_integer():
        return str(int(quantity))
    return str(quantity)


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """Why a single raw input was refused."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'not_positive')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )


class ValidationResult(BaseModel):
    """
    Outcome of checking one raw input.

    When accepted, value holds the parsed form (str, float, date, int,
    HabitColumn or MenuAction). When refused, issue explains why.
    """

    accepted: bool
    value: Any = None
    issue: Optional[ValidationIssue] = None

    @property
    def message(self) -> Optional[str]:
        return self.issue.message if self.issue else None


# =============================================================================
# STORAGE RESULT MODELS
# =============================================================================

class MutationResult(BaseModel):
    """
    Result of an insert, delete or update.

    success=False means the store itself failed. A successful statement
    that matched no row has success=True and rows_affected=0.
    """

    executed_at: datetime = Field(
        default_factory=datetime.now
    )
    success: bool
    rows_affected: int = Field(
        default=0,
        ge=0,
        description="Rows the statement changed"
    )
    record_id: Optional[int] = Field(
        default=None,
        description="Id of the inserted or targeted habit"
    )
    error_message: Optional[str] = None

    @property
    def found(self) -> bool:
        """Did the statement hit an existing row?"""
        return self.rows_affected > 0


class HabitListResult(BaseModel):
    """
    Result of listing every habit.

    An empty table is success=True with data_found=False, which is
    distinct from a failed query.
    """

    executed_at: datetime = Field(
        default_factory=datetime.now
    )
    success: bool
    error_message: Optional[str] = None
    records: list[Habit] = Field(
        default_factory=list,
        description="Habits in id order"
    )

    @property
    def data_found(self) -> bool:
        return len(self.records) > 0

    @property
    def result_count(self) -> int:
        return len(self.records)
