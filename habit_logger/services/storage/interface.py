"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Swap SQLite for another store later
2. Use a fake store when testing the console flow
3. Keep the menu logic decoupled from SQL

Mutations and listing report store faults as result values
(success=False plus a message). They do not raise for a failed
statement, so one bad operation never ends the menu loop.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Union

from habit_logger.models.habit import (
    HabitColumn,
    HabitListResult,
    MutationResult,
    NewHabit,
)


ColumnValue = Union[str, float, date]


class HabitStorageInterface(ABC):
    """
    Abstract interface for habit storage operations.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def ensure_schema(self) -> None:
        """
        Create the habit table if it does not exist.

        Safe to call on every startup.

        Raises:
            StorageError: If the table cannot be created
        """
        pass

    @abstractmethod
    def count(self) -> int:
        """
        Count stored habits.

        Raises:
            StorageError: If the count query fails
        """
        pass

    @abstractmethod
    def insert_habit(self, habit: NewHabit) -> MutationResult:
        """
        Store a new habit; the store assigns the id.

        Returns:
            MutationResult with record_id set on success
        """
        pass

    @abstractmethod
    def list_habits(self) -> HabitListResult:
        """
        Return every stored habit, decoded to typed fields.

        Returns:
            HabitListResult; data_found is False for an empty table
        """
        pass

    @abstractmethod
    def delete_habit(self, habit_id: int) -> MutationResult:
        """
        Delete the habit with this id.

        Returns:
            MutationResult with rows_affected 0 (no such id) or 1
        """
        pass

    @abstractmethod
    def update_habit_field(
        self,
        habit_id: int,
        column: HabitColumn,
        value: ColumnValue,
    ) -> MutationResult:
        """
        Change one field of the habit with this id.

        Args:
            habit_id: Target habit
            column: Which field to change
            value: str for name/measurement, float for quantity, date for date

        Returns:
            MutationResult with rows_affected 0 (no such id) or 1
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class ConnectionError(StorageError):
    """Could not open the storage backend."""
    pass
