"""
Storage Services Package

Provides the abstract storage interface and its SQLite implementation.
"""

from habit_logger.services.storage.interface import (
    ColumnValue,
    ConnectionError,
    HabitStorageInterface,
    StorageError,
)
from habit_logger.services.storage.sqlite import (
    UPDATE_STATEMENTS,
    SQLiteClient,
    SQLiteHabitStorage,
)

__all__ = [
    # Interfaces
    "ColumnValue",
    "HabitStorageInterface",
    # Exceptions
    "ConnectionError",
    "StorageError",
    # SQLite implementation
    "UPDATE_STATEMENTS",
    "SQLiteClient",
    "SQLiteHabitStorage",
]
