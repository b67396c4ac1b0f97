"""Services package."""

from habit_logger.services.seed import (
    HABIT_CATALOGUE,
    HabitSeedService,
    SeedError,
)
from habit_logger.services.storage import (
    ConnectionError,
    HabitStorageInterface,
    SQLiteClient,
    SQLiteHabitStorage,
    StorageError,
)

__all__ = [
    # Seed services
    "HABIT_CATALOGUE",
    "HabitSeedService",
    "SeedError",
    # Storage services
    "ConnectionError",
    "HabitStorageInterface",
    "SQLiteClient",
    "SQLiteHabitStorage",
    "StorageError",
]
