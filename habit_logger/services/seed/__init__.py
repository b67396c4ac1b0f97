"""Sample data services package."""

from habit_logger.services.seed.seed_service import (
    HABIT_CATALOGUE,
    HabitSeedService,
    SeedError,
)

__all__ = [
    "HABIT_CATALOGUE",
    "HabitSeedService",
    "SeedError",
]
