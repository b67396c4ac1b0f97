"""
Sample Data Service

Fills an empty habit table with generated records so a first run has
something to list. This is a convenience only: it never touches a table
that already holds rows.

The random generator and the clock are injected so tests can pin both.
"""

import random
from datetime import date, timedelta
from typing import Callable, Optional

import structlog

from habit_logger.audit import AuditLogger
from habit_logger.config import get_settings
from habit_logger.models.audit import AuditEventBuilder
from habit_logger.models.habit import NewHabit
from habit_logger.services.storage import HabitStorageInterface, StorageError


# (name, measurement) pairs used for generated habits
HABIT_CATALOGUE = [
    ("Running", "km"),
    ("Reading", "pages"),
    ("Coding", "hours"),
    ("Meditation", "minutes"),
]

MIN_QUANTITY = 1.0
QUANTITY_SPAN = 10.0

logger = structlog.get_logger(__name__)


class SeedError(StorageError):
    """Sample data could not be written."""
    pass


class HabitSeedService:
    """Generates and stores sample habits for an empty database."""

    def __init__(
        self,
        storage: HabitStorageInterface,
        rng: Optional[random.Random] = None,
        clock: Callable[[], date] = date.today,
        history_days: Optional[int] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._rng = rng or random.Random()
        self._clock = clock
        self._history_days = history_days or get_settings().storage.seed_history_days
        self._audit_logger = audit_logger or AuditLogger()

    def generate_habit(self, today: date) -> NewHabit:
        """One random habit dated within the configured history window."""
        name, measurement = self._rng.choice(HABIT_CATALOGUE)
        quantity = round(self._rng.random() * QUANTITY_SPAN + MIN_QUANTITY, 2)
        days_back = self._rng.randrange(self._history_days)
        return NewHabit(
            name=name,
            measurement=measurement,
            quantity=quantity,
            date=today - timedelta(days=days_back),
        )

    def is_empty(self) -> bool:
        return self._storage.count() == 0

    def seed_if_empty(self, count: Optional[int] = None) -> int:
        """
        Insert sample habits if and only if the table has no rows.

        Returns:
            Number of habits inserted (0 when the table was not empty)

        Raises:
            StorageError: If the table cannot be counted
            SeedError: If a sample habit cannot be inserted
        """
        if count is None:
            count = get_settings().storage.seed_count

        if not self.is_empty():
            logger.debug("seed_skipped", reason="table_not_empty")
            return 0

        today = self._clock()
        inserted = 0
        for _ in range(count):
            result = self._storage.insert_habit(self.generate_habit(today))
            if not result.success:
                raise SeedError(
                    f"Seeding stopped after {inserted} habits: {result.error_message}"
                )
            inserted += 1

        self._audit_logger.log(AuditEventBuilder.database_seeded(inserted))
        return inserted
