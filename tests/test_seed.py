"""Tests for sample data seeding."""

import random
from datetime import date, timedelta

import pytest

from habit_logger.models.habit import HabitListResult, MutationResult, NewHabit
from habit_logger.services.seed import HABIT_CATALOGUE, HabitSeedService, SeedError
from habit_logger.services.storage import (
    HabitStorageInterface,
    SQLiteClient,
    SQLiteHabitStorage,
)


TODAY = date(2024, 6, 15)


def make_service(storage, seed=42, history_days=365):
    return HabitSeedService(
        storage,
        rng=random.Random(seed),
        clock=lambda: TODAY,
        history_days=history_days,
    )


class FailingInsertStorage(HabitStorageInterface):
    """Empty store whose inserts always fail."""

    def ensure_schema(self):
        pass

    def count(self):
        return 0

    def insert_habit(self, habit):
        return MutationResult(success=False, error_message="disk full")

    def list_habits(self):
        return HabitListResult(success=True)

    def delete_habit(self, habit_id):
        return MutationResult(success=True)

    def update_habit_field(self, habit_id, column, value):
        return MutationResult(success=True)


class TestHabitSeedService:
    """Tests for HabitSeedService."""

    def test_seeds_empty_table(self, storage):
        inserted = make_service(storage).seed_if_empty(20)
        assert inserted == 20
        assert storage.count() == 20

    def test_generated_values_in_range(self, storage):
        make_service(storage).seed_if_empty(50)
        catalogue = set(HABIT_CATALOGUE)
        oldest = TODAY - timedelta(days=364)

        for habit in storage.list_habits().records:
            assert (habit.name, habit.measurement) in catalogue
            assert 1.0 <= habit.quantity <= 11.0
            assert round(habit.quantity, 2) == habit.quantity
            assert oldest <= habit.date <= TODAY

    def test_skips_non_empty_table(self, storage):
        storage.insert_habit(NewHabit(name="Running", measurement="km", quantity=5.0, date=TODAY))

        inserted = make_service(storage).seed_if_empty(20)
        assert inserted == 0
        assert storage.count() == 1

    def test_second_run_adds_nothing(self, storage):
        service = make_service(storage)
        service.seed_if_empty(10)
        assert service.seed_if_empty(10) == 0
        assert storage.count() == 10

    def test_same_seed_same_data(self, tmp_path):
        results = []
        for name in ["a.sqlite", "b.sqlite"]:
            with SQLiteClient(str(tmp_path / name)) as client:
                storage = SQLiteHabitStorage(client)
                storage.ensure_schema()
                make_service(storage, seed=7).seed_if_empty(5)
                results.append([
                    (h.name, h.quantity, h.date) for h in storage.list_habits().records
                ])
        assert results[0] == results[1]

    def test_history_window(self, storage):
        make_service(storage, history_days=1).seed_if_empty(10)
        assert {habit.date for habit in storage.list_habits().records} == {TODAY}

    def test_insert_failure_raises(self):
        with pytest.raises(SeedError, match="disk full"):
            make_service(FailingInsertStorage()).seed_if_empty(3)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
