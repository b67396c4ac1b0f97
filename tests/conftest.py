"""Shared fixtures: a throwaway database and scripted console input."""

import logging

import pytest

from habit_logger.services.storage import SQLiteClient, SQLiteHabitStorage


class ScriptedInput:
    """Stands in for input(): returns queued lines, then raises EOFError."""

    def __init__(self, lines):
        self._lines = list(lines)
        self.prompts = []

    def __call__(self, prompt: str = "") -> str:
        self.prompts.append(prompt)
        if not self._lines:
            raise EOFError
        return self._lines.pop(0)

    @property
    def remaining(self) -> int:
        return len(self._lines)


@pytest.fixture
def scripted_input():
    return ScriptedInput


@pytest.fixture
def output():
    """Collects everything written to the console."""
    return []


@pytest.fixture
def sqlite_client(tmp_path):
    client = SQLiteClient(str(tmp_path / "habits.sqlite"))
    client.connect()
    yield client
    client.close()


@pytest.fixture
def storage(sqlite_client):
    habit_storage = SQLiteHabitStorage(sqlite_client)
    habit_storage.ensure_schema()
    return habit_storage


@pytest.fixture
def restore_root_logging():
    """Undo configure_logging() so later tests keep pytest's handlers."""
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in saved_handlers:
            handler.close()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)
