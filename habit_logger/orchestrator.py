"""
Main Orchestrator for Habit Logger

This module ties together all the components and defines the
console menu:
1. List   (store → display lines)
2. Insert (collector → validated NewHabit → store)
3. Delete (collector → validated id → store)
4. Update (collector → id, column, value → store)

DESIGN DECISION: The orchestrator enforces the boundaries:
- Nothing reaches the store without going through the collector
- Store failures are printed and the menu carries on
- The only thing that ends the loop is the exit option (or end of input)
"""

from typing import Callable, Optional

from habit_logger.audit import AuditLogger
from habit_logger.collector import InputCollector
from habit_logger.config import Settings, get_settings
from habit_logger.models.habit import MenuAction, MutationResult
from habit_logger.services.seed import HabitSeedService
from habit_logger.services.storage import (
    HabitStorageInterface,
    SQLiteClient,
    SQLiteHabitStorage,
)


RULE = "-" * 64

MENU_LINES = [
    "MAIN MENU",
    "",
    "What would you like to do?",
    "",
    "Type 0 to Close Application.",
    "Type 1 to View All Records.",
    "Type 2 to Insert Record.",
    "Type 3 to Delete Record.",
    "Type 4 to Update Record.",
    "-" * 28,
]

DELETE_ID_PROMPT = "Enter the ID of the habit you wish to delete: "
CONTINUE_PROMPT = "\nPress Enter to return to the menu..."


class HabitLoggerApp:
    """
    Command dispatcher for the numbered menu.

    Every MenuAction has exactly one handler.
    """

    def __init__(
        self,
        storage: HabitStorageInterface,
        collector: Optional[InputCollector] = None,
        write: Callable[[str], None] = print,
        read_line: Callable[[str], str] = input,
    ):
        self._storage = storage
        self._write = write
        self._read_line = read_line
        self._collector = collector or InputCollector(read_line=read_line, write=write)
        self.handlers: dict[MenuAction, Callable[[], None]] = {
            MenuAction.EXIT: self.exit,
            MenuAction.LIST: self.list_records,
            MenuAction.INSERT: self.insert_record,
            MenuAction.DELETE: self.delete_record,
            MenuAction.UPDATE: self.update_record,
        }

    def show_menu(self) -> None:
        for line in MENU_LINES:
            self._write(line)

    def dispatch(self, action: MenuAction) -> None:
        self.handlers[action]()

    def run_once(self) -> bool:
        """One menu round. Returns False once the user chose to exit."""
        self.show_menu()
        action = self._collector.ask_menu_action()
        self.dispatch(action)
        if action is MenuAction.EXIT:
            return False
        self._read_line(CONTINUE_PROMPT)
        return True

    def run(self) -> None:
        """Show the menu until the user exits or input runs out."""
        try:
            while self.run_once():
                pass
        except EOFError:
            # End of input counts as choosing exit
            self.exit()

    def _report_failure(self, result: MutationResult) -> None:
        self._write(f"Database error: {result.error_message}")

    def exit(self) -> None:
        self._write("\nClosing application. Goodbye!")

    def list_records(self) -> None:
        result = self._storage.list_habits()
        if not result.success:
            self._write(f"Database error: {result.error_message}")
            return
        if not result.data_found:
            self._write("No records found.")
            return

        self._write(RULE)
        for habit in result.records:
            self._write(habit.to_display_line())
        self._write(RULE)

    def insert_record(self) -> None:
        habit = self._collector.collect_new_habit()
        result = self._storage.insert_habit(habit)
        if not result.success:
            self._report_failure(result)
            return
        self._write("\nRecord inserted successfully!")

    def delete_record(self) -> None:
        habit_id = self._collector.ask_id(DELETE_ID_PROMPT)
        result = self._storage.delete_habit(habit_id)
        if not result.success:
            self._report_failure(result)
        elif result.found:
            self._write(f"{result.rows_affected} row was affected.")
        else:
            self._write("Couldn't find a habit with that id.")

    def update_record(self) -> None:
        habit_id, column, value = self._collector.collect_update()
        result = self._storage.update_habit_field(habit_id, column, value)
        if not result.success:
            self._report_failure(result)
        elif result.found:
            self._write("\nRecord updated successfully!")
        else:
            self._write("Couldn't find a habit with that ID.")


def create_app_components(
    settings: Optional[Settings] = None,
    read_line: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> tuple[SQLiteClient, SQLiteHabitStorage, HabitSeedService, HabitLoggerApp]:
    """
    Factory function to create all application components.

    The client is returned unopened; the caller owns its lifetime
    (use it as a context manager).

    Returns:
        (sqlite_client, habit_storage, seed_service, app)
    """
    settings = settings or get_settings()
    storage_settings = settings.storage

    audit_logger = AuditLogger()
    client = SQLiteClient(storage_settings.db_path)
    storage = SQLiteHabitStorage(client, audit_logger=audit_logger)
    seed_service = HabitSeedService(
        storage,
        history_days=storage_settings.seed_history_days,
        audit_logger=audit_logger,
    )
    collector = InputCollector(read_line=read_line, write=write)
    app = HabitLoggerApp(storage, collector=collector, write=write, read_line=read_line)

    return client, storage, seed_service, app
