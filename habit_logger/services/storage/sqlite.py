"""
SQLite Storage Implementation

DESIGN DECISION: A single local SQLite file is the store because:
1. No server to install or configure
2. One process, one user, one writer
3. Create-if-absent schema makes every startup safe

The process holds exactly one connection, opened once and closed once.
Every statement runs on its own cursor, closed on every exit path, inside
a transaction that rolls back if the statement fails.

All values are bound as parameters. The column chosen for an update is
resolved through a fixed table of statements, never spliced into SQL.
"""

import math
import sqlite3
from contextlib import closing
from datetime import date, datetime
from typing import Optional

from pydantic import ValidationError
import structlog
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from habit_logger.audit import AuditLogger
from habit_logger.config import get_settings
from habit_logger.models.audit import AuditEventBuilder
from habit_logger.models.habit import (
    Habit,
    HabitColumn,
    HabitListResult,
    MutationResult,
    NewHabit,
)
from habit_logger.services.storage.interface import (
    ColumnValue,
    ConnectionError,
    HabitStorageInterface,
    StorageError,
)


TABLE_NAME = "Habit"

CREATE_TABLE_SQL = (
    "CREATE TABLE IF NOT EXISTS Habit ("
    "id_habit INTEGER PRIMARY KEY AUTOINCREMENT, "
    "name TEXT NOT NULL, "
    "measurement TEXT NOT NULL, "
    "quantity REAL NOT NULL, "
    "habit_date TEXT NOT NULL)"
)

COUNT_SQL = "SELECT COUNT(*) FROM Habit"

INSERT_SQL = (
    "INSERT INTO Habit (name, measurement, quantity, habit_date) "
    "VALUES (?, ?, ?, ?)"
)

SELECT_ALL_SQL = (
    "SELECT id_habit, name, measurement, quantity, habit_date "
    "FROM Habit ORDER BY id_habit"
)

DELETE_SQL = "DELETE FROM Habit WHERE id_habit = ?"

# One statement per updatable column
UPDATE_STATEMENTS: dict[HabitColumn, str] = {
    HabitColumn.NAME: "UPDATE Habit SET name = ? WHERE id_habit = ?",
    HabitColumn.MEASUREMENT: "UPDATE Habit SET measurement = ? WHERE id_habit = ?",
    HabitColumn.QUANTITY: "UPDATE Habit SET quantity = ? WHERE id_habit = ?",
    HabitColumn.DATE: "UPDATE Habit SET habit_date = ? WHERE id_habit = ?",
}

logger = structlog.get_logger(__name__)


class SQLiteClient:
    """
    Owner of the process-wide SQLite connection.

    Use as a context manager so the connection is closed on every exit:

        with SQLiteClient() as client:
            storage = SQLiteHabitStorage(client)
    """

    def __init__(self, db_path: Optional[str] = None):
        self._db_path = db_path or get_settings().storage.db_path
        self._connection: Optional[sqlite3.Connection] = None

    @property
    def db_path(self) -> str:
        return self._db_path

    @property
    def is_open(self) -> bool:
        return self._connection is not None

    @retry(
        retry=retry_if_exception_type(sqlite3.OperationalError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        reraise=True,
    )
    def _open(self) -> sqlite3.Connection:
        connection = sqlite3.connect(self._db_path)
        connection.row_factory = sqlite3.Row
        return connection

    def connect(self) -> sqlite3.Connection:
        """
        Open the database file, creating it if needed.

        Raises:
            ConnectionError: If the file cannot be opened
        """
        if self._connection is None:
            try:
                self._connection = self._open()
            except sqlite3.Error as e:
                raise ConnectionError(
                    f"Could not open database at {self._db_path}: {e}"
                ) from e
            logger.debug("database_opened", db_path=self._db_path)
        return self._connection

    @property
    def connection(self) -> sqlite3.Connection:
        """The open connection, opening it on first use."""
        return self.connect()

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None
            logger.debug("database_closed", db_path=self._db_path)

    def __enter__(self) -> "SQLiteClient":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def _coerce_column_value(column: HabitColumn, value: ColumnValue):
    """
    Convert an already validated value to what the column stores.

    Raises:
        ValueError: If the value does not fit the column
        OverflowError: If an integer quantity is too large for a float
    """
    if column in (HabitColumn.NAME, HabitColumn.MEASUREMENT):
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"{column.value} must be non-empty text")
        return value

    if column is HabitColumn.QUANTITY:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("quantity must be a number")
        value = float(value)
        if not math.isfinite(value):
            raise ValueError("quantity must be a finite number")
        return value

    if column is HabitColumn.DATE:
        if isinstance(value, datetime):
            value = value.date()
        if not isinstance(value, date):
            raise ValueError("date must be a calendar date")
        return value.isoformat()

    raise ValueError(f"Unsupported column: {column}")


class SQLiteHabitStorage(HabitStorageInterface):
    """
    SQLite implementation of habit storage.

    One habit per row in the Habit table. Dates are stored as
    YYYY-MM-DD text.
    """

    def __init__(
        self,
        client: SQLiteClient,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._client = client
        self._audit_logger = audit_logger or AuditLogger()

    def _row_to_habit(self, row: sqlite3.Row) -> Habit:
        """Convert a database row to a Habit."""
        return Habit(
            id=row["id_habit"],
            name=row["name"],
            measurement=row["measurement"],
            quantity=row["quantity"],
            date=date.fromisoformat(row["habit_date"]),
        )

    def _failed(
        self,
        operation: str,
        error: Exception,
        habit_id: Optional[int] = None,
    ) -> MutationResult:
        self._audit_logger.log(
            AuditEventBuilder.storage_error(operation, str(error), habit_id)
        )
        return MutationResult(
            success=False,
            record_id=habit_id,
            error_message=str(error),
        )

    def ensure_schema(self) -> None:
        """Create the Habit table if it is missing."""
        connection = self._client.connection
        try:
            with connection, closing(connection.cursor()) as cursor:
                cursor.execute(CREATE_TABLE_SQL)
        except sqlite3.Error as e:
            raise StorageError(f"Failed to create {TABLE_NAME} table: {e}") from e

        self._audit_logger.log(AuditEventBuilder.schema_ensured(TABLE_NAME))

    def count(self) -> int:
        connection = self._client.connection
        try:
            with closing(connection.cursor()) as cursor:
                cursor.execute(COUNT_SQL)
                return cursor.fetchone()[0]
        except sqlite3.Error as e:
            raise StorageError(f"Failed to count habits: {e}") from e

    def insert_habit(self, habit: NewHabit) -> MutationResult:
        """Insert all four fields in one statement."""
        connection = self._client.connection
        try:
            with connection, closing(connection.cursor()) as cursor:
                cursor.execute(
                    INSERT_SQL,
                    (
                        habit.name,
                        habit.measurement,
                        habit.quantity,
                        habit.date.isoformat(),
                    ),
                )
                rows_affected = cursor.rowcount
                record_id = cursor.lastrowid
        except sqlite3.Error as e:
            return self._failed("insert", e)

        self._audit_logger.log(AuditEventBuilder.habit_inserted(record_id, habit.name))
        return MutationResult(
            success=True,
            rows_affected=rows_affected,
            record_id=record_id,
        )

    def list_habits(self) -> HabitListResult:
        """List every habit in id order."""
        connection = self._client.connection
        try:
            with closing(connection.cursor()) as cursor:
                cursor.execute(SELECT_ALL_SQL)
                rows = cursor.fetchall()
        except sqlite3.Error as e:
            self._audit_logger.log(AuditEventBuilder.storage_error("list", str(e)))
            return HabitListResult(success=False, error_message=str(e))

        habits = []
        for row in rows:
            try:
                habits.append(self._row_to_habit(row))
            except (ValueError, ValidationError) as e:
                # Rows written outside this program may not decode
                logger.warning(
                    "habit_row_skipped",
                    habit_id=row["id_habit"],
                    error=str(e),
                )

        if rows and not habits:
            message = f"None of the {len(rows)} stored habits could be read"
            self._audit_logger.log(AuditEventBuilder.storage_error("list", message))
            return HabitListResult(success=False, error_message=message)

        return HabitListResult(success=True, records=habits)

    def delete_habit(self, habit_id: int) -> MutationResult:
        """Delete at most one row; 0 rows affected means no such id."""
        connection = self._client.connection
        try:
            with connection, closing(connection.cursor()) as cursor:
                cursor.execute(DELETE_SQL, (habit_id,))
                rows_affected = cursor.rowcount
        except sqlite3.Error as e:
            return self._failed("delete", e, habit_id)

        if rows_affected > 0:
            self._audit_logger.log(AuditEventBuilder.habit_deleted(habit_id))
        else:
            self._audit_logger.log(AuditEventBuilder.habit_not_found(habit_id, "delete"))

        return MutationResult(
            success=True,
            rows_affected=rows_affected,
            record_id=habit_id,
        )

    def update_habit_field(
        self,
        habit_id: int,
        column: HabitColumn,
        value: ColumnValue,
    ) -> MutationResult:
        """Change exactly one column on exactly one row."""
        try:
            column = HabitColumn(column)
            sql = UPDATE_STATEMENTS[column]
            stored_value = _coerce_column_value(column, value)
        except (KeyError, ValueError, OverflowError) as e:
            return MutationResult(
                success=False,
                record_id=habit_id,
                error_message=f"Invalid update: {e}",
            )

        connection = self._client.connection
        try:
            with connection, closing(connection.cursor()) as cursor:
                cursor.execute(sql, (stored_value, habit_id))
                rows_affected = cursor.rowcount
        except sqlite3.Error as e:
            return self._failed("update", e, habit_id)

        if rows_affected > 0:
            self._audit_logger.log(AuditEventBuilder.habit_updated(habit_id, column.value))
        else:
            self._audit_logger.log(AuditEventBuilder.habit_not_found(habit_id, "update"))

        return MutationResult(
            success=True,
            rows_affected=rows_affected,
            record_id=habit_id,
        )
