"""
Field Validation

Each check takes one raw line of console input and returns a
ValidationResult: accepted with the parsed value, or refused with a
ValidationIssue saying why.

IMPORTANT: Checks NEVER raise for malformed input. Bad input is the
normal case at a console prompt and drives re-prompting.

The only impure check is the date check, which reads the current date
for the 'today' keyword and the no-future-dates rule. The clock is a
parameter so tests can pin it.
"""

import math
import re
from datetime import date, datetime
from typing import Callable, Optional

from habit_logger.models.habit import (
    HabitColumn,
    MenuAction,
    ValidationIssue,
    ValidationResult,
)


Clock = Callable[[], date]

TODAY_KEYWORD = "today"

# Accepted date layouts, tried in order. The regex pins zero-padded ASCII
# digits because strptime alone would also take '2024-1-5'.
DATE_FORMATS = [
    (re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}"), "%Y-%m-%d"),
    (re.compile(r"[0-9]{2}-[0-9]{2}-[0-9]{4}"), "%d-%m-%Y"),
]

# ASCII digits only; \d in a str pattern also matches other scripts' digits
_QUANTITY_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_ID_PATTERN = re.compile(r"[+-]?[0-9]+")
_MENU_PATTERN = re.compile(r"[0-4]")

# SQLite INTEGER PRIMARY KEY is a signed 64-bit value
MAX_ID = 2 ** 63 - 1


def _accept(value) -> ValidationResult:
    return ValidationResult(accepted=True, value=value)


def _reject(field: str, issue_type: str, message: str) -> ValidationResult:
    return ValidationResult(
        accepted=False,
        issue=ValidationIssue(field=field, issue_type=issue_type, message=message),
    )


def _is_blank(raw: Optional[str]) -> bool:
    return raw is None or not raw.strip()


def check_required_text(raw: Optional[str], field: str = "name") -> ValidationResult:
    """Accept any text with at least one non-whitespace character, verbatim."""
    if _is_blank(raw):
        return _reject(field, "missing", f"{field.capitalize()} cannot be empty")
    return _accept(raw)


def check_quantity(raw: Optional[str]) -> ValidationResult:
    """
    Accept a finite real number written with a decimal point.

    Optional sign and exponent are allowed; thousands separators,
    decimal commas, 'inf' and 'nan' are not.
    """
    if _is_blank(raw):
        return _reject("quantity", "missing", "Quantity cannot be empty")

    text = raw.strip()
    if not _QUANTITY_PATTERN.fullmatch(text):
        return _reject("quantity", "invalid_format", f"'{text}' is not a number")

    value = float(text)
    if not math.isfinite(value):
        return _reject("quantity", "invalid_format", f"'{text}' is out of range")

    return _accept(value)


def parse_date(text: str) -> Optional[date]:
    """Parse one of the accepted layouts exactly, or return None."""
    for pattern, fmt in DATE_FORMATS:
        if not pattern.fullmatch(text):
            continue
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            return None
    return None


def check_date(raw: Optional[str], clock: Clock = date.today) -> ValidationResult:
    """
    Accept 'today' (any case) or a past/present date in
    YYYY-MM-DD or DD-MM-YYYY.

    The clock is read on every call; never cache the result of a
    'today' check across prompts.
    """
    if _is_blank(raw):
        return _reject("date", "missing", "Date cannot be empty")

    text = raw.strip()
    today = clock()

    if text.lower() == TODAY_KEYWORD:
        return _accept(today)

    parsed = parse_date(text)
    if parsed is None:
        return _reject(
            "date",
            "invalid_format",
            f"'{text}' is not a valid date (use yyyy-MM-dd or dd-MM-yyyy)",
        )

    if parsed > today:
        return _reject("date", "future_date", f"{parsed.isoformat()} is in the future")

    return _accept(parsed)


def check_column(raw: Optional[str]) -> ValidationResult:
    """Accept one of the four updatable field names, case-insensitively."""
    if _is_blank(raw):
        return _reject("column", "missing", "Column name cannot be empty")

    try:
        return _accept(HabitColumn(raw.strip().lower()))
    except ValueError:
        allowed = ", ".join(column.value for column in HabitColumn)
        return _reject(
            "column",
            "unknown_column",
            f"'{raw.strip()}' is not a column you can update ({allowed})",
        )


def check_id(raw: Optional[str]) -> ValidationResult:
    """
    Accept a whole number greater than zero.

    Issue types tell the three failures apart:
    missing, not_a_number (including '5.0'), not_positive.
    """
    if _is_blank(raw):
        return _reject("id", "missing", "Enter a valid ID")

    text = raw.strip()
    if not _ID_PATTERN.fullmatch(text):
        return _reject("id", "not_a_number", "Enter a non-floating point number")

    value = int(text)
    if value > MAX_ID:
        return _reject("id", "not_a_number", "Enter a non-floating point number")
    if value <= 0:
        return _reject("id", "not_positive", "ID must be greater than 0")

    return _accept(value)


def check_menu_option(raw: Optional[str]) -> ValidationResult:
    """Accept exactly one digit from 0 to 4."""
    if raw is None or not _MENU_PATTERN.fullmatch(raw):
        return _reject(
            "menu",
            "invalid_option",
            "Invalid option. Please choose a valid option (0-4)",
        )
    return _accept(MenuAction(raw))


def check_column_value(
    column: HabitColumn,
    raw: Optional[str],
    clock: Clock = date.today,
) -> ValidationResult:
    """Run the check that matches the column being updated."""
    if column is HabitColumn.NAME:
        return check_required_text(raw, field="name")
    if column is HabitColumn.MEASUREMENT:
        return check_required_text(raw, field="measurement")
    if column is HabitColumn.QUANTITY:
        return check_quantity(raw)
    if column is HabitColumn.DATE:
        return check_date(raw, clock)
    raise ValueError(f"Unsupported column: {column}")
