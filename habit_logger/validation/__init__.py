"""Input validation package."""

from habit_logger.validation.validator import (
    check_column,
    check_column_value,
    check_date,
    check_id,
    check_menu_option,
    check_quantity,
    check_required_text,
    parse_date,
)

__all__ = [
    "check_column",
    "check_column_value",
    "check_date",
    "check_id",
    "check_menu_option",
    "check_quantity",
    "check_required_text",
    "parse_date",
]
