"""Tests for the field checks."""

import pytest
from datetime import date, timedelta

from habit_logger.models.habit import HabitColumn, MenuAction
from habit_logger.validation import (
    check_column,
    check_column_value,
    check_date,
    check_id,
    check_menu_option,
    check_quantity,
    check_required_text,
    parse_date,
)


TODAY = date(2024, 6, 15)


def clock():
    return TODAY


class TestRequiredText:
    """Tests for the non-empty text check."""

    @pytest.mark.parametrize("raw", ["", " ", "\t\n", None])
    def test_rejects_blank(self, raw):
        result = check_required_text(raw)
        assert result.accepted is False
        assert result.issue.issue_type == "missing"

    def test_accepts_verbatim(self):
        """Test accepted text is returned unchanged."""
        result = check_required_text("  Running  ")
        assert result.accepted is True
        assert result.value == "  Running  "

    def test_message_names_field(self):
        result = check_required_text("", field="measurement")
        assert result.issue.field == "measurement"
        assert "Measurement" in result.message


class TestQuantity:
    """Tests for the numeric quantity check."""

    @pytest.mark.parametrize("raw,expected", [
        ("3.5", 3.5),
        ("5", 5.0),
        ("-2", -2.0),
        ("+0.25", 0.25),
        (".5", 0.5),
        ("1e3", 1000.0),
        ("2.5E-1", 0.25),
        (" 7 ", 7.0),
    ])
    def test_accepts_numbers(self, raw, expected):
        result = check_quantity(raw)
        assert result.accepted is True
        assert result.value == expected

    @pytest.mark.parametrize("raw", [
        "", "abc", "1,5", "1_000", "inf", "nan", "1e999", "3.5km", "--1", ".",
        "\u0663.\u0665", "\uff15",
    ])
    def test_rejects_non_numbers(self, raw):
        assert check_quantity(raw).accepted is False

    def test_never_raises_on_none(self):
        assert check_quantity(None).accepted is False


class TestDate:
    """Tests for the date check."""

    @pytest.mark.parametrize("raw", ["today", "TODAY", "Today", "  today "])
    def test_today_keyword(self, raw):
        result = check_date(raw, clock)
        assert result.accepted is True
        assert result.value == TODAY

    def test_today_reads_clock_each_call(self):
        """Test that 'today' is resolved when checked, not cached."""
        days = iter([date(2024, 1, 1), date(2024, 1, 2)])
        moving_clock = lambda: next(days)
        assert check_date("today", moving_clock).value == date(2024, 1, 1)
        assert check_date("today", moving_clock).value == date(2024, 1, 2)

    def test_iso_format(self):
        assert check_date("2024-01-15", clock).value == date(2024, 1, 15)

    def test_day_first_format(self):
        assert check_date("15-01-2024", clock).value == date(2024, 1, 15)

    def test_today_exact_date_accepted(self):
        assert check_date("2024-06-15", clock).accepted is True

    def test_future_date_rejected(self):
        tomorrow = (TODAY + timedelta(days=1)).isoformat()
        result = check_date(tomorrow, clock)
        assert result.accepted is False
        assert result.issue.issue_type == "future_date"

    @pytest.mark.parametrize("raw", [
        "2024-13-01",
        "2024-02-30",
        "32-01-2024",
        "2024-1-5",
        "2024/01/15",
        "15/01/2024",
        "01-15-2024",
        "2024-01-15T00:00",
        "yesterday",
        "\u0662\u0660\u0662\u0664-\u0660\u0661-\u0661\u0665",
        "",
        "   ",
    ])
    def test_rejects_invalid(self, raw):
        assert check_date(raw, clock).accepted is False

    def test_uses_real_clock_by_default(self):
        assert check_date("today").value == date.today()

    def test_parse_date_helper(self):
        assert parse_date("2024-02-29") == date(2024, 2, 29)
        assert parse_date("29-02-2023") is None


class TestColumn:
    """Tests for the updatable column check."""

    @pytest.mark.parametrize("raw,expected", [
        ("name", HabitColumn.NAME),
        ("Measurement", HabitColumn.MEASUREMENT),
        (" QUANTITY ", HabitColumn.QUANTITY),
        ("date", HabitColumn.DATE),
    ])
    def test_accepts_known_columns(self, raw, expected):
        result = check_column(raw)
        assert result.accepted is True
        assert result.value is expected

    @pytest.mark.parametrize("raw", ["id_habit", "id", "habit_date", "", "name; DROP TABLE Habit"])
    def test_rejects_others(self, raw):
        assert check_column(raw).accepted is False


class TestId:
    """Tests for the positive id check."""

    def test_accepts_positive(self):
        result = check_id("5")
        assert result.accepted is True
        assert result.value == 5

    @pytest.mark.parametrize("raw,issue_type", [
        ("0", "not_positive"),
        ("-1", "not_positive"),
        ("5.0", "not_a_number"),
        ("abc", "not_a_number"),
        ("99999999999999999999", "not_a_number"),
        ("\u0665", "not_a_number"),
        ("", "missing"),
        ("  ", "missing"),
    ])
    def test_rejection_reasons(self, raw, issue_type):
        result = check_id(raw)
        assert result.accepted is False
        assert result.issue.issue_type == issue_type

    def test_messages_are_distinct(self):
        assert check_id("abc").message != check_id("0").message


class TestMenuOption:
    """Tests for the main menu check."""

    @pytest.mark.parametrize("raw", ["0", "1", "2", "3", "4"])
    def test_accepts_digits(self, raw):
        result = check_menu_option(raw)
        assert result.accepted is True
        assert result.value == MenuAction(raw)

    @pytest.mark.parametrize("raw", ["5", "01", "", " 1", "1\n", "a", None])
    def test_rejects_others(self, raw):
        assert check_menu_option(raw).accepted is False


class TestColumnValue:
    """Tests for picking the check that matches a column."""

    def test_quantity_column_parses_number(self):
        assert check_column_value(HabitColumn.QUANTITY, "2.5").value == 2.5

    def test_date_column_uses_clock(self):
        assert check_column_value(HabitColumn.DATE, "today", clock).value == TODAY

    def test_name_column_rejects_blank(self):
        assert check_column_value(HabitColumn.NAME, " ").accepted is False


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
