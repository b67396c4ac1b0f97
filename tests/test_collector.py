"""Tests for the prompt-until-valid input collector."""

from datetime import date

import pytest

from habit_logger.collector import InputCollector
from habit_logger.collector.input_collector import (
    COLUMN_RETRY,
    DATE_RETRY,
    NAME_PROMPT,
    NAME_RETRY,
    QUANTITY_PROMPT,
    QUANTITY_RETRY,
    UPDATE_ID_PROMPT,
    VALUE_PROMPTS,
)
from habit_logger.models.habit import HabitColumn, MenuAction, NewHabit


def make_collector(read_line, output, clock=lambda: date(2024, 6, 15)):
    return InputCollector(read_line=read_line, write=output.append, clock=clock)


class TestSingleFields:
    """Tests for each field prompt."""

    def test_name_retries_until_non_blank(self, scripted_input, output):
        read_line = scripted_input(["", "   ", "Running"])
        assert make_collector(read_line, output).ask_name() == "Running"
        assert read_line.prompts == [NAME_PROMPT, NAME_RETRY, NAME_RETRY]

    def test_quantity_parsed(self, scripted_input, output):
        read_line = scripted_input(["abc", "", "3.5"])
        assert make_collector(read_line, output).ask_quantity() == 3.5
        assert read_line.prompts[1:] == [QUANTITY_RETRY, QUANTITY_RETRY]

    def test_date_normalised(self, scripted_input, output):
        read_line = scripted_input(["2024-13-01", "16-06-2024", "15-01-2024"])
        assert make_collector(read_line, output).ask_date() == date(2024, 1, 15)
        assert read_line.prompts[1:] == [DATE_RETRY, DATE_RETRY]

    def test_date_today_keyword(self, scripted_input, output):
        read_line = scripted_input(["Today"])
        assert make_collector(read_line, output).ask_date() == date(2024, 6, 15)

    def test_id_reports_each_reason(self, scripted_input, output):
        read_line = scripted_input(["", "abc", "0", "5"])
        assert make_collector(read_line, output).ask_id("Id: ") == 5
        assert output == [
            "Enter a valid ID",
            "Enter a non-floating point number",
            "ID must be greater than 0",
        ]

    def test_column_case_insensitive(self, scripted_input, output):
        read_line = scripted_input(["id_habit", "Quantity"])
        assert make_collector(read_line, output).ask_column() is HabitColumn.QUANTITY
        assert read_line.prompts[1] == COLUMN_RETRY

    def test_menu_action(self, scripted_input, output):
        read_line = scripted_input(["9", "01", "3"])
        assert make_collector(read_line, output).ask_menu_action() is MenuAction.DELETE

    def test_end_of_input_propagates(self, scripted_input, output):
        read_line = scripted_input(["", ""])
        with pytest.raises(EOFError):
            make_collector(read_line, output).ask_name()


class TestCollectFlows:
    """Tests for whole insert and update flows."""

    def test_collect_new_habit(self, scripted_input, output):
        read_line = scripted_input(["Running", "km", "5", "2024-01-15"])
        habit = make_collector(read_line, output).collect_new_habit()
        assert habit == NewHabit(
            name="Running",
            measurement="km",
            quantity=5.0,
            date=date(2024, 1, 15),
        )
        assert read_line.remaining == 0

    def test_collect_update_asks_for_matching_value(self, scripted_input, output):
        read_line = scripted_input(["7", "date", "tomorrow", "today"])
        habit_id, column, value = make_collector(read_line, output).collect_update()
        assert habit_id == 7
        assert column is HabitColumn.DATE
        assert value == date(2024, 6, 15)
        assert read_line.prompts[0] == UPDATE_ID_PROMPT

    @pytest.mark.parametrize("column,raw,expected", [
        ("name", "Cycling", "Cycling"),
        ("measurement", "miles", "miles"),
        ("quantity", "-2.5", -2.5),
    ])
    def test_collect_update_other_columns(self, scripted_input, output, column, raw, expected):
        read_line = scripted_input(["3", column, raw])
        _, chosen, value = make_collector(read_line, output).collect_update()
        assert chosen is HabitColumn(column)
        assert value == expected

    def test_value_prompts_cover_every_column(self):
        assert set(VALUE_PROMPTS) == set(HabitColumn)

    def test_update_value_retries_with_column_prompt(self, scripted_input, output):
        read_line = scripted_input(["3", "quantity", "lots", "\u0663", "4"])
        _, _, value = make_collector(read_line, output).collect_update()
        assert value == 4.0
        assert read_line.prompts[2:] == [QUANTITY_PROMPT, QUANTITY_RETRY, QUANTITY_RETRY]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
