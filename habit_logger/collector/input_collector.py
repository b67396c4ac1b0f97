"""
Interactive Input Collector

Asks for one field at a time and keeps asking until the answer passes
its check. There is no retry limit: the other side is a person at a
keyboard, and waiting for them is the expected behaviour.

Accepted answers come back already parsed (float quantities, date
objects, int ids), ready to hand to the store.

End of input is not retried. EOFError from the reader propagates so the
menu loop can shut down.
"""

from datetime import date
from typing import Callable, Optional

from habit_logger.models.habit import (
    HabitColumn,
    MenuAction,
    NewHabit,
    ValidationResult,
)
from habit_logger.services.storage import ColumnValue
from habit_logger.validation import (
    check_column,
    check_column_value,
    check_date,
    check_id,
    check_menu_option,
    check_quantity,
    check_required_text,
)


NAME_PROMPT = "Enter the habit name: "
NAME_RETRY = "Name cannot be empty. Please enter a valid name: "
MEASUREMENT_PROMPT = "Enter a unit of measurement (km, hours, books, movies): "
MEASUREMENT_RETRY = "Enter a valid unit of measurement: "
QUANTITY_PROMPT = "Enter the quantity: "
QUANTITY_RETRY = "Invalid number. Please enter a valid quantity: "
DATE_PROMPT = (
    "Enter the date (yyyy-MM-dd or dd-MM-yyyy) "
    "or type 'today' to insert today's date: "
)
DATE_RETRY = "Invalid date. Please use an accepted format and do not enter future dates: "
COLUMN_PROMPT = "Enter the field you wish to update: "
COLUMN_RETRY = "Enter a valid column name (name, measurement, quantity, date): "
MENU_PROMPT = "Your option? "
MENU_RETRY = "Invalid option. Please choose a valid option (0-4): "
UPDATE_ID_PROMPT = "Enter the ID of the habit you wish to update: "

VALUE_PROMPTS = {
    HabitColumn.NAME: (NAME_PROMPT, NAME_RETRY),
    HabitColumn.MEASUREMENT: (MEASUREMENT_PROMPT, MEASUREMENT_RETRY),
    HabitColumn.QUANTITY: (QUANTITY_PROMPT, QUANTITY_RETRY),
    HabitColumn.DATE: (DATE_PROMPT, DATE_RETRY),
}


class InputCollector:
    """
    Prompt-until-valid loops built on the field checks.

    read_line behaves like input(): it shows the prompt and returns one
    line. write behaves like print(). clock supplies today's date for
    the date check.
    """

    def __init__(
        self,
        read_line: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
        clock: Callable[[], date] = date.today,
    ):
        self._read_line = read_line
        self._write = write
        self._clock = clock

    def _ask(
        self,
        prompt: str,
        check: Callable[[str], ValidationResult],
        retry_prompt: Optional[str] = None,
    ):
        """
        Read until check accepts, then return the parsed value.

        Without a retry_prompt the check's own message is used.
        """
        result = check(self._read_line(prompt))
        while not result.accepted:
            if retry_prompt is not None:
                next_prompt = retry_prompt
            else:
                self._write(result.message)
                next_prompt = ""
            result = check(self._read_line(next_prompt))
        return result.value

    def ask_name(self) -> str:
        return self._ask(
            NAME_PROMPT,
            lambda raw: check_required_text(raw, field="name"),
            NAME_RETRY,
        )

    def ask_measurement(self) -> str:
        return self._ask(
            MEASUREMENT_PROMPT,
            lambda raw: check_required_text(raw, field="measurement"),
            MEASUREMENT_RETRY,
        )

    def ask_quantity(self) -> float:
        return self._ask(QUANTITY_PROMPT, check_quantity, QUANTITY_RETRY)

    def ask_date(self) -> date:
        # 'today' is resolved on the attempt that is accepted
        return self._ask(
            DATE_PROMPT,
            lambda raw: check_date(raw, self._clock),
            DATE_RETRY,
        )

    def ask_id(self, prompt: str = "") -> int:
        return self._ask(prompt, check_id)

    def ask_column(self) -> HabitColumn:
        return self._ask(COLUMN_PROMPT, check_column, COLUMN_RETRY)

    def ask_menu_action(self) -> MenuAction:
        return self._ask(MENU_PROMPT, check_menu_option, MENU_RETRY)

    def ask_value_for(self, column: HabitColumn) -> ColumnValue:
        """Ask for a new value using the prompt that fits the column."""
        prompt, retry_prompt = VALUE_PROMPTS[column]
        return self._ask(
            prompt,
            lambda raw: check_column_value(column, raw, self._clock),
            retry_prompt,
        )

    def collect_new_habit(self) -> NewHabit:
        """Ask for every field of a new habit, in display order."""
        name = self.ask_name()
        measurement = self.ask_measurement()
        quantity = self.ask_quantity()
        habit_date = self.ask_date()
        return NewHabit(
            name=name,
            measurement=measurement,
            quantity=quantity,
            date=habit_date,
        )

    def collect_update(self) -> tuple[int, HabitColumn, ColumnValue]:
        """Ask for the target id, the column, then the new value."""
        habit_id = self.ask_id(UPDATE_ID_PROMPT)
        column = self.ask_column()
        value = self.ask_value_for(column)
        return habit_id, column, value
