from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from habit_sync.errors import ColumnNotFound, FetchError
from habit_sync.sync.constants import (
    FREQUENCY_COLUMN,
    HABIT_COLUMNS,
    INTERVAL_COLUMN,
    NAME_COLUMN,
    NEXT_DUE_COLUMN,
    REMINDER_COLUMN,
)


@dataclass(frozen=True)
class TaskOutcome:
    habit_name: str
    completed: bool


@dataclass
class HabitDefinition:
    name: str
    frequency: str
    interval: str = ""
    reminder_time: Optional[str] = None
    next_due_date: str = ""
    row_number: int = 0

    @classmethod
    def from_row(cls, row: Sequence[str], row_number: int) -> "HabitDefinition":
        cells = [str(cell).strip() for cell in row]
        cells += [""] * (HABIT_COLUMNS - len(cells))
        return cls(
            name=cells[NAME_COLUMN],
            frequency=cells[FREQUENCY_COLUMN].lower(),
            interval=cells[INTERVAL_COLUMN],
            reminder_time=cells[REMINDER_COLUMN] or None,
            next_due_date=cells[NEXT_DUE_COLUMN],
            row_number=row_number,
        )


class HabitTable:
    """The Habits tab: one habit definition per row, header first."""

    def __init__(self, sheet_name: str, rows: List[List[str]]):
        if not rows:
            raise FetchError(f"sheet '{sheet_name}' has no header row")
        self.sheet_name = sheet_name
        self.header = list(rows[0])
        self.row_count = len(rows)
        self.habits: List[HabitDefinition] = []
        self._by_name: Dict[str, HabitDefinition] = {}
        self._next_due_cells = [
            str(row[NEXT_DUE_COLUMN]) if len(row) > NEXT_DUE_COLUMN else ""
            for row in rows
        ]

        for index, row in enumerate(rows[1:], start=2):
            if not row or not str(row[NAME_COLUMN]).strip():
                continue
            habit = HabitDefinition.from_row(row, index)
            if habit.name in self._by_name:
                raise FetchError(
                    f"sheet '{sheet_name}' lists habit '{habit.name}' more than once"
                )
            self._by_name[habit.name] = habit
            self.habits.append(habit)

    def by_name(self, name: str) -> Optional[HabitDefinition]:
        return self._by_name.get(name)

    def frequency_of(self, name: str) -> Optional[str]:
        habit = self._by_name.get(name)
        return habit.frequency if habit else None

    def next_due_column(self, updates: Optional[Dict[str, str]] = None) -> List[str]:
        """Values for a full nextDueDate column write, header cell first.

        Every row not named in `updates` keeps the cell it was read with,
        including rows that have no habit name.
        """

        updates = updates or {}
        column = list(self._next_due_cells)
        for habit in self.habits:
            if habit.name in updates:
                column[habit.row_number - 1] = updates[habit.name]
        return column


@dataclass
class FrequencySheet:
    """One frequency tab plus the outcomes collected for it this run.

    Row 0 is the header: the period label column, then one column per
    habit name.
    """

    name: str
    rows: List[List[str]]
    outcomes: List[TaskOutcome] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.rows or not self.rows[0]:
            raise FetchError(f"sheet '{self.name}' has no header row")

    @property
    def header(self) -> List[str]:
        return self.rows[0]

    @property
    def column_count(self) -> int:
        return len(self.header)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def last_period(self) -> Optional[str]:
        if self.row_count < 2:
            return None
        last = self.rows[-1]
        return last[0] if last else ""

    def column_of(self, habit_name: str) -> int:
        name = habit_name.strip()
        for index, title in enumerate(self.header):
            if index and str(title).strip() == name:
                return index
        raise ColumnNotFound(self.name, habit_name)
