from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from habit_sync.sync.dates import advance, format_date, parse_interval
from habit_sync.sync.tables import HabitDefinition, HabitTable


@dataclass(frozen=True)
class DueHabit:
    name: str
    reminder_time: Optional[str] = None


@dataclass
class Reschedule:
    due: List[DueHabit] = field(default_factory=list)
    next_dates: Dict[str, str] = field(default_factory=dict)
    column: List[str] = field(default_factory=list)


def next_due_date(habit: HabitDefinition, tomorrow: dt.date) -> str:
    interval = parse_interval(habit.interval, habit.name)
    return format_date(advance(tomorrow, habit.frequency, interval, habit.name))


def is_due(habit: HabitDefinition, tomorrow: dt.date) -> bool:
    # Sheet dates are opaque strings; no parsing.
    return habit.next_due_date == format_date(tomorrow)


def select_due(table: HabitTable, tomorrow: dt.date) -> Reschedule:
    """Pick tomorrow's habits and work out where each one moves next."""

    plan = Reschedule()
    for habit in table.habits:
        if not is_due(habit, tomorrow):
            continue
        plan.next_dates[habit.name] = next_due_date(habit, tomorrow)
        plan.due.append(DueHabit(habit.name, habit.reminder_time))
    plan.column = table.next_due_column(plan.next_dates)
    return plan
