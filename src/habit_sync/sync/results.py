from __future__ import annotations

import datetime as dt
from typing import Iterable, List, Optional

from habit_sync.sync.constants import FAIL, PASS
from habit_sync.sync.dates import period_key
from habit_sync.sync.tables import FrequencySheet, TaskOutcome


def build_result_row(
    sheet: FrequencySheet, outcomes: Iterable[TaskOutcome], period: str
) -> List[str]:
    """One row as wide as the header: period label, then pass/fail per habit.

    Raises ColumnNotFound before anything is written if a habit has no
    header column.
    """

    row = [""] * sheet.column_count
    row[0] = period
    for outcome in outcomes:
        row[sheet.column_of(outcome.habit_name)] = PASS if outcome.completed else FAIL
    return row


def result_row_number(sheet: FrequencySheet, period: str) -> int:
    # 1-based sheet rows; a rerun in the same period overwrites the last row
    if sheet.last_period == period:
        return sheet.row_count
    return sheet.row_count + 1


def result_range(sheet: FrequencySheet, row_number: int) -> str:
    return f"{sheet.name}!{row_number}:{row_number}"


def store_results(store, sheet: FrequencySheet, today: dt.date) -> Optional[str]:
    """Write the sheet's outcomes for today's period. Returns the range written."""

    if not sheet.outcomes:
        return None

    period = period_key(sheet.name, today)
    row = build_result_row(sheet, sheet.outcomes, period)
    sheet_range = result_range(sheet, result_row_number(sheet, period))
    store.write_row(sheet_range, row)
    return sheet_range
