from __future__ import annotations

FREQUENCIES = ("day", "week", "month", "year")

# Habits tab column order: name, frequency, interval, reminderTime, nextDueDate
NAME_COLUMN = 0
FREQUENCY_COLUMN = 1
INTERVAL_COLUMN = 2
REMINDER_COLUMN = 3
NEXT_DUE_COLUMN = 4
HABIT_COLUMNS = 5
NEXT_DUE_COLUMN_LETTER = "E"

DEFAULT_INTERVAL = 1

PASS = "pass"
FAIL = "fail"

# Task items: the day heading sits at indent 1, habits under it at indent 2.
HEADING_INDENT = 1
HABIT_INDENT = 2

DEFAULT_PROJECT_NAME = "Habits"
DEFAULT_HABIT_SHEET = "Habits"
DEFAULT_SYNC_URL = "https://api.todoist.com/api/v1/sync"
DEFAULT_HTTP_TIMEOUT = 10
