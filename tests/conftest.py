from __future__ import annotations

import datetime as dt

import pytest

from habit_sync.config import Settings
from habit_sync.sync.snapshot import TaskItem, TaskProject, TaskSnapshot

HABIT_HEADER = ["name", "frequency", "interval", "reminderTime", "nextDueDate"]


class FakeStore:
    def __init__(self, tables):
        self.tables = tables
        self.writes = []

    def read_table(self, sheet_name):
        return [list(row) for row in self.tables[sheet_name]]

    def write_row(self, sheet_range, row):
        self.writes.append(("row", sheet_range, list(row)))

    def write_column(self, sheet_range, values):
        self.writes.append(("column", sheet_range, list(values)))


class FakeTasks:
    def __init__(self, snapshot):
        self.snapshot = snapshot
        self.deleted = []
        self.batches = []

    def fetch_snapshot(self, project_name):
        return self.snapshot

    def delete_project(self, project_id):
        self.deleted.append(project_id)

    def create_batch(self, commands):
        self.batches.append(commands)
        return {}


@pytest.fixture
def settings():
    return Settings(
        spreadsheet_id="sheet-id",
        refresh_token="refresh",
        client_id="client",
        client_secret="secret",
        todoist_token="todoist",
    )


@pytest.fixture
def today():
    return dt.date(2025, 1, 6)


@pytest.fixture
def tables():
    return {
        "Habits": [
            HABIT_HEADER,
            ["Run", "day", "", "7pm", "7 January 2025"],
            ["Read", "week", "2", "", "7 January 2025"],
            ["Call mum", "month", "1", "", "3 February 2025"],
            ["Taxes", "year", "", "", "15 April 2025"],
        ],
        "day": [["Day", "Run"], ["5 January 2025", "pass"]],
        "week": [["Week", "Read"], ["2 2025", "fail"]],
        "month": [["Month", "Call mum"]],
        "year": [["Year", "Taxes"]],
    }


@pytest.fixture
def snapshot():
    return TaskSnapshot(
        projects=[TaskProject("p1", "Habits"), TaskProject("p2", "Inbox")],
        items=[
            TaskItem("p1", "6 January 2025", 1, False),
            TaskItem("p1", "Run", 2, True),
            TaskItem("p1", "Read", 2, False),
            TaskItem("p2", "Run", 2, False),
        ],
    )
