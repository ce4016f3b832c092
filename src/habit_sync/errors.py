from __future__ import annotations

from typing import Optional


class HabitSyncError(Exception):
    """Base class for every failure that aborts a sync run."""

    stage: Optional[str] = None

    def in_stage(self, stage: str) -> "HabitSyncError":
        if self.stage is None:
            self.stage = stage
        return self

    def __str__(self) -> str:
        message = super().__str__()
        if self.stage:
            return f"{self.stage}: {message}"
        return message


class ConfigError(HabitSyncError):
    pass


class AuthError(HabitSyncError):
    pass


class FetchError(HabitSyncError):
    pass


class ReconcileError(HabitSyncError):
    """The spreadsheet and the task list disagree, or a habit row is malformed."""


class ColumnNotFound(ReconcileError):
    def __init__(self, sheet: str, habit: str):
        super().__init__(f"no column named '{habit}' in sheet '{sheet}'")
        self.sheet = sheet
        self.habit = habit


class InvalidInterval(ReconcileError):
    def __init__(self, habit: str, value: str):
        super().__init__(f"habit '{habit}' has invalid interval '{value}'")
        self.habit = habit
        self.value = value


class UnknownFrequency(ReconcileError):
    def __init__(self, frequency: str, habit: str = ""):
        where = f" for habit '{habit}'" if habit else ""
        super().__init__(f"unknown frequency '{frequency}'{where}")
        self.frequency = frequency
        self.habit = habit


class UnknownHabit(ReconcileError):
    def __init__(self, content: str):
        super().__init__(f"task '{content}' has no row in the habit table")
        self.content = content


class WriteError(HabitSyncError):
    pass


class PurgeError(HabitSyncError):
    pass


class PublishError(HabitSyncError):
    pass
