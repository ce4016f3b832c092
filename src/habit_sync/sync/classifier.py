from __future__ import annotations

from typing import Dict, List

from habit_sync.errors import UnknownFrequency, UnknownHabit
from habit_sync.sync.constants import FREQUENCIES, HABIT_INDENT
from habit_sync.sync.snapshot import TaskSnapshot
from habit_sync.sync.tables import HabitTable, TaskOutcome


def classify_outcomes(
    snapshot: TaskSnapshot, table: HabitTable, project_name: str
) -> Dict[str, List[TaskOutcome]]:
    """Group the habit project's leaf tasks by their habit's frequency.

    Only indent-2 items count; the indent-1 item is the day heading.
    """

    buckets: Dict[str, List[TaskOutcome]] = {f: [] for f in FREQUENCIES}

    project = snapshot.find_project(project_name)
    if project is None:
        return buckets

    for item in snapshot.items:
        if item.project_id != project.id or item.indent != HABIT_INDENT:
            continue
        # Sheet names are read stripped, so task content is matched the same way.
        name = item.content.strip()
        frequency = table.frequency_of(name)
        if frequency is None:
            raise UnknownHabit(item.content)
        if frequency not in buckets:
            raise UnknownFrequency(frequency, name)
        buckets[frequency].append(TaskOutcome(name, item.completed))

    return buckets
