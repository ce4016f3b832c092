from __future__ import annotations

import datetime as dt
import uuid
from typing import Any, Callable, Dict, List, Sequence

from habit_sync.sync.dates import format_date
from habit_sync.sync.schedule import DueHabit

Command = Dict[str, Any]


def _new_id() -> str:
    return str(uuid.uuid4())


def build_commands(
    due: Sequence[DueHabit],
    tomorrow: dt.date,
    project_name: str,
    new_id: Callable[[], str] = _new_id,
) -> List[Command]:
    """Sync commands that rebuild the habit project for tomorrow.

    Layout: the project, a heading item titled with tomorrow's date, one
    child item per due habit, and a reminder for habits that have one.
    """

    project_ref = new_id()
    heading_ref = new_id()
    commands: List[Command] = [
        {
            "type": "project_add",
            "uuid": new_id(),
            "temp_id": project_ref,
            "args": {"name": project_name},
        },
        {
            "type": "item_add",
            "uuid": new_id(),
            "temp_id": heading_ref,
            "args": {"content": format_date(tomorrow), "project_id": project_ref},
        },
    ]

    for habit in due:
        habit_ref = new_id()
        commands.append(
            {
                "type": "item_add",
                "uuid": new_id(),
                "temp_id": habit_ref,
                "args": {
                    "content": habit.name,
                    "project_id": project_ref,
                    "parent_id": heading_ref,
                },
            }
        )
        if habit.reminder_time:
            commands.append(
                {
                    "type": "reminder_add",
                    "uuid": new_id(),
                    "args": {
                        "item_id": habit_ref,
                        "type": "absolute",
                        "due": {"string": habit.reminder_time},
                    },
                }
            )

    return commands
