from __future__ import annotations

import datetime as dt
import json
from typing import Any, Dict, Iterable, List, Optional

import requests
from todoist_api_python.api import TodoistAPI

from habit_sync.errors import FetchError, PublishError, PurgeError
from habit_sync.sync.constants import DEFAULT_HTTP_TIMEOUT, DEFAULT_SYNC_URL
from habit_sync.sync.snapshot import TaskItem, TaskProject, TaskSnapshot

COMPLETED_LOOKBACK_DAYS = 2


def is_task_completed(task) -> bool:
    if hasattr(task, "is_completed") and task.is_completed:
        return True
    if hasattr(task, "completed_at") and task.completed_at is not None:
        return True
    return False


def _flatten(pages: Iterable) -> list:
    items = []
    for page in pages:
        items.extend(page)
    return items


def build_snapshot(projects: Iterable, tasks: Iterable) -> TaskSnapshot:
    """Convert library models into a snapshot with indent levels.

    Indent comes from the parent chain: a top-level task is 1, its
    children 2. A child whose parent is not in the list counts as 2.
    """

    by_id: Dict[str, Any] = {}
    for task in tasks:
        by_id.setdefault(str(task.id), task)

    indents: Dict[str, int] = {}

    def indent_of(task_id: str, seen: frozenset = frozenset()) -> int:
        if task_id in indents:
            return indents[task_id]
        parent_id = getattr(by_id[task_id], "parent_id", None)
        if not parent_id:
            level = 1
        elif str(parent_id) in by_id and str(parent_id) not in seen:
            level = indent_of(str(parent_id), seen | {task_id}) + 1
        else:
            level = 2
        indents[task_id] = level
        return level

    return TaskSnapshot(
        projects=[TaskProject(str(p.id), p.name) for p in projects],
        items=[
            TaskItem(
                project_id=str(task.project_id),
                content=task.content,
                indent=indent_of(task_id),
                completed=is_task_completed(task),
            )
            for task_id, task in by_id.items()
        ],
    )


class TodoistClient:
    """Habit project access: REST client for reads, Sync endpoint for batches."""

    def __init__(
        self,
        api: TodoistAPI,
        token: str,
        sync_url: str = DEFAULT_SYNC_URL,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.api = api
        self.token = token
        self.sync_url = sync_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_snapshot(self, project_name: str) -> TaskSnapshot:
        try:
            projects = _flatten(self.api.get_projects())
            habits = next((p for p in projects if p.name == project_name), None)
            if habits is None:
                return build_snapshot(projects, [])

            tasks = _flatten(self.api.get_tasks(project_id=habits.id))
            until = dt.datetime.now(dt.timezone.utc)
            since = until - dt.timedelta(days=COMPLETED_LOOKBACK_DAYS)
            completed = _flatten(
                self.api.get_completed_tasks_by_completion_date(
                    since=since, until=until
                )
            )
        except requests.RequestException as e:
            raise FetchError(f"could not fetch Todoist API data: {e}") from e

        tasks.extend(t for t in completed if str(t.project_id) == str(habits.id))
        return build_snapshot(projects, tasks)

    def delete_project(self, project_id: str) -> None:
        try:
            deleted = self.api.delete_project(project_id)
        except requests.RequestException as e:
            raise PurgeError(f"could not delete Todoist project {project_id}: {e}") from e
        if deleted is False:
            raise PurgeError(f"Todoist refused to delete project {project_id}")

    def create_batch(self, commands: List[Dict[str, Any]]) -> Dict[str, str]:
        """Post Sync commands; returns the temp id mapping."""

        try:
            response = self.session.post(
                self.sync_url,
                headers={"Authorization": f"Bearer {self.token}"},
                data={"commands": json.dumps(commands)},
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            raise PublishError(f"could not send habits to Todoist API: {e}") from e

        statuses = payload.get("sync_status", {})
        failed = {
            command["uuid"]: statuses.get(command["uuid"], "missing")
            for command in commands
            if statuses.get(command["uuid"]) != "ok"
        }
        if failed:
            raise PublishError(f"Todoist rejected {len(failed)} command(s): {failed}")
        return payload.get("temp_id_mapping", {})
