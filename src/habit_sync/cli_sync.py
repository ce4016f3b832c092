from __future__ import annotations

import argparse
import datetime as dt
import sys
from pathlib import Path
from typing import List, Optional

from todoist_api_python.api import TodoistAPI

from habit_sync.config import load_settings
from habit_sync.core.env import load_local_env
from habit_sync.core.paths import project_root
from habit_sync.errors import HabitSyncError
from habit_sync.integrations.sheets import SheetStore, refresh_credentials
from habit_sync.integrations.todoist import TodoistClient
from habit_sync.sync.pipeline import HabitSync


def _parse_date(value: str) -> dt.date:
    try:
        return dt.date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a YYYY-MM-DD date: {value}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="habit-sync",
        description="Record today's habit results in Google Sheets and create tomorrow's Todoist tasks",
    )
    parser.add_argument(
        "--env-file", type=Path, help="Load settings from this file instead of .env.local"
    )
    parser.add_argument(
        "--date",
        type=_parse_date,
        help="Run as if today were this date (YYYY-MM-DD)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Read both services and print the planned changes without writing",
    )
    return parser


def run(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    load_local_env(project_root(), args.env_file)
    settings = load_settings()

    creds = refresh_credentials(
        settings.refresh_token, settings.client_id, settings.client_secret
    )
    store = SheetStore.connect(creds, settings.spreadsheet_id)
    tasks = TodoistClient(
        TodoistAPI(settings.todoist_token),
        settings.todoist_token,
        sync_url=settings.sync_url,
        timeout=settings.http_timeout,
    )

    HabitSync(settings, store, tasks, today=args.date, dry_run=args.dry_run).run()


def main(argv: Optional[List[str]] = None) -> int:
    try:
        run(argv)
    except HabitSyncError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
