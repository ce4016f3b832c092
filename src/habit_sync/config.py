from __future__ import annotations

from dataclasses import dataclass

from habit_sync.core.env import get_env_var
from habit_sync.errors import ConfigError
from habit_sync.sync.constants import (
    DEFAULT_HABIT_SHEET,
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_PROJECT_NAME,
    DEFAULT_SYNC_URL,
)


@dataclass(frozen=True)
class Settings:
    spreadsheet_id: str
    refresh_token: str
    client_id: str
    client_secret: str
    todoist_token: str
    project_name: str = DEFAULT_PROJECT_NAME
    habit_sheet: str = DEFAULT_HABIT_SHEET
    sync_url: str = DEFAULT_SYNC_URL
    http_timeout: float = DEFAULT_HTTP_TIMEOUT


def _timeout() -> float:
    raw = get_env_var("HTTP_TIMEOUT_SECONDS", required=False)
    if raw is None:
        return DEFAULT_HTTP_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"HTTP_TIMEOUT_SECONDS is not a number: {raw}") from None
    if value <= 0:
        raise ConfigError(f"HTTP_TIMEOUT_SECONDS must be positive: {raw}")
    return value


def load_settings() -> Settings:
    """Read settings from the environment (call load_local_env first)."""

    return Settings(
        spreadsheet_id=get_env_var("HABITS_SPREADSHEET_ID"),
        refresh_token=get_env_var("GOOGLE_REFRESH_TOKEN"),
        client_id=get_env_var("GOOGLE_CLIENT_ID"),
        client_secret=get_env_var("GOOGLE_CLIENT_SECRET"),
        todoist_token=get_env_var("TODOIST_KEY"),
        project_name=get_env_var("HABITS_PROJECT_NAME", required=False)
        or DEFAULT_PROJECT_NAME,
        habit_sheet=get_env_var("HABITS_SHEET_NAME", required=False)
        or DEFAULT_HABIT_SHEET,
        sync_url=(
            get_env_var("TODOIST_SYNC_URL", required=False) or DEFAULT_SYNC_URL
        ).rstrip("/"),
        http_timeout=_timeout(),
    )
