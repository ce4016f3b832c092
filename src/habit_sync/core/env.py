from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from habit_sync.errors import ConfigError


def load_local_env(project_root: Path, env_file: Optional[Path] = None) -> None:
    """Load .env.local (or an explicit env file) if present.

    Values already set in the process environment win, so cron or a
    scheduled function can override anything in the file.
    """

    if env_file is not None:
        if not env_file.exists():
            raise ConfigError(f"Env file not found: {env_file}")
        load_dotenv(env_file)
        return

    env_path = project_root / ".env.local"
    if env_path.exists():
        load_dotenv(env_path)


def get_env_var(name: str, required: bool = True) -> Optional[str]:
    value = os.getenv(name)
    if value is not None:
        value = value.strip()
    if required and not value:
        raise ConfigError(f"Missing required environment variable: {name}")
    return value or None
