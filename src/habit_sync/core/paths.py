from __future__ import annotations

from pathlib import Path


def project_root() -> Path:
    # .../src/habit_sync/core/paths.py -> .../
    return Path(__file__).resolve().parents[3]
