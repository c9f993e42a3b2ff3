# src/task_tracker/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- CLI flags are applied on a copy (Settings.with_overrides), never by mutating the shared one.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASK_TRACKER"

BACKENDS = ("json", "sqlite")
DEFAULT_BACKEND = "json"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_to_file: bool

    # ---- Storage ----
    backend: str
    data_dir: Path
    tasks_file: Path
    tasks_db_path: Path

    @staticmethod
    def from_env() -> "Settings":
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/task-tracker"))
        return Settings(
            app_name=_env(_k("APP_NAME"), "task-tracker"),
            log_level=_env(_k("LOG_LEVEL"), "WARNING"),
            log_to_file=_env_bool(_k("LOG_TO_FILE"), True),
            backend=_env(_k("BACKEND"), DEFAULT_BACKEND).strip().lower(),
            data_dir=data_dir,
            tasks_file=_env_path(_k("TASKS_FILE"), data_dir / "tasks.json"),
            tasks_db_path=_env_path(_k("TASKS_DB_PATH"), data_dir / "tasks.sqlite3"),
        )

    def with_overrides(
        self,
        *,
        backend: str | None = None,
        data_dir: str | Path | None = None,
        log_level: str | None = None,
    ) -> "Settings":
        """
        Return a copy with command-line overrides applied.

        A new data_dir moves the default file locations with it, unless they
        were pinned explicitly through the environment.
        """
        out = self
        if data_dir is not None:
            new_dir = Path(data_dir).expanduser()
            tasks_file = self.tasks_file
            tasks_db_path = self.tasks_db_path
            if tasks_file == self.data_dir / "tasks.json":
                tasks_file = new_dir / "tasks.json"
            if tasks_db_path == self.data_dir / "tasks.sqlite3":
                tasks_db_path = new_dir / "tasks.sqlite3"
            out = replace(out, data_dir=new_dir, tasks_file=tasks_file, tasks_db_path=tasks_db_path)
        if backend is not None:
            out = replace(out, backend=backend.strip().lower())
        if log_level is not None:
            out = replace(out, log_level=log_level)
        return out


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
