# src/todo_app/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Defaults work out of the box: tasks.json in the current directory.
- Malformed values fall back to defaults instead of failing startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TODO"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v.strip()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "y", "on"}:
        return True
    if value in {"0", "false", "no", "n", "off"}:
        return False
    return default


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

    # ---- Local paths ----
    data_dir: Path
    data_file: Path

    # ---- Input / display ----
    date_format: str

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            app_name=_env(_k("APP_NAME"), "todo"),
            log_level=_env(_k("LOG_LEVEL"), "WARNING").upper(),
            log_to_file=_env_bool(_k("LOG_TO_FILE"), True),
            data_dir=_env_path(_k("DATA_DIR"), Path(".local/todo")),
            data_file=_env_path(_k("DATA_FILE"), Path("tasks.json")),
            date_format=_env(_k("DATE_FORMAT"), "%d-%m-%Y"),
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
