"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from sqlalchemy.pool import StaticPool

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "TaskHabit"
    DB_FILENAME = "taskhabit.db"
    LOG_FILENAME = "taskhabit.log"
    HABIT_CONSISTENCY_WINDOW_DAYS = 30
    RANKING_LIMIT = 3
    MONTHLY_COMPARISON_MONTHS = 6
    TESTING = False

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("TASKHABIT_SECRET_KEY", "replace-me")
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("TASKHABIT_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("TASKHABIT_DATABASE_URL", self._build_sqlite_url())
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("TASKHABIT_SECRET_KEY must be set in non-dev mode.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory holding the SQLite file and logs."""

        data_root = os.getenv("TASKHABIT_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            options: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
            if self.DATABASE_URL in {"sqlite://", "sqlite:///:memory:"}:
                # in-memory databases live on a single shared connection
                options["poolclass"] = StaticPool
            return options
        return {"pool_pre_ping": True}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True


class TestConfig(BaseConfig):
    """Configuration for the test-suite; callers usually override DATABASE_URL."""

    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.DEV_MODE = True
        self.DATABASE_URL = os.getenv("TASKHABIT_TEST_DATABASE_URL", "sqlite://")
