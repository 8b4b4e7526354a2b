"""Database and service wiring for the Flask app."""

from __future__ import annotations

from dataclasses import dataclass

from flask import Flask, current_app, session
from sqlalchemy.engine import Engine
from werkzeug.exceptions import Unauthorized

from .config import BaseConfig
from .events import EventBus
from .infra.database import SessionFactory, bootstrap_database
from .infra.repositories import SQLModelHabitRepository, SQLModelTaskRepository
from .services.analytics import AnalyticsService
from .services.habits import HabitService
from .services.tasks import TaskService

EXTENSION_KEY = "taskhabit"
SESSION_USER_KEY = "user_id"


@dataclass
class AppServices:
    """Everything request handlers need, built once per app."""

    engine: Engine
    session_factory: SessionFactory
    events: EventBus
    tasks: TaskService
    habits: HabitService
    analytics: AnalyticsService


def init_db(app: Flask) -> AppServices:
    """Create the engine and schema, then attach services to ``app.extensions``."""

    config: BaseConfig = app.config["TASKHABIT_CONFIG"]
    engine, session_factory = bootstrap_database(config)

    events = EventBus()
    task_repo = SQLModelTaskRepository(session_factory)
    habit_repo = SQLModelHabitRepository(session_factory)
    services = AppServices(
        engine=engine,
        session_factory=session_factory,
        events=events,
        tasks=TaskService(task_repo, events=events),
        habits=HabitService(habit_repo, events=events),
        analytics=AnalyticsService(
            task_repo,
            habit_repo,
            consistency_window_days=config.HABIT_CONSISTENCY_WINDOW_DAYS,
            ranking_limit=config.RANKING_LIMIT,
            comparison_months=config.MONTHLY_COMPARISON_MONTHS,
        ),
    )
    app.extensions[EXTENSION_KEY] = services
    return services


def get_services() -> AppServices:
    """Return the services bound to the current app."""

    return current_app.extensions[EXTENSION_KEY]


def require_user_id() -> int:
    """Return the signed-in user's id; sign-in itself happens upstream."""

    user_id = session.get(SESSION_USER_KEY)
    if user_id is None:
        raise Unauthorized("Sign in required")
    return int(user_id)
