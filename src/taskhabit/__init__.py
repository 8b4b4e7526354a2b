"""TaskHabit application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable

from flask import Flask, jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from . import cli as _cli
from .config import BaseConfig, DevConfig, TestConfig
from .errors import InvalidTransitionError, NotAuthorizedError, NotFoundError
from .logging_config import get_logger, setup_logging

__all__ = ["BaseConfig", "DevConfig", "TestConfig", "create_app"]

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestConfig,
    "default": BaseConfig,
}

logger = get_logger(__name__)


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    yield "taskhabit.blueprints.tasks"
    yield "taskhabit.blueprints.habits"
    yield "taskhabit.blueprints.analytics"


def create_app(config_name: str | None = None, *, config: BaseConfig | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__, instance_relative_config=True)
    config_obj = config or _resolve_config(config_name)()
    app.config.from_object(config_obj)
    app.config["TASKHABIT_CONFIG"] = config_obj

    if not config_obj.TESTING:
        setup_logging(config_obj)

    _register_blueprints(app)
    _register_error_handlers(app)

    from .extensions import init_db

    init_db(app)
    _cli.init_app(app)

    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        app.register_blueprint(getattr(module, "bp"))


def _register_error_handlers(app: Flask) -> None:
    """Translate domain errors into JSON responses."""

    @app.errorhandler(NotFoundError)
    def _not_found(exc: NotFoundError):
        return jsonify({"error": "not_found", "message": str(exc)}), 404

    @app.errorhandler(NotAuthorizedError)
    def _forbidden(exc: NotAuthorizedError):
        logger.warning(
            "Rejected cross-user write",
            extra={"entity": exc.entity, "entity_id": exc.entity_id, "user_id": exc.user_id},
        )
        return jsonify({"error": "not_authorized", "message": str(exc)}), 403

    @app.errorhandler(InvalidTransitionError)
    def _conflict(exc: InvalidTransitionError):
        return jsonify({"error": "invalid_transition", "message": str(exc)}), 409

    @app.errorhandler(ValidationError)
    def _invalid(exc: ValidationError):
        errors: dict[str, list[str]] = {}
        for error in exc.errors(include_url=False):
            loc = error.get("loc", ())
            key = str(loc[0]) if loc else "__root__"
            errors.setdefault(key, []).append(error.get("msg", "Invalid value"))
        return jsonify({"error": "validation_failed", "fields": errors}), 400

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return jsonify({"error": exc.name.lower().replace(" ", "_"), "message": exc.description}), exc.code
