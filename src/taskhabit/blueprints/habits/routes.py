"""Habit routes."""

from __future__ import annotations

from flask import jsonify

from ...extensions import get_services, require_user_id
from ...models.habit import HabitLog
from .._payload import json_body
from . import bp
from .forms import HabitForm, HabitUpdateForm


def _log_to_dict(log: HabitLog) -> dict:
    return {
        "id": log.id,
        "habit_id": log.habit_id,
        "date": log.date.isoformat(),
        "day": log.day.isoformat(),
        "completed": log.completed,
        "notes": log.notes,
    }


@bp.get("/")
def list_habits():
    """Show the user's habits with streak and today's completion."""

    views = get_services().habits.list_habits(require_user_id())
    return jsonify([view.to_dict() for view in views])


@bp.post("/")
def create_habit():
    user_id = require_user_id()
    form = HabitForm.model_validate(json_body())
    service = get_services().habits
    habit = service.create_habit(user_id, **form.model_dump())
    return jsonify(service.get_habit(habit.id, user_id).to_dict()), 201


@bp.get("/<int:habit_id>")
def get_habit(habit_id: int):
    return jsonify(get_services().habits.get_habit(habit_id, require_user_id()).to_dict())


@bp.get("/<int:habit_id>/logs")
def habit_logs(habit_id: int):
    logs = get_services().habits.habit_logs(habit_id, require_user_id())
    return jsonify([_log_to_dict(log) for log in logs])


@bp.patch("/<int:habit_id>")
def update_habit(habit_id: int):
    user_id = require_user_id()
    form = HabitUpdateForm.model_validate(json_body())
    service = get_services().habits
    service.update_habit(habit_id, user_id, **form.model_dump(exclude_unset=True))
    return jsonify(service.get_habit(habit_id, user_id).to_dict())


@bp.post("/<int:habit_id>/pause")
def pause_habit(habit_id: int):
    user_id = require_user_id()
    service = get_services().habits
    service.pause_habit(habit_id, user_id)
    return jsonify(service.get_habit(habit_id, user_id).to_dict())


@bp.post("/<int:habit_id>/resume")
def resume_habit(habit_id: int):
    user_id = require_user_id()
    service = get_services().habits
    service.resume_habit(habit_id, user_id)
    return jsonify(service.get_habit(habit_id, user_id).to_dict())


@bp.post("/<int:habit_id>/toggle")
def toggle_habit(habit_id: int):
    """Toggle habit completion state for today."""

    user_id = require_user_id()
    service = get_services().habits
    log = service.toggle_completion(habit_id, user_id)
    return jsonify(
        {"log": _log_to_dict(log), "habit": service.get_habit(habit_id, user_id).to_dict()}
    )


@bp.delete("/<int:habit_id>")
def delete_habit(habit_id: int):
    get_services().habits.delete_habit(habit_id, require_user_id())
    return "", 204
