"""Task routes."""

from __future__ import annotations

from flask import jsonify, request

from ...extensions import get_services, require_user_id
from ...services.tasks import task_to_dict
from .._payload import day_arg, json_body
from . import bp
from .forms import TaskForm, TaskStatusForm, TaskUpdateForm


@bp.get("/")
def list_tasks():
    """List tasks; ``?day=YYYY-MM-DD`` returns the calendar view for that day."""

    user_id = require_user_id()
    service = get_services().tasks
    day = day_arg("day")
    if day is not None:
        tasks = service.tasks_for_day(user_id, day)
    else:
        tasks = service.list_tasks(user_id, status=request.args.get("status") or None)
    return jsonify([task_to_dict(task) for task in tasks])


@bp.post("/")
def create_task():
    user_id = require_user_id()
    form = TaskForm.model_validate(json_body())
    task = get_services().tasks.create_task(user_id, **form.model_dump())
    return jsonify(task_to_dict(task)), 201


@bp.get("/<int:task_id>")
def get_task(task_id: int):
    task = get_services().tasks.get_task(task_id, require_user_id())
    return jsonify(task_to_dict(task))


@bp.patch("/<int:task_id>")
def update_task(task_id: int):
    user_id = require_user_id()
    form = TaskUpdateForm.model_validate(json_body())
    task = get_services().tasks.update_task(task_id, user_id, **form.model_dump(exclude_unset=True))
    return jsonify(task_to_dict(task))


@bp.post("/<int:task_id>/toggle")
def toggle_task(task_id: int):
    task = get_services().tasks.toggle_completion(task_id, require_user_id())
    return jsonify(task_to_dict(task))


@bp.post("/<int:task_id>/status")
def set_task_status(task_id: int):
    user_id = require_user_id()
    form = TaskStatusForm.model_validate(json_body())
    task = get_services().tasks.set_status(task_id, user_id, form.status)
    return jsonify(task_to_dict(task))


@bp.delete("/<int:task_id>")
def delete_task(task_id: int):
    get_services().tasks.delete_task(task_id, require_user_id())
    return "", 204
