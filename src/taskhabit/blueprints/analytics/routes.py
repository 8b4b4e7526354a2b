"""Analytics routes."""

from __future__ import annotations

from dataclasses import asdict

from flask import jsonify

from ...extensions import get_services, require_user_id
from . import bp


@bp.get("/summary")
def summary():
    return jsonify(get_services().analytics.summary(require_user_id()).to_dict())


@bp.get("/weekly")
def weekly():
    rows = get_services().analytics.weekly(require_user_id())
    return jsonify([asdict(row) for row in rows])


@bp.get("/monthly")
def monthly():
    rows = get_services().analytics.monthly(require_user_id())
    return jsonify([asdict(row) for row in rows])


@bp.get("/productive-days")
def productive_days():
    rows = get_services().analytics.productive_days(require_user_id())
    return jsonify([asdict(row) for row in rows])


@bp.get("/habit-consistency")
def habit_consistency():
    rows = get_services().analytics.habit_consistency(require_user_id())
    return jsonify([asdict(row) for row in rows])
