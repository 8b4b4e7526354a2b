"""Request helpers shared by the JSON blueprints."""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from flask import request
from werkzeug.exceptions import BadRequest


def json_body() -> dict[str, Any]:
    """Return the JSON object body, or an empty dict when there is none."""

    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise BadRequest("Expected a JSON object")
    return payload


def day_arg(name: str) -> Optional[date]:
    raw = request.args.get(name)
    if not raw:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError as exc:
        raise BadRequest(f"{name} must be an ISO date (YYYY-MM-DD)") from exc
