"""In-process change notifications between services and their consumers."""

from __future__ import annotations

from collections import defaultdict
from threading import Lock
from typing import Any, Callable, Dict, List

from .logging_config import get_logger

__all__ = [
    "HABIT_CHANGED",
    "TASK_CHANGED",
    "EventBus",
    "Handler",
]

HABIT_CHANGED = "habit.changed"
TASK_CHANGED = "task.changed"

Handler = Callable[..., None]

logger = get_logger(__name__)


class EventBus:
    """Synchronous publish/subscribe hub keyed by topic name."""

    def __init__(self) -> None:
        self._handlers: Dict[str, List[Handler]] = defaultdict(list)
        self._lock = Lock()

    def subscribe(self, topic: str, handler: Handler) -> Callable[[], None]:
        """Register ``handler`` for ``topic`` and return an unsubscribe callable."""

        with self._lock:
            self._handlers[topic].append(handler)

        def _unsubscribe() -> None:
            with self._lock:
                handlers = self._handlers.get(topic, [])
                if handler in handlers:
                    handlers.remove(handler)

        return _unsubscribe

    def publish(self, topic: str, **payload: Any) -> int:
        """Deliver ``payload`` to every handler of ``topic``; return how many ran cleanly."""

        with self._lock:
            handlers = list(self._handlers.get(topic, []))

        delivered = 0
        for handler in handlers:
            try:
                handler(topic=topic, **payload)
            except Exception:
                logger.exception(
                    "Event handler failed", extra={"topic": topic, "handler": repr(handler)}
                )
                continue
            delivered += 1
        return delivered

    def clear(self) -> None:
        with self._lock:
            self._handlers.clear()
