"""Owner checks wrapped around service entry points."""

from __future__ import annotations

from functools import wraps
from typing import Any, Callable, TypeVar

from ..errors import NotAuthorizedError, NotFoundError

__all__ = ["UNCHANGED", "owner_guarded"]

F = TypeVar("F", bound=Callable[..., Any])

# Default for optional update arguments, so an explicit None can clear a field.
UNCHANGED: Any = object()


def owner_guarded(
    entity: str,
    not_found: type[NotFoundError],
    *,
    foreign_as_missing: bool = False,
) -> Callable[[F], F]:
    """Resolve ``(entity_id, user_id)`` into an owned entity before the call.

    The wrapped method is looked up as ``method(self, entity_id, user_id, ...)``
    and receives the fetched entity in place of its id. A missing id raises
    ``not_found``; an entity owned by someone else raises
    :class:`NotAuthorizedError`, or ``not_found`` when ``foreign_as_missing``
    is set (reads should not reveal other users' ids). Both happen before the
    wrapped method runs, so no write is attempted.
    """

    def decorator(method: F) -> F:
        @wraps(method)
        def wrapper(self, entity_id: int, user_id: int, *args: Any, **kwargs: Any) -> Any:
            target = self.repository.get_by_id(entity_id)
            if target is None:
                raise not_found(entity_id)
            if target.user_id != user_id:
                if foreign_as_missing:
                    raise not_found(entity_id)
                raise NotAuthorizedError(entity, entity_id, user_id)
            return method(self, target, user_id, *args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator
