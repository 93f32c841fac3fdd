"""Transaction boundary shared by the domain services."""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

F = TypeVar("F", bound=Callable[..., Any])

_DEPTH_KEY = "tracker_tx_depth"


def transactional(method: F) -> F:
    """
    Run a service method inside one transaction on ``self.session``.

    The outermost decorated call commits when the method returns and rolls
    back when it raises.  Nested calls (for example TaskService invoking
    ProjectService's ownership gate) join the outer transaction instead of
    committing early.
    """

    @wraps(method)
    def wrapper(self, *args, **kwargs):
        session = self.session
        depth = session.info.get(_DEPTH_KEY, 0)
        session.info[_DEPTH_KEY] = depth + 1
        try:
            result = method(self, *args, **kwargs)
            if depth == 0:
                session.commit()
            return result
        except Exception:
            if depth == 0:
                session.rollback()
            raise
        finally:
            session.info[_DEPTH_KEY] = depth

    return wrapper  # type: ignore[return-value]
