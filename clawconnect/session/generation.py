"""Generation tokens that invalidate callbacks from superseded connections.

Each client bumps its generation every time it tears its session handle
down, before the teardown itself runs. Everything asynchronous that is
registered against a handle (reader tasks, viewer listeners, pending
handshakes) captures the generation current at registration time and
checks it again before touching client state:

    generation = self._generation.advance()   # teardown of the old handle
    viewer.add_event_listener("connect", self._generation.guard(generation, self._on_connect))

A late event from the old handle then finds a newer generation and is
dropped without side effects.
"""

from __future__ import annotations

import logging
import functools
from collections.abc import Callable
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

R = TypeVar("R")


class SessionGeneration:
    """Monotonic counter of session handles owned by one client."""

    def __init__(self, name: str = "session") -> None:
        self._name = name
        self._current = 0

    @property
    def current(self) -> int:
        return self._current

    def advance(self) -> int:
        """Invalidate every outstanding token and return the new one."""
        self._current += 1
        return self._current

    def is_current(self, token: int) -> bool:
        return token == self._current

    def guard(self, token: int, callback: Callable[..., R]) -> Callable[..., R | None]:
        """Wrap `callback` so it becomes a no-op once `token` is stale."""

        @functools.wraps(callback)
        def _guarded(*args: Any, **kwargs: Any) -> R | None:
            if token != self._current:
                logger.debug(
                    "Ignoring stale %s callback %s (generation %s, current %s)",
                    self._name,
                    getattr(callback, "__name__", callback),
                    token,
                    self._current,
                )
                return None
            return callback(*args, **kwargs)

        return _guarded


__all__ = ["SessionGeneration"]
