"""Fan-out notifications for presentation layers.

`Signal` carries values that have no "current" state, such as a message
that just completed. `Observable` builds its change notifications on it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Signal(Generic[T]):
    """Fan-out of values to subscriber callbacks."""

    def __init__(self) -> None:
        self._subscribers: list[Callable[[T], None]] = []

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """Register a callback and return a function that removes it."""
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def emit(self, value: T) -> None:
        # A failing subscriber must not break the session state machine
        for callback in list(self._subscribers):
            try:
                callback(value)
            except Exception:  # noqa: BLE001
                logger.exception("Subscriber %r failed", callback)

    def __len__(self) -> int:
        return len(self._subscribers)


__all__ = ["Signal"]
