"""Observable values consumed by presentation layers.

A session client owns its state as plain values; anything that renders that
state reads the current value and subscribes to changes:

    status = client.connection_status.value
    unsubscribe = client.connection_status.subscribe(render_status)

Subscribers are only notified when the value actually changes.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

from .signals import Signal

T = TypeVar("T")


class Observable(Generic[T]):
    """A current value plus change notifications."""

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._changes: Signal[T] = Signal()

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> bool:
        """Replace the value; return True when subscribers were notified."""
        if value == self._value:
            return False
        self._value = value
        self._changes.emit(value)
        return True

    def update(self, fn: Callable[[T], T]) -> bool:
        return self.set(fn(self._value))

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        return self._changes.subscribe(callback)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"


__all__ = ["Observable"]
