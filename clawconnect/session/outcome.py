"""Result of reporting a drop to the reconnect loop."""

from __future__ import annotations

from enum import Enum


class ReconnectOutcome(str, Enum):
    """What `ReconnectLoop.on_drop()` did with a drop.

    SCHEDULED: a reconnection timer is pending.
    EXHAUSTED: the attempt budget is spent; the drop is terminal.
    SKIPPED: the drop is not recoverable or the loop is disabled.
    """

    SCHEDULED = "scheduled"
    EXHAUSTED = "exhausted"
    SKIPPED = "skipped"


__all__ = ["ReconnectOutcome"]
