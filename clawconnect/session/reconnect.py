"""Bounded reconnection loop shared by the gateway and remote clients.

The loop owns the retry counter and at most one scheduled reconnection
timer. Clients report drops through `on_drop()`; the loop decides, using
the client's recoverability predicate and its backoff policy, whether to
schedule another attempt, give up, or do nothing.

Lifecycle:
    reset()          - user-initiated connect: counter to zero, loop enabled
    mark_connected() - a session came up: counter to zero
    on_drop(drop)    - a session went away; may schedule `establish`
    disable()        - user disconnect or authentication failure
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from collections.abc import Callable

from .backoff import BackoffPolicy
from .outcome import ReconnectOutcome
from ..telemetry.instruments import get_metrics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DropInfo:
    """Description of how a session ended.

    Attributes:
        clean: True when the transport reported an orderly close.
        had_error: True when an error was observed before the close.
        code: Close code, when the transport exposes one.
        reason: Close reason or error text.
    """

    clean: bool
    had_error: bool = False
    code: int | None = None
    reason: str = ""


class ReconnectLoop:
    """Schedules `establish` after recoverable drops with capped backoff."""

    def __init__(
        self,
        establish: Callable[[], None],
        *,
        policy: BackoffPolicy,
        is_recoverable: Callable[[DropInfo], bool] | None = None,
        name: str = "session",
    ) -> None:
        self._establish = establish
        self._policy = policy
        self._is_recoverable = is_recoverable or (lambda drop: not drop.clean)
        self._name = name
        self._attempts = 0
        self._ever_connected = False
        self._enabled = True
        self._handle: asyncio.TimerHandle | None = None
        self._last_delay_s: float | None = None

    # ------------------------------------------------------------------ #
    # State
    # ------------------------------------------------------------------ #
    @property
    def policy(self) -> BackoffPolicy:
        return self._policy

    @property
    def attempts(self) -> int:
        return self._attempts

    @property
    def ever_connected(self) -> bool:
        return self._ever_connected

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def last_delay_s(self) -> float | None:
        return self._last_delay_s

    # ------------------------------------------------------------------ #
    # Transitions
    # ------------------------------------------------------------------ #
    def reset(self) -> None:
        self.cancel()
        self._attempts = 0
        self._ever_connected = False
        self._enabled = True
        self._last_delay_s = None

    def mark_connected(self) -> None:
        self._attempts = 0
        self._ever_connected = True

    def disable(self) -> None:
        self.cancel()
        self._enabled = False

    def cancel(self) -> None:
        handle, self._handle = self._handle, None
        if handle is not None:
            handle.cancel()

    def on_drop(self, drop: DropInfo) -> ReconnectOutcome:
        """Decide what follows a dropped session and schedule it."""
        if not self._enabled or not self._is_recoverable(drop):
            return ReconnectOutcome.SKIPPED

        if self._attempts >= self._policy.max_attempts:
            self.cancel()
            logger.warning(
                "%s: giving up after %d reconnect attempts",
                self._name,
                self._attempts,
            )
            get_metrics().reconnects_exhausted_total.add(1, {"client": self._name})
            return ReconnectOutcome.EXHAUSTED

        self._attempts += 1
        delay = self._policy.delay_for(self._attempts)
        self._last_delay_s = delay
        self.cancel()
        self._handle = asyncio.get_running_loop().call_later(delay, self._fire)
        logger.info(
            "%s: reconnecting in %.1fs (attempt %d/%d)",
            self._name,
            delay,
            self._attempts,
            self._policy.max_attempts,
        )
        get_metrics().reconnect_attempts_total.add(1, {"client": self._name})
        return ReconnectOutcome.SCHEDULED

    def _fire(self) -> None:
        self._handle = None
        if not self._enabled:
            return
        self._establish()


__all__ = ["DropInfo", "ReconnectLoop"]
