"""Capped exponential backoff policy."""

from __future__ import annotations

from dataclasses import dataclass

from ..config.reconnect import (
    REMOTE_RECONNECT_MAX_DELAY_S,
    GATEWAY_RECONNECT_MAX_DELAY_S,
    REMOTE_RECONNECT_BASE_DELAY_S,
    REMOTE_RECONNECT_MAX_ATTEMPTS,
    GATEWAY_RECONNECT_BASE_DELAY_S,
    GATEWAY_RECONNECT_MAX_ATTEMPTS,
)


@dataclass(frozen=True)
class BackoffPolicy:
    """Delay schedule for reconnection attempts.

    Attributes:
        max_attempts: Attempts allowed before giving up.
        base_delay_s: Delay before the first attempt.
        max_delay_s: Upper bound for any single delay.
    """

    max_attempts: int
    base_delay_s: float
    max_delay_s: float

    def __post_init__(self) -> None:
        if self.max_attempts < 0:
            raise ValueError("max_attempts must be >= 0")
        if self.base_delay_s < 0 or self.max_delay_s < 0:
            raise ValueError("delays must be >= 0")

    def delay_for(self, attempt: int) -> float:
        """Delay before 1-based `attempt`: base * 2^(attempt - 1), capped."""
        if attempt < 1:
            raise ValueError("attempt is 1-based")
        return min(self.base_delay_s * (2 ** (attempt - 1)), self.max_delay_s)

    def delays(self) -> list[float]:
        return [self.delay_for(attempt) for attempt in range(1, self.max_attempts + 1)]

    @classmethod
    def gateway(cls) -> BackoffPolicy:
        return cls(
            max_attempts=GATEWAY_RECONNECT_MAX_ATTEMPTS,
            base_delay_s=GATEWAY_RECONNECT_BASE_DELAY_S,
            max_delay_s=GATEWAY_RECONNECT_MAX_DELAY_S,
        )

    @classmethod
    def remote(cls) -> BackoffPolicy:
        return cls(
            max_attempts=REMOTE_RECONNECT_MAX_ATTEMPTS,
            base_delay_s=REMOTE_RECONNECT_BASE_DELAY_S,
            max_delay_s=REMOTE_RECONNECT_MAX_DELAY_S,
        )


__all__ = ["BackoffPolicy"]
