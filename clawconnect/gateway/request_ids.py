"""Request id generation for outbound gateway requests."""

from __future__ import annotations

import time
import itertools

from ..config.gateway import GATEWAY_REQUEST_ID_PREFIX


class RequestIdGenerator:
    """Produces `<prefix>-<n>-<epoch ms>` ids; `n` never repeats per client."""

    def __init__(self, prefix: str = GATEWAY_REQUEST_ID_PREFIX) -> None:
        self._prefix = prefix
        self._counter = itertools.count(1)

    def next(self) -> str:
        return f"{self._prefix}-{next(self._counter)}-{int(time.time() * 1000)}"

    __call__ = next


__all__ = ["RequestIdGenerator"]
