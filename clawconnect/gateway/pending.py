"""Pending request table keyed by request id.

Each outbound request registers a future *before* its frame is sent. The
future is resolved by the matching response frame or abandoned when the
timeout elapses; either way the entry leaves the table exactly once, so a
late response for a timed-out id finds nothing and is ignored.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from ..errors import GatewayRequestError, GatewayRequestTimeout

logger = logging.getLogger(__name__)


class PendingRequests:
    """Request id -> future awaiting its response frame."""

    def __init__(self) -> None:
        self._entries: dict[str, asyncio.Future[Any]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, request_id: object) -> bool:
        return request_id in self._entries

    def register(self, request_id: str) -> asyncio.Future[Any]:
        if request_id in self._entries:
            raise ValueError(f"Duplicate request id: {request_id}")
        future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
        self._entries[request_id] = future
        return future

    def resolve(self, frame: dict[str, Any]) -> bool:
        """Settle the future matching a response frame.

        Returns False when no entry exists (unknown or already timed out).
        """
        future = self._entries.pop(frame.get("id"), None)  # type: ignore[arg-type]
        if future is None:
            logger.debug("Ignoring response for unknown request id=%s", frame.get("id"))
            return False
        if future.done():
            return False
        if frame.get("ok"):
            future.set_result(frame.get("payload"))
        else:
            future.set_exception(GatewayRequestError.from_error(frame.get("error")))
        return True

    def discard(self, request_id: str) -> None:
        future = self._entries.pop(request_id, None)
        if future is not None and not future.done():
            future.cancel()

    async def wait(self, request_id: str, future: asyncio.Future[Any], timeout: float, *, method: str = "") -> Any:
        """Await a registered future, removing its entry on any outcome."""
        try:
            return await asyncio.wait_for(future, timeout)
        except asyncio.TimeoutError as exc:
            raise GatewayRequestTimeout(method=method, request_id=request_id) from exc
        finally:
            self._entries.pop(request_id, None)


__all__ = ["PendingRequests"]
