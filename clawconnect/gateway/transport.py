"""WebSocket transport helpers for the gateway client."""

from __future__ import annotations

import asyncio
from typing import Any
from collections.abc import Callable, Awaitable

import websockets

from ..session.reconnect import DropInfo
from ..config.websocket import WS_MAX_FRAME_BYTES, WS_OPEN_TIMEOUT_S, WS_CLOSE_TIMEOUT_S, WS_CLOSE_NORMAL_CODE

ABNORMAL_CLOSE_CODE = 1006

# Failures raised while opening the socket
OPEN_ERRORS: tuple[type[BaseException], ...] = (
    OSError,
    TimeoutError,
    asyncio.TimeoutError,
    websockets.InvalidURI,
    websockets.InvalidHandshake,
)

ConnectFn = Callable[[str], Awaitable[Any]]


async def open_gateway_socket(url: str) -> Any:
    """Open the gateway socket with the configured timeouts."""
    return await websockets.connect(
        url,
        open_timeout=WS_OPEN_TIMEOUT_S,
        close_timeout=WS_CLOSE_TIMEOUT_S,
        max_size=WS_MAX_FRAME_BYTES,
    )


def drop_from_closed(exc: websockets.ConnectionClosed) -> DropInfo:
    """Classify a closed connection.

    A close frame received from the peer is a clean close whatever its code;
    a connection lost without one (1006) counts as an error.
    """
    rcvd = exc.rcvd
    if rcvd is None:
        return DropInfo(clean=False, had_error=True, code=ABNORMAL_CLOSE_CODE, reason=str(exc))
    return DropInfo(clean=True, code=rcvd.code, reason=rcvd.reason)


def drop_from_open_error(exc: BaseException) -> DropInfo:
    return DropInfo(clean=False, had_error=True, code=ABNORMAL_CLOSE_CODE, reason=str(exc) or type(exc).__name__)


CLEAN_DROP = DropInfo(clean=True, code=WS_CLOSE_NORMAL_CODE)


__all__ = [
    "ABNORMAL_CLOSE_CODE",
    "CLEAN_DROP",
    "ConnectFn",
    "OPEN_ERRORS",
    "open_gateway_socket",
    "drop_from_closed",
    "drop_from_open_error",
]
