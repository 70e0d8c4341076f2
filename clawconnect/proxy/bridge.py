"""WebSocket-to-TCP bridge for the viewer transport.

Viewers speak RFB inside binary WebSocket frames; VNC servers speak raw TCP.
The bridge accepts WebSocket clients (negotiating the `binary` subprotocol
when offered) and pipes each one to its own TCP connection to the target:

    viewer  <-- ws frames -->  bridge  <-- tcp bytes -->  VNC server

A TCP failure closes the WebSocket with 1011; a WebSocket close ends the
TCP connection.
"""

from __future__ import annotations

import asyncio
import logging
import functools
import contextlib
from typing import Any
from collections.abc import Sequence

import websockets

from ..helpers.urls import parse_host_port
from ..telemetry import get_metrics
from ..config.websocket import WS_CLOSE_INTERNAL_ERROR_CODE
from ..config.proxy import (
    PROXY_TARGET,
    PROXY_LISTEN_HOST,
    PROXY_LISTEN_PORT,
    PROXY_SUBPROTOCOL,
    PROXY_READ_CHUNK_BYTES,
)

logger = logging.getLogger(__name__)

DEFAULT_VNC_PORT = 5900
TCP_ERROR_REASON = "VNC connection error"


def select_subprotocol(connection: Any, subprotocols: Sequence[str]) -> str | None:
    """Pick `binary` when the client offers it; otherwise proceed without one."""
    return PROXY_SUBPROTOCOL if PROXY_SUBPROTOCOL in subprotocols else None


async def _tcp_to_ws(reader: asyncio.StreamReader, websocket: Any) -> None:
    try:
        while chunk := await reader.read(PROXY_READ_CHUNK_BYTES):
            await websocket.send(chunk)
    except OSError as exc:
        logger.error("VNC connection error: %s", exc)
        get_metrics().count_error("proxy", exc)
        await websocket.close(code=WS_CLOSE_INTERNAL_ERROR_CODE, reason=TCP_ERROR_REASON)
        return
    except websockets.ConnectionClosed:
        logger.debug("WebSocket closed while forwarding VNC data")
        return
    logger.info("VNC connection ended")
    await websocket.close()


async def _ws_to_tcp(websocket: Any, writer: asyncio.StreamWriter) -> None:
    try:
        async for message in websocket:
            writer.write(message if isinstance(message, bytes) else message.encode())
            await writer.drain()
    except websockets.ConnectionClosed as exc:
        logger.info("WebSocket closed abnormally: %s", exc)
        return
    except OSError as exc:
        logger.error("VNC write failed: %s", exc)
        await websocket.close(code=WS_CLOSE_INTERNAL_ERROR_CODE, reason=TCP_ERROR_REASON)
        return
    logger.info("WebSocket closed (code=%s)", websocket.close_code)


async def bridge(websocket: Any, *, target_host: str, target_port: int) -> None:
    """Pipe one WebSocket client to a fresh TCP connection."""
    logger.info("WebSocket connected from %s", websocket.remote_address)
    try:
        reader, writer = await asyncio.open_connection(target_host, target_port)
    except OSError as exc:
        logger.error("TCP connection to %s:%s failed: %s", target_host, target_port, exc)
        get_metrics().count_error("proxy", exc)
        await websocket.close(code=WS_CLOSE_INTERNAL_ERROR_CODE, reason=TCP_ERROR_REASON)
        return
    logger.info("TCP connected to %s:%s", target_host, target_port)

    pumps = {
        asyncio.create_task(_tcp_to_ws(reader, websocket)),
        asyncio.create_task(_ws_to_tcp(websocket, writer)),
    }
    try:
        _done, pending = await asyncio.wait(pumps, return_when=asyncio.FIRST_COMPLETED)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
    finally:
        writer.close()
        with contextlib.suppress(OSError):
            await writer.wait_closed()


def serve_proxy(
    host: str = PROXY_LISTEN_HOST,
    port: int = PROXY_LISTEN_PORT,
    target: str = PROXY_TARGET,
) -> Any:
    """Create the bridge server; await it or use it as an async context manager."""
    target_host, target_port = parse_host_port(target, DEFAULT_VNC_PORT)
    handler = functools.partial(bridge, target_host=target_host, target_port=target_port)
    return websockets.serve(
        handler,
        host,
        port,
        select_subprotocol=select_subprotocol,
        max_size=None,
    )


async def run_proxy(
    host: str = PROXY_LISTEN_HOST,
    port: int = PROXY_LISTEN_PORT,
    target: str = PROXY_TARGET,
) -> None:
    """Serve until cancelled."""
    async with serve_proxy(host, port, target) as server:
        logger.info("Viewer proxy listening on %s:%s -> %s", host, port, target)
        await server.serve_forever()


__all__ = ["bridge", "select_subprotocol", "serve_proxy", "run_proxy", "DEFAULT_VNC_PORT"]
