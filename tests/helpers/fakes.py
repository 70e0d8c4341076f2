"""Fakes for the gateway socket and the remote viewer.

`FakeGatewaySocket` stands in for a `websockets` client connection: frames
pushed with `push_*()` are yielded by `async for`, frames the client sends
are decoded into `sent`. `FakeConnector` is the `connect_fn` handed to
`GatewaySessionClient` and records one socket per connection attempt.
"""

from __future__ import annotations

import json
import asyncio
from typing import Any
from collections import defaultdict
from collections.abc import Callable

import websockets
from websockets.frames import Close

_END = object()
_DROP = object()


async def wait_until(predicate: Callable[[], Any], timeout: float = 1.0) -> None:
    """Yield to the loop until `predicate()` holds."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not reached in time")
        await asyncio.sleep(0.001)


async def settle(rounds: int = 10) -> None:
    for _ in range(rounds):
        await asyncio.sleep(0)


class FakeGatewaySocket:
    def __init__(self) -> None:
        self.sent: list[dict[str, Any]] = []
        self.closed = False
        self._incoming: asyncio.Queue[Any] = asyncio.Queue()
        self._consumed: set[str] = set()

    # Inbound -----------------------------------------------------------
    def push(self, frame: dict[str, Any] | str) -> None:
        self._incoming.put_nowait(json.dumps(frame) if isinstance(frame, dict) else frame)

    def push_event(self, event: str, payload: Any = None) -> None:
        frame: dict[str, Any] = {"type": "event", "event": event}
        if payload is not None:
            frame["payload"] = payload
        self.push(frame)

    def push_response(self, request_id: str, payload: Any = None, *, ok: bool = True, error: Any = None) -> None:
        frame: dict[str, Any] = {"type": "res", "id": request_id, "ok": ok}
        if payload is not None:
            frame["payload"] = payload
        if error is not None:
            frame["error"] = error
        self.push(frame)

    def drop(self) -> None:
        """Lose the connection without a close frame."""
        self._incoming.put_nowait(_DROP)

    def finish(self) -> None:
        """Close cleanly from the server side."""
        self._incoming.put_nowait(_END)

    # Outbound ----------------------------------------------------------
    async def send(self, data: str) -> None:
        if self.closed:
            close = Close(1000, "")
            raise websockets.ConnectionClosedOK(close, close, True)
        self.sent.append(json.loads(data))

    def requests(self, method: str) -> list[dict[str, Any]]:
        return [frame for frame in self.sent if frame.get("method") == method]

    async def next_request(self, method: str, timeout: float = 1.0) -> dict[str, Any]:
        """Wait for the next unseen request frame for `method`."""

        def _pending() -> list[dict[str, Any]]:
            return [frame for frame in self.requests(method) if frame["id"] not in self._consumed]

        await wait_until(_pending, timeout)
        frame = _pending()[0]
        self._consumed.add(frame["id"])
        return frame

    async def close(self) -> None:
        self.closed = True
        self._incoming.put_nowait(_END)

    # Iteration ---------------------------------------------------------
    def __aiter__(self) -> FakeGatewaySocket:
        return self

    async def __anext__(self) -> str:
        item = await self._incoming.get()
        if item is _END:
            raise StopAsyncIteration
        if item is _DROP:
            self.closed = True
            raise websockets.ConnectionClosedError(None, None)
        return item


class FakeConnector:
    """`connect_fn` returning a fresh fake socket per attempt."""

    def __init__(self) -> None:
        self.urls: list[str] = []
        self.sockets: list[FakeGatewaySocket] = []
        self.failures: list[BaseException] = []

    async def __call__(self, url: str) -> FakeGatewaySocket:
        self.urls.append(url)
        if self.failures:
            raise self.failures.pop(0)
        ws = FakeGatewaySocket()
        self.sockets.append(ws)
        return ws

    @property
    def latest(self) -> FakeGatewaySocket:
        return self.sockets[-1]


HANDSHAKE_OK = {"snapshot": {"session": {"mainSessionKey": "abc"}}}


async def complete_handshake(
    client: Any, connector: FakeConnector, result: Any = None, *, socket_number: int | None = None
) -> FakeGatewaySocket:
    """Drive challenge -> connect -> ok on one of the connector's sockets.

    `socket_number` is 1-based and defaults to the first socket.
    """
    number = socket_number or 1
    await wait_until(lambda: len(connector.sockets) >= number)
    ws = connector.sockets[number - 1]
    ws.push_event("connect.challenge", {"nonce": f"n-{number}"})
    request = await ws.next_request("connect")
    ws.push_response(request["id"], HANDSHAKE_OK if result is None else result)
    await wait_until(lambda: client.is_connected)
    return ws


async def connected_gateway(client: Any, connector: FakeConnector, config: Any) -> FakeGatewaySocket:
    """Connect `client`, finish the handshake and answer the history load empty."""
    socket_number = len(connector.sockets) + 1
    client.connect(config)
    ws = await complete_handshake(client, connector, socket_number=socket_number)
    history = await ws.next_request("chat.history")
    ws.push_response(history["id"], {"messages": []})
    await wait_until(lambda: client.pending_requests == 0)
    return ws


class FakeViewer:
    def __init__(self, target: Any, url: str, *, credentials: dict[str, str] | None = None) -> None:
        self.target = target
        self.url = url
        self.credentials = credentials
        self.listeners: dict[str, list[Callable[[dict[str, Any]], None]]] = defaultdict(list)
        self.sent_credentials: list[dict[str, str]] = []
        self.disconnected = False
        self.ctrl_alt_del = 0
        self.scale_viewport: bool | None = None
        self.resize_session: bool | None = None
        self.clip_viewport: bool | None = None
        self.show_dot_cursor: bool | None = None
        self.background: str | None = None

    def add_event_listener(self, name: str, callback: Callable[[dict[str, Any]], None]) -> None:
        self.listeners[name].append(callback)

    def fire(self, name: str, **detail: Any) -> None:
        for callback in list(self.listeners[name]):
            callback(detail)

    def send_credentials(self, credentials: dict[str, str]) -> None:
        self.sent_credentials.append(dict(credentials))

    def send_ctrl_alt_del(self) -> None:
        self.ctrl_alt_del += 1

    def disconnect(self) -> None:
        self.disconnected = True


class FakeViewerFactory:
    def __init__(self) -> None:
        self.viewers: list[FakeViewer] = []

    def __call__(self, target: Any, url: str, *, credentials: dict[str, str] | None = None) -> FakeViewer:
        viewer = FakeViewer(target, url, credentials=credentials)
        self.viewers.append(viewer)
        return viewer

    @property
    def latest(self) -> FakeViewer:
        return self.viewers[-1]


__all__ = [
    "FakeConnector",
    "FakeGatewaySocket",
    "FakeViewer",
    "FakeViewerFactory",
    "HANDSHAKE_OK",
    "complete_handshake",
    "connected_gateway",
    "settle",
    "wait_until",
]
