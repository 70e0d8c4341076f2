"""Unit tests for drop classification, reconnection and teardown."""

from __future__ import annotations

import asyncio

import websockets
from websockets.frames import Close

from clawconnect.gateway import ConnectionConfig, GatewaySessionClient
from clawconnect.gateway.transport import drop_from_closed, drop_from_open_error
from clawconnect.session import BackoffPolicy, ConnectionStatus
from tests.helpers.fakes import FakeConnector, settle, wait_until, complete_handshake, connected_gateway

CONFIG = ConnectionConfig(url="ws://gateway.test:18789")
FAST = BackoffPolicy(max_attempts=2, base_delay_s=0.01, max_delay_s=0.02)


def _client(connector: FakeConnector) -> GatewaySessionClient:
    return GatewaySessionClient(connect_fn=connector, policy=FAST)


def test_close_without_frame_is_unclean_error() -> None:
    drop = drop_from_closed(websockets.ConnectionClosedError(None, None))
    assert (drop.clean, drop.had_error, drop.code) == (False, True, 1006)


def test_close_frame_is_clean_whatever_the_code() -> None:
    close = Close(1011, "internal error")
    drop = drop_from_closed(websockets.ConnectionClosedError(close, None))
    assert (drop.clean, drop.had_error, drop.code, drop.reason) == (True, False, 1011, "internal error")


def test_open_failure_is_unclean_error() -> None:
    drop = drop_from_open_error(ConnectionRefusedError())
    assert (drop.clean, drop.had_error, drop.code) == (False, True, 1006)
    assert drop.reason == "ConnectionRefusedError"


def test_unclean_drop_reconnects_and_resets_attempts() -> None:
    async def _run() -> tuple[list[ConnectionStatus], int, int]:
        connector = FakeConnector()
        client = _client(connector)
        statuses: list[ConnectionStatus] = []
        await connected_gateway(client, connector, CONFIG)
        client.connection_status.subscribe(statuses.append)

        connector.latest.drop()
        await wait_until(lambda: len(connector.sockets) == 2)
        attempts_during = client.reconnect.attempts
        await complete_handshake(client, connector, socket_number=2)
        attempts_after = client.reconnect.attempts
        await client.aclose()
        return statuses, attempts_during, attempts_after

    statuses, attempts_during, attempts_after = asyncio.run(_run())
    assert statuses[:3] == [ConnectionStatus.ERROR, ConnectionStatus.CONNECTING, ConnectionStatus.CONNECTED]
    assert attempts_during == 1
    assert attempts_after == 0


def test_drop_clears_typing_and_streaming() -> None:
    async def _run() -> tuple[bool, bool, str]:
        connector = FakeConnector()
        client = _client(connector)
        ws = await connected_gateway(client, connector, CONFIG)
        client.is_typing.set(True)
        ws.push_event("chat", {"runId": "r", "state": "delta", "message": {"content": "par"}})
        await wait_until(lambda: client.messages.find("r") is not None)
        ws.drop()
        await wait_until(lambda: not client.messages.find("r").is_streaming)
        entry = client.messages.find("r")
        result = client.is_typing.value, entry.is_streaming, entry.content
        await client.aclose()
        return result

    assert asyncio.run(_run()) == (False, False, "par")


def test_open_failures_exhaust_into_error() -> None:
    async def _run() -> tuple[int, ConnectionStatus, bool]:
        connector = FakeConnector()
        connector.failures = [ConnectionRefusedError("refused") for _ in range(3)]
        client = _client(connector)
        client.connect(CONFIG)
        await wait_until(lambda: len(connector.urls) == 3)
        await wait_until(lambda: not client.reconnect.pending)
        await asyncio.sleep(0.05)
        result = len(connector.urls), client.connection_status.value, client.reconnect.pending
        await client.aclose()
        return result

    attempts, status, pending = asyncio.run(_run())
    assert attempts == 3
    assert status is ConnectionStatus.ERROR
    assert pending is False


def test_clean_close_does_not_reconnect() -> None:
    async def _run() -> tuple[ConnectionStatus, int, bool]:
        connector = FakeConnector()
        client = _client(connector)
        ws = await connected_gateway(client, connector, CONFIG)
        ws.finish()
        await wait_until(lambda: client.connection_status.value is ConnectionStatus.DISCONNECTED)
        await asyncio.sleep(0.05)
        result = client.connection_status.value, len(connector.urls), client.reconnect.pending
        await client.aclose()
        return result

    assert asyncio.run(_run()) == (ConnectionStatus.DISCONNECTED, 1, False)


def test_disconnect_keeps_transcript_and_stops_reconnecting() -> None:
    async def _run() -> tuple[list[tuple[str, bool]], ConnectionStatus, bool, int]:
        connector = FakeConnector()
        client = _client(connector)
        ws = await connected_gateway(client, connector, CONFIG)
        ws.push_event("chat", {"runId": "r", "state": "delta", "message": {"content": "half"}})
        await wait_until(lambda: len(client.messages) == 1)

        await client.aclose()
        ws.drop()
        await asyncio.sleep(0.05)
        entries = [(m.content, m.is_streaming) for m in client.messages]
        return entries, client.connection_status.value, ws.closed, len(connector.urls)

    entries, status, closed, attempts = asyncio.run(_run())
    assert entries == [("half", False)]
    assert status is ConnectionStatus.DISCONNECTED
    assert closed is True
    assert attempts == 1


def test_frames_from_superseded_socket_are_ignored() -> None:
    async def _run() -> tuple[list[str], bool, int]:
        connector = FakeConnector()
        client = _client(connector)
        old = await connected_gateway(client, connector, CONFIG)
        generation = client.generation

        new = await connected_gateway(client, connector, CONFIG)
        old.push_event("chat", {"message": {"content": "stale"}})
        new.push_event("chat", {"message": {"content": "fresh"}})
        await wait_until(lambda: len(client.messages) == 1)
        await settle()
        result = [m.content for m in client.messages], old.closed, client.generation - generation
        await client.aclose()
        return result

    contents, old_closed, advanced = asyncio.run(_run())
    assert contents == ["fresh"]
    assert old_closed is True
    assert advanced >= 1


def test_stale_close_does_not_touch_new_session() -> None:
    async def _run() -> tuple[ConnectionStatus, int]:
        connector = FakeConnector()
        client = _client(connector)
        old = await connected_gateway(client, connector, CONFIG)
        await connected_gateway(client, connector, CONFIG)
        old.drop()
        await asyncio.sleep(0.05)
        result = client.connection_status.value, len(connector.urls)
        await client.aclose()
        return result

    assert asyncio.run(_run()) == (ConnectionStatus.CONNECTED, 2)
