"""Unit tests for the pending request table."""

from __future__ import annotations

import asyncio

import pytest

from clawconnect.gateway import PendingRequests
from clawconnect.errors import GatewayRequestError, GatewayRequestTimeout


def test_ok_response_resolves_payload() -> None:
    async def _run() -> object:
        pending = PendingRequests()
        future = pending.register("r1")
        asyncio.get_running_loop().call_soon(pending.resolve, {"type": "res", "id": "r1", "ok": True, "payload": 7})
        result = await pending.wait("r1", future, 1.0)
        assert len(pending) == 0
        return result

    assert asyncio.run(_run()) == 7


def test_error_response_rejects_with_code_and_message() -> None:
    async def _run() -> None:
        pending = PendingRequests()
        future = pending.register("r1")
        pending.resolve({"type": "res", "id": "r1", "ok": False, "error": {"code": "E_BAD", "message": "bad"}})
        await pending.wait("r1", future, 1.0)

    with pytest.raises(GatewayRequestError) as exc_info:
        asyncio.run(_run())
    assert exc_info.value.code == "E_BAD"
    assert exc_info.value.message == "bad"


def test_missing_error_object_defaults_to_unknown() -> None:
    async def _run() -> None:
        pending = PendingRequests()
        future = pending.register("r1")
        pending.resolve({"type": "res", "id": "r1", "ok": False})
        await pending.wait("r1", future, 1.0)

    with pytest.raises(GatewayRequestError) as exc_info:
        asyncio.run(_run())
    assert exc_info.value.code == "UNKNOWN"
    assert str(exc_info.value) == "Unknown error"


def test_timeout_removes_entry_and_late_response_is_ignored() -> None:
    async def _run() -> PendingRequests:
        pending = PendingRequests()
        future = pending.register("r1")
        with pytest.raises(GatewayRequestTimeout) as exc_info:
            await pending.wait("r1", future, 0.01, method="chat.send")
        assert exc_info.value.method == "chat.send"
        assert "r1" not in pending
        assert pending.resolve({"type": "res", "id": "r1", "ok": True}) is False
        return pending

    assert len(asyncio.run(_run())) == 0


def test_duplicate_registration_rejected() -> None:
    async def _run() -> None:
        pending = PendingRequests()
        pending.register("r1")
        pending.register("r1")

    with pytest.raises(ValueError):
        asyncio.run(_run())
