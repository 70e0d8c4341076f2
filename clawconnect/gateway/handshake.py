"""The `connect` handshake request and its result."""

from __future__ import annotations

import logging
from typing import Any

from .models import ConnectionConfig
from ..config.gateway import (
    GATEWAY_ROLE,
    GATEWAY_SCOPES,
    GATEWAY_CLIENT_ID,
    GATEWAY_CLIENT_MODE,
    GATEWAY_CLIENT_VERSION,
    GATEWAY_CLIENT_PLATFORM,
    GATEWAY_PROTOCOL_VERSION,
    GATEWAY_DEFAULT_SESSION_KEY,
    GATEWAY_CLIENT_DISPLAY_NAME,
)

logger = logging.getLogger(__name__)

CONNECT_METHOD = "connect"


def build_connect_params(config: ConnectionConfig) -> dict[str, Any]:
    """Parameters of the `connect` request sent in answer to a challenge."""
    return {
        "minProtocol": GATEWAY_PROTOCOL_VERSION,
        "maxProtocol": GATEWAY_PROTOCOL_VERSION,
        "client": {
            "id": GATEWAY_CLIENT_ID,
            "displayName": GATEWAY_CLIENT_DISPLAY_NAME,
            "version": GATEWAY_CLIENT_VERSION,
            "platform": GATEWAY_CLIENT_PLATFORM,
            "mode": GATEWAY_CLIENT_MODE,
        },
        "role": GATEWAY_ROLE,
        "scopes": list(GATEWAY_SCOPES),
        "auth": config.auth_params(),
    }


def resolve_session_key(result: Any) -> str:
    """Session key from a handshake result.

    Looks at `snapshot.session.mainSessionKey`, then `snapshot.session.mainKey`.
    Older gateways send neither; those sessions fall back to the default key,
    which may also mean the gateway speaks a protocol version we don't.
    """
    session: Any = None
    if isinstance(result, dict):
        snapshot = result.get("snapshot")
        if isinstance(snapshot, dict):
            session = snapshot.get("session")
    if isinstance(session, dict):
        for key in ("mainSessionKey", "mainKey"):
            value = session.get(key)
            if isinstance(value, str) and value:
                return value
    logger.warning(
        "Handshake result carries no session key; falling back to %r (possible protocol mismatch)",
        GATEWAY_DEFAULT_SESSION_KEY,
    )
    return GATEWAY_DEFAULT_SESSION_KEY


__all__ = ["CONNECT_METHOD", "build_connect_params", "resolve_session_key"]
