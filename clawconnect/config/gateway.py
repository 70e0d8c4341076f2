"""Gateway protocol and chat session configuration values.

Protocol:
    GATEWAY_PROTOCOL_VERSION: The single protocol version this client speaks.
        It is sent as both the minimum and maximum bound in the handshake.

Client identity:
    Values reported in the `client` block of the `connect` handshake request.
    The gateway uses them for its operator UI and audit logs.

Requests:
    GATEWAY_REQUEST_TIMEOUT_S: Pending requests are rejected after this many
        seconds without a matching response frame.
    GATEWAY_REQUEST_ID_PREFIX: Prefix of generated request identifiers.

Session:
    GATEWAY_DEFAULT_SESSION_KEY: Session key used when the handshake result
        carries neither `mainSessionKey` nor `mainKey`.
    GATEWAY_HISTORY_LIMIT: `limit` sent with `chat.history`.
    TRANSCRIPT_MAX_MESSAGES: Most recent messages kept in memory.
"""

from __future__ import annotations

import os

# ============================================================================
# Protocol
# ============================================================================

GATEWAY_PROTOCOL_VERSION = int(os.getenv("GATEWAY_PROTOCOL_VERSION", "3"))

# ============================================================================
# Client identity
# ============================================================================

GATEWAY_CLIENT_ID = os.getenv("GATEWAY_CLIENT_ID", "openclaw-control-ui")
GATEWAY_CLIENT_DISPLAY_NAME = os.getenv("GATEWAY_CLIENT_DISPLAY_NAME", "ClawConnect")
GATEWAY_CLIENT_VERSION = os.getenv("GATEWAY_CLIENT_VERSION", "1.0.0")
GATEWAY_CLIENT_PLATFORM = os.getenv("GATEWAY_CLIENT_PLATFORM", "web")
GATEWAY_CLIENT_MODE = os.getenv("GATEWAY_CLIENT_MODE", "ui")
GATEWAY_ROLE = os.getenv("GATEWAY_ROLE", "operator")
GATEWAY_SCOPES = tuple(
    scope.strip()
    for scope in os.getenv("GATEWAY_SCOPES", "operator.read,operator.write").split(",")
    if scope.strip()
)

# ============================================================================
# Requests
# ============================================================================

GATEWAY_REQUEST_TIMEOUT_S = float(os.getenv("GATEWAY_REQUEST_TIMEOUT_S", "30"))
GATEWAY_REQUEST_ID_PREFIX = os.getenv("GATEWAY_REQUEST_ID_PREFIX", "clawconnect")

# ============================================================================
# Session and transcript
# ============================================================================

GATEWAY_DEFAULT_SESSION_KEY = os.getenv("GATEWAY_DEFAULT_SESSION_KEY", "main")
GATEWAY_HISTORY_LIMIT = int(os.getenv("GATEWAY_HISTORY_LIMIT", "50"))
TRANSCRIPT_MAX_MESSAGES = int(os.getenv("TRANSCRIPT_MAX_MESSAGES", "50"))

# ============================================================================
# Addressing
# ============================================================================

GATEWAY_DEFAULT_HOST = os.getenv("GATEWAY_DEFAULT_HOST", "localhost")
GATEWAY_DEFAULT_PORT = int(os.getenv("GATEWAY_DEFAULT_PORT", "18789"))
GATEWAY_DEFAULT_SECURE_PORT = int(os.getenv("GATEWAY_DEFAULT_SECURE_PORT", "8443"))

# Credentials picked up by the CLI when no flag is given
GATEWAY_AUTH_TOKEN = os.getenv("GATEWAY_AUTH_TOKEN", "")
GATEWAY_AUTH_PASSWORD = os.getenv("GATEWAY_AUTH_PASSWORD", "")

__all__ = [
    "GATEWAY_PROTOCOL_VERSION",
    "GATEWAY_CLIENT_ID",
    "GATEWAY_CLIENT_DISPLAY_NAME",
    "GATEWAY_CLIENT_VERSION",
    "GATEWAY_CLIENT_PLATFORM",
    "GATEWAY_CLIENT_MODE",
    "GATEWAY_ROLE",
    "GATEWAY_SCOPES",
    "GATEWAY_REQUEST_TIMEOUT_S",
    "GATEWAY_REQUEST_ID_PREFIX",
    "GATEWAY_DEFAULT_SESSION_KEY",
    "GATEWAY_HISTORY_LIMIT",
    "TRANSCRIPT_MAX_MESSAGES",
    "GATEWAY_DEFAULT_HOST",
    "GATEWAY_DEFAULT_PORT",
    "GATEWAY_DEFAULT_SECURE_PORT",
    "GATEWAY_AUTH_TOKEN",
    "GATEWAY_AUTH_PASSWORD",
]
