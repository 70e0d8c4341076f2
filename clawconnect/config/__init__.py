"""Aggregator of configuration modules.

This module re-exports the config API from smaller modules:
- gateway: protocol version, client identity, request timeouts, transcript size
- reconnect: backoff budgets for both session clients
- remote: remote viewer defaults and credential labels
- websocket: transport timeouts and close codes
- proxy: viewer proxy listen/target settings
- logging: log level and format

Telemetry settings live in `config.telemetry` and are imported directly by
the telemetry package. Functions live in clawconnect/helpers/.
"""

from .gateway import (
    GATEWAY_PROTOCOL_VERSION,
    GATEWAY_CLIENT_ID,
    GATEWAY_CLIENT_DISPLAY_NAME,
    GATEWAY_CLIENT_VERSION,
    GATEWAY_CLIENT_PLATFORM,
    GATEWAY_CLIENT_MODE,
    GATEWAY_ROLE,
    GATEWAY_SCOPES,
    GATEWAY_REQUEST_TIMEOUT_S,
    GATEWAY_REQUEST_ID_PREFIX,
    GATEWAY_DEFAULT_SESSION_KEY,
    GATEWAY_HISTORY_LIMIT,
    TRANSCRIPT_MAX_MESSAGES,
    GATEWAY_DEFAULT_HOST,
    GATEWAY_DEFAULT_PORT,
    GATEWAY_DEFAULT_SECURE_PORT,
    GATEWAY_AUTH_TOKEN,
    GATEWAY_AUTH_PASSWORD,
)
from .reconnect import (
    GATEWAY_RECONNECT_MAX_ATTEMPTS,
    GATEWAY_RECONNECT_BASE_DELAY_S,
    GATEWAY_RECONNECT_MAX_DELAY_S,
    REMOTE_RECONNECT_MAX_ATTEMPTS,
    REMOTE_RECONNECT_BASE_DELAY_S,
    REMOTE_RECONNECT_MAX_DELAY_S,
)
from .remote import (
    REMOTE_DEFAULT_PORT,
    REMOTE_VIEWER_FACTORY,
    REMOTE_USERNAME_LABEL,
    REMOTE_PASSWORD_LABEL,
    REMOTE_DEFAULT_FAILURE_REASON,
    REMOTE_SCALE_VIEWPORT,
    REMOTE_VIEWER_BACKGROUND,
)
from .websocket import (
    WS_OPEN_TIMEOUT_S,
    WS_CLOSE_TIMEOUT_S,
    WS_MAX_FRAME_BYTES,
    WS_CLOSE_NORMAL_CODE,
    WS_CLOSE_INTERNAL_ERROR_CODE,
)
from .proxy import (
    PROXY_LISTEN_HOST,
    PROXY_LISTEN_PORT,
    PROXY_TARGET,
    PROXY_SUBPROTOCOL,
    PROXY_READ_CHUNK_BYTES,
)
from .logging import APP_LOG_LEVEL, APP_LOG_FORMAT, APP_LOG_DATEFMT

__all__ = [
    # gateway
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
    # reconnect
    "GATEWAY_RECONNECT_MAX_ATTEMPTS",
    "GATEWAY_RECONNECT_BASE_DELAY_S",
    "GATEWAY_RECONNECT_MAX_DELAY_S",
    "REMOTE_RECONNECT_MAX_ATTEMPTS",
    "REMOTE_RECONNECT_BASE_DELAY_S",
    "REMOTE_RECONNECT_MAX_DELAY_S",
    # remote
    "REMOTE_DEFAULT_PORT",
    "REMOTE_VIEWER_FACTORY",
    "REMOTE_USERNAME_LABEL",
    "REMOTE_PASSWORD_LABEL",
    "REMOTE_DEFAULT_FAILURE_REASON",
    "REMOTE_SCALE_VIEWPORT",
    "REMOTE_VIEWER_BACKGROUND",
    # websocket
    "WS_OPEN_TIMEOUT_S",
    "WS_CLOSE_TIMEOUT_S",
    "WS_MAX_FRAME_BYTES",
    "WS_CLOSE_NORMAL_CODE",
    "WS_CLOSE_INTERNAL_ERROR_CODE",
    # proxy
    "PROXY_LISTEN_HOST",
    "PROXY_LISTEN_PORT",
    "PROXY_TARGET",
    "PROXY_SUBPROTOCOL",
    "PROXY_READ_CHUNK_BYTES",
    # logging
    "APP_LOG_LEVEL",
    "APP_LOG_FORMAT",
    "APP_LOG_DATEFMT",
]
