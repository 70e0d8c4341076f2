"""WebSocket transport configuration values.

Timeouts:
    WS_OPEN_TIMEOUT_S: Max time to wait for the opening handshake.
    WS_CLOSE_TIMEOUT_S: Max time to wait for the closing handshake.

Close Codes (RFC 6455):
    1000: Normal closure (client requested)
    1011: Internal error (proxy target failed)
"""

from __future__ import annotations

import os

WS_OPEN_TIMEOUT_S = float(os.getenv("WS_OPEN_TIMEOUT_S", "10"))
WS_CLOSE_TIMEOUT_S = float(os.getenv("WS_CLOSE_TIMEOUT_S", "3"))
WS_MAX_FRAME_BYTES = int(os.getenv("WS_MAX_FRAME_BYTES", str(4 * 1024 * 1024)))

WS_CLOSE_NORMAL_CODE = int(os.getenv("WS_CLOSE_NORMAL_CODE", "1000"))
WS_CLOSE_INTERNAL_ERROR_CODE = int(os.getenv("WS_CLOSE_INTERNAL_ERROR_CODE", "1011"))

__all__ = [
    "WS_OPEN_TIMEOUT_S",
    "WS_CLOSE_TIMEOUT_S",
    "WS_MAX_FRAME_BYTES",
    "WS_CLOSE_NORMAL_CODE",
    "WS_CLOSE_INTERNAL_ERROR_CODE",
]
