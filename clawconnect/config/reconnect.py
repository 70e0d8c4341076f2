"""Reconnection backoff configuration for both session clients.

Delays follow `base * 2^(attempt - 1)` clamped to the max delay. With the
defaults the gateway waits 2, 4, 8, 16, 30 seconds and the remote viewer
waits 1, 2, 4, 8, 16 seconds before giving up.
"""

import os


GATEWAY_RECONNECT_MAX_ATTEMPTS = int(os.getenv("GATEWAY_RECONNECT_MAX_ATTEMPTS", "5"))
GATEWAY_RECONNECT_BASE_DELAY_S = float(os.getenv("GATEWAY_RECONNECT_BASE_DELAY_S", "2"))
GATEWAY_RECONNECT_MAX_DELAY_S = float(os.getenv("GATEWAY_RECONNECT_MAX_DELAY_S", "30"))

REMOTE_RECONNECT_MAX_ATTEMPTS = int(os.getenv("REMOTE_RECONNECT_MAX_ATTEMPTS", "5"))
REMOTE_RECONNECT_BASE_DELAY_S = float(os.getenv("REMOTE_RECONNECT_BASE_DELAY_S", "1"))
REMOTE_RECONNECT_MAX_DELAY_S = float(os.getenv("REMOTE_RECONNECT_MAX_DELAY_S", "16"))


__all__ = [
    "GATEWAY_RECONNECT_MAX_ATTEMPTS",
    "GATEWAY_RECONNECT_BASE_DELAY_S",
    "GATEWAY_RECONNECT_MAX_DELAY_S",
    "REMOTE_RECONNECT_MAX_ATTEMPTS",
    "REMOTE_RECONNECT_BASE_DELAY_S",
    "REMOTE_RECONNECT_MAX_DELAY_S",
]
