"""WebSocket-to-TCP viewer proxy configuration values."""

import os


PROXY_LISTEN_HOST = os.getenv("PROXY_LISTEN_HOST", "0.0.0.0")
PROXY_LISTEN_PORT = int(os.getenv("PROXY_LISTEN_PORT", "6080"))
PROXY_TARGET = os.getenv("PROXY_TARGET", "localhost:5900")
PROXY_SUBPROTOCOL = os.getenv("PROXY_SUBPROTOCOL", "binary")
PROXY_READ_CHUNK_BYTES = int(os.getenv("PROXY_READ_CHUNK_BYTES", "65536"))


__all__ = [
    "PROXY_LISTEN_HOST",
    "PROXY_LISTEN_PORT",
    "PROXY_TARGET",
    "PROXY_SUBPROTOCOL",
    "PROXY_READ_CHUNK_BYTES",
]
