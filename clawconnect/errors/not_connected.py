"""Request refused before the gateway handshake completed."""

from __future__ import annotations

from .gateway import GatewayError


class GatewayNotConnectedError(GatewayError):
    """Raised when a request is issued before the handshake completed."""

    def __init__(self, message: str = "Not connected to Gateway") -> None:
        super().__init__(message)


__all__ = ["GatewayNotConnectedError"]
