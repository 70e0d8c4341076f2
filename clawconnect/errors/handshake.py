"""Failed `connect` handshake."""

from __future__ import annotations

from .gateway import GatewayError


class HandshakeError(GatewayError):
    """Raised when the `connect` handshake does not succeed."""

    def __init__(self, message: str, *, cause_code: str | None = None) -> None:
        self.cause_code = cause_code
        super().__init__(message)


__all__ = ["HandshakeError"]
