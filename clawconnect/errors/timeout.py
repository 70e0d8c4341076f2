"""Unanswered gateway request."""

from __future__ import annotations

from .gateway import GatewayError


class GatewayRequestTimeout(GatewayError, TimeoutError):
    """Raised when a request is not answered in time."""

    def __init__(self, method: str = "", request_id: str = "", message: str = "Request timeout") -> None:
        self.method = method
        self.request_id = request_id
        super().__init__(message)


__all__ = ["GatewayRequestTimeout"]
