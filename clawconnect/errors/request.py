"""Gateway rejection of a request (`ok: false` response)."""

from __future__ import annotations

from typing import Any

from .gateway import GatewayError


class GatewayRequestError(GatewayError):
    """Raised when the gateway rejects a request (`ok: false`)."""

    def __init__(self, code: str, message: str, *, details: Any = None) -> None:
        self.code = code
        self.message = message
        self.details = details
        super().__init__(message)

    @classmethod
    def from_error(cls, error: Any) -> GatewayRequestError:
        """Build from the `error` object of a response frame."""
        if not isinstance(error, dict):
            return cls("UNKNOWN", "Unknown error")
        code = str(error.get("code") or "UNKNOWN")
        message = error.get("message")
        if not isinstance(message, str) or not message:
            message = "Unknown error"
        return cls(code, message, details=error.get("details"))

    def __repr__(self) -> str:
        return f"GatewayRequestError(code={self.code!r}, message={self.message!r})"


__all__ = ["GatewayRequestError"]
