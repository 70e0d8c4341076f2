"""Credentials rejected by the remote."""

from __future__ import annotations

from .remote import RemoteSessionError


class SecurityFailureError(RemoteSessionError):
    """Raised when the remote rejects the supplied credentials."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Authentication failed: {reason}")


__all__ = ["SecurityFailureError"]
