"""Remote viewer session error base."""

from __future__ import annotations

from .base import ClawConnectError


class RemoteSessionError(ClawConnectError):
    """Base class for remote viewer session failures."""


__all__ = ["RemoteSessionError"]
