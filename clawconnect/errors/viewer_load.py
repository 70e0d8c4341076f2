"""Viewer implementation import failure."""

from __future__ import annotations

from .remote import RemoteSessionError


class ViewerLoadError(RemoteSessionError):
    """Raised when the viewer implementation cannot be imported."""


__all__ = ["ViewerLoadError"]
