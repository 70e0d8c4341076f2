"""Base error class shared by both session clients."""

from __future__ import annotations


class ClawConnectError(Exception):
    """Base class for all clawconnect errors."""


__all__ = ["ClawConnectError"]
