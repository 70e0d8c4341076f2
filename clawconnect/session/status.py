"""Connection status vocabulary shared by both session clients."""

from __future__ import annotations

from enum import Enum


class ConnectionStatus(str, Enum):
    """Where a session currently stands, as shown to the user."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    ERROR = "error"


_STATUS_TEXT = {
    ConnectionStatus.CONNECTED: "Connected",
    ConnectionStatus.CONNECTING: "Connecting...",
    ConnectionStatus.DISCONNECTED: "Disconnected",
    ConnectionStatus.ERROR: "Error",
}


def describe_status(status: ConnectionStatus | str) -> str:
    """Short label for a status indicator."""
    try:
        return _STATUS_TEXT[ConnectionStatus(status)]
    except ValueError:
        return ""


__all__ = ["ConnectionStatus", "describe_status"]
