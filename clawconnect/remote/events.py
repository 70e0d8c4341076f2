"""Events a remote viewer dispatches to its listeners."""

from __future__ import annotations

from enum import Enum


class ViewerEvent(str, Enum):
    """Event names, with the `detail` keys each carries."""

    CONNECT = "connect"
    DISCONNECT = "disconnect"  # clean: bool
    CREDENTIALS_REQUIRED = "credentialsrequired"  # types: list[str]
    SECURITY_FAILURE = "securityfailure"  # reason: str


__all__ = ["ViewerEvent"]
