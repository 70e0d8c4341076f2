"""Gateway value types: chat messages and connection configuration."""

from __future__ import annotations

import uuid
from typing import Any, Literal
from datetime import datetime, timezone
from dataclasses import field, replace, dataclass

from ..helpers.urls import build_ws_url, default_gateway_port

Role = Literal["user", "assistant", "system"]


def new_message_id() -> str:
    return str(uuid.uuid4())


def parse_timestamp(value: Any) -> datetime:
    """Best-effort timestamp parsing; falls back to now.

    Accepts datetimes, epoch milliseconds and ISO-8601 strings.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return datetime.now(timezone.utc)
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return datetime.now(timezone.utc)
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ChatMessage:
    """One transcript entry.

    Attributes:
        id: Message identifier. Chat events use their run id so successive
            updates land on the same entry.
        role: Normalized author role.
        content: Display text.
        timestamp: When the message was created (or reported by the gateway).
        is_streaming: True while further updates for this entry are expected.
    """

    id: str
    role: Role
    content: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    is_streaming: bool = False

    @classmethod
    def create(cls, role: Role, content: str, *, id: str | None = None, **kwargs: Any) -> ChatMessage:
        return cls(id=id or new_message_id(), role=role, content=content, **kwargs)

    def evolve(self, **changes: Any) -> ChatMessage:
        return replace(self, **changes)


@dataclass(frozen=True)
class ConnectionConfig:
    """Where and how to reach the gateway for one `connect()` call."""

    url: str
    auth_token: str | None = field(default=None, repr=False)
    auth_password: str | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if not self.url:
            raise ValueError("Gateway URL is required")

    @classmethod
    def from_host(
        cls,
        host: str,
        port: int | None = None,
        *,
        secure: bool = False,
        auth_token: str | None = None,
        auth_password: str | None = None,
    ) -> ConnectionConfig:
        """Build a config from a user-typed host, stripping any scheme."""
        resolved_port = port if port else default_gateway_port(secure)
        return cls(
            url=build_ws_url(host, resolved_port, secure=secure),
            auth_token=auth_token or None,
            auth_password=auth_password or None,
        )

    def auth_params(self) -> dict[str, str]:
        """The handshake `auth` object; empty values are omitted."""
        auth: dict[str, str] = {}
        if self.auth_token:
            auth["token"] = self.auth_token
        if self.auth_password:
            auth["password"] = self.auth_password
        return auth


__all__ = ["Role", "ChatMessage", "ConnectionConfig", "new_message_id", "parse_timestamp"]
