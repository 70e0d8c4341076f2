"""Remote viewer session value types."""

from __future__ import annotations

from typing import Literal
from dataclasses import field, dataclass

from ..helpers.urls import strip_host, build_ws_url
from ..config.remote import REMOTE_DEFAULT_PORT

StatusKind = Literal["success", "error", "info", "connecting"]


@dataclass(frozen=True)
class VncConfig:
    """Where and as whom to open a remote viewer session."""

    host: str
    port: int = REMOTE_DEFAULT_PORT
    username: str = ""
    password: str = field(default="", repr=False)
    secure: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "host", strip_host(self.host))
        if not self.host:
            raise ValueError("Host is required")

    @property
    def url(self) -> str:
        return build_ws_url(self.host, self.port, secure=self.secure)

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"

    def credentials(self) -> dict[str, str]:
        """Held credentials; empty values are omitted."""
        creds: dict[str, str] = {}
        if self.username:
            creds["username"] = self.username
        if self.password:
            creds["password"] = self.password
        return creds


__all__ = ["StatusKind", "VncConfig"]
