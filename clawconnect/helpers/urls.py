"""WebSocket URL helpers shared by the gateway and remote clients.

Hosts typed by users often carry a scheme or a trailing slash
("wss://box.tailnet.ts.net/"). These helpers strip that decoration and
rebuild a `scheme://host:port` URL whose scheme follows the caller's
security context: `wss` when the hosting surface is itself secure,
`ws` otherwise.
"""

from __future__ import annotations

from ..config.gateway import GATEWAY_DEFAULT_PORT, GATEWAY_DEFAULT_SECURE_PORT

_SCHEME_PREFIXES = ("wss://", "ws://", "https://", "http://")


def strip_host(host: str) -> str:
    """Remove a leading scheme and trailing slashes from a host string."""
    clean = (host or "").strip()
    lowered = clean.lower()
    for prefix in _SCHEME_PREFIXES:
        if lowered.startswith(prefix):
            clean = clean[len(prefix):]
            break
    return clean.rstrip("/")


def ws_scheme(secure: bool) -> str:
    return "wss" if secure else "ws"


def build_ws_url(host: str, port: int, *, secure: bool = False) -> str:
    """Build `scheme://host:port` for a cleaned host."""
    clean = strip_host(host)
    if not clean:
        raise ValueError("Host is required")
    return f"{ws_scheme(secure)}://{clean}:{int(port)}"


def default_gateway_port(secure: bool) -> int:
    """Gateway port used when the caller does not pick one."""
    return GATEWAY_DEFAULT_SECURE_PORT if secure else GATEWAY_DEFAULT_PORT


def parse_host_port(target: str, default_port: int) -> tuple[str, int]:
    """Split "host:port" into its parts, falling back to `default_port`."""
    text = strip_host(target)
    host, sep, port = text.rpartition(":")
    if not sep:
        return text, default_port
    if not port.isdigit():
        raise ValueError(f"Invalid port in '{target}'")
    return host or "localhost", int(port)


__all__ = [
    "strip_host",
    "ws_scheme",
    "build_ws_url",
    "default_gateway_port",
    "parse_host_port",
]
