"""Helper functions kept out of the declarative config modules."""

from .env import env_flag
from .urls import strip_host, ws_scheme, build_ws_url, parse_host_port, default_gateway_port

__all__ = [
    "env_flag",
    "strip_host",
    "ws_scheme",
    "build_ws_url",
    "parse_host_port",
    "default_gateway_port",
]
