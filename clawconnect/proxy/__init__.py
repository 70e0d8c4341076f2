"""WebSocket-to-TCP bridge used as the viewer transport."""

from .bridge import bridge, run_proxy, serve_proxy, select_subprotocol

__all__ = ["bridge", "run_proxy", "serve_proxy", "select_subprotocol"]
