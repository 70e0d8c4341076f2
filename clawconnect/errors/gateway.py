"""Gateway protocol error base.

Every failure a caller of `GatewaySessionClient.request()` can observe is a
`GatewayError`:

- GatewayNotConnectedError: the request was refused locally because the
  handshake has not completed (the network is never touched).
- GatewayRequestTimeout: no response frame arrived within the timeout.
- GatewayRequestError: the gateway answered with `ok: false`.
- HandshakeError: the `connect` request was rejected or never answered.
"""

from __future__ import annotations

from .base import ClawConnectError


class GatewayError(ClawConnectError):
    """Base class for gateway session failures."""


__all__ = ["GatewayError"]
