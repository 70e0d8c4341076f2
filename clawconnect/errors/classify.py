"""Exception classification helpers for metrics and telemetry labels."""

from __future__ import annotations

from .frames import FrameParseError
from .timeout import GatewayRequestTimeout
from .request import GatewayRequestError
from .security import SecurityFailureError
from .handshake import HandshakeError
from .viewer_load import ViewerLoadError
from .credentials import CredentialsRequiredError
from .not_connected import GatewayNotConnectedError

ERROR_CATEGORIES: tuple[tuple[type[BaseException], str], ...] = (
    (HandshakeError, "handshake"),
    (GatewayRequestTimeout, "timeout"),
    (GatewayRequestError, "request_rejected"),
    (GatewayNotConnectedError, "not_connected"),
    (CredentialsRequiredError, "credentials_required"),
    (SecurityFailureError, "security_failure"),
    (ViewerLoadError, "viewer_load"),
    (FrameParseError, "frame_parse"),
    (TimeoutError, "timeout"),
    (ConnectionError, "connection"),
    (OSError, "transport"),
)


def classify_error(exc: BaseException) -> str:
    """Map an exception to a metric-friendly category label."""

    for cls, label in ERROR_CATEGORIES:
        if isinstance(exc, cls):
            return label
    return "unknown"


__all__ = ["ERROR_CATEGORIES", "classify_error"]
