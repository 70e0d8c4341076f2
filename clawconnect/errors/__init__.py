"""Centralized exception classes for clawconnect.

This module re-exports all domain-specific exceptions from their respective
modules, providing a single import point for error handling.

Organization:
    - base.py: ClawConnectError root class
    - gateway.py: GatewayError base for gateway session failures
    - not_connected.py, timeout.py, request.py, handshake.py: gateway errors
    - remote.py: RemoteSessionError base for remote viewer failures
    - viewer_load.py, credentials.py, security.py: remote viewer errors
    - frames.py: Inbound frame parsing errors
    - classify.py: Exception-to-telemetry label mapping
"""

from .base import ClawConnectError
from .classify import classify_error
from .frames import FrameParseError
from .gateway import GatewayError
from .timeout import GatewayRequestTimeout
from .request import GatewayRequestError
from .handshake import HandshakeError
from .not_connected import GatewayNotConnectedError
from .remote import RemoteSessionError
from .security import SecurityFailureError
from .viewer_load import ViewerLoadError
from .credentials import CredentialsRequiredError

__all__ = [
    "ClawConnectError",
    # Gateway
    "GatewayError",
    "GatewayNotConnectedError",
    "GatewayRequestTimeout",
    "GatewayRequestError",
    "HandshakeError",
    # Remote viewer
    "RemoteSessionError",
    "ViewerLoadError",
    "CredentialsRequiredError",
    "SecurityFailureError",
    # Frames
    "FrameParseError",
    # Classification
    "classify_error",
]
