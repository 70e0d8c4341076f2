"""Unit tests for error types and their telemetry categories."""

from __future__ import annotations

import pytest

from clawconnect.errors import (
    HandshakeError,
    FrameParseError,
    ViewerLoadError,
    ClawConnectError,
    GatewayRequestError,
    SecurityFailureError,
    GatewayRequestTimeout,
    CredentialsRequiredError,
    GatewayNotConnectedError,
    classify_error,
)


def test_request_error_from_error_object() -> None:
    error = GatewayRequestError.from_error({"code": "RATE_LIMIT", "message": "slow down", "details": {"retry": 5}})
    assert (error.code, str(error), error.details) == ("RATE_LIMIT", "slow down", {"retry": 5})


@pytest.mark.parametrize("raw", [None, "oops", {"code": "X"}, {"message": ""}])
def test_request_error_defaults(raw: object) -> None:
    error = GatewayRequestError.from_error(raw)
    assert str(error) == "Unknown error"
    assert error.code in {"UNKNOWN", "X"}


def test_default_messages() -> None:
    assert str(GatewayNotConnectedError()) == "Not connected to Gateway"
    assert str(GatewayRequestTimeout(method="chat.send")) == "Request timeout"
    assert isinstance(GatewayRequestTimeout(), TimeoutError)


def test_remote_error_messages() -> None:
    assert str(CredentialsRequiredError(["Mac username"])) == "Authentication required - enter Mac username above"
    assert str(SecurityFailureError("bad")) == "Authentication failed: bad"


@pytest.mark.parametrize(
    ("exc", "label"),
    [
        (HandshakeError("no"), "handshake"),
        (GatewayRequestTimeout(), "timeout"),
        (GatewayRequestError("E", "m"), "request_rejected"),
        (GatewayNotConnectedError(), "not_connected"),
        (CredentialsRequiredError(["x"]), "credentials_required"),
        (SecurityFailureError("r"), "security_failure"),
        (ViewerLoadError("v"), "viewer_load"),
        (FrameParseError("f"), "frame_parse"),
        (ConnectionRefusedError(), "connection"),
        (OSError(), "transport"),
        (RuntimeError(), "unknown"),
    ],
)
def test_classify_error(exc: BaseException, label: str) -> None:
    assert classify_error(exc) == label


def test_all_errors_share_a_root() -> None:
    for cls in (HandshakeError, FrameParseError, ViewerLoadError, SecurityFailureError):
        assert issubclass(cls, ClawConnectError)
