"""Unit tests for log context fields and no-op telemetry."""

from __future__ import annotations

import logging

import pytest

from clawconnect.errors import GatewayRequestError, SecurityFailureError
from clawconnect.logging import log_context, install_log_context
from clawconnect.telemetry import get_metrics, request_span, session_span, capture_error, add_breadcrumb


def test_log_records_carry_context(caplog: pytest.LogCaptureFixture) -> None:
    install_log_context()
    logger = logging.getLogger("clawconnect.tests")

    with caplog.at_level(logging.INFO, logger="clawconnect.tests"):
        with log_context(session_generation=7, client_id="cli"):
            with log_context(request_id="req-1"):
                logger.info("inside")
        logger.info("outside")

    inside, outside = caplog.records
    assert (inside.session_generation, inside.request_id, inside.client_id) == ("7", "req-1", "cli")
    assert (outside.session_generation, outside.request_id, outside.client_id) == ("-", "-", "-")


def test_telemetry_is_safe_without_backends() -> None:
    metrics = get_metrics()
    metrics.errors_total.add(1, {"client": "gateway", "category": "unknown"})
    metrics.active_sessions.add(1, {"client": "gateway"})
    metrics.request_latency.record(0.1, {"method": "connect"})

    with session_span(client="gateway", generation=1, url="ws://h:1"):
        with request_span(request_id="r-1", method="connect"):
            add_breadcrumb("hello", category="gateway")
            capture_error(RuntimeError("not reported"), session_generation=1)

    assert get_metrics() is metrics


def test_request_span_propagates_gateway_rejections() -> None:
    with pytest.raises(GatewayRequestError) as info:
        with request_span(request_id="r-2", method="chat.send"):
            raise GatewayRequestError("BUSY", "try later")
    assert info.value.code == "BUSY"


def test_count_error_uses_error_category() -> None:
    get_metrics().count_error("remote", SecurityFailureError("denied"))
