"""Metric instruments shared by the gateway, remote and proxy code paths.

Every instrument is labelled with `client` (gateway | remote | proxy) except
the per-request ones, which carry the RPC `method` instead.
"""

from __future__ import annotations

import logging
from opentelemetry import metrics
from ..errors import classify_error
from ..config.telemetry import (
    OTEL_SERVICE_NAME,
    METRIC_ERRORS_TOTAL,
    METRIC_REQUESTS_TOTAL,
    METRIC_ACTIVE_SESSIONS,
    METRIC_REQUEST_LATENCY,
    METRIC_CONNECTION_DURATION,
    METRIC_FRAMES_DROPPED_TOTAL,
    METRIC_REQUEST_TIMEOUTS_TOTAL,
    METRIC_HANDSHAKE_FAILURES_TOTAL,
    METRIC_RECONNECT_ATTEMPTS_TOTAL,
    METRIC_RECONNECTS_EXHAUSTED_TOTAL,
)

logger = logging.getLogger(__name__)

# attribute -> (meter factory method, (name, unit, description))
_INSTRUMENT_SPECS: dict[str, tuple[str, tuple[str, str, str]]] = {
    "request_latency": ("create_histogram", METRIC_REQUEST_LATENCY),
    "connection_duration": ("create_histogram", METRIC_CONNECTION_DURATION),
    "requests_total": ("create_counter", METRIC_REQUESTS_TOTAL),
    "request_timeouts_total": ("create_counter", METRIC_REQUEST_TIMEOUTS_TOTAL),
    "reconnect_attempts_total": ("create_counter", METRIC_RECONNECT_ATTEMPTS_TOTAL),
    "reconnects_exhausted_total": ("create_counter", METRIC_RECONNECTS_EXHAUSTED_TOTAL),
    "handshake_failures_total": ("create_counter", METRIC_HANDSHAKE_FAILURES_TOTAL),
    "frames_dropped_total": ("create_counter", METRIC_FRAMES_DROPPED_TOTAL),
    "errors_total": ("create_counter", METRIC_ERRORS_TOTAL),
    "active_sessions": ("create_up_down_counter", METRIC_ACTIVE_SESSIONS),
}


class MetricInstruments:
    """Session metrics; one attribute per entry of the instrument table."""

    __slots__ = tuple(_INSTRUMENT_SPECS)

    request_latency: metrics.Histogram
    connection_duration: metrics.Histogram
    requests_total: metrics.Counter
    request_timeouts_total: metrics.Counter
    reconnect_attempts_total: metrics.Counter
    reconnects_exhausted_total: metrics.Counter
    handshake_failures_total: metrics.Counter
    frames_dropped_total: metrics.Counter
    errors_total: metrics.Counter
    active_sessions: metrics.UpDownCounter

    def __init__(self, meter: metrics.Meter) -> None:
        for attr, (factory, (name, unit, description)) in _INSTRUMENT_SPECS.items():
            setattr(self, attr, getattr(meter, factory)(name, unit=unit, description=description))

    def count_error(self, client: str, error: BaseException) -> None:
        self.errors_total.add(1, {"client": client, "category": classify_error(error)})


_metrics: MetricInstruments | None = None


def get_metrics() -> MetricInstruments:
    """Instruments bound to the global meter; no-op until OTel is initialized."""
    global _metrics  # noqa: PLW0603
    if _metrics is None:
        _metrics = MetricInstruments(metrics.get_meter(OTEL_SERVICE_NAME))
    return _metrics


def initialize_metrics() -> None:
    """Rebind the instruments after the exporting meter provider is installed."""
    global _metrics  # noqa: PLW0603
    _metrics = MetricInstruments(metrics.get_meter(OTEL_SERVICE_NAME))
    logger.info("Session metrics bound to %s", OTEL_SERVICE_NAME)


__all__ = ["MetricInstruments", "get_metrics", "initialize_metrics"]
