"""OpenTelemetry providers for the session clients.

Traces and metrics are exported over OTLP/HTTP with a bearer token. The
resource identifies the client the same way the gateway handshake does, so a
session's spans can be matched with the gateway's own audit records.
"""

from __future__ import annotations

import os
import socket
import logging

from opentelemetry import trace, metrics
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter

from ..config.gateway import GATEWAY_CLIENT_ID, GATEWAY_CLIENT_MODE, GATEWAY_CLIENT_VERSION
from ..config.telemetry import (
    OTEL_ENVIRONMENT,
    OTEL_EXPORT_TOKEN,
    OTEL_SERVICE_NAME,
    OTEL_TRACES_ENDPOINT,
    OTEL_METRICS_ENDPOINT,
    OTEL_TRACES_BATCH_SIZE,
    OTEL_TRACES_EXPORT_INTERVAL_MS,
    OTEL_METRICS_EXPORT_INTERVAL_MS,
)

logger = logging.getLogger(__name__)

_tracer_provider: TracerProvider | None = None
_meter_provider: MeterProvider | None = None


def client_resource() -> Resource:
    """Resource describing this client process."""
    return Resource.create(
        {
            "service.name": OTEL_SERVICE_NAME,
            "service.version": GATEWAY_CLIENT_VERSION,
            "deployment.environment": OTEL_ENVIRONMENT,
            "host.name": socket.gethostname(),
            "process.pid": os.getpid(),
            "clawconnect.client.id": GATEWAY_CLIENT_ID,
            "clawconnect.client.mode": GATEWAY_CLIENT_MODE,
        }
    )


def _auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {OTEL_EXPORT_TOKEN}"}


def _start_tracing(resource: Resource) -> TracerProvider:
    exporter = OTLPSpanExporter(endpoint=OTEL_TRACES_ENDPOINT, headers=_auth_headers())
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(
        BatchSpanProcessor(
            exporter,
            max_export_batch_size=OTEL_TRACES_BATCH_SIZE,
            schedule_delay_millis=OTEL_TRACES_EXPORT_INTERVAL_MS,
        )
    )
    trace.set_tracer_provider(provider)
    return provider


def _start_metrics(resource: Resource) -> MeterProvider:
    reader = PeriodicExportingMetricReader(
        OTLPMetricExporter(endpoint=OTEL_METRICS_ENDPOINT, headers=_auth_headers()),
        export_interval_millis=OTEL_METRICS_EXPORT_INTERVAL_MS,
    )
    provider = MeterProvider(resource=resource, metric_readers=[reader])
    metrics.set_meter_provider(provider)
    return provider


def init_otel() -> None:
    """Register the global tracer and meter providers. Idempotent."""
    global _tracer_provider, _meter_provider  # noqa: PLW0603
    if _tracer_provider is not None:
        return
    resource = client_resource()
    _tracer_provider = _start_tracing(resource)
    _meter_provider = _start_metrics(resource)
    logger.info("OTel export enabled: traces=%s metrics=%s", OTEL_TRACES_ENDPOINT, OTEL_METRICS_ENDPOINT)


def shutdown_otel() -> None:
    """Flush pending spans and metric points, then stop both providers."""
    global _tracer_provider, _meter_provider  # noqa: PLW0603
    tracer_provider, _tracer_provider = _tracer_provider, None
    meter_provider, _meter_provider = _meter_provider, None
    # Short-lived CLI sessions end before the periodic reader fires
    for provider in (tracer_provider, meter_provider):
        if provider is None:
            continue
        provider.force_flush()
        provider.shutdown()


__all__ = ["client_resource", "init_otel", "shutdown_otel"]
