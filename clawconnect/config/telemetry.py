"""Telemetry configuration: env vars, metric specs, span names, Sentry constants."""

import os

# ---------------------------------------------------------------------------
# Sentry
# ---------------------------------------------------------------------------
SENTRY_DSN: str = os.getenv("SENTRY_DSN", "")
SENTRY_ENVIRONMENT: str = os.getenv("SENTRY_ENVIRONMENT", "production")
SENTRY_RELEASE: str = os.getenv("SENTRY_RELEASE", "")
SENTRY_SAMPLE_RATE: float = float(os.getenv("SENTRY_SAMPLE_RATE", "1.0"))

# ---------------------------------------------------------------------------
# OTLP export
# ---------------------------------------------------------------------------
OTEL_EXPORT_TOKEN: str = os.getenv("OTEL_EXPORT_TOKEN", "")
OTEL_TRACES_ENDPOINT: str = os.getenv("OTEL_TRACES_ENDPOINT", "http://localhost:4318/v1/traces")
OTEL_METRICS_ENDPOINT: str = os.getenv("OTEL_METRICS_ENDPOINT", "http://localhost:4318/v1/metrics")
OTEL_ENVIRONMENT: str = os.getenv("OTEL_ENVIRONMENT", "production")

# ---------------------------------------------------------------------------
# OTel tuning
# ---------------------------------------------------------------------------
OTEL_SERVICE_NAME: str = os.getenv("OTEL_SERVICE_NAME", "clawconnect")
OTEL_TRACES_EXPORT_INTERVAL_MS: int = int(os.getenv("OTEL_TRACES_EXPORT_INTERVAL_MS", "5000"))
OTEL_METRICS_EXPORT_INTERVAL_MS: int = int(os.getenv("OTEL_METRICS_EXPORT_INTERVAL_MS", "15000"))
OTEL_TRACES_BATCH_SIZE: int = int(os.getenv("OTEL_TRACES_BATCH_SIZE", "512"))

# ---------------------------------------------------------------------------
# Metric spec tuples: (name, unit, description)
# ---------------------------------------------------------------------------

# Histograms
METRIC_REQUEST_LATENCY = ("clawconnect.request_latency", "s", "Gateway request round-trip time")
METRIC_CONNECTION_DURATION = ("clawconnect.connection_duration", "s", "Connected session lifetime")

# Counters
METRIC_REQUESTS_TOTAL = ("clawconnect.requests_total", "{request}", "Gateway requests sent")
METRIC_REQUEST_TIMEOUTS_TOTAL = ("clawconnect.request_timeouts_total", "{request}", "Gateway requests timed out")
METRIC_RECONNECT_ATTEMPTS_TOTAL = (
    "clawconnect.reconnect_attempts_total",
    "{attempt}",
    "Scheduled reconnection attempts",
)
METRIC_RECONNECTS_EXHAUSTED_TOTAL = (
    "clawconnect.reconnects_exhausted_total",
    "{session}",
    "Reconnect budgets exhausted",
)
METRIC_HANDSHAKE_FAILURES_TOTAL = ("clawconnect.handshake_failures_total", "{handshake}", "Rejected handshakes")
METRIC_FRAMES_DROPPED_TOTAL = ("clawconnect.frames_dropped_total", "{frame}", "Unparseable frames dropped")
METRIC_ERRORS_TOTAL = ("clawconnect.errors_total", "{error}", "Session errors by category")

# UpDown counters
METRIC_ACTIVE_SESSIONS = ("clawconnect.active_sessions", "{session}", "Currently connected sessions")

# ---------------------------------------------------------------------------
# Span names
# ---------------------------------------------------------------------------
SPAN_SESSION = "clawconnect.session"
SPAN_REQUEST = "clawconnect.request"

# ---------------------------------------------------------------------------
# Sentry constants
# ---------------------------------------------------------------------------
SENTRY_RATE_LIMIT_S: float = 10.0
SENTRY_TAG_SESSION_GENERATION = "session_generation"
SENTRY_TAG_REQUEST_ID = "request_id"
SENTRY_TAG_CLIENT_ID = "client_id"


__all__ = [
    # Sentry env
    "SENTRY_DSN",
    "SENTRY_ENVIRONMENT",
    "SENTRY_RELEASE",
    "SENTRY_SAMPLE_RATE",
    # OTLP env
    "OTEL_EXPORT_TOKEN",
    "OTEL_TRACES_ENDPOINT",
    "OTEL_METRICS_ENDPOINT",
    "OTEL_ENVIRONMENT",
    # OTel tuning
    "OTEL_SERVICE_NAME",
    "OTEL_TRACES_EXPORT_INTERVAL_MS",
    "OTEL_METRICS_EXPORT_INTERVAL_MS",
    "OTEL_TRACES_BATCH_SIZE",
    # Histograms
    "METRIC_REQUEST_LATENCY",
    "METRIC_CONNECTION_DURATION",
    # Counters
    "METRIC_REQUESTS_TOTAL",
    "METRIC_REQUEST_TIMEOUTS_TOTAL",
    "METRIC_RECONNECT_ATTEMPTS_TOTAL",
    "METRIC_RECONNECTS_EXHAUSTED_TOTAL",
    "METRIC_HANDSHAKE_FAILURES_TOTAL",
    "METRIC_FRAMES_DROPPED_TOTAL",
    "METRIC_ERRORS_TOTAL",
    # UpDown counters
    "METRIC_ACTIVE_SESSIONS",
    # Span names
    "SPAN_SESSION",
    "SPAN_REQUEST",
    # Sentry constants
    "SENTRY_RATE_LIMIT_S",
    "SENTRY_TAG_SESSION_GENERATION",
    "SENTRY_TAG_REQUEST_ID",
    "SENTRY_TAG_CLIENT_ID",
]
