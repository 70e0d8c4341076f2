"""Start and stop the telemetry backends around a CLI run."""

from __future__ import annotations

import logging
from .otel import init_otel, shutdown_otel
from .sentry import init_sentry, shutdown_sentry
from .instruments import initialize_metrics
from ..config.telemetry import SENTRY_DSN, OTEL_EXPORT_TOKEN

logger = logging.getLogger(__name__)


def init_telemetry() -> list[str]:
    """Enable every backend whose credentials are configured.

    Returns the names of the enabled backends. Without credentials the
    clients still record into the no-op meter and tracer.
    """
    enabled: list[str] = []
    if OTEL_EXPORT_TOKEN:
        init_otel()
        initialize_metrics()
        enabled.append("otel")
    if SENTRY_DSN:
        init_sentry()
        enabled.append("sentry")
    logger.info("Telemetry backends: %s", ", ".join(enabled) or "none")
    return enabled


def shutdown_telemetry() -> None:
    """Flush whatever `init_telemetry()` enabled. Safe to call more than once."""
    shutdown_sentry()
    shutdown_otel()


__all__ = ["init_telemetry", "shutdown_telemetry"]
