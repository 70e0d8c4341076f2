"""Sentry error reporting for session failures.

Errors are reported with the session generation, request id and client id
of the log context, plus the `classify_error()` category. Reports are
rate-limited per (error class, category) so a flapping connection does not
flood the project: a reconnect loop can raise the same transport error every
few seconds.

Some failures are part of normal operation and never reported: unparseable
frames are dropped by design and "not connected" rejections are reported to
the caller instead.
"""

from __future__ import annotations

import time
import logging
from typing import Any

from ..logging import _CLIENT_ID, _REQUEST_ID, _SESSION_GENERATION
from ..errors import FrameParseError, GatewayNotConnectedError, classify_error
from ..config.gateway import GATEWAY_CLIENT_ID, GATEWAY_CLIENT_VERSION
from ..config.telemetry import (
    SENTRY_DSN,
    SENTRY_RELEASE,
    SENTRY_ENVIRONMENT,
    SENTRY_SAMPLE_RATE,
    SENTRY_RATE_LIMIT_S,
    SENTRY_TAG_CLIENT_ID,
    SENTRY_TAG_REQUEST_ID,
    SENTRY_TAG_SESSION_GENERATION,
)

logger = logging.getLogger(__name__)

UNREPORTED_ERRORS: tuple[type[BaseException], ...] = (FrameParseError, GatewayNotConnectedError)

_last_reported: dict[tuple[str, str], float] = {}
_initialized: bool = False


def _before_send(event: dict[str, Any], hint: dict[str, Any]) -> dict[str, Any] | None:
    exc_info = hint.get("exc_info")
    if exc_info and isinstance(exc_info[1], UNREPORTED_ERRORS):
        return None
    return event


def init_sentry() -> None:
    """Initialize the Sentry SDK. Idempotent."""
    global _initialized  # noqa: PLW0603
    if _initialized:
        return
    import sentry_sdk

    sentry_sdk.init(
        dsn=SENTRY_DSN,
        environment=SENTRY_ENVIRONMENT,
        release=SENTRY_RELEASE or f"clawconnect@{GATEWAY_CLIENT_VERSION}",
        sample_rate=SENTRY_SAMPLE_RATE,
        traces_sample_rate=0.0,
        attach_stacktrace=True,
        before_send=_before_send,
    )
    sentry_sdk.set_tag(SENTRY_TAG_CLIENT_ID, GATEWAY_CLIENT_ID)

    _initialized = True
    logger.info("Sentry initialized: environment=%s", SENTRY_ENVIRONMENT)


def shutdown_sentry() -> None:
    """Flush queued events. Idempotent."""
    global _initialized  # noqa: PLW0603
    if not _initialized:
        return
    import sentry_sdk

    sentry_sdk.flush(timeout=2.0)
    _initialized = False


def _should_report(error: BaseException, category: str) -> bool:
    key = (type(error).__qualname__, category)
    now = time.monotonic()
    if now - _last_reported.get(key, float("-inf")) < SENTRY_RATE_LIMIT_S:
        return False
    _last_reported[key] = now
    return True


def capture_error(
    error: BaseException,
    *,
    session_generation: int | None = None,
    request_id: str | None = None,
    client_id: str | None = None,
    extra: dict[str, Any] | None = None,
) -> None:
    """Report a session error; no-op when Sentry is disabled."""
    if not _initialized or isinstance(error, UNREPORTED_ERRORS):
        return
    category = classify_error(error)
    if not _should_report(error, category):
        return

    import sentry_sdk

    tags = {
        SENTRY_TAG_SESSION_GENERATION: (
            str(session_generation) if session_generation is not None else _SESSION_GENERATION.get()
        ),
        SENTRY_TAG_REQUEST_ID: request_id or _REQUEST_ID.get(),
        SENTRY_TAG_CLIENT_ID: client_id or _CLIENT_ID.get(),
        "error.category": category,
    }
    with sentry_sdk.new_scope() as scope:
        for name, value in tags.items():
            scope.set_tag(name, value)
        for name, value in (extra or {}).items():
            scope.set_extra(name, value)
        sentry_sdk.capture_exception(error)


def add_breadcrumb(
    message: str,
    *,
    category: str,
    level: str = "info",
    data: dict[str, Any] | None = None,
) -> None:
    """Record a session milestone (connect, reconnect, give up) for later reports."""
    if not _initialized:
        return
    import sentry_sdk

    sentry_sdk.add_breadcrumb(message=message, category=category, level=level, data=data or {})


__all__ = ["init_sentry", "shutdown_sentry", "capture_error", "add_breadcrumb"]
