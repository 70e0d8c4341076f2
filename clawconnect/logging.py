"""Structured context fields for log records.

Every log line emitted while a session callback runs carries the session
generation it belongs to, so a late event from a superseded connection is
easy to tell apart from the live one in the logs. Request handling adds the
gateway request id, and the client id names which side logged it.

Fields are held in context variables, so concurrent reader, handshake and
history tasks each see the values of the session that spawned them.
"""

from __future__ import annotations

import sys
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import Token, ContextVar

_SESSION_GENERATION: ContextVar[str] = ContextVar("session_generation", default="-")
_REQUEST_ID: ContextVar[str] = ContextVar("request_id", default="-")
_CLIENT_ID: ContextVar[str] = ContextVar("client_id", default="-")

# LogRecord attribute -> context variable
LOG_CONTEXT_FIELDS: dict[str, ContextVar[str]] = {
    "session_generation": _SESSION_GENERATION,
    "request_id": _REQUEST_ID,
    "client_id": _CLIENT_ID,
}

_ContextTokens = list[tuple[ContextVar[str], Token[str]]]


def set_log_context(
    *,
    session_generation: int | str | None = None,
    request_id: str | None = None,
    client_id: str | None = None,
) -> _ContextTokens:
    """Set the given fields; None leaves a field as it is."""
    values = {"session_generation": session_generation, "request_id": request_id, "client_id": client_id}
    return [
        (LOG_CONTEXT_FIELDS[field], LOG_CONTEXT_FIELDS[field].set(str(value)))
        for field, value in values.items()
        if value is not None
    ]


def reset_log_context(tokens: _ContextTokens) -> None:
    for var, token in reversed(tokens):
        var.reset(token)


@contextmanager
def log_context(
    *,
    session_generation: int | str | None = None,
    request_id: str | None = None,
    client_id: str | None = None,
) -> Iterator[None]:
    """Apply log fields for the duration of a block."""
    tokens = set_log_context(session_generation=session_generation, request_id=request_id, client_id=client_id)
    try:
        yield
    finally:
        reset_log_context(tokens)


_installed = False


def install_log_context() -> None:
    """Wrap the LogRecord factory so every record carries the context fields."""
    global _installed  # noqa: PLW0603
    if _installed:
        return
    base_factory = logging.getLogRecordFactory()

    def record_factory(*args, **kwargs):
        record = base_factory(*args, **kwargs)
        for field, var in LOG_CONTEXT_FIELDS.items():
            setattr(record, field, var.get())
        return record

    logging.setLogRecordFactory(record_factory)
    _installed = True


def configure_logging() -> None:
    """Send clawconnect logs to stderr, keeping stdout for chat output."""
    from clawconnect.config.logging import APP_LOG_LEVEL, APP_LOG_FORMAT, APP_LOG_DATEFMT  # noqa: PLC0415

    install_log_context()
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(APP_LOG_FORMAT, datefmt=APP_LOG_DATEFMT))
        root.addHandler(handler)
    root.setLevel(APP_LOG_LEVEL)

    logging.getLogger("clawconnect").setLevel(APP_LOG_LEVEL)
    for noisy in ("websockets", "urllib3"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


__all__ = [
    "LOG_CONTEXT_FIELDS",
    "install_log_context",
    "log_context",
    "reset_log_context",
    "set_log_context",
    "configure_logging",
]
