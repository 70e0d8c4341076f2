"""Spans for gateway sessions and gateway RPC calls."""

from __future__ import annotations

from opentelemetry import trace
from collections.abc import Iterator
from contextlib import contextmanager
from ..errors import GatewayRequestError
from ..config.telemetry import SPAN_REQUEST, SPAN_SESSION, OTEL_SERVICE_NAME

RPC_SYSTEM = "clawconnect-gateway"


def _tracer() -> trace.Tracer:
    return trace.get_tracer(OTEL_SERVICE_NAME)


@contextmanager
def session_span(*, client: str, generation: int, url: str = "") -> Iterator[trace.Span]:
    """One connection attempt, from socket open to close."""
    attributes: dict[str, str | int] = {"client": client, "session.generation": generation}
    if url:
        attributes["server.url"] = url
    with _tracer().start_as_current_span(SPAN_SESSION, attributes=attributes) as span:
        yield span


@contextmanager
def request_span(*, request_id: str, method: str) -> Iterator[trace.Span]:
    """One request/response exchange.

    A gateway rejection is recorded with its error code before the error
    propagates; the span status is set by the SDK.
    """
    attributes = {"rpc.system": RPC_SYSTEM, "rpc.method": method, "request.id": request_id}
    with _tracer().start_as_current_span(SPAN_REQUEST, attributes=attributes) as span:
        try:
            yield span
        except GatewayRequestError as exc:
            span.set_attribute("rpc.gateway.error_code", exc.code)
            raise


__all__ = ["RPC_SYSTEM", "session_span", "request_span"]
