"""Gateway session client.

One `GatewaySessionClient` owns one WebSocket to a chat gateway and keeps
three observable values current for whatever renders them:

    connection_status: disconnected | connecting | connected | error
    messages:          the bounded transcript (a `Transcript` observable)
    is_typing:         True while an assistant reply is expected

Lifecycle of one session:

1. `connect(config)` sets `connecting` and starts a reader task.
2. The socket opens; the client waits for the gateway's `connect.challenge`.
3. The challenge is answered with a `connect` request. Only a successful
   answer marks the session `connected` and triggers a history load.
4. Frames are dispatched until the socket closes. An unclean close (no
   close frame from the peer, or an open failure) is handed to the
   reconnect loop, which re-runs step 1 with the same config.

Every session belongs to a generation. Tearing a session down advances the
generation first, so anything still running on behalf of the old socket
(its reader, its handshake) finds itself stale and leaves state alone.

Usage:
    client = GatewaySessionClient()
    client.connect(ConnectionConfig.from_host("gateway.local", auth_token=token))
    await client.send_message("hello")
    ...
    await client.aclose()
"""

from __future__ import annotations

import time
import uuid
import asyncio
import logging
import contextlib
from typing import Any
from collections.abc import Coroutine

import websockets

from .transcript import Transcript
from .pending import PendingRequests
from .history import history_messages
from ..logging import log_context
from .models import ChatMessage, ConnectionConfig, parse_timestamp, new_message_id
from .content import first_truthy, normalize_role, extract_content
from .request_ids import RequestIdGenerator
from .frames import parse_frame, encode_frame, build_request
from .handshake import CONNECT_METHOD, build_connect_params, resolve_session_key
from .transport import (
    CLEAN_DROP,
    OPEN_ERRORS,
    ConnectFn,
    drop_from_closed,
    open_gateway_socket,
    drop_from_open_error,
)
from ..telemetry import get_metrics, request_span, session_span, capture_error
from ..errors import (
    GatewayError,
    HandshakeError,
    FrameParseError,
    GatewayRequestTimeout,
    GatewayNotConnectedError,
)
from ..session import (
    Signal,
    DropInfo,
    Observable,
    BackoffPolicy,
    ReconnectLoop,
    ConnectionStatus,
    ReconnectOutcome,
    SessionGeneration,
)
from ..config.gateway import (
    GATEWAY_CLIENT_ID,
    GATEWAY_HISTORY_LIMIT,
    TRANSCRIPT_MAX_MESSAGES,
    GATEWAY_REQUEST_TIMEOUT_S,
)

logger = logging.getLogger(__name__)

CLIENT_NAME = "gateway"

CHAT_EVENTS = ("chat", "chat.message")
STREAM_EVENT = "chat.stream"
CHALLENGE_EVENT = "connect.challenge"
SHUTDOWN_EVENT = "shutdown"
TICK_EVENT = "tick"


class GatewaySessionClient:
    """Resilient chat session over one gateway WebSocket.

    Args:
        connect_fn: Coroutine function opening a socket for a URL. Defaults
            to `websockets.connect` with the configured timeouts.
        policy: Reconnect backoff; defaults to the gateway policy.
        request_timeout_s: Seconds before an unanswered request fails.
        max_messages: Transcript capacity.
    """

    def __init__(
        self,
        *,
        connect_fn: ConnectFn | None = None,
        policy: BackoffPolicy | None = None,
        request_timeout_s: float = GATEWAY_REQUEST_TIMEOUT_S,
        max_messages: int = TRANSCRIPT_MAX_MESSAGES,
    ) -> None:
        self._connect_fn: ConnectFn = connect_fn or open_gateway_socket
        self._request_timeout_s = request_timeout_s
        self._config: ConnectionConfig | None = None
        self._ws: Any = None
        self._reader_task: asyncio.Task[None] | None = None
        self._handshake_task: asyncio.Task[None] | None = None
        self._background: set[asyncio.Task[Any]] = set()
        self._handshake_complete = False
        self._session_errored = False
        self._session_key = ""
        self._connected_at: float | None = None
        self._generation = SessionGeneration(CLIENT_NAME)
        self._pending = PendingRequests()
        self._ids = RequestIdGenerator()
        self._reconnect = ReconnectLoop(
            self._reconnect_now,
            policy=policy or BackoffPolicy.gateway(),
            name=CLIENT_NAME,
        )

        self.connection_status: Observable[ConnectionStatus] = Observable(ConnectionStatus.DISCONNECTED)
        self.messages = Transcript(max_messages)
        self.is_typing: Observable[bool] = Observable(False)
        # Completed assistant replies and one-shot messages
        self.on_message: Signal[ChatMessage] = Signal()

    # ------------------------------------------------------------------ #
    # Observations
    # ------------------------------------------------------------------ #
    @property
    def status(self) -> ConnectionStatus:
        return self.connection_status.value

    @property
    def is_connected(self) -> bool:
        return self.connection_status.value is ConnectionStatus.CONNECTED

    @property
    def session_key(self) -> str:
        return self._session_key

    @property
    def config(self) -> ConnectionConfig | None:
        return self._config

    @property
    def generation(self) -> int:
        return self._generation.current

    @property
    def reconnect(self) -> ReconnectLoop:
        return self._reconnect

    @property
    def pending_requests(self) -> int:
        return len(self._pending)

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #
    def connect(self, config: ConnectionConfig) -> None:
        """Start a session with `config`, replacing any current one.

        Must be called from inside the running event loop.
        """
        self._config = config
        self._reconnect.reset()
        self._handshake_complete = False
        self._set_status(ConnectionStatus.CONNECTING)
        self._establish()

    def disconnect(self) -> None:
        """End the session and stop reconnecting. The transcript is kept."""
        self._reconnect.disable()
        self._teardown()
        self._session_key = ""
        self.is_typing.set(False)
        self.messages.finish_streaming()
        self._set_status(ConnectionStatus.DISCONNECTED)

    async def aclose(self) -> None:
        """`disconnect()` and wait for the socket to finish closing."""
        tasks = [task for task in (self._reader_task, *self._background) if task is not None]
        self.disconnect()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    def clear_messages(self) -> None:
        self.messages.clear()

    # ------------------------------------------------------------------ #
    # Requests
    # ------------------------------------------------------------------ #
    async def request(self, method: str, params: dict[str, Any] | None = None) -> Any:
        """Send one request and return its payload.

        Raises:
            GatewayNotConnectedError: The handshake has not completed.
            GatewayRequestTimeout: No response within the request timeout.
            GatewayRequestError: The gateway answered `ok: false`.
        """
        ws = self._ws
        if ws is None or not self._handshake_complete:
            raise GatewayNotConnectedError()
        return await self._call(ws, method, params if params is not None else {})

    async def send_message(self, text: str) -> None:
        """Append `text` as a user message and send it with `chat.send`."""
        self.messages.append(ChatMessage.create("user", text))
        self.is_typing.set(True)

        try:
            result = await self.request(
                "chat.send",
                {
                    "sessionKey": self._session_key,
                    "message": text,
                    "idempotencyKey": str(uuid.uuid4()),
                },
            )
        except GatewayError as exc:
            self.is_typing.set(False)
            self.messages.append(ChatMessage.create("system", f"Error: {str(exc) or 'Failed to send message'}"))
            return

        # Gateways that answer inline put the reply in the payload;
        # everything else arrives later as chat events.
        if isinstance(result, dict) and result.get("content"):
            self.is_typing.set(False)
            content = extract_content(result["content"])
            if not content:
                return
            reply = ChatMessage(
                id=str(result.get("id") or new_message_id()),
                role="assistant",
                content=content,
                timestamp=parse_timestamp(result.get("timestamp")),
            )
            self.messages.append(reply)
            self.on_message.emit(reply)

    async def load_history(self) -> None:
        """Replace the transcript with the gateway's recent history.

        Failures leave the transcript untouched.
        """
        generation = self._generation.current
        try:
            result = await self.request(
                "chat.history",
                {"sessionKey": self._session_key, "limit": GATEWAY_HISTORY_LIMIT},
            )
        except GatewayError as exc:
            logger.debug("Chat history unavailable: %s", exc)
            return
        if not self._generation.is_current(generation):
            return

        messages = history_messages(result, GATEWAY_HISTORY_LIMIT)
        if messages:
            self.messages.replace_all(messages)

    # ------------------------------------------------------------------ #
    # Session establishment and teardown
    # ------------------------------------------------------------------ #
    def _establish(self) -> None:
        config = self._config
        if config is None:
            return
        generation = self._teardown()
        self._session_errored = False
        self._reader_task = asyncio.get_running_loop().create_task(
            self._run_session(generation, config),
            name=f"gateway-session-{generation}",
        )

    def _teardown(self) -> int:
        """Invalidate the current session and release its socket."""
        generation = self._generation.advance()
        task, self._reader_task = self._reader_task, None
        if task is not None and not task.done():
            # The reader closes its own socket on the way out
            task.cancel()
        self._cancel_background()
        self._ws = None
        self._handshake_complete = False
        self._end_session_metrics()
        return generation

    def _reconnect_now(self) -> None:
        if self.connection_status.value is ConnectionStatus.CONNECTED:
            return
        self._set_status(ConnectionStatus.CONNECTING)
        self._establish()

    async def _run_session(self, generation: int, config: ConnectionConfig) -> None:
        with log_context(session_generation=generation, client_id=GATEWAY_CLIENT_ID), session_span(
            client=CLIENT_NAME, generation=generation, url=config.url
        ):
            try:
                ws = await self._connect_fn(config.url)
            except OPEN_ERRORS as exc:
                logger.warning("Gateway connection to %s failed: %s", config.url, exc)
                self._on_transport_error(generation, exc)
                self._on_transport_closed(generation, drop_from_open_error(exc))
                return

            if not self._generation.is_current(generation):
                await _close_quietly(ws)
                return

            self._ws = ws
            logger.debug("Gateway socket open; waiting for challenge")
            drop = CLEAN_DROP
            try:
                async for raw in ws:
                    if not self._generation.is_current(generation):
                        break
                    self._handle_frame(generation, raw)
            except websockets.ConnectionClosed as exc:
                drop = drop_from_closed(exc)
                if drop.had_error:
                    self._on_transport_error(generation, exc)
            finally:
                await _close_quietly(ws)

            self._on_transport_closed(generation, drop)

    def _on_transport_error(self, generation: int, exc: BaseException) -> None:
        if not self._generation.is_current(generation):
            return
        self._session_errored = True
        get_metrics().count_error(CLIENT_NAME, exc)
        capture_error(exc, session_generation=generation, client_id=GATEWAY_CLIENT_ID)
        self._set_status(ConnectionStatus.ERROR)
        self.is_typing.set(False)
        self.messages.finish_streaming()

    def _on_transport_closed(self, generation: int, drop: DropInfo) -> None:
        if not self._generation.is_current(generation):
            return
        logger.info("Gateway socket closed (clean=%s code=%s)", drop.clean, drop.code)
        self._ws = None
        # A handshake or history load still waiting on this socket cannot finish
        self._cancel_background()
        self._handshake_complete = False
        self._end_session_metrics()
        self.is_typing.set(False)
        self.messages.finish_streaming()

        # An error seen earlier in this session stays visible
        if drop.had_error or self._session_errored:
            self._set_status(ConnectionStatus.ERROR)
        else:
            self._set_status(ConnectionStatus.DISCONNECTED)

        if drop.clean or self._config is None:
            return
        if self._reconnect.on_drop(drop) is ReconnectOutcome.EXHAUSTED:
            self._set_status(ConnectionStatus.ERROR)

    # ------------------------------------------------------------------ #
    # Handshake
    # ------------------------------------------------------------------ #
    def _on_challenge(self, generation: int) -> None:
        if self._handshake_complete or (self._handshake_task is not None and not self._handshake_task.done()):
            logger.debug("Ignoring repeated challenge")
            return
        self._handshake_task = self._spawn(self._perform_handshake(generation))

    async def _perform_handshake(self, generation: int) -> None:
        config, ws = self._config, self._ws
        if config is None or ws is None:
            return
        try:
            result = await self._call(ws, CONNECT_METHOD, build_connect_params(config))
        except GatewayError as exc:
            if not self._owns_socket(generation, ws):
                logger.debug("Ignoring handshake failure of a closed or superseded session")
                return
            self._on_handshake_failed(generation, exc)
            return

        if not self._owns_socket(generation, ws):
            logger.debug("Ignoring handshake result of a closed or superseded session")
            return

        self._session_key = resolve_session_key(result)
        self._handshake_complete = True
        self._reconnect.mark_connected()
        self._connected_at = time.monotonic()
        get_metrics().active_sessions.add(1, {"client": CLIENT_NAME})
        self._set_status(ConnectionStatus.CONNECTED)
        self._spawn(self.load_history())

    def _owns_socket(self, generation: int, ws: Any) -> bool:
        return self._generation.is_current(generation) and self._ws is ws

    def _on_handshake_failed(self, generation: int, exc: GatewayError) -> None:
        error = HandshakeError(str(exc) or "Handshake failed", cause_code=getattr(exc, "code", None))
        error.__cause__ = exc
        logger.warning("Gateway handshake failed: %s", error)
        get_metrics().handshake_failures_total.add(1, {"client": CLIENT_NAME})
        capture_error(error, session_generation=generation, client_id=GATEWAY_CLIENT_ID)
        self._session_errored = True
        self._set_status(ConnectionStatus.ERROR)

    # ------------------------------------------------------------------ #
    # Frames
    # ------------------------------------------------------------------ #
    async def _call(self, ws: Any, method: str, params: Any) -> Any:
        request_id = self._ids.next()
        future = self._pending.register(request_id)
        metrics = get_metrics()
        metrics.requests_total.add(1, {"method": method})
        started = time.perf_counter()
        with log_context(request_id=request_id), request_span(request_id=request_id, method=method):
            try:
                await ws.send(encode_frame(build_request(request_id, method, params)))
            except websockets.ConnectionClosed as exc:
                self._pending.discard(request_id)
                raise GatewayNotConnectedError() from exc
            try:
                return await self._pending.wait(request_id, future, self._request_timeout_s, method=method)
            except GatewayRequestTimeout:
                metrics.request_timeouts_total.add(1, {"method": method})
                logger.warning("Gateway request %s timed out after %.0fs", method, self._request_timeout_s)
                raise
            finally:
                metrics.request_latency.record(time.perf_counter() - started, {"method": method})

    def _handle_frame(self, generation: int, raw: str | bytes) -> None:
        try:
            frame = parse_frame(raw)
        except FrameParseError as exc:
            logger.debug("Dropping gateway frame: %s", exc)
            get_metrics().frames_dropped_total.add(1, {"client": CLIENT_NAME})
            return

        frame_type = frame["type"]
        if frame_type == "res":
            self._pending.resolve(frame)
        elif frame_type == "event":
            self._dispatch_event(generation, frame["event"], frame.get("payload"))
        # Server-initiated requests are not served by this client

    def _dispatch_event(self, generation: int, event: str, payload: Any) -> None:
        if event == CHALLENGE_EVENT:
            self._on_challenge(generation)
        elif event in CHAT_EVENTS:
            if isinstance(payload, dict) and payload:
                self._apply_chat_event(payload)
        elif event == STREAM_EVENT:
            if isinstance(payload, dict) and payload:
                self._apply_stream_event(payload)
        elif event == SHUTDOWN_EVENT:
            logger.info("Gateway announced shutdown")
            self._set_status(ConnectionStatus.DISCONNECTED)
        elif event != TICK_EVENT:
            logger.debug("Ignoring gateway event %s", event)

    def _apply_chat_event(self, payload: dict[str, Any]) -> None:
        """Merge a chat event; content replaces what the run id holds."""
        run_id = payload.get("runId") or None
        state = payload.get("state") or "final"
        message = payload.get("message")

        if state == "error":
            self.is_typing.set(False)
            error_text = payload.get("errorMessage") or "An error occurred"
            self.messages.append(ChatMessage.create("system", f"Error: {error_text}", id=run_id))
            return

        if state == "aborted":
            self.is_typing.set(False)
            if run_id:
                self.messages.stop_streaming(run_id)
            return

        if isinstance(message, dict) and message.get("content") is not None:
            raw = message["content"]
        elif message is not None:
            raw = message
        else:
            raw = payload.get("content")
        content = extract_content(raw)
        if not content:
            return

        role_source = message.get("role") if isinstance(message, dict) else None
        role = normalize_role(role_source or payload.get("role") or "assistant")

        if run_id:
            entry = self.messages.upsert(run_id, content, role=role, is_streaming=state == "delta")
            if state == "final":
                self.is_typing.set(False)
                self.on_message.emit(entry)
            return

        self.is_typing.set(False)
        entry = self.messages.append(ChatMessage.create(role, content))
        self.on_message.emit(entry)

    def _apply_stream_event(self, payload: dict[str, Any]) -> None:
        """Merge a stream delta; content is appended to the streaming entry."""
        content = extract_content(first_truthy(payload, "content", "text", "chunk", "delta", default=""))
        message_id = str(first_truthy(payload, "id", "messageId", default="streaming"))
        done = bool(first_truthy(payload, "done", "finished", "final", default=False))
        self.messages.append_delta(message_id, content, done=done)
        if done:
            self.is_typing.set(False)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _set_status(self, status: ConnectionStatus) -> None:
        if self.connection_status.set(status):
            logger.info("Gateway status -> %s", status.value)

    def _cancel_background(self) -> None:
        for task in list(self._background):
            task.cancel()
        self._handshake_task = None

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task[Any]:
        task = asyncio.get_running_loop().create_task(coro)
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task

    def _end_session_metrics(self) -> None:
        started, self._connected_at = self._connected_at, None
        if started is None:
            return
        metrics = get_metrics()
        metrics.active_sessions.add(-1, {"client": CLIENT_NAME})
        metrics.connection_duration.record(time.monotonic() - started, {"client": CLIENT_NAME})


async def _close_quietly(ws: Any) -> None:
    with contextlib.suppress(Exception):
        await ws.close()


__all__ = ["GatewaySessionClient"]
