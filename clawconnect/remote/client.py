"""Remote viewer session client.

Drives one opaque viewer instance through the shared status vocabulary and
adds the automatic reconnection the viewer does not provide itself.

Each viewer instance belongs to a generation. `connect()` and every
reconnect first advance the generation and disconnect the previous viewer,
then attach four listeners guarded by the new generation; a late event from
the old viewer is dropped by its guard.

Drops are classified as follows:
    clean disconnect                -> disconnected
    unclean, after a connect event  -> reconnect with backoff
    unclean, never connected        -> error (almost always bad host/port)
    credentials missing / rejected  -> error, reconnection disabled
"""

from __future__ import annotations

import logging
from typing import Any
from collections.abc import Mapping

from .loader import ViewerLoader
from ..logging import log_context
from ..telemetry import get_metrics, capture_error, add_breadcrumb
from .events import ViewerEvent
from .models import VncConfig, StatusKind
from .viewer import RemoteViewer, ViewerFactory
from ..errors import SecurityFailureError, CredentialsRequiredError
from ..session import (
    DropInfo,
    Observable,
    BackoffPolicy,
    ReconnectLoop,
    ConnectionStatus,
    ReconnectOutcome,
    SessionGeneration,
)
from ..config.remote import (
    REMOTE_PASSWORD_LABEL,
    REMOTE_SCALE_VIEWPORT,
    REMOTE_USERNAME_LABEL,
    REMOTE_VIEWER_BACKGROUND,
    REMOTE_DEFAULT_FAILURE_REASON,
)

logger = logging.getLogger(__name__)

CLIENT_NAME = "remote"


class RemoteSessionClient:
    """Resilient remote viewer session.

    Observable state:
        status: Connection status.
        status_message: Human-readable line describing the status.
        status_kind: success | error | info | connecting, for styling.
    """

    def __init__(
        self,
        *,
        loader: ViewerLoader | None = None,
        viewer_factory: ViewerFactory | None = None,
        policy: BackoffPolicy | None = None,
    ) -> None:
        self._loader = loader or ViewerLoader(viewer_factory)
        self._viewer: RemoteViewer | None = None
        self._config: VncConfig | None = None
        self._target: Any = None
        self._auth_failed = False
        self._scale_viewport = REMOTE_SCALE_VIEWPORT
        self._generation = SessionGeneration(CLIENT_NAME)
        self._reconnect = ReconnectLoop(
            self._reconnect_now,
            policy=policy or BackoffPolicy.remote(),
            is_recoverable=self._is_recoverable_drop,
            name=CLIENT_NAME,
        )

        self.status: Observable[ConnectionStatus] = Observable(ConnectionStatus.DISCONNECTED)
        self.status_message: Observable[str] = Observable("")
        self.status_kind: Observable[StatusKind] = Observable("info")

    @property
    def is_connected(self) -> bool:
        return self.status.value is ConnectionStatus.CONNECTED

    @property
    def is_connecting(self) -> bool:
        return self.status.value is ConnectionStatus.CONNECTING

    @property
    def config(self) -> VncConfig | None:
        return self._config

    @property
    def viewer(self) -> RemoteViewer | None:
        return self._viewer

    @property
    def generation(self) -> int:
        return self._generation.current

    @property
    def reconnect(self) -> ReconnectLoop:
        return self._reconnect

    @property
    def scale_viewport(self) -> bool:
        return self._scale_viewport

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #
    def connect(self, config: VncConfig, target: Any = None) -> None:
        """Open a viewer for `config`, rendering into `target`.

        Must be called from inside the running event loop (reconnect timers
        are scheduled on it).
        """
        self._config = config
        self._target = target
        self._auth_failed = False
        self._reconnect.reset()
        self._establish()

    def disconnect(self) -> None:
        self._reconnect.disable()
        self._teardown()
        self._set_status(ConnectionStatus.DISCONNECTED, "Disconnected", "info")

    def send_ctrl_alt_del(self) -> None:
        if self._viewer is not None:
            self._viewer.send_ctrl_alt_del()

    def set_scale_viewport(self, enabled: bool) -> None:
        """Scale the remote screen to fit; remembered for later viewers."""
        self._scale_viewport = bool(enabled)
        if self._viewer is not None:
            self._viewer.scale_viewport = self._scale_viewport  # type: ignore[attr-defined]

    def toggle_scale_viewport(self) -> bool:
        self.set_scale_viewport(not self._scale_viewport)
        return self._scale_viewport

    # ------------------------------------------------------------------ #
    # Establishment
    # ------------------------------------------------------------------ #
    def _establish(self) -> None:
        config = self._config
        if config is None:
            return
        generation = self._teardown()
        self._set_status(ConnectionStatus.CONNECTING, f"Connecting to {config.address}...", "connecting")

        with log_context(session_generation=generation):
            try:
                factory = self._loader.load()
                viewer = factory(self._target, config.url, credentials=config.credentials() or None)
            except Exception as exc:  # noqa: BLE001
                logger.warning("Viewer for %s could not be created: %s", config.url, exc)
                self._record_error(generation, exc)
                self._set_status(ConnectionStatus.ERROR, f"Failed to connect: {exc}", "error")
                return

            self._apply_display_options(viewer)
            self._viewer = viewer
            guard = self._generation.guard
            viewer.add_event_listener(ViewerEvent.CONNECT.value, guard(generation, self._on_connect))
            viewer.add_event_listener(ViewerEvent.DISCONNECT.value, guard(generation, self._on_disconnect))
            viewer.add_event_listener(
                ViewerEvent.CREDENTIALS_REQUIRED.value, guard(generation, self._on_credentials_required)
            )
            viewer.add_event_listener(ViewerEvent.SECURITY_FAILURE.value, guard(generation, self._on_security_failure))
            logger.debug("Viewer created for %s", config.url)

    def _teardown(self) -> int:
        generation = self._generation.advance()
        viewer, self._viewer = self._viewer, None
        if viewer is not None:
            try:
                viewer.disconnect()
            except Exception:  # noqa: BLE001
                logger.debug("Previous viewer failed to disconnect", exc_info=True)
        return generation

    def _apply_display_options(self, viewer: RemoteViewer) -> None:
        options = {
            "scale_viewport": self._scale_viewport,
            "resize_session": False,
            "clip_viewport": True,
            "show_dot_cursor": True,
            "background": REMOTE_VIEWER_BACKGROUND,
        }
        for name, value in options.items():
            if hasattr(viewer, name):
                setattr(viewer, name, value)

    def _reconnect_now(self) -> None:
        if self.status.value is ConnectionStatus.CONNECTED:
            return
        self._establish()

    def _is_recoverable_drop(self, drop: DropInfo) -> bool:
        return not drop.clean and self._reconnect.ever_connected

    # ------------------------------------------------------------------ #
    # Viewer events (generation-guarded)
    # ------------------------------------------------------------------ #
    def _on_connect(self, detail: Mapping[str, Any] | None = None) -> None:
        self._reconnect.mark_connected()
        host = self._config.host if self._config else ""
        add_breadcrumb("Remote viewer connected", category=CLIENT_NAME)
        self._set_status(ConnectionStatus.CONNECTED, f"Connected to {host}", "success")

    def _on_disconnect(self, detail: Mapping[str, Any] | None = None) -> None:
        clean = bool((detail or {}).get("clean"))
        self._viewer = None
        if self._auth_failed:
            # Keep the authentication message the user has to act on
            self._set_status(ConnectionStatus.ERROR, self.status_message.value, "error")
            return
        if clean:
            self._set_status(ConnectionStatus.DISCONNECTED, "Disconnected", "info")
            return

        outcome = self._reconnect.on_drop(DropInfo(clean=False))
        if outcome is ReconnectOutcome.SCHEDULED:
            policy = self._reconnect.policy
            self._set_status(
                ConnectionStatus.DISCONNECTED,
                f"Connection lost - reconnecting in {self._reconnect.last_delay_s:g}s "
                f"(attempt {self._reconnect.attempts}/{policy.max_attempts})",
                "connecting",
            )
        elif outcome is ReconnectOutcome.EXHAUSTED:
            self._set_status(
                ConnectionStatus.ERROR,
                f"Connection lost - gave up after {self._reconnect.attempts} attempts",
                "error",
            )
        else:
            self._set_status(
                ConnectionStatus.ERROR,
                "Connection lost - check the viewer proxy and network",
                "error",
            )

    def _on_credentials_required(self, detail: Mapping[str, Any] | None = None) -> None:
        config = self._config
        if config is None:
            return
        types = list((detail or {}).get("types") or [])
        missing: list[str] = []
        if "username" in types and not config.username:
            missing.append(REMOTE_USERNAME_LABEL)
        if "password" in types and not config.password:
            missing.append(REMOTE_PASSWORD_LABEL)

        if missing:
            # Missing credentials won't appear by retrying
            self._reconnect.disable()
            self._auth_failed = True
            error = CredentialsRequiredError(missing)
            self._record_error(self._generation.current, error)
            self._set_status(ConnectionStatus.ERROR, str(error), "error")
            return

        if self._viewer is not None:
            self._viewer.send_credentials(config.credentials())

    def _on_security_failure(self, detail: Mapping[str, Any] | None = None) -> None:
        self._reconnect.disable()
        self._auth_failed = True
        reason = (detail or {}).get("reason") or REMOTE_DEFAULT_FAILURE_REASON
        error = SecurityFailureError(str(reason))
        self._record_error(self._generation.current, error)
        self._set_status(ConnectionStatus.ERROR, str(error), "error")

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _set_status(self, status: ConnectionStatus, message: str, kind: StatusKind) -> None:
        changed = self.status.set(status)
        self.status_message.set(message)
        self.status_kind.set(kind)
        if changed:
            logger.info("Remote status -> %s (%s)", status.value, message)

    def _record_error(self, generation: int, exc: BaseException) -> None:
        get_metrics().count_error(CLIENT_NAME, exc)
        capture_error(exc, session_generation=generation)


__all__ = ["RemoteSessionClient"]
