"""The viewer protocol the remote client drives."""

from __future__ import annotations

from typing import Any, Protocol
from collections.abc import Mapping, Callable

ViewerListener = Callable[[Mapping[str, Any]], None]


class RemoteViewer(Protocol):
    """What the client needs from a viewer instance.

    Display options (`scale_viewport`, `resize_session`, `clip_viewport`,
    `show_dot_cursor`, `background`) are plain attributes; viewers that lack
    one simply don't get it set.
    """

    def add_event_listener(self, name: str, callback: ViewerListener) -> None: ...

    def send_credentials(self, credentials: Mapping[str, str]) -> None: ...

    def send_ctrl_alt_del(self) -> None: ...

    def disconnect(self) -> None: ...


# factory(target, url, *, credentials) -> viewer
ViewerFactory = Callable[..., RemoteViewer]


__all__ = ["RemoteViewer", "ViewerFactory", "ViewerListener"]
