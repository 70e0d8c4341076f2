"""Gateway wire frames.

All traffic is JSON text frames of three kinds:

    {"type": "req",   "id": ..., "method": ..., "params": {...}}
    {"type": "res",   "id": ..., "ok": bool, "payload": ..., "error": {...}}
    {"type": "event", "event": ..., "payload": ..., "seq": ...}

`parse_frame` raises `FrameParseError` for anything else; the client drops
those frames.
"""

from __future__ import annotations

import json
from typing import Any, TypedDict

from ..errors import FrameParseError

FRAME_TYPES = ("req", "res", "event")


class RequestFrame(TypedDict, total=False):
    type: str
    id: str
    method: str
    params: Any


def parse_frame(raw: str | bytes) -> dict[str, Any]:
    """Decode one inbound frame."""
    try:
        frame = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise FrameParseError("Frame is not valid JSON") from exc

    if not isinstance(frame, dict):
        raise FrameParseError("Frame must be a JSON object")

    frame_type = frame.get("type")
    if frame_type not in FRAME_TYPES:
        raise FrameParseError(f"Unknown frame type: {frame_type!r}")
    if frame_type == "res" and not isinstance(frame.get("id"), str):
        raise FrameParseError("Response frame without id")
    if frame_type == "event" and not isinstance(frame.get("event"), str):
        raise FrameParseError("Event frame without event name")
    return frame


def build_request(request_id: str, method: str, params: Any = None) -> RequestFrame:
    frame: RequestFrame = {"type": "req", "id": request_id, "method": method}
    if params is not None:
        frame["params"] = params
    return frame


def encode_frame(frame: RequestFrame | dict[str, Any]) -> str:
    return json.dumps(frame, separators=(",", ":"))


__all__ = [
    "FRAME_TYPES",
    "RequestFrame",
    "parse_frame",
    "build_request",
    "encode_frame",
]
