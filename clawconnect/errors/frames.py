"""Wire frame parsing errors."""

from __future__ import annotations

from .base import ClawConnectError


class FrameParseError(ClawConnectError, ValueError):
    """Raised when an inbound frame is not a valid gateway frame.

    The client drops such frames silently; the error only exists so the
    parser can be tested and the drop can be counted.
    """


__all__ = ["FrameParseError"]
