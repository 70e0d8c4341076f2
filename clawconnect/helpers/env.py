"""Environment helper utilities."""

from __future__ import annotations

import os
import logging

logger = logging.getLogger(__name__)

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def env_flag(name: str, default: bool) -> bool:
    """Read a boolean flag; unset, blank or unrecognized values give `default`."""
    raw = (os.getenv(name) or "").strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    if raw:
        logger.warning("Ignoring %s=%r: expected one of 1/0, true/false, yes/no, on/off", name, raw)
    return default


__all__ = ["env_flag"]
