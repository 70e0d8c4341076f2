"""Content and role normalization for chat payloads.

Gateway payloads carry message content in several shapes: a plain string,
a list of typed blocks (Anthropic/OpenAI style), or a nested object. These
helpers flatten all of them to display text.
"""

from __future__ import annotations

from typing import Any

from .models import Role


def _block_text(block: Any) -> str:
    if isinstance(block, str):
        return block
    if not isinstance(block, dict):
        return ""
    block_type = block.get("type")
    if block_type == "text" and isinstance(block.get("text"), str):
        return block["text"]
    if block_type == "tool_use":
        return f"[Tool: {block.get('name') or 'unknown'}]"
    if block_type == "tool_result":
        return extract_content(block.get("content"))
    for key in ("text", "content", "message"):
        if isinstance(block.get(key), str):
            return block[key]
    return ""


def extract_content(value: Any) -> str:
    """Flatten a content payload to text ("" when nothing is displayable)."""
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, list):
        return "\n".join(text for text in (_block_text(block) for block in value) if text)
    if isinstance(value, dict):
        for key in ("text", "content", "message"):
            if isinstance(value.get(key), str):
                return value[key]
        if isinstance(value.get("content"), list):
            return extract_content(value["content"])
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def normalize_role(role: Any) -> Role:
    """Map gateway role names onto the transcript's three roles."""
    if not isinstance(role, str) or not role:
        return "assistant"
    lowered = role.lower()
    if lowered in ("user", "human"):
        return "user"
    if lowered in ("system", "error"):
        return "system"
    return "assistant"


def first_present(mapping: dict[str, Any], *keys: str, default: Any = None) -> Any:
    """First value under `keys` that is not None."""
    for key in keys:
        value = mapping.get(key)
        if value is not None:
            return value
    return default


def first_truthy(mapping: dict[str, Any], *keys: str, default: Any = None) -> Any:
    """First value under `keys` that is truthy."""
    for key in keys:
        value = mapping.get(key)
        if value:
            return value
    return default


__all__ = ["extract_content", "normalize_role", "first_present", "first_truthy"]
