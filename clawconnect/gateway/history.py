"""Normalization of `chat.history` results."""

from __future__ import annotations

from typing import Any

from .models import ChatMessage, new_message_id, parse_timestamp
from .content import first_present, normalize_role, extract_content


def history_entries(result: Any) -> list[Any] | None:
    """Entries of a history result: a list, or an object with `entries`/`messages`.

    The first key holding a list wins even when the list is empty; a missing
    or null `entries` falls through to `messages`.
    """
    if isinstance(result, list):
        return result
    if isinstance(result, dict):
        for key in ("entries", "messages"):
            entries = result.get(key)
            if isinstance(entries, list):
                return entries
            if entries:
                return None
    return None


def history_message(entry: dict[str, Any]) -> ChatMessage:
    return ChatMessage(
        id=str(entry.get("id") or new_message_id()),
        role=normalize_role(entry.get("role") or entry.get("sender")),
        content=extract_content(first_present(entry, "content", "text", "message", default="")),
        timestamp=parse_timestamp(entry.get("timestamp")),
    )


def history_messages(result: Any, limit: int) -> list[ChatMessage]:
    """Displayable history messages, most recent `limit` kept."""
    entries = history_entries(result) or []
    messages = [history_message(entry) for entry in entries if isinstance(entry, dict)]
    messages = [message for message in messages if message.content]
    return messages[-limit:] if limit > 0 else messages


__all__ = ["history_entries", "history_message", "history_messages"]
