"""Bounded, observable chat transcript.

The transcript is an immutable tuple snapshot held in an `Observable`; each
mutation publishes a new snapshot so subscribers never see a half-applied
update. Only the most recent `max_messages` entries are kept.

Two merge paths exist on purpose:
- `upsert()` replaces content by id (chat events)
- `append_delta()` concatenates content onto a streaming entry (stream events)
"""

from __future__ import annotations

from collections.abc import Iterable

from .models import Role, ChatMessage
from ..session.observable import Observable
from ..config.gateway import TRANSCRIPT_MAX_MESSAGES


class Transcript(Observable[tuple[ChatMessage, ...]]):
    """Observable list of `ChatMessage` capped at `max_messages`."""

    def __init__(self, max_messages: int = TRANSCRIPT_MAX_MESSAGES) -> None:
        if max_messages < 1:
            raise ValueError("max_messages must be >= 1")
        super().__init__(())
        self._max_messages = max_messages

    @property
    def max_messages(self) -> int:
        return self._max_messages

    def __len__(self) -> int:
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def find(self, message_id: str) -> ChatMessage | None:
        for message in self.value:
            if message.id == message_id:
                return message
        return None

    def _publish(self, messages: Iterable[ChatMessage]) -> None:
        snapshot = tuple(messages)
        if len(snapshot) > self._max_messages:
            snapshot = snapshot[-self._max_messages:]
        self.set(snapshot)

    def append(self, message: ChatMessage) -> ChatMessage:
        self._publish((*self.value, message))
        return message

    def replace_all(self, messages: Iterable[ChatMessage]) -> None:
        self._publish(messages)

    def clear(self) -> None:
        self.set(())

    def upsert(self, message_id: str, content: str, *, role: Role, is_streaming: bool) -> ChatMessage:
        """Replace content and streaming flag in place, or append a new entry."""
        if self.find(message_id) is None:
            return self.append(ChatMessage(id=message_id, role=role, content=content, is_streaming=is_streaming))
        self._publish(
            m.evolve(content=content, is_streaming=is_streaming) if m.id == message_id else m
            for m in self.value
        )
        return self.find(message_id)  # type: ignore[return-value]

    def append_delta(self, message_id: str, content: str, *, done: bool) -> ChatMessage | None:
        """Concatenate onto a streaming entry, or start one when content is non-empty."""
        streaming = any(m.id == message_id and m.is_streaming for m in self.value)
        if streaming:
            self._publish(
                m.evolve(content=m.content + content, is_streaming=not done) if m.id == message_id else m
                for m in self.value
            )
            return self.find(message_id)
        if content:
            return self.append(ChatMessage(id=message_id, role="assistant", content=content, is_streaming=not done))
        return None

    def stop_streaming(self, message_id: str) -> None:
        self._publish(m.evolve(is_streaming=False) if m.id == message_id else m for m in self.value)

    def finish_streaming(self) -> None:
        """Clear the streaming flag on every entry."""
        self._publish(m.evolve(is_streaming=False) if m.is_streaming else m for m in self.value)


__all__ = ["Transcript"]
