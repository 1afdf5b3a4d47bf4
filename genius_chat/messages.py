"""Conversation turns and the append-only log that holds them."""

from __future__ import annotations

import enum
import uuid
from collections.abc import Iterator
from dataclasses import dataclass, field


class Role(enum.StrEnum):
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """One turn of the conversation. Never mutated after creation."""

    role: Role
    content: str
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @classmethod
    def user(cls, text: str) -> Message:
        return cls(role=Role.USER, content=text)

    @classmethod
    def assistant(cls, text: str) -> Message:
        return cls(role=Role.ASSISTANT, content=text)


class MessageStore:
    """Ordered, append-only log of messages.

    Insertion order is display order is conversation order. There is no
    delete or edit operation.
    """

    def __init__(self) -> None:
        self._messages: list[Message] = []

    def append(self, role: Role, content: str) -> Message:
        """Create a message with a fresh id and add it at the tail."""
        message = Message(role=Role(role), content=content)
        self._messages.append(message)
        return message

    def all(self) -> tuple[Message, ...]:
        """Read-only view of the full log."""
        return tuple(self._messages)

    def last(self) -> Message | None:
        return self._messages[-1] if self._messages else None

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self.all())

    def __repr__(self) -> str:
        return f"MessageStore(messages={len(self._messages)})"
