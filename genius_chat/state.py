"""Observable container for the conversation log and the busy flag."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from .messages import Message, MessageStore, Role

logger = logging.getLogger("genius_chat.state")


@dataclass(frozen=True)
class ConversationSnapshot:
    messages: tuple[Message, ...]
    is_busy: bool


Listener = Callable[[ConversationSnapshot], None]


class ConversationState:
    """Owns the message log and busy flag; readers get snapshots.

    Listeners are called synchronously after every mutation. A listener that
    raises is logged and the remaining listeners still run.
    """

    def __init__(self, store: MessageStore | None = None) -> None:
        self._store = store if store is not None else MessageStore()
        self._is_busy = False
        self._listeners: list[Listener] = []

    @property
    def is_busy(self) -> bool:
        return self._is_busy

    @property
    def messages(self) -> tuple[Message, ...]:
        return self._store.all()

    def snapshot(self) -> ConversationSnapshot:
        return ConversationSnapshot(messages=self._store.all(), is_busy=self._is_busy)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def append(self, role: Role, content: str) -> Message:
        message = self._store.append(role, content)
        self._notify()
        return message

    def set_busy(self, busy: bool) -> None:
        if busy == self._is_busy:
            return
        self._is_busy = busy
        self._notify()

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Conversation listener %r failed.", listener)
