"""
Dispatch controller: the conversation state machine.

One ``send`` validates the draft, consults the availability gate, records the
user turn, calls the inference service once and records whatever came back.
The busy flag is set for exactly the span of the inference call.
"""

from __future__ import annotations

import asyncio
import enum
import logging
import time

from .availability import Blocked, check_availability
from .exceptions import describe_error
from .messages import Message, Role
from .protocols import InferenceService
from .state import ConversationState

logger = logging.getLogger("genius_chat.dispatch")

ERROR_PREFIX = "❌ Error: "


class Phase(enum.Enum):
    IDLE = "idle"
    SENDING = "sending"


class BusyPolicy(enum.StrEnum):
    """What ``send`` does when called while another send is in flight."""

    REJECT = "reject"
    QUEUE = "queue"


class SendOutcome(enum.Enum):
    EMPTY = "empty"
    REJECTED = "rejected"
    BLOCKED = "blocked"
    REPLIED = "replied"
    FAILED = "failed"


class ChatController:
    """Single writer of the conversation state."""

    def __init__(
        self,
        service: InferenceService,
        state: ConversationState | None = None,
        *,
        busy_policy: BusyPolicy = BusyPolicy.REJECT,
    ) -> None:
        self.service = service
        self.state = state if state is not None else ConversationState()
        self.busy_policy = BusyPolicy(busy_policy)
        self._lock = asyncio.Lock()

    @property
    def phase(self) -> Phase:
        return Phase.SENDING if self.state.is_busy else Phase.IDLE

    @property
    def is_busy(self) -> bool:
        return self.state.is_busy

    @property
    def messages(self) -> tuple[Message, ...]:
        return self.state.messages

    async def send(self, text: str) -> SendOutcome:
        prompt = text.strip()
        if not prompt:
            return SendOutcome.EMPTY

        if self.busy_policy is BusyPolicy.REJECT and (self.state.is_busy or self._lock.locked()):
            logger.info("Send rejected: a response is already in flight.")
            return SendOutcome.REJECTED

        async with self._lock:
            return await self._dispatch(prompt)

    async def _dispatch(self, prompt: str) -> SendOutcome:
        gate = check_availability(self.service.availability())
        if isinstance(gate, Blocked):
            logger.info("Model blocked (%s); not sending.", gate.reason.value)
            self.state.append(Role.ASSISTANT, gate.message)
            return SendOutcome.BLOCKED

        self.state.append(Role.USER, prompt)
        self.state.set_busy(True)
        try:
            start = time.perf_counter()
            try:
                reply = await self.service.respond(prompt)
            except Exception as exc:
                logger.warning("Inference failed: %s", describe_error(exc), exc_info=True)
                self.state.append(Role.ASSISTANT, f"{ERROR_PREFIX}{describe_error(exc)}")
                return SendOutcome.FAILED

            logger.debug(
                "Reply received in %.3fs (%d chars).", time.perf_counter() - start, len(reply)
            )
            self.state.append(Role.ASSISTANT, reply)
            return SendOutcome.REPLIED
        finally:
            self.state.set_busy(False)
