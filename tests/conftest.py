"""Shared test doubles for the inference boundary."""

import asyncio
import os
from unittest.mock import MagicMock

import pytest

from genius_chat.dispatch import ChatController
from genius_chat.protocols import ServiceStatus

# The desktop window tests run headless on Toga's dummy backend.
os.environ.setdefault("TOGA_BACKEND", "toga_dummy")


class FakeInferenceService:
    """Scripted ``InferenceService``.

    Replies are handed out in order (falling back to an echo). When ``hold``
    is set, ``respond`` waits on it so tests can observe the in-flight state.
    """

    def __init__(self, replies=None, *, status=None, error=None, hold=None):
        self.status = status or ServiceStatus.ready()
        self.replies = list(replies or [])
        self.error = error
        self.hold = hold
        self.prompts: list[str] = []
        self.availability_checks = 0

    def availability(self) -> ServiceStatus:
        self.availability_checks += 1
        return self.status

    async def respond(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.hold is not None:
            await self.hold.wait()
        if self.error is not None:
            raise self.error
        if self.replies:
            return self.replies.pop(0)
        return f"echo: {prompt}"


def make_mock_model(available=True, reason=None):
    """A stand-in for ``apple_fm_sdk.SystemLanguageModel``."""
    model = MagicMock()
    model.is_available.return_value = (available, None if available else reason)
    return model


async def settle(rounds: int = 5) -> None:
    """Let pending tasks run up to their next suspension point."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture
def service():
    return FakeInferenceService(["hi there"])


@pytest.fixture
def controller(service):
    return ChatController(service)
