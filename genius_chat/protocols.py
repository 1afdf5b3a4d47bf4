"""
Inference boundary: the protocol the chat core talks to, plus factories for
the Apple Foundation Models objects behind it.

``apple_fm_sdk`` is resolved lazily so the core can be imported (and tested)
on machines without the SDK.
"""

from __future__ import annotations

import importlib
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class ServiceStatus:
    """Capability status reported by an inference service.

    ``reason`` is whatever the platform reports when unavailable (an SDK enum
    member, a string, or ``None``); the availability gate normalizes it.
    """

    available: bool
    reason: Any = None

    @classmethod
    def ready(cls) -> ServiceStatus:
        return cls(available=True)

    @classmethod
    def unavailable(cls, reason: Any = None) -> ServiceStatus:
        return cls(available=False, reason=reason)


@runtime_checkable
class InferenceService(Protocol):
    """Turns a prompt into response text."""

    def availability(self) -> ServiceStatus: ...

    async def respond(self, prompt: str) -> str: ...


def _fm() -> Any:
    return importlib.import_module("apple_fm_sdk")


def create_model() -> Any:
    """Return the default on-device ``SystemLanguageModel``."""
    return _fm().SystemLanguageModel()


def create_session(instructions: str | None = None, model: Any = None) -> Any:
    """Return a ``LanguageModelSession`` bound to *model* (default model if omitted)."""
    fm = _fm()
    if model is None:
        model = fm.SystemLanguageModel()
    if instructions:
        return fm.LanguageModelSession(model=model, instructions=instructions)
    return fm.LanguageModelSession(model=model)
