"""``InferenceService`` backed by the on-device Apple Foundation Model."""

from __future__ import annotations

import logging
from typing import Any

from .config import DEFAULT_INSTRUCTIONS
from .protocols import ServiceStatus, create_model, create_session

logger = logging.getLogger("genius_chat.inference")


class AppleFoundationModelService:
    """Wraps ``SystemLanguageModel`` and one long-lived ``LanguageModelSession``.

    The session is created on first use and reused for every prompt, so the
    model keeps the conversation context between turns.
    """

    def __init__(self, instructions: str = DEFAULT_INSTRUCTIONS, model: Any = None) -> None:
        self.instructions = instructions
        self.model = model if model is not None else create_model()
        self._session: Any = None

    def availability(self) -> ServiceStatus:
        available, reason = self.model.is_available()
        if available:
            return ServiceStatus.ready()
        logger.debug("SystemLanguageModel unavailable: %s", reason)
        return ServiceStatus.unavailable(reason)

    @property
    def session(self) -> Any:
        if self._session is None:
            self._session = create_session(instructions=self.instructions, model=self.model)
        return self._session

    async def respond(self, prompt: str) -> str:
        response = await self.session.respond(prompt)
        content = getattr(response, "content", response)
        return str(content)

    def __repr__(self) -> str:
        return f"AppleFoundationModelService(instructions={self.instructions!r})"
