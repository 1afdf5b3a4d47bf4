"""Runtime settings for a chat session."""

from __future__ import annotations

from dataclasses import dataclass

from .dispatch import BusyPolicy

DEFAULT_INSTRUCTIONS = "Act like a pirate argh"
DEFAULT_ASSISTANT_NAME = "Genius"
TYPING_INTERVAL_SECONDS = 0.5


@dataclass
class ChatSettings:
    """Knobs shared by the terminal REPL and the desktop app."""

    instructions: str = DEFAULT_INSTRUCTIONS
    busy_policy: BusyPolicy = BusyPolicy.REJECT
    typing_interval_seconds: float = TYPING_INTERVAL_SECONDS
    assistant_name: str = DEFAULT_ASSISTANT_NAME

    def __post_init__(self) -> None:
        self.busy_policy = BusyPolicy(self.busy_policy)
        if self.typing_interval_seconds <= 0:
            raise ValueError("typing_interval_seconds must be > 0")
