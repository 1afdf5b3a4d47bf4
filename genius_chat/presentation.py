"""
Toolkit-independent view logic for the chat window and the terminal REPL.

Nothing here draws anything: these helpers decide how a bubble looks, what
text a label shows, whether the send control is enabled and when the view
should scroll. The Toga app and the click REPL both render from them.
"""

from __future__ import annotations

import re
import textwrap
import uuid
from dataclasses import dataclass

from .config import DEFAULT_ASSISTANT_NAME
from .messages import Message, Role
from .state import ConversationSnapshot

COLOR_USER_TINT = "#00BCD466"
COLOR_ASSISTANT_TINT = "#FFFFFF99"
COLOR_USER_TEXT = "#0B1B2B"
COLOR_ASSISTANT_TEXT = "#FFFFFF"
COLOR_GLOW = "#00BCD4E6"

TYPING_DOTS = 3
DOT_ON = "●"
DOT_OFF = "○"

_INLINE_CODE = re.compile(r"`([^`]+)`")
_BOLD = (re.compile(r"\*\*(.+?)\*\*"), re.compile(r"__(.+?)__"))
_ITALIC = (re.compile(r"(?<!\w)\*(?!\s)(.+?)(?<!\s)\*(?!\w)"), re.compile(r"(?<!\w)_(.+?)_(?!\w)"))


@dataclass(frozen=True)
class BubbleStyle:
    align: str
    tint: str
    text_color: str
    glow: str | None


def bubble_style(role: Role) -> BubbleStyle:
    """User bubbles sit on the right, assistant bubbles on the left with a glow."""
    if role is Role.USER:
        return BubbleStyle(
            align="right", tint=COLOR_USER_TINT, text_color=COLOR_USER_TEXT, glow=None
        )
    return BubbleStyle(
        align="left", tint=COLOR_ASSISTANT_TINT, text_color=COLOR_ASSISTANT_TEXT, glow=COLOR_GLOW
    )


def display_text(content: str) -> str:
    """Strip light markdown markers for plain-label rendering.

    Only inline code, bold and italic are handled; everything else is shown
    as written. Code span contents stay literal.
    """
    if not content:
        return ""
    # Odd indices are the captured code spans.
    parts = _INLINE_CODE.split(content)
    for index in range(0, len(parts), 2):
        text = parts[index]
        for pattern in _BOLD:
            text = pattern.sub(r"\1", text)
        for pattern in _ITALIC:
            text = pattern.sub(r"\1", text)
        parts[index] = text
    return "".join(parts)


def can_submit(draft: str | None, is_busy: bool) -> bool:
    """Send is enabled only when idle and the trimmed draft has content."""
    return (not is_busy) and bool((draft or "").strip())


def speaker_label(message: Message, assistant_name: str = DEFAULT_ASSISTANT_NAME) -> str:
    return "You" if message.role is Role.USER else assistant_name


def format_message(
    message: Message, assistant_name: str = DEFAULT_ASSISTANT_NAME, width: int | None = None
) -> str:
    """One transcript entry, e.g. ``You: hello``."""
    line = f"{speaker_label(message, assistant_name)}: {display_text(message.content)}"
    if width is None or width <= 0:
        return line
    return "\n".join(
        textwrap.fill(part, width=width, subsequent_indent="  ") if part else part
        for part in line.splitlines()
    )


def render_transcript(
    snapshot: ConversationSnapshot,
    assistant_name: str = DEFAULT_ASSISTANT_NAME,
    width: int | None = None,
) -> str:
    """Full transcript text; a trailing typing line is shown while busy."""
    lines = [format_message(m, assistant_name, width) for m in snapshot.messages]
    if snapshot.is_busy:
        lines.append(f"{assistant_name}: {TypingIndicator().render()}")
    return "\n".join(lines)


class TypingIndicator:
    """Three dots with one highlighted, advanced on a fixed timer tick."""

    def __init__(self, dots: int = TYPING_DOTS) -> None:
        if dots <= 0:
            raise ValueError("dots must be > 0")
        self.dots = dots
        self.position = 0

    def advance(self) -> str:
        self.position = (self.position + 1) % self.dots
        return self.render()

    def render(self) -> str:
        return " ".join(DOT_ON if i == self.position else DOT_OFF for i in range(self.dots))

    def reset(self) -> None:
        self.position = 0


class ScrollFollower:
    """Reports the newest message id whenever the log has grown."""

    def __init__(self) -> None:
        self._seen = 0

    def update(self, snapshot: ConversationSnapshot) -> uuid.UUID | None:
        count = len(snapshot.messages)
        grew = count > self._seen
        self._seen = count
        if grew:
            return snapshot.messages[-1].id
        return None
