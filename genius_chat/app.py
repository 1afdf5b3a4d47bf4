"""Toga desktop window for chatting with the on-device Apple Foundation Model.

The window only renders: every decision (what a bubble looks like, when Send
is enabled, when to scroll) comes from ``genius_chat.presentation`` and every
state change goes through ``ChatController``.
"""

from __future__ import annotations

import asyncio
import contextlib

import toga
from toga.style import Pack
from toga.style.pack import COLUMN, HIDDEN, ROW, VISIBLE

from .config import ChatSettings
from .dispatch import ChatController
from .inference import AppleFoundationModelService
from .messages import Message
from .presentation import (
    ScrollFollower,
    TypingIndicator,
    bubble_style,
    can_submit,
    display_text,
)
from .protocols import InferenceService
from .state import ConversationSnapshot

FONT_SIZE_BODY = 12
COLOR_APP_BG = "#1B4F72"
COLOR_INPUT_BG = "#FFFFFF40"
COLOR_TEXT_PRIMARY = "#FFFFFF"
COLOR_TYPING_BG = "#FFFFFF4D"


class GeniusChatApp(toga.App):
    """Single-window chat: message bubbles, a typing indicator and an input bar."""

    def __init__(
        self,
        *args,
        settings: ChatSettings | None = None,
        service: InferenceService | None = None,
        **kwargs,
    ) -> None:
        self.settings = settings or ChatSettings()
        self._service = service
        super().__init__(*args, **kwargs)

    def startup(self) -> None:
        """Build the UI and wire it to a fresh conversation."""
        service = self._service or AppleFoundationModelService(
            instructions=self.settings.instructions
        )
        self.controller = ChatController(service, busy_policy=self.settings.busy_policy)
        self._typing = TypingIndicator()
        self._scroll = ScrollFollower()
        self._typing_task: asyncio.Task | None = None
        self._rendered = 0

        self._build_ui()
        self._unsubscribe = self.controller.state.subscribe(self._on_state_changed)
        self._on_state_changed(self.controller.state.snapshot())
        self.main_window.show()

    def _build_ui(self) -> None:
        self.messages_box = toga.Box(style=Pack(direction=COLUMN, margin=(8, 8, 80, 8)))
        self.scroll = toga.ScrollContainer(
            horizontal=False,
            content=self.messages_box,
            style=Pack(flex=1, background_color=COLOR_APP_BG),
        )

        self.typing_label = toga.Label(
            self._typing.render(),
            style=Pack(
                margin=12,
                background_color=COLOR_TYPING_BG,
                color=COLOR_TEXT_PRIMARY,
                font_size=FONT_SIZE_BODY,
            ),
        )
        self.typing_row = toga.Box(style=Pack(direction=ROW, margin=(8, 0), visibility=HIDDEN))
        self.typing_row.add(toga.Box(style=Pack(flex=1)))
        self.typing_row.add(self.typing_label)
        self.typing_row.add(toga.Box(style=Pack(flex=1)))

        self.prompt_input = toga.TextInput(
            placeholder="Say something…",
            on_change=self.on_prompt_change,
            on_confirm=self.on_send,
            style=Pack(
                flex=1,
                margin=10,
                background_color=COLOR_INPUT_BG,
                font_size=FONT_SIZE_BODY,
            ),
        )
        self.send_button = toga.Button(
            "Send",
            on_press=self.on_send,
            enabled=False,
            style=Pack(margin=(10, 0, 10, 8), font_weight="bold"),
        )
        input_bar = toga.Box(style=Pack(direction=ROW, margin=(8, 16)))
        input_bar.add(self.prompt_input)
        input_bar.add(self.send_button)

        root = toga.Box(style=Pack(direction=COLUMN, flex=1, background_color=COLOR_APP_BG))
        root.add(self.scroll)
        root.add(self.typing_row)
        root.add(input_bar)

        self.main_window = toga.MainWindow(title=self.formal_name, size=(480, 720))
        self.main_window.content = root

    def _bubble(self, message: Message) -> toga.Box:
        """One chat bubble, pushed left or right by a flexible spacer."""
        style = bubble_style(message.role)
        label = toga.Label(
            display_text(message.content),
            style=Pack(
                margin=12,
                background_color=style.tint,
                color=style.text_color,
                font_size=FONT_SIZE_BODY,
            ),
        )
        row = toga.Box(style=Pack(direction=ROW, margin=(6, 0)))
        spacer = toga.Box(style=Pack(flex=1))
        if style.align == "right":
            row.add(spacer)
            row.add(label)
        else:
            row.add(label)
            row.add(spacer)
        return row

    def _on_state_changed(self, snapshot: ConversationSnapshot) -> None:
        for message in snapshot.messages[self._rendered :]:
            self.messages_box.add(self._bubble(message))
        self._rendered = len(snapshot.messages)

        if self._scroll.update(snapshot) is not None:
            with contextlib.suppress(Exception):
                self.scroll.vertical_position = self.scroll.max_vertical_position

        if snapshot.is_busy:
            self._start_typing()
        else:
            self._stop_typing()
        self._refresh_send_enabled()

    def _refresh_send_enabled(self) -> None:
        self.send_button.enabled = can_submit(self.prompt_input.value, self.controller.is_busy)

    def on_prompt_change(self, widget: toga.Widget) -> None:
        del widget
        self._refresh_send_enabled()

    async def on_send(self, widget: toga.Widget) -> None:
        """Clear the draft and hand the trimmed text to the controller."""
        del widget
        if not can_submit(self.prompt_input.value, self.controller.is_busy):
            return
        text = (self.prompt_input.value or "").strip()
        self.prompt_input.value = ""
        self._refresh_send_enabled()
        await self.controller.send(text)

    def _start_typing(self) -> None:
        self.typing_row.style.visibility = VISIBLE
        if self._typing_task is not None and not self._typing_task.done():
            return
        self._typing.reset()
        self._typing_task = asyncio.create_task(self._typing_loop())

    def _stop_typing(self) -> None:
        task = self._typing_task
        self._typing_task = None
        if task is not None and not task.done():
            task.cancel()
        self.typing_row.style.visibility = HIDDEN

    async def _typing_loop(self) -> None:
        """Advance the dots until the reply lands."""
        try:
            while self.controller.is_busy:
                self.typing_label.text = self._typing.render()
                await asyncio.sleep(self.settings.typing_interval_seconds)
                self._typing.advance()
        except asyncio.CancelledError:
            return

    def on_exit(self) -> bool:
        self._stop_typing()
        self._unsubscribe()
        return True


def main(settings: ChatSettings | None = None) -> GeniusChatApp:
    """Briefcase entrypoint."""
    return GeniusChatApp(
        formal_name="Genius",
        app_id="com.genius.chat",
        settings=settings,
    )
