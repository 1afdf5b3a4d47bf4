import pytest

from genius_chat.messages import Message, Role
from genius_chat.presentation import (
    DOT_OFF,
    DOT_ON,
    ScrollFollower,
    TypingIndicator,
    bubble_style,
    can_submit,
    display_text,
    format_message,
    render_transcript,
)
from genius_chat.state import ConversationSnapshot


@pytest.mark.parametrize(
    ("draft", "busy", "expected"),
    [
        ("hello", False, True),
        ("hello", True, False),
        ("   ", False, False),
        ("", False, False),
        (None, False, False),
    ],
)
def test_can_submit(draft, busy, expected):
    assert can_submit(draft, busy) is expected


def test_bubbles_are_placed_by_role():
    user = bubble_style(Role.USER)
    assistant = bubble_style(Role.ASSISTANT)

    assert user.align == "right"
    assert assistant.align == "left"
    assert user.glow is None
    assert assistant.glow is not None
    assert user.tint != assistant.tint


@pytest.mark.parametrize(
    ("content", "expected"),
    [
        ("**Ahoy** matey", "Ahoy matey"),
        ("run `pip install` now", "run pip install now"),
        ("pass `**kwargs**` and `_private_`", "pass **kwargs** and _private_"),
        ("**bold** then `*args`", "bold then *args"),
        ("an *important* point", "an important point"),
        ("__bold__ and _soft_", "bold and soft"),
        ("2 * 3 * 4", "2 * 3 * 4"),
        ("snake_case_name", "snake_case_name"),
        ("", ""),
    ],
)
def test_display_text_strips_light_markdown(content, expected):
    assert display_text(content) == expected


def test_typing_indicator_cycles_through_dots():
    indicator = TypingIndicator()
    assert indicator.render() == f"{DOT_ON} {DOT_OFF} {DOT_OFF}"
    assert indicator.advance() == f"{DOT_OFF} {DOT_ON} {DOT_OFF}"
    assert indicator.advance() == f"{DOT_OFF} {DOT_OFF} {DOT_ON}"
    assert indicator.advance() == f"{DOT_ON} {DOT_OFF} {DOT_OFF}"

    indicator.advance()
    indicator.reset()
    assert indicator.position == 0


def test_typing_indicator_rejects_zero_dots():
    with pytest.raises(ValueError):
        TypingIndicator(dots=0)


def test_scroll_follower_reports_newest_message_only_on_growth():
    follower = ScrollFollower()
    first = Message.user("hello")
    second = Message.assistant("hi")

    assert follower.update(ConversationSnapshot((), False)) is None
    assert follower.update(ConversationSnapshot((first,), False)) == first.id
    assert follower.update(ConversationSnapshot((first,), True)) is None
    assert follower.update(ConversationSnapshot((first, second), True)) == second.id


def test_render_transcript_shows_typing_line_while_busy():
    snapshot = ConversationSnapshot((Message.user("hello"),), is_busy=True)

    text = render_transcript(snapshot, assistant_name="Genius")

    assert text.splitlines()[0] == "You: hello"
    assert text.splitlines()[-1].startswith("Genius: ")
    assert DOT_ON in text


def test_render_transcript_when_idle():
    snapshot = ConversationSnapshot(
        (Message.user("hello"), Message.assistant("hi **there**")), is_busy=False
    )

    assert render_transcript(snapshot) == "You: hello\nGenius: hi there"


def test_format_message_wraps_long_lines():
    message = Message.assistant("word " * 30)

    wrapped = format_message(message, width=40)

    assert all(len(line) <= 40 for line in wrapped.splitlines())
    assert wrapped.startswith("Genius: ")
