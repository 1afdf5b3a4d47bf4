"""
genius-chat CLI: talk to the on-device model from a terminal or open the
desktop window.

Registered as the `genius-chat` console script via pyproject.toml.
"""

import asyncio
import importlib.util
import shutil

import click

from .availability import Blocked, check_availability
from .config import DEFAULT_INSTRUCTIONS, ChatSettings
from .dispatch import BusyPolicy, ChatController, SendOutcome
from .exceptions import AppleFMSetupError, require_apple_fm
from .inference import AppleFoundationModelService
from .logs import configure_logging
from .messages import Role
from .presentation import TypingIndicator, format_message, render_transcript
from .protocols import InferenceService
from .state import ConversationSnapshot

QUIT_COMMANDS = {"/quit", "/exit"}


def _build_service(instructions: str) -> InferenceService:
    """Create the Apple Foundation Models backed service."""
    require_apple_fm("genius-chat")
    return AppleFoundationModelService(instructions=instructions)


def _terminal_width() -> int:
    return max(40, min(100, shutil.get_terminal_size((88, 24)).columns))


def _fail_missing_dependencies(
    *, command_name: str, missing: list[str], install_steps: list[str]
) -> None:
    """Exit with actionable dependency guidance."""
    if not missing:
        return
    click.secho(
        f"{command_name} requires optional dependencies that are missing:",
        fg="red",
        err=True,
        bold=True,
    )
    for module in missing:
        click.echo(f"  - {module}", err=True)
    click.echo("", err=True)
    click.secho("Install with:", fg="cyan", err=True)
    for step in install_steps:
        click.echo(f"  {step}", err=True)
    raise SystemExit(2)


def _instructions_option(func):
    """System instructions shared by every command that opens a model session."""
    return click.option(
        "--instructions",
        default=DEFAULT_INSTRUCTIONS,
        show_default=True,
        help="System instructions for the model session.",
    )(func)


def _busy_policy_option(func):
    """Busy policy for the desktop window's controller."""
    return click.option(
        "--busy-policy",
        type=click.Choice([policy.value for policy in BusyPolicy]),
        default=BusyPolicy.REJECT.value,
        show_default=True,
        help="What to do with a message sent while a reply is still pending.",
    )(func)


# ── Main group ────────────────────────────────────────────────────────────────


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="genius-chat")
@click.option(
    "--log-level",
    default="warning",
    show_default=True,
    help="Logging level name or number (debug, info, warning, ...).",
)
def cli(log_level: str) -> None:
    """Genius: a small chat front end for the on-device Apple Foundation Model."""
    configure_logging(log_level)


# ── Availability ──────────────────────────────────────────────────────────────


@cli.command()
def status() -> None:
    """Check whether the on-device model can be used right now."""
    service = _build_service(DEFAULT_INSTRUCTIONS)
    gate = check_availability(service.availability())
    if isinstance(gate, Blocked):
        click.secho(gate.message, fg="yellow")
        raise SystemExit(1)
    click.secho("Ready", fg="green")


# ── One-shot ──────────────────────────────────────────────────────────────────


@cli.command()
@click.argument("text")
@_instructions_option
def ask(text: str, instructions: str) -> None:
    """Send a single message and print the conversation."""
    settings = ChatSettings(instructions=instructions)
    controller = ChatController(_build_service(settings.instructions))
    outcome = asyncio.run(controller.send(text))
    if outcome is SendOutcome.EMPTY:
        click.secho("Nothing to send.", fg="yellow", err=True)
        raise SystemExit(1)
    click.echo(
        render_transcript(controller.state.snapshot(), settings.assistant_name, _terminal_width())
    )
    raise SystemExit(0 if outcome is SendOutcome.REPLIED else 1)


# ── Interactive REPL ──────────────────────────────────────────────────────────


async def _repl(controller: ChatController, settings: ChatSettings) -> None:
    """Read lines until EOF or /quit, sending each through *controller*."""
    width = _terminal_width()
    printed = len(controller.messages)
    was_busy = controller.is_busy

    def on_change(snapshot: ConversationSnapshot) -> None:
        nonlocal printed, was_busy
        for message in snapshot.messages[printed:]:
            # The user already sees what they typed.
            if message.role is Role.ASSISTANT:
                click.secho(format_message(message, settings.assistant_name, width), fg="cyan")
        printed = len(snapshot.messages)
        if snapshot.is_busy and not was_busy:
            click.secho(
                f"{settings.assistant_name} is typing {TypingIndicator().render()}", dim=True
            )
        was_busy = snapshot.is_busy

    unsubscribe = controller.state.subscribe(on_change)
    try:
        while True:
            try:
                line = click.prompt("You", default="", show_default=False)
            except click.Abort:
                click.echo()
                break
            if line.strip().lower() in QUIT_COMMANDS:
                break
            await controller.send(line)
    finally:
        unsubscribe()


@cli.command()
@_instructions_option
def chat(instructions: str) -> None:
    """Start an interactive chat in the terminal (/quit to leave)."""
    settings = ChatSettings(instructions=instructions)
    controller = ChatController(_build_service(settings.instructions))
    click.secho(f"Chatting with {settings.assistant_name}. /quit to leave.", fg="cyan", bold=True)
    asyncio.run(_repl(controller, settings))


# ── Desktop app ───────────────────────────────────────────────────────────────


@cli.command()
@_instructions_option
@_busy_policy_option
def gui(instructions: str, busy_policy: str) -> None:
    """Open the Toga desktop chat window."""
    missing = [name for name in ("toga",) if importlib.util.find_spec(name) is None]
    _fail_missing_dependencies(
        command_name="genius-chat gui",
        missing=missing,
        install_steps=["pip install 'genius-chat[gui]'"],
    )
    require_apple_fm("genius-chat gui")

    from .app import main

    settings = ChatSettings(instructions=instructions, busy_policy=BusyPolicy(busy_policy))
    main(settings).main_loop()


# ── Entry point ───────────────────────────────────────────────────────────────


def cli_entry() -> None:
    """Entry point for the console_scripts."""
    try:
        cli()
    except AppleFMSetupError as exc:
        click.secho(str(exc), fg="red", err=True)
        raise SystemExit(2) from exc


if __name__ == "__main__":
    cli_entry()
