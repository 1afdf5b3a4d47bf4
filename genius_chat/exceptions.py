"""Error types shared by the chat core, the CLI and the desktop app."""

from __future__ import annotations

import importlib.util

_INSTALL_HINT = (
    "genius-chat needs the Apple Foundation Models SDK (apple_fm_sdk), "
    "which is installed manually on macOS 26+ with Apple Intelligence.\n"
    "See https://github.com/apple/python-apple-fm-sdk for instructions."
)


class GeniusChatError(Exception):
    """Base class for errors raised by genius_chat."""


class AppleFMSetupError(GeniusChatError, RuntimeError):
    """The Apple Foundation Models SDK cannot be used from this interpreter."""


def require_apple_fm(context: str) -> None:
    """Raise ``AppleFMSetupError`` if ``apple_fm_sdk`` is not importable."""
    if importlib.util.find_spec("apple_fm_sdk") is None:
        raise AppleFMSetupError(f"[{context}] 'apple_fm_sdk' is not installed.\n{_INSTALL_HINT}")


def describe_error(exc: BaseException) -> str:
    """Human-readable description of an inference failure."""
    text = str(exc).strip()
    return text or type(exc).__name__
