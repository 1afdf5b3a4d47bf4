"""Log level resolution and handler setup for the CLI and desktop entry points."""

from __future__ import annotations

import logging

logger = logging.getLogger("genius_chat")

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def resolve_log_level(level: str | int, fallback: int = logging.WARNING) -> int:
    """Accept ``"info"``, ``"INFO"``, ``"20"`` or ``20``."""
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        if level.isdigit():
            return int(level)
        resolved = logging.getLevelName(level.upper())
        if isinstance(resolved, int):
            return resolved
    logger.warning(
        "[genius-chat] Unsupported log level '%s'; falling back to %s.",
        level,
        logging.getLevelName(fallback),
    )
    return fallback


def configure_logging(level: str | int = "warning") -> int:
    """Configure root logging for the CLI and desktop entry points."""
    resolved = resolve_log_level(level)
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    logging.getLogger("genius_chat").setLevel(resolved)
    return resolved
