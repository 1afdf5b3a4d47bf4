"""Availability gate: decide whether a send may reach the model at all."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Any, assert_never

from .protocols import ServiceStatus


class BlockReason(enum.Enum):
    DEVICE_INELIGIBLE = "device-ineligible"
    FEATURE_DISABLED = "feature-disabled"
    MODEL_DOWNLOADING = "model-downloading"
    UNKNOWN_UNAVAILABLE = "unknown-unavailable"


@dataclass(frozen=True)
class Ready:
    pass


@dataclass(frozen=True)
class Blocked:
    reason: BlockReason

    @property
    def message(self) -> str:
        return block_message(self.reason)


Availability = Ready | Blocked

# Normalized spellings of the reasons apple_fm_sdk reports.
_PLATFORM_REASONS = {
    "devicenoteligible": BlockReason.DEVICE_INELIGIBLE,
    "appleintelligencenotenabled": BlockReason.FEATURE_DISABLED,
    "modelnotready": BlockReason.MODEL_DOWNLOADING,
    **{re.sub(r"[^a-z]", "", reason.value): reason for reason in BlockReason},
}


def block_message(reason: BlockReason) -> str:
    """Fixed user-facing text for a block reason."""
    if reason is BlockReason.DEVICE_INELIGIBLE:
        return "❌ Device not supported."
    if reason is BlockReason.FEATURE_DISABLED:
        return "❌ Enable Apple Intelligence in Settings."
    if reason is BlockReason.MODEL_DOWNLOADING:
        return "⌛ Model is downloading—please wait."
    if reason is BlockReason.UNKNOWN_UNAVAILABLE:
        return "❌ Model is unavailable."
    assert_never(reason)


def reason_from_platform(raw: Any) -> BlockReason:
    """Map a platform unavailability reason onto a ``BlockReason``.

    Accepts ``BlockReason`` values, SDK enum members (matched by name) and
    plain strings in any casing. Anything unrecognized is
    ``UNKNOWN_UNAVAILABLE``.
    """
    if isinstance(raw, BlockReason):
        return raw
    if raw is None:
        return BlockReason.UNKNOWN_UNAVAILABLE
    label = getattr(raw, "name", None) or str(raw)
    key = re.sub(r"[^a-z]", "", label.rsplit(".", 1)[-1].lower())
    return _PLATFORM_REASONS.get(key, BlockReason.UNKNOWN_UNAVAILABLE)


def check_availability(status: ServiceStatus) -> Availability:
    """Pure mapping from a service status to ``Ready`` or ``Blocked``."""
    if status.available:
        return Ready()
    return Blocked(reason_from_platform(status.reason))
