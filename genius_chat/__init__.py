"""
Genius: a minimal chat front end for the on-device Apple Foundation Model.

The core (message log, availability gate, dispatch controller) is plain
asyncio and does not import ``apple_fm_sdk``; the SDK is only touched by
``AppleFoundationModelService`` when a session is actually opened.
"""

from .availability import Blocked, BlockReason, Ready, block_message, check_availability
from .config import ChatSettings
from .dispatch import BusyPolicy, ChatController, Phase, SendOutcome
from .exceptions import AppleFMSetupError, GeniusChatError
from .inference import AppleFoundationModelService
from .messages import Message, MessageStore, Role
from .protocols import InferenceService, ServiceStatus
from .state import ConversationSnapshot, ConversationState

__all__ = [
    "AppleFMSetupError",
    "AppleFoundationModelService",
    "BlockReason",
    "Blocked",
    "BusyPolicy",
    "ChatController",
    "ChatSettings",
    "ConversationSnapshot",
    "ConversationState",
    "GeniusChatError",
    "InferenceService",
    "Message",
    "MessageStore",
    "Phase",
    "Ready",
    "Role",
    "SendOutcome",
    "ServiceStatus",
    "block_message",
    "check_availability",
]
