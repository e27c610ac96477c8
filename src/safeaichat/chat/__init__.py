"""Chat orchestration module for safeaichat.

Holds the in-memory conversation and threads safety settings through
every generation call.
"""

from .models import ChatUiState, Message
from .session import (
    CLEARED_TEXT,
    INIT_FAILED_TEXT,
    WELCOME_TEXT,
    ChatSession,
    error_notice,
    filtered_notice,
)

__all__ = [
    "CLEARED_TEXT",
    "INIT_FAILED_TEXT",
    "WELCOME_TEXT",
    "ChatSession",
    "ChatUiState",
    "Message",
    "error_notice",
    "filtered_notice",
]
