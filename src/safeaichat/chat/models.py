"""Data models for the chat session.

Hides how messages and screen state are represented.
"""

import time
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from ..safety import SafetySettings


def _now_ms() -> int:
    return int(time.time() * 1000)


class Message(BaseModel):
    """A chat message.

    Immutable; a streaming reply is shown by replacing the message that has
    the same id with one carrying longer text.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    text: str = Field(description="Message text")
    is_user: bool = Field(description="True if the user wrote the message")
    timestamp: int = Field(default_factory=_now_ms, description="Creation time in ms since epoch")
    was_filtered: bool = Field(default=False, description="Reply replaced by a safety notice")
    filter_reason: str | None = Field(default=None, description="Reason reported by the filter")


class ChatUiState(BaseModel):
    """Snapshot of everything the chat screen renders."""

    model_config = ConfigDict(frozen=True)

    messages: list[Message] = Field(default_factory=list)
    is_loading: bool = False
    is_initialized: bool = False
    error: str | None = None
    safety_settings: SafetySettings = Field(default_factory=SafetySettings)
    show_privacy_indicator: bool = True
    show_offline_indicator: bool = True
