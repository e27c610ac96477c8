"""
SafeAIChat: a demo chat assistant that simulates on-device generation.

A keyword safety filter screens every prompt; prompts that pass get a canned
reply streamed back word by word. Each module hides one design decision.
"""

__version__ = "0.1.0"

from .chat import ChatSession, ChatUiState, Message
from .llm import (
    Chunk,
    Complete,
    Error,
    Filtered,
    GenerateResult,
    OnDeviceModel,
    Processing,
    SimulatedNanoModel,
    create_model,
)
from .safety import FilterDecision, SafetyLevel, SafetySettings, filter_content

__all__ = [
    "ChatSession",
    "ChatUiState",
    "Chunk",
    "Complete",
    "Error",
    "FilterDecision",
    "Filtered",
    "GenerateResult",
    "Message",
    "OnDeviceModel",
    "Processing",
    "SafetyLevel",
    "SafetySettings",
    "SimulatedNanoModel",
    "create_model",
    "filter_content",
]
