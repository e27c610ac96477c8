"""Canned replies used by the simulated model.

Rules are checked in order against the lower-cased prompt and the first
matching rule wins, so "hello from devfest" gets the DevFest reply.
"""

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class CannedResponse:
    """A reply chosen when its predicate matches the prompt."""

    name: str
    matches: Callable[[str], bool]
    text: str


def _any_of(*keywords: str) -> Callable[[str], bool]:
    return lambda prompt: any(keyword in prompt for keyword in keywords)


def _all_of(*keywords: str) -> Callable[[str], bool]:
    return lambda prompt: all(keyword in prompt for keyword in keywords)


CANNED_RESPONSES: tuple[CannedResponse, ...] = (
    CannedResponse(
        name="devfest",
        matches=_any_of("devfest", "gdg"),
        text=(
            "GDG DevFest 2025 is happening right now in Johannesburg at The Tryst, Sandton! "
            "DevFest is Google's annual community-led developer festival, bringing together "
            "developers to learn about the latest Google technologies, share knowledge, and "
            "network with the local tech community."
        ),
    ),
    CannedResponse(
        name="venue",
        matches=_any_of("johannesburg", "sandton", "tryst"),
        text=(
            "We're at The Tryst in Sandton for GDG DevFest 2025! It's an amazing venue for "
            "learning about cutting-edge technologies like on-device AI, Android development, "
            "and Google Cloud. Are you attending today?"
        ),
    ),
    CannedResponse(
        name="event",
        matches=_any_of("event", "conference"),
        text=(
            "This demo is being presented at GDG DevFest 2025 in Johannesburg! DevFest brings "
            "together developers from across the region to explore the latest in Google "
            "technologies, including exciting innovations like Gemini Nano that I'm powered by."
        ),
    ),
    CannedResponse(
        name="greeting",
        matches=_any_of("hello", "hi"),
        text=(
            "Hello! I'm running entirely on your device using Gemini Nano. Your data never "
            "leaves your phone. How can I help you today?"
        ),
    ),
    CannedResponse(
        name="offline",
        matches=_any_of("offline", "internet"),
        text=(
            "Great question! I work completely offline because I'm powered by Gemini Nano, "
            "which runs directly on your device. No internet connection required, and your "
            "conversations stay 100% private."
        ),
    ),
    CannedResponse(
        name="privacy",
        matches=_any_of("privacy", "private"),
        text=(
            "Privacy is my core feature! Since I run on-device with Gemini Nano, your messages "
            "never leave your phone. No servers, no cloud storage, no data collection. "
            "Everything stays with you."
        ),
    ),
    CannedResponse(
        name="safety",
        matches=_any_of("safe", "safety"),
        text=(
            "Safety is built into Gemini Nano. I use multiple safety filters to block harmful "
            "content, including harassment, hate speech, and dangerous instructions. You can "
            "see these filters in action in the settings."
        ),
    ),
    CannedResponse(
        name="speed",
        matches=_any_of("fast", "speed"),
        text=(
            "On-device AI is incredibly fast! There's no network latency since everything runs "
            "locally. Try turning on airplane mode - I'll still work perfectly!"
        ),
    ),
    CannedResponse(
        name="how_it_works",
        matches=_all_of("how", "work"),
        text=(
            "I'm powered by Gemini Nano, Google's on-device AI model. It runs through Android's "
            "AICore, processing everything locally on your device. This means low latency, "
            "complete privacy, and offline capability."
        ),
    ),
)

DEFAULT_RESPONSE = (
    "I'm an on-device AI assistant powered by Gemini Nano. I can answer questions, have "
    "conversations, and help with various tasks - all while keeping your data private and "
    "working offline. What would you like to know?"
)


def select_canned_response(prompt: str) -> str:
    """Pick the reply for a prompt, falling back to DEFAULT_RESPONSE."""
    lowered = prompt.lower()
    for response in CANNED_RESPONSES:
        if response.matches(lowered):
            return response.text
    return DEFAULT_RESPONSE
