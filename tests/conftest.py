"""Pytest configuration and shared fixtures."""
import asyncio

import pytest

from safeaichat.chat import ChatSession
from safeaichat.llm import SimulatedNanoModel
from safeaichat.safety import SafetySettings

GREETING = (
    "Hello! I'm running entirely on your device using Gemini Nano. "
    "Your data never leaves your phone. How can I help you today?"
)


def make_fast_model(**kwargs) -> SimulatedNanoModel:
    """Simulated model without pacing delays."""
    config = {
        "processing_delay": 0.0,
        "chunk_delay": 0.0,
        "availability_delay": 0.0,
        "init_delay": 0.0,
        "clear_delay": 0.0,
    }
    config.update(kwargs)
    return SimulatedNanoModel(**config)


async def collect_events(model, prompt, settings=None):
    """Drain a generate() stream into a list."""
    return [event async for event in model.generate(prompt, settings or SafetySettings())]


def run_collect(model, prompt, settings=None):
    """Synchronous wrapper for property tests."""
    return asyncio.run(collect_events(model, prompt, settings))


@pytest.fixture
def default_settings():
    """Most restrictive settings."""
    return SafetySettings()


@pytest.fixture
def permissive_settings():
    """Settings with every block turned off."""
    return SafetySettings(
        block_harassment=False,
        block_hate_speech=False,
        block_sexual_content=False,
        block_dangerous_content=False,
    )


@pytest.fixture
def fast_model():
    """Simulated model without delays."""
    return make_fast_model()


@pytest.fixture
def session(fast_model):
    """Chat session around the fast model."""
    return ChatSession(fast_model)


@pytest.fixture
def model_env(monkeypatch):
    """Environment for CLI commands with no pacing delays."""
    monkeypatch.setenv("SAFEAICHAT_MODEL", "simulated")
    monkeypatch.setenv("SAFEAICHAT_PROCESSING_DELAY", "0")
    monkeypatch.setenv("SAFEAICHAT_CHUNK_DELAY", "0")
    for name in (
        "SAFEAICHAT_SAFETY_LEVEL",
        "SAFEAICHAT_BLOCK_HARASSMENT",
        "SAFEAICHAT_BLOCK_HATE_SPEECH",
        "SAFEAICHAT_BLOCK_SEXUAL_CONTENT",
        "SAFEAICHAT_BLOCK_DANGEROUS_CONTENT",
    ):
        monkeypatch.delenv(name, raising=False)
