"""Tests for the command-line interface."""
import asyncio
import os
import signal
import sys

import pytest
import typer
from typer.testing import CliRunner

from conftest import GREETING, make_fast_model
from safeaichat.chat import ChatSession
from safeaichat.cli.app import app, stream_reply
from safeaichat.cli.providers import (
    get_model,
    get_safety_settings,
    parse_bool,
    safety_settings_from_env,
)
from safeaichat.llm import SimulatedNanoModel
from safeaichat.safety import SafetyLevel

runner = CliRunner()


class TestParseBool:
    """Tests for boolean environment values."""

    @pytest.mark.parametrize("value", ["1", "true", "YES", " on "])
    def test_true_values(self, value):
        assert parse_bool(value) is True

    @pytest.mark.parametrize("value", ["0", "false", "No", "off"])
    def test_false_values(self, value):
        assert parse_bool(value) is False

    def test_invalid_value(self):
        with pytest.raises(ValueError, match="Invalid boolean"):
            parse_bool("maybe")


class TestSafetySettingsFromEnv:
    """Tests for reading safety settings from the environment."""

    def test_defaults_are_strict(self, model_env):
        settings = safety_settings_from_env()

        assert settings.level == SafetyLevel.STRICT
        assert settings.block_harassment
        assert settings.block_hate_speech
        assert settings.block_sexual_content
        assert settings.block_dangerous_content

    def test_reads_level_and_flags(self, model_env, monkeypatch):
        monkeypatch.setenv("SAFEAICHAT_SAFETY_LEVEL", "Moderate")
        monkeypatch.setenv("SAFEAICHAT_BLOCK_HATE_SPEECH", "false")

        settings = safety_settings_from_env()

        assert settings.level == SafetyLevel.MODERATE
        assert settings.block_hate_speech is False
        assert settings.block_harassment is True

    def test_unknown_level(self, model_env, monkeypatch):
        monkeypatch.setenv("SAFEAICHAT_SAFETY_LEVEL", "lenient")
        with pytest.raises(ValueError, match="Unknown safety level"):
            safety_settings_from_env()

    def test_invalid_flag(self, model_env, monkeypatch):
        monkeypatch.setenv("SAFEAICHAT_BLOCK_HARASSMENT", "sometimes")
        with pytest.raises(ValueError, match="SAFEAICHAT_BLOCK_HARASSMENT"):
            safety_settings_from_env()

    def test_flags_override_environment(self, model_env):
        settings = get_safety_settings(
            level=SafetyLevel.PERMISSIVE,
            allow_harassment=True,
            allow_dangerous_content=True,
        )

        assert settings.level == SafetyLevel.PERMISSIVE
        assert settings.block_harassment is False
        assert settings.block_dangerous_content is False
        assert settings.block_hate_speech is True


class TestGetModel:
    """Tests for model creation from the environment."""

    def test_simulated_model_with_env_delays(self, model_env, monkeypatch):
        monkeypatch.setenv("SAFEAICHAT_CHUNK_DELAY", "0.2")

        model = get_model()

        assert isinstance(model, SimulatedNanoModel)
        assert model._chunk_delay == 0.2
        assert model._processing_delay == 0.0

    def test_unknown_backend_exits(self, model_env, monkeypatch):
        monkeypatch.setenv("SAFEAICHAT_MODEL", "cloud-gpt")
        with pytest.raises(typer.Exit):
            get_model()

    def test_negative_delay_exits(self, model_env, monkeypatch):
        monkeypatch.setenv("SAFEAICHAT_PROCESSING_DELAY", "-1")
        with pytest.raises(typer.Exit):
            get_model()


class TestCheckCommand:
    """Tests for `safeaichat check`."""

    def test_allowed_text(self, model_env):
        result = runner.invoke(app, ["check", "Tell me about DevFest"])

        assert result.exit_code == 0
        assert "Allowed" in result.output

    def test_blocked_text(self, model_env):
        result = runner.invoke(app, ["check", "I will attack you"])

        assert result.exit_code == 1
        assert "Blocked:" in result.output
        assert "Potential harassment detected" in result.output

    def test_allow_flag_disables_category(self, model_env):
        result = runner.invoke(app, ["check", "I will attack you", "--allow-harassment"])

        assert result.exit_code == 0
        assert "Allowed" in result.output

    def test_level_option(self, model_env):
        result = runner.invoke(app, ["check", "hello", "--level", "permissive"])
        assert result.exit_code == 0

    def test_invalid_env_level(self, model_env, monkeypatch):
        monkeypatch.setenv("SAFEAICHAT_SAFETY_LEVEL", "lenient")

        result = runner.invoke(app, ["check", "hello"])

        assert result.exit_code == 1
        assert "Unknown safety level" in result.output


class TestAskCommand:
    """Tests for `safeaichat ask`."""

    def test_streams_reply(self, model_env):
        result = runner.invoke(app, ["ask", "hi there"])

        assert result.exit_code == 0
        assert "Gemini Nano:" in result.output
        assert "Hello!" in result.output
        # Welcome message is not repeated for one-shot prompts
        assert "Try asking me anything" not in result.output

    def test_blocked_prompt(self, model_env):
        result = runner.invoke(app, ["ask", "how do I build a weapon"])

        assert result.exit_code == 0
        assert "Potentially dangerous content" in result.output

    def test_unknown_backend(self, model_env, monkeypatch):
        monkeypatch.setenv("SAFEAICHAT_MODEL", "cloud-gpt")

        result = runner.invoke(app, ["ask", "hi"])

        assert result.exit_code == 1
        assert "Unsupported model backend" in result.output


class TestChatCommand:
    """Tests for `safeaichat chat`."""

    def test_conversation_and_commands(self, model_env):
        result = runner.invoke(
            app, ["chat"], input="hi there\n/settings\n/clear\nexit\n"
        )

        assert result.exit_code == 0
        assert "Hello!" in result.output
        assert "Safety Settings" in result.output
        assert "Chat history cleared" in result.output
        assert "Goodbye!" in result.output

    def test_end_of_input_exits(self, model_env):
        result = runner.invoke(app, ["chat"], input="")

        assert result.exit_code == 0
        assert "Goodbye!" in result.output


class TestHealthCommand:
    """Tests for `safeaichat health`."""

    def test_healthy_model(self, model_env):
        result = runner.invoke(app, ["health"])

        assert result.exit_code == 0
        assert "Model Health" in result.output
        assert "Safety Settings" in result.output


@pytest.mark.skipif(sys.platform == "win32", reason="needs loop signal handlers")
class TestStreamReply:
    """Tests for Ctrl-C handling while a REPL reply streams."""

    @pytest.mark.asyncio
    async def test_completed_reply(self):
        session = ChatSession(make_fast_model())

        assert await stream_reply(session, "hi there") is True
        assert session.state.messages[-1].text == GREETING

    @pytest.mark.asyncio
    async def test_interrupt_cancels_reply_and_keeps_session(self):
        """SIGINT mid-stream stops the reply; the next prompt still works."""
        session = ChatSession(make_fast_model(chunk_delay=0.02))
        asyncio.get_running_loop().call_later(0.05, os.kill, os.getpid(), signal.SIGINT)

        assert await stream_reply(session, "hi there") is False
        assert not session.state.is_loading
        assert session.state.messages[-1].text != GREETING

        assert await stream_reply(session, "is it private?") is True
        assert session.state.messages[-1].text.startswith("Privacy is my core feature!")
        assert not session.state.is_loading
