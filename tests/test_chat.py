"""Unit tests for the chat session."""
import asyncio

import pytest

from conftest import GREETING, make_fast_model
from safeaichat.chat import (
    CLEARED_TEXT,
    INIT_FAILED_TEXT,
    WELCOME_TEXT,
    ChatSession,
    ChatUiState,
    Message,
    error_notice,
    filtered_notice,
)
from safeaichat.llm import SimulatedNanoModel
from safeaichat.llm.providers.simulated import UNAVAILABLE_MESSAGE
from safeaichat.safety import SafetyLevel, SafetySettings

HARASSMENT = "Content blocked: Potential harassment detected"


class TestMessage:
    """Tests for Message model."""

    def test_defaults(self):
        message = Message(text="hello", is_user=True)

        assert message.id
        assert message.timestamp > 0
        assert not message.was_filtered
        assert message.filter_reason is None

    def test_message_is_frozen(self):
        message = Message(text="hello", is_user=True)
        with pytest.raises(ValueError):
            message.text = "changed"  # type: ignore[misc]

    def test_ids_are_unique(self):
        assert Message(text="a", is_user=True).id != Message(text="a", is_user=True).id


class TestChatSessionInitialize:
    """Tests for ChatSession.initialize."""

    @pytest.mark.asyncio
    async def test_initialize_shows_welcome(self, session):
        assert await session.initialize()

        state = session.state
        assert state.is_initialized
        assert not state.is_loading
        assert [m.text for m in state.messages] == [WELCOME_TEXT]

    @pytest.mark.asyncio
    async def test_initialize_failure_sets_error(self):
        session = ChatSession(make_fast_model(available=False))

        assert not await session.initialize()
        assert session.state.error == INIT_FAILED_TEXT
        assert not session.state.is_initialized
        assert not session.state.is_loading


class TestChatSessionSendMessage:
    """Tests for ChatSession.send_message."""

    @pytest.mark.asyncio
    async def test_reply_streams_into_one_message(self, session):
        snapshots: list[ChatUiState] = []
        await session.initialize()
        session.subscribe(snapshots.append)

        await session.send_message("hi there")

        messages = session.state.messages
        assert [m.is_user for m in messages] == [False, True, False]
        assert messages[1].text == "hi there"
        assert messages[2].text == GREETING
        assert not session.state.is_loading

        # Every streamed snapshot carries the same response id with growing text
        response_texts = [
            s.messages[2].text for s in snapshots if len(s.messages) == 3
        ]
        assert response_texts[0] == "Hello!"
        assert response_texts[-1] == GREETING
        assert len({s.messages[2].id for s in snapshots if len(s.messages) == 3}) == 1

    @pytest.mark.asyncio
    async def test_loading_while_streaming(self, session):
        loading = []
        session.subscribe(lambda state: loading.append(state.is_loading))

        await session.send_message("hi there")

        assert True in loading
        assert loading[-1] is False

    @pytest.mark.asyncio
    async def test_blank_message_ignored(self, session):
        await session.send_message("   ")
        assert session.state.messages == []

    @pytest.mark.asyncio
    async def test_filtered_message(self, session):
        await session.send_message("please don't harass me")

        reply = session.state.messages[-1]
        assert reply.was_filtered
        assert reply.filter_reason == HARASSMENT
        assert reply.text == filtered_notice(HARASSMENT)
        assert reply.text.startswith("⚠️ ")
        assert not session.state.is_loading

    @pytest.mark.asyncio
    async def test_error_message_keeps_session_usable(self):
        session = ChatSession(make_fast_model(available=False))

        await session.send_message("hi there")
        assert session.state.messages[-1].text == error_notice(UNAVAILABLE_MESSAGE)
        assert not session.state.messages[-1].was_filtered

        await session.send_message("hello again")
        assert len(session.state.messages) == 4

    @pytest.mark.asyncio
    async def test_settings_apply_to_next_message(self, session):
        await session.send_message("attack")
        assert session.state.messages[-1].was_filtered

        session.update_safety_settings(SafetySettings(block_harassment=False))
        await session.send_message("attack")

        assert not session.state.messages[-1].was_filtered
        assert session.state.safety_settings.block_harassment is False

    @pytest.mark.asyncio
    async def test_cancelled_task_clears_loading(self):
        session = ChatSession(make_fast_model(chunk_delay=0.01))
        task = asyncio.create_task(session.send_message("hi there"))

        while len(session.state.messages) < 2:
            await asyncio.sleep(0.005)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert not session.state.is_loading
        assert session.state.messages[-1].text != GREETING

    @pytest.mark.asyncio
    async def test_newer_message_supersedes_older(self):
        session = ChatSession(make_fast_model(chunk_delay=0.01))
        first = asyncio.create_task(session.send_message("hi there"))

        while len(session.state.messages) < 2:
            await asyncio.sleep(0.005)
        await session.send_message("is it private?")
        await first

        replies = [m for m in session.state.messages if not m.is_user]
        assert replies[-1].text.startswith("Privacy is my core feature!")
        assert GREETING not in [m.text for m in replies]

    @pytest.mark.asyncio
    async def test_cancel_stops_streaming_reply(self):
        """cancel() stops updates; the pending send returns normally."""
        session = ChatSession(make_fast_model(chunk_delay=0.01))
        task = asyncio.create_task(session.send_message("hi there"))

        while len(session.state.messages) < 2:
            await asyncio.sleep(0.005)
        session.cancel()
        partial = session.state.messages[-1].text
        await task

        assert not session.state.is_loading
        assert session.state.messages[-1].text == partial
        assert GREETING not in [m.text for m in session.state.messages]

    @pytest.mark.asyncio
    async def test_cancel_when_idle(self, session):
        await session.send_message("hi there")
        session.cancel()

        assert not session.state.is_loading
        assert session.state.messages[-1].text == GREETING


class TestChatSessionClear:
    """Tests for ChatSession.clear_chat."""

    @pytest.mark.asyncio
    async def test_clear_resets_to_notice(self, session):
        await session.initialize()
        await session.send_message("hi there")

        await session.clear_chat()

        assert [m.text for m in session.state.messages] == [CLEARED_TEXT]
        assert not session.state.is_loading

    @pytest.mark.asyncio
    async def test_clear_stops_streaming_reply(self):
        session = ChatSession(make_fast_model(chunk_delay=0.01))
        task = asyncio.create_task(session.send_message("hi there"))

        while len(session.state.messages) < 2:
            await asyncio.sleep(0.005)
        await session.clear_chat()
        await task

        assert [m.text for m in session.state.messages] == [CLEARED_TEXT]

    @pytest.mark.asyncio
    async def test_clear_calls_model(self):
        cleared = []

        class TrackingModel(SimulatedNanoModel):
            async def clear_data(self) -> None:
                cleared.append(True)

        session = ChatSession(TrackingModel(processing_delay=0.0, chunk_delay=0.0))
        await session.clear_chat()

        assert cleared == [True]


class TestChatSessionState:
    """Tests for indicators and subscriptions."""

    def test_toggle_indicators(self, session):
        assert session.toggle_privacy_indicator() is False
        assert session.toggle_privacy_indicator() is True
        assert session.toggle_offline_indicator() is False
        assert session.state.show_offline_indicator is False

    def test_initial_settings(self):
        settings = SafetySettings(level=SafetyLevel.PERMISSIVE)
        session = ChatSession(make_fast_model(), settings=settings)
        assert session.state.safety_settings == settings

    def test_subscribe_and_unsubscribe(self, session):
        seen = []
        unsubscribe = session.subscribe(seen.append)
        assert len(seen) == 1

        session.toggle_privacy_indicator()
        unsubscribe()
        session.toggle_privacy_indicator()

        assert len(seen) == 2

    def test_debug_callback_propagates_to_model(self, session):
        records = []
        session.set_debug_callback(lambda level, component, message: records.append(component))
        session.update_safety_settings(SafetySettings())

        assert records == ["Safety"]
        session.model._debug("info", "Model", "ping")
        assert records[-1] == "Model"
