"""Chat session orchestration.

Owns the message list and the active safety settings, feeds user input to
the model and folds the resulting event stream back into the message list.
"""

import contextlib
from collections.abc import Callable
from typing import Any
from uuid import uuid4

from ..llm import Chunk, Complete, Error, Filtered, OnDeviceModel, Processing
from ..safety import SafetySettings
from .models import ChatUiState, Message

WELCOME_TEXT = (
    "👋 Hi! I'm powered by Gemini Nano running entirely on your device. "
    "Your conversations are private and work offline. Try asking me anything!"
)
CLEARED_TEXT = "✅ Chat history cleared. Your data has been deleted from this device."
INIT_FAILED_TEXT = "Failed to initialize AI model"

StateListener = Callable[[ChatUiState], None]


def filtered_notice(reason: str) -> str:
    """Text shown in place of a blocked reply."""
    return f"⚠️ {reason}\n\nThis message was blocked to keep our conversation safe and respectful."


def error_notice(message: str) -> str:
    """Text shown when generation fails."""
    return f"Sorry, I encountered an error: {message}"


class ChatSession:
    """State holder for one chat screen.

    Every change produces a new ChatUiState snapshot which is pushed to
    subscribed listeners.

    Example:
        session = ChatSession(create_model())
        await session.initialize()
        await session.send_message("hi there")
        print(session.state.messages[-1].text)
    """

    def __init__(self, model: OnDeviceModel, settings: SafetySettings | None = None):
        self._model = model
        self._state = ChatUiState(safety_settings=settings or SafetySettings())
        self._listeners: list[StateListener] = []
        self._generation = 0
        self._debug_callback: Any | None = None

    @property
    def state(self) -> ChatUiState:
        """Current screen state."""
        return self._state

    @property
    def model(self) -> OnDeviceModel:
        return self._model

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback for logging.

        Args:
            callback: Callable(level: str, component: str, message: str)

        The callback is propagated to the model.
        """
        self._debug_callback = callback
        self._model.set_debug_callback(callback)

    def _debug(self, level: str, component: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, component, message)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener for state snapshots.

        The listener is called immediately with the current state.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)
        listener(self._state)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _update(self, **changes: Any) -> None:
        self._state = self._state.model_copy(update=changes)
        for listener in list(self._listeners):
            listener(self._state)

    async def initialize(self) -> bool:
        """Initialize the model and show the welcome message.

        Returns:
            True if the model is ready
        """
        self._update(is_loading=True)

        if await self._model.initialize():
            self._update(
                is_initialized=True,
                is_loading=False,
                messages=[Message(text=WELCOME_TEXT, is_user=False)],
            )
            self._debug("info", "Chat", f"{self._model.name} initialized")
            return True

        self._update(is_loading=False, error=INIT_FAILED_TEXT)
        self._debug("error", "Chat", INIT_FAILED_TEXT)
        return False

    async def send_message(self, text: str) -> None:
        """Send user input and stream the reply into the message list.

        Blank input is ignored. A later send_message or clear_chat makes this
        call stop consuming events.
        """
        if not text.strip():
            return

        self._generation += 1
        generation = self._generation

        self._update(
            messages=[*self._state.messages, Message(text=text, is_user=True)],
            is_loading=True,
        )
        self._debug("info", "Chat", f"Sending: '{text[:50]}'")

        response_id = str(uuid4())
        settings = self._state.safety_settings

        try:
            async with contextlib.aclosing(self._model.generate(text, settings)) as events:
                async for event in events:
                    if generation != self._generation:
                        self._debug("info", "Chat", "Response superseded, stopped streaming")
                        return

                    if isinstance(event, Processing):
                        continue

                    if isinstance(event, Chunk):
                        self._upsert_response(response_id, event.text, is_complete=False)

                    elif isinstance(event, Complete):
                        self._upsert_response(response_id, event.text, is_complete=True)
                        self._debug("info", "Chat", "Response complete")

                    elif isinstance(event, Filtered):
                        self._append_response(Message(
                            id=response_id,
                            text=filtered_notice(event.reason),
                            is_user=False,
                            was_filtered=True,
                            filter_reason=event.reason,
                        ))
                        self._debug("warning", "Chat", f"Filtered: {event.reason}")

                    elif isinstance(event, Error):
                        self._append_response(Message(
                            id=response_id,
                            text=error_notice(event.message),
                            is_user=False,
                        ))
                        self._debug("error", "Chat", f"Error: {event.message}")
        finally:
            if generation == self._generation and self._state.is_loading:
                self._update(is_loading=False)

    def _upsert_response(self, response_id: str, text: str, is_complete: bool) -> None:
        """Replace the last message with response_id, or append a new one."""
        messages = list(self._state.messages)
        message = Message(id=response_id, text=text, is_user=False)

        for index in range(len(messages) - 1, -1, -1):
            if messages[index].id == response_id:
                messages[index] = message.model_copy(update={"timestamp": messages[index].timestamp})
                break
        else:
            messages.append(message)

        self._update(messages=messages, is_loading=not is_complete)

    def _append_response(self, message: Message) -> None:
        self._update(messages=[*self._state.messages, message], is_loading=False)

    def update_safety_settings(self, settings: SafetySettings) -> None:
        """Use new safety settings from the next send_message on."""
        self._update(safety_settings=settings)
        self._debug("info", "Safety", f"Settings updated: {settings.model_dump(mode='json')}")

    async def clear_chat(self) -> None:
        """Reset the conversation and clear cached model data.

        Any reply still streaming stops updating the list.
        """
        self._generation += 1
        self._update(
            messages=[Message(text=CLEARED_TEXT, is_user=False)],
            is_loading=False,
        )
        await self._model.clear_data()
        self._debug("info", "Chat", "Chat cleared")

    def cancel(self) -> None:
        """Stop consuming the reply that is currently streaming."""
        self._generation += 1
        self._update(is_loading=False)

    def toggle_privacy_indicator(self) -> bool:
        """Flip the On-Device chip. Returns the new value."""
        self._update(show_privacy_indicator=not self._state.show_privacy_indicator)
        return self._state.show_privacy_indicator

    def toggle_offline_indicator(self) -> bool:
        """Flip the Offline-Ready chip. Returns the new value."""
        self._update(show_offline_indicator=not self._state.show_offline_indicator)
        return self._state.show_offline_indicator
