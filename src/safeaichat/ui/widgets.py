"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Input history management
- Status chip rendering
- Chat message rendering and in-place streaming updates
- Log rendering and level filtering
"""

from datetime import datetime

from rich.text import Text
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.message import Message as TextualMessage
from textual.widgets import Button, RichLog, Static, TextArea

from ..chat import ChatUiState, Message
from .config import (
    ASSISTANT_LABEL,
    CHIP_OFFLINE,
    CHIP_PRIVACY,
    CHIP_PROTECTED,
    FILTERED_LABEL,
    INPUT_HISTORY_MAX_SIZE,
    INPUT_PLACEHOLDER,
    LOG_MAX_MESSAGE_LENGTH,
    LOG_TIMESTAMP_FORMAT,
    MESSAGE_TIMESTAMP_FORMAT,
    THINKING_TEXT,
    USER_LABEL,
    LogLevel,
)


class ChatInputBar(Horizontal):
    """Chat input bar with TextArea and Send button."""

    class Submitted(TextualMessage):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: list[str] = []
        self._history_index: int = -1
        self.border_title = INPUT_PLACEHOLDER

    def compose(self):
        text_area = TextArea(id="chat-input", show_line_numbers=False)
        text_area.cursor_blink = False
        yield text_area
        yield Button("Send", id="send-btn", variant="success").with_tooltip(
            "Send message (Ctrl+J)"
        )

    def on_mount(self) -> None:
        text_area = self.query_one("#chat-input", TextArea)
        text_area.highlight_cursor_line = False
        text_area.focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            self._submit()

    def on_key(self, event) -> None:
        """Handle keyboard shortcuts.

        Terminals do not pass modifiers with Enter, so ctrl+j submits.
        """
        if event.key == "ctrl+j":
            self._submit()
            event.prevent_default()
            event.stop()
        elif event.key == "up" and self._is_cursor_at_start():
            self._navigate_history(-1)
            event.prevent_default()
            event.stop()
        elif event.key == "down" and self._is_cursor_at_end():
            self._navigate_history(1)
            event.prevent_default()
            event.stop()

    def _is_cursor_at_start(self) -> bool:
        text_area = self.query_one("#chat-input", TextArea)
        return text_area.cursor_location == (0, 0)

    def _is_cursor_at_end(self) -> bool:
        text_area = self.query_one("#chat-input", TextArea)
        lines = text_area.text.split("\n")
        return text_area.cursor_location == (len(lines) - 1, len(lines[-1]))

    def _navigate_history(self, direction: int) -> None:
        if not self._history:
            return
        text_area = self.query_one("#chat-input", TextArea)
        if direction < 0:
            if self._history_index == -1:
                self._history_index = len(self._history) - 1
            elif self._history_index > 0:
                self._history_index -= 1
        else:
            if self._history_index == -1:
                return
            if self._history_index < len(self._history) - 1:
                self._history_index += 1
            else:
                self._history_index = -1
                text_area.text = ""
                return
        text_area.text = self._history[self._history_index]

    def _submit(self) -> None:
        text_area = self.query_one("#chat-input", TextArea)
        value = text_area.text.strip()
        if not value:
            return
        if not self._history or self._history[-1] != value:
            self._history.append(value)
            del self._history[:-INPUT_HISTORY_MAX_SIZE]
        self._history_index = -1
        text_area.text = ""
        self.post_message(self.Submitted(value))

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", TextArea).focus()


class StatusBar(Static):
    """One-line bar with the privacy, offline and protection chips."""

    status_text = ""  # markup of the last rendered chips

    def update_status(self, state: ChatUiState) -> None:
        chips = []
        if state.show_privacy_indicator:
            chips.append(f"[bold green]● {CHIP_PRIVACY}[/]")
        if state.show_offline_indicator:
            chips.append(f"[bold blue]● {CHIP_OFFLINE}[/]")
        chips.append(f"[bold magenta]● {CHIP_PROTECTED}[/]")
        chips.append(f"[dim]Safety: {state.safety_settings.level.value}[/]")
        if state.error:
            chips.append(f"[bold red]{state.error}[/]")
        self.status_text = "   ".join(chips)
        self.update(self.status_text)


class MessageBubble(Vertical):
    """A single chat message whose text can grow while streaming."""

    def __init__(self, message: Message, *args, **kwargs) -> None:
        if message.is_user:
            role_class = "user-message"
        elif message.was_filtered:
            role_class = "filtered-message"
        else:
            role_class = "assistant-message"
        super().__init__(*args, classes=f"chat-message {role_class}", **kwargs)
        self._message = message
        self._content = Static(Text(message.text), classes="message-content")

    def compose(self):
        yield Static(self._header_text(), classes="message-header")
        yield self._content

    def _header_text(self) -> str:
        if self._message.is_user:
            label = USER_LABEL
        elif self._message.was_filtered:
            label = FILTERED_LABEL
        else:
            label = ASSISTANT_LABEL
        sent = datetime.fromtimestamp(self._message.timestamp / 1000)
        return f"{label} [{sent.strftime(MESSAGE_TIMESTAMP_FORMAT)}]"

    @property
    def message(self) -> Message:
        return self._message

    def set_message(self, message: Message) -> None:
        """Show a newer version of the same message."""
        if message.text != self._message.text:
            self._content.update(Text(message.text))
        self._message = message


class ChatHistoryWidget(VerticalScroll):
    """Scrollable chat history kept in sync with the session state."""

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation history"
    ALLOW_SELECT = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._bubbles: dict[str, MessageBubble] = {}
        self._order: list[str] = []

    def compose(self):
        thinking = Static(THINKING_TEXT, id="thinking")
        thinking.display = False
        yield thinking

    def sync(self, messages: list[Message], is_loading: bool) -> None:
        """Render the given messages, reusing bubbles by message id."""
        thinking = self.query_one("#thinking", Static)
        ids = [m.id for m in messages]

        if ids[: len(self._order)] != self._order:
            # History was replaced (chat cleared), rebuild from scratch
            for bubble in self._bubbles.values():
                bubble.remove()
            self._bubbles.clear()
            self._order = []

        for message in messages:
            bubble = self._bubbles.get(message.id)
            if bubble is None:
                bubble = MessageBubble(message)
                self._bubbles[message.id] = bubble
                self._order.append(message.id)
                self.mount(bubble, before=thinking)
            else:
                bubble.set_message(message)

        # Indicator only until the first chunk of the reply arrives
        thinking.display = is_loading and bool(messages) and messages[-1].is_user
        self.border_subtitle = f"{len(messages)} messages"
        self.scroll_end(animate=False)

    def get_last_response(self) -> str | None:
        """Get the text of the last assistant message."""
        for message_id in reversed(self._order):
            message = self._bubbles[message_id].message
            if not message.is_user:
                return message.text
        return None


class DebugPanel(RichLog):
    """Log panel for real-time tracing with level filtering.

    Shows timestamped log messages from all components.
    Hidden by default, shown with --log-level flag or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=False,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = False

    def log(
        self,
        component: str,
        message: str,
        level: int = LogLevel.DEBUG
    ) -> None:
        """Add a log entry if it meets the current level threshold.

        Args:
            component: Component name (TUI, Chat, Model, Safety)
            message: Log message
            level: Log level (LogLevel.DEBUG, INFO, WARNING, ERROR)
        """
        if level < self._log_level:
            return

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        level_colors = {
            LogLevel.DEBUG: "dim white",
            LogLevel.INFO: "cyan",
            LogLevel.WARNING: "yellow",
            LogLevel.ERROR: "red",
        }
        component_colors = {
            "TUI": "cyan",
            "Chat": "green",
            "Model": "magenta",
            "Safety": "yellow",
        }
        level_color = level_colors.get(level, "white")
        comp_color = component_colors.get(component, "white")

        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        line = Text.from_markup(
            f"[dim]{timestamp}[/] "
            f"[{level_color}]{LogLevel.name(level):<5}[/] "
            f"[{comp_color}]\\[{component}][/] "
        )
        line.append(message)
        self.write(line)

    def debug(self, component: str, message: str) -> None:
        self.log(component, message, LogLevel.DEBUG)

    def info(self, component: str, message: str) -> None:
        self.log(component, message, LogLevel.INFO)

    def warning(self, component: str, message: str) -> None:
        self.log(component, message, LogLevel.WARNING)

    def error(self, component: str, message: str) -> None:
        self.log(component, message, LogLevel.ERROR)

    def show(self) -> None:
        """Show the log panel."""
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        """Hide the log panel."""
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True
