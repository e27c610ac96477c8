"""Main Textual TUI application.

Orchestrates the UI components and forwards user actions to ChatSession.
"""

import asyncio

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from ..chat import ChatSession
from ..safety import SafetySettings
from .callbacks import TUICallback
from .config import APP_TITLE, THEME_NAME, LogLevel
from .screens import SafetySettingsScreen
from .styles import APP_CSS
from .themes import DEVFEST_DARK
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, StatusBar

GENERATION_GROUP = "generation"


class SafeChatApp(App):
    """Textual TUI for the on-device chat demo."""

    CSS = APP_CSS
    TITLE = APP_TITLE

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+k", "clear_chat", "Clear Chat", priority=True),
        Binding("ctrl+s", "open_settings", "Safety"),
        Binding("ctrl+t", "toggle_privacy", "Privacy Chip"),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("ctrl+d", "toggle_debug", "Log"),
        Binding("escape", "cancel_generation", "Cancel"),
    ]

    def __init__(self, session: ChatSession, log_level: str | None = None) -> None:
        super().__init__()
        self._session = session
        self._log_level = log_level
        self._callback: TUICallback | None = None
        self._unsubscribe = None

    @property
    def session(self) -> ChatSession:
        return self._session

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield StatusBar(id="status-bar")
        yield ChatHistoryWidget(id="chat-history")
        yield DebugPanel(id="debug-panel")
        yield ChatInputBar(id="chat-input-bar")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(DEVFEST_DARK)
        self.theme = THEME_NAME
        self.sub_title = self._session.model.name

        log_panel = self.query_one("#debug-panel", DebugPanel)
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.info("TUI", f"Log panel enabled with level: {self._log_level.upper()}")

        self._callback = TUICallback(
            chat=self.query_one("#chat-history", ChatHistoryWidget),
            status=self.query_one("#status-bar", StatusBar),
            log_panel=log_panel,
        )
        self._session.set_debug_callback(self._callback.debug)
        self._unsubscribe = self._session.subscribe(self._callback.render_state)

        self._initialize()
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def on_unmount(self) -> None:
        """Detach from the session when the app exits."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._session.set_debug_callback(None)

    @work(exclusive=True, group="init")
    async def _initialize(self) -> None:
        if not await self._session.initialize():
            self.notify(self._session.state.error or "Initialization failed", severity="error", timeout=5)

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        if not self._session.state.is_initialized:
            self.notify("Model is not ready yet", severity="warning", timeout=2)
            return
        self._generate(event.value)

    @work(exclusive=True, group=GENERATION_GROUP)
    async def _generate(self, text: str) -> None:
        """Stream a reply as a background worker.

        Exclusive: submitting again cancels the reply still streaming.
        """
        try:
            await self._session.send_message(text)
        except asyncio.CancelledError:
            self._debug_panel.info("TUI", "Generation cancelled")
            raise

    @property
    def _debug_panel(self) -> DebugPanel:
        return self.query_one("#debug-panel", DebugPanel)

    @work(exclusive=True, group="clear")
    async def _clear(self) -> None:
        await self._session.clear_chat()
        self.notify("Chat cleared", timeout=2)

    def action_clear_chat(self) -> None:
        """Stop any reply in progress and clear the conversation."""
        self.workers.cancel_group(self, GENERATION_GROUP)
        self._clear()

    def action_cancel_generation(self) -> None:
        """Stop the reply that is currently streaming."""
        if self._session.state.is_loading:
            self.workers.cancel_group(self, GENERATION_GROUP)
            self._session.cancel()
            self.notify("Cancelled", severity="warning", timeout=2)

    def action_open_settings(self) -> None:
        """Show the safety settings dialog."""
        def _apply(settings: SafetySettings | None) -> None:
            if settings is not None:
                self._session.update_safety_settings(settings)
                self.notify("Safety settings updated", timeout=2)

        self.push_screen(SafetySettingsScreen(self._session.state.safety_settings), _apply)

    def action_toggle_privacy(self) -> None:
        """Toggle the On-Device status chip."""
        shown = self._session.toggle_privacy_indicator()
        self.notify(f"Privacy indicator {'shown' if shown else 'hidden'}", timeout=2)

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        is_visible = self._debug_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy last assistant response to clipboard."""
        response = self.query_one("#chat-history", ChatHistoryWidget).get_last_response()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Response copied")
        else:
            self.notify("No response to copy", severity="warning")


async def run_textual_tui(session: ChatSession, log_level: str | None = None) -> None:
    """Run the Textual TUI.

    Args:
        session: Chat session driving the conversation
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = SafeChatApp(session=session, log_level=log_level)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        await session.model.close()
