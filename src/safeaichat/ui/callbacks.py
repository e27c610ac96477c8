"""Session integration for the TUI.

Hides the details of how the TUI receives updates from the chat session:
state snapshots are rendered into widgets and debug messages are routed
to the log panel.
"""

from typing import TYPE_CHECKING

from ..chat import ChatUiState

if TYPE_CHECKING:
    from .widgets import ChatHistoryWidget, DebugPanel, StatusBar


class TUICallback:
    """Callback handler for ChatSession updates.

    The session and the Textual app share one event loop, so widgets are
    updated directly.
    """

    def __init__(
        self,
        chat: "ChatHistoryWidget",
        status: "StatusBar",
        log_panel: "DebugPanel",
    ) -> None:
        self.chat = chat
        self.status = status
        self.log_panel = log_panel
        self._last_state: ChatUiState | None = None

    def render_state(self, state: ChatUiState) -> None:
        """Render a session state snapshot."""
        previous = self._last_state
        self._last_state = state

        if previous is None or previous.messages != state.messages or previous.is_loading != state.is_loading:
            self.chat.sync(state.messages, state.is_loading)
        self.status.update_status(state)

    def debug(self, level: str, component: str, message: str) -> None:
        """Route debug messages to the log panel."""
        if level == "debug":
            self.log_panel.debug(component, message)
        elif level == "info":
            self.log_panel.info(component, message)
        elif level == "warning":
            self.log_panel.warning(component, message)
        elif level == "error":
            self.log_panel.error(component, message)
