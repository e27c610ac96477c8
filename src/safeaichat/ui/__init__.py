"""Terminal UI module for safeaichat.

Provides a Textual-based TUI standing in for the mobile chat screen.

Module structure (each module hides a design decision):
- config.py: Constants and log levels
- themes.py: Color palette
- styles.py: CSS layout
- widgets.py: Chat history, input bar, status chips, log panel
- screens.py: Safety settings dialog
- callbacks.py: Session integration (how the TUI receives updates)
- app.py: Application orchestration (user interaction flow)
"""

from .app import SafeChatApp, run_textual_tui
from .callbacks import TUICallback
from .config import LogLevel
from .screens import SafetySettingsScreen
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, StatusBar

__all__ = [
    "ChatHistoryWidget",
    "ChatInputBar",
    "DebugPanel",
    "LogLevel",
    "SafeChatApp",
    "SafetySettingsScreen",
    "StatusBar",
    "TUICallback",
    "run_textual_tui",
]
