"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

from .config import THEME_NAME

# Dark theme built on the Google brand colors used by DevFest material
DEVFEST_DARK = Theme(
    name=THEME_NAME,
    primary="#8ab4f8",      # Google blue, lightened for dark surfaces
    secondary="#c58af9",    # Purple - assistant messages
    accent="#fdd663",       # Yellow - highlights
    foreground="#e8eaed",
    background="#131314",
    success="#81c995",      # Green - user messages, on-device chip
    warning="#fcad70",      # Orange - filtered messages
    error="#f28b82",        # Red - errors
    surface="#1e1f20",
    panel="#28292a",
    dark=True,
    variables={
        "block-cursor-foreground": "#131314",
        "block-cursor-background": "#8ab4f8",
        "block-cursor-text-style": "bold",
        "input-cursor-background": "#e8eaed",
        "input-cursor-foreground": "#131314",
        "input-selection-background": "#8ab4f8 30%",
        "border": "#5f6368",
        "border-blurred": "#3c4043",
        "scrollbar": "#3c4043",
        "scrollbar-hover": "#5f6368",
        "scrollbar-active": "#8ab4f8",
        "scrollbar-background": "#1e1f20",
        "footer-key-foreground": "#fdd663",
        "footer-background": "#131314",
        "text-muted": "#9aa0a6",
    },
)
