"""Modal screens for the TUI.

This module hides the design decisions about:
- Safety settings dialog appearance (CSS, layout)
- Which controls edit which settings field
- Keyboard shortcuts for dialogs

To change how the settings dialog looks, modify only this file.
"""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Label, RadioButton, RadioSet, Static, Switch

from ..safety import SafetyLevel, SafetySettings

# (settings field, switch label) in display order
SWITCH_ROWS = (
    ("block_harassment", "Block Harassment"),
    ("block_hate_speech", "Block Hate Speech"),
    ("block_sexual_content", "Block Sexual Content"),
    ("block_dangerous_content", "Block Dangerous Content"),
)


class SafetySettingsScreen(ModalScreen[SafetySettings | None]):
    """Modal dialog for editing safety settings.

    Dismisses with the edited SafetySettings on Apply, or None on Cancel.
    """

    CSS = """
    SafetySettingsScreen {
        align: center middle;
        background: $background 70%;
    }

    #settings-dialog {
        width: 56;
        height: auto;
        border: tall $accent;
        background: $surface;
        padding: 1 2;
    }

    #settings-title {
        width: 100%;
        text-align: center;
        text-style: bold;
        color: $accent;
        border-bottom: solid $border;
        margin-bottom: 1;
    }

    #settings-subtitle {
        color: $text-muted;
        margin-bottom: 1;
    }

    #level-set {
        width: 100%;
        margin-bottom: 1;
    }

    .switch-row {
        height: 3;
    }

    .switch-row Label {
        width: 1fr;
        padding: 1 0;
    }

    #settings-buttons {
        width: 100%;
        height: 3;
        align: center middle;
        margin-top: 1;
    }

    #settings-buttons Button {
        margin: 0 1;
        min-width: 10;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    def __init__(self, settings: SafetySettings) -> None:
        super().__init__()
        self._settings = settings

    def compose(self) -> ComposeResult:
        with Vertical(id="settings-dialog"):
            yield Static("Safety Settings", id="settings-title")
            yield Static("Configure content filtering", id="settings-subtitle")
            yield Label("Safety Level")
            with RadioSet(id="level-set"):
                for level in SafetyLevel:
                    yield RadioButton(
                        level.name,
                        value=level == self._settings.level,
                        id=f"level-{level.value}",
                    )
            for field, label in SWITCH_ROWS:
                with Horizontal(classes="switch-row"):
                    yield Label(label)
                    yield Switch(value=getattr(self._settings, field), id=f"switch-{field}")
            with Horizontal(id="settings-buttons"):
                yield Button("Apply", id="btn-apply", variant="success")
                yield Button("Cancel", id="btn-cancel", variant="error")

    def collect_settings(self) -> SafetySettings:
        """Build settings from the current state of the controls."""
        level = self._settings.level
        pressed = self.query_one("#level-set", RadioSet).pressed_button
        if pressed is not None and pressed.id:
            level = SafetyLevel(pressed.id.removeprefix("level-"))

        flags = {
            field: self.query_one(f"#switch-{field}", Switch).value
            for field, _ in SWITCH_ROWS
        }
        return SafetySettings(level=level, **flags)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-apply":
            self.dismiss(self.collect_settings())
        elif event.button.id == "btn-cancel":
            self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)
