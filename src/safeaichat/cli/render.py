"""Console rendering of chat session state.

Hides how streamed replies are printed: chunks carry the whole text so far,
so only the new suffix is written.
"""

from rich.console import Console

from ..chat import ChatUiState, Message

ASSISTANT_PREFIX = "[bold green]Gemini Nano:[/bold green] "


class ConsoleRenderer:
    """Prints assistant messages from session snapshots as they grow."""

    def __init__(self, console: Console) -> None:
        self._console = console
        self._current_id: str | None = None
        self._printed = 0
        self._line_open = False

    def mark_seen(self, messages: list[Message]) -> None:
        """Treat the current last message as already printed."""
        if messages:
            self._current_id = messages[-1].id
            self._printed = len(messages[-1].text)

    def render_state(self, state: ChatUiState) -> None:
        if state.messages:
            message = state.messages[-1]
            if not message.is_user:
                self._render_message(message)

        if not state.is_loading:
            self._finish_line()

    def _render_message(self, message: Message) -> None:
        if message.id != self._current_id:
            self._finish_line()
            self._current_id = message.id
            self._printed = 0
            self._console.print(ASSISTANT_PREFIX, end="")
            self._line_open = True

        delta = message.text[self._printed:]
        if delta:
            style = "yellow" if message.was_filtered else None
            self._console.print(delta, end="", style=style, markup=False, highlight=False)
            self._printed = len(message.text)

    def _finish_line(self) -> None:
        if self._line_open:
            self._console.print()
            self._line_open = False
