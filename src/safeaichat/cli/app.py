"""Main CLI application using Typer."""
import asyncio
import signal

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from ..chat import ChatSession
from ..safety import BLOCK_CATEGORIES, SafetyLevel, SafetySettings, filter_content, matching_categories
from .providers import get_model, get_safety_settings
from .render import ConsoleRenderer

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="safeaichat",
    help="On-device AI chat demo with keyword safety filtering",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()
err_console = Console(stderr=True)

EXIT_WORDS = ("exit", "quit", "q")

LevelOption = typer.Option(
    None,
    "--level",
    "-L",
    case_sensitive=False,
    help="Safety level: strict, moderate or permissive"
)
AllowHarassmentOption = typer.Option(
    False, "--allow-harassment", help="Do not block harassment"
)
AllowHateSpeechOption = typer.Option(
    False, "--allow-hate-speech", help="Do not block hate speech"
)
AllowSexualContentOption = typer.Option(
    False, "--allow-sexual-content", help="Do not block sexual content"
)
AllowDangerousContentOption = typer.Option(
    False, "--allow-dangerous-content", help="Do not block dangerous content"
)
VerboseOption = typer.Option(
    False, "--verbose", "-v", help="Print component log messages to stderr"
)


def _console_debug(level: str, component: str, message: str) -> None:
    """Debug callback printing to stderr."""
    colors = {"debug": "dim", "info": "cyan", "warning": "yellow", "error": "red"}
    color = colors.get(level, "white")
    err_console.print(f"[{color}]{level.upper():<7}[/] [bold]{component}[/]: {message}", highlight=False)


def _settings_table(settings: SafetySettings) -> Table:
    table = Table(title="Safety Settings", show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Level", settings.level.name)
    table.add_row("Block harassment", str(settings.block_harassment))
    table.add_row("Block hate speech", str(settings.block_hate_speech))
    table.add_row("Block sexual content", str(settings.block_sexual_content))
    table.add_row("Block dangerous content", str(settings.block_dangerous_content))
    return table


def _create_session(settings: SafetySettings, verbose: bool) -> ChatSession:
    session = ChatSession(get_model(console), settings=settings)
    if verbose:
        session.set_debug_callback(_console_debug)
    return session


async def stream_reply(session: ChatSession, text: str) -> bool:
    """Send a message, letting Ctrl-C cancel only the reply in progress.

    Returns:
        False if the reply was cancelled
    """
    loop = asyncio.get_running_loop()
    task = asyncio.create_task(session.send_message(text))

    try:
        loop.add_signal_handler(signal.SIGINT, task.cancel)
        handler_installed = True
    except NotImplementedError:
        # Event loops without signal support (Windows): Ctrl-C ends the REPL
        handler_installed = False

    try:
        await asyncio.wait({task})
    finally:
        if handler_installed:
            loop.remove_signal_handler(signal.SIGINT)
        if not task.done():
            task.cancel()

    if task.cancelled():
        session.cancel()
        console.print("\n[dim]Cancelled[/dim]")
        return False

    task.result()
    return True


@app.command()
def check(
    text: str = typer.Argument(..., help="Text to run through the safety filter"),
    level: SafetyLevel | None = LevelOption,
    allow_harassment: bool = AllowHarassmentOption,
    allow_hate_speech: bool = AllowHateSpeechOption,
    allow_sexual_content: bool = AllowSexualContentOption,
    allow_dangerous_content: bool = AllowDangerousContentOption,
):
    """Run only the safety filter. Exits with code 1 if the text is blocked."""
    settings = get_safety_settings(
        level, allow_harassment, allow_hate_speech,
        allow_sexual_content, allow_dangerous_content, console=console
    )
    decision = filter_content(text, settings)

    table = Table(title="Safety Categories", show_header=True)
    table.add_column("Category", style="cyan")
    table.add_column("Enabled")
    table.add_column("Matched")
    matched = {c.name for c in matching_categories(text)}
    for category in BLOCK_CATEGORIES:
        table.add_row(
            category.name,
            "yes" if category.enabled(settings) else "[dim]no[/dim]",
            "[yellow]yes[/yellow]" if category.name in matched else "no",
        )
    console.print(table)

    if decision.blocked:
        console.print(f"[bold yellow]Blocked:[/bold yellow] {decision.reason}")
        raise typer.Exit(code=1)
    console.print("[bold green]Allowed[/bold green]")


@app.command()
def ask(
    prompt: str = typer.Argument(..., help="Prompt to send to the assistant"),
    level: SafetyLevel | None = LevelOption,
    allow_harassment: bool = AllowHarassmentOption,
    allow_hate_speech: bool = AllowHateSpeechOption,
    allow_sexual_content: bool = AllowSexualContentOption,
    allow_dangerous_content: bool = AllowDangerousContentOption,
    verbose: bool = VerboseOption,
):
    """Send a single prompt and stream the reply."""
    settings = get_safety_settings(
        level, allow_harassment, allow_hate_speech,
        allow_sexual_content, allow_dangerous_content, console=console
    )

    async def _ask():
        session = _create_session(settings, verbose)
        async with session.model:
            if not await session.initialize():
                console.print(f"[red]Error: {session.state.error}[/red]")
                raise typer.Exit(code=1)

            renderer = ConsoleRenderer(console)
            renderer.mark_seen(session.state.messages)
            session.subscribe(renderer.render_state)
            await session.send_message(prompt)

    asyncio.run(_ask())


@app.command()
def chat(
    level: SafetyLevel | None = LevelOption,
    allow_harassment: bool = AllowHarassmentOption,
    allow_hate_speech: bool = AllowHateSpeechOption,
    allow_sexual_content: bool = AllowSexualContentOption,
    allow_dangerous_content: bool = AllowDangerousContentOption,
    verbose: bool = VerboseOption,
):
    """Interactive line-based chat."""
    settings = get_safety_settings(
        level, allow_harassment, allow_hate_speech,
        allow_sexual_content, allow_dangerous_content, console=console
    )

    async def _chat():
        session = _create_session(settings, verbose)
        async with session.model:
            console.print("[bold cyan]Safe AI Chat Demo[/bold cyan]")
            console.print("[dim]Commands: /clear, /settings. Type 'exit', 'quit', or 'q' to leave[/dim]\n")

            session.subscribe(ConsoleRenderer(console).render_state)
            if not await session.initialize():
                console.print(f"[red]Error: {session.state.error}[/red]")
                raise typer.Exit(code=1)

            while True:
                try:
                    user_input = console.input("[bold yellow]You:[/bold yellow] ")
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                command = user_input.strip().lower()
                if not command:
                    continue
                if command in EXIT_WORDS:
                    console.print("[dim]Goodbye![/dim]")
                    break
                if command == "/clear":
                    await session.clear_chat()
                    continue
                if command == "/settings":
                    console.print(_settings_table(session.state.safety_settings))
                    continue

                await stream_reply(session, user_input)

    asyncio.run(_chat())


@app.command(name="tui")
def tui_command(
    level: SafetyLevel | None = LevelOption,
    allow_harassment: bool = AllowHarassmentOption,
    allow_hate_speech: bool = AllowHateSpeechOption,
    allow_sexual_content: bool = AllowSexualContentOption,
    allow_dangerous_content: bool = AllowDangerousContentOption,
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch interactive TUI chat interface."""
    settings = get_safety_settings(
        level, allow_harassment, allow_hate_speech,
        allow_sexual_content, allow_dangerous_content, console=console
    )

    async def _tui():
        from ..ui import run_textual_tui

        session = ChatSession(get_model(console), settings=settings)
        await run_textual_tui(session, log_level=log_level)
        console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_tui())
    except KeyboardInterrupt:
        pass


@app.command()
def health():
    """Check model availability and show the active configuration."""
    settings = get_safety_settings(console=console)

    async def _health():
        model = get_model(console)
        async with model:
            available = await model.is_available()
            initialized = await model.initialize() if available else False

        table = Table(title="Model Health", show_header=True)
        table.add_column("Check", style="cyan")
        table.add_column("Status")
        table.add_row("Model", model.name)
        table.add_row("Available", "[green]yes[/green]" if available else "[red]no[/red]")
        table.add_row("Initialized", "[green]yes[/green]" if initialized else "[red]no[/red]")
        console.print(table)
        console.print(_settings_table(settings))

        if not initialized:
            raise typer.Exit(code=1)

    asyncio.run(_health())


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
