"""
Ghostwriter console session.

Writes a story with the AI in the terminal: the AI's text streams in,
then you type lines until the timer runs out.

Usage:
    python -m ghostwriter
"""

import asyncio
import logging
import threading
from typing import Callable, Optional

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from .config import TIMER_CHOICES, config
from .controller import TurnController
from .conversation_log import JsonlConversationLog
from .document import InMemoryDocument
from .exceptions import ConfigurationError, DocumentLockedError, ExportError, ValidationError
from .genres import GENRE_LABELS, get_genres
from .length_policy import LENGTH_LABELS, LengthSetting
from .logging_config import set_console_level
from .providers import OpenAIProvider
from .session import TurnState
from .settings import SessionSettings

console = Console()

NOTICE_STYLES = {
    "info": "dim",
    "success": "green",
    "warning": "yellow",
    "error": "red",
}

HELP_TEXT = (
    "[bold]Commands[/bold]\n"
    "/end      finish your turn now\n"
    "/status   show whose turn it is and the time left\n"
    "/length   change AI length (short, medium, long, match)\n"
    "/timer    change the turn length in seconds\n"
    "/save     save the story to a text file\n"
    "/restart  start over in the same genre\n"
    "/quit     leave"
)


class ConsoleDocument(InMemoryDocument):
    """InMemoryDocument that echoes streamed AI text to the terminal."""

    def __init__(self, console: Console):
        super().__init__()
        self.console = console

    def append_text(self, text: str) -> None:
        super().append_text(text)
        self.console.print(text, end="", markup=False, highlight=False, soft_wrap=True)

    def set_editable(self, editable: bool) -> None:
        if editable and not self.editable:
            self.console.print()
        super().set_editable(editable)


def _print_notice(level: str, message: str) -> None:
    style = NOTICE_STYLES.get(level, "dim")
    console.print(f"\n[{style}]{message}[/{style}]")


def _status(controller: TurnController) -> None:
    table = Table(show_header=False, box=None)
    table.add_row("Genre", GENRE_LABELS.get(controller.session.genre, controller.session.genre))
    table.add_row("Turn", controller.session.turn.value)
    table.add_row("State", controller.state.value)
    table.add_row("Timer", controller.timer.format_remaining())
    table.add_row("AI length", LENGTH_LABELS[controller.settings.ai_length])
    table.add_row("Your last turn", f"{controller.session.human_word_count} words")
    console.print(table)


async def _handle_command(controller: TurnController, line: str) -> bool:
    """Run a slash command. Returns False when the session should end."""
    command, _, argument = line.partition(" ")
    argument = argument.strip()

    if command == "/quit":
        return False
    if command == "/help":
        console.print(HELP_TEXT)
    elif command == "/end":
        await controller.submit_human_turn_end()
    elif command == "/status":
        _status(controller)
    elif command == "/save":
        try:
            path = controller.save()
            console.print(f"[green]Saved to {path}[/green]")
        except ExportError as e:
            console.print(f"[yellow]{e.message}[/yellow]")
    elif command == "/restart":
        await controller.start()
    elif command in ("/length", "/timer"):
        key = "ai_length" if command == "/length" else "timer_seconds"
        try:
            await controller.update_settings(**{key: argument})
        except ValidationError:
            console.print(f"[yellow]Invalid value for {command}: {argument!r}[/yellow]")
    else:
        console.print(f"[yellow]Unknown command {command}. Type /help.[/yellow]")
    return True


class LineReader:
    """
    Reads console lines on a daemon thread and hands them to the event loop.

    A thread blocked in input() would otherwise hold up interpreter shutdown
    on Ctrl-C until Enter is pressed. None marks end of input.
    """

    def __init__(self, read_line: Callable[[], str], loop: asyncio.AbstractEventLoop):
        self._read_line = read_line
        self._loop = loop
        self.queue: asyncio.Queue = asyncio.Queue()
        self.thread = threading.Thread(target=self._run, name="ghostwriter-input", daemon=True)

    def start(self) -> None:
        self.thread.start()

    async def get(self) -> Optional[str]:
        return await self.queue.get()

    def _run(self) -> None:
        while True:
            try:
                line = self._read_line()
            except (EOFError, KeyboardInterrupt):
                line = None
            try:
                self._loop.call_soon_threadsafe(self.queue.put_nowait, line)
            except RuntimeError:
                # Event loop already closed
                return
            if line is None:
                return


async def run_session(settings: SessionSettings, provider: OpenAIProvider) -> None:
    document = ConsoleDocument(console)
    controller = TurnController(
        provider=provider,
        ui=document,
        settings=settings,
        conversation_sink=JsonlConversationLog(),
        notify=_print_notice
    )
    document.add_change_listener(controller.notify_human_input)
    reader = LineReader(
        lambda: console.input(f"[bold cyan]{controller.timer.format_remaining()} >[/bold cyan] "),
        asyncio.get_running_loop()
    )

    await controller.start()
    reader.start()
    try:
        while controller.state is not TurnState.CLOSED:
            line = await reader.get()
            if line is None:
                break
            line = line.strip()
            if not line:
                continue

            if line.startswith("/"):
                if not await _handle_command(controller, line):
                    break
                continue

            try:
                text = document.get_plain_text()
                separator = "" if not text or text[-1].isspace() else " "
                document.type_text(separator + line)
            except DocumentLockedError:
                console.print("[yellow]Hold on - the AI is still writing.[/yellow]")
    finally:
        await controller.close()


def main():
    """Interactive CLI entrypoint."""
    console.print(Panel.fit(
        "[bold cyan]Ghostwriter[/bold cyan]\n\n"
        "Take turns writing a story with an AI muse",
        border_style="cyan"
    ))

    config.ensure_directories()
    try:
        provider = OpenAIProvider()
    except ConfigurationError as e:
        console.print(f"[red]{e.message}[/red]")
        return
    console.print(f"[dim]Model: {config.provider_status()['openai_model']}[/dim]\n")

    genres = get_genres()
    table = Table(title="Genres", show_header=True, header_style="bold cyan")
    table.add_column("Key", style="green")
    table.add_column("Genre")
    for genre in genres:
        table.add_row(genre, GENRE_LABELS[genre])
    console.print(table)

    genre = Prompt.ask("Genre", choices=genres, default="hardboiled")
    ai_length = Prompt.ask("AI length", choices=[s.value for s in LengthSetting], default="medium")
    timer_seconds = Prompt.ask("Seconds per turn", choices=[str(s) for s in TIMER_CHOICES], default="60")

    settings = SessionSettings(genre=genre, ai_length=ai_length, timer_seconds=int(timer_seconds))
    console.print(HELP_TEXT + "\n")

    # Keep log lines out of the story; they still go to the log files
    set_console_level(logging.WARNING)
    try:
        asyncio.run(run_session(settings, provider))
    except KeyboardInterrupt:
        pass
    console.print("\n[dim]Goodbye![/dim]")


if __name__ == "__main__":
    main()
