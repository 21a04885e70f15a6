"""Answer-then-review turn loop."""

from pathlib import Path
from typing import Awaitable, Callable, Optional

from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape

from aivsai.config.models import ProviderConfig
from aivsai.core.prompts import answer_messages, review_messages
from aivsai.providers.base import BaseChatClient
from aivsai.session.exporter import SessionExporter
from aivsai.session.models import Session, Turn
from aivsai.utils.errors import EmptySessionError, FileAccessError, ProviderError
from aivsai.utils.logging import get_logger

logger = get_logger(__name__)

USER_PROMPT = "User > "
SAVE_COMMAND = "/save"
EXIT_COMMANDS = {"exit", "quit"}
RESERVED_COMMANDS = [SAVE_COMMAND, *sorted(EXIT_COMMANDS)]

# Raises EOFError at end of input and KeyboardInterrupt on Ctrl+C.
LineReader = Callable[[str], Awaitable[str]]


class TurnOrchestrator:
    """Drives one answerer call and one reviewer call per question.

    A turn is recorded only after both calls succeed; any failure is
    reported and the session is left as it was.
    """

    def __init__(
        self,
        client: BaseChatClient,
        answerer: ProviderConfig,
        reviewer: ProviderConfig,
        exporter: SessionExporter,
        review_language: str = "Chinese",
        console: Optional[Console] = None,
        session: Optional[Session] = None,
    ):
        self.client = client
        self.answerer = answerer
        self.reviewer = reviewer
        self.exporter = exporter
        self.review_language = review_language
        self.console = console or Console()
        self.session = session or Session()

    async def _call(self, config: ProviderConfig, messages) -> str:
        with self.console.status(f"[dim]Thinking ({config.display_name}) ...[/dim]"):
            return await self.client.complete(config, messages)

    async def ask(self, question: str) -> Optional[Turn]:
        """Run the answer and review calls for ``question``.

        Returns the recorded turn, or None when either call failed.
        """
        try:
            answer = await self._call(self.answerer, answer_messages(question))
        except ProviderError as e:
            logger.debug(f"Answerer failed: kind={e.kind.value} status={e.status_code}")
            self.console.print(f"[red]{escape(self.answerer.display_name)} Error: {escape(str(e))}[/red]")
            return None

        self.console.print()
        self.console.print(f"[bold blue]--- {escape(self.answerer.display_name)} Answer ---[/bold blue]")
        self.console.print(Markdown(answer))

        try:
            review = await self._call(
                self.reviewer, review_messages(question, answer, self.review_language)
            )
        except ProviderError as e:
            logger.debug(f"Reviewer failed: kind={e.kind.value} status={e.status_code}")
            self.console.print(f"[red]{escape(self.reviewer.display_name)} Error: {escape(str(e))}[/red]")
            return None

        turn = self.session.record_turn(question, answer, review)
        logger.debug(f"Recorded turn {turn.sequence_number}")

        self.console.print()
        self.console.print(f"[bold magenta]--- {escape(self.reviewer.display_name)} Review ---[/bold magenta]")
        self.console.print(Markdown(review))
        self.console.print()
        self.console.print("[dim]------------------------------------------[/dim]")
        return turn

    def save(self) -> Optional[Path]:
        """Export the session, reporting the outcome. Never raises."""
        try:
            path = self.exporter.save(
                self.session,
                self.answerer.model_identifier,
                self.reviewer.model_identifier,
            )
        except EmptySessionError:
            self.console.print("[yellow]Nothing to save yet[/yellow]")
            return None
        except FileAccessError as e:
            self.console.print(f"[red]Save Error: {escape(str(e))}[/red]")
            return None

        self.console.print(f"[green]✓[/green] Saved conversation to {escape(str(path))}")
        return path

    async def handle_line(self, line: str) -> bool:
        """Handle one line of input. Returns False when the loop should end."""
        text = line.strip()
        if not text:
            return True

        command = text.lower()
        if command in EXIT_COMMANDS:
            return False
        if command == SAVE_COMMAND:
            self.save()
            return True

        await self.ask(text)
        return True

    async def run(self, read_line: LineReader) -> Session:
        """Read and handle lines until exit, quit or end of input."""
        while True:
            try:
                self.console.print()
                line = await read_line(USER_PROMPT)
            except KeyboardInterrupt:
                continue
            except EOFError:
                break

            if not await self.handle_line(line):
                break

        self.console.print("[dim]Goodbye![/dim]")
        return self.session
