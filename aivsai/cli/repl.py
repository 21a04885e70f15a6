"""Interactive answer-and-review mode."""

from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.history import FileHistory, InMemoryHistory
from rich.console import Console

from aivsai.core.app import AiVsAiApp
from aivsai.core.orchestrator import RESERVED_COMMANDS
from aivsai.utils.logging import get_logger

logger = get_logger(__name__)

repl_completer = WordCompleter(
    RESERVED_COMMANDS,
    ignore_case=True,
    sentence=True,
)


def print_banner(console: Console, answerer_name: str, reviewer_name: str) -> None:
    rule = "=" * 42
    console.print(f"[bold cyan]{rule}[/bold cyan]")
    console.print(
        f"[bold cyan]   AI Pair: {answerer_name} (Answer) + {reviewer_name} (Review)   [/bold cyan]"
    )
    console.print(f"[bold cyan]{rule}[/bold cyan]")
    console.print("[dim]Type /save to export the conversation, exit or quit to leave[/dim]")


def create_prompt_session(history_path=None) -> PromptSession:
    history = FileHistory(str(history_path)) if history_path else InMemoryHistory()
    return PromptSession(history=history, completer=repl_completer)


async def repl_main(app: AiVsAiApp, prompt_session: Optional[PromptSession] = None) -> None:
    """Interactive loop.

    Args:
        app: Wired application.
        prompt_session: Line reader; a prompt_toolkit session with history
            and tab completion is created when omitted.
    """
    cfg = app.config_manager
    print_banner(
        app.console,
        cfg.get_provider_settings(cfg.answerer_name).display_name,
        cfg.get_provider_settings(cfg.reviewer_name).display_name,
    )

    orchestrator = app.create_orchestrator()
    session = prompt_session or create_prompt_session(cfg.history_path)

    async def read_line(prompt: str) -> str:
        return await session.prompt_async(HTML("<ansigreen><b>{}</b></ansigreen>").format(prompt))

    try:
        await orchestrator.run(read_line)
    finally:
        await app.client.aclose()
        logger.debug(f"Session ended with {len(orchestrator.session.turns)} turn(s)")
