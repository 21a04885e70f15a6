import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from aivsai.utils.errors import AiVsAiError
from aivsai.utils.logging import get_logger

console = Console()
logger = get_logger(__name__)


def handle_exception(e: BaseException, debug_mode: bool = False) -> None:
    """Render an error panel and exit with the error's code."""
    exit_code = 1

    if isinstance(e, AiVsAiError):
        exit_code = getattr(e, "exit_code", 1)
        notes = getattr(e, "__notes__", [])
        hint_text = "\n".join([f"[dim]💡 {escape(note)}[/dim]" for note in notes])
        body = f"[red]Error[/red]: {escape(str(e))}"
        if hint_text:
            body = f"{body}\n\n{hint_text}"
        console.print(Panel(body, title="[bold]AI vs AI Error[/bold]", border_style="red"))
    elif isinstance(e, KeyboardInterrupt):
        console.print("[yellow]Interrupted[/yellow]")
        exit_code = 130
    else:
        console.print(
            Panel(
                f"[red]Unexpected Error[/red]: {escape(str(e))}\n\n"
                f"[dim]Run again with --debug for the full traceback.[/dim]",
                title="[bold]AI vs AI Error[/bold]",
                border_style="red",
            )
        )

    if debug_mode and not isinstance(e, KeyboardInterrupt):
        logger.exception(f"Unhandled exception: {e}")

    sys.exit(exit_code)


class AiVsAiGroup(click.Group):
    """Click group that turns application errors into clean output"""

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except (click.exceptions.Exit, click.ClickException, click.Abort):
            raise
        except (Exception, KeyboardInterrupt) as e:
            handle_exception(e, debug_mode=ctx.params.get("debug", False))
