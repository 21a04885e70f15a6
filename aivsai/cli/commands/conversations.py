import click
from rich.console import Console
from rich.table import Table

from aivsai.config.config_manager import ConfigManager
from aivsai.session.exporter import SessionExporter

console = Console()


@click.command(name="conversations")
@click.option("--recent", "-r", type=int, help="Show N most recent conversations")
@click.pass_context
def conversations_command(ctx, recent):
    """List saved conversations"""
    obj = ctx.obj or {}
    cfg = ConfigManager(obj.get("config_path"))
    exporter = SessionExporter(cfg.conversations_dir())

    summaries = exporter.list_exports()
    if not summaries:
        console.print(f"[yellow]No saved conversations in {exporter.output_dir}[/yellow]")
        return

    if recent:
        summaries = summaries[:recent]

    table = Table(show_header=True, title=str(exporter.output_dir))
    table.add_column("File", style="cyan")
    table.add_column("Started", style="dim")
    table.add_column("Turns", justify="right")
    table.add_column("Answerer")
    table.add_column("Reviewer")

    for summary in summaries:
        header = summary.header
        table.add_row(
            summary.path.name,
            header.started_at.strftime("%Y-%m-%d %H:%M"),
            str(header.turn_count),
            header.answerer_model,
            header.reviewer_model,
        )

    console.print(table)
