import click
from rich.console import Console
from rich.table import Table

from aivsai import __version__
from aivsai.config.config_manager import ConfigManager
from aivsai.config.credentials import CredentialResolver

console = Console()


def mask(key: str) -> str:
    if len(key) <= 8:
        return "*" * len(key)
    return f"{key[:4]}...{key[-4:]}"


@click.command()
@click.pass_context
def config(ctx):
    """Show current configuration"""
    obj = ctx.obj or {}
    cfg = ConfigManager(obj.get("config_path"))
    resolver = CredentialResolver(cfg, console=console)

    console.print("\n[bold cyan]Configuration[/bold cyan]")
    console.print(f"  Config file: [yellow]{cfg.config_path}[/yellow]")
    console.print(f"  Credential store: [yellow]{cfg.credentials_path}[/yellow]")
    console.print(f"  Conversations: [yellow]{cfg.conversations_dir()}[/yellow]")
    console.print(f"  Review language: [green]{cfg.get('review.language')}[/green]")
    console.print(f"  Temperature: [green]{cfg.get('chat.temperature')}[/green]")

    roles = {cfg.answerer_name: "answerer", cfg.reviewer_name: "reviewer"}

    table = Table(title="Providers", show_header=True)
    table.add_column("Provider", style="cyan")
    table.add_column("Role")
    table.add_column("Model", style="green")
    table.add_column("Endpoint")
    table.add_column("API Key")

    for name, settings in cfg.config.providers.items():
        key = resolver.lookup(settings.api_key_env)
        key_text = mask(key) if key else f"[red]not set ({settings.api_key_env})[/red]"
        table.add_row(
            settings.display_name,
            roles.get(name, "-"),
            settings.model,
            settings.endpoint,
            key_text,
        )

    console.print(table)
    console.print()


@click.command()
def version():
    """Show version information"""
    console.print(f"[cyan]AI vs AI[/cyan] v{__version__}")
    console.print("One model answers, another reviews")


config_command = config
version_command = version

__all__ = [
    "config_command",
    "version_command",
]
