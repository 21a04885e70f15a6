import logging

import click

from aivsai.cli.commands import (
    chat_command,
    config_command,
    conversations_command,
    version_command,
)
from aivsai.cli.core import AiVsAiGroup
from aivsai.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


@click.group(
    cls=AiVsAiGroup,
    invoke_without_command=True,
    context_settings=dict(help_option_names=["-h", "--help"]),
)
@click.option(
    "-c",
    "--config",
    "config_path",
    default=None,
    type=click.Path(dir_okay=False),
    help="Settings file (default: ~/.aivsai/config.yaml)",
)
@click.option("--debug", is_flag=True, help="Enable debug output")
@click.pass_context
def cli(ctx, config_path, debug):
    """AI vs AI - one model answers, another reviews

    \b
    Examples:
      aivsai                      # Start the answer/review loop
      aivsai config               # Show providers and paths
      aivsai conversations        # List saved conversations

    \b
    In the loop:
      /save                       Export the conversation to markdown
      exit, quit                  Leave
    """
    setup_logging(logging.DEBUG if debug else logging.WARNING)
    ctx.obj = {"config_path": config_path, "debug": debug}

    if ctx.invoked_subcommand is None:
        ctx.invoke(chat_command)


cli.add_command(chat_command, "chat")
cli.add_command(config_command, "config")
cli.add_command(conversations_command, "conversations")
cli.add_command(version_command, "version")


if __name__ == "__main__":
    cli()
