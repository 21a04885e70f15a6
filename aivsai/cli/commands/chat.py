import asyncio

import click

from aivsai.cli.repl import repl_main
from aivsai.core.app import AiVsAiApp


@click.command(name="chat")
@click.pass_context
def chat_command(ctx):
    """Start the interactive answer/review loop

    \b
    Each question goes to the answerer; its answer is then sent to the
    reviewer for critique. Type /save to export, exit or quit to leave.
    """
    obj = ctx.obj or {}
    app = AiVsAiApp(obj.get("config_path"))
    asyncio.run(repl_main(app))
