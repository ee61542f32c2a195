"""Chat CLI command: run commands typed in the terminal."""

import asyncio

import typer

from syntaxbot.core.context import SharedContext
from syntaxbot.core.exceptions import ManagerBuildError
from syntaxbot.messagebus.cli_bus import CliBus
from syntaxbot.server.messagebus_worker import MessageBusWorker
from syntaxbot.utils.config import Config
from syntaxbot.utils.logging import setup_logging


class ChatLoop:
    """Interactive session that feeds terminal input to the command runner."""

    def __init__(self, config: Config):
        self.config = config
        self.bus = CliBus()
        self.context = SharedContext(config=config, buses=[self.bus])
        self.worker = MessageBusWorker(self.context)

    async def run(self) -> None:
        manager = self.context.command_manager
        manager.build()
        self.bus.console.print(
            f"[bold]{manager.config.name}[/bold]: {len(manager.commands)} command(s) "
            f"loaded. Try [cyan]{manager.main_prefix}commands[/cyan], "
            "or type 'quit' to leave."
        )
        # the CLI bus returns on quit or EOF
        await self.worker.run()


def chat_command(ctx: typer.Context) -> None:
    """Start interactive chat session."""
    config = ctx.obj.get("config")

    setup_logging(config, console_output=False)

    try:
        asyncio.run(ChatLoop(config).run())
    except ManagerBuildError as e:
        typer.echo(f"Cannot load commands: {e}", err=True)
        raise typer.Exit(1)
