"""Server CLI command."""

import asyncio

import typer

from syntaxbot.core.context import SharedContext
from syntaxbot.core.exceptions import ManagerBuildError
from syntaxbot.server.server import Server
from syntaxbot.utils.logging import setup_logging


def server_command(ctx: typer.Context) -> None:
    """Build the commands and serve them on every configured bus."""
    config = ctx.obj.get("config")

    # Enable console logging for server mode
    setup_logging(config, console_output=True)

    typer.echo("Starting syntax-bot server...")
    typer.echo(f"Commands path: {config.commands_path}")

    if not config.messagebus.enabled:
        typer.echo("Message bus disabled; enable it in config.user.yaml")
        raise typer.Exit(1)

    try:
        context = SharedContext(config)
        context.command_manager.build()
    except ManagerBuildError as e:
        typer.echo(f"Cannot load commands: {e}", err=True)
        raise typer.Exit(1)

    platforms = [bus.platform_name for bus in context.messagebus_buses]
    typer.echo(f"Message bus enabled with platform(s): {', '.join(platforms)}")
    typer.echo("Press Ctrl+C to stop")

    try:
        asyncio.run(Server(context).run())
    except KeyboardInterrupt:
        typer.echo("\nServer stopped")
