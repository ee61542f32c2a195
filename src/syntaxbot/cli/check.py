"""Check CLI command: build the command manager and list what loaded."""

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from syntaxbot.core.commands.base import Command
from syntaxbot.core.commands.function import Function
from syntaxbot.core.context import SharedContext
from syntaxbot.core.exceptions import ManagerBuildError
from syntaxbot.utils.logging import setup_logging


def _syntax_text(command: Command, prefix: str) -> str:
    if isinstance(command, Function):
        return "\n".join(escape(syntax.usage(prefix)) for syntax in command.syntaxes)
    return "-"


def build_table(context: SharedContext) -> Table:
    manager = context.command_manager
    table = Table(title=f"{manager.config.name} Commands")
    table.add_column("Name", style="cyan")
    table.add_column("Type")
    table.add_column("Aliases")
    table.add_column("Syntax")
    table.add_column("Handler")

    for command in manager.commands:
        if isinstance(command, Function):
            handler = "yes" if manager.get_handler(command) is not None else "[red]missing[/red]"
        else:
            handler = "-"
        table.add_row(
            escape(command.name),
            command.type_tag,
            escape(", ".join(command.aliases)) or "-",
            _syntax_text(command, manager.main_prefix),
            handler,
        )
    return table


def check_command(ctx: typer.Context) -> None:
    """Build the command manager and print loaded commands and errors."""
    config = ctx.obj.get("config")
    setup_logging(config, console_output=False)
    console = Console()

    try:
        context = SharedContext(config, buses=[])
        context.command_manager.build()
    except ManagerBuildError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print(build_table(context))

    errors = context.command_manager.errors
    for error in errors:
        console.print(f"[red]{escape(str(error))}[/red]")

    if errors:
        raise typer.Exit(1)
