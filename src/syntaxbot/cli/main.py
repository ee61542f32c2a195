"""CLI interface for syntax-bot using Typer."""

from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console

from syntaxbot.cli.chat import chat_command
from syntaxbot.cli.check import check_command
from syntaxbot.cli.server import server_command
from syntaxbot.cli.settings import set_command
from syntaxbot.utils.config import Config
from syntaxbot.utils.def_loader import format_validation_error

app = typer.Typer(
    name="syntaxbot",
    help="Syntax-Bot: declarative chat commands with typed arguments",
    no_args_is_help=True,
    add_completion=True,
)

console = Console()


def load_config_callback(ctx: typer.Context, workspace: str):
    """Load configuration and store it in the context."""
    workspace_path = Path(workspace)

    try:
        cfg = Config.load(workspace_path)
    except ValidationError as e:
        console.print(f"[red]Invalid configuration: {format_validation_error(e)}[/red]")
        raise typer.Exit(1)
    except OSError as e:
        console.print(f"[red]Error loading config: {e}[/red]")
        raise typer.Exit(1)

    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg


@app.callback()
def main(
    ctx: typer.Context,
    workspace: str = typer.Option(
        Path.home() / ".syntax-bot",
        "--workspace",
        "-w",
        help="Path to workspace directory",
        callback=load_config_callback,
    ),
) -> None:
    """
    Syntax-Bot: declarative chat commands with typed arguments.

    Configuration is loaded from ~/.syntax-bot/ by default.
    Use --workspace to specify a custom workspace directory.
    """
    pass


@app.command()
def check(ctx: typer.Context) -> None:
    """Load every command definition and report problems."""
    check_command(ctx)


@app.command()
def chat(ctx: typer.Context) -> None:
    """Try commands interactively in the terminal."""
    chat_command(ctx)


@app.command("server")
def server(ctx: typer.Context) -> None:
    """Run the bot on every configured message bus."""
    server_command(ctx)


@app.command("set")
def set_value(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Dot-notation key, e.g. manager.prefixes"),
    value: str = typer.Argument(..., help="New value, read as YAML"),
) -> None:
    """Store a setting in config.runtime.yaml."""
    set_command(ctx, key, value)


if __name__ == "__main__":
    app()
