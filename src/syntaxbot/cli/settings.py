"""Settings CLI command."""

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from syntaxbot.utils.def_loader import format_validation_error

console = Console()


def set_command(ctx: typer.Context, key: str, value: str) -> None:
    """
    Store one setting in config.runtime.yaml.

    The value is read as YAML, so "true", "10" and "['!', '?']" become a
    boolean, an integer and a list.
    """
    config = ctx.obj.get("config")
    parsed = yaml.safe_load(value)

    try:
        config.set_runtime(key, parsed)
    except ValidationError as e:
        console.print(
            f"[red]Invalid value for {escape(key)}: "
            f"{escape(format_validation_error(e))}[/red]"
        )
        raise typer.Exit(1)

    console.print(f"Set {escape(key)} = {escape(repr(parsed))}")
