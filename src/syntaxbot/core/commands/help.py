"""Plain-text rendering of help panels, syntax errors and the command list."""

from collections.abc import Sequence
from typing import TYPE_CHECKING

from syntaxbot.utils.text import plural

if TYPE_CHECKING:
    from syntaxbot.core.commands.base import Command
    from syntaxbot.core.commands.syntax import Syntax


def render_fields(title: str, fields: Sequence[tuple[str, str]]) -> str:
    """Render a title followed by bold field headers and their text."""
    lines = [f"**{title}**"]
    for header, text in fields:
        lines.append("")
        lines.append(f"**{header}**")
        lines.append(text)
    return "\n".join(lines)


def code_block(text: str) -> str:
    return f"```\n{text}\n```"


def render_info(command: "Command", prefix: str = "") -> str:
    """Help panel for a single command."""
    title = f"{command.name} Info"
    if command.link:
        title = f"{title} ({command.link})"
    return render_fields(title, command.info_fields(prefix))


def render_syntaxes(syntaxes: Sequence["Syntax"], prefix: str = "") -> str:
    return "\n".join(code_block(syntax.usage(prefix)) for syntax in syntaxes)


def render_syntax_error(
    message: str,
    syntaxes: Sequence["Syntax"],
    offending: "Syntax | None" = None,
    prefix: str = "",
) -> str:
    """
    Error text followed by the correct usage.

    Only the offending syntax is shown when there is one; otherwise every
    syntax of the command is listed.
    """
    shown = [offending] if offending is not None else list(syntaxes)
    header = plural("Syntax", len(shown))
    return render_fields(
        "Error", [("Problem", message), (header, render_syntaxes(shown, prefix))]
    )


def render_command_list(
    manager_name: str,
    commands: Sequence["Command"],
    page: int,
    total_pages: int,
    prefix: str = "",
    footer: str | None = None,
    list_prompt: str = "commands",
) -> str:
    """One page of the command list."""
    page_footer = f"Page {page} of {total_pages}"
    if footer:
        page_footer = f"{page_footer} | {footer}"

    if not commands:
        intro = "There are no commands to list."
    else:
        intro = "This is a list of commands I recognize."
        if total_pages > 1:
            intro += f" Use `{prefix}{list_prompt} [page]` to see more commands."
        intro += (
            " For additional information on a command type"
            f" `{prefix}[command-name] help`."
        )

    lines = [f"**{manager_name} Command List**", intro, ""]
    lines.extend(
        f"**{command.name}** - {command.list_description}" for command in commands
    )
    lines.append("")
    lines.append(page_footer)
    return "\n".join(lines)
