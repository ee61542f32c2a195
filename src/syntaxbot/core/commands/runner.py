"""Dispatch of incoming chat messages to commands."""

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from syntaxbot.core.commands.base import Channel, Command
from syntaxbot.core.commands.help import render_command_list
from syntaxbot.core.commands.registry import CommandManager, CommandSet
from syntaxbot.core.exceptions import HandlerContractError
from syntaxbot.utils.config import ManagerConfig

if TYPE_CHECKING:
    from syntaxbot.messagebus.base import MessageContext

logger = logging.getLogger(__name__)


class CommandRunner:
    """Turns raw message text into command executions for one manager."""

    def __init__(self, manager: CommandManager):
        self.manager = manager

    def strip_prefix(
        self,
        message: str,
        is_direct: bool,
        config: ManagerConfig | None = None,
    ) -> str | None:
        """
        Remove the command prefix from a message.

        Only the prefix comparison honors case insensitivity; the rest of the
        message keeps its case.

        Args:
            message: Raw message text
            is_direct: True for direct messages, False for server channels
            config: Settings to use; the manager's current ones if omitted

        Returns:
            Message text without the prefix, or None if a required prefix
            is missing
        """
        config = config or self.manager.config
        text = message.strip()
        compare = text if config.prefix_case_sensitive else text.lower()

        for prefix in config.prefixes:
            wanted = prefix if config.prefix_case_sensitive else prefix.lower()
            if compare.startswith(wanted):
                return text[len(prefix) :]

        required = (
            config.require_prefix_in_dm if is_direct else config.require_prefix_in_server
        )
        return None if required else text

    async def run_message(
        self,
        message: str,
        channel: Channel,
        context: "MessageContext | None" = None,
    ) -> bool:
        """
        Handle one incoming message.

        Args:
            message: Raw message text
            channel: Where replies go
            context: Who sent the message and where; treated as a direct
                message from a person when omitted

        Returns:
            True if the message was a command (or a command-list request)
            and something was sent; False if it was ignored
        """
        commands = self.manager.snapshot
        config = commands.config
        is_direct = context.is_direct if context is not None else True
        is_bot = context.is_bot if context is not None else False

        if is_bot and not config.allow_bot_events:
            return False
        if is_direct and not config.allow_direct_messages:
            return False
        if not is_direct and not config.allow_server_messages:
            return False

        stripped = self.strip_prefix(message, is_direct, config)
        if stripped is None:
            return False
        tokens = stripped.split()
        if not tokens:
            return False

        if await self._maybe_send_command_list(commands, tokens, channel):
            return True

        found = commands.find(tokens)
        if found is not None:
            command, consumed = found
            await self.execute(command, tokens[consumed:], channel, config.main_prefix)
            return True

        if config.send_unknown_command_error:
            await channel.send("Unknown command.")
            return True
        return False

    async def _maybe_send_command_list(
        self, commands: CommandSet, tokens: Sequence[str], channel: Channel
    ) -> bool:
        config = commands.config
        lowered = [token.lower() for token in tokens]

        for prompt in config.command_list_prompts:
            words = prompt.lower().split()
            if not words or lowered[: len(words)] != words:
                continue

            rest = tokens[len(words) :]
            if len(rest) > 1 or (rest and not (rest[0].isascii() and rest[0].isdigit())):
                # not a page number, so leave it to the commands
                continue
            requested = int(rest[0]) if rest else 1
            page, listed = commands.command_list_page(requested)
            await channel.send(
                render_command_list(
                    config.name,
                    listed,
                    page,
                    commands.total_pages,
                    prefix=config.main_prefix,
                    footer=config.command_list_footer,
                    list_prompt=prompt,
                )
            )
            return True
        return False

    async def execute(
        self,
        command: Command,
        args: Sequence[str],
        channel: Channel,
        prefix: str | None = None,
    ) -> None:
        """
        Run a command, reporting any failure to the channel instead of raising.

        Args:
            command: The command to run
            args: Message tokens after the command name
            channel: Where replies go
            prefix: Main prefix for help text; the manager's if omitted
        """
        if prefix is None:
            prefix = self.manager.main_prefix
        handler = self.manager.get_handler(command)

        try:
            await command.process(args, channel, handler, prefix)
        except HandlerContractError as e:
            logger.error(f"Command '{command.name}' cannot run: {e}")
            await channel.send(
                f"The `{command.name_lower}` command is not set up correctly."
            )
        except Exception:
            logger.exception(f"Command '{command.name}' failed")
            await channel.send(
                f"Something went wrong while running `{command.name_lower}`."
            )
