"""Discord message bus implementation."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

import discord

from syntaxbot.messagebus.base import MessageBus, MessageContext
from syntaxbot.utils.config import DiscordConfig

logger = logging.getLogger(__name__)


@dataclass
class DiscordContext(MessageContext):
    """Context for Discord messages."""

    user_id: str  # author.id - for whitelisting
    channel_id: str  # channel.id - for replying
    is_direct: bool = False
    is_bot: bool = False


class DiscordBus(MessageBus[DiscordContext]):
    """Discord platform implementation using discord.py."""

    platform_name = "discord"

    def __init__(self, config: DiscordConfig):
        """
        Initialize DiscordBus.

        Args:
            config: Discord configuration
        """
        self.config = config
        self.client: discord.Client | None = None
        self._running_task: asyncio.Task | None = None

    def _context_for(self, message: discord.Message) -> DiscordContext | None:
        """Build the context for a message, or None if it should be ignored."""
        # never answer ourselves
        if self.client and message.author == self.client.user:
            return None

        is_direct = isinstance(message.channel, discord.DMChannel)
        if (
            self.config.channel_id
            and not is_direct
            and str(message.channel.id) != self.config.channel_id
        ):
            return None

        if not message.content:
            return None

        return DiscordContext(
            user_id=str(message.author.id),
            channel_id=str(message.channel.id),
            is_direct=is_direct,
            is_bot=message.author.bot,
        )

    async def run(
        self, on_message: Callable[[str, DiscordContext], Awaitable[None]]
    ) -> None:
        """Run the Discord message bus. Blocks until stop() is called.

        Raises:
            RuntimeError: If run() is called when already running.
        """
        if self._running_task is not None:
            raise RuntimeError("DiscordBus already running")

        logger.info(f"Message bus enabled with platform: {self.platform_name}")

        intents = discord.Intents.default()
        intents.message_content = True
        intents.messages = True

        self.client = discord.Client(intents=intents)
        callback = on_message

        # discord.py dispatches events by function name
        @self.client.event
        async def on_message(message: discord.Message) -> None:
            ctx = self._context_for(message)
            if ctx is None:
                return

            logger.info(
                f"Received Discord message from user {ctx.user_id} in channel {ctx.channel_id}"
            )

            try:
                await callback(message.content, ctx)
            except Exception as e:
                logger.error(f"Error in message callback: {e}")

        self._running_task = asyncio.create_task(
            self.client.start(self.config.bot_token)
        )

        logger.info("DiscordBus started")
        await self._running_task

    def is_allowed(self, context: DiscordContext) -> bool:
        """Check if sender is whitelisted."""
        if not self.config.allowed_user_ids:
            return True
        return context.user_id in self.config.allowed_user_ids

    async def reply(self, content: str, context: DiscordContext) -> None:
        """Reply to incoming message in the same channel."""
        if not self.client:
            raise RuntimeError("DiscordBus not started")

        channel = self.client.get_channel(int(context.channel_id))
        if channel is None:
            channel = await self.client.fetch_channel(int(context.channel_id))

        try:
            # text and DM channels both have send()
            await channel.send(content)  # type: ignore[union-attr]
            logger.debug(f"Sent Discord reply to {context.channel_id}")
        except discord.DiscordException as e:
            logger.error(f"Failed to send Discord reply: {e}")
            raise

    async def stop(self) -> None:
        """Stop Discord bot and cleanup."""
        if self.client is None:
            logger.debug("DiscordBus not running, skipping stop")
            return

        await self.client.close()

        if self._running_task and not self._running_task.done():
            try:
                await asyncio.wait_for(self._running_task, timeout=2.0)
            except asyncio.TimeoutError:
                logger.warning("Running task did not complete in time")

        self.client = None
        self._running_task = None
        logger.info("DiscordBus stopped")
