"""CLI message bus implementation."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

from rich.console import Console

from syntaxbot.messagebus.base import MessageBus, MessageContext

logger = logging.getLogger(__name__)


@dataclass
class CliContext(MessageContext):
    """Context for CLI messages. A terminal session counts as a direct message."""

    user_id: str = "cli-user"
    is_direct: bool = True


class CliBus(MessageBus[CliContext]):
    """CLI platform implementation using stdin/stdout."""

    platform_name = "cli"

    def __init__(self, console: Console | None = None):
        self.console = console or Console()
        self._stop_event = asyncio.Event()
        self._running = False

    def is_allowed(self, context: CliContext) -> bool:
        """CLI always allows all users."""
        return True

    async def run(
        self, on_message: Callable[[str, CliContext], Awaitable[None]]
    ) -> None:
        """Run the CLI message bus. Blocks until stop() is called or quit command.

        Raises:
            RuntimeError: If run() is called when already running.
        """
        if self._running:
            raise RuntimeError("CliBus already running")

        self._running = True
        self._stop_event.clear()
        logger.info(f"Message bus enabled with platform: {self.platform_name}")

        try:
            while not self._stop_event.is_set():
                # input() blocks, so read in a thread
                try:
                    user_input = await asyncio.to_thread(input, "You: ")
                except EOFError:
                    logger.info("EOF received, stopping CLI bus")
                    break
                except KeyboardInterrupt:
                    logger.info("Keyboard interrupt received, stopping CLI bus")
                    break

                if user_input.lower().strip() in ("quit", "exit", "q"):
                    logger.info("Quit command received, stopping CLI bus")
                    break

                if not user_input.strip():
                    continue

                ctx = CliContext()
                logger.debug(f"Received CLI message from user {ctx.user_id}")

                try:
                    await on_message(user_input, ctx)
                except Exception as e:
                    logger.error(f"Error in message callback: {e}")
        finally:
            self._running = False
            logger.info("CliBus stopped")

    async def reply(self, content: str, context: CliContext) -> None:
        """Reply by printing to stdout. Markup is left as typed."""
        self.console.print(content, markup=False, highlight=False)
        logger.debug(f"Sent CLI reply to {context.user_id}")

    async def stop(self) -> None:
        if not self._running:
            return
        logger.info("Stopping CliBus")
        self._stop_event.set()
