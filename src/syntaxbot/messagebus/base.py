"""Abstract base class for message bus implementations."""

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Generic, TypeVar

from syntaxbot.utils.config import Config


class MessageContext(ABC):
    """
    Abstract base for message context.

    Subclasses override these when the platform knows better; the command
    runner uses them for its direct-message, server and bot policies.
    """

    is_direct: bool = False
    is_bot: bool = False


T = TypeVar("T", bound=MessageContext)


class MessageBus(ABC, Generic[T]):
    """Abstract base for messaging platforms with platform-specific context."""

    @property
    @abstractmethod
    def platform_name(self) -> str:
        """
        Platform identifier.

        Returns:
            Platform name (e.g., 'cli', 'discord')
        """
        pass

    @abstractmethod
    async def run(self, on_message: Callable[[str, T], Awaitable[None]]) -> None:
        """
        Run the message bus. Blocks until stop() is called.

        Args:
            on_message: Callback async function(message: str, context: T)

        Raises:
            RuntimeError: If run() is called when already running.
        """
        pass

    @abstractmethod
    def is_allowed(self, context: T) -> bool:
        """
        Check if sender is whitelisted.

        Args:
            context: Platform-specific message context

        Returns:
            True if sender is allowed
        """
        pass

    @abstractmethod
    async def reply(self, content: str, context: T) -> None:
        """
        Reply to incoming message.

        Args:
            content: Message content to send
            context: Platform-specific context from incoming message
        """
        pass

    @abstractmethod
    async def stop(self) -> None:
        """Stop listening and cleanup resources."""
        pass

    @staticmethod
    def from_config(config: Config) -> list["MessageBus[Any]"]:
        """
        Create message bus instances from configuration.

        Args:
            config: Application configuration

        Returns:
            List of configured message bus instances
        """
        # Inline import so the CLI works without discord.py loaded
        from syntaxbot.messagebus.discord_bus import DiscordBus

        buses: list["MessageBus[Any]"] = []
        bus_config = config.messagebus
        if not bus_config.enabled:
            return buses

        if bus_config.discord and bus_config.discord.enabled:
            buses.append(DiscordBus(bus_config.discord))

        return buses


class BusChannel(Generic[T]):
    """The reply handle given to commands for one incoming message."""

    def __init__(self, bus: MessageBus[T], context: T):
        self.bus = bus
        self.context = context

    async def send(self, content: str) -> None:
        await self.bus.reply(content, self.context)
