"""Message bus implementations for different platforms."""

from syntaxbot.messagebus.base import BusChannel, MessageBus, MessageContext
from syntaxbot.messagebus.cli_bus import CliBus
from syntaxbot.messagebus.discord_bus import DiscordBus

__all__ = ["MessageBus", "MessageContext", "BusChannel", "DiscordBus", "CliBus"]
