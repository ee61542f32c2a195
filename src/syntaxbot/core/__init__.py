"""Core command functionality."""

from .commands.base import Command
from .commands.call_response import CallResponse
from .commands.function import Failed, Function, HelpRequested, Resolved
from .commands.handlers import HandlerRegistry
from .commands.registry import CommandManager, CommandSet
from .commands.runner import CommandRunner
from .context import SharedContext

__all__ = [
    "Command",
    "Function",
    "CallResponse",
    "Resolved",
    "HelpRequested",
    "Failed",
    "HandlerRegistry",
    "CommandManager",
    "CommandSet",
    "CommandRunner",
    "SharedContext",
]
