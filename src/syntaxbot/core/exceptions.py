"""Custom exceptions for syntaxbot."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from syntaxbot.core.commands.argument import Argument
    from syntaxbot.core.commands.syntax import Syntax


class SyntaxBotError(Exception):
    """Base error type."""


class ConfigError(SyntaxBotError):
    """Raised when a command definition is malformed."""


class InvalidCommandError(ConfigError):
    """Command definition file could not be turned into a command."""

    def __init__(self, command_id: str, reason: str):
        super().__init__(f"Invalid command '{command_id}': {reason}")
        self.command_id = command_id
        self.reason = reason


class UnknownCommandTypeError(ConfigError):
    """Definition names a command type that was never registered."""

    def __init__(self, type_name: str):
        super().__init__(
            f"Unknown command type '{type_name}'. "
            "Register it with CommandManager.add_command_type()."
        )
        self.type_name = type_name


class ManagerBuildError(SyntaxBotError):
    """The command manager could not be built."""


class CommandSyntaxError(SyntaxBotError):
    """User input does not fit the syntax of a command.

    When ``syntax`` is set, it is the only syntax worth showing the user;
    otherwise every syntax of the command applies.
    """

    def __init__(self, message: str, syntax: "Syntax | None" = None):
        super().__init__(message)
        self.syntax = syntax


class ArgumentError(CommandSyntaxError):
    """A structurally matching argument failed coercion or validation."""

    def __init__(
        self,
        argument: "Argument",
        raw: str,
        reason: str,
        syntax: "Syntax | None" = None,
    ):
        super().__init__(
            f"Failed to parse {argument.name}. Input '{raw}' is invalid. {reason}",
            syntax,
        )
        self.argument = argument
        self.raw = raw
        self.reason = reason


class HandlerContractError(SyntaxBotError):
    """A command handler does not accept the (values, channel) parameters."""
