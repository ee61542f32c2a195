from syntaxbot.core.commands.handlers import HandlerRegistry
from syntaxbot.core.commands.registry import CommandManager
from syntaxbot.core.commands.runner import CommandRunner
from syntaxbot.messagebus.base import MessageBus
from syntaxbot.utils.config import Config


class SharedContext:
    """Global shared state for the application."""

    config: Config
    handlers: HandlerRegistry
    command_manager: CommandManager
    runner: CommandRunner
    messagebus_buses: list[MessageBus]

    def __init__(
        self,
        config: Config,
        handlers: HandlerRegistry | None = None,
        buses: list[MessageBus] | None = None,
    ):
        self.config = config
        if handlers is None:
            handlers = HandlerRegistry()
            handlers.load_modules(config.handler_modules)
        self.handlers = handlers
        self.command_manager = CommandManager.from_config(config, handlers)
        self.runner = CommandRunner(self.command_manager)
        self.messagebus_buses = (
            buses if buses is not None else MessageBus.from_config(config)
        )
