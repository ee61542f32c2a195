"""Command registry: loads definition files into an immutable command set."""

import logging
import math
import threading
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import yaml

from syntaxbot.core.commands.base import Command, Handler
from syntaxbot.core.commands.call_response import CallResponse
from syntaxbot.core.commands.function import Function
from syntaxbot.core.commands.handlers import HandlerRegistry
from syntaxbot.core.exceptions import (
    ConfigError,
    InvalidCommandError,
    ManagerBuildError,
    UnknownCommandTypeError,
)
from syntaxbot.utils.config import ManagerConfig
from syntaxbot.utils.def_loader import (
    PREFIX_PLACEHOLDER,
    discover_definition_files,
    parse_definition,
    substitute_replacements,
)

if TYPE_CHECKING:
    from syntaxbot.utils.config import Config

logger = logging.getLogger(__name__)

COMMAND_TYPES: dict[str, type[Command]] = {
    Function.type_tag: Function,
    CallResponse.type_tag: CallResponse,
}


@dataclass(frozen=True)
class CommandSet:
    """Everything one build produced. Never modified after creation."""

    config: ManagerConfig
    commands: tuple[Command, ...] = ()
    errors: tuple[ConfigError, ...] = ()

    @property
    def list_eligible(self) -> tuple[Command, ...]:
        return tuple(c for c in self.commands if c.include_in_commands_list)

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(len(self.list_eligible) / self.config.commands_per_page))

    def find(self, tokens: Sequence[str]) -> tuple[Command, int] | None:
        """
        Find the command a tokenized message invokes.

        Returns:
            (command, number of name tokens), or None if nothing matches
        """
        for command in self.commands:
            consumed = command.matches(tokens)
            if consumed:
                return command, consumed
        return None

    def command_list_page(self, page: int) -> tuple[int, tuple[Command, ...]]:
        """
        Get one page of list-eligible commands. Page numbers wrap around.

        Returns:
            (actual page number, commands on that page)
        """
        total = self.total_pages
        page = (page - 1) % total + 1
        per_page = self.config.commands_per_page
        start = (page - 1) * per_page
        return page, self.list_eligible[start : start + per_page]


class CommandManager:
    """
    Owns the current CommandSet and rebuilds it from definition files.

    A build constructs a complete new CommandSet and swaps it in with one
    assignment, so readers always see either the old or the new set.
    """

    @staticmethod
    def from_config(
        config: "Config", handlers: HandlerRegistry | None = None
    ) -> "CommandManager":
        return CommandManager(config.commands_path, config.manager, handlers)

    def __init__(
        self,
        commands_path: Path,
        config: ManagerConfig | None = None,
        handlers: HandlerRegistry | None = None,
    ):
        self.commands_path = Path(commands_path)
        self.config = config or ManagerConfig()
        self.handlers = handlers if handlers is not None else HandlerRegistry()
        self.command_types: dict[str, type[Command]] = dict(COMMAND_TYPES)
        self._build_lock = threading.Lock()
        self._snapshot: CommandSet | None = None

    def add_command_type(self, tag: str, command_cls: type[Command]) -> None:
        """Register an additional command variant under a type tag."""
        if not (isinstance(command_cls, type) and issubclass(command_cls, Command)):
            raise TypeError(f"{command_cls!r} is not a Command subclass")
        self.command_types[tag.lower()] = command_cls

    def build(self, config: ManagerConfig | None = None) -> CommandSet:
        """
        Load every definition file and swap in the resulting command set.

        A definition that fails to load is logged, recorded in the set's
        errors and skipped. Calling build() again rebuilds from disk.

        Args:
            config: New dispatcher settings; the current ones if omitted

        Returns:
            The new CommandSet

        Raises:
            ManagerBuildError: If the commands directory does not exist
        """
        with self._build_lock:
            if config is not None:
                self.config = config
            if not self.commands_path.is_dir():
                raise ManagerBuildError(
                    f"Commands directory not found: {self.commands_path}"
                )

            commands: list[Command] = []
            errors: list[ConfigError] = []
            for path in discover_definition_files(self.commands_path):
                def_id = path.relative_to(self.commands_path).as_posix()
                try:
                    content = path.read_text(encoding="utf-8")
                    commands.append(self.load_command(content, def_id))
                except ConfigError as e:
                    logger.warning(f"Skipping command definition {def_id}: {e}")
                    errors.append(e)
                except OSError as e:
                    logger.warning(f"Cannot read command definition {def_id}: {e}")
                    errors.append(InvalidCommandError(def_id, str(e)))

            for command in commands:
                if isinstance(command, Function) and command.name_lower not in self.handlers:
                    logger.warning(f"No handler registered for function '{command.name}'")

            snapshot = CommandSet(self.config, tuple(commands), tuple(errors))
            self._snapshot = snapshot

        logger.info(f"Loaded {len(commands)} commands with {len(errors)} errors")
        return snapshot

    def load_command(self, content: str, def_id: str) -> Command:
        """
        Turn the text of one definition file into a command.

        Raises:
            InvalidCommandError: If the text does not describe a valid command
            UnknownCommandTypeError: If the definition's type is not registered
        """
        if self.config.prefix_replacement:
            content = content.replace(PREFIX_PLACEHOLDER, self.config.main_prefix)
        content = substitute_replacements(content, self.config.replacements)

        try:
            record = parse_definition(content, def_id)
        except (yaml.YAMLError, ValueError) as e:
            raise InvalidCommandError(def_id, str(e)) from e

        type_name = record.get("type")
        if not isinstance(type_name, str):
            raise InvalidCommandError(def_id, "missing required key 'type'")

        command_cls = self.command_types.get(type_name.lower())
        if command_cls is None:
            raise UnknownCommandTypeError(type_name)

        try:
            return command_cls.from_record(record)
        except ConfigError as e:
            raise InvalidCommandError(def_id, str(e)) from e

    @property
    def snapshot(self) -> CommandSet:
        """
        Raises:
            ManagerBuildError: If build() has not completed yet
        """
        snapshot = self._snapshot
        if snapshot is None:
            raise ManagerBuildError("Command manager has not been built")
        return snapshot

    @property
    def is_built(self) -> bool:
        return self._snapshot is not None

    @property
    def commands(self) -> tuple[Command, ...]:
        return self.snapshot.commands

    @property
    def errors(self) -> tuple[ConfigError, ...]:
        return self.snapshot.errors

    @property
    def main_prefix(self) -> str:
        return self.config.main_prefix

    def find(self, tokens: Sequence[str]) -> tuple[Command, int] | None:
        return self.snapshot.find(tokens)

    def command_list_page(self, page: int) -> tuple[int, tuple[Command, ...]]:
        return self.snapshot.command_list_page(page)

    def get_handler(self, command: Command) -> Handler | None:
        return self.handlers.get(command.name)
