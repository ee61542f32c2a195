"""Base classes for declared commands."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, Callable, ClassVar, Protocol

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from syntaxbot.core.exceptions import ConfigError
from syntaxbot.utils.def_loader import format_validation_error
from syntaxbot.utils.text import merge_list, plural

INFO_WORDS = ("help", "info", "information")

Handler = Callable[..., Any]


class Channel(Protocol):
    """Where replies for one incoming message go."""

    async def send(self, content: str) -> None: ...


class Command(BaseModel, ABC):
    """
    Common part of every declared command.

    Subclasses are the command variants (function, call-response). They are
    built once from a definition record and never change afterwards.
    """

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    type_tag: ClassVar[str]

    name: str
    description: str
    short_description: str | None = None
    link: str | None = None
    aliases: tuple[str, ...] = ()
    typo_aliases: tuple[str, ...] = ()
    include_in_commands_list: bool = True
    allow_no_args: bool = False

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Command":
        """
        Build a command from its definition record.

        Raises:
            ConfigError: If the record is missing keys or has invalid values
        """
        try:
            return cls.model_validate(record)
        except ValidationError as e:
            raise ConfigError(format_validation_error(e)) from e

    @property
    def name_lower(self) -> str:
        return self.name.lower()

    @property
    def list_description(self) -> str:
        """Text shown next to the name in the command list."""
        return self.short_description or self.description

    def matches(self, tokens: Sequence[str]) -> int:
        """
        Check whether a tokenized message invokes this command.

        Names and aliases may span several words. Typo aliases match like
        aliases but are never shown to users.

        Returns:
            Number of leading tokens that make up the command name, 0 if the
            message is not for this command
        """
        lowered = [token.lower() for token in tokens]
        for candidate in (self.name, *self.aliases, *self.typo_aliases):
            words = candidate.lower().split()
            if words and lowered[: len(words)] == words:
                return len(words)
        return 0

    def wants_info(self, args: Sequence[str], min_args: int = 1) -> bool:
        """True if the user asked for help or gave too few arguments."""
        if len(args) < min_args:
            return True
        return bool(args) and args[0].lower() in INFO_WORDS

    def help_string(self, prefix: str = "") -> str:
        return f"{prefix}{self.name_lower} help"

    def info_fields(self, prefix: str = "") -> list[tuple[str, str]]:
        """(title, text) pairs describing this command for the help panel."""
        fields = [("Description", self.description)]
        if self.aliases:
            fields.append(
                (plural("Alias", len(self.aliases)), merge_list(list(self.aliases)))
            )
        return fields

    @abstractmethod
    async def process(
        self,
        args: Sequence[str],
        channel: Channel,
        handler: Handler | None = None,
        prefix: str = "",
    ) -> None:
        """
        Run this command for one message.

        Args:
            args: Message tokens after the command name
            channel: Where replies go
            handler: Developer code registered for this command, if any
            prefix: Main command prefix, for help and usage text
        """
        pass
