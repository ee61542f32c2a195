"""Function commands: typed arguments, declared syntaxes and a handler."""

import inspect
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, ClassVar

from pydantic import Field, PrivateAttr, field_validator

from syntaxbot.core.commands.arg_type import infer_types
from syntaxbot.core.commands.argument import Argument
from syntaxbot.core.commands.base import Channel, Command, Handler
from syntaxbot.core.commands.handlers import check_handler_contract
from syntaxbot.core.commands.help import render_info, render_syntax_error
from syntaxbot.core.commands.syntax import Syntax
from syntaxbot.core.commands.value import Value, ValueList
from syntaxbot.core.exceptions import (
    ArgumentError,
    CommandSyntaxError,
    ConfigError,
    HandlerContractError,
)
from syntaxbot.utils.text import plural

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolved:
    values: ValueList
    syntax: Syntax


@dataclass(frozen=True)
class HelpRequested:
    pass


@dataclass(frozen=True)
class Failed:
    error: CommandSyntaxError


Resolution = Resolved | HelpRequested | Failed


def _no_match_message(syntax_count: int) -> str:
    if syntax_count == 1:
        target = "the command syntax."
    elif syntax_count == 2:
        target = "either of the syntaxes for this command."
    else:
        target = "any of the syntaxes for this command."
    return f"Syntax error. The given argument types do not match {target}"


class Function(Command):
    """
    A command that turns user input into a ValueList and runs a handler.

    The ``syntax`` field holds the declaration as written. Each entry is a
    list whose elements are either an argument name or a mapping with
    ``args`` and ``maxRepetitions``. They are compiled into Syntax objects
    once, when the command is built.
    """

    type_tag: ClassVar[str] = "function"

    arguments: tuple[Argument, ...] = ()
    syntax: tuple[tuple[Any, ...], ...] = Field(min_length=1)

    _syntaxes: tuple[Syntax, ...] = PrivateAttr(default=())

    @field_validator("syntax", mode="before")
    @classmethod
    def syntax_is_list_of_lists(cls, v: Any) -> Any:
        if not isinstance(v, (list, tuple)):
            raise ValueError("syntax must be a list of syntaxes")
        for entry in v:
            if not isinstance(entry, (list, tuple)):
                raise ValueError(
                    "each syntax must be a list of argument names or groups"
                )
        return v

    def model_post_init(self, __context: Any) -> None:
        names = [argument.name.lower() for argument in self.arguments]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ConfigError(
                f"Function '{self.name}' declares argument(s) more than once: "
                f"{', '.join(duplicates)}"
            )
        self._syntaxes = tuple(
            Syntax.from_record(list(entry), self.arguments, command_name=self.name)
            for entry in self.syntax
        )

    @property
    def syntaxes(self) -> tuple[Syntax, ...]:
        return self._syntaxes

    def get_argument(self, name: str) -> Argument | None:
        for argument in self.arguments:
            if argument.matches(name):
                return argument
        return None

    def info_fields(self, prefix: str = "") -> list[tuple[str, str]]:
        fields = [("Description", self.description)]
        fields.append(
            (
                plural("Syntax", len(self.syntaxes)),
                "\n".join(f"`{syntax.usage(prefix)}`" for syntax in self.syntaxes),
            )
        )
        if self.arguments:
            fields.append(
                (
                    plural("Argument", len(self.arguments), "s"),
                    "\n".join(argument.description_line() for argument in self.arguments),
                )
            )
        # aliases come last, after the usage information
        fields.extend(
            field for field in super().info_fields(prefix) if field[0] != "Description"
        )
        return fields

    def resolve(self, args: Sequence[str]) -> Resolution:
        """
        Turn the tokens after the command name into validated values.

        Syntaxes are tried in declaration order and the first one that both
        fits structurally and validates wins. If some syntax fit but its
        values were invalid, the first such error is reported; if none fit
        at all, the error lists every syntax.

        Args:
            args: Message tokens after the command name

        Returns:
            Resolved, HelpRequested or Failed
        """
        min_args = 0 if self.allow_no_args else 1
        if self.wants_info(args, min_args):
            return HelpRequested()

        observed = infer_types(args)
        first_error: ArgumentError | None = None

        for syntax in self.syntaxes:
            names = syntax.match(observed)
            if names is None:
                continue

            values = ValueList(self.arguments)
            try:
                for name, raw in zip(names, args):
                    values.add_and_validate(Value(self.get_argument(name), raw), syntax)
            except ArgumentError as e:
                if first_error is None:
                    first_error = e
                continue

            return Resolved(values, syntax)

        if first_error is not None:
            return Failed(first_error)
        return Failed(CommandSyntaxError(_no_match_message(len(self.syntaxes))))

    async def process(
        self,
        args: Sequence[str],
        channel: Channel,
        handler: Handler | None = None,
        prefix: str = "",
    ) -> None:
        resolution = self.resolve(args)

        match resolution:
            case HelpRequested():
                await channel.send(render_info(self, prefix))
            case Failed(error=error):
                await channel.send(
                    render_syntax_error(str(error), self.syntaxes, error.syntax, prefix)
                )
            case Resolved(values=values):
                if handler is None:
                    raise HandlerContractError(
                        f"No handler registered for function '{self.name_lower}'"
                    )
                check_handler_contract(handler)
                result = handler(values, channel)
                if inspect.isawaitable(result):
                    result = await result
                if isinstance(result, str):
                    await channel.send(result)
