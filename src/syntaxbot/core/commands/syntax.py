"""Syntax declarations and the structural matching algorithm."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from syntaxbot.core.commands.arg_type import ArgType, is_compatible
from syntaxbot.core.commands.argument import Argument
from syntaxbot.core.exceptions import ConfigError


@dataclass(frozen=True)
class ArgumentGroup:
    """
    One step of a syntax.

    Either a single argument, or a tuple of arguments that may repeat up to
    ``max_repetitions`` times in a row.
    """

    names: tuple[str, ...]
    types: tuple[ArgType, ...]
    max_repetitions: int = 1

    @property
    def size(self) -> int:
        return len(self.names)

    @classmethod
    def from_record(
        cls, record: Any, arguments: Sequence[Argument]
    ) -> "ArgumentGroup":
        """
        Build a group from a bare argument name or an {args, maxRepetitions} mapping.

        Raises:
            ConfigError: If the record is malformed or names an undeclared argument
        """
        if isinstance(record, str):
            names = [record]
            max_repetitions = 1
        elif isinstance(record, dict):
            names = record.get("args")
            if not isinstance(names, list) or not names:
                raise ConfigError("Syntax group must have a non-empty 'args' list")
            max_repetitions = record.get(
                "maxRepetitions", record.get("max_repetitions")
            )
            if (
                not isinstance(max_repetitions, int)
                or isinstance(max_repetitions, bool)
                or max_repetitions < 1
            ):
                raise ConfigError(
                    f"Syntax group {names} needs an integer maxRepetitions >= 1"
                )
        else:
            raise ConfigError(f"Unrecognized syntax element: {record!r}")

        types = []
        for name in names:
            argument = _find_argument(str(name), arguments)
            if argument is None:
                raise ConfigError(
                    f"Syntax references argument '{name}', "
                    "but no argument with that name is declared"
                )
            types.append(argument.type)

        return cls(
            names=tuple(str(name) for name in names),
            types=tuple(types),
            max_repetitions=max_repetitions,
        )

    def __str__(self) -> str:
        text = " ".join(f"[{name}]" for name in self.names)
        if self.max_repetitions > 1:
            return f"{{{text} x{self.max_repetitions}}}"
        return text


def _find_argument(name: str, arguments: Sequence[Argument]) -> Argument | None:
    for argument in arguments:
        if argument.matches(name):
            return argument
    return None


class Syntax:
    """An ordered sequence of argument groups accepted by a function command."""

    def __init__(self, groups: Sequence[ArgumentGroup], command_name: str = ""):
        self.groups = tuple(groups)
        self.command_name = command_name

    @classmethod
    def from_record(
        cls, record: Sequence[Any], arguments: Sequence[Argument], command_name: str = ""
    ) -> "Syntax":
        """
        Build a Syntax from its declaration list.

        Raises:
            ConfigError: If any element is malformed or names an undeclared argument
        """
        if isinstance(record, (str, dict)):
            raise ConfigError("A syntax must be a list of argument groups")
        groups = [ArgumentGroup.from_record(item, arguments) for item in record]
        return cls(groups, command_name)

    def match(self, observed: Sequence[ArgType]) -> list[str] | None:
        """
        Match observed input types against this syntax.

        Groups are consumed greedily, left to right. When a group does not
        fit, or the groups run out while input remains, the group right
        before the cursor is tried again if it has repetitions left. Groups
        after the last consumed token are optional.

        Args:
            observed: Inferred type of each input token

        Returns:
            Argument name for each input position, or None if this syntax
            does not fit
        """
        groups = self.groups
        remaining = list(observed)
        names: list[str] = []

        index = 0
        repetitions = 0
        # group index at which the repetition counter was last advanced
        last_repeated = -1

        while remaining:
            can_repeat = (
                index > 0 and groups[index - 1].max_repetitions > repetitions + 1
            )

            if can_repeat and index >= len(groups):
                index -= 1
                repetitions += 1
                last_repeated = index
                continue

            if index >= len(groups):
                return None

            group = groups[index]
            fits = True
            for offset, declared in enumerate(group.types):
                if offset >= len(remaining):
                    return None
                if not is_compatible(declared, remaining[offset]):
                    fits = False
                    break

            if fits:
                if last_repeated != index:
                    repetitions = 0
                del remaining[: group.size]
                names.extend(group.names)
                index += 1
                continue

            if can_repeat:
                index -= 1
                repetitions += 1
                last_repeated = index
                continue

            return None

        return names

    def usage(self, prefix: str = "") -> str:
        """Usage line such as "!roll [dice] {[name] [sides] x3}"."""
        parts = [f"{prefix}{self.command_name.lower()}"]
        parts.extend(str(group) for group in self.groups)
        return " ".join(part for part in parts if part)

    def __str__(self) -> str:
        return self.usage()

    def __repr__(self) -> str:
        return f"Syntax({self.usage()!r})"
