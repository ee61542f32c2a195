"""Resolved argument values and the list handed to command handlers."""

import math
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from syntaxbot.core.commands.arg_type import ArgType
from syntaxbot.core.commands.argument import Argument
from syntaxbot.core.exceptions import ArgumentError
from syntaxbot.utils.num import format_number, round_sig_figs, round_sig_figs_int

if TYPE_CHECKING:
    from syntaxbot.core.commands.syntax import Syntax


class Value:
    """One piece of user input assigned to a declared argument."""

    def __init__(self, argument: Argument, raw: str):
        self.argument = argument
        self.raw = raw

    @property
    def name(self) -> str:
        return self.argument.name

    def matches(self, key: str) -> bool:
        return self.argument.matches(key)

    def as_str(self) -> str:
        return self.raw

    def as_int(self) -> int:
        """
        Coerce to int.

        The text is parsed as a float first so "1e4" is accepted; anything
        with a fractional part is rejected.

        Raises:
            ValueError: If the text is not an integral number
        """
        number = float(self.raw)
        if not math.isfinite(number) or not number.is_integer():
            raise ValueError(f"'{self.raw}' is not an integer")
        return round_sig_figs_int(int(number), self.argument.sig_figs)

    def as_float(self) -> float:
        """
        Coerce to float, rounded to the argument's significant figures.

        Raises:
            ValueError: If the text is not a number
        """
        return round_sig_figs(float(self.raw), self.argument.sig_figs)

    def as_bool(self) -> bool:
        """Anything other than "true" (any case) is False."""
        return self.raw.lower() == "true"

    def problem(self) -> str | None:
        """
        Check this value against its argument's type and constraints.

        Returns:
            None if the value is acceptable, otherwise the reason it is not
        """
        arg_type = self.argument.type

        if arg_type == ArgType.INTEGER:
            try:
                number = self.as_int()
            except ValueError:
                return "Use a valid integer."
            return self._bounds_problem(number)

        if arg_type == ArgType.DOUBLE:
            try:
                real = self.as_float()
            except ValueError:
                return "Use a valid number."
            if math.isnan(real):
                return "Use a valid number."
            return self._bounds_problem(real)

        if arg_type == ArgType.STRING and self.argument.allowed_values is not None:
            if self.raw not in self.argument.allowed_values:
                return f"Must be one of {self.argument.allowed_values_text()}."

        return None

    def _bounds_problem(self, number: float) -> str | None:
        arg = self.argument
        floor, ceiling = arg.floor, arg.ceiling
        if number < floor or (not arg.floor_inclusive and number == floor):
            qualifier = "or equal to " if arg.floor_inclusive else ""
            return f"Must be greater than {qualifier}{format_number(floor)}."
        if number > ceiling or (not arg.ceiling_inclusive and number == ceiling):
            qualifier = "or equal to " if arg.ceiling_inclusive else ""
            return f"Must be less than {qualifier}{format_number(ceiling)}."
        return None

    def validate(self, syntax: "Syntax | None" = None) -> None:
        """
        Raises:
            ArgumentError: If problem() reports anything
        """
        reason = self.problem()
        if reason is not None:
            raise ArgumentError(self.argument, self.raw, reason, syntax)

    def __repr__(self) -> str:
        return f"Value({self.argument.name}={self.raw!r})"


class ValueList(list[Value]):
    """
    The values resolved for one command invocation.

    Order follows the matched syntax. Lookups are case-insensitive on the
    argument name. Singular getters fall back to the declared default and
    then to a zero value; they never raise. The get_all_* getters are for
    repeated groups and return an empty list when nothing matched.
    """

    def __init__(self, arguments: Sequence[Argument], values: Iterable[Value] = ()):
        super().__init__(values)
        self.arguments = tuple(arguments)

    def add_and_validate(self, value: Value, syntax: "Syntax | None" = None) -> None:
        value.validate(syntax)
        self.append(value)

    def has_value(self, name: str) -> bool:
        return self._find(name) is not None

    def _find(self, name: str) -> Value | None:
        for value in self:
            if value.matches(name):
                return value
        return None

    def _matching(self, name: str) -> list[Value]:
        return [value for value in self if value.matches(name)]

    def _default(self, name: str) -> Value | None:
        for argument in self.arguments:
            if argument.matches(name):
                if argument.default_value is None:
                    return None
                return Value(argument, argument.default_value)
        return None

    def _candidates(self, name: str) -> list[Value]:
        found = (self._find(name), self._default(name))
        return [value for value in found if value is not None]

    def get_int(self, name: str) -> int:
        for value in self._candidates(name):
            try:
                return value.as_int()
            except ValueError:
                continue
        return 0

    def get_float(self, name: str) -> float:
        for value in self._candidates(name):
            try:
                return value.as_float()
            except ValueError:
                continue
        return 0.0

    def get_str(self, name: str) -> str:
        value = self._find(name) or self._default(name)
        return "" if value is None else value.as_str()

    def get_bool(self, name: str) -> bool:
        value = self._find(name) or self._default(name)
        return False if value is None else value.as_bool()

    def get_all_int(self, name: str) -> list[int]:
        return [value.as_int() for value in self._matching(name)]

    def get_all_float(self, name: str) -> list[float]:
        return [value.as_float() for value in self._matching(name)]

    def get_all_str(self, name: str) -> list[str]:
        return [value.as_str() for value in self._matching(name)]

    def get_all_bool(self, name: str) -> list[bool]:
        return [value.as_bool() for value in self._matching(name)]
