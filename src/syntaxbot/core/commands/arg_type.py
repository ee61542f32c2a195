"""Argument types and the rules for matching them against user input."""

import re
from enum import Enum

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

# Decimal literals plus the exact words NaN and Infinity; "inf", "nan" and
# digit separators stay strings
_FLOAT_LITERAL = re.compile(
    r"[+-]?(?:NaN|Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)", re.ASCII
)

_SPELLINGS = {
    "str": "string",
    "string": "string",
    "bool": "boolean",
    "boolean": "boolean",
    "int": "integer",
    "integer": "integer",
    "dbl": "double",
    "double": "double",
}


class ArgType(Enum):
    """Primitive argument types."""

    STRING = "string"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    DOUBLE = "double"

    @classmethod
    def parse(cls, text: str) -> "ArgType":
        """Convert a declaration spelling ("int", "Double", ...) to an ArgType."""
        key = text.strip().lower()
        if key not in _SPELLINGS:
            raise ValueError(f"Unknown argument type '{key}'")
        return cls(_SPELLINGS[key])

    @property
    def is_number(self) -> bool:
        return self in (ArgType.INTEGER, ArgType.DOUBLE)


def _is_int_literal(token: str) -> bool:
    digits = token[1:] if token[:1] in ("+", "-") else token
    if not digits or not digits.isascii() or not digits.isdigit():
        return False
    return INT_MIN <= int(token) <= INT_MAX


def _is_float_literal(token: str) -> bool:
    return _FLOAT_LITERAL.fullmatch(token) is not None


def infer_type(token: str) -> ArgType:
    """
    Infer the observed type of a single input token.

    Integer is tried before double so that "5" is never reported as DOUBLE;
    compatibility checks prefer exact matches and only widen afterwards.
    """
    if _is_int_literal(token):
        return ArgType.INTEGER
    if _is_float_literal(token):
        return ArgType.DOUBLE
    if token.lower() in ("true", "false"):
        return ArgType.BOOLEAN
    return ArgType.STRING


def infer_types(tokens: list[str]) -> list[ArgType]:
    """Infer the observed type of each token."""
    return [infer_type(token) for token in tokens]


def is_compatible(declared: ArgType, observed: ArgType) -> bool:
    """
    Check whether input of the observed type may fill a declared slot.

    Booleans are acceptable strings and integers are acceptable doubles.
    The relation is one-way: a declared BOOLEAN never accepts a STRING.
    """
    if declared == observed:
        return True
    if declared == ArgType.STRING and observed == ArgType.BOOLEAN:
        return True
    return declared == ArgType.DOUBLE and observed == ArgType.INTEGER
