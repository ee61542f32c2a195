"""Small text helpers shared by help output and error messages."""

from collections.abc import Sequence


def merge_list(items: Sequence[str], conjunction: str = "and") -> str:
    """
    Join items into an English list.

    >>> merge_list(["a", "b", "c"], "or")
    'a, b or c'
    """
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    return f"{', '.join(items[:-1])} {conjunction} {items[-1]}"


def plural(word: str, count: int, suffix: str = "es") -> str:
    return word + suffix if count > 1 else word
