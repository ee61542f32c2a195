"""Utilities package."""

from syntaxbot.utils.def_loader import (
    discover_definition_files,
    format_validation_error,
    parse_definition,
)
from syntaxbot.utils.logging import setup_logging

__all__ = [
    "discover_definition_files",
    "format_validation_error",
    "parse_definition",
    "setup_logging",
]
