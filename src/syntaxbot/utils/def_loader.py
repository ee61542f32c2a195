"""Shared utilities for loading command definition files."""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

logger = logging.getLogger(__name__)

DEFINITION_SUFFIXES = (".json", ".yaml", ".yml")
PREFIX_PLACEHOLDER = "$PREFIX$"


def format_validation_error(error: ValidationError) -> str:
    """
    Flatten a pydantic ValidationError into a single line.

    Args:
        error: The validation error

    Returns:
        "loc: msg; loc: msg" summary of every problem
    """
    parts = []
    for err in error.errors():
        loc = ".".join(str(part) for part in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


def substitute_replacements(text: str, replacements: Mapping[str, str]) -> str:
    """
    Apply literal replacements to raw definition text, in insertion order.

    A replacement may create a match for a later one: with ("foobar", "hello")
    followed by ("hello world", "hi"), "foobar world" ends up as "hi".

    Args:
        text: Raw file content
        replacements: Ordered mapping of search text to replacement

    Returns:
        Text with every replacement applied
    """
    result = text
    for key, value in replacements.items():
        result = result.replace(key, value)
    return result


def parse_definition(content: str, def_id: str) -> dict[str, Any]:
    """
    Parse a JSON or YAML command definition.

    YAML is a superset of JSON, so one parser covers both formats.

    Raises:
        ValueError: If the content is not a mapping
        yaml.YAMLError: If the content is not valid YAML/JSON
    """
    data = yaml.safe_load(content)
    if not isinstance(data, dict):
        raise ValueError(f"Definition '{def_id}' must be a mapping at the top level")
    return data


def discover_definition_files(path: Path) -> list[Path]:
    """
    Recursively find command definition files.

    Args:
        path: Directory containing definition files (sub folders included)

    Returns:
        Sorted list of definition file paths
    """
    if not path.exists():
        logger.warning(f"Definitions directory not found: {path}")
        return []

    return sorted(
        file
        for file in path.rglob("*")
        if file.is_file() and file.suffix.lower() in DEFINITION_SUFFIXES
    )
