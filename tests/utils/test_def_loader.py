"""Tests for definition file helpers."""

import pytest
import yaml
from pydantic import BaseModel, ValidationError

from syntaxbot.utils.def_loader import (
    discover_definition_files,
    format_validation_error,
    parse_definition,
    substitute_replacements,
)


class Sample(BaseModel):
    name: str
    count: int


class TestFormatValidationError:
    def test_flattens_every_error(self):
        with pytest.raises(ValidationError) as exc:
            Sample.model_validate({"count": "many"})
        text = format_validation_error(exc.value)
        assert "name: Field required" in text
        assert "count:" in text
        assert "; " in text


class TestSubstituteReplacements:
    def test_applies_in_insertion_order(self):
        mapping = {"foobar": "hello", "hello world": "hi"}
        assert substitute_replacements("foobar world", mapping) == "hi"

    def test_reverse_order_changes_result(self):
        mapping = {"hello world": "hi", "foobar": "hello"}
        assert substitute_replacements("foobar world", mapping) == "hello world"

    def test_no_replacements(self):
        assert substitute_replacements("text", {}) == "text"


class TestParseDefinition:
    def test_json(self):
        assert parse_definition('{"name": "x", "n": 1}', "x") == {"name": "x", "n": 1}

    def test_yaml(self):
        assert parse_definition("name: x\nn: 1\n", "x") == {"name": "x", "n": 1}

    def test_top_level_must_be_mapping(self):
        with pytest.raises(ValueError, match="'x' must be a mapping"):
            parse_definition("[1, 2]", "x")

    def test_invalid_syntax(self):
        with pytest.raises(yaml.YAMLError):
            parse_definition('{"name": ', "x")


class TestDiscoverDefinitionFiles:
    def test_finds_supported_files_recursively(self, tmp_path):
        (tmp_path / "a.json").write_text("{}")
        (tmp_path / "b.YML").write_text("")
        (tmp_path / "notes.txt").write_text("")
        nested = tmp_path / "nested"
        nested.mkdir()
        (nested / "c.yaml").write_text("")

        found = discover_definition_files(tmp_path)
        assert [p.relative_to(tmp_path).as_posix() for p in found] == [
            "a.json",
            "b.YML",
            "nested/c.yaml",
        ]

    def test_missing_directory(self, tmp_path, caplog):
        assert discover_definition_files(tmp_path / "missing") == []
        assert "not found" in caplog.text
