"""Tests for CallResponse commands."""

import pytest

from syntaxbot.core.commands.call_response import CallResponse, Response
from syntaxbot.core.exceptions import ConfigError


def make_call_response(**overrides):
    record = {
        "name": "rules",
        "description": "Show the server rules",
        "type": "callResponse",
        "responses": [
            {"keys": ["short", "brief"], "type": "text", "contents": "Be nice."},
            {"keys": ["long"], "type": "text", "contents": "Be nice. Really."},
        ],
    }
    record.update(overrides)
    return CallResponse.from_record(record)


class TestResponse:
    def test_matches_any_key_ignoring_case(self):
        response = Response(keys=("short", "brief"), contents="x")
        assert response.matches("BRIEF")
        assert not response.matches("long")

    def test_no_keys_matches_everything(self):
        assert Response(contents="x").matches("anything")

    def test_only_text_type_is_supported(self):
        with pytest.raises(ConfigError, match="type"):
            make_call_response(
                responses=[{"keys": ["a"], "type": "embed", "contents": "x"}]
            )


class TestCallResponseLoading:
    def test_default_key_is_first_key_of_first_response(self):
        assert make_call_response().default_key == "short"

    def test_explicit_default_key(self):
        command = make_call_response(defaultResponseKey="long")
        assert command.default_key == "long"

    def test_duplicate_keys_rejected(self):
        with pytest.raises(ConfigError, match="more than once"):
            make_call_response(
                responses=[
                    {"keys": ["a"], "contents": "1"},
                    {"keys": ["A"], "contents": "2"},
                ]
            )

    def test_unknown_default_key_rejected(self):
        with pytest.raises(ConfigError, match="defaultResponseKey"):
            make_call_response(defaultResponseKey="missing")

    def test_responses_required(self):
        with pytest.raises(ConfigError, match="responses"):
            make_call_response(responses=[])


class TestCallResponseRespond:
    def test_no_args_uses_default(self):
        assert make_call_response().respond([]) == "Be nice."

    def test_key_lookup(self):
        assert make_call_response().respond(["LONG"]) == "Be nice. Really."

    def test_multi_word_key(self):
        command = make_call_response(
            responses=[{"keys": ["good morning"], "contents": "Morning!"}]
        )
        assert command.respond(["good", "morning"]) == "Morning!"

    def test_unknown_key(self):
        assert make_call_response().respond(["medium"]) is None

    @pytest.mark.anyio
    async def test_process_sends_response(self, channel):
        await make_call_response().process(["brief"], channel, prefix="!")
        assert channel.sent == ["Be nice."]

    @pytest.mark.anyio
    async def test_process_unknown_term(self, channel):
        await make_call_response().process(["medium"], channel, prefix="!")
        assert channel.last == (
            "Error loading response (unknown term). "
            "Try `!rules help` for more information."
        )

    @pytest.mark.anyio
    async def test_process_help(self, channel):
        await make_call_response().process(["help"], channel, prefix="!")
        assert "rules Info" in channel.last
        assert "`short` or `long`" in channel.last
