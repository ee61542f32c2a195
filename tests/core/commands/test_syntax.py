"""Tests for syntax declarations and structural matching."""

import pytest

from syntaxbot.core.commands.arg_type import ArgType
from syntaxbot.core.commands.argument import Argument
from syntaxbot.core.commands.syntax import ArgumentGroup, Syntax
from syntaxbot.core.exceptions import ConfigError

S, B, I, D = ArgType.STRING, ArgType.BOOLEAN, ArgType.INTEGER, ArgType.DOUBLE


def make_args(**types):
    args = []
    for name, arg_type in types.items():
        fields = {}
        if arg_type.is_number:
            fields = dict(
                floor=0, floor_inclusive=True, ceiling=100, ceiling_inclusive=True
            )
        args.append(Argument(name=name, description=name, type=arg_type, **fields))
    return args


class TestSyntaxFromRecord:
    def test_bare_names_and_groups(self):
        arguments = make_args(dice=I, name=S, sides=I)
        syntax = Syntax.from_record(
            ["dice", {"args": ["name", "sides"], "maxRepetitions": 3}],
            arguments,
            command_name="Roll",
        )
        assert syntax.groups == (
            ArgumentGroup(("dice",), (I,)),
            ArgumentGroup(("name", "sides"), (S, I), max_repetitions=3),
        )
        assert syntax.usage("!") == "!roll [dice] {[name] [sides] x3}"

    def test_argument_names_are_case_insensitive(self):
        syntax = Syntax.from_record(["AMOUNT"], make_args(amount=I))
        assert syntax.groups[0].types == (I,)

    def test_unknown_argument(self):
        with pytest.raises(ConfigError, match="'missing'"):
            Syntax.from_record(["missing"], make_args(amount=I))

    @pytest.mark.parametrize("reps", [0, -1, "3", True, None])
    def test_bad_max_repetitions(self, reps):
        with pytest.raises(ConfigError, match="maxRepetitions"):
            Syntax.from_record(
                [{"args": ["amount"], "maxRepetitions": reps}], make_args(amount=I)
            )

    def test_group_needs_args(self):
        with pytest.raises(ConfigError, match="'args'"):
            Syntax.from_record([{"maxRepetitions": 2}], make_args(amount=I))

    def test_syntax_must_be_a_list(self):
        with pytest.raises(ConfigError):
            Syntax.from_record("amount", make_args(amount=I))

    def test_unrecognized_element(self):
        with pytest.raises(ConfigError, match="Unrecognized"):
            Syntax.from_record([5], make_args(amount=I))


class TestSyntaxMatch:
    def test_exact_match_returns_names(self):
        syntax = Syntax([ArgumentGroup(("x",), (D,)), ArgumentGroup(("y",), (D,))])
        assert syntax.match([D, I]) == ["x", "y"]

    def test_empty_input_matches(self):
        syntax = Syntax([ArgumentGroup(("x",), (D,))])
        assert syntax.match([]) == []

    def test_trailing_groups_are_optional(self):
        syntax = Syntax([ArgumentGroup(("x",), (D,)), ArgumentGroup(("y",), (D,))])
        assert syntax.match([D]) == ["x"]

    def test_dangling_token_fails(self):
        syntax = Syntax([ArgumentGroup(("x",), (D,))])
        assert syntax.match([D, D]) is None

    def test_type_mismatch_fails(self):
        syntax = Syntax([ArgumentGroup(("flag",), (B,))])
        assert syntax.match([S]) is None

    def test_partial_group_fails(self):
        syntax = Syntax([ArgumentGroup(("a", "b"), (S, I))])
        assert syntax.match([S]) is None

    @pytest.mark.parametrize(
        "length,matches",
        [(2, True), (3, False), (4, True), (5, False), (6, True), (8, False)],
    )
    def test_repeated_pair(self, length, matches):
        syntax = Syntax([ArgumentGroup(("a", "b"), (S, I), max_repetitions=3)])
        observed = [S, I] * (length // 2) + [S] * (length % 2)
        result = syntax.match(observed)
        if matches:
            assert result == ["a", "b"] * (length // 2)
        else:
            assert result is None

    def test_repeated_group_after_fixed_group(self):
        syntax = Syntax(
            [
                ArgumentGroup(("dice",), (I,)),
                ArgumentGroup(("name", "sides"), (S, I), max_repetitions=2),
            ]
        )
        assert syntax.match([I, S, I, S, I]) == ["dice", "name", "sides", "name", "sides"]
        assert syntax.match([I, S, I, S, I, S, I]) is None

    def test_repeated_group_followed_by_fixed_group(self):
        syntax = Syntax(
            [
                ArgumentGroup(("word",), (S,), max_repetitions=3),
                ArgumentGroup(("count",), (I,)),
            ]
        )
        assert syntax.match([S, S, I]) == ["word", "word", "count"]
        assert syntax.match([S, I]) == ["word", "count"]

    def test_match_is_deterministic(self):
        syntax = Syntax([ArgumentGroup(("a", "b"), (S, I), max_repetitions=3)])
        observed = [S, I, S, I]
        assert syntax.match(observed) == syntax.match(observed)
