"""Tests for numeric helpers."""

import math

import pytest

from syntaxbot.utils.num import format_number, round_sig_figs, round_sig_figs_int


class TestRoundSigFigs:
    @pytest.mark.parametrize(
        "number,sig_figs,expected",
        [
            (3.14159, 3, 3.14),
            (0.125, 2, 0.13),
            (123456.0, 2, 120000.0),
            (-2.55, 2, -2.5),
            (0.000123456, 2, 0.00012),
        ],
    )
    def test_rounds(self, number, sig_figs, expected):
        assert round_sig_figs(number, sig_figs) == pytest.approx(expected)

    def test_zero_is_unchanged(self):
        assert round_sig_figs(0.0, 1) == 0.0

    def test_non_finite_is_unchanged(self):
        assert math.isinf(round_sig_figs(math.inf, 2))
        assert math.isnan(round_sig_figs(math.nan, 2))

    def test_large_precision_keeps_value(self):
        assert round_sig_figs(1.1, 99) == 1.1


class TestRoundSigFigsInt:
    def test_rounds_half_up(self):
        assert round_sig_figs_int(12345, 2) == 12000
        assert round_sig_figs_int(12500, 2) == 13000

    def test_exact_for_large_values(self):
        assert round_sig_figs_int(2**60 + 1, 99) == 2**60 + 1


class TestFormatNumber:
    @pytest.mark.parametrize(
        "number,expected",
        [
            (1000000, "1000000"),
            (1000000.0, "1000000"),
            (1e16, "10000000000000000"),
            (2.5, "2.5"),
            (-1.5, "-1.5"),
            (0.0000001, "0.0000001"),
            (-0.0, "0"),
        ],
    )
    def test_plain_decimal(self, number, expected):
        assert format_number(number) == expected
