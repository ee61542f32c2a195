"""Numeric helpers for argument coercion."""

import math
from decimal import ROUND_HALF_UP, Context, Decimal


def round_sig_figs(number: float, sig_figs: int) -> float:
    """
    Round a number to a count of significant figures.

    Rounding is half-up and operates on the exact binary value of ``number``,
    so ``round_sig_figs(0.125, 2)`` gives ``0.13``.

    Args:
        number: The number to round
        sig_figs: Significant figures to keep (>= 1)

    Returns:
        The rounded number (non-finite input is returned unchanged)
    """
    if number == 0 or not math.isfinite(number):
        return number
    context = Context(prec=sig_figs, rounding=ROUND_HALF_UP)
    return float(context.plus(Decimal(number)))


def round_sig_figs_int(number: int, sig_figs: int) -> int:
    """Integer version of round_sig_figs; never goes through a float."""
    if number == 0:
        return number
    context = Context(prec=sig_figs, rounding=ROUND_HALF_UP)
    return int(context.plus(Decimal(number)))


def format_number(number: float) -> str:
    """Plain decimal text without exponent notation or a trailing ".0"."""
    if number == 0:
        return "0"
    if not math.isfinite(number):
        return str(number)
    text = format(Decimal(repr(float(number))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
