"""Tokenising and fixed-precision formatting of calculator display text."""

from __future__ import annotations

OPERATORS = frozenset("+-X\u00f7")
"""Operator characters as they appear on the display."""

FIXED_PRECISION = 13


def is_operator(char: str) -> bool:
    """Return True if ``char`` is one of the display operators."""
    return char in OPERATORS


def split_expression(text: str) -> list[str]:
    """Split display text into number and operator tokens.

    The first character always starts the first number, so a leading sign
    belongs to it.  The character right after an operator always starts the
    next number, which lets that number carry its own sign.
    """
    chars = iter(text)
    current = next(chars, None)
    if current is None:
        return []

    tokens: list[str] = []
    for char in chars:
        if is_operator(char):
            tokens.append(current)
            tokens.append(char)
            current = next(chars, None)
            if current is None:
                return tokens
        else:
            current += char
    tokens.append(current)
    return tokens


def format_fixed(value: float) -> str:
    """Format ``value`` with 13 decimals, then drop trailing zeros and a bare point."""
    text = f"{value:.{FIXED_PRECISION}f}"
    text = text.rstrip("0")
    if text.endswith("."):
        text = text[:-1]
    return text