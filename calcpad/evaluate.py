"""Evaluation of arithmetic expressions with script-engine number semantics."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from decimal import Decimal

__all__ = ["EvaluationError", "evaluate", "format_number"]


class EvaluationError(ValueError):
    """Raised when an expression cannot be evaluated."""

    def __init__(self, kind: str, message: str) -> None:
        super().__init__(f"{kind}: {message}")
        self.kind = kind
        self.message = message


def _syntax_error(message: str) -> EvaluationError:
    return EvaluationError("SyntaxError", message)


_TOKEN_RE = re.compile(
    r"""
    (?P<space>\s+)
    |(?P<number>(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)
    |(?P<name>[A-Za-z_$][\w$]*)
    |(?P<op>\+\+|--|[-+*/()])
    """,
    re.VERBOSE,
)

_CONSTANTS = {"Infinity": math.inf, "NaN": math.nan}
_OCTAL_DIGITS = frozenset("01234567")


@dataclass(frozen=True)
class _Token:
    kind: str
    text: str


def _tokenize(expression: str) -> list[_Token]:
    tokens: list[_Token] = []
    pos = 0
    while pos < len(expression):
        match = _TOKEN_RE.match(expression, pos)
        if match is None:
            raise _syntax_error(f"Invalid or unexpected token {expression[pos]!r}")
        kind = match.lastgroup
        pos = match.end()
        if kind == "space":
            continue
        if kind == "number" and pos < len(expression):
            follower = expression[pos]
            if follower.isalnum() or follower in "_$":
                raise _syntax_error("Invalid or unexpected token")
        tokens.append(_Token(kind, match.group()))
    return tokens


def _number_value(text: str) -> float:
    if len(text) > 1 and text[0] == "0" and text[1].isdigit():
        run = re.match(r"\d+", text).group()
        if set(run) <= _OCTAL_DIGITS:
            if len(run) != len(text):
                raise _syntax_error("Unexpected number")
            return float(int(run, 8))
    return float(text)


def _divide(left: float, right: float) -> float:
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    try:
        return left / right
    except OverflowError:
        return math.copysign(math.inf, left) * math.copysign(1.0, right)


def _multiply(left: float, right: float) -> float:
    try:
        return left * right
    except OverflowError:
        return math.copysign(math.inf, left) * math.copysign(1.0, right)


_BINARY = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": _multiply,
    "/": _divide,
}


class _Parser:
    def __init__(self, tokens: list[_Token]) -> None:
        self._tokens = tokens
        self._pos = 0

    def _peek(self) -> _Token | None:
        return self._tokens[self._pos] if self._pos < len(self._tokens) else None

    def _advance(self) -> _Token:
        token = self._peek()
        if token is None:
            raise _syntax_error("Unexpected end of input")
        if token.text in ("++", "--"):
            raise _syntax_error("Invalid left-hand side expression")
        self._pos += 1
        return token

    def parse(self) -> float:
        if not self._tokens:
            raise _syntax_error("Empty expression")
        value = self._additive()
        token = self._peek()
        if token is not None:
            if token.text in ("++", "--"):
                raise _syntax_error("Invalid left-hand side expression")
            raise _syntax_error(f"Unexpected token {token.text!r}")
        return value

    def _binary(self, operators: str, operand) -> float:
        value = operand()
        while (token := self._peek()) is not None and token.kind == "op" and token.text in operators:
            self._advance()
            value = _BINARY[token.text](value, operand())
        return value

    def _additive(self) -> float:
        return self._binary("+-", self._multiplicative)

    def _multiplicative(self) -> float:
        return self._binary("*/", self._unary)

    def _unary(self) -> float:
        token = self._peek()
        if token is not None and token.text in ("+", "-"):
            self._advance()
            operand = self._unary()
            return -operand if token.text == "-" else operand
        return self._primary()

    def _primary(self) -> float:
        token = self._advance()
        if token.kind == "number":
            return _number_value(token.text)
        if token.kind == "name":
            if token.text in _CONSTANTS:
                return _CONSTANTS[token.text]
            raise EvaluationError("ReferenceError", f"{token.text} is not defined")
        if token.text == "(":
            value = self._additive()
            closing = self._advance()
            if closing.text != ")":
                raise _syntax_error(f"Unexpected token {closing.text!r}")
            return value
        raise _syntax_error(f"Unexpected token {token.text!r}")


def evaluate(expression: str) -> float:
    """Evaluate an arithmetic expression using double-precision semantics.

    Supports ``+ - * /``, unary signs, parentheses, decimal and exponent
    literals, legacy octal integer literals and the constants ``Infinity``
    and ``NaN``.  Division by zero yields an infinity or NaN.
    """
    return _Parser(_tokenize(expression)).parse()


def _shortest_digits(value: float) -> tuple[str, int]:
    """Return the shortest round-trip digits of a positive float and the
    position of the decimal point relative to them."""
    parts = Decimal(repr(value)).as_tuple()
    raw = "".join(map(str, parts.digits))
    digits = raw.rstrip("0")
    exponent = parts.exponent + (len(raw) - len(digits))
    return digits, len(digits) + exponent


def format_number(value: float) -> str:
    """Render a number the way script engines convert numbers to strings."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    digits, point = _shortest_digits(abs(value))
    count = len(digits)

    if count <= point <= 21:
        body = digits + "0" * (point - count)
    elif 0 < point <= 21:
        body = f"{digits[:point]}.{digits[point:]}"
    elif -6 < point <= 0:
        body = "0." + "0" * -point + digits
    else:
        exponent = point - 1
        exponent_text = f"e{'+' if exponent >= 0 else '-'}{abs(exponent)}"
        mantissa = digits if count == 1 else f"{digits[0]}.{digits[1:]}"
        body = mantissa + exponent_text
    return sign + body