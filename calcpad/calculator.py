"""Calculator state: the display line, the history list and the memory registers."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterator

from calcpad.evaluate import EvaluationError, evaluate, format_number
from calcpad.tokens import OPERATORS, format_fixed, is_operator, split_expression

__all__ = [
    "DEFAULT_SLOTS",
    "DIVIDE",
    "TOO_BIG",
    "TOO_SMALL",
    "Calculator",
    "SlotList",
]

TOO_SMALL = "Number too small!"
TOO_BIG = "Number too big!"
ERROR_MESSAGES = frozenset({TOO_SMALL, TOO_BIG})

DEFAULT_SLOTS = 8
DIVIDE = "\u00f7"
SQUARE_ROOT = "\u221a"
SQUARED = "\u00b2"

SMALL_LIMIT = 1e-13
BIG_LIMIT = 1e13

# A new operator is ignored when the display already ends with this character.
# Division checks for "+", as the keypad always has.
_REPEAT_GUARD = {"+": "+", "-": "-", "X": "X", DIVIDE: "+"}
# Where the search for an operator already on the display begins.
_SCAN_FROM = {"+": 1, "-": 0, "X": 0, DIVIDE: 0}


def _to_double(text: str) -> float | None:
    """Parse display text as a number, or return None if it is not one."""
    stripped = text.strip()
    if not stripped or "_" in stripped:
        return None
    try:
        return float(stripped)
    except ValueError:
        return None


def _as_double(text: str) -> float:
    """Parse display text as a number, falling back to zero."""
    value = _to_double(text)
    return 0.0 if value is None else value


def _short_number(value: float) -> str:
    """Render a number with six significant digits in general format."""
    return f"{value:.6g}"


def _has_operator(text: str, start: int) -> bool:
    return any(is_operator(char) for char in text[start:])


def _square_root(value: float) -> float:
    return math.nan if value < 0 else math.sqrt(value)


def _reciprocal(value: float) -> float:
    if value == 0:
        return math.copysign(math.inf, value)
    return 1 / value


def _too_small(value: float) -> str | None:
    return TOO_SMALL if abs(value) < SMALL_LIMIT else None


def _too_big(value: float) -> str | None:
    return TOO_BIG if abs(value) > BIG_LIMIT else None


def _evaluate_text(expression: str) -> str:
    try:
        return format_number(evaluate(expression))
    except EvaluationError as error:
        return str(error)


class SlotList:
    """A fixed number of text slots where new entries go on top.

    Pushing moves every entry down one slot and drops the bottom one.  When
    the top slot is empty it is simply overwritten, and the slot below it
    keeps its entry while a copy moves further down.  A list of one slot is
    emptied by a push.
    """

    def __init__(self, size: int = DEFAULT_SLOTS) -> None:
        if size < 1:
            raise ValueError(f"a slot list needs at least one slot, not {size}")
        self._slots = [""] * size

    def push(self, entry: str) -> None:
        """Put ``entry`` in the top slot, shifting older entries down."""
        old = self._slots
        if len(old) == 1:
            old[0] = ""
            return
        if old[0]:
            kept = old[0]
        elif len(old) > 2:
            kept = old[1]
        else:
            kept = ""
        self._slots = [entry, kept, *old[1:-1]]

    def clear(self) -> None:
        """Empty every slot."""
        self._slots = [""] * len(self._slots)

    def __getitem__(self, index: int) -> str:
        return self._slots[index]

    def __setitem__(self, index: int, entry: str) -> None:
        self._slots[index] = entry

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._slots))

    def __repr__(self) -> str:
        return f"SlotList({self._slots!r})"


class Calculator:
    """The keypad logic of a desk calculator working on a line of display text."""

    def __init__(self, slots: int = DEFAULT_SLOTS) -> None:
        self.display = ""
        self.history = SlotList(slots)
        self.memory = SlotList(slots)

    def _dismiss_error(self) -> None:
        if self.display in ERROR_MESSAGES:
            self.display = ""

    # Entry keys

    def press_digit(self, digit: str) -> None:
        """Append a digit; a lone leading zero is not doubled."""
        if len(digit) != 1 or digit not in "0123456789":
            raise ValueError(f"not a digit: {digit!r}")
        self._dismiss_error()
        if digit == "0" and self.display == "0":
            return
        self.display += digit

    def press_operator(self, operator: str) -> None:
        """Append an operator, evaluating a pending expression first."""
        if operator not in OPERATORS:
            raise ValueError(f"not an operator: {operator!r}")
        self._dismiss_error()
        text = self.display
        if _has_operator(text, _SCAN_FROM[operator]):
            if text[-1] != _REPEAT_GUARD[operator]:
                self.equals()
                self.display += operator
        else:
            self.display += operator

    def equals(self) -> None:
        """Evaluate the display unless it ends with an operator."""
        self._dismiss_error()
        text = self.display
        if not text or is_operator(text[-1]):
            return
        expression = text.replace("X", "*").replace(DIVIDE, "/")
        result = _evaluate_text(expression)
        self.display = result
        self.history.push(f"{text}={result}")

    def backspace(self) -> None:
        """Remove the last character of the display."""
        self._dismiss_error()
        self.display = self.display[:-1]

    def decimal(self) -> None:
        """Add a decimal point unless the last entry already has one."""
        self._dismiss_error()
        text = self.display
        if text and "." not in split_expression(text)[-1]:
            self.display += "."

    def clear(self) -> None:
        """Empty the display."""
        self.display = ""

    def clear_entry(self) -> None:
        """Remove the last number from the display, keeping any operator."""
        text = self.display
        if not text:
            return
        tokens = split_expression(text)
        if not is_operator(tokens[-1]):
            tokens.pop()
        self.display = "".join(tokens)

    # Functions of a single number

    def _apply(
        self,
        scan_from: int,
        operation: Callable[[float], float],
        reject: Callable[[float], str | None],
        entry: Callable[[str, str], str],
    ) -> None:
        self._dismiss_error()
        text = self.display
        if not text or _has_operator(text, scan_from):
            return
        value = operation(_as_double(text))
        message = reject(value)
        if message is not None:
            self.display = message
            return
        result = format_fixed(value)
        self.display = result
        self.history.push(entry(text, result))

    def square_root(self) -> None:
        """Replace a lone non-negative number with its square root."""
        self._apply(
            0,
            _square_root,
            _too_small,
            lambda text, result: f"{SQUARE_ROOT}({text})={result}",
        )

    def square(self) -> None:
        """Replace a lone number with its square."""
        self._apply(
            1,
            lambda value: value * value,
            _too_big,
            lambda text, result: f"{text}{SQUARED}={result}",
        )

    def inverse(self) -> None:
        """Replace a lone number with its reciprocal."""
        self._apply(
            1,
            _reciprocal,
            _too_small,
            lambda text, result: f"1/{text}={result}",
        )

    def percent(self) -> None:
        """Scale a lone number by one thousandth.

        A result whose thirteen decimals are all zero, integers included,
        is reported as too small.
        """
        self._dismiss_error()
        text = self.display
        if not text or _has_operator(text, 1):
            return
        value = _as_double(text) * 0.001
        _, point, fraction = f"{value:.13f}".partition(".")
        if point and not fraction.strip("0"):
            self.display = TOO_SMALL
            return
        result = format_fixed(value)
        self.display = result
        self.history.push(f"{text}%={result}")

    def toggle_sign(self) -> None:
        """Negate the last number on the display."""
        self._dismiss_error()
        text = self.display
        if not text:
            return
        tokens = split_expression(text)
        if is_operator(tokens[-1]):
            return
        tokens[-1] = _short_number(-_as_double(tokens[-1]))
        self.display = "".join(tokens)

    # Memory

    def memory_clear(self) -> None:
        """Empty every memory register."""
        self.memory.clear()

    def _combine_memory(self, operator: str) -> None:
        value = _to_double(self.display)
        if value is None:
            return
        if not self.memory[0]:
            self.memory[0] = _short_number(value)
        else:
            self.memory[0] = _evaluate_text(f"{self.memory[0]}{operator}{self.display}")

    def memory_add(self) -> None:
        """Add the displayed number to the first memory register."""
        self._combine_memory("+")

    def memory_subtract(self) -> None:
        """Subtract the displayed number from the first memory register."""
        self._combine_memory("-")

    def memory_recall(self) -> None:
        """Show the first memory register."""
        self.display = self.memory[0]

    def memory_store(self) -> None:
        """Push the display onto the memory registers."""
        self.memory.push(self.display)

    def recall_memory(self, index: int) -> None:
        """Show the memory register at ``index``."""
        self.display = self.memory[index]

    # History

    def history_clear(self) -> None:
        """Empty the history list."""
        self.history.clear()

    def recall_history(self, index: int) -> None:
        """Show the result part, after the last '=', of a history entry."""
        entry = self.history[index]
        cut = max(entry.rfind("="), 0)
        self.display = entry[cut + 1:]