"""A windowed keypad for the calculator, with history and memory panels."""

from __future__ import annotations

import argparse
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from calcpad.calculator import DEFAULT_SLOTS, DIVIDE, Calculator

__all__ = ["CalculatorApp", "Screen", "button_actions", "main"]

WINDOW_TITLE = "Calculator"
WINDOW_SIZE = (885, 550)

BACKSPACE = "\u232b"
SQUARE_ROOT = "\u221a"
SQUARED = "x\u00b2"
INVERSE = "1/x"
SIGN = "+/-"
HISTORY_CLEAR = "HC"

KEYPAD: tuple[tuple[str, ...], ...] = (
    ("%", "CE", "C", BACKSPACE),
    (INVERSE, SQUARED, SQUARE_ROOT, DIVIDE),
    ("7", "8", "9", "X"),
    ("4", "5", "6", "-"),
    ("1", "2", "3", "+"),
    (SIGN, "0", ".", "="),
)
MEMORY_KEYS = ("MC", "MR", "M+", "M-", "MS")


def _history_label(index: int) -> str:
    return f"H{index + 1}"


def _memory_label(index: int) -> str:
    return f"M{index + 1}"


@dataclass(frozen=True)
class Screen:
    """What the window shows: the display line, history and memory entries."""

    display: str
    history: tuple[str, ...]
    memory: tuple[str, ...]


def button_actions(calculator: Calculator) -> dict[str, Callable[[], None]]:
    """Map every button label to the calculator action it triggers."""
    actions: dict[str, Callable[[], None]] = {}
    for digit in "0123456789":
        actions[digit] = lambda digit=digit: calculator.press_digit(digit)
    for operator in ("+", "-", "X", DIVIDE):
        actions[operator] = lambda operator=operator: calculator.press_operator(operator)
    actions.update(
        {
            "=": calculator.equals,
            BACKSPACE: calculator.backspace,
            ".": calculator.decimal,
            "C": calculator.clear,
            "CE": calculator.clear_entry,
            SQUARE_ROOT: calculator.square_root,
            SQUARED: calculator.square,
            INVERSE: calculator.inverse,
            "%": calculator.percent,
            SIGN: calculator.toggle_sign,
            "MC": calculator.memory_clear,
            "M+": calculator.memory_add,
            "M-": calculator.memory_subtract,
            "MR": calculator.memory_recall,
            "MS": calculator.memory_store,
            HISTORY_CLEAR: calculator.history_clear,
        }
    )
    for index in range(len(calculator.history)):
        actions[_history_label(index)] = (
            lambda index=index: calculator.recall_history(index)
        )
    for index in range(len(calculator.memory)):
        actions[_memory_label(index)] = (
            lambda index=index: calculator.recall_memory(index)
        )
    return actions


class CalculatorApp:
    """Connects a calculator to its window.

    ``root`` is the Tk container to build the widgets in; with ``None`` the
    app runs without a window and only tracks what would be shown.
    """

    def __init__(self, root: Any = None, calculator: Calculator | None = None) -> None:
        self.calculator = calculator if calculator is not None else Calculator()
        self.actions = button_actions(self.calculator)
        self._display_var: Any = None
        self._history_vars: list[Any] = []
        self._memory_vars: list[Any] = []
        if root is not None:
            self._build(root)
        self.screen = self.refresh()

    def press(self, label: str) -> Screen:
        """Run the action of the button labelled ``label`` and redraw."""
        try:
            action = self.actions[label]
        except KeyError:
            raise ValueError(f"no button labelled {label!r}") from None
        action()
        return self.refresh()

    def refresh(self) -> Screen:
        """Copy the calculator state to the widgets and return it."""
        screen = Screen(
            display=self.calculator.display,
            history=tuple(self.calculator.history),
            memory=tuple(self.calculator.memory),
        )
        if self._display_var is not None:
            self._display_var.set(screen.display)
            for var, entry in zip(self._history_vars, screen.history):
                var.set(entry)
            for var, entry in zip(self._memory_vars, screen.memory):
                var.set(entry)
        self.screen = screen
        return screen

    def _button(self, tk: Any, parent: Any, label: str, **grid: Any) -> None:
        button = tk.Button(
            parent, text=label, width=6, command=lambda: self.press(label)
        )
        button.grid(sticky="nsew", padx=2, pady=2, **grid)

    def _panel(
        self,
        tk: Any,
        parent: Any,
        title: str,
        count: int,
        label_for: Callable[[int], str],
        footer: Sequence[str],
    ) -> list[Any]:
        frame = tk.LabelFrame(parent, text=title, padx=4, pady=4)
        frame.pack(side="left", fill="both", expand=True, padx=4)
        variables = []
        for index in range(count):
            var = tk.StringVar(frame)
            tk.Entry(frame, textvariable=var, state="readonly", width=24).grid(
                row=index, column=0, sticky="ew", padx=2, pady=2
            )
            self._button(tk, frame, label_for(index), row=index, column=1)
            variables.append(var)
        keys = tk.Frame(frame)
        keys.grid(row=count, column=0, columnspan=2, pady=4)
        for column, label in enumerate(footer):
            self._button(tk, keys, label, row=0, column=column)
        return variables

    def _build(self, root: Any) -> None:
        import tkinter as tk

        self._display_var = tk.StringVar(root)
        tk.Entry(
            root,
            textvariable=self._display_var,
            state="readonly",
            justify="right",
            font=("TkDefaultFont", 20),
        ).pack(fill="x", padx=6, pady=6)

        body = tk.Frame(root)
        body.pack(fill="both", expand=True)

        keypad = tk.Frame(body)
        keypad.pack(side="left", fill="both", expand=True, padx=4)
        for row, labels in enumerate(KEYPAD):
            for column, label in enumerate(labels):
                self._button(tk, keypad, label, row=row, column=column)

        self._history_vars = self._panel(
            tk, body, "History", len(self.calculator.history),
            _history_label, (HISTORY_CLEAR,),
        )
        self._memory_vars = self._panel(
            tk, body, "Memory", len(self.calculator.memory),
            _memory_label, MEMORY_KEYS,
        )


def _slot_count(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a whole number: {text!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError("at least one slot is needed")
    return value


def main(argv: Sequence[str] | None = None) -> int:
    """Open the calculator window and run until it is closed."""
    parser = argparse.ArgumentParser(prog="calcpad", description="Desk calculator.")
    parser.add_argument(
        "--slots",
        type=_slot_count,
        default=DEFAULT_SLOTS,
        help="number of history and memory entries (default: %(default)s)",
    )
    args = parser.parse_args(argv)

    import tkinter as tk

    root = tk.Tk()
    root.title(WINDOW_TITLE)
    width, height = WINDOW_SIZE
    root.geometry(f"{width}x{height}")
    root.resizable(False, False)
    CalculatorApp(root, Calculator(args.slots))
    root.mainloop()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())