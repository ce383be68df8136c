# calcpad

A small desktop calculator. It works on one operation at a time, keeps
the last results in a history panel and holds values in a row of memory
slots.

## Installing

```
pip install .
```

The window uses tkinter, which ships with most Python builds.

## Running

```
calcpad
calcpad --slots 5
```

`--slots` sets how many history lines and memory slots there are
(default 8, at least 1).

## What it does

- Digits, a decimal point, and the operators `+`, `-`, `X` and `÷`.
  Pressing an operator while an expression is already pending works it
  out first, so `2+3` followed by `X` shows `5X`.
- `=` works out the expression and adds a line such as `2+3=5` to the
  history. Dividing by zero shows `Infinity` or `NaN`.
- Square root, square, reciprocal (`1/x`), percent and sign change act on
  a single number. The percent key multiplies the number by 0.001.
  Results are shown with up to 13 decimals. A square larger than 1e13
  shows `Number too big!`; a square root, reciprocal or percent result
  too small to show appears as `Number too small!`. Most keys clear such
  a message before they act.
- `C` clears the display. `CE` removes the last number entered.
  Backspace removes the last character.
- Memory: `MS` pushes the display onto the first slot and moves the
  older values down. `M+` and `M-` add the displayed number to the first
  slot or subtract it from it, `MR` recalls the first slot, and `MC`
  empties every slot. Each slot (`M1`, `M2`, …) can be recalled onto the
  display, and each history line (`H1`, `H2`, …) recalls its result.
  `HC` clears the history.

## Using it from Python

The logic does not depend on the window:

```python
from calcpad.calculator import Calculator

calc = Calculator(8)
for key in "12":
    calc.press_digit(key)
calc.press_operator("+")
calc.press_digit("3")
calc.equals()
print(calc.display)      # 15
print(calc.history[0])   # 12+3=15
```

`Calculator.history` and `Calculator.memory` are `SlotList` objects:
fixed-size lists of text entries that can be indexed and iterated.

`calcpad.evaluate.evaluate` works out an arithmetic expression written
with `+`, `-`, `*`, `/`, unary signs and parentheses, returning a float;
it raises `EvaluationError` for input it cannot read.
`calcpad.evaluate.format_number` renders a float as the calculator shows
it. `calcpad.tokens.split_expression` splits display text into its
numbers and operators.

`calcpad.app.CalculatorApp` connects a calculator to a Tk window; given
no window it only tracks what would be shown, and `press(label)` runs a
button by its label.

## Tests

```
pip install .[test]
pytest
```