import math

import pytest

from calcpad.calculator import DIVIDE, TOO_BIG, TOO_SMALL, Calculator, SlotList
from calcpad.evaluate import evaluate, format_number
from calcpad.tokens import format_fixed


def calc_showing(text):
    calc = Calculator()
    calc.display = text
    return calc


# SlotList


def test_slot_list_starts_empty_with_given_size():
    slots = SlotList(5)
    assert len(slots) == 5
    assert list(slots) == [""] * 5


def test_slot_list_push_puts_newest_first():
    slots = SlotList(4)
    slots.push("a")
    slots.push("b")
    assert list(slots) == ["b", "a", "", ""]


def test_slot_list_drops_oldest_entry():
    slots = SlotList(3)
    for entry in ["a", "b", "c", "d"]:
        slots.push(entry)
    assert list(slots) == ["d", "c", "b"]


def test_slot_list_empty_top_slot_is_overwritten():
    slots = SlotList(4)
    slots.push("a")
    slots.push("")
    assert list(slots) == ["", "a", "", ""]
    slots.push("c")
    assert list(slots) == ["c", "a", "a", ""]


def test_slot_list_clear():
    slots = SlotList(3)
    slots.push("a")
    slots.push("b")
    slots.clear()
    assert list(slots) == ["", "", ""]


def test_slot_list_rejects_zero_size():
    with pytest.raises(ValueError):
        SlotList(0)


def test_slot_list_index_out_of_range():
    with pytest.raises(IndexError):
        SlotList(2)[2]


# Digits and operators


def test_digits_append_and_leading_zero_not_doubled():
    calc = Calculator()
    calc.press_digit("0")
    calc.press_digit("0")
    assert calc.display == "0"
    calc.press_digit("5")
    assert calc.display == "05"


def test_press_digit_rejects_non_digit():
    with pytest.raises(ValueError):
        Calculator().press_digit("a")


def test_press_digit_dismisses_error_message():
    calc = calc_showing(TOO_BIG)
    calc.press_digit("7")
    assert calc.display == "7"


def test_press_operator_rejects_unknown():
    with pytest.raises(ValueError):
        Calculator().press_operator("*")


def test_operator_evaluates_pending_expression():
    calc = calc_showing("2+3")
    calc.press_operator("X")
    assert calc.display == format_number(evaluate("2+3")) + "X"
    assert calc.history[0] == "2+3=" + format_number(evaluate("2+3"))


def test_repeated_operator_is_ignored():
    calc = calc_showing("5+")
    calc.press_operator("+")
    assert calc.display == "5+"


def test_divide_is_guarded_by_plus_only():
    calc = calc_showing("5" + DIVIDE)
    calc.press_operator(DIVIDE)
    assert calc.display == "5" + DIVIDE + DIVIDE


def test_leading_minus_is_not_doubled():
    calc = Calculator()
    calc.press_operator("-")
    calc.press_operator("-")
    assert calc.display == "-"


# Equals


def test_equals_records_history():
    calc = calc_showing("12+3")
    calc.equals()
    assert calc.display == format_number(evaluate("12+3"))
    assert calc.history[0] == "12+3=" + calc.display


def test_equals_maps_display_operators():
    calc = calc_showing("6X7")
    calc.equals()
    assert calc.display == format_number(evaluate("6*7"))


def test_equals_division_by_zero():
    calc = calc_showing("5" + DIVIDE + "0")
    calc.equals()
    assert calc.display == format_number(math.inf)


def test_equals_ignores_trailing_operator():
    calc = calc_showing("5+")
    calc.equals()
    assert calc.display == "5+"
    assert list(calc.history) == [""] * 8


def test_equals_reports_syntax_error():
    calc = calc_showing("5--3")
    calc.equals()
    assert calc.display.startswith("SyntaxError")
    assert calc.history[0] == "5--3=" + calc.display


# Editing keys


def test_backspace_removes_last_character():
    calc = calc_showing("123")
    calc.backspace()
    assert calc.display == "12"


def test_backspace_on_error_message_empties_display():
    calc = calc_showing(TOO_SMALL)
    calc.backspace()
    assert calc.display == ""


@pytest.mark.parametrize(
    ("before", "after"),
    [("1.5", "1.5"), ("15", "15."), ("", ""), ("1.5+2", "1.5+2.")],
)
def test_decimal(before, after):
    calc = calc_showing(before)
    calc.decimal()
    assert calc.display == after


@pytest.mark.parametrize(("before", "after"), [("12+34", "12+"), ("12+", "12+"), ("7", "")])
def test_clear_entry(before, after):
    calc = calc_showing(before)
    calc.clear_entry()
    assert calc.display == after


def test_clear_empties_display():
    calc = calc_showing("12+3")
    calc.clear()
    assert calc.display == ""


# Single-number functions


def test_square_root_then_square_round_trip():
    calc = calc_showing("16")
    calc.square_root()
    root = calc.display
    assert calc.history[0] == f"\u221a(16)={root}"
    calc.square()
    assert calc.display == "16"
    assert calc.history[0] == f"{root}\u00b2=16"


def test_square_root_of_zero_is_too_small():
    calc = calc_showing("0")
    calc.square_root()
    assert calc.display == TOO_SMALL
    assert calc.history[0] == ""


def test_square_root_skips_negative_display():
    calc = calc_showing("-4")
    calc.square_root()
    assert calc.display == "-4"


def test_square_too_big():
    calc = calc_showing("10000000")
    calc.square()
    assert calc.display == TOO_BIG


def test_square_of_negative():
    calc = calc_showing("-3")
    calc.square()
    assert calc.display == "9"


def test_inverse_round_trip():
    calc = calc_showing("8")
    calc.inverse()
    middle = calc.display
    calc.inverse()
    assert calc.display == "8"
    assert calc.history[0] == f"1/{middle}=8"
    assert calc.history[1] == f"1/8={middle}"


def test_inverse_of_zero_is_infinite():
    calc = calc_showing("0")
    calc.inverse()
    assert calc.display == format_fixed(math.inf)


def test_percent_scales_by_thousandth():
    calc = calc_showing("5")
    calc.percent()
    assert calc.display == "0.005"
    assert calc.history[0] == "5%=0.005"


def test_percent_with_whole_result_is_too_small():
    calc = calc_showing("5000")
    calc.percent()
    assert calc.display == TOO_SMALL


def test_toggle_sign_of_last_number_round_trip():
    calc = calc_showing("12+5")
    calc.toggle_sign()
    assert calc.display == "12+-5"
    calc.toggle_sign()
    assert calc.display == "12+5"


def test_toggle_sign_uses_six_significant_digits():
    calc = calc_showing("1234567")
    calc.toggle_sign()
    assert calc.display == "-1.23457e+06"


def test_toggle_sign_ignores_trailing_operator():
    calc = calc_showing("5+")
    calc.toggle_sign()
    assert calc.display == "5+"


# Memory


def test_memory_add_and_subtract():
    calc = calc_showing("5")
    calc.memory_add()
    assert calc.memory[0] == "5"
    calc.display = "3"
    calc.memory_add()
    assert calc.memory[0] == format_number(evaluate("5+3"))
    total = calc.memory[0]
    calc.display = "2"
    calc.memory_subtract()
    assert calc.memory[0] == format_number(evaluate(f"{total}-2"))


def test_memory_add_ignores_expression():
    calc = calc_showing("5+3")
    calc.memory_add()
    assert calc.memory[0] == ""


def test_memory_store_and_recall():
    calc = calc_showing("7")
    calc.memory_store()
    calc.display = "8"
    calc.memory_store()
    assert calc.memory[0] == "8"
    assert calc.memory[1] == "7"
    calc.clear()
    calc.memory_recall()
    assert calc.display == "8"
    calc.recall_memory(1)
    assert calc.display == "7"


def test_memory_clear():
    calc = calc_showing("7")
    calc.memory_store()
    calc.memory_clear()
    assert list(calc.memory) == [""] * 8


def test_recall_memory_out_of_range():
    with pytest.raises(IndexError):
        Calculator(slots=3).recall_memory(3)


# History


def test_recall_history_shows_result():
    calc = calc_showing("2+2")
    calc.equals()
    result = calc.display
    calc.clear()
    calc.recall_history(0)
    assert calc.display == result


def test_recall_history_without_equals_drops_first_character():
    calc = Calculator()
    calc.history.push("abc")
    calc.recall_history(0)
    assert calc.display == "bc"


def test_history_clear():
    calc = calc_showing("1+1")
    calc.equals()
    calc.history_clear()
    assert list(calc.history) == [""] * 8


def test_slot_count_is_configurable():
    calc = Calculator(slots=3)
    assert len(calc.history) == 3
    assert len(calc.memory) == 3