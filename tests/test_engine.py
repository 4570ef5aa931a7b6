import math

import pytest

from scalka.engine import (
    Calculator,
    Expression,
    apply_operation,
    evaluate,
    from_radians,
    priority,
    to_radians,
)
from scalka.settings import AngleUnit, Settings
from scalka.stack import StackUnderflow, ValueStack
from scalka.tokens import Token as T

_CHARS = {
    **{str(d): T(d - 1) for d in range(1, 10)},
    "0": T.DIG_0,
    ".": T.DIG_POINT,
    "~": T.OP_NEG,
    "+": T.OP_PLUS,
    "-": T.OP_MINUS,
    "*": T.OP_MULT,
    "/": T.OP_DIV,
    "(": T.LEFTBRACKET,
    ")": T.RIGHTBRACKET,
    "^": T.OP_POW,
}


def _expr(text):
    return [_CHARS[c] for c in text]


def _eval(tokens, **kwargs):
    return evaluate(tokens, kwargs.pop("settings", Settings()), **kwargs)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("12+3", 12 + 3),
        ("2+3*4", 2 + 3 * 4),
        ("(2+3)*4", (2 + 3) * 4),
        ("8-3-2", 8 - 3 - 2),
        ("7/2", 7 / 2),
        ("2^3^2", (2 ** 3) ** 2),  # equal priorities bind to the left
        ("1.5*4", 1.5 * 4),
        ("((1+2)*(3+4))", (1 + 2) * (3 + 4)),
    ],
)
def test_arithmetic(text, expected):
    assert _eval(_expr(text)) == expected


def test_number_parsing_takes_longest_prefix():
    assert _eval(_expr("1.2.3")) == 1.2
    assert _eval(_expr("~5")) == -5.0
    assert _eval(_expr("5~3")) == 5.0
    assert _eval(_expr("~")) == 0.0


def test_division_by_zero():
    assert _eval(_expr("1/0")) == math.inf
    assert math.isnan(_eval(_expr("0/0")))


@pytest.mark.parametrize(
    "tokens",
    [[], [T.OP_PLUS], [T.DIG_1, T.OP_PLUS], [T.OP_SIN]],
)
def test_malformed_expression_is_nan(tokens):
    result = evaluate(tokens, Settings(), answer=3.0)
    assert repr(result) == "nan"


def test_trigonometry_in_each_unit():
    assert math.isclose(_eval([T.OP_SIN, *_expr("30")]), 0.5)
    radians = Settings(angle_unit=AngleUnit.RADIANS)
    assert _eval([T.OP_SIN, *_expr("1")], settings=radians) == math.sin(1)
    grads = Settings(angle_unit=AngleUnit.GRADS)
    assert abs(_eval([T.OP_COS, *_expr("100")], settings=grads)) < 1e-12


def test_inverse_trigonometry_returns_unit():
    assert math.isclose(_eval([T.OP_ASIN, *_expr("1")]), from_radians(math.pi / 2, AngleUnit.DEGREES))
    radians = Settings(angle_unit=AngleUnit.RADIANS)
    assert _eval([T.OP_ATAN, *_expr("1")], settings=radians) == math.atan(1)


def test_special_results():
    assert math.isnan(_eval([T.OP_SQRT, *_expr("~1")]))
    assert _eval([T.OP_LN, *_expr("0")]) == -math.inf
    assert math.isnan(_eval([T.OP_LOG, *_expr("~1")]))
    assert _eval([T.OP_ATH, *_expr("1")]) == math.inf
    assert _eval([*_expr("10^999")]) == math.inf
    assert _eval([T.OP_EPOW, *_expr("1000")]) == math.inf


def test_functions():
    assert _eval([T.OP_FAC, *_expr("5")]) == math.factorial(5)
    assert _eval([*_expr("3"), T.OP_SQUARE]) == 3 ** 2
    assert _eval([T.OP_ABS, *_expr("~4")]) == 4.0
    assert _eval([T.OP_TENPOW, *_expr("2")]) == 100.0
    assert _eval([T.OP_SQRT, *_expr("16")]) == math.sqrt(16)


def test_constants_and_registers():
    settings = Settings(x=2.5, y=-4.0)
    assert _eval([T.NUM_PI]) == math.pi
    assert _eval([T.NUM_ANS], answer=7.5) == 7.5
    assert _eval([T.NUM_A, T.OP_PLUS, T.NUM_B], settings=settings) == 2.5 + -4.0
    assert _eval([T.VAR_C]) == 0.0
    assert _eval([T.VAR_C], variables={T.VAR_C: 6.0}) == 6.0


def test_angle_conversions_round_trip():
    assert to_radians(180, AngleUnit.DEGREES) == math.pi
    assert math.isclose(to_radians(200, AngleUnit.GRADS), math.pi)
    for unit in AngleUnit:
        assert math.isclose(to_radians(from_radians(1.25, unit), unit), 1.25)


def test_priorities_are_ordered():
    assert priority(T.OP_POW) > priority(T.OP_SIN) > priority(T.OP_MULT)
    assert priority(T.OP_MULT) == priority(T.OP_DIV) > priority(T.OP_PLUS)
    assert priority(T.OP_PLUS) > priority(T.LEFTBRACKET) > priority(T.DIEZ_1)
    assert priority(T.DIG_5) == 0


def test_apply_operation_operand_order():
    stack = ValueStack([7.0, 2.0])
    apply_operation(stack, T.OP_MINUS, AngleUnit.DEGREES)
    assert stack.pop() == 7.0 - 2.0
    assert len(stack) == 0


def test_apply_operation_ignores_non_operators():
    stack = ValueStack([3.0])
    apply_operation(stack, T.LEFTBRACKET, AngleUnit.DEGREES)
    assert stack.pop() == 3.0


def test_apply_operation_underflow():
    with pytest.raises(StackUnderflow):
        apply_operation(ValueStack([1.0]), T.OP_PLUS, AngleUnit.DEGREES)


def test_expression_editing():
    expr = Expression()
    for token in (T.OP_SIN, T.DIG_3, T.DIG_0):
        expr.insert(token)
    assert expr.render() == "sin30"
    assert expr.cursor_column() == len(expr.render())
    expr.move_left()
    assert expr.cursor_column() == len("sin3")
    expr.backspace()
    assert expr.tokens == (T.OP_SIN, T.DIG_0)
    expr.move_left()
    expr.move_left()
    assert expr.position == 0
    expr.backspace()
    assert len(expr) == 2
    expr.insert(T.DIG_1)
    assert expr.tokens == (T.DIG_1, T.OP_SIN, T.DIG_0)
    expr.move_right()
    expr.move_right()
    expr.move_right()
    assert expr.position == 3
    expr.clear()
    assert (expr.tokens, expr.position) == ((), 0)


def test_expression_is_bounded():
    expr = Expression()
    for _ in range(300):
        expr.insert(T.DIG_1)
    assert len(expr) == 256


def test_expression_rejects_unknown_tokens():
    with pytest.raises(ValueError):
        Expression().insert(999)


def test_calculator_answer_and_registers():
    calc = Calculator(expression=Expression(_expr("0.5")))
    assert calc.calculate() == 0.5
    assert calc.format_answer() == "0.5"
    calc.ans_to_x()
    calc.ans_to_y()
    assert (calc.settings.x, calc.settings.y) == (0.5, 0.5)
    calc.expression = Expression([T.NUM_ANS, T.OP_PLUS, T.NUM_A])
    assert calc.calculate() == 0.5 + 0.5


def test_calculator_failure_sets_nan():
    calc = Calculator(answer=3.0)
    assert math.isnan(calc.calculate())
    assert calc.format_answer() == "nan"


def test_bad_format_raises():
    calc = Calculator(settings=Settings(fmt="%d %d"))
    with pytest.raises(ValueError):
        calc.format_answer()