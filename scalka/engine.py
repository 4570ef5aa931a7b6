"""Expression editing and evaluation with operator precedence."""

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from itertools import groupby
import re

from .settings import AngleUnit, Settings
from .stack import StackUnderflow, ValueStack
from .tokens import Token, token_label

_MAX_LENGTH = 256
_NUMBER_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)")

_NUMBER_CHARS = {
    **{Token(digit): str(digit + 1) for digit in range(9)},
    Token.DIG_POINT: ".",
    Token.DIG_0: "0",
    Token.OP_NEG: "-",
}

_MATH_FUNCS = frozenset({
    Token.OP_SIN, Token.OP_COS, Token.OP_TAN, Token.OP_ASIN, Token.OP_LN,
    Token.OP_LOG, Token.OP_ACOS, Token.OP_ATAN, Token.OP_SH, Token.OP_ASH,
    Token.OP_CH, Token.OP_ACH, Token.OP_ABS, Token.OP_TH, Token.OP_ATH,
    Token.OP_FAC,
})

_POW_FUNCS = frozenset({
    Token.OP_SQUARE, Token.OP_SQRT, Token.OP_EPOW, Token.OP_TENPOW, Token.OP_POW,
})

_ARITHMETIC = frozenset({Token.OP_MULT, Token.OP_DIV, Token.OP_PLUS, Token.OP_MINUS})


def to_radians(angle: float, unit: AngleUnit) -> float:
    """Convert an angle in the given unit to radians."""
    if unit == AngleUnit.RADIANS:
        return angle
    if unit == AngleUnit.GRADS:
        return angle * math.pi / 200
    return angle * math.pi / 180


def from_radians(radian: float, unit: AngleUnit) -> float:
    """Convert radians to an angle in the given unit."""
    if unit == AngleUnit.RADIANS:
        return radian
    if unit == AngleUnit.GRADS:
        return radian * 200 / math.pi
    return radian * 180 / math.pi


def priority(op: int) -> int:
    """Binding strength of an operator; 0 for anything that is not one."""
    if op in _POW_FUNCS:
        return 5
    if op in _MATH_FUNCS:
        return 4
    if op in (Token.OP_MULT, Token.OP_DIV):
        return 3
    if op in (Token.OP_PLUS, Token.OP_MINUS):
        return 2
    if op == Token.LEFTBRACKET:
        return 1
    return 0


# IEEE-style wrappers: domain errors give NaN, poles and overflow give infinities.

def _is_odd_integer(value: float) -> bool:
    return math.isfinite(value) and abs(math.fmod(value, 2.0)) == 1.0


def _domain(func):
    def wrapped(x: float) -> float:
        try:
            return func(x)
        except ValueError:
            return math.nan
    return wrapped


def _div(b: float, a: float) -> float:
    try:
        return b / a
    except ZeroDivisionError:
        if b == 0 or math.isnan(b):
            return math.nan
        return math.copysign(math.inf, b) * math.copysign(1.0, a)


def _logarithm(func):
    def wrapped(x: float) -> float:
        if x == 0:
            return -math.inf
        try:
            return func(x)
        except ValueError:
            return math.nan
    return wrapped


_log = _logarithm(math.log)
_log10 = _logarithm(math.log10)


def _exp(x: float) -> float:
    try:
        return math.exp(x)
    except OverflowError:
        return math.inf


def _sinh(x: float) -> float:
    try:
        return math.sinh(x)
    except OverflowError:
        return math.copysign(math.inf, x)


def _cosh(x: float) -> float:
    try:
        return math.cosh(x)
    except OverflowError:
        return math.inf


def _pow(base: float, exponent: float) -> float:
    try:
        return math.pow(base, exponent)
    except OverflowError:
        return -math.inf if base < 0 and _is_odd_integer(exponent) else math.inf
    except ValueError:
        if base == 0:
            return math.copysign(math.inf, base) if _is_odd_integer(exponent) else math.inf
        return math.nan


def _gamma(x: float) -> float:
    try:
        return math.gamma(x)
    except ValueError:
        return math.copysign(math.inf, x) if x == 0 else math.nan
    except OverflowError:
        return math.inf


def _atanh(a: float) -> float:
    return _log(_div(1 + a, 1 - a)) / 2


_sin, _cos, _tan = _domain(math.sin), _domain(math.cos), _domain(math.tan)
_sqrt, _asin, _acos = _domain(math.sqrt), _domain(math.asin), _domain(math.acos)
_acosh = _domain(math.acosh)

_UNARY = {
    Token.OP_SIN: lambda a, u: _sin(to_radians(a, u)),
    Token.OP_COS: lambda a, u: _cos(to_radians(a, u)),
    Token.OP_TAN: lambda a, u: _tan(to_radians(a, u)),
    Token.OP_SQUARE: lambda a, u: _pow(a, 2.0),
    Token.OP_SQRT: lambda a, u: _sqrt(a),
    Token.OP_ASIN: lambda a, u: from_radians(_asin(a), u),
    Token.OP_LN: lambda a, u: _log(a),
    Token.OP_LOG: lambda a, u: _log10(a),
    Token.OP_ACOS: lambda a, u: from_radians(_acos(a), u),
    Token.OP_EPOW: lambda a, u: _exp(a),
    Token.OP_ATAN: lambda a, u: from_radians(math.atan(a), u),
    Token.OP_TENPOW: lambda a, u: _pow(10.0, a),
    Token.OP_SH: lambda a, u: _sinh(to_radians(a, u)),
    Token.OP_ASH: lambda a, u: from_radians(math.asinh(a), u),
    Token.OP_CH: lambda a, u: _cosh(to_radians(a, u)),
    Token.OP_ACH: lambda a, u: from_radians(_acosh(a), u),
    Token.OP_TH: lambda a, u: math.tanh(to_radians(a, u)),
    Token.OP_ATH: lambda a, u: from_radians(_atanh(a), u),
    Token.OP_ABS: lambda a, u: math.fabs(a),
    Token.OP_FAC: lambda a, u: _gamma(a + 1),
}

_BINARY = {
    Token.OP_MULT: lambda b, a: b * a,
    Token.OP_DIV: _div,
    Token.OP_PLUS: lambda b, a: b + a,
    Token.OP_MINUS: lambda b, a: b - a,
    Token.OP_POW: _pow,
}


def apply_operation(stack: ValueStack, op: int, unit: AngleUnit) -> None:
    """Apply an operator to the operands on top of the stack.

    Anything that is not an operator leaves the stack untouched.
    Raises StackUnderflow when operands are missing.
    """
    if op in _UNARY:
        stack.push(_UNARY[op](stack.pop(), unit))
    elif op in _BINARY:
        a = stack.pop()
        b = stack.pop()
        stack.push(_BINARY[op](b, a))


def _parse_number(text: str) -> float:
    """Read the longest numeric prefix of text; 0 if there is none."""
    match = _NUMBER_PREFIX.match(text)
    return float(match.group()) if match else 0.0


def evaluate(
    tokens: Iterable[int],
    settings: Settings,
    answer: float = 0.0,
    variables: "Mapping[Token, float] | None" = None,
) -> float:
    """Evaluate an expression; a malformed one yields NaN."""
    variables = variables or {}
    values = ValueStack()
    operators: list[int] = []
    unit = settings.angle_unit

    def apply(op: int) -> None:
        apply_operation(values, op, unit)

    try:
        for is_number, group in groupby(tokens, key=lambda t: t in _NUMBER_CHARS):
            if is_number:
                values.push(_parse_number("".join(_NUMBER_CHARS[t] for t in group)))
                continue
            for token in group:
                if token == Token.NUM_PI:
                    values.push(math.pi)
                elif token == Token.NUM_ANS:
                    values.push(answer)
                elif token == Token.NUM_A:
                    values.push(settings.x)
                elif token == Token.NUM_B:
                    values.push(settings.y)
                elif Token.VAR_A <= token <= Token.VAR_Z:
                    values.push(variables.get(Token(token), 0.0))
                elif token == Token.RIGHTBRACKET:
                    while operators:
                        top = operators.pop()
                        if top == Token.LEFTBRACKET:
                            break
                        apply(top)
                elif token == Token.LEFTBRACKET:
                    operators.append(token)
                elif token in _ARITHMETIC or token in _MATH_FUNCS or token in _POW_FUNCS:
                    if operators and priority(token) <= priority(operators[-1]):
                        while operators and priority(operators[-1]) >= priority(token):
                            apply(operators.pop())
                    operators.append(token)
        while operators:
            apply(operators.pop())
        return values.pop()
    except StackUnderflow:
        return math.nan


class Expression:
    """An editable sequence of tokens with a cursor."""

    def __init__(self, tokens: Iterable[int] = ()) -> None:
        self._tokens = [Token(t) for t in tokens][:_MAX_LENGTH]
        self._position = len(self._tokens)

    @property
    def tokens(self) -> tuple[Token, ...]:
        return tuple(self._tokens)

    @property
    def position(self) -> int:
        return self._position

    def __len__(self) -> int:
        return len(self._tokens)

    def insert(self, token: int) -> None:
        """Insert a token at the cursor; ignored once the expression is full."""
        token = Token(token)
        if len(self._tokens) < _MAX_LENGTH:
            self._tokens.insert(self._position, token)
            self._position += 1

    def backspace(self) -> None:
        """Delete the token before the cursor."""
        if self._tokens and self._position:
            del self._tokens[self._position - 1]
            self._position -= 1

    def clear(self) -> None:
        self._tokens.clear()
        self._position = 0

    def move_left(self) -> None:
        if self._position:
            self._position -= 1

    def move_right(self) -> None:
        if self._position < len(self._tokens):
            self._position += 1

    def render(self) -> str:
        """The expression as shown in the editor."""
        return "".join(token_label(t) for t in self._tokens)

    def cursor_column(self) -> int:
        """Number of characters in the rendering before the cursor."""
        return sum(len(token_label(t)) for t in self._tokens[: self._position])


@dataclass
class Calculator:
    """An expression together with the answer and registers it works with."""

    settings: Settings = field(default_factory=Settings)
    expression: Expression = field(default_factory=Expression)
    answer: float = 0.0
    variables: dict = field(default_factory=dict)

    def calculate(self) -> float:
        """Evaluate the expression and store the result as the new answer."""
        self.answer = evaluate(
            self.expression.tokens, self.settings, self.answer, self.variables
        )
        return self.answer

    def format_answer(self) -> str:
        try:
            return self.settings.fmt % self.answer
        except (TypeError, ValueError) as exc:
            raise ValueError(f"unusable result format {self.settings.fmt!r}") from exc

    def ans_to_x(self) -> None:
        self.settings.x = self.answer

    def ans_to_y(self) -> None:
        self.settings.y = self.answer