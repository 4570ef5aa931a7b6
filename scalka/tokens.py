"""Expression tokens and the key-pad labels shown for them."""

from enum import IntEnum
from string import ascii_uppercase

# Each key page holds twelve entries laid out 3 x 4, the last one being the
# page switch key.  Token names and labels are listed page by page.
_PAGE_NAMES = (
    [f"DIG_{digit}" for digit in range(1, 10)] + ["DIG_POINT", "DIG_0", "DIEZ_1"],
    "OP_SIN OP_MULT OP_DIV OP_COS OP_PLUS OP_MINUS OP_TAN "
    "LEFTBRACKET RIGHTBRACKET OP_SQUARE OP_SQRT DIEZ_2".split(),
    "OP_ASIN OP_LN OP_LOG OP_ACOS OP_EPOW OP_NEG OP_ATAN "
    "OP_TENPOW NUM_PI OP_POW SPACE DIEZ_3".split(),
    "OP_SH OP_ASH NUM_ANS OP_CH OP_ACH OP_ABS OP_TH "
    "OP_ATH OP_FAC NUM_A NUM_B DIEZ_4".split(),
)

_PAGE_LABELS = (
    "1|2|3|4|5|6|7|8|9|.|0|#",
    "sin|*|/|cos|+|-|tan|(|)|^2|sqrt|#",
    "asin|ln|log|acos|e^|-|atan|10^|pi|^||#",
    "sh|ash|ANS|ch|ach|abs|th|ath|!|X|Y|#",
)

_TOKEN_NAMES = (
    [name for page in _PAGE_NAMES for name in page]
    + [f"VAR_{letter}" for letter in ascii_uppercase]
    + ["TOTAL_OPS"]
)

Token = IntEnum("Token", _TOKEN_NAMES, module=__name__, start=0)
Token.__doc__ = """One element of a calculator expression.

The values follow the key-pad layout: four pages of twelve keys,
followed by the named variables.
"""

_LABELS = tuple(label for page in _PAGE_LABELS for label in page.split("|"))


def key_to_index(key: str) -> Token:
    """Map a key-pad character to its position on a twelve-key page."""
    if len(key) == 1 and "1" <= key <= "9":
        return Token(ord(key) - ord("1"))
    if key == "0":
        return Token.DIG_0
    if key == "*":
        return Token.DIG_POINT
    return Token.DIEZ_1


def token_label(token: int) -> str:
    """Return the text shown for a token on the key pad and in the editor."""
    index = int(token)
    if not 0 <= index < len(_LABELS):
        raise ValueError(f"token {token!r} has no key-pad label")
    return _LABELS[index]