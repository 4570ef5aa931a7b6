# scalka

A scientific calculator that you drive as you would a phone keypad. You type
digits with `0`–`9`, and `*` gives the decimal point. `#` opens pages of
operations. Expressions are written in ordinary infix form. A malformed
expression evaluates to `nan` and does not raise an error.

## Installing

```
pip install .
```

The package needs no third-party libraries.

## Running

```
scalka
```

This prints the calculator window as text and then reads commands from
standard input, one line at a time. Each line holds whitespace-separated
commands, and the window is printed again after each line.

Keys:

| key            | effect                                                         |
|----------------|----------------------------------------------------------------|
| `0`–`9`, `*`   | insert a digit or the decimal point at the cursor              |
| `#`            | open the key-pad pages of operations                           |
| `left`, `right`| move the cursor                                                |
| `back`         | delete the token before the cursor, or quit at the start       |
| `=`            | calculate                                                      |

While a page is open, `0`–`9` and `*` insert that page's entry and close the
page. `#` moves to the next page, and after the third page it closes. `back`
closes the page. The pages are laid out three keys per row:

1. `sin * / cos + - tan ( ) ^2 sqrt`
2. `asin ln log acos e^ - atan 10^ pi ^`. Here `-` is the sign of a number.
3. `sh ash ANS ch ach abs th ath ! X Y`

Commands that start with `:` choose an item from the options menu. The
letter case of the item name does not matter:

- `:AC` clears the expression.
- `:ANS->X` and `:ANS->Y` copy the last answer into `X` or `Y`.
- `:Settings` reloads the configuration file.
- `:Exit` quits.

The following command presses the keys in order, prints the window once and
exits:

```
scalka --keys "2 # 5 3 ="
```

`--config PATH` selects the configuration file.

## Evaluation

Operators bind in this order, tightest first:

1. Powers and roots (`^2`, `sqrt`, `e^`, `10^`, `^`)
2. Functions
3. `*` and `/`
4. `+` and `-`

`!` is computed as `gamma(x + 1)`. The trigonometric and hyperbolic functions
and their inverses all work in the configured angle unit. Division by zero,
poles and overflow give infinities. Domain errors give `nan`.

## Configuration

Settings are stored as JSON in `$XDG_CONFIG_HOME/scalka/SCalka.json`. When
that variable is not set, the file is `~/.config/scalka/SCalka.json`. A
missing or unreadable file is replaced with the defaults. The file holds:

- `angle`: the angle unit. `0` is degrees (the default), `1` is radians and
  `2` is grads.
- `fmt`: the printf-style format for the answer, 1 to 15 characters long.
  The default is `%1.15lg`.
- `realtime`: whether the answer is recalculated after every edit. The
  default is `true`.

The program has no settings editor. Edit the file by hand, then use
`:Settings` to load it into a running session.

## Using it from Python

```python
from scalka.engine import Calculator
from scalka.tokens import Token

calc = Calculator()
for token in (Token.DIG_2, Token.OP_PLUS, Token.DIG_3, Token.OP_MULT, Token.DIG_4):
    calc.expression.insert(token)

calc.calculate()
print(calc.format_answer())   # 14
```

The main Python entry points:

- `scalka.engine.evaluate(tokens, settings, answer, variables)` evaluates a
  sequence of tokens on its own. The named variables `Token.VAR_A`–`VAR_Z`
  take their values from `variables`. No key on the pad enters them.
- `scalka.engine.Expression` is the editable token sequence with a cursor.
- `scalka.app.Session` drives the keypad and menu. Its methods are `press`,
  `menu` and `screen`.
- `scalka.settings.load_settings` and `save_settings` read and write the
  configuration.

## Tests

```
pip install .[test]
pytest
```