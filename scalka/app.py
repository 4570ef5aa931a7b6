"""Interactive calculator session: key handling, key-pad pages and options menu."""

import argparse
import sys
from collections.abc import Iterable, Sequence
from enum import Enum
from pathlib import Path

from .engine import Calculator
from .settings import Settings, default_config_path, load_settings
from .tokens import key_to_index, token_label

_PAGE_SIZE = 12
_POPUP_PAGES = 3
_SEPARATOR = "----------"
_ENTRY_KEYS = frozenset("0123456789*")


class _Menu(Enum):
    AC = "AC"
    ANS_TO_X = "ANS->X"
    ANS_TO_Y = "ANS->Y"
    SETTINGS = "Settings"
    EXIT = "Exit"


MENU_ITEMS = tuple(item.value for item in _Menu)
KEYS = ("0", "1", "2", "3", "4", "5", "6", "7", "8", "9", "*", "#",
        "left", "right", "back", "=")


class Session:
    """One calculator window: an expression editor with a result line.

    Keys are given by name: the digits, "*", "#" (key-pad pages), "left",
    "right", "back" (delete, or exit when the cursor is at the start) and
    "=" (calculate).
    """

    def __init__(
        self,
        settings: "Settings | None" = None,
        config_path: "str | Path | None" = None,
    ) -> None:
        self.config_path = Path(config_path) if config_path is not None else None
        if settings is None:
            settings = load_settings(self.config_path)
        self.calculator = Calculator(settings=settings)
        self.result = ""
        self.running = True
        self._page: "int | None" = None
        self._recalc_requested = False

    @property
    def settings(self) -> Settings:
        return self.calculator.settings

    @property
    def expression(self):
        return self.calculator.expression

    @property
    def page(self) -> "int | None":
        """Index of the open key-pad page (1 to 3), or None when closed."""
        return None if self._page is None else self._page + 1

    def press(self, key: str) -> None:
        """Handle one key press and refresh the result when requested."""
        if key not in KEYS:
            raise ValueError(f"unknown key {key!r}")
        if not self.running:
            return
        if self._page is not None:
            self._press_in_popup(key)
        else:
            self._press_in_editor(key)
        self._refresh()

    def _press_in_popup(self, key: str) -> None:
        if key in _ENTRY_KEYS:
            self.expression.insert(key_to_index(key) + (self._page + 1) * _PAGE_SIZE)
            self._request_auto_recalc()
            self._page = None
        elif key == "#":
            self._page += 1
            if self._page >= _POPUP_PAGES:
                self._page = None
        elif key == "back":
            self._page = None

    def _press_in_editor(self, key: str) -> None:
        if key == "=":
            self._recalc_requested = True
        elif key == "back":
            if self.expression.position == 0:
                self.running = False
            else:
                self.expression.backspace()
                self._request_auto_recalc()
        elif key in _ENTRY_KEYS:
            self.expression.insert(key_to_index(key))
            self._request_auto_recalc()
        elif key == "#":
            self._page = 0
        elif key == "left":
            self.expression.move_left()
        elif key == "right":
            self.expression.move_right()

    def _request_auto_recalc(self) -> None:
        if self.settings.auto_recalc:
            self._recalc_requested = True

    def _refresh(self) -> None:
        if self._recalc_requested:
            self.calculator.calculate()
            self.result = self.calculator.format_answer()
            self._recalc_requested = False

    def menu(self, item: str) -> None:
        """Run an entry of the options menu, chosen by its label."""
        try:
            choice = next(m for m in _Menu if m.value.lower() == item.lower())
        except StopIteration:
            raise ValueError(f"unknown menu item {item!r}") from None
        if choice is _Menu.AC:
            self.expression.clear()
        elif choice is _Menu.ANS_TO_X:
            self.calculator.ans_to_x()
        elif choice is _Menu.ANS_TO_Y:
            self.calculator.ans_to_y()
        elif choice is _Menu.SETTINGS:
            self._reload_settings()
        else:
            self.running = False
        self._page = None

    def _reload_settings(self) -> None:
        fresh = load_settings(self.config_path)
        fresh.x, fresh.y = self.settings.x, self.settings.y
        self.calculator.settings = fresh

    def _soft_keys(self) -> str:
        right = "Exit" if self.expression.position == 0 else "Del"
        middle = "" if self.settings.auto_recalc else "[=] "
        return f"[Options] {middle}[{right}]"

    def _popup_lines(self) -> Iterable[str]:
        base = (self._page + 1) * _PAGE_SIZE
        labels = [token_label(base + i) for i in range(_PAGE_SIZE)]
        for row in range(0, _PAGE_SIZE, 3):
            yield " ".join(f"[{label:^4}]" for label in labels[row:row + 3])

    def screen(self) -> str:
        """Text of the window, with "|" marking the cursor in the expression."""
        text = self.expression.render()
        column = self.expression.cursor_column()
        lines = [
            "Calculator",
            "Result:",
            self.result,
            _SEPARATOR,
            f"{text[:column]}|{text[column:]}",
        ]
        if self._page is not None:
            lines.extend(self._popup_lines())
        lines.append(self._soft_keys())
        return "\n".join(lines)

    def run(self, commands: Iterable[str]) -> None:
        """Apply commands: key names, or menu labels prefixed with ':'."""
        for command in commands:
            if not self.running:
                break
            if command.startswith(":"):
                self.menu(command[1:])
            else:
                self.press(command)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scalka",
        description="Scientific calculator driven by key-pad presses.",
    )
    parser.add_argument(
        "--config", type=Path, default=None,
        help=f"configuration file (default: {default_config_path()})",
    )
    parser.add_argument(
        "--keys", default=None,
        help="whitespace-separated keys to press, then print the window and quit",
    )
    return parser


def main(argv: "Sequence[str] | None" = None) -> int:
    args = _build_parser().parse_args(argv)
    session = Session(config_path=args.config)
    if args.keys is not None:
        try:
            session.run(args.keys.split())
        except ValueError as exc:
            print(f"scalka: {exc}", file=sys.stderr)
            return 2
        print(session.screen())
        return 0
    print(session.screen())
    for line in sys.stdin:
        try:
            session.run(line.split())
        except ValueError as exc:
            print(f"scalka: {exc}", file=sys.stderr)
            continue
        if not session.running:
            break
        print(session.screen())
    return 0


if __name__ == "__main__":
    sys.exit(main())