"""A stack of floating-point operands."""

from collections.abc import Iterable


class StackUnderflow(Exception):
    """Raised when a value is popped from an empty stack."""


class ValueStack:
    """Last-in, first-out store of operands."""

    def __init__(self, values: Iterable[float] = ()) -> None:
        self._items = [float(value) for value in values]

    def push(self, value: float) -> None:
        self._items.append(float(value))

    def pop(self) -> float:
        if not self._items:
            raise StackUnderflow("pop from an empty value stack")
        return self._items.pop()

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"ValueStack({self._items!r})"