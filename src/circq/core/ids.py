# src/circq/core/ids.py
from __future__ import annotations

from circq.core.contracts import Item, ItemId


class IdGenerator:
    """Monotonic id source. Every call to generate_item() consumes one id."""

    def __init__(self, start: ItemId = 1):
        if not isinstance(start, int) or isinstance(start, bool) or start < 1:
            raise ValueError("start must be an int >= 1")
        self._next: ItemId = start

    def generate_item(self) -> Item:
        item = Item(self._next)
        self._next += 1
        return item

    def peek(self) -> ItemId:
        return self._next

    def __repr__(self) -> str:
        return f"IdGenerator(next={self._next})"


_DEFAULT = IdGenerator()


def default_generator() -> IdGenerator:
    """Process-wide generator used when a queue is built without one."""
    return _DEFAULT


def generate_item() -> Item:
    return _DEFAULT.generate_item()
