"""
Positional history: an ordered list with a cursor.

This module implements the container shared by the snapshot history of each
game and by the list of discovered save locations. It stores items in
insertion order (oldest first) and keeps a *current index* that is always
valid after a completed mutation:

- ``0`` when the history is empty (by convention, no element exists there),
- otherwise a position in ``[0, len - 1]``.

Operations
----------
- ``goto(i)``: move the cursor; rejected (``False``) when ``i`` is out of range.
- ``next()`` / ``prev()``: step the cursor, saturating at both ends.
- ``push(item)``: append, then clamp the cursor.
- ``remove(i)``: delete, shift the tail down, then clamp the cursor.

Clamping preserves the index *value*, not the selected element. Removing an
element before the cursor therefore moves the selection onto the element that
followed it::

    h = PositionalHistory(["a", "b", "c"]); h.goto(2)
    h.remove(0)          # items: ["b", "c"], index: 1 -> still "c"
    h.remove(0)          # items: ["c"],      index: 0

Concurrency
-----------
The cursor lives in an :class:`AtomicIndex`; each load and store is atomic so
a renderer reading ``index()``/``current()`` never sees a torn value. The
cursor update and the list update are *not* jointly atomic: during
``remove`` a reader may briefly see an index one past the end before the
clamp lands. That is fine for a single-process tool driven by one UI thread
and is not meant for contended use.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class AtomicIndex:
    """Integer cell with atomic load/store."""

    __slots__ = ("_value", "_lock")

    def __init__(self, value: int = 0) -> None:
        self._value = value
        self._lock = threading.Lock()

    def load(self) -> int:
        with self._lock:
            return self._value

    def store(self, value: int) -> None:
        with self._lock:
            self._value = value


class PositionalHistory(Generic[T]):
    """
    Ordered sequence of ``T`` with an always-valid current index.

    Attributes
    ----------
    _index : AtomicIndex
        The cursor. ``0`` when empty, else a valid position.
    _items : list[T]
        Elements in insertion order.
    """

    __slots__ = ("_index", "_items")

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._index = AtomicIndex(0)
        self._items: list[T] = list(items)

    # ------------------------------- Cursor ---------------------------------

    def index(self) -> int:
        """Return the current cursor position."""
        return self._index.load()

    def goto(self, index: int) -> bool:
        """
        Move the cursor to ``index``.

        Returns
        -------
        bool
            ``False`` (cursor untouched) if ``index`` is negative or not below
            ``len(self)``; an empty history rejects every index.
        """
        if index < 0 or index >= len(self._items):
            return False
        self._index.store(min(index, len(self._items) - 1))
        return True

    def next(self) -> T:
        """Advance by one; a no-op on the last element. Returns ``current()``."""
        self.goto(self._index.load() + 1)
        return self.current()

    def prev(self) -> T:
        """Retreat by one, saturating at 0. Returns ``current()``."""
        self.goto(max(self._index.load() - 1, 0))
        return self.current()

    def current(self) -> T:
        """
        Return the element under the cursor.

        The history must not be empty; check ``is_empty()`` first.

        Raises
        ------
        IndexError
            If the history is empty.
        """
        if not self._items:
            raise IndexError("current() on an empty history")
        return self._items[self._index.load()]

    # ------------------------------- Items ----------------------------------

    def at(self, index: int) -> T | None:
        """Return the element at ``index`` or ``None``; the cursor is not moved."""
        if 0 <= index < len(self._items):
            return self._items[index]
        return None

    def items(self) -> tuple[T, ...]:
        """Return all elements, oldest first (immutable tuple)."""
        return tuple(self._items)

    def push(self, item: T) -> None:
        """Append ``item``; the cursor only moves if it was out of range."""
        self._items.append(item)
        self._constrain()

    def remove(self, index: int) -> bool:
        """
        Delete the element at ``index`` and clamp the cursor.

        Returns
        -------
        bool
            ``False`` (nothing changes) when ``index`` is out of range, which
            includes every index of an empty history.
        """
        if index < 0 or index >= len(self._items):
            return False
        del self._items[index]
        self._constrain()
        return True

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(tuple(self._items))

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"PositionalHistory(index={self.index()}, items={self._items!r})"

    def _constrain(self) -> None:
        self._index.store(min(max(len(self._items) - 1, 0), self._index.load()))


__all__ = ["AtomicIndex", "PositionalHistory"]
