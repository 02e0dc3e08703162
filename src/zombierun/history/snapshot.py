"""
Snapshot records: captured copies of a save file.

Design Notes
------------
- **Immutability**: a record never changes after capture (``frozen=True``).
- **Ids**: every record gets an ordinal from an :class:`IdSequence`. Ids are
  for display and correlation only; history order is positional.
- **Time**: ``captured_at`` is a reading of the injected clock (monotonic
  seconds by default), so elapsed time is ``clock() - captured_at``.
"""

from __future__ import annotations

import itertools
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

Clock = Callable[[], float]


class IdSequence:
    """Thread-safe, monotonically increasing id source starting at ``start``."""

    __slots__ = ("_counter", "_lock")

    def __init__(self, start: int = 0) -> None:
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            return next(self._counter)


@dataclass(frozen=True, slots=True)
class SnapshotRecord:
    """
    Immutable copy of a save file's bytes.

    Attributes
    ----------
    payload : bytes
        The save file contents at capture time.
    captured_at : float
        Clock reading (seconds) when the file was read.
    id : int
        Unique ordinal drawn from the session's :class:`IdSequence`.
    """

    payload: bytes
    captured_at: float
    id: int

    @classmethod
    def capture(cls, path: Path, ids: IdSequence, clock: Clock = time.monotonic) -> SnapshotRecord:
        """
        Read ``path`` into a new record.

        The file is read before an id is drawn, so a failed read leaves the
        sequence untouched.

        Raises
        ------
        OSError
            If the file is missing, locked or unreadable.
        """
        captured_at = clock()
        payload = path.read_bytes()
        return cls(payload=payload, captured_at=captured_at, id=ids.next_id())

    def write_to(self, path: Path) -> None:
        """Overwrite ``path`` with the payload. Raises ``OSError`` on failure."""
        path.write_bytes(self.payload)

    def elapsed(self, now: float) -> float:
        """Seconds since capture, never negative."""
        return max(now - self.captured_at, 0.0)


def format_elapsed(seconds: float) -> str:
    """Render a duration as ``HH:MM:SS`` (hours grow past two digits)."""
    total = int(seconds)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


__all__ = ["Clock", "IdSequence", "SnapshotRecord", "format_elapsed"]
