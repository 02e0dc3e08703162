"""Per-game snapshot histories.

Each `ProfileKind` owns exactly one `PositionalHistory[SnapshotRecord]`. The
history is created empty the first time it is asked for and lives for the
rest of the session; nothing is ever removed from the registry.
"""

from __future__ import annotations

from zombierun.history.cursor import PositionalHistory
from zombierun.history.snapshot import SnapshotRecord

from .models import ProfileKind

SnapshotHistory = PositionalHistory[SnapshotRecord]


class ProfileRegistry:
    """Mapping from game to its own snapshot history."""

    __slots__ = ("_histories",)

    def __init__(self) -> None:
        self._histories: dict[ProfileKind, SnapshotHistory] = {}

    def history_for(self, kind: ProfileKind) -> SnapshotHistory:
        """Return the history for ``kind``, creating an empty one on first access."""
        history = self._histories.get(kind)
        if history is None:
            history = PositionalHistory()
            self._histories[kind] = history
        return history

    def snapshots_for(self, kind: ProfileKind) -> SnapshotHistory | None:
        """Return the history for ``kind`` without creating it."""
        return self._histories.get(kind)

    def kinds(self) -> tuple[ProfileKind, ...]:
        """Kinds that have a history, in first-access order."""
        return tuple(self._histories)

    def __contains__(self, kind: object) -> bool:
        return kind in self._histories


__all__ = ["ProfileRegistry", "SnapshotHistory"]
