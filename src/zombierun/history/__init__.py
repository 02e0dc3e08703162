"""Snapshot history primitives: the cursor container and snapshot records."""

from __future__ import annotations

from .cursor import AtomicIndex, PositionalHistory
from .snapshot import Clock, IdSequence, SnapshotRecord, format_elapsed

__all__ = [
    "AtomicIndex",
    "Clock",
    "IdSequence",
    "PositionalHistory",
    "SnapshotRecord",
    "format_elapsed",
]
