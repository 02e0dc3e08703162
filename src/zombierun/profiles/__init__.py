"""Games, their save locations and the per-game snapshot histories."""

from __future__ import annotations

from .discovery import discover_locations
from .models import ProfileKind, ProfileLocation
from .registry import ProfileRegistry, SnapshotHistory
from .selector import ActiveProfileSelector

__all__ = [
    "ActiveProfileSelector",
    "ProfileKind",
    "ProfileLocation",
    "ProfileRegistry",
    "SnapshotHistory",
    "discover_locations",
]
