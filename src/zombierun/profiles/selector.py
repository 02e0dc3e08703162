"""Active save-location selection.

The set of locations is fixed at startup; only the cursor moves afterward.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from zombierun.history.cursor import PositionalHistory

from .discovery import discover_locations
from .models import ProfileLocation


class ActiveProfileSelector:
    """Wraps the discovered locations and tracks which one is targeted."""

    __slots__ = ("_locations",)

    def __init__(self, locations: Iterable[ProfileLocation]) -> None:
        self._locations: PositionalHistory[ProfileLocation] = PositionalHistory(locations)

    @classmethod
    def from_base_dir(cls, base_dir: Path | None = None) -> ActiveProfileSelector:
        """Run discovery and wrap the result.

        Raises
        ------
        DiscoveryError
            Propagated from discovery; callers treat it as fatal.
        """
        return cls(discover_locations(base_dir))

    def current_location(self) -> ProfileLocation | None:
        """The targeted location, or ``None`` if discovery found nothing."""
        if self._locations.is_empty():
            return None
        return self._locations.current()

    def select(self, index: int) -> bool:
        """Target the location at ``index``; ``False`` if out of range."""
        return self._locations.goto(index)

    def index(self) -> int:
        return self._locations.index()

    def locations(self) -> tuple[ProfileLocation, ...]:
        return self._locations.items()

    def __len__(self) -> int:
        return len(self._locations)


__all__ = ["ActiveProfileSelector"]
