"""Profile contracts: supported games and their on-disk save locations.

This module defines:

- `ProfileKind`    : the supported games, in the fixed order used for discovery.
- `ProfileLocation`: a (kind, path) pair naming one save file on disk.

Locations are produced once at startup and are read-only afterward, so the
Pydantic model is frozen (hashable, safe to share with the renderer).
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

DISPLAY_PATH_MAX = 32


class ProfileKind(str, Enum):
    """Supported games. Declaration order is the discovery order."""

    DARK_SOULS_III = "DarkSoulsIII"
    ELDEN_RING = "EldenRing"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def save_dir(self) -> str:
        """Folder under the base directory holding one subfolder per account."""
        return self.value

    @property
    def save_file(self) -> str:
        return _SAVE_FILES[self]

    def __str__(self) -> str:
        return self.display_name


_DISPLAY_NAMES: dict[ProfileKind, str] = {
    ProfileKind.DARK_SOULS_III: "Dark Souls III",
    ProfileKind.ELDEN_RING: "Elden Ring",
}

_SAVE_FILES: dict[ProfileKind, str] = {
    ProfileKind.DARK_SOULS_III: "DS30000.sl2",
    ProfileKind.ELDEN_RING: "ER0000.sl2",
}


def shorten_path(path: str, limit: int = DISPLAY_PATH_MAX) -> str:
    """Keep the last ``limit`` characters of ``path``, prefixed with ``...``."""
    if len(path) > limit:
        return f"...{path[-limit:]}"
    return path


class ProfileLocation(BaseModel):
    """One candidate save file for a given game."""

    model_config = ConfigDict(frozen=True)

    kind: ProfileKind = Field(description="Which game this save file belongs to")
    path: Path = Field(description="Absolute path of the live save file")

    def display(self) -> str:
        """Label used in the location picker, e.g. ``Elden Ring: ...0011/ER0000.sl2``."""
        return f"{self.kind.display_name}: {shorten_path(str(self.path))}"

    def __str__(self) -> str:
        return self.display()


__all__ = ["DISPLAY_PATH_MAX", "ProfileKind", "ProfileLocation", "shorten_path"]
