"""zombierun: snapshot and restore game save files from a per-game history."""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.1.0"
