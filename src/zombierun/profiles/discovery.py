"""Save-location discovery.

Each supported game keeps one folder per account under
``<base>/<kind.save_dir>/``, named by a lowercase hex id. The live save file
sits directly in that folder::

    %APPDATA%/EldenRing/0110000100000001/ER0000.sl2
    %APPDATA%/DarkSoulsIII/0110000100000001/DS30000.sl2

Discovery walks the kinds in `ProfileKind` order and, inside a kind, keeps the
filesystem enumeration order. No further sorting happens, so the first
location of the first kind is the default active one.
"""

from __future__ import annotations

import os
import re
from pathlib import Path

from zombierun.core.errors import DiscoveryError
from zombierun.core.settings import get_logger, load_settings

from .models import ProfileKind, ProfileLocation

ACCOUNT_DIR_PATTERN = re.compile(r"[a-f0-9]+")

logger = get_logger(__name__)


def resolve_base_dir(base_dir: Path | None = None) -> Path:
    """Return ``base_dir`` or fall back to the configured ``APPDATA`` directory.

    Raises
    ------
    DiscoveryError
        If neither is available.
    """
    if base_dir is not None:
        return base_dir
    configured = load_settings().appdata
    if configured is None:
        raise DiscoveryError("APPDATA is not set; cannot locate save directories")
    return configured


def discover_kind(base_dir: Path, kind: ProfileKind) -> list[ProfileLocation]:
    """List save locations for one game.

    Raises
    ------
    DiscoveryError
        If ``<base_dir>/<kind.save_dir>`` cannot be enumerated.
    """
    root = base_dir / kind.save_dir
    try:
        entries = list(os.scandir(root))
    except OSError as e:
        raise DiscoveryError(f"cannot enumerate {root}: {e}") from e

    found: list[ProfileLocation] = []
    for entry in entries:
        if ACCOUNT_DIR_PATTERN.fullmatch(entry.name) and entry.is_dir():
            found.append(ProfileLocation(kind=kind, path=Path(entry.path) / kind.save_file))
    logger.debug("Discovered %d %s location(s) under %s", len(found), kind.display_name, root)
    return found


def discover_locations(base_dir: Path | None = None) -> list[ProfileLocation]:
    """Concatenate the locations of every kind, in `ProfileKind` order."""
    base = resolve_base_dir(base_dir)
    locations: list[ProfileLocation] = []
    for kind in ProfileKind:
        locations.extend(discover_kind(base, kind))
    logger.info("Discovered %d save location(s) under %s", len(locations), base)
    return locations


__all__ = ["ACCOUNT_DIR_PATTERN", "discover_kind", "discover_locations", "resolve_base_dir"]
