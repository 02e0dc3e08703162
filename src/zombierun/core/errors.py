"""Exception types that cross module boundaries.

Only startup problems are raised; everything that can go wrong while a
session is running is reported through :mod:`zombierun.core.result`.
"""

from __future__ import annotations


class ZombierunError(Exception):
    """Base class for zombierun errors."""


class DiscoveryError(ZombierunError):
    """Save locations could not be resolved or enumerated (fatal at startup)."""
