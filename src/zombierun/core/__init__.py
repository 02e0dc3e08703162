"""Core package initializer for zombierun.

Holds the cross-cutting pieces shared by every layer:
    from zombierun.core.settings import settings, load_settings, Settings, get_logger
    from zombierun.core.result import Result, ok, err
    from zombierun.core.errors import DiscoveryError
"""

from __future__ import annotations

__all__ = ["__doc__"]
