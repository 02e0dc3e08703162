"""
Input sources for the driver loop.

The session asks four yes/no questions per tick (see :class:`InputSource`).
Sources that also implement :class:`SessionCommands` can request the
remaining driver actions: remove the selected snapshot, restore the newest
one, jump to either end of the history, and switch save location. How the
answers are produced is up to the source.

Hotkeys
-------
:class:`HotkeyState` answers them from key events, like polling an
asynchronous key-state table:

- a *toggle* is recorded when a key goes down and cleared when it is queried,
- a *held* flag tracks whether the modifier is currently down.

A request is ``toggled(key) and held(modifier)``. The toggle is consumed even
when the modifier is up, so a bare ``N`` press never fires later.

Default bindings (modifier: Shift): Down advances, Up retreats, N captures,
L restores, R restores the newest snapshot, Delete removes the selected one,
Home / End select the oldest / newest, Left / Right switch save location.

:class:`KeyboardInput` feeds a :class:`HotkeyState` from a global ``pynput``
listener so the hotkeys work while the game has focus.
"""

from __future__ import annotations

import threading
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from zombierun.core.settings import get_logger

MODIFIER = "shift"
DEFAULT_BINDINGS: Mapping[str, str] = {
    "advance": "down",
    "retreat": "up",
    "capture": "n",
    "restore": "l",
    "restore_latest": "r",
    "remove": "delete",
    "select_first": "home",
    "select_last": "end",
    "prev_profile": "left",
    "next_profile": "right",
}

logger = get_logger(__name__)


class InputSource(Protocol):
    """Four independent boolean queries, asked once per tick."""

    def advance_requested(self) -> bool: ...
    def retreat_requested(self) -> bool: ...
    def capture_requested(self) -> bool: ...
    def restore_requested(self) -> bool: ...


@runtime_checkable
class SessionCommands(Protocol):
    """Optional per-tick requests beyond the four core queries."""

    def restore_latest_requested(self) -> bool: ...
    def remove_requested(self) -> bool: ...
    def select_first_requested(self) -> bool: ...
    def select_last_requested(self) -> bool: ...
    def prev_profile_requested(self) -> bool: ...
    def next_profile_requested(self) -> bool: ...


class HotkeyState:
    """Toggle-edge and held-key bookkeeping shared with a listener thread."""

    def __init__(
        self,
        bindings: Mapping[str, str] = DEFAULT_BINDINGS,
        modifier: str = MODIFIER,
    ) -> None:
        self.bindings = dict(bindings)
        self.modifier = modifier
        self._toggled: set[str] = set()
        self._held: set[str] = set()
        self._lock = threading.Lock()

    # ------------------------------ Key events ------------------------------

    def press(self, name: str | None) -> None:
        if name is None:
            return
        with self._lock:
            self._toggled.add(name)
            self._held.add(name)

    def release(self, name: str | None) -> None:
        if name is None:
            return
        with self._lock:
            self._held.discard(name)

    # ------------------------------- Queries --------------------------------

    def is_toggled(self, name: str) -> bool:
        """Return whether ``name`` went down since the last query, then reset."""
        with self._lock:
            if name in self._toggled:
                self._toggled.discard(name)
                return True
            return False

    def is_held(self, name: str) -> bool:
        with self._lock:
            return name in self._held

    def _requested(self, action: str) -> bool:
        key = self.bindings.get(action)
        if key is None:
            return False
        return self.is_toggled(key) and self.is_held(self.modifier)

    def advance_requested(self) -> bool:
        return self._requested("advance")

    def retreat_requested(self) -> bool:
        return self._requested("retreat")

    def capture_requested(self) -> bool:
        return self._requested("capture")

    def restore_requested(self) -> bool:
        return self._requested("restore")

    def restore_latest_requested(self) -> bool:
        return self._requested("restore_latest")

    def remove_requested(self) -> bool:
        return self._requested("remove")

    def select_first_requested(self) -> bool:
        return self._requested("select_first")

    def select_last_requested(self) -> bool:
        return self._requested("select_last")

    def prev_profile_requested(self) -> bool:
        return self._requested("prev_profile")

    def next_profile_requested(self) -> bool:
        return self._requested("next_profile")


def key_name(key: Any) -> str | None:
    """Normalize a ``pynput`` key to the names used in bindings.

    Characters are lowercased (Shift+N arrives as ``"N"``) and every shift
    variant collapses to ``"shift"``.
    """
    char = getattr(key, "char", None)
    if char:
        return str(char).lower()
    name = getattr(key, "name", None)
    if not name:
        return None
    if name.startswith("shift"):
        return "shift"
    return str(name)


class KeyboardInput(HotkeyState):
    """Global hotkeys backed by a ``pynput`` keyboard listener."""

    def __init__(
        self,
        bindings: Mapping[str, str] = DEFAULT_BINDINGS,
        modifier: str = MODIFIER,
    ) -> None:
        super().__init__(bindings, modifier)
        self._listener: Any = None

    def start(self) -> None:
        """Start the listener thread.

        ``pynput`` picks its backend at import time and needs a display
        server on Linux, so it is imported here rather than at module load.
        """
        from pynput import keyboard

        self._listener = keyboard.Listener(
            on_press=lambda key: self.press(key_name(key)),
            on_release=lambda key: self.release(key_name(key)),
            suppress=False,
        )
        self._listener.daemon = True
        self._listener.start()
        logger.info("Global hotkeys active (modifier: %s)", self.modifier)

    def stop(self) -> None:
        if self._listener is not None:
            self._listener.stop()
            self._listener = None


__all__ = [
    "DEFAULT_BINDINGS",
    "HotkeyState",
    "InputSource",
    "KeyboardInput",
    "MODIFIER",
    "SessionCommands",
    "key_name",
]
