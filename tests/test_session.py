"""
Tests for the session controller.

Scope
-----
1.  **Capture / Restore**: byte-exact round trips to the active save path.
2.  **Isolation**: each game's history is untouched by the others.
3.  **Error Handling**: disk failures return `Err` and leave state alone;
    notification failures are swallowed.
4.  **Input & View**: one action per tick and the read-only frame.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

from zombierun.history.snapshot import IdSequence
from zombierun.profiles.models import ProfileKind
from zombierun.profiles.selector import ActiveProfileSelector
from zombierun.session.controller import Action, SessionController
from zombierun.session.input import HotkeyState


@dataclass
class RecordingNotifier:
    calls: list[tuple[str, str, float]] = field(default_factory=list)

    def notify(self, title: str, body: str, timeout: float) -> None:
        self.calls.append((title, body, timeout))


class ExplodingNotifier:
    def notify(self, title: str, body: str, timeout: float) -> None:
        raise RuntimeError("no notification daemon")


@dataclass
class ScriptedInput:
    advance: bool = False
    retreat: bool = False
    capture: bool = False
    restore: bool = False

    def advance_requested(self) -> bool:
        return self.advance

    def retreat_requested(self) -> bool:
        return self.retreat

    def capture_requested(self) -> bool:
        return self.capture

    def restore_requested(self) -> bool:
        return self.restore


@pytest.fixture  # type: ignore[misc]
def session(save_tree: Any, clock: Any) -> tuple[SessionController, dict[str, Path], RecordingNotifier]:
    base, paths = save_tree
    notifier = RecordingNotifier()
    controller = SessionController(
        ActiveProfileSelector.from_base_dir(base),
        notifier=notifier,
        clock=clock,
        message_ttl=5.0,
        notify_timeout=1.0,
    )
    return controller, paths, notifier


# --------------------------------------------------------------------------- #
# Capture / Restore
# --------------------------------------------------------------------------- #


def test_capture_then_restore_round_trips(session: Any) -> None:
    """Capture on the default location, clobber the file, restore the bytes."""
    controller, paths, notifier = session
    target = paths["a1"]
    original = target.read_bytes()

    rec = controller.capture_snapshot().unwrap()
    assert rec.payload == original
    assert controller.message_text() == "Saved"

    target.write_bytes(b"died to a boss")
    assert controller.restore_current().unwrap() == 0
    assert target.read_bytes() == original
    assert controller.message_text() == "Loaded #000 (Dark Souls III)"
    assert notifier.calls == [("Zombie Run", "Loaded savefile #0", 1.0)]


def test_capture_selects_newest(session: Any) -> None:
    """Each capture moves the cursor to the appended snapshot."""
    controller, paths, _ = session
    controller.capture_snapshot()
    history = controller.active_history()
    history.goto(0)
    paths["a1"].write_bytes(b"second")
    controller.capture_snapshot()
    assert history.index() == 1
    assert history.current().payload == b"second"
    assert [r.id for r in history.items()] == [0, 1]


def test_restore_at_keeps_cursor(session: Any) -> None:
    """`restore_at` writes the chosen snapshot without moving the selection."""
    controller, paths, _ = session
    target = paths["a1"]
    controller.capture_snapshot()
    target.write_bytes(b"v2")
    controller.capture_snapshot()

    assert controller.restore_at(0).unwrap() == 0
    assert target.read_bytes() == b"DarkSoulsIII:a1"
    assert controller.active_history().index() == 1
    assert controller.restore_at(7).unwrap() is None


def test_restore_on_empty_history_is_noop(session: Any) -> None:
    """Nothing captured yet: restore returns Ok(None) and sets no message."""
    controller, paths, notifier = session
    result = controller.restore_current()
    assert result.is_ok() and result.unwrap() is None
    assert controller.message_text() is None
    assert notifier.calls == []
    assert paths["a1"].read_bytes() == b"DarkSoulsIII:a1"


# --------------------------------------------------------------------------- #
# Isolation
# --------------------------------------------------------------------------- #


def test_profiles_keep_independent_histories(session: Any) -> None:
    """Capturing for one game never alters the other's history or cursor."""
    controller, _, _ = session
    controller.select_profile(1)
    controller.capture_snapshot()
    controller.capture_snapshot()
    er = controller.registry.snapshots_for(ProfileKind.ELDEN_RING)
    er.goto(0)

    controller.select_profile(0)
    controller.capture_snapshot()
    ds = controller.registry.snapshots_for(ProfileKind.DARK_SOULS_III)
    assert len(ds) == 1

    assert len(er) == 2 and er.index() == 0
    controller.select_profile(1)
    assert controller.active_history() is er
    assert er.index() == 0


def test_ids_are_shared_across_profiles(save_tree: Any, clock: Any) -> None:
    """The injected id sequence numbers snapshots across every game."""
    base, _ = save_tree
    controller = SessionController(
        ActiveProfileSelector.from_base_dir(base), ids=IdSequence(start=5), clock=clock
    )
    assert controller.capture_snapshot().unwrap().id == 5
    controller.select_profile(1)
    assert controller.capture_snapshot().unwrap().id == 6


# --------------------------------------------------------------------------- #
# Error handling
# --------------------------------------------------------------------------- #


def test_capture_failure_leaves_state(session: Any, clock: Any) -> None:
    """A missing save file gives Err; history and message are unchanged."""
    controller, paths, _ = session
    controller.capture_snapshot()
    clock.advance(1)
    paths["a1"].unlink()

    result = controller.capture_snapshot()
    assert result.is_err()
    assert "cannot read" in result.unwrap_err()
    assert len(controller.active_history()) == 1
    assert controller.message_text() == "Saved"


def test_restore_failure_leaves_message(session: Any) -> None:
    """A write failure gives Err and keeps the previous message."""
    controller, paths, notifier = session
    controller.capture_snapshot()
    target = paths["a1"]
    target.unlink()
    target.mkdir()

    result = controller.restore_current()
    assert result.is_err()
    assert controller.message_text() == "Saved"
    assert notifier.calls == []


def test_notification_failure_is_swallowed(save_tree: Any, clock: Any) -> None:
    """A broken notification sink does not turn a restore into an error."""
    base, _ = save_tree
    controller = SessionController(
        ActiveProfileSelector.from_base_dir(base), notifier=ExplodingNotifier(), clock=clock
    )
    controller.capture_snapshot()
    assert controller.restore_current().unwrap() == 0
    assert controller.message_text() == "Loaded #000 (Dark Souls III)"


def test_no_locations(clock: Any) -> None:
    """With nothing discovered every operation is a no-op or a plain Err."""
    controller = SessionController(ActiveProfileSelector([]), clock=clock)
    assert controller.capture_snapshot().is_err()
    assert controller.restore_current().is_ok()
    assert controller.advance_selection() is None
    assert controller.remove_at(0) is False
    assert controller.select_snapshot(0) is False
    view = controller.frame()
    assert view.locations == () and view.kind is None and view.history == ()


def test_message_expires(session: Any, clock: Any) -> None:
    """The status message disappears after its TTL on the simulated clock."""
    controller, _, _ = session
    controller.capture_snapshot()
    clock.advance(4.9)
    assert controller.message_text() == "Saved"
    clock.advance(0.2)
    assert controller.message_text() is None


# --------------------------------------------------------------------------- #
# Navigation, input, view
# --------------------------------------------------------------------------- #


def test_navigation_and_removal(session: Any) -> None:
    """Selection delegates to the active history with clamping on removal."""
    controller, _, _ = session
    for _ in range(3):
        controller.capture_snapshot()
    history = controller.active_history()
    assert history.index() == 2

    assert controller.advance_selection().id == 2
    assert controller.retreat_selection().id == 1
    assert controller.select_snapshot(0) is True
    assert controller.select_snapshot(3) is False

    controller.select_snapshot(2)
    assert controller.remove_at(0) is True
    assert history.index() == 1
    assert history.current().id == 2
    assert controller.remove_at(5) is False


def test_update_from_input_runs_one_action(session: Any) -> None:
    """Requests are checked in order and only the first one runs."""
    controller, _, _ = session
    assert controller.update_from_input(ScriptedInput()) is None

    assert controller.update_from_input(ScriptedInput(capture=True)) is Action.CAPTURE
    assert len(controller.active_history()) == 1

    both = ScriptedInput(retreat=True, capture=True)
    assert controller.update_from_input(both) is Action.RETREAT
    assert len(controller.active_history()) == 1

    assert controller.update_from_input(ScriptedInput(restore=True)) is Action.RESTORE
    assert controller.message_text() == "Loaded #000 (Dark Souls III)"


def _shift(state: HotkeyState, key: str) -> HotkeyState:
    state.press("shift")
    state.press(key)
    state.release(key)
    return state


def test_hotkey_removal_goes_through_update(session: Any) -> None:
    """Shift+Delete removes the selected snapshot and keeps the cursor index."""
    controller, _, _ = session
    for _ in range(3):
        controller.capture_snapshot()
    controller.select_snapshot(1)
    state = HotkeyState()

    assert controller.update_from_input(_shift(state, "delete")) is Action.REMOVE
    history = controller.active_history()
    assert [rec.id for rec in history.items()] == [0, 2]
    assert history.index() == 1

    # Nothing pressed: no action.
    assert controller.update_from_input(state) is None


def test_hotkey_profile_switch_goes_through_update(session: Any) -> None:
    """Shift+Right targets Elden Ring; both histories are left alone."""
    controller, paths, _ = session
    controller.capture_snapshot()
    state = HotkeyState()

    assert controller.update_from_input(_shift(state, "right")) is Action.NEXT_PROFILE
    location = controller.active_location()
    assert location is not None and location.kind is ProfileKind.ELDEN_RING
    assert location.path == paths["b2"]
    assert controller.active_history().is_empty()
    assert len(controller.registry.snapshots_for(ProfileKind.DARK_SOULS_III)) == 1

    # Past the last location nothing moves.
    assert controller.update_from_input(_shift(state, "right")) is Action.NEXT_PROFILE
    assert controller.selector.index() == 1

    assert controller.update_from_input(_shift(state, "left")) is Action.PREV_PROFILE
    assert controller.selector.index() == 0
    assert controller.update_from_input(_shift(state, "left")) is Action.PREV_PROFILE
    assert controller.selector.index() == 0


def test_hotkey_restore_latest_and_ends(session: Any) -> None:
    """Shift+R restores the newest snapshot; Shift+Home/End jump to either end."""
    controller, paths, notifier = session
    target = paths["a1"]
    target.write_bytes(b"first")
    controller.capture_snapshot()
    target.write_bytes(b"second")
    controller.capture_snapshot()
    target.write_bytes(b"live")
    state = HotkeyState()

    assert controller.update_from_input(_shift(state, "home")) is Action.SELECT_FIRST
    assert controller.active_history().index() == 0

    assert controller.update_from_input(_shift(state, "r")) is Action.RESTORE_LATEST
    assert target.read_bytes() == b"second"
    assert controller.active_history().index() == 0
    assert notifier.calls[-1][1] == "Loaded savefile #1"

    assert controller.update_from_input(_shift(state, "end")) is Action.SELECT_LAST
    assert controller.active_history().index() == 1


def test_hotkeys_on_empty_history_are_noops(session: Any) -> None:
    """Remove and restore-latest do nothing without snapshots."""
    controller, paths, notifier = session
    before = paths["a1"].read_bytes()
    state = HotkeyState()
    assert controller.update_from_input(_shift(state, "delete")) is Action.REMOVE
    assert controller.update_from_input(_shift(state, "r")) is Action.RESTORE_LATEST
    assert controller.remove_selected() is False
    assert controller.restore_latest().unwrap() is None
    assert paths["a1"].read_bytes() == before
    assert notifier.calls == []


def test_frame_view(session: Any, clock: Any) -> None:
    """The frame lists locations, history rows with elapsed time and the message."""
    controller, _, _ = session
    view = controller.frame()
    assert [row.active for row in view.locations] == [True, False]
    assert view.locations[0].label.startswith("Dark Souls III: ")
    assert view.history == ()
    # Reading the frame does not create a history.
    assert controller.registry.snapshots_for(ProfileKind.DARK_SOULS_III) is None

    controller.capture_snapshot()
    clock.advance(3725)
    controller.capture_snapshot()
    view = controller.frame()
    assert view.kind is ProfileKind.DARK_SOULS_III
    assert [row.elapsed for row in view.history] == ["01:02:05", "00:00:00"]
    assert view.history[0].label() == "#[00] [000] - 01:02:05 ago"
    assert view.selected == 1
    assert view.message == "Saved"
