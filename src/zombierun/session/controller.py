"""
Session controller: user actions against the active game's snapshot history.

Responsibilities
----------------
- **Resolve**: the active location comes from the :class:`ActiveProfileSelector`;
  its game picks the history in the :class:`ProfileRegistry`.
- **Capture / Restore**: copy the live save file into a new snapshot, or
  write a chosen snapshot back over it.
- **Navigate / Remove**: move or edit the cursor of the active history.
- **Input**: turn one tick of driver requests into at most one action.
- **Report**: set a short-lived status message and fire a notification.

Error policy
------------
Nothing in here raises during a session. Disk failures come back as
``Err(str)`` and are logged; the histories and the current message are left
as they were. Notification failures are logged and dropped. Moving past
either end, restoring from an empty history and removing a missing index are
plain no-ops.

Switching the active location never touches any history, so each game keeps
its own cursor for the whole session.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum

from zombierun.core.result import Result, err, ok
from zombierun.core.settings import get_logger, load_settings
from zombierun.history.snapshot import Clock, IdSequence, SnapshotRecord, format_elapsed
from zombierun.profiles.models import ProfileKind, ProfileLocation
from zombierun.profiles.registry import ProfileRegistry, SnapshotHistory
from zombierun.profiles.selector import ActiveProfileSelector

from .input import InputSource, SessionCommands
from .message import TransientMessage
from .notify import NotificationSink, NullNotifier

NOTIFICATION_TITLE = "Zombie Run"

logger = get_logger(__name__)


class Action(str, Enum):
    """What a tick of input resolved to."""

    ADVANCE = "advance"
    RETREAT = "retreat"
    CAPTURE = "capture"
    RESTORE = "restore"
    RESTORE_LATEST = "restore_latest"
    REMOVE = "remove"
    SELECT_FIRST = "select_first"
    SELECT_LAST = "select_last"
    PREV_PROFILE = "prev_profile"
    NEXT_PROFILE = "next_profile"


@dataclass(frozen=True, slots=True)
class LocationRow:
    index: int
    label: str
    active: bool


@dataclass(frozen=True, slots=True)
class HistoryRow:
    index: int
    id: int
    elapsed: str

    def label(self) -> str:
        return f"#[{self.index:02d}] [{self.id:03d}] - {self.elapsed} ago"


@dataclass(frozen=True, slots=True)
class FrameView:
    """Everything the renderer reads for one frame."""

    locations: tuple[LocationRow, ...]
    kind: ProfileKind | None
    history: tuple[HistoryRow, ...]
    selected: int
    message: str | None


class SessionController:
    """Mediates user actions against the per-game histories."""

    def __init__(
        self,
        selector: ActiveProfileSelector,
        registry: ProfileRegistry | None = None,
        ids: IdSequence | None = None,
        notifier: NotificationSink | None = None,
        clock: Clock = time.monotonic,
        message_ttl: float | None = None,
        notify_timeout: float | None = None,
    ) -> None:
        cfg = load_settings()
        self.selector = selector
        self.registry = registry if registry is not None else ProfileRegistry()
        self.ids = ids if ids is not None else IdSequence()
        self.notifier: NotificationSink = notifier if notifier is not None else NullNotifier()
        self.clock = clock
        self.message_ttl = message_ttl if message_ttl is not None else cfg.message_ttl_seconds
        self.notify_timeout = (
            notify_timeout if notify_timeout is not None else cfg.notify_timeout_seconds
        )
        self._message: TransientMessage | None = None

    # ------------------------------ Resolution ------------------------------

    def active_location(self) -> ProfileLocation | None:
        return self.selector.current_location()

    def active_history(self) -> SnapshotHistory | None:
        """History of the active game, created on first access."""
        location = self.active_location()
        if location is None:
            return None
        return self.registry.history_for(location.kind)

    def select_profile(self, index: int) -> bool:
        """Target another save location. Histories are left alone."""
        return self.selector.select(index)

    def step_profile(self, delta: int) -> bool:
        """Move the location cursor by ``delta``; ``False`` past either end."""
        return self.selector.select(self.selector.index() + delta)

    # ------------------------------- Capture --------------------------------

    def capture_snapshot(self) -> Result[SnapshotRecord, str]:
        """
        Copy the active save file into a new snapshot and select it.

        Returns
        -------
        Result[SnapshotRecord, str]
            ``Ok(record)`` on success. ``Err`` if there is no active location
            or the file cannot be read; nothing changes in that case.
        """
        location = self.active_location()
        if location is None:
            return err("no save location selected")
        try:
            record = SnapshotRecord.capture(location.path, self.ids, self.clock)
        except OSError as e:
            logger.warning("Capture failed for %s: %s", location.path, e)
            return err(f"cannot read {location.path}: {e}")

        history = self.registry.history_for(location.kind)
        history.push(record)
        history.goto(len(history) - 1)
        self._set_message("Saved")
        logger.info(
            "Captured snapshot %03d for %s (%d bytes)",
            record.id,
            location.kind.display_name,
            len(record.payload),
        )
        return ok(record)

    # ------------------------------- Restore --------------------------------

    def restore_current(self) -> Result[int | None, str]:
        """Write the selected snapshot back; ``Ok(None)`` when there is none."""
        history = self.active_history()
        if history is None or history.is_empty():
            return ok(None)
        index = history.index()
        return self._restore(index, history.current())

    def restore_at(self, index: int) -> Result[int | None, str]:
        """Write the snapshot at ``index`` back without moving the cursor."""
        history = self.active_history()
        record = history.at(index) if history is not None else None
        if record is None:
            return ok(None)
        return self._restore(index, record)

    def restore_latest(self) -> Result[int | None, str]:
        """Write the newest snapshot back; the cursor stays where it is."""
        history = self.active_history()
        if history is None or history.is_empty():
            return ok(None)
        return self.restore_at(len(history) - 1)

    def _restore(self, index: int, record: SnapshotRecord) -> Result[int | None, str]:
        location = self.active_location()
        if location is None:
            return ok(None)
        try:
            record.write_to(location.path)
        except OSError as e:
            logger.warning("Restore of #%03d failed for %s: %s", index, location.path, e)
            return err(f"cannot write {location.path}: {e}")

        self._set_message(f"Loaded #{index:03d} ({location.kind.display_name})")
        logger.info("Restored #%03d (snapshot %03d) to %s", index, record.id, location.path)
        self._send_notification(index)
        return ok(index)

    def _send_notification(self, index: int) -> None:
        try:
            self.notifier.notify(
                NOTIFICATION_TITLE, f"Loaded savefile #{index}", self.notify_timeout
            )
        except Exception as e:
            logger.warning("Notification failed: %s", e)

    # ------------------------------ Navigation ------------------------------

    def advance_selection(self) -> SnapshotRecord | None:
        history = self.active_history()
        if history is None or history.is_empty():
            return None
        return history.next()

    def retreat_selection(self) -> SnapshotRecord | None:
        history = self.active_history()
        if history is None or history.is_empty():
            return None
        return history.prev()

    def select_snapshot(self, index: int) -> bool:
        history = self.active_history()
        return history.goto(index) if history is not None else False

    def select_first(self) -> bool:
        return self.select_snapshot(0)

    def select_last(self) -> bool:
        history = self.active_history()
        return history.goto(len(history) - 1) if history is not None else False

    def remove_at(self, index: int) -> bool:
        """Remove a snapshot; the cursor keeps its index (clamped), not its element."""
        history = self.active_history()
        if history is None:
            return False
        removed = history.remove(index)
        if removed:
            logger.debug("Removed #%03d; cursor now at %d", index, history.index())
        return removed

    def remove_selected(self) -> bool:
        history = self.active_history()
        if history is None or history.is_empty():
            return False
        return self.remove_at(history.index())

    # -------------------------------- Input ---------------------------------

    def update_from_input(self, source: InputSource) -> Action | None:
        """Run at most one action for this tick; the first request wins."""
        if source.advance_requested():
            self.advance_selection()
            return Action.ADVANCE
        if source.retreat_requested():
            self.retreat_selection()
            return Action.RETREAT
        if source.capture_requested():
            self.capture_snapshot()
            return Action.CAPTURE
        if source.restore_requested():
            self.restore_current()
            return Action.RESTORE
        if isinstance(source, SessionCommands):
            return self._update_from_commands(source)
        return None

    def _update_from_commands(self, source: SessionCommands) -> Action | None:
        if source.restore_latest_requested():
            self.restore_latest()
            return Action.RESTORE_LATEST
        if source.remove_requested():
            self.remove_selected()
            return Action.REMOVE
        if source.select_first_requested():
            self.select_first()
            return Action.SELECT_FIRST
        if source.select_last_requested():
            self.select_last()
            return Action.SELECT_LAST
        if source.prev_profile_requested():
            self.step_profile(-1)
            return Action.PREV_PROFILE
        if source.next_profile_requested():
            self.step_profile(1)
            return Action.NEXT_PROFILE
        return None

    # ------------------------------- Messages -------------------------------

    def _set_message(self, text: str) -> None:
        self._message = TransientMessage(text=text, created_at=self.clock(), ttl=self.message_ttl)

    def message_text(self) -> str | None:
        """Current status text, or ``None`` once it has expired."""
        if self._message is None:
            return None
        return self._message.read(self.clock())

    # -------------------------------- View ----------------------------------

    def frame(self) -> FrameView:
        """Read-only snapshot of the session state for one rendered frame."""
        now = self.clock()
        active = self.selector.index()
        locations = tuple(
            LocationRow(index=i, label=loc.display(), active=i == active)
            for i, loc in enumerate(self.selector.locations())
        )
        location = self.active_location()
        history = self.registry.snapshots_for(location.kind) if location is not None else None
        rows: tuple[HistoryRow, ...] = ()
        selected = 0
        if history is not None:
            rows = tuple(
                HistoryRow(index=i, id=rec.id, elapsed=format_elapsed(rec.elapsed(now)))
                for i, rec in enumerate(history.items())
            )
            selected = history.index()
        return FrameView(
            locations=locations,
            kind=location.kind if location is not None else None,
            history=rows,
            selected=selected,
            message=self.message_text(),
        )


__all__ = [
    "Action",
    "FrameView",
    "HistoryRow",
    "LocationRow",
    "NOTIFICATION_TITLE",
    "SessionController",
]
