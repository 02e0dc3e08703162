"""Session layer: the controller plus its input, message and notification seams."""

from __future__ import annotations

from .controller import Action, FrameView, HistoryRow, LocationRow, SessionController
from .input import HotkeyState, InputSource, KeyboardInput
from .message import TransientMessage
from .notify import ConsoleNotifier, NotificationSink, NullNotifier

__all__ = [
    "Action",
    "ConsoleNotifier",
    "FrameView",
    "HistoryRow",
    "HotkeyState",
    "InputSource",
    "KeyboardInput",
    "LocationRow",
    "NotificationSink",
    "NullNotifier",
    "SessionController",
    "TransientMessage",
]
