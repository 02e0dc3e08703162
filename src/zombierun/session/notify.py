"""Notification sinks.

A sink receives a short (title, body, timeout) triple. Delivery is
best-effort: the session controller swallows whatever a sink raises.
"""

from __future__ import annotations

from typing import Protocol

from rich.console import Console
from rich.markup import escape


class NotificationSink(Protocol):
    """Fire-and-forget notification target."""

    def notify(self, title: str, body: str, timeout: float) -> None: ...


class ConsoleNotifier:
    """Print notifications on stderr so they stay out of the live frame."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console if console is not None else Console(stderr=True)

    def notify(self, title: str, body: str, timeout: float) -> None:
        """Print one line. A console has no expiry, so ``timeout`` is not used."""
        self.console.print(f"[bold cyan]{escape(title)}[/bold cyan] [dim]·[/dim] {escape(body)}")


class NullNotifier:
    """Discard every notification."""

    def notify(self, title: str, body: str, timeout: float) -> None:
        return None


__all__ = ["ConsoleNotifier", "NotificationSink", "NullNotifier"]
