"""Status messages that expire on read."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TransientMessage:
    """
    Text that is visible for ``ttl`` seconds after ``created_at``.

    Nothing deletes an expired message; ``read`` simply stops returning it.
    """

    text: str
    created_at: float
    ttl: float

    def read(self, now: float) -> str | None:
        if now - self.created_at < self.ttl:
            return self.text
        return None

    def expired(self, now: float) -> bool:
        return self.read(now) is None


__all__ = ["TransientMessage"]
