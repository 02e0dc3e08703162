"""Typed Result container for session operations.

Capture and restore touch the disk and can fail on every tick; a failure
must never take the driver loop down. Instead of raising, session operations
return a `Result[T, E]`:

- `Ok(value)` when the operation ran (the value may be ``None`` for no-ops),
- `Err(error)` when disk I/O failed; the error is a short human-readable string.

Example
-------
>>> from zombierun.core.result import ok, err, Result
>>> def parse_slot(x: str) -> Result[int, str]:
...     return ok(int(x)) if x.isdigit() else err("not a slot number")
>>> parse_slot("3").map(lambda i: i + 1).unwrap()
4
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar, cast, overload

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


class Result(Generic[T, E]):
    """Sum type representing either success (`Ok[T]`) or failure (`Err[E]`)."""

    def is_ok(self) -> bool:
        """Return ``True`` if this is an :class:`Ok` value."""
        return isinstance(self, Ok)

    def is_err(self) -> bool:
        """Return ``True`` if this is an :class:`Err` value."""
        return isinstance(self, Err)

    @overload
    def unwrap(self) -> T: ...
    @overload
    def unwrap(self, default: T) -> T: ...

    def unwrap(self, default: T | None = None) -> T:
        """Return the inner value if ``Ok``, else raise or return ``default``."""
        if isinstance(self, Ok):
            return cast(Ok[T, E], self).value
        if default is not None:
            return default
        raise RuntimeError(f"Attempted to unwrap Err: {self!r}")

    def unwrap_err(self) -> E:
        """Return the error value if ``Err``, else raise."""
        if isinstance(self, Err):
            return cast(Err[T, E], self).error
        raise RuntimeError(f"Attempted to unwrap_err on Ok: {self!r}")

    def map(self, fn: Callable[[T], U]) -> Result[U, E]:
        """Apply ``fn`` to the success value; propagate error unchanged."""
        if isinstance(self, Ok):
            return Ok(fn(cast(Ok[T, E], self).value))
        return cast(Result[U, E], self)

    def __repr__(self) -> str:  # pragma: no cover - trivial representation
        if isinstance(self, Ok):
            return f"Ok({cast(Ok[T, E], self).value!r})"
        if isinstance(self, Err):
            return f"Err({cast(Err[T, E], self).error!r})"
        return "Result(?)"


@dataclass(frozen=True)
class Ok(Result[T, E]):
    """Successful result wrapping a value of type ``T``."""

    value: T


@dataclass(frozen=True)
class Err(Result[T, E]):
    """Failed result wrapping an error payload of type ``E``."""

    error: E


def ok(value: T) -> Result[T, E]:
    """Construct :class:`Ok` with better type inference at call sites."""
    return Ok(value)


def err(error: E) -> Result[T, E]:
    """Construct :class:`Err` with better type inference at call sites."""
    return Err(error)
