"""Shared fixtures: simulated clock, a fake save-data tree, settings hygiene."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from zombierun.core.settings import load_settings


class FakeClock:
    """Manually advanced clock in seconds."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture  # type: ignore[misc]
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(autouse=True)  # type: ignore[misc]
def _fresh_settings() -> Iterator[None]:
    """Rebuild settings around each test so env tweaks never leak."""
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()


SaveTreeFactory = Callable[[Path, list[str], list[str]], dict[str, Path]]


def make_save_tree(base: Path, ds3: list[str], er: list[str]) -> dict[str, Path]:
    """
    Create ``base/DarkSoulsIII/<id>/DS30000.sl2`` and ``base/EldenRing/<id>/ER0000.sl2``.

    Each save file contains ``b"<game>:<id>"``. Returns save paths keyed by id.
    """
    paths: dict[str, Path] = {}
    for game, save_file, ids in (
        ("DarkSoulsIII", "DS30000.sl2", ds3),
        ("EldenRing", "ER0000.sl2", er),
    ):
        root = base / game
        root.mkdir(parents=True, exist_ok=True)
        for account in ids:
            folder = root / account
            folder.mkdir()
            save = folder / save_file
            save.write_bytes(f"{game}:{account}".encode())
            paths[account] = save
    return paths


@pytest.fixture  # type: ignore[misc]
def tree_factory() -> SaveTreeFactory:
    """Expose `make_save_tree` to tests that need a custom layout."""
    return make_save_tree


@pytest.fixture  # type: ignore[misc]
def save_tree(tmp_path: Path) -> tuple[Path, dict[str, Path]]:
    """One Dark Souls III account (``a1``) and one Elden Ring account (``b2``)."""
    base = tmp_path / "appdata"
    return base, make_save_tree(base, ds3=["a1"], er=["b2"])
