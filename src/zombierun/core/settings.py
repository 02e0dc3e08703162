"""Centralized application configuration using Pydantic Settings (v2).

`load_settings()` builds and caches one `Settings` instance that reads from:
- Real environment variables (highest precedence)
- `.env` files in the working directory: .env, .env.local, .env.dev/.env.test/.env.prod

The save-data base directory comes from `APPDATA`, the same variable the games
themselves use to place their save folders.
"""

from __future__ import annotations

import logging
import os
import sys
from functools import lru_cache
from pathlib import Path
from typing import Literal, TextIO

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["dev", "test", "prod"]
LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Typed application configuration loaded from env and `.env` files.

    Attributes
    ----------
    environment : EnvName
        Runtime environment flag; maps from `ZOMBIERUN_ENV`.
    log_level : LogLevelName
        Global log level string; maps from `LOG_LEVEL`.
    appdata : Path | None
        Base directory holding the per-game save roots. Maps from `APPDATA`.
    message_ttl_seconds : float
        Lifetime of status messages shown after capture/restore.
    tick_interval_ms : int
        Delay between two driver ticks (input poll + render).
    notify_timeout_seconds : float
        Display timeout passed to the notification sink.
    """

    environment: EnvName = Field(default="dev", alias="ZOMBIERUN_ENV")
    log_level: LogLevelName = Field(default="INFO", alias="LOG_LEVEL")
    appdata: Path | None = Field(default=None, alias="APPDATA")
    message_ttl_seconds: float = Field(default=5.0, gt=0, alias="ZOMBIERUN_MESSAGE_TTL")
    tick_interval_ms: int = Field(default=120, ge=1, alias="ZOMBIERUN_TICK_MS")
    notify_timeout_seconds: float = Field(default=1.0, ge=0, alias="ZOMBIERUN_NOTIFY_TIMEOUT")

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local", ".env.dev", ".env.test", ".env.prod"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def log_level_numeric(self) -> int:
        """Return the numeric logging level corresponding to `self.log_level`."""
        return getattr(logging, self.log_level, logging.INFO)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a `Settings` instance.

    Tests force a rebuild via `load_settings.cache_clear()` after mutating
    `os.environ`.
    """
    os.environ.setdefault("ZOMBIERUN_ENV", "dev")
    return Settings()


class StderrHandler(logging.StreamHandler):  # type: ignore[type-arg]
    """StreamHandler that looks up `sys.stderr` on every record.

    `rich.live.Live` swaps `sys.stderr` while a session is drawn; resolving it
    late lets log lines print above the frame instead of through it.
    """

    def __init__(self) -> None:
        super().__init__()

    @property  # type: ignore[override]
    def stream(self) -> TextIO:
        return sys.stderr

    @stream.setter
    def stream(self, value: TextIO) -> None:
        pass


def get_logger(name: str = "zombierun") -> logging.Logger:
    """Return a process-global logger configured to the current `LOG_LEVEL`."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = StderrHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(load_settings().log_level_numeric())
    logger.propagate = False
    return logger
