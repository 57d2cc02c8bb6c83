"""Root logger setup for processes that run reconciliation jobs."""

from __future__ import annotations

import logging
import os
from typing import Final

from .errors import ConfigurationError

LOG_LEVEL_VAR: Final[str] = "ROSTERSYNC_LOG_LEVEL"
LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def resolve_log_level(*, default: int = logging.INFO) -> int:
    """Return the level named by ``ROSTERSYNC_LOG_LEVEL`` (e.g. ``debug``), else ``default``."""

    raw = os.getenv(LOG_LEVEL_VAR)
    if raw is None or not raw.strip():
        return default
    level = logging.getLevelNamesMapping().get(raw.strip().upper())
    if level is None:
        raise ConfigurationError(f"unknown log level {raw!r}", variable=LOG_LEVEL_VAR)
    return level


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Configure the root logger once; an explicit ``level`` wins over the environment."""

    logging.basicConfig(
        level=level if level is not None else resolve_log_level(),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%dT%H:%M:%S%z",
        force=force,
    )
