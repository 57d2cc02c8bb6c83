"""Where the roster database lives."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

DATABASE_URI_VAR: Final[str] = "DATABASE_URI"
DATA_DIR_VAR: Final[str] = "ROSTERSYNC_DATA_DIR"
DATABASE_FILENAME: Final[str] = "rostersync.db"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str
    # set only for the default local SQLite file
    path: Path | None = None


def default_data_dir() -> Path:
    env_dir = os.getenv(DATA_DIR_VAR)
    if env_dir:
        return Path(env_dir).expanduser().resolve()
    xdg_home = os.getenv("XDG_DATA_HOME")
    base = Path(xdg_home) if xdg_home else Path.home() / ".local" / "share"
    return (base / "rostersync").expanduser().resolve()


def get_database_config() -> DatabaseConfig:
    """Use ``DATABASE_URI`` when set, else a SQLite file under the data directory."""

    env_uri = os.getenv(DATABASE_URI_VAR)
    if env_uri:
        return DatabaseConfig(uri=env_uri)
    data_dir = default_data_dir()
    data_dir.mkdir(parents=True, exist_ok=True)
    path = data_dir / DATABASE_FILENAME
    return DatabaseConfig(uri=f"sqlite+pysqlite:///{path}", path=path)
