"""Schema migrations for the roster and audit event tables.

The revisions ship inside the package, so ``upgrade_head`` works the same for
editable and installed copies. ``[tool.alembic]`` in ``pyproject.toml`` points
the ``alembic`` command line at the same directory for authoring revisions.
"""

from __future__ import annotations

from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Final

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory

from rostersync.config import get_database_config

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

MIGRATIONS_PATH: Final[Path] = Path(__file__).resolve().parent

log = getLogger(__name__)


def build_config(*, database_uri: str | None = None) -> Config:
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_PATH))
    if database_uri is not None:
        config.set_main_option("sqlalchemy.url", database_uri)
    return config


def head_revision() -> str | None:
    return ScriptDirectory.from_config(build_config()).get_current_head()


def current_revision(engine: Engine) -> str | None:
    """Return the revision stamped in the database, or ``None`` for an empty schema."""

    with engine.connect() as connection:
        return MigrationContext.configure(connection).get_current_revision()


def upgrade_head(*, engine: Engine | None = None, database_uri: str | None = None) -> None:
    """Upgrade the roster schema to the latest revision."""

    if engine is None:
        uri = database_uri or get_database_config().uri
        command.upgrade(build_config(database_uri=uri), "head")
        return

    head = head_revision()
    if current_revision(engine) == head:
        log.debug("Roster schema already at %s", head)
        return

    config = build_config()
    with engine.begin() as connection:
        config.attributes["connection"] = connection
        command.upgrade(config, "head")
    log.info("Roster schema upgraded to %s", head)
