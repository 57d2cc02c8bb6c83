"""SQLAlchemy mapping metadata for the rostersync domain model."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from enum import StrEnum
from functools import cache

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    Index,
    String,
    Table,
    TypeDecorator,
    Uuid,
    false,
    func,
    orm,
)
from sqlalchemy.orm import configure_mappers

from rostersync.domain.model import AuditEvent, EventKind, EventLabel, RosterEntry

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


def _string_enum(enum_cls: type[StrEnum]) -> Enum:
    return Enum(
        enum_cls,
        native_enum=False,
        length=32,
        values_callable=lambda members: [member.value for member in members],
    )


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

roster_entry_table = Table(
    "roster_entry",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("username", String, nullable=False, unique=True),
    Column("email", String, nullable=True),
    Column("is_active", Boolean, nullable=False, default=False, server_default=false()),
    Column("signed_in_at", UTCDateTime, nullable=True),
    Column("pushed_at", UTCDateTime, nullable=True),
    Column("created_at", UTCDateTime, nullable=False),
    Column("updated_at", UTCDateTime, nullable=True),
    Column("directory_access_token", String, nullable=True),
)

Index(
    "ix_roster_entry_username_lower",
    func.lower(roster_entry_table.c.username),
    unique=True,
)

audit_event_table = Table(
    "audit_event",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("kind", _string_enum(EventKind), nullable=False),
    Column("label", _string_enum(EventLabel), nullable=False),
    Column("subject_type", String, nullable=True),
    Column("subject_id", UUIDColumnType, nullable=True),
    Column("body", JSON, nullable=False),
    Column("created_at", UTCDateTime, nullable=False, index=True),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(RosterEntry, roster_entry_table)
    mapper_registry.map_imperatively(AuditEvent, audit_event_table)

    configure_mappers()
    return mapper_registry
