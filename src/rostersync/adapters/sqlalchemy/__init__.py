"""SQLAlchemy adapter package for rostersync."""

from __future__ import annotations

from .mappings import (
    audit_event_table,
    mapper_registry,
    roster_entry_table,
    start_mappers,
)
from .repositories import SqlAlchemyAuditEventRepository, SqlAlchemyRosterRepository

__all__ = [
    "SqlAlchemyAuditEventRepository",
    "SqlAlchemyRosterRepository",
    "audit_event_table",
    "mapper_registry",
    "roster_entry_table",
    "start_mappers",
]
