"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, select

from rostersync.adapters.sqlalchemy.mappings import audit_event_table, roster_entry_table
from rostersync.domain.model import AuditEvent, RosterEntry, normalize_login

if TYPE_CHECKING:
    from collections.abc import Collection
    from datetime import datetime

    from sqlalchemy.orm import Session


class SqlAlchemyRosterRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: RosterEntry) -> None:
        self.session.add(entity)

    def get_by_username(self, username: str) -> RosterEntry | None:
        stmt = (
            select(RosterEntry)
            .where(func.lower(roster_entry_table.c.username) == normalize_login(username))
            .limit(1)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def set_active_flag(
        self,
        value: bool,  # noqa: FBT001
        *,
        logins: Collection[str],
        members: bool,
    ) -> list[RosterEntry]:
        normalized = sorted({normalize_login(login) for login in logins})
        lowered = func.lower(roster_entry_table.c.username)
        in_directory = lowered.in_(normalized) if members else lowered.not_in(normalized)
        stmt = (
            select(RosterEntry)
            .where(in_directory)
            .where(roster_entry_table.c.is_active == (not value))
            .order_by(roster_entry_table.c.username)
        )
        entries = list(self.session.execute(stmt).scalars())
        changed = [entry for entry in entries if entry.mark_active(value)]
        self.session.flush()
        return changed

    def list_stale(self, cutoff: datetime) -> list[RosterEntry]:
        columns = roster_entry_table.c
        stmt = (
            select(RosterEntry)
            .where(columns.is_active.is_(True))
            .where(columns.signed_in_at < cutoff)
            .where(columns.pushed_at < cutoff)
            .where(columns.created_at < cutoff)
            .order_by(columns.username)
        )
        return list(self.session.execute(stmt).scalars())

    def list_usernames(self) -> list[str]:
        stmt = select(roster_entry_table.c.username).order_by(roster_entry_table.c.username)
        return list(self.session.execute(stmt).scalars())


class SqlAlchemyAuditEventRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: AuditEvent) -> None:
        self.session.add(entity)

    def list_recent(self, *, limit: int = 100) -> list[AuditEvent]:
        stmt = (
            select(AuditEvent)
            .order_by(audit_event_table.c.created_at.desc())
            .limit(limit)
        )
        return list(self.session.execute(stmt).scalars())
