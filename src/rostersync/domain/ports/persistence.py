"""Ports for persisting roster entries and audit events."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from rostersync.domain.model import AuditEvent, RosterEntry

if TYPE_CHECKING:
    from collections.abc import Collection
    from datetime import datetime


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class RosterRepository(Repository[RosterEntry], Protocol):
    """Persistence contract for the internal roster."""

    def get_by_username(self, username: str) -> RosterEntry | None: ...

    def set_active_flag(
        self,
        value: bool,  # noqa: FBT001
        *,
        logins: Collection[str],
        members: bool,
    ) -> list[RosterEntry]:
        """Flip ``is_active`` to ``value`` where it currently differs.

        ``members=True`` targets entries whose lower-cased username is in
        ``logins``; ``members=False`` targets entries whose username is not.
        Returns the entries that were changed.
        """
        ...

    def list_stale(self, cutoff: datetime) -> list[RosterEntry]:
        """Active entries whose sign-in, push and creation times all precede ``cutoff``."""
        ...

    def list_usernames(self) -> list[str]: ...


@runtime_checkable
class AuditEventRepository(Repository[AuditEvent], Protocol):
    """Sink for audit events."""

    def list_recent(self, *, limit: int = 100) -> list[AuditEvent]: ...
