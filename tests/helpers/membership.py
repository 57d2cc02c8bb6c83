"""Reusable fakes and helpers for membership reconciliation tests."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Literal

from rostersync.config import MembershipConfig
from rostersync.domain.errors import RemovalError, TransientGatewayError
from rostersync.domain.model import (
    AuditEvent,
    ExternalMember,
    MemberRole,
    RosterEntry,
    normalize_login,
)
from rostersync.domain.ports import DirectoryGateway, RosterRepositories

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable, Mapping, Sequence
    from types import TracebackType

ORG = "example-org"
REFERENCE = "example-agency"
AUDITOR = "auditor"
AUDITOR_TOKEN = "auditor-token"  # noqa: S105
NOW = datetime(2026, 10, 1, 12, tzinfo=UTC)


def make_config(**overrides: object) -> MembershipConfig:
    values: dict[str, object] = {
        "organization_name": ORG,
        "admin_username": AUDITOR,
        "reference_group": REFERENCE,
        "audited_teams": ("team-a", "team-b"),
        "max_days_since_login": 90,
    }
    values.update(overrides)
    return MembershipConfig(**values)  # type: ignore[arg-type]


def make_auditor(username: str = AUDITOR, token: str | None = AUDITOR_TOKEN) -> RosterEntry:
    return RosterEntry(
        username=username,
        is_active=True,
        signed_in_at=NOW,
        pushed_at=NOW,
        created_at=NOW - timedelta(days=400),
        directory_access_token=token,
    )


def make_entry(
    username: str,
    *,
    is_active: bool = True,
    days_idle: int = 0,
    created_days_ago: int = 365,
) -> RosterEntry:
    last_seen = NOW - timedelta(days=days_idle)
    return RosterEntry(
        username=username,
        is_active=is_active,
        signed_in_at=last_seen,
        pushed_at=last_seen,
        created_at=NOW - timedelta(days=created_days_ago),
    )


def members(*logins: str) -> tuple[ExternalMember, ...]:
    return tuple(ExternalMember(login=login) for login in logins)


class FakeDirectoryGateway(DirectoryGateway):
    """In-memory directory that records every call it receives."""

    def __init__(
        self,
        *,
        organizations: Mapping[str, Iterable[str]] | None = None,
        admins: Iterable[str] = (),
        teams: Mapping[str, Iterable[str]] | None = None,
        failing_removals: Iterable[str] = (),
        failing_listings: Iterable[str] = (),
        removal_errors: Mapping[str, Exception] | None = None,
        removal_delay: float = 0.0,
    ) -> None:
        self.organizations = {
            name: list(logins) for name, logins in (organizations or {}).items()
        }
        self.admins = list(admins)
        self.teams = {name: list(logins) for name, logins in (teams or {}).items()}
        self.failing_removals = set(failing_removals)
        self.failing_listings = set(failing_listings)
        self.removal_errors = dict(removal_errors or {})
        self.removal_delay = removal_delay
        self.removal_attempts: list[str] = []
        self.removed: list[str] = []
        self.calls: list[tuple[str, tuple[object, ...]]] = []

    async def get_organization_members(
        self,
        credential: str,
        organization: str,
        role: MemberRole | None = None,
    ) -> Sequence[ExternalMember]:
        self.calls.append(("get_organization_members", (credential, organization, role)))
        if organization in self.failing_listings:
            raise TransientGatewayError(f"listing {organization} failed")
        if role is MemberRole.ADMIN:
            return members(*self.admins)
        return members(*self.organizations.get(organization, ()))

    async def get_team_members(
        self,
        credential: str,
        organization: str,
        team: str,
    ) -> Sequence[ExternalMember]:
        self.calls.append(("get_team_members", (credential, organization, team)))
        if team in self.failing_listings:
            raise TransientGatewayError(f"listing team {team} failed")
        return members(*self.teams.get(team, ()))

    async def remove_organization_member(
        self,
        credential: str,
        organization: str,
        login: str,
    ) -> None:
        self.calls.append(("remove_organization_member", (credential, organization, login)))
        self.removal_attempts.append(login)
        if login in self.failing_removals:
            raise RemovalError(f"403 removing {login}", login=login)
        if login in self.removal_errors:
            raise self.removal_errors[login]
        if self.removal_delay:
            await asyncio.sleep(self.removal_delay)
        self.removed.append(login)
        current = self.organizations.get(organization)
        if current is not None and login in current:
            current.remove(login)


class FakeRosterRepository:
    """Simple in-memory roster."""

    def __init__(self, initial: Iterable[RosterEntry] | None = None) -> None:
        self.items: list[RosterEntry] = list(initial or [])

    def add(self, entity: RosterEntry) -> None:
        self.items.append(entity)

    def get_by_username(self, username: str) -> RosterEntry | None:
        wanted = normalize_login(username)
        return next((item for item in self.items if item.normalized_username == wanted), None)

    def set_active_flag(
        self,
        value: bool,  # noqa: FBT001
        *,
        logins: Collection[str],
        members: bool,
    ) -> list[RosterEntry]:
        normalized = {normalize_login(login) for login in logins}
        return [
            item
            for item in self.items
            if (item.normalized_username in normalized) == members and item.mark_active(value)
        ]

    def list_stale(self, cutoff: datetime) -> list[RosterEntry]:
        return [
            item
            for item in self.items
            if item.is_active
            and item.signed_in_at is not None
            and item.signed_in_at < cutoff
            and item.pushed_at is not None
            and item.pushed_at < cutoff
            and item.created_at < cutoff
        ]

    def list_usernames(self) -> list[str]:
        return [item.username for item in self.items]


class FakeAuditEventRepository:
    def __init__(self) -> None:
        self.items: list[AuditEvent] = []

    def add(self, entity: AuditEvent) -> None:
        self.items.append(entity)

    def list_recent(self, *, limit: int = 100) -> list[AuditEvent]:
        return list(reversed(self.items))[:limit]


class FakeRosterUnitOfWork:
    def __init__(
        self,
        roster: FakeRosterRepository,
        audit_events: FakeAuditEventRepository | None = None,
    ) -> None:
        self._repositories = RosterRepositories(
            roster=roster,
            audit_events=audit_events or FakeAuditEventRepository(),
        )
        self.committed = False
        self.rolled_back = False

    @property
    def repositories(self) -> RosterRepositories:
        return self._repositories

    def __enter__(self) -> FakeRosterUnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        return False

    def commit(self) -> None:
        self.committed = True

    def rollback(self) -> None:
        self.rolled_back = True


class FakeStore:
    """Shared roster/audit state handed out through a unit-of-work factory."""

    def __init__(self, entries: Iterable[RosterEntry] = ()) -> None:
        self.roster = FakeRosterRepository(entries)
        self.audit_events = FakeAuditEventRepository()
        self.units: list[FakeRosterUnitOfWork] = []

    def __call__(self) -> FakeRosterUnitOfWork:
        uow = FakeRosterUnitOfWork(self.roster, self.audit_events)
        self.units.append(uow)
        return uow

    @property
    def committed(self) -> bool:
        return any(uow.committed for uow in self.units)
