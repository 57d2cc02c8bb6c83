"""Reconcile the internal roster with the external organization's membership.

Each operation is an idempotent batch job: it re-reads both sources and
recomputes the corrective actions, so running it twice against unchanged data
is a no-op the second time. The roster is the source of truth; the
organization is the projection that gets corrected.

Operations take a fully resolved :class:`MembershipConfig`. Call-site
overrides are applied beforehand with ``MembershipConfig.with_overrides``.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import datetime, timedelta
from logging import getLogger
from typing import TYPE_CHECKING

from rostersync.domain.errors import AuditorNotFoundError, PreconditionError
from rostersync.domain.model import AuditEvent, MemberRole, TeamRoster, normalize_login, utcnow

from .results import PruneTeamMembersResult, RefreshActivityResult, RemovalBatchResult

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rostersync.config import MembershipConfig
    from rostersync.domain.ports import DirectoryGateway, RosterUnitOfWork

UnitOfWorkFactory = Callable[[], "RosterUnitOfWork"]
NowProvider = Callable[[], datetime]

log = getLogger(__name__)


def _auditor_credential(uow: RosterUnitOfWork, username: str) -> str:
    auditor = uow.repositories.roster.get_by_username(username)
    if auditor is None:
        raise AuditorNotFoundError(username)
    if not auditor.directory_access_token:
        raise PreconditionError(f"Auditor {username!r} has no directory access token")
    return auditor.directory_access_token


def _resolve_credential(unit_of_work_factory: UnitOfWorkFactory, username: str) -> str:
    with unit_of_work_factory() as uow:
        return _auditor_credential(uow, username)


async def prune_team_members(
    *,
    config: MembershipConfig,
    gateway: DirectoryGateway,
    unit_of_work_factory: UnitOfWorkFactory,
) -> PruneTeamMembersResult:
    """Remove audited-team members who are neither in the reference group nor org admins.

    An empty reference group prunes nothing. Every scheduled removal is awaited;
    if any failed, the first failure is re-raised once the batch has settled.
    """

    credential = _resolve_credential(unit_of_work_factory, config.admin_username)
    organization = config.organization_name

    reference = await gateway.get_organization_members(credential, config.reference_group)
    admins = await gateway.get_organization_members(credential, organization, MemberRole.ADMIN)
    rosters = await _fetch_team_rosters(
        gateway,
        credential=credential,
        organization=organization,
        teams=config.audited_teams,
    )

    reference_logins = {member.normalized_login for member in reference}
    if not reference_logins:
        log.warning(
            "Reference group %s returned no members; skipping team pruning for %s",
            config.reference_group,
            organization,
        )
        return PruneTeamMembersResult(teams=config.audited_teams, removed=(), skipped=True)

    exempt = reference_logins | {admin.normalized_login for admin in admins}
    to_remove: list[str] = []
    scheduled: set[str] = set()
    for roster in rosters:
        for member in roster.members:
            key = member.normalized_login
            if key in exempt or key in scheduled:
                continue
            scheduled.add(key)
            to_remove.append(member.login)
            log.info("Removing %s from %s (not in %s)", member.login, organization, roster.name)

    outcomes = await asyncio.gather(
        *(
            gateway.remove_organization_member(credential, organization, login)
            for login in to_remove
        ),
        return_exceptions=True,
    )
    failures = [
        (login, outcome)
        for login, outcome in zip(to_remove, outcomes, strict=True)
        if isinstance(outcome, BaseException)
    ]
    if failures:
        login, error = failures[0]
        # TODO: decide whether team pruning should record per-member failures like the
        # stale/unrostered removals instead of failing the whole run.
        log.error(
            "Team pruning for %s aborted after %s failed removal(s); first: %s",
            organization,
            len(failures),
            login,
        )
        raise error

    return PruneTeamMembersResult(teams=config.audited_teams, removed=tuple(to_remove))


async def _fetch_team_rosters(
    gateway: DirectoryGateway,
    *,
    credential: str,
    organization: str,
    teams: Sequence[str],
) -> list[TeamRoster]:
    member_lists = await asyncio.gather(
        *(gateway.get_team_members(credential, organization, team) for team in teams)
    )
    return [
        TeamRoster(name=team, members=tuple(members))
        for team, members in zip(teams, member_lists, strict=True)
    ]


async def refresh_activity_status(
    *,
    config: MembershipConfig,
    gateway: DirectoryGateway,
    unit_of_work_factory: UnitOfWorkFactory,
) -> RefreshActivityResult:
    """Align every roster entry's ``is_active`` flag with current org membership."""

    with unit_of_work_factory() as uow:
        credential = _auditor_credential(uow, config.admin_username)
        members = await gateway.get_organization_members(credential, config.organization_name)
        logins = {member.normalized_login for member in members}

        roster = uow.repositories.roster
        activated = roster.set_active_flag(True, logins=logins, members=True)  # noqa: FBT003
        deactivated = roster.set_active_flag(False, logins=logins, members=False)  # noqa: FBT003

        for entry in (*activated, *deactivated):
            uow.repositories.audit_events.add(AuditEvent.activity_changed(entry))
        uow.commit()

    result = RefreshActivityResult(
        activated=tuple(entry.username for entry in activated),
        deactivated=tuple(entry.username for entry in deactivated),
    )
    log.info(
        "Refreshed activity for %s: activated=%s, deactivated=%s",
        config.organization_name,
        len(result.activated),
        len(result.deactivated),
    )
    return result


async def revoke_stale_members(
    *,
    config: MembershipConfig,
    gateway: DirectoryGateway,
    unit_of_work_factory: UnitOfWorkFactory,
    now_provider: NowProvider = utcnow,
) -> RemovalBatchResult:
    """Remove org access for active entries with no recent sign-in, push or creation."""

    cutoff = now_provider() - timedelta(days=config.max_days_since_login)
    with unit_of_work_factory() as uow:
        credential = _auditor_credential(uow, config.admin_username)
        stale = [entry.username for entry in uow.repositories.roster.list_stale(cutoff)]

    log.info("Found %s stale roster entries (cutoff %s)", len(stale), cutoff.isoformat())
    return await _remove_members(
        stale,
        credential=credential,
        organization=config.organization_name,
        gateway=gateway,
        unit_of_work_factory=unit_of_work_factory,
    )


async def remove_unrostered_members(
    *,
    config: MembershipConfig,
    gateway: DirectoryGateway,
    unit_of_work_factory: UnitOfWorkFactory,
) -> RemovalBatchResult:
    """Remove org members that have no roster entry at all."""

    with unit_of_work_factory() as uow:
        credential = _auditor_credential(uow, config.admin_username)
        usernames = {normalize_login(name) for name in uow.repositories.roster.list_usernames()}

    members = await gateway.get_organization_members(credential, config.organization_name)
    unrostered = [member.login for member in members if member.normalized_login not in usernames]

    log.info(
        "Found %s of %s members of %s without a roster entry",
        len(unrostered),
        len(members),
        config.organization_name,
    )
    return await _remove_members(
        unrostered,
        credential=credential,
        organization=config.organization_name,
        gateway=gateway,
        unit_of_work_factory=unit_of_work_factory,
    )


async def list_organization_admins(
    *,
    credential: str,
    organization: str,
    gateway: DirectoryGateway,
) -> list[str]:
    admins = await gateway.get_organization_members(credential, organization, MemberRole.ADMIN)
    return [admin.login for admin in admins]


async def _remove_members(
    logins: Sequence[str],
    *,
    credential: str,
    organization: str,
    gateway: DirectoryGateway,
    unit_of_work_factory: UnitOfWorkFactory,
) -> RemovalBatchResult:
    """Attempt every removal; failures become error events instead of aborting the batch."""

    outcomes = await asyncio.gather(
        *(_try_remove(gateway, credential, organization, login) for login in logins)
    )
    failures = [
        (login, error) for login, error in zip(logins, outcomes, strict=True) if error is not None
    ]

    if failures:
        with unit_of_work_factory() as uow:
            for login, error in failures:
                uow.repositories.audit_events.add(
                    AuditEvent.removal_failed(login=login, error=error)
                )
            uow.commit()

    failed = tuple(login for login, _ in failures)
    return RemovalBatchResult(
        attempted=tuple(logins),
        removed=tuple(login for login in logins if login not in failed),
        failed=failed,
    )


async def _try_remove(
    gateway: DirectoryGateway,
    credential: str,
    organization: str,
    login: str,
) -> Exception | None:
    try:
        await gateway.remove_organization_member(credential, organization, login)
    except Exception as exc:  # noqa: BLE001
        log.warning("Failed to remove %s from %s: %s", login, organization, exc)
        return exc
    log.info("Removed %s from %s", login, organization)
    return None
