"""Application orchestration entry points for an external job runner.

A job runner calls :func:`bootstrap` once per process, builds its directory
gateway (usually :class:`~rostersync.adapters.directory.RestDirectoryGateway` over
its own HTTP transport), then invokes one of the ``run_*`` functions per
scheduled job.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv

from rostersync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyRosterUnitOfWork,
    is_started,
    startup,
)
from rostersync.config import MembershipConfig, configure_logging, get_membership_config
from rostersync.domain.membership import (
    PruneTeamMembersResult,
    RefreshActivityResult,
    RemovalBatchResult,
    prune_team_members,
    refresh_activity_status,
    remove_unrostered_members,
    revoke_stale_members,
)
from rostersync.domain.ports.unit_of_work import RosterUnitOfWork

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from rostersync.domain.ports import DirectoryGateway

UnitOfWorkFactory = Callable[[], RosterUnitOfWork]


log = getLogger(__name__)


def bootstrap(
    *,
    env_file: str | Path | None = None,
    log_level: int | None = None,
) -> MembershipConfig:
    """Load ``.env``, configure logging and return the process-wide membership config.

    Without ``log_level`` the level comes from ``ROSTERSYNC_LOG_LEVEL`` (default INFO).
    """

    load_dotenv(env_file)
    configure_logging(level=log_level)
    config = get_membership_config()
    log.info(
        "Loaded membership config: organization=%s, reference_group=%s, teams=%s",
        config.organization_name,
        config.reference_group,
        ",".join(config.audited_teams) or "-",
    )
    return config


def _default_unit_of_work_factory() -> UnitOfWorkFactory:
    if not is_started():
        startup()
    return SqlAlchemyRosterUnitOfWork


def _resolve(
    config: MembershipConfig | None,
    unit_of_work_factory: UnitOfWorkFactory | None,
) -> tuple[MembershipConfig, UnitOfWorkFactory]:
    effective_config = config or get_membership_config()
    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    return effective_config, effective_uow


def run_prune_team_members(
    *,
    gateway: DirectoryGateway,
    config: MembershipConfig | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    auditor_username: str | None = None,
    reference_group: str | None = None,
    audited_teams: Iterable[str] | None = None,
) -> PruneTeamMembersResult:
    effective_config, effective_uow = _resolve(config, unit_of_work_factory)
    effective_config = effective_config.with_overrides(
        auditor_username=auditor_username,
        reference_group=reference_group,
        audited_teams=audited_teams,
    )
    log.info("Starting team pruning: teams=%s", ",".join(effective_config.audited_teams) or "-")

    result = asyncio.run(
        prune_team_members(
            config=effective_config,
            gateway=gateway,
            unit_of_work_factory=effective_uow,
        )
    )

    log.info(f"Finished team pruning: removed={len(result.removed)}, skipped={result.skipped}")
    return result


def run_refresh_activity_status(
    *,
    gateway: DirectoryGateway,
    config: MembershipConfig | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    auditor_username: str | None = None,
) -> RefreshActivityResult:
    effective_config, effective_uow = _resolve(config, unit_of_work_factory)
    return asyncio.run(
        refresh_activity_status(
            config=effective_config.with_overrides(auditor_username=auditor_username),
            gateway=gateway,
            unit_of_work_factory=effective_uow,
        )
    )


def run_revoke_stale_members(
    *,
    gateway: DirectoryGateway,
    config: MembershipConfig | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    auditor_username: str | None = None,
) -> RemovalBatchResult:
    effective_config, effective_uow = _resolve(config, unit_of_work_factory)
    result = asyncio.run(
        revoke_stale_members(
            config=effective_config.with_overrides(auditor_username=auditor_username),
            gateway=gateway,
            unit_of_work_factory=effective_uow,
        )
    )
    log.info(
        f"Finished stale revocation: removed={len(result.removed)}, failed={len(result.failed)}"
    )
    return result


def run_remove_unrostered_members(
    *,
    gateway: DirectoryGateway,
    config: MembershipConfig | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    auditor_username: str | None = None,
) -> RemovalBatchResult:
    effective_config, effective_uow = _resolve(config, unit_of_work_factory)
    result = asyncio.run(
        remove_unrostered_members(
            config=effective_config.with_overrides(auditor_username=auditor_username),
            gateway=gateway,
            unit_of_work_factory=effective_uow,
        )
    )
    log.info(
        f"Finished unrostered removal: removed={len(result.removed)}, "
        f"failed={len(result.failed)}"
    )
    return result


MEMBERSHIP_JOBS: dict[str, Callable[..., Any]] = {
    "prune-team-members": run_prune_team_members,
    "refresh-activity-status": run_refresh_activity_status,
    "revoke-stale-members": run_revoke_stale_members,
    "remove-unrostered-members": run_remove_unrostered_members,
}


def run_membership_job(name: str, **kwargs: Any) -> object:  # noqa: ANN401
    """Dispatch a scheduled job by name; keyword arguments go to the matching ``run_*``."""

    try:
        job = MEMBERSHIP_JOBS[name]
    except KeyError:
        known = ", ".join(sorted(MEMBERSHIP_JOBS))
        raise ValueError(f"Unknown membership job {name!r} (known: {known})") from None
    return job(**kwargs)
