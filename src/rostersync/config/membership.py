"""Organization membership audit configuration.

The value is loaded once per process (see ``rostersync.app.bootstrap``) and
passed explicitly to every reconciliation operation. Per-run overrides produce
a new frozen value through :meth:`MembershipConfig.with_overrides`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Final

from .env import env_int, env_list, require_env_vars
from .errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterable

DEFAULT_MAX_DAYS_SINCE_LOGIN: Final[int] = 90

ORG_NAME_VAR: Final[str] = "ROSTERSYNC_ORG_NAME"
ADMIN_USERNAME_VAR: Final[str] = "ROSTERSYNC_ADMIN_USERNAME"
REFERENCE_GROUP_VAR: Final[str] = "ROSTERSYNC_REFERENCE_GROUP"
AUDITED_TEAMS_VAR: Final[str] = "ROSTERSYNC_AUDITED_TEAMS"
MAX_DAYS_VAR: Final[str] = "ROSTERSYNC_MAX_DAYS_SINCE_LOGIN"


@dataclass(frozen=True, slots=True)
class MembershipConfig:
    """Resolved settings consumed by the reconciliation operations."""

    organization_name: str
    admin_username: str
    reference_group: str
    audited_teams: tuple[str, ...] = ()
    max_days_since_login: int = DEFAULT_MAX_DAYS_SINCE_LOGIN

    def __post_init__(self) -> None:
        if self.max_days_since_login < 0:
            raise ConfigurationError("max_days_since_login must be non-negative")
        for team in self.audited_teams:
            # team slugs end up in directory request paths
            if not team or any(ch.isspace() or ch == "/" for ch in team):
                raise ConfigurationError(f"invalid audited team slug {team!r}")

    def with_overrides(
        self,
        *,
        auditor_username: str | None = None,
        reference_group: str | None = None,
        audited_teams: Iterable[str] | None = None,
    ) -> MembershipConfig:
        """Return a copy with call-site overrides applied; ``None`` keeps the configured value."""

        return replace(
            self,
            admin_username=auditor_username or self.admin_username,
            reference_group=reference_group or self.reference_group,
            audited_teams=tuple(audited_teams) if audited_teams is not None else self.audited_teams,
        )


def get_membership_config() -> MembershipConfig:
    values = require_env_vars((ORG_NAME_VAR, ADMIN_USERNAME_VAR, REFERENCE_GROUP_VAR))
    max_days = env_int(MAX_DAYS_VAR, default=DEFAULT_MAX_DAYS_SINCE_LOGIN)
    if max_days < 0:
        raise ConfigurationError("must be non-negative", variable=MAX_DAYS_VAR)
    audited_teams = env_list(AUDITED_TEAMS_VAR)
    try:
        return MembershipConfig(
            organization_name=values[ORG_NAME_VAR],
            admin_username=values[ADMIN_USERNAME_VAR],
            reference_group=values[REFERENCE_GROUP_VAR],
            audited_teams=audited_teams,
            max_days_since_login=max_days,
        )
    except ConfigurationError as exc:
        raise ConfigurationError(str(exc), variable=AUDITED_TEAMS_VAR) from exc
