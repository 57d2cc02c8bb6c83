"""Transient values returned by the external directory. Never persisted."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from rostersync.domain.model.roster import normalize_login


@dataclass(frozen=True, slots=True)
class ExternalMember:
    login: str
    permissions: Mapping[str, bool] = field(
        default_factory=lambda: MappingProxyType({}), compare=False, hash=False
    )

    @property
    def normalized_login(self) -> str:
        return normalize_login(self.login)


@dataclass(frozen=True, slots=True)
class TeamRoster:
    """Members of one team inside the external organization."""

    name: str
    members: tuple[ExternalMember, ...] = ()

    @property
    def logins(self) -> tuple[str, ...]:
        return tuple(member.login for member in self.members)
