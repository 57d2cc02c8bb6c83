"""Port for the external organization directory (e.g. GitHub)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rostersync.domain.model import ExternalMember, MemberRole


@runtime_checkable
class DirectoryGateway(Protocol):
    """Async access to an organization's members and teams.

    Listing failures are raised as ``TransientGatewayError`` and removal
    failures as ``RemovalError``. Pagination, timeouts and retries belong to
    the implementation.
    """

    async def get_organization_members(
        self,
        credential: str,
        organization: str,
        role: MemberRole | None = None,
    ) -> Sequence[ExternalMember]: ...

    async def get_team_members(
        self,
        credential: str,
        organization: str,
        team: str,
    ) -> Sequence[ExternalMember]: ...

    async def remove_organization_member(
        self,
        credential: str,
        organization: str,
        login: str,
    ) -> None: ...


__all__ = ["DirectoryGateway"]
