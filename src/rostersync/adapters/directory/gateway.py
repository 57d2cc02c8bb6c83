"""Directory gateway over a REST transport supplied by the job runner.

The transport owns HTTP, authentication headers, pagination and retries. This
adapter owns the organization endpoints, payload translation and mapping of
transport failures onto the gateway's error contract.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Protocol, runtime_checkable
from urllib.parse import quote

from rostersync.domain.errors import DirectoryError, RemovalError, TransientGatewayError
from rostersync.domain.ports import DirectoryGateway

from .translator import PayloadError, parse_members

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Mapping, Sequence

    from rostersync.domain.model import ExternalMember, MemberRole

log = getLogger(__name__)

DEFAULT_PAGE_SIZE = 100


@runtime_checkable
class DirectoryTransport(Protocol):
    def get_pages(
        self,
        credential: str,
        path: str,
        params: Mapping[str, str],
    ) -> AsyncIterator[Sequence[object]]:
        """Yield each page of a paginated GET as a list of raw member payloads."""
        ...

    async def delete(self, credential: str, path: str) -> None: ...


def _segment(value: str) -> str:
    return quote(value, safe="")


class RestDirectoryGateway(DirectoryGateway):
    def __init__(self, transport: DirectoryTransport, *, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        self.transport = transport
        self.page_size = page_size

    async def get_organization_members(
        self,
        credential: str,
        organization: str,
        role: MemberRole | None = None,
    ) -> Sequence[ExternalMember]:
        params = {"per_page": str(self.page_size)}
        if role is not None:
            params["role"] = role.value
        return await self._list(credential, f"/orgs/{_segment(organization)}/members", params)

    async def get_team_members(
        self,
        credential: str,
        organization: str,
        team: str,
    ) -> Sequence[ExternalMember]:
        path = f"/orgs/{_segment(organization)}/teams/{_segment(team)}/members"
        return await self._list(credential, path, {"per_page": str(self.page_size)})

    async def remove_organization_member(
        self,
        credential: str,
        organization: str,
        login: str,
    ) -> None:
        path = f"/orgs/{_segment(organization)}/members/{_segment(login)}"
        try:
            await self.transport.delete(credential, path)
        except RemovalError:
            raise
        except Exception as exc:
            raise RemovalError(f"DELETE {path} failed: {exc}", login=login) from exc

    async def _list(
        self,
        credential: str,
        path: str,
        params: Mapping[str, str],
    ) -> tuple[ExternalMember, ...]:
        collected: list[ExternalMember] = []
        try:
            async for page in self.transport.get_pages(credential, path, params):
                collected.extend(parse_members(page))
        except (DirectoryError, PayloadError):
            raise
        except Exception as exc:
            raise TransientGatewayError(f"GET {path} failed: {exc}") from exc
        log.debug("Listed %s members from %s", len(collected), path)
        return tuple(collected)
