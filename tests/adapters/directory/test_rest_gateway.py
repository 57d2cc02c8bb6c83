from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import pytest

from rostersync.adapters.directory import PayloadError, RestDirectoryGateway
from rostersync.domain.errors import RemovalError, TransientGatewayError
from rostersync.domain.membership import remove_unrostered_members
from rostersync.domain.model import MemberRole
from tests.helpers.membership import FakeStore, make_auditor, make_config

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Mapping, Sequence


class FakeTransport:
    def __init__(
        self,
        pages: Mapping[str, Sequence[Sequence[object]]] | None = None,
        *,
        error: Exception | None = None,
    ) -> None:
        self.pages = dict(pages or {})
        self.error = error
        self.requests: list[tuple[str, str, dict[str, str]]] = []
        self.deleted: list[str] = []

    async def get_pages(
        self,
        credential: str,
        path: str,
        params: Mapping[str, str],
    ) -> AsyncIterator[Sequence[object]]:
        self.requests.append((credential, path, dict(params)))
        if self.error is not None:
            raise self.error
        for page in self.pages.get(path, ()):
            yield page

    async def delete(self, credential: str, path: str) -> None:
        self.requests.append((credential, path, {}))
        if self.error is not None:
            raise self.error
        self.deleted.append(path)


def test_members_are_collected_across_pages() -> None:
    transport = FakeTransport(
        {"/orgs/example-org/members": [[{"login": "alice"}], [{"login": "Bob", "id": 2}]]}
    )
    gateway = RestDirectoryGateway(transport, page_size=1)

    members = asyncio.run(gateway.get_organization_members("token", "example-org"))

    assert [member.login for member in members] == ["alice", "Bob"]
    assert transport.requests == [("token", "/orgs/example-org/members", {"per_page": "1"})]


def test_admin_listing_passes_role_filter() -> None:
    transport = FakeTransport()
    gateway = RestDirectoryGateway(transport)

    asyncio.run(gateway.get_organization_members("token", "example-org", MemberRole.ADMIN))

    assert transport.requests[0][2] == {"per_page": "100", "role": "admin"}


def test_team_members_path_escapes_segments() -> None:
    transport = FakeTransport({"/orgs/example-org/teams/ops%2Fa/members": [[{"login": "eve"}]]})
    gateway = RestDirectoryGateway(transport)

    members = asyncio.run(gateway.get_team_members("token", "example-org", "ops/a"))

    assert [member.login for member in members] == ["eve"]


def test_listing_failures_become_transient_errors() -> None:
    gateway = RestDirectoryGateway(FakeTransport(error=ConnectionError("reset")))

    with pytest.raises(TransientGatewayError, match="reset"):
        asyncio.run(gateway.get_team_members("token", "example-org", "ops"))


def test_malformed_payloads_are_not_masked() -> None:
    transport = FakeTransport({"/orgs/example-org/members": [[{"id": 1}]]})
    gateway = RestDirectoryGateway(transport)

    with pytest.raises(PayloadError):
        asyncio.run(gateway.get_organization_members("token", "example-org"))


def test_remove_member_deletes_membership() -> None:
    transport = FakeTransport()
    gateway = RestDirectoryGateway(transport)

    asyncio.run(gateway.remove_organization_member("token", "example-org", "mallory"))

    assert transport.deleted == ["/orgs/example-org/members/mallory"]


def test_removal_failures_carry_the_login() -> None:
    gateway = RestDirectoryGateway(FakeTransport(error=PermissionError("403 Forbidden")))

    with pytest.raises(RemovalError) as exc:
        asyncio.run(gateway.remove_organization_member("token", "example-org", "mallory"))

    assert exc.value.login == "mallory"
    assert "403 Forbidden" in str(exc.value)
    assert isinstance(exc.value.__cause__, PermissionError)


def test_unrostered_removal_through_rest_gateway() -> None:
    transport = FakeTransport(
        {"/orgs/example-org/members": [[{"login": "auditor"}, {"login": "Stranger"}]]}
    )
    store = FakeStore([make_auditor()])

    result = asyncio.run(
        remove_unrostered_members(
            config=make_config(),
            gateway=RestDirectoryGateway(transport),
            unit_of_work_factory=store,
        )
    )

    assert result.removed == ("Stranger",)
    assert transport.deleted == ["/orgs/example-org/members/Stranger"]
