from __future__ import annotations

import pytest

from rostersync.adapters.directory import PayloadError, parse_member, parse_members


def test_parse_members_keeps_login_and_permissions() -> None:
    payloads = [
        {
            "login": "octocat",
            "id": 1,
            "type": "User",
            "site_admin": False,
            "permissions": {"admin": False, "push": True},
            "avatar_url": "https://example.invalid/avatar.png",
        },
        {"login": "hubot", "id": 2},
    ]

    parsed = parse_members(payloads)

    assert [member.login for member in parsed] == ["octocat", "hubot"]
    assert parsed[0].permissions == {"admin": False, "push": True}
    assert dict(parsed[1].permissions) == {}


def test_parse_member_strips_login_and_accepts_null_permissions() -> None:
    member = parse_member({"login": " Octocat ", "permissions": None})

    assert member.login == "Octocat"
    assert member.normalized_login == "octocat"


@pytest.mark.parametrize("payload", [{}, {"login": ""}, {"login": None}, "octocat"])
def test_parse_member_rejects_invalid_payloads(payload: object) -> None:
    with pytest.raises(PayloadError):
        parse_member(payload)
