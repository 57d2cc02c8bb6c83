"""Translate raw directory payloads into domain values."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from pydantic import ValidationError

from rostersync.domain.model import ExternalMember

from .schema import MemberPayload

if TYPE_CHECKING:
    from collections.abc import Iterable


class PayloadError(ValueError):
    """Raised when a member payload does not match the expected shape."""


def parse_member(payload: object) -> ExternalMember:
    try:
        model = MemberPayload.model_validate(payload)
    except ValidationError as exc:
        raise PayloadError(f"Invalid member payload: {exc.error_count()} error(s)") from exc
    return ExternalMember(login=model.login, permissions=MappingProxyType(dict(model.permissions)))


def parse_members(payloads: Iterable[object]) -> tuple[ExternalMember, ...]:
    """Translate a page (or concatenated pages) of member payloads."""

    return tuple(parse_member(payload) for payload in payloads)
