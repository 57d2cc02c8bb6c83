"""Roster entries: the authoritative record of who should have access."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rostersync.domain.model.base import Entity, utcnow

if TYPE_CHECKING:
    from datetime import datetime


def normalize_login(value: str) -> str:
    """Case-fold a username or external login for cross-source comparison."""

    return value.strip().lower()


@dataclass(eq=False, kw_only=True)
class RosterEntry(Entity):
    username: str
    email: str | None = None
    is_active: bool = False

    # staleness signals
    signed_in_at: datetime | None = None
    pushed_at: datetime | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime | None = None

    directory_access_token: str | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        # SQL lookups only lower-case, so usernames are stored trimmed
        self.username = self.username.strip()

    @property
    def normalized_username(self) -> str:
        return normalize_login(self.username)

    def mark_active(self, value: bool) -> bool:  # noqa: FBT001
        """Set ``is_active`` and report whether the flag actually changed."""
        if self.is_active == value:
            return False
        self.is_active = value
        self.updated_at = utcnow()
        return True
