"""Audit records emitted by reconciliation runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from rostersync.domain.model.base import Entity, utcnow
from rostersync.domain.model.enums import EventKind, EventLabel

REMOVE_MEMBER_ACTION = "removeOrgMember"

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID

    from rostersync.domain.model.roster import RosterEntry


@dataclass(eq=False, kw_only=True)
class AuditEvent(Entity):
    kind: EventKind
    label: EventLabel
    subject_type: str | None = None
    subject_id: UUID | None = None
    body: dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=utcnow)

    @classmethod
    def activity_changed(cls, entry: RosterEntry) -> AuditEvent:
        """Audit record for an ``is_active`` transition on ``entry``."""
        return cls(
            kind=EventKind.AUDIT,
            label=EventLabel.UPDATED,
            subject_type="RosterEntry",
            subject_id=entry.id,
            body={"action": {"is_active": entry.is_active}},
        )

    @classmethod
    def removal_failed(cls, *, login: str, error: BaseException) -> AuditEvent:
        return cls(
            kind=EventKind.ERROR,
            label=EventLabel.MEMBERSHIP,
            body={
                "error": str(error) or type(error).__name__,
                "login": login,
                "action": REMOVE_MEMBER_ACTION,
            },
        )
