"""Public domain model surface."""

from __future__ import annotations

from rostersync.domain.model.audit import AuditEvent
from rostersync.domain.model.base import Entity, new_id, utcnow
from rostersync.domain.model.directory import ExternalMember, TeamRoster
from rostersync.domain.model.enums import EventKind, EventLabel, MemberRole
from rostersync.domain.model.roster import RosterEntry, normalize_login

__all__ = [
    "AuditEvent",
    "Entity",
    "EventKind",
    "EventLabel",
    "ExternalMember",
    "MemberRole",
    "RosterEntry",
    "TeamRoster",
    "new_id",
    "normalize_login",
    "utcnow",
]
