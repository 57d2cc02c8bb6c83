"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class EventKind(StrEnum):
    AUDIT = "audit"
    ERROR = "error"


class EventLabel(StrEnum):
    UPDATED = "updated"
    MEMBERSHIP = "membership"


class MemberRole(StrEnum):
    """Role filter accepted by the directory when listing organization members."""

    ALL = "all"
    ADMIN = "admin"
    MEMBER = "member"
