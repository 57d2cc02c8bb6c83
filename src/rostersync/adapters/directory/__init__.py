"""Directory gateway adapter and payload translation."""

from __future__ import annotations

from .gateway import DirectoryTransport, RestDirectoryGateway
from .schema import MemberPayload
from .translator import PayloadError, parse_member, parse_members

__all__ = [
    "DirectoryTransport",
    "MemberPayload",
    "PayloadError",
    "RestDirectoryGateway",
    "parse_member",
    "parse_members",
]
