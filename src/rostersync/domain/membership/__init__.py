"""Organization membership reconciliation operations."""

from __future__ import annotations

from .engine import (
    list_organization_admins,
    prune_team_members,
    refresh_activity_status,
    remove_unrostered_members,
    revoke_stale_members,
)
from .results import PruneTeamMembersResult, RefreshActivityResult, RemovalBatchResult

__all__ = [
    "PruneTeamMembersResult",
    "RefreshActivityResult",
    "RemovalBatchResult",
    "list_organization_admins",
    "prune_team_members",
    "refresh_activity_status",
    "remove_unrostered_members",
    "revoke_stale_members",
]
