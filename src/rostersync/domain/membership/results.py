"""Outcome summaries returned by the reconciliation operations."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PruneTeamMembersResult:
    teams: tuple[str, ...]
    removed: tuple[str, ...]
    skipped: bool = False
    """True when the reference group came back empty and no team was pruned."""


@dataclass(frozen=True, slots=True)
class RefreshActivityResult:
    activated: tuple[str, ...]
    deactivated: tuple[str, ...]

    @property
    def transitions(self) -> int:
        return len(self.activated) + len(self.deactivated)


@dataclass(frozen=True, slots=True)
class RemovalBatchResult:
    attempted: tuple[str, ...]
    removed: tuple[str, ...]
    failed: tuple[str, ...]
