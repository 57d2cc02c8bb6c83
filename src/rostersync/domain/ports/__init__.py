"""Domain port definitions for adapters."""

from __future__ import annotations

from .directory import DirectoryGateway
from .persistence import AuditEventRepository, Repository, RosterRepository
from .unit_of_work import (
    RepositoryCollection,
    RosterRepositories,
    RosterUnitOfWork,
    UnitOfWork,
)

__all__ = [
    "AuditEventRepository",
    "DirectoryGateway",
    "Repository",
    "RepositoryCollection",
    "RosterRepositories",
    "RosterRepository",
    "RosterUnitOfWork",
    "UnitOfWork",
]
