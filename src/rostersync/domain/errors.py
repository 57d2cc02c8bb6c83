"""Error taxonomy for reconciliation runs and their directory collaborator."""

from __future__ import annotations


class ReconciliationError(RuntimeError):
    """Base class for failures raised by the reconciliation operations."""


class PreconditionError(ReconciliationError):
    """Raised before any external effect when a run cannot start."""


class AuditorNotFoundError(PreconditionError, LookupError):
    """Raised when the auditor has no roster entry."""

    def __init__(self, username: str) -> None:
        super().__init__(f"No roster entry for auditor {username!r}")
        self.username = username


class DirectoryError(RuntimeError):
    """Base class for failures reported by a directory gateway."""


class RemovalError(DirectoryError):
    """Raised by a gateway when a single member removal fails."""

    def __init__(self, message: str, *, login: str) -> None:
        super().__init__(message)
        self.login = login


class TransientGatewayError(DirectoryError):
    """Raised by a gateway when listing members or teams fails."""
