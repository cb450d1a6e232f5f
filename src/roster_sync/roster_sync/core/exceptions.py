from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class EditLocked(DomainError):
    """Raised when a shift edit is attempted while the roster is read-only."""


class MonthBoundary(DomainError):
    """Raised when month navigation runs past the first or last month of the cycle."""


class SyncError(DomainError):
    """Base exception for failures talking to the remote content store."""


class MissingCredential(SyncError):
    """No credential configured; nothing was sent over the network."""


class RemoteReferenceInvalid(SyncError):
    """The document or branch does not exist on the remote store (HTTP 404/422)."""

    def __init__(self, path: str, branch: str, status: int):
        super().__init__(f"REMOTE_FILE_INVALID: {path} on branch {branch} (HTTP {status})")
        self.path = path
        self.branch = branch
        self.status = status


class SyncFailure(SyncError):
    """Any other transport or HTTP failure."""

    def __init__(self, status: Optional[int], detail: str = ""):
        label = f"HTTP_{status}" if status is not None else "NETWORK_ERROR"
        super().__init__(f"{label} {detail}".strip())
        self.status = status


class NoDataToPush(SyncError):
    """Push attempted while no cycle is loaded."""


class PushConflict(SyncError):
    """The remote rejected the push, usually because the document changed since the last pull."""

    def __init__(self, status: Optional[int]):
        super().__init__(f"PUSH_FAILED (HTTP {status})" if status is not None else "PUSH_FAILED")
        self.status = status


class DiscoveryFailure(SyncError):
    """Stream enumeration failed; callers fall back to the offline stream list."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class SyncInProgress(SyncError):
    """A pull or push is already running."""
