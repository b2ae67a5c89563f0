"""Error kinds raised during a sync run."""

from __future__ import annotations


class SyncError(Exception):
    """Base class for failures that abort a sync run."""


class StoreUnavailable(SyncError):
    """The Notion database could not be reached, authenticated against, or paginated."""


class TrackerUnavailable(SyncError):
    """GitHub could not be reached or rejected our credentials."""


class RecordRejected(SyncError):
    """The store refused a single create/update request."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"Store rejected write ({status_code}): {message}")
        self.status_code = status_code
        self.message = message


class WriteFailed(SyncError):
    """A create or update of the page for one issue failed."""

    def __init__(self, issue_number: int, operation: str) -> None:
        super().__init__(f"Failed to {operation} page for issue #{issue_number}")
        self.issue_number = issue_number
        self.operation = operation
