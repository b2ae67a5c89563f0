"""Transient records passed between the sync phases."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

IssueState = Literal["open", "closed"]


@dataclass(frozen=True, slots=True)
class AssigneeRef:
    """A Notion user resolved from a GitHub login."""

    id: str

    def to_payload(self) -> dict[str, str]:
        return {"id": self.id}


@dataclass(frozen=True, slots=True)
class Issue:
    """Minimal issue metadata fetched from GitHub.

    `assignees` holds GitHub logins as fetched, and AssigneeRef values once
    the issue has gone through assignee normalization.
    """

    number: int
    title: str
    state: IssueState
    comment_count: int
    url: str
    assignees: tuple[str | AssigneeRef, ...] = ()


@dataclass(frozen=True, slots=True)
class StoreRecord:
    """A page of the Notion database."""

    record_id: str
    issue_number: int | None


@dataclass(frozen=True, slots=True)
class UpdateOperation:
    """An issue paired with the page that already mirrors it."""

    record_id: str
    issue: Issue


@dataclass(frozen=True, slots=True)
class UnresolvedAssignee:
    """A GitHub login with no Notion user, dropped from one issue."""

    issue_number: int
    login: str
