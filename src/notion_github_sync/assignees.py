"""Resolve GitHub assignee logins to Notion users."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import replace

from notion_github_sync.models import AssigneeRef, Issue, UnresolvedAssignee

logger = logging.getLogger(__name__)


def normalize_assignees(
    issues: Sequence[Issue], lookup: Mapping[str, str]
) -> tuple[list[Issue], list[UnresolvedAssignee]]:
    """Replace each issue's assignee logins with AssigneeRef values.

    Logins missing from `lookup` are dropped from that issue only and
    reported back; an issue left with no assignees still syncs.
    """

    normalized: list[Issue] = []
    unresolved: list[UnresolvedAssignee] = []

    for issue in issues:
        refs: list[AssigneeRef] = []
        for assignee in issue.assignees:
            if isinstance(assignee, AssigneeRef):
                refs.append(assignee)
                continue
            user_id = lookup.get(assignee)
            if not user_id:
                logger.warning(
                    f"Could not find user with login {assignee}",
                    extra={"issue_number": issue.number, "login": assignee},
                )
                unresolved.append(UnresolvedAssignee(issue_number=issue.number, login=assignee))
                continue
            refs.append(AssigneeRef(id=user_id))
        normalized.append(replace(issue, assignees=tuple(refs)))

    return normalized, unresolved
