"""Split fetched issues into pages to create and pages to update."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from notion_github_sync.models import Issue, UpdateOperation


@dataclass(frozen=True, slots=True)
class SyncPlan:
    to_create: list[Issue] = field(default_factory=list)
    to_update: list[UpdateOperation] = field(default_factory=list)


def plan_operations(issues: Sequence[Issue], identity_map: Mapping[int, str]) -> SyncPlan:
    """Route each issue to create or update depending on whether a page already mirrors it.

    Input order is preserved in both lists.
    """

    plan = SyncPlan()
    for issue in issues:
        record_id = identity_map.get(issue.number)
        if record_id is not None:
            plan.to_update.append(UpdateOperation(record_id=record_id, issue=issue))
        else:
            plan.to_create.append(issue)
    return plan
