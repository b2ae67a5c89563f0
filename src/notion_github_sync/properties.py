"""Issue -> Notion database property mapping.

https://developers.notion.com/reference/page-property-values
"""

from __future__ import annotations

from typing import Any

from notion_github_sync.models import AssigneeRef, Issue


def properties_from_issue(issue: Issue) -> dict[str, Any]:
    """Return the issue conformed to the database's schema properties.

    Assignees must already be normalized to AssigneeRef values; raw logins are
    rejected because Notion only accepts user ids in a people property.
    """

    people: list[dict[str, str]] = []
    for assignee in issue.assignees:
        if not isinstance(assignee, AssigneeRef):
            raise TypeError(
                f"Issue #{issue.number} has an unresolved assignee {assignee!r}; "
                "normalize assignees before mapping properties"
            )
        people.append(assignee.to_payload())

    return {
        "Title": {
            "title": [{"type": "text", "text": {"content": issue.title}}],
        },
        "ID": {"number": issue.number},
        "State": {
            "select": {"name": issue.state},
        },
        "URL": {"url": issue.url},
        "Assignees": {
            "people": people,
        },
    }


def issue_number_from_properties(properties: dict[str, Any]) -> int | None:
    """Read the `ID` number property back from a page, if set."""

    id_property = properties.get("ID")
    if not isinstance(id_property, dict):
        return None
    number = id_property.get("number")
    if isinstance(number, bool) or not isinstance(number, int | float):
        return None
    return int(number)
