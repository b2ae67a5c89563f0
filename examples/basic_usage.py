#!/usr/bin/env python3
"""Programmatic sync example.

This demonstrates using the sync components directly:

* load settings from `.env`
* build the Notion identity map and fetch GitHub issues
* print the create/update plan without writing anything

The label can be overridden as an argument.
"""

from __future__ import annotations

import argparse
from typing import Sequence

from notion_github_sync.assignees import normalize_assignees
from notion_github_sync.config import SyncSettings
from notion_github_sync.identity import build_identity_map
from notion_github_sync.logging import configure_logging
from notion_github_sync.reconcile import plan_operations
from notion_github_sync.store import NotionClient
from notion_github_sync.tracker import GitHubIssueReader


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Preview a GitHub -> Notion sync.")
    parser.add_argument("--label", default=None, help="Issue label to sync (defaults to GITHUB_LABEL)")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = SyncSettings()
    configure_logging(settings.log_level)

    tracker = GitHubIssueReader(
        token=settings.github_token,
        repository=settings.github_repo,
        label=args.label or settings.github_label,
        base_url=settings.github_base_url,
    )
    store = NotionClient(
        token=settings.notion_token,
        database_id=settings.notion_database_id,
        base_url=settings.notion_base_url,
        notion_version=settings.notion_version,
    )

    try:
        identity_map = build_identity_map(store)
        issues, unresolved = normalize_assignees(tracker.fetch_issues(), settings.notion_user_ids)
        plan = plan_operations(issues, identity_map)
    finally:
        store.close()
        tracker.close()

    for issue in plan.to_create:
        print(f"create #{issue.number}: {issue.title}")
    for operation in plan.to_update:
        print(f"update #{operation.issue.number} -> page {operation.record_id}")
    for entry in unresolved:
        print(f"unresolved assignee on #{entry.issue_number}: {entry.login}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
