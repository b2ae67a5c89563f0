"""Sequences one sync run: Notion ids -> GitHub issues -> plan -> create -> update."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from notion_github_sync.assignees import normalize_assignees
from notion_github_sync.config import SyncSettings
from notion_github_sync.identity import build_identity_map
from notion_github_sync.models import UnresolvedAssignee
from notion_github_sync.reconcile import SyncPlan, plan_operations
from notion_github_sync.store import NotionClient, RecordStore
from notion_github_sync.tracker import GitHubIssueReader, TrackerSource
from notion_github_sync.writer import BatchWriter

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SyncResult:
    """Summary of a completed run."""

    known_issues: int
    issues_fetched: int
    created: int
    updated: int
    create_batches: list[int] = field(default_factory=list)
    update_batches: list[int] = field(default_factory=list)
    unresolved_assignees: list[UnresolvedAssignee] = field(default_factory=list)
    dry_run: bool = False


class NotionGitHubSync:
    """High-level, testable sync orchestration.

    Phases run strictly one after another; the identity map is built once and
    only read afterwards.
    """

    def __init__(
        self,
        *,
        tracker: TrackerSource,
        store: RecordStore,
        user_ids: Mapping[str, str],
        writer: BatchWriter | None = None,
        dry_run: bool = False,
    ) -> None:
        self._tracker = tracker
        self._store = store
        self._user_ids = user_ids
        self._writer = writer or BatchWriter(store)
        self._dry_run = dry_run

    async def run(self) -> SyncResult:
        identity_map = build_identity_map(self._store)

        logger.info("Fetching issues from GitHub...")
        issues = self._tracker.fetch_issues()
        issues, unresolved = normalize_assignees(issues, self._user_ids)
        logger.info(
            f"Fetched {len(issues)} issues from GitHub repository.",
            extra={"count": len(issues)},
        )

        plan: SyncPlan = plan_operations(issues, identity_map)

        logger.info(
            f"{len(plan.to_create)} new issues to add to Notion.",
            extra={"count": len(plan.to_create)},
        )
        create_batches: list[int] = []
        if not self._dry_run:
            create_batches = await self._writer.create_records(plan.to_create)

        logger.info(
            f"{len(plan.to_update)} issues to update in Notion.",
            extra={"count": len(plan.to_update)},
        )
        update_batches: list[int] = []
        if not self._dry_run:
            update_batches = await self._writer.update_records(plan.to_update)

        if self._dry_run:
            logger.info("Dry run: no changes were written to Notion.")
        else:
            logger.info("Notion database is synced with GitHub.")

        return SyncResult(
            known_issues=len(identity_map),
            issues_fetched=len(issues),
            created=0 if self._dry_run else len(plan.to_create),
            updated=0 if self._dry_run else len(plan.to_update),
            create_batches=create_batches,
            update_batches=update_batches,
            unresolved_assignees=unresolved,
            dry_run=self._dry_run,
        )


async def run_sync(settings: SyncSettings, *, dry_run: bool = False) -> SyncResult:
    """Build the GitHub and Notion clients from settings and run one sync."""

    tracker = GitHubIssueReader(
        token=settings.github_token,
        repository=settings.github_repo,
        label=settings.github_label,
        base_url=settings.github_base_url,
    )
    store = NotionClient(
        token=settings.notion_token,
        database_id=settings.notion_database_id,
        base_url=settings.notion_base_url,
        notion_version=settings.notion_version,
    )
    try:
        sync = NotionGitHubSync(
            tracker=tracker,
            store=store,
            user_ids=settings.notion_user_ids,
            writer=BatchWriter(store, batch_size=settings.batch_size),
            dry_run=dry_run,
        )
        return await sync.run()
    finally:
        store.close()
        tracker.close()
