"""Issue number -> Notion page id map, built once per run."""

from __future__ import annotations

import logging

from notion_github_sync.store import RecordStore

logger = logging.getLogger(__name__)


def build_identity_map(store: RecordStore) -> dict[int, str]:
    """Map every issue number already in the database to the page that mirrors it.

    The store is read to completion before the map is returned, so a failure
    while paginating (StoreUnavailable) never leaves a partial map behind.
    """

    records = list(store.iter_records())

    identity_map: dict[int, str] = {}
    for record in records:
        if record.issue_number is None:
            logger.warning(
                "Notion page has no issue number; it cannot be matched to an issue",
                extra={"record_id": record.record_id},
            )
            continue
        previous = identity_map.get(record.issue_number)
        if previous is not None and previous != record.record_id:
            logger.warning(
                "Several Notion pages share one issue number; using the last one",
                extra={
                    "issue_number": record.issue_number,
                    "record_id": record.record_id,
                    "previous_record_id": previous,
                },
            )
        identity_map[record.issue_number] = record.record_id

    logger.info(f"{len(records)} issues successfully fetched.", extra={"count": len(records)})
    return identity_map
