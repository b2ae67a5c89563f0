"""Batched, concurrent writes to the Record Store.

Each batch is issued concurrently and joined before the next one starts, so
at most `batch_size` requests are in flight at any time. The store client is
blocking (requests), so every write runs through `asyncio.to_thread`.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from typing import TypeVar

from notion_github_sync.config import DEFAULT_BATCH_SIZE
from notion_github_sync.errors import RecordRejected, WriteFailed
from notion_github_sync.models import Issue, UpdateOperation
from notion_github_sync.properties import properties_from_issue
from notion_github_sync.store import RecordStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


def chunked(items: Sequence[T], size: int) -> list[list[T]]:
    """Split `items` into consecutive lists of at most `size` elements."""

    if size <= 0:
        raise ValueError("size must be a positive integer")
    return [list(items[start : start + size]) for start in range(0, len(items), size)]


class BatchWriter:
    """Creates and updates Notion pages in fixed-size concurrent batches."""

    def __init__(self, store: RecordStore, *, batch_size: int = DEFAULT_BATCH_SIZE) -> None:
        if batch_size <= 0:
            raise ValueError("batch_size must be a positive integer")
        self._store = store
        self._batch_size = batch_size

    async def create_records(self, issues: Sequence[Issue]) -> list[int]:
        """Create one page per issue. Returns the size of every completed batch."""

        return await self._run_batches(issues, self._create_one)

    async def update_records(self, operations: Sequence[UpdateOperation]) -> list[int]:
        """Overwrite the tracked properties of existing pages. Returns the batch sizes."""

        return await self._run_batches(operations, self._update_one)

    def _create_one(self, issue: Issue) -> None:
        try:
            self._store.create_record(properties_from_issue(issue))
        except RecordRejected as e:
            raise WriteFailed(issue.number, "create") from e

    def _update_one(self, operation: UpdateOperation) -> None:
        try:
            self._store.update_record(operation.record_id, properties_from_issue(operation.issue))
        except RecordRejected as e:
            raise WriteFailed(operation.issue.number, "update") from e

    async def _run_batches(self, items: Sequence[T], write: Callable[[T], None]) -> list[int]:
        batch_sizes: list[int] = []
        batches = chunked(items, self._batch_size)
        for index, batch in enumerate(batches, start=1):
            # Every write in the batch runs to completion, even when a sibling fails.
            results = await asyncio.gather(
                *(asyncio.to_thread(write, item) for item in batch),
                return_exceptions=True,
            )
            failures = [result for result in results if isinstance(result, BaseException)]
            if failures:
                for failure in failures:
                    logger.error(
                        f"Write failed: {failure}",
                        extra={"batch": index, "error_type": type(failure).__name__},
                    )
                logger.error(
                    "Stopping after failed batch",
                    extra={
                        "batch": index,
                        "batches": len(batches),
                        "failed": len(failures),
                        "succeeded": len(batch) - len(failures),
                    },
                )
                raise failures[0]

            batch_sizes.append(len(batch))
            logger.info(
                f"Completed batch size: {len(batch)}",
                extra={"batch": index, "batches": len(batches)},
            )
        return batch_sizes
