"""Unit tests for batched Notion writes."""

from __future__ import annotations

import asyncio
import math

import pytest

from _fakes import FakeStore, make_issue
from notion_github_sync.errors import StoreUnavailable, WriteFailed
from notion_github_sync.models import AssigneeRef, UpdateOperation
from notion_github_sync.writer import BatchWriter, chunked


@pytest.mark.parametrize(
    ("n", "size", "expected"),
    [
        (23, 10, [10, 10, 3]),
        (20, 10, [10, 10]),
        (3, 10, [3]),
        (0, 10, []),
        (5, 1, [1, 1, 1, 1, 1]),
    ],
)
def test_chunked_sizes(n: int, size: int, expected: list[int]) -> None:
    chunks = chunked(list(range(n)), size)

    assert [len(chunk) for chunk in chunks] == expected
    assert len(chunks) == math.ceil(n / size)
    assert [item for chunk in chunks for item in chunk] == list(range(n))


def test_chunked_rejects_non_positive_size() -> None:
    with pytest.raises(ValueError):
        chunked([1, 2], 0)


def test_batch_writer_rejects_non_positive_batch_size() -> None:
    with pytest.raises(ValueError):
        BatchWriter(FakeStore(), batch_size=0)


def _batch_of(number: int, size: int) -> int:
    return (number - 1) // size


def test_creates_run_in_barriered_batches() -> None:
    store = FakeStore(delay=0.01)
    writer = BatchWriter(store, batch_size=10)
    issues = [make_issue(n) for n in range(1, 24)]

    batch_sizes = asyncio.run(writer.create_records(issues))

    assert batch_sizes == [10, 10, 3]
    assert sorted(p["ID"]["number"] for p in store.created) == list(range(1, 24))

    # Batch k+1 never starts before every write of batch k has ended.
    last_event_of_batch: dict[int, int] = {}
    first_event_of_batch: dict[int, int] = {}
    for position, (_, number) in enumerate(store.events):
        batch = _batch_of(number, 10)
        first_event_of_batch.setdefault(batch, position)
        last_event_of_batch[batch] = position
    for batch in range(2):
        assert last_event_of_batch[batch] < first_event_of_batch[batch + 1]

    in_flight = 0
    peak = 0
    for kind, _ in store.events:
        in_flight += 1 if kind == "start" else -1
        peak = max(peak, in_flight)
    assert peak <= 10


def test_updates_send_full_properties_to_each_page() -> None:
    store = FakeStore()
    writer = BatchWriter(store, batch_size=2)
    operations = [
        UpdateOperation(record_id=f"page-{n}", issue=make_issue(n, title=f"New {n}"))
        for n in (4, 5, 6)
    ]

    assert asyncio.run(writer.update_records(operations)) == [2, 1]

    by_page = dict(store.updated)
    assert set(by_page) == {"page-4", "page-5", "page-6"}
    assert by_page["page-5"]["Title"] == {
        "title": [{"type": "text", "text": {"content": "New 5"}}]
    }


def test_rejected_write_halts_later_batches_but_not_its_siblings() -> None:
    store = FakeStore(reject={3})
    writer = BatchWriter(store, batch_size=10)
    issues = [make_issue(n) for n in range(1, 24)]

    with pytest.raises(WriteFailed) as excinfo:
        asyncio.run(writer.create_records(issues))

    assert excinfo.value.issue_number == 3
    assert excinfo.value.operation == "create"
    created = sorted(p["ID"]["number"] for p in store.created)
    assert created == [n for n in range(1, 11) if n != 3]
    assert all(number <= 10 for _, number in store.events)


def test_rejected_update_reports_issue_number() -> None:
    store = FakeStore(reject={8})
    writer = BatchWriter(store, batch_size=10)

    with pytest.raises(WriteFailed) as excinfo:
        asyncio.run(
            writer.update_records([UpdateOperation(record_id="page-8", issue=make_issue(8))])
        )

    assert excinfo.value.issue_number == 8
    assert excinfo.value.operation == "update"


class _UnreachableStore(FakeStore):
    def create_record(self, properties: dict[str, object]) -> str:
        raise StoreUnavailable("connection reset")


def test_store_outage_during_writes_propagates_unchanged() -> None:
    writer = BatchWriter(_UnreachableStore(), batch_size=10)

    with pytest.raises(StoreUnavailable):
        asyncio.run(writer.create_records([make_issue(1), make_issue(2)]))


def test_assignees_reach_the_people_property() -> None:
    store = FakeStore()
    writer = BatchWriter(store)
    issue = make_issue(1, assignees=(AssigneeRef(id="user-1"),))

    asyncio.run(writer.create_records([issue]))

    assert store.created[0]["Assignees"] == {"people": [{"id": "user-1"}]}


def test_nothing_to_write_issues_no_batches() -> None:
    store = FakeStore()

    assert asyncio.run(BatchWriter(store).create_records([])) == []
    assert store.events == []
