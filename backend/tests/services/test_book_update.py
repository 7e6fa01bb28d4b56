"""Book Update Service — read/reconcile/write sequencing against a fake store.

Tests cover:
    - not found: no reconciliation, no write, rolled back
    - successful update commits reconciled counts and the other fields
    - negative total rejected before the store is touched
    - overdrawn reconciliation applied and logged as a warning
    - two concurrent updates from the same snapshot: one wins, one conflicts
"""

import asyncio
import logging

import pytest

from library_api.core.domain_types import BookId, CopyCounts
from library_api.core.errors import (
    ConcurrencyError, InvalidArgumentError, NotFoundError,
)
from library_api.services.book_update import update_book


class FakeStore:
    """In-memory LibraryStore holding copy counts for book 1."""

    def __init__(self, counts: CopyCounts | None):
        self.counts = counts
        self.fields: dict = {}
        self.writes = 0
        self.commits = 0
        self.rollbacks = 0

    async def lock_copy_counts(self, book_id):
        return self.counts

    async def write_book(self, book_id, fields, expected, counts):
        await asyncio.sleep(0)
        if self.counts != expected:
            return 0
        self.writes += 1
        self.fields = fields
        self.counts = counts
        return 1

    async def commit(self):
        self.commits += 1

    async def rollback(self):
        self.rollbacks += 1


class BarrierStore(FakeStore):
    """Holds every reader until `readers` snapshots have been taken."""

    def __init__(self, counts: CopyCounts, readers: int = 2):
        super().__init__(counts)
        self._readers = readers
        self._reads = 0
        self._all_read = asyncio.Event()

    async def lock_copy_counts(self, book_id):
        snapshot = await super().lock_copy_counts(book_id)
        self._reads += 1
        if self._reads == self._readers:
            self._all_read.set()
        await self._all_read.wait()
        return snapshot


async def test_unknown_book_raises_not_found_without_write():
    store = FakeStore(None)
    with pytest.raises(NotFoundError):
        await update_book(store, BookId(1), {"title": "T", "total_copies": 3})
    assert store.writes == 0
    assert store.commits == 0
    assert store.rollbacks == 1


async def test_update_commits_reconciled_counts():
    store = FakeStore(CopyCounts(total=5, available=2))
    result = await update_book(
        store, BookId(1), {"title": "T", "author": "A", "total_copies": 8},
    )
    assert result.reconciliation.copy_difference == 3
    assert result.reconciliation.new_available == 5
    assert store.counts == CopyCounts(total=8, available=5)
    assert store.fields == {"title": "T", "author": "A"}
    assert store.commits == 1


async def test_missing_total_keeps_current_counts():
    store = FakeStore(CopyCounts(total=5, available=2))
    result = await update_book(store, BookId(1), {"title": "T"})
    assert result.reconciliation.copy_difference == 0
    assert store.counts == CopyCounts(total=5, available=2)


async def test_negative_total_rejected_before_read():
    store = FakeStore(CopyCounts(total=5, available=2))
    with pytest.raises(InvalidArgumentError):
        await update_book(store, BookId(1), {"total_copies": -4})
    assert store.writes == 0


async def test_overdrawn_update_is_applied_and_logged(caplog):
    store = FakeStore(CopyCounts(total=10, available=7))
    with caplog.at_level(logging.WARNING, logger="library_api.services.book_update"):
        result = await update_book(store, BookId(1), {"total_copies": 2})
    assert result.reconciliation.overdrawn
    assert store.counts == CopyCounts(total=2, available=0)
    assert any("clamped to 0" in r.getMessage() for r in caplog.records)


async def test_stale_write_raises_conflict_and_rolls_back():
    store = FakeStore(CopyCounts(total=10, available=7))

    async def stale_lock(book_id):
        return CopyCounts(total=10, available=8)

    store.lock_copy_counts = stale_lock
    with pytest.raises(ConcurrencyError):
        await update_book(store, BookId(1), {"total_copies": 12})
    assert store.counts == CopyCounts(total=10, available=7)
    assert store.rollbacks == 1
    assert store.commits == 0


async def test_concurrent_updates_from_same_snapshot_do_not_lose_writes():
    store = BarrierStore(CopyCounts(total=10, available=7))
    outcomes = await asyncio.gather(
        update_book(store, BookId(1), {"total_copies": 12}),
        update_book(store, BookId(1), {"total_copies": 8}),
        return_exceptions=True,
    )
    conflicts = [o for o in outcomes if isinstance(o, ConcurrencyError)]
    successes = [o for o in outcomes if not isinstance(o, Exception)]
    assert len(conflicts) == 1
    assert len(successes) == 1
    assert store.writes == 1
    assert store.counts == successes[0].reconciliation.counts_after()
