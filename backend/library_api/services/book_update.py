"""Book Update — locked read, pure reconciliation, guarded write, one transaction.

Invariants:
    - Unknown book id raises NotFoundError before anything is computed or written
    - Copy counts come from the store, never from the request
    - Missing total_copies keeps the current total (difference 0)
    - A write that matches no row rolls back and raises ConcurrencyError
    - Overdrawn reconciliations are applied but logged as warnings

Design Decisions:
    - Impureim sandwich: IO (lock_copy_counts) -> pure (reconcile) -> IO (write_book)
    - Row lock plus compare-and-swap: the lock serializes writers on databases
      that honour FOR UPDATE, the CAS catches the rest
"""

import logging
from dataclasses import dataclass
from typing import Any

from library_api.core.domain_types import BookId
from library_api.core.errors import (
    ConcurrencyError, InvalidArgumentError, NotFoundError,
)
from library_api.core.reconcile_copies import (
    Reconciliation, reconcile_available_copies,
)
from library_api.core.repository_protocols import LibraryStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BookUpdateResult:
    book_id: BookId
    reconciliation: Reconciliation


async def update_book(
    store: LibraryStore, book_id: BookId, fields: dict[str, Any],
) -> BookUpdateResult:
    """Update a book's details and reconcile its available copies."""
    details = dict(fields)
    new_total = details.pop("total_copies", None)
    if new_total is not None and new_total < 0:
        raise InvalidArgumentError("total_copies cannot be negative", "total_copies")

    current = await store.lock_copy_counts(book_id)
    if current is None:
        await store.rollback()
        raise NotFoundError("Book", book_id)

    if new_total is None:
        new_total = current.total
    reconciliation = reconcile_available_copies(current, new_total)
    logger.info(
        f"Copy calculation: old_total={reconciliation.old_total} "
        f"new_total={reconciliation.new_total} "
        f"difference={reconciliation.copy_difference} "
        f"old_available={reconciliation.old_available} "
        f"new_available={reconciliation.new_available}",
        extra={"book_id": book_id},
    )
    if reconciliation.overdrawn:
        logger.warning(
            f"Book {book_id}: new total {new_total} is below the "
            f"{reconciliation.borrowed} copies on loan; available clamped to 0",
            extra={"book_id": book_id},
        )

    written = await store.write_book(
        book_id, details, current, reconciliation.counts_after(),
    )
    if written == 0:
        await store.rollback()
        raise ConcurrencyError(
            "Book copies changed during update, retry the request",
        )
    await store.commit()
    return BookUpdateResult(book_id=book_id, reconciliation=reconciliation)
